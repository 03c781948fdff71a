"""
Core Provisioning Components.

Pure, database-agnostic building blocks shared by the provisioner and the
drift auditor.

Structure:
    namespace.py: Tenant slug <-> namespace resolution
    catalog/: Declarative desired-state catalog (elements, DDL builders, definitions)

Exports:
    NamespaceResolver: Slug to namespace mapping
    SchemaCatalog: Ordered catalog of desired schema elements
    get_catalog: Default catalog singleton
"""

from .namespace import NamespaceResolver
from .catalog import SchemaCatalog, get_catalog

__all__ = [
    'NamespaceResolver',
    'SchemaCatalog',
    'get_catalog',
]
