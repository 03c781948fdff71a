"""
Schema catalog package.

Exports:
    SchemaCatalog, get_catalog, build_default_catalog, CATALOG_VERSION
    Phase, ElementKind, ProvisioningTarget and the element classes
"""

from .elements import (
    Phase,
    ElementKind,
    ColumnDef,
    ProvisioningTarget,
    SchemaElement,
    NamespaceElement,
    TableElement,
    ColumnElement,
    ConstraintElement,
    IndexElement,
    FunctionElement,
    TriggerElement,
    SeedRowElement,
)
from .registry import (
    SchemaCatalog,
    CATALOG_VERSION,
    build_default_catalog,
    get_catalog,
)

__all__ = [
    'Phase',
    'ElementKind',
    'ColumnDef',
    'ProvisioningTarget',
    'SchemaElement',
    'NamespaceElement',
    'TableElement',
    'ColumnElement',
    'ConstraintElement',
    'IndexElement',
    'FunctionElement',
    'TriggerElement',
    'SeedRowElement',
    'SchemaCatalog',
    'CATALOG_VERSION',
    'build_default_catalog',
    'get_catalog',
]
