"""
Infrastructure Layer - PostgreSQL access.

Structure:
    postgresql.py         Connections, sessions, timeouts, advisory locks
    catalog_inspector.py  Existence predicates and enumeration queries
    schema_analyzer.py    Namespace snapshots and drift comparison

Exports:
    PostgreSQLRepository, PostgresSession, CatalogInspector, SchemaAnalyzer
"""

from .postgresql import PostgreSQLRepository, PostgresSession
from .catalog_inspector import CatalogInspector
from .schema_analyzer import SchemaAnalyzer, NamespaceSnapshot, DriftResult

__all__ = [
    'PostgreSQLRepository',
    'PostgresSession',
    'CatalogInspector',
    'SchemaAnalyzer',
    'NamespaceSnapshot',
    'DriftResult',
]
