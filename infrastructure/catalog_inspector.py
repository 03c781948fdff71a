# ============================================================================
# CATALOG INSPECTOR - POSTGRES EXISTENCE PREDICATES
# ============================================================================
# STATUS: Infrastructure - information_schema / pg_catalog queries
# PURPOSE: Answer "does this element exist in this namespace?" for every
#          catalog element kind, and enumerate namespace contents for audits
# ============================================================================
"""
CatalogInspector - Postgres Predicate Layer.

Every existence check the provisioner and the auditor make goes through this
class. It is the only place that knows where Postgres keeps its metadata, so
another backend can supply its own inspector with the same method names.

Predicates:
    namespace_exists, table_exists, column_exists, constraint_exists,
    index_exists, function_exists, trigger_exists, row_exists

Enumeration:
    list_namespaces, list_tables, list_columns, list_constraints,
    list_indexes

Primary keys are deliberately absent from list_constraints and list_indexes:
they are created with their table and carry no drift information.
"""

from typing import Any, Dict, List, Optional

from psycopg import sql

from core.catalog.ddl import SchemaBuilder, qualified
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "CatalogInspector")


# Constraint types compared by drift audits
AUDITED_CONSTRAINT_TYPES = ("CHECK", "UNIQUE", "FOREIGN KEY")


class CatalogInspector:
    """
    Postgres metadata queries bound to one session.

    Args:
        session: Object exposing fetch_one / fetch_all / execute
    """

    def __init__(self, session):
        self.session = session

    def _exists(self, query: sql.SQL, params: tuple) -> bool:
        return self.session.fetch_one(query, params) is not None

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def namespace_exists(self, namespace: str) -> bool:
        return self._exists(
            sql.SQL("SELECT 1 FROM information_schema.schemata WHERE schema_name = %s"),
            (namespace,),
        )

    def table_exists(self, namespace: str, table: str) -> bool:
        return self._exists(
            sql.SQL("""
                SELECT 1 FROM information_schema.tables
                WHERE table_schema = %s AND table_name = %s AND table_type = 'BASE TABLE'
            """),
            (namespace, table),
        )

    def column_exists(self, namespace: str, table: str, column: str) -> bool:
        return self._exists(
            sql.SQL("""
                SELECT 1 FROM information_schema.columns
                WHERE table_schema = %s AND table_name = %s AND column_name = %s
            """),
            (namespace, table, column),
        )

    def constraint_exists(self, namespace: str, table: str, constraint: str) -> bool:
        return self._exists(
            sql.SQL("""
                SELECT 1 FROM information_schema.table_constraints
                WHERE table_schema = %s AND table_name = %s AND constraint_name = %s
            """),
            (namespace, table, constraint),
        )

    def index_exists(self, namespace: str, index: str) -> bool:
        return self._exists(
            sql.SQL("SELECT 1 FROM pg_indexes WHERE schemaname = %s AND indexname = %s"),
            (namespace, index),
        )

    def function_exists(self, namespace: str, function: str) -> bool:
        return self._exists(
            sql.SQL("""
                SELECT 1 FROM pg_proc p
                JOIN pg_namespace n ON n.oid = p.pronamespace
                WHERE n.nspname = %s AND p.proname = %s
            """),
            (namespace, function),
        )

    def trigger_exists(self, namespace: str, table: str, trigger: str) -> bool:
        return self._exists(
            sql.SQL("""
                SELECT 1 FROM pg_trigger tg
                JOIN pg_class t ON t.oid = tg.tgrelid
                JOIN pg_namespace n ON n.oid = t.relnamespace
                WHERE n.nspname = %s AND t.relname = %s AND tg.tgname = %s
                  AND NOT tg.tgisinternal
            """),
            (namespace, table, trigger),
        )

    def row_exists(self, namespace: str, table: str, key_column: str, value: Any) -> bool:
        query = sql.SQL("SELECT 1 FROM {table} WHERE {column} = %s LIMIT 1").format(
            table=qualified(namespace, table),
            column=sql.Identifier(key_column),
        )
        return self._exists(query, (value,))

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def list_namespaces(self, like_pattern: Optional[str] = None) -> List[str]:
        if like_pattern is None:
            rows = self.session.fetch_all(sql.SQL(
                "SELECT schema_name FROM information_schema.schemata ORDER BY schema_name"
            ))
        else:
            rows = self.session.fetch_all(
                sql.SQL("""
                    SELECT schema_name FROM information_schema.schemata
                    WHERE schema_name LIKE %s ORDER BY schema_name
                """),
                (like_pattern,),
            )
        return [r['schema_name'] for r in rows]

    def list_tables(self, namespace: str) -> List[str]:
        rows = self.session.fetch_all(
            sql.SQL("""
                SELECT table_name FROM information_schema.tables
                WHERE table_schema = %s AND table_type = 'BASE TABLE'
                ORDER BY table_name
            """),
            (namespace,),
        )
        return [r['table_name'] for r in rows]

    def list_columns(self, namespace: str) -> Dict[str, List[str]]:
        """Column names per table."""
        rows = self.session.fetch_all(
            sql.SQL("""
                SELECT table_name, column_name FROM information_schema.columns
                WHERE table_schema = %s
                ORDER BY table_name, ordinal_position
            """),
            (namespace,),
        )
        return self._group(rows, 'column_name')

    def list_constraints(self, namespace: str) -> Dict[str, List[str]]:
        """CHECK / UNIQUE / FOREIGN KEY constraint names per table."""
        rows = self.session.fetch_all(
            sql.SQL("""
                SELECT table_name, constraint_name FROM information_schema.table_constraints
                WHERE table_schema = %s AND constraint_type = ANY(%s)
                  AND constraint_name NOT LIKE '%%_not_null'
                ORDER BY table_name, constraint_name
            """),
            (namespace, list(AUDITED_CONSTRAINT_TYPES)),
        )
        return self._group(rows, 'constraint_name')

    def list_indexes(self, namespace: str) -> Dict[str, List[str]]:
        """Non-primary-key index names per table."""
        rows = self.session.fetch_all(
            sql.SQL("""
                SELECT t.relname AS table_name, i.relname AS index_name
                FROM pg_index x
                JOIN pg_class i ON i.oid = x.indexrelid
                JOIN pg_class t ON t.oid = x.indrelid
                JOIN pg_namespace n ON n.oid = t.relnamespace
                WHERE n.nspname = %s AND NOT x.indisprimary
                ORDER BY t.relname, i.relname
            """),
            (namespace,),
        )
        return self._group(rows, 'index_name')

    @staticmethod
    def _group(rows: List[Dict[str, Any]], value_key: str) -> Dict[str, List[str]]:
        grouped: Dict[str, List[str]] = {}
        for row in rows:
            grouped.setdefault(row['table_name'], []).append(row[value_key])
        return grouped

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def drop_namespace(self, namespace: str) -> None:
        """DROP SCHEMA IF EXISTS ... CASCADE."""
        logger.info(f"🗑️ Dropping namespace {namespace}")
        self.session.execute(SchemaBuilder.drop_schema(namespace))


__all__ = [
    'CatalogInspector',
    'AUDITED_CONSTRAINT_TYPES',
]
