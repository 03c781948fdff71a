# ============================================================================
# DDL BUILDERS - TENANT NAMESPACE STATEMENTS
# ============================================================================
# STATUS: Core - SQL composition for every catalog element kind
# PURPOSE: Schema, table, column, constraint, index, function, trigger and
#          seed-row statements using psycopg.sql
# ============================================================================
"""
DDL Builders - Shared SQL Generation for Catalog Elements.

Every catalog element renders its statements through these builders, so the
whole catalog shares one interpreter instead of carrying hand-written SQL.

All methods return psycopg.sql.Composed objects for safe execution.
Identifiers are always composed with sql.Identifier; type names, default
expressions and CHECK expressions come from the catalog definitions (trusted
data) and are composed with sql.SQL.

Usage:
    from core.catalog.ddl import TableBuilder, IndexBuilder

    stmt = TableBuilder.create_table('org_acme', 'Show', columns, ['id'])
    idx = IndexBuilder.btree('org_acme', 'Show', ['organizationId'],
                             name='Show_organizationId_idx')
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from psycopg import sql


Statement = Tuple[sql.Composed, Optional[Tuple[Any, ...]]]


def qualified(schema: str, name: str) -> sql.Composed:
    """"schema"."name" as a composed identifier pair."""
    return sql.SQL("{}.{}").format(sql.Identifier(schema), sql.Identifier(name))


def _columns(columns: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(columns, str):
        return [columns]
    return list(columns)


def _column_list(columns: Union[str, Sequence[str]]) -> sql.Composed:
    return sql.SQL(", ").join(sql.Identifier(c) for c in _columns(columns))


# ============================================================================
# SCHEMA BUILDER
# ============================================================================

class SchemaBuilder:
    """Namespace-level statements."""

    @staticmethod
    def create_schema(schema: str) -> sql.Composed:
        return sql.SQL("CREATE SCHEMA IF NOT EXISTS {}").format(sql.Identifier(schema))

    @staticmethod
    def grant_all(schema: str, role: str) -> sql.Composed:
        return sql.SQL("GRANT ALL ON SCHEMA {} TO {}").format(
            sql.Identifier(schema), sql.Identifier(role)
        )

    @staticmethod
    def drop_schema(schema: str) -> sql.Composed:
        return sql.SQL("DROP SCHEMA IF EXISTS {} CASCADE").format(sql.Identifier(schema))


# ============================================================================
# TABLE / COLUMN BUILDER
# ============================================================================

class TableBuilder:
    """
    Builder for table and column DDL.

    Column definitions are objects exposing ``name``, ``data_type``,
    ``nullable`` and ``default`` (see core.catalog.elements.ColumnDef).
    """

    @staticmethod
    def column_definition(column) -> sql.Composed:
        """Render '"name" TYPE [NOT NULL] [DEFAULT expr]'."""
        parts = [sql.Identifier(column.name), sql.SQL(column.data_type)]
        if not column.nullable:
            parts.append(sql.SQL("NOT NULL"))
        if column.default is not None:
            parts.append(sql.SQL("DEFAULT {}").format(sql.SQL(column.default)))
        return sql.SQL(" ").join(parts)

    @staticmethod
    def create_table(
        schema: str,
        table: str,
        columns: Sequence,
        primary_key: Optional[Sequence[str]] = None
    ) -> sql.Composed:
        """
        CREATE TABLE IF NOT EXISTS with one column definition per line.

        The primary key is named '<table>_pkey', matching what Postgres would
        generate, so reference and tenant namespaces compare equal.
        """
        lines = [TableBuilder.column_definition(c) for c in columns]
        if primary_key:
            lines.append(sql.SQL("CONSTRAINT {name} PRIMARY KEY ({cols})").format(
                name=sql.Identifier(f"{table}_pkey"),
                cols=_column_list(primary_key),
            ))

        return sql.SQL("CREATE TABLE IF NOT EXISTS {table} (\n    {body}\n)").format(
            table=qualified(schema, table),
            body=sql.SQL(",\n    ").join(lines),
        )

    @staticmethod
    def add_column(schema: str, table: str, column) -> sql.Composed:
        return sql.SQL("ALTER TABLE {table} ADD COLUMN IF NOT EXISTS {definition}").format(
            table=qualified(schema, table),
            definition=TableBuilder.column_definition(column),
        )


# ============================================================================
# CONSTRAINT BUILDER
# ============================================================================

class ConstraintBuilder:
    """
    Builder for named table constraints.

    Postgres has no ADD CONSTRAINT IF NOT EXISTS, so these statements are not
    idempotent on their own; callers must check constraint metadata first.
    """

    @staticmethod
    def _add(schema: str, table: str, name: str, body: sql.Composable) -> sql.Composed:
        return sql.SQL("ALTER TABLE {table} ADD CONSTRAINT {name} {body}").format(
            table=qualified(schema, table),
            name=sql.Identifier(name),
            body=body,
        )

    @staticmethod
    def check(schema: str, table: str, name: str, expression: str) -> sql.Composed:
        return ConstraintBuilder._add(
            schema, table, name, sql.SQL("CHECK ({})").format(sql.SQL(expression))
        )

    @staticmethod
    def unique(schema: str, table: str, name: str,
               columns: Union[str, Sequence[str]]) -> sql.Composed:
        return ConstraintBuilder._add(
            schema, table, name, sql.SQL("UNIQUE ({})").format(_column_list(columns))
        )

    @staticmethod
    def foreign_key(
        schema: str,
        table: str,
        name: str,
        columns: Union[str, Sequence[str]],
        ref_table: str,
        ref_columns: Union[str, Sequence[str]] = ("id",),
        on_delete: Optional[str] = None
    ) -> sql.Composed:
        body = sql.SQL("FOREIGN KEY ({cols}) REFERENCES {ref} ({ref_cols})").format(
            cols=_column_list(columns),
            ref=qualified(schema, ref_table),
            ref_cols=_column_list(ref_columns),
        )
        if on_delete:
            body = sql.SQL("{} ON DELETE {}").format(body, sql.SQL(on_delete))
        return ConstraintBuilder._add(schema, table, name, body)


# ============================================================================
# INDEX BUILDER
# ============================================================================

class IndexBuilder:
    """
    Builder for PostgreSQL index DDL statements.

    Index names are explicit: tenant namespaces must carry the same index
    names as the reference namespace for drift comparison to work.
    """

    @staticmethod
    def btree(
        schema: str,
        table: str,
        columns: Union[str, Sequence[str]],
        name: str,
        partial_where: Optional[str] = None
    ) -> sql.Composed:
        stmt = sql.SQL("CREATE INDEX IF NOT EXISTS {name} ON {table} ({columns})").format(
            name=sql.Identifier(name),
            table=qualified(schema, table),
            columns=_column_list(columns),
        )
        if partial_where:
            stmt = sql.SQL("{} WHERE {}").format(stmt, sql.SQL(partial_where))
        return stmt

    @staticmethod
    def unique(
        schema: str,
        table: str,
        columns: Union[str, Sequence[str]],
        name: str,
        partial_where: Optional[str] = None
    ) -> sql.Composed:
        stmt = sql.SQL("CREATE UNIQUE INDEX IF NOT EXISTS {name} ON {table} ({columns})").format(
            name=sql.Identifier(name),
            table=qualified(schema, table),
            columns=_column_list(columns),
        )
        if partial_where:
            stmt = sql.SQL("{} WHERE {}").format(stmt, sql.SQL(partial_where))
        return stmt


# ============================================================================
# FUNCTION / TRIGGER BUILDER
# ============================================================================

class FunctionBuilder:
    """Namespace-local plpgsql functions."""

    @staticmethod
    def updated_at_function(schema: str) -> sql.Composed:
        """
        update_updated_at_column() trigger function.

        Sets NEW."updatedAt" to the current timestamp on every UPDATE. The
        application's columns are camelCase, hence the quoted identifier.
        """
        return sql.SQL("""CREATE OR REPLACE FUNCTION {schema}.update_updated_at_column()
RETURNS TRIGGER
LANGUAGE plpgsql
AS $$
BEGIN
    NEW."updatedAt" = CURRENT_TIMESTAMP;
    RETURN NEW;
END;
$$""").format(schema=sql.Identifier(schema))

    @staticmethod
    def set_org_context(schema: str, prefix: str) -> sql.Composed:
        """
        set_org_context(org_slug text): point search_path at a tenant.

        Applies the same slug transform as the resolver so SQL callers and
        Python callers agree on the namespace name.
        """
        return sql.SQL("""CREATE OR REPLACE FUNCTION {schema}.set_org_context(org_slug text)
RETURNS void
LANGUAGE plpgsql
AS $$
BEGIN
    IF org_slug IS NULL THEN
        SET search_path TO public;
    ELSE
        EXECUTE format(
            'SET search_path TO %I, public',
            {prefix} || regexp_replace(lower(org_slug), '[^a-z0-9]', '_', 'g')
        );
    END IF;
END;
$$""").format(schema=sql.Identifier(schema), prefix=sql.Literal(prefix))


class TriggerBuilder:
    """
    Builder for trigger DDL.

    Returns DROP + CREATE for idempotency.
    """

    @staticmethod
    def updated_at_trigger(
        schema: str,
        table: str,
        trigger_name: Optional[str] = None,
        function_name: str = "update_updated_at_column"
    ) -> List[sql.Composed]:
        trig_name = trigger_name or f"trg_{table}_updated_at"

        drop_stmt = sql.SQL("DROP TRIGGER IF EXISTS {name} ON {table}").format(
            name=sql.Identifier(trig_name),
            table=qualified(schema, table),
        )

        create_stmt = sql.SQL("""CREATE TRIGGER {name}
BEFORE UPDATE ON {table}
FOR EACH ROW
EXECUTE FUNCTION {function}()""").format(
            name=sql.Identifier(trig_name),
            table=qualified(schema, table),
            function=qualified(schema, function_name),
        )

        return [drop_stmt, create_stmt]


# ============================================================================
# SEED BUILDER
# ============================================================================

class SeedBuilder:
    """Single-row default inserts."""

    @staticmethod
    def insert_row(schema: str, table: str, values: Dict[str, Any]) -> Statement:
        """
        Plain INSERT with one placeholder per value. A key conflict raises,
        so an insert that writes nothing is never reported as created.

        Returns:
            (statement, params) tuple in the dict's key order
        """
        names = list(values.keys())
        stmt = sql.SQL(
            "INSERT INTO {table} ({columns}) VALUES ({placeholders})"
        ).format(
            table=qualified(schema, table),
            columns=_column_list(names),
            placeholders=sql.SQL(", ").join(sql.Placeholder() * len(names)),
        )
        return stmt, tuple(values[n] for n in names)


__all__ = [
    'Statement',
    'qualified',
    'SchemaBuilder',
    'TableBuilder',
    'ConstraintBuilder',
    'IndexBuilder',
    'FunctionBuilder',
    'TriggerBuilder',
    'SeedBuilder',
]
