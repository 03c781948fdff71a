"""
CatalogInspector and PostgresSession tests with recorded / mocked sessions.
"""

from unittest.mock import MagicMock

import psycopg
import pytest
from psycopg import sql

from exceptions import ContractViolationError, DatabaseConnectionError, DatabaseError
from infrastructure.catalog_inspector import CatalogInspector
from infrastructure.postgresql import PostgresSession


class RecordingSession:
    """Returns canned rows and records every query."""

    def __init__(self, one=None, rows=None):
        self.one = one
        self.rows = rows or []
        self.calls = []

    def fetch_one(self, query, params=None):
        self.calls.append((query, params))
        return self.one

    def fetch_all(self, query, params=None):
        self.calls.append((query, params))
        return self.rows

    def execute(self, query, params=None):
        self.calls.append((query, params))


class TestPredicates:

    def test_exists_when_row_returned(self):
        session = RecordingSession(one={"?column?": 1})
        assert CatalogInspector(session).table_exists("org_a", "Campaign") is True
        _, params = session.calls[0]
        assert params == ("org_a", "Campaign")

    def test_missing_when_no_row(self):
        assert CatalogInspector(RecordingSession(one=None)).namespace_exists("org_a") is False

    def test_every_query_is_composed(self):
        session = RecordingSession(one=None)
        inspector = CatalogInspector(session)
        inspector.namespace_exists("n")
        inspector.column_exists("n", "T", "c")
        inspector.constraint_exists("n", "T", "k")
        inspector.index_exists("n", "i")
        inspector.function_exists("n", "f")
        inspector.trigger_exists("n", "T", "t")
        inspector.row_exists("n", "T", "organizationId", "acme")
        assert all(isinstance(q, (sql.SQL, sql.Composed)) for q, _ in session.calls)

    def test_row_exists_quotes_identifiers(self):
        session = RecordingSession(one=None)
        CatalogInspector(session).row_exists("org_a", "workflow_settings", "organizationId", "acme")
        query, params = session.calls[0]
        assert query.as_string(None) == (
            'SELECT 1 FROM "org_a"."workflow_settings" WHERE "organizationId" = %s LIMIT 1'
        )
        assert params == ("acme",)


class TestEnumeration:

    def test_list_namespaces_with_pattern(self):
        session = RecordingSession(rows=[{"schema_name": "org_a"}, {"schema_name": "org_b"}])
        assert CatalogInspector(session).list_namespaces("org\\_%") == ["org_a", "org_b"]
        assert session.calls[0][1] == ("org\\_%",)

    def test_list_columns_groups_by_table(self):
        session = RecordingSession(rows=[
            {"table_name": "A", "column_name": "id"},
            {"table_name": "A", "column_name": "name"},
            {"table_name": "B", "column_name": "id"},
        ])
        assert CatalogInspector(session).list_columns("org_a") == {"A": ["id", "name"], "B": ["id"]}

    def test_list_constraints_passes_audited_types(self):
        session = RecordingSession(rows=[])
        CatalogInspector(session).list_constraints("org_a")
        assert session.calls[0][1] == ("org_a", ["CHECK", "UNIQUE", "FOREIGN KEY"])

    def test_drop_namespace(self):
        session = RecordingSession()
        CatalogInspector(session).drop_namespace("org_test_audit_1")
        assert session.calls[0][0].as_string(None) == 'DROP SCHEMA IF EXISTS "org_test_audit_1" CASCADE'


def _mock_connection(side_effect=None, closed=False):
    conn = MagicMock()
    conn.closed = closed
    cursor = conn.cursor.return_value.__enter__.return_value
    if side_effect is not None:
        cursor.execute.side_effect = side_effect
    return conn, cursor


class TestPostgresSession:

    def test_plain_string_rejected(self):
        conn, cursor = _mock_connection()
        with pytest.raises(ContractViolationError):
            PostgresSession(conn).execute("DROP SCHEMA public")
        cursor.execute.assert_not_called()

    def test_fetch_one(self):
        conn, cursor = _mock_connection()
        cursor.fetchone.return_value = {"x": 1}
        assert PostgresSession(conn).fetch_one(sql.SQL("SELECT 1 AS x")) == {"x": 1}

    def test_duplicate_object_keeps_sqlstate(self):
        conn, _ = _mock_connection(side_effect=psycopg.errors.DuplicateObject("already exists"))
        with pytest.raises(DatabaseError) as exc_info:
            PostgresSession(conn).execute(sql.SQL("ALTER TABLE x ADD CONSTRAINT y CHECK (true)"))
        assert exc_info.value.sqlstate == "42710"

    def test_lost_connection_is_connection_error(self):
        conn, _ = _mock_connection(side_effect=psycopg.OperationalError("server closed"), closed=True)
        with pytest.raises(DatabaseConnectionError):
            PostgresSession(conn).execute(sql.SQL("SELECT 1"))

    def test_operational_error_on_open_connection_is_database_error(self):
        conn, _ = _mock_connection(side_effect=psycopg.OperationalError("lock timeout"))
        with pytest.raises(DatabaseError) as exc_info:
            PostgresSession(conn).execute(sql.SQL("SELECT 1"))
        assert not isinstance(exc_info.value, DatabaseConnectionError)

    def test_advisory_lock_released(self):
        conn, cursor = _mock_connection()
        with PostgresSession(conn).advisory_lock("org_a"):
            pass
        texts = [c.args[0].as_string(None) for c in cursor.execute.call_args_list]
        assert texts == [
            "SELECT pg_advisory_lock(hashtext(%s))",
            "SELECT pg_advisory_unlock(hashtext(%s))",
        ]
