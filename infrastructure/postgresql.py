# ============================================================================
# POSTGRESQL REPOSITORY - CONNECTIONS AND SESSIONS
# ============================================================================
# STATUS: Infrastructure - PostgreSQL access for provisioning and audit runs
# PURPOSE: Connection management with timeouts, composed-SQL-only execution,
#          and per-namespace advisory locks
# EXPORTS: PostgreSQLRepository, PostgresSession
# DEPENDENCIES: psycopg, psycopg.sql, config, exceptions
# ============================================================================

"""
PostgreSQL Repository Implementation - Direct Database Access

One provisioning or audit run owns one connection for its whole duration and
executes statements sequentially on it. The connection runs in autocommit
mode: every DDL statement commits on its own, so one failing element cannot
roll back the elements applied before it.

Every connection carries ``statement_timeout`` and ``lock_timeout`` (session
options) and is opened with ``connect_timeout``; a hung database surfaces as
an error rather than stalling the caller.

Architecture:
    PostgreSQLRepository (connection factory, owns config)
        ↓ session()
    PostgresSession (execute / fetch / advisory_lock)
        ↓ .inspector
    CatalogInspector (existence predicates, see catalog_inspector.py)

Usage:
    repo = PostgreSQLRepository(config)
    with repo.session() as session:
        with session.advisory_lock('org_acme_corp'):
            if not session.inspector.table_exists('org_acme_corp', 'Show'):
                session.execute(stmt)
"""

from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from config import AppConfig, get_config
from exceptions import ContractViolationError, DatabaseConnectionError, DatabaseError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "PostgreSQL")


class PostgresSession:
    """
    A single connection wrapped for catalog use.

    Only psycopg.sql composed statements are accepted: identifiers in this
    subsystem are tenant-derived, and string-built SQL is how they leak.
    """

    def __init__(self, conn: psycopg.Connection):
        self._conn = conn
        self._inspector = None

    @property
    def connection(self) -> psycopg.Connection:
        return self._conn

    @property
    def inspector(self):
        """CatalogInspector bound to this session (created lazily)."""
        if self._inspector is None:
            from .catalog_inspector import CatalogInspector
            self._inspector = CatalogInspector(self)
        return self._inspector

    @staticmethod
    def _check_query(query) -> None:
        if not isinstance(query, (sql.Composed, sql.SQL)):
            raise ContractViolationError(
                f"❌ SECURITY: Query must be psycopg.sql.Composed, got {type(query).__name__}"
            )

    def _run(self, query, params: Optional[Sequence[Any]], fetch: Optional[str]):
        self._check_query(query)
        try:
            with self._conn.cursor() as cursor:
                cursor.execute(query, params)
                if fetch == 'one':
                    return cursor.fetchone()
                if fetch == 'all':
                    return cursor.fetchall()
                return None
        except psycopg.OperationalError as e:
            if self._conn.closed:
                logger.error(f"❌ Connection lost: {e}")
                raise DatabaseConnectionError(f"Connection lost: {e}", sqlstate=e.sqlstate) from e
            logger.error(f"❌ QUERY EXECUTION FAILED: {e}")
            logger.error(f"   SQL State: {e.sqlstate}")
            raise DatabaseError(str(e).strip(), sqlstate=e.sqlstate) from e
        except psycopg.Error as e:
            logger.debug(f"Query failed (SQL State {e.sqlstate}): {str(e).strip()}")
            raise DatabaseError(str(e).strip(), sqlstate=e.sqlstate) from e

    def execute(self, query, params: Optional[Sequence[Any]] = None) -> None:
        """Execute a statement in autocommit mode."""
        self._run(query, params, None)

    def fetch_one(self, query, params: Optional[Sequence[Any]] = None) -> Optional[Dict[str, Any]]:
        return self._run(query, params, 'one')

    def fetch_all(self, query, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        return self._run(query, params, 'all') or []

    @contextmanager
    def advisory_lock(self, key: str):
        """
        Hold a session-level advisory lock keyed by ``hashtext(key)``.

        Waits at most lock_timeout; a run already holding the lock for longer
        makes this raise DatabaseError (SQLSTATE 55P03).
        """
        self.execute(sql.SQL("SELECT pg_advisory_lock(hashtext(%s))"), (key,))
        logger.debug(f"🔒 Advisory lock acquired: {key}")
        try:
            yield
        finally:
            try:
                self.execute(sql.SQL("SELECT pg_advisory_unlock(hashtext(%s))"), (key,))
                logger.debug(f"🔓 Advisory lock released: {key}")
            except DatabaseError as e:
                # Session-level locks die with the connection, which closes next
                logger.warning(f"⚠️ Advisory unlock failed for {key}: {e}")


class PostgreSQLRepository:
    """
    Connection factory for provisioning and audit runs.

    Configuration is injected; ``get_config()`` only supplies the default.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or get_config()
        self.db_config = self.config.database

    @contextmanager
    def _get_connection(self):
        """
        Context manager for PostgreSQL connections.

        Raises:
            DatabaseConnectionError: Connection could not be opened
        """
        conn = None
        try:
            logger.debug(f"🔗 Connecting to {self.db_config.masked_connection_string}")
            conn = psycopg.connect(
                self.db_config.connection_string,
                row_factory=dict_row,
                autocommit=True,
                connect_timeout=self.db_config.connect_timeout_seconds,
                options=self.db_config.session_options,
                application_name=self.db_config.application_name,
            )
            logger.debug("✅ PostgreSQL connection established")
        except psycopg.Error as e:
            logger.error(f"❌ PostgreSQL connection error: {e}")
            logger.error(f"  Error type: {type(e).__name__}")
            if "could not translate host name" in str(e) or "Name or service not known" in str(e):
                logger.error("  🚨 DNS Resolution Error - Cannot resolve database hostname")
            raise DatabaseConnectionError(
                f"Cannot connect to {self.db_config.masked_connection_string}: {str(e).strip()}",
                sqlstate=getattr(e, 'sqlstate', None),
            ) from e

        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def session(self):
        """Yield a PostgresSession on a fresh connection; closes it on exit."""
        with self._get_connection() as conn:
            yield PostgresSession(conn)


__all__ = [
    'PostgreSQLRepository',
    'PostgresSession',
]
