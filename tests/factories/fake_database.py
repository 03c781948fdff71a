"""
In-memory stand-in for a Postgres database holding tenant namespaces.

FakeSession executes the statements rendered by core.catalog.ddl by reading
their text, and answers the CatalogInspector predicates from its own state,
so provisioning and audit runs can be exercised end to end without a server.

Failure injection:
    db.fail_on(fragment, ...)      statements containing fragment raise
    db.ignore_on(fragment)         statements containing fragment "succeed"
                                   without any effect
    db.hide_constraint(name)       predicate reports the constraint missing
    db.connect_error = "..."       FakeRepository.session() cannot connect
    db.broken_namespaces.add(ns)   introspection of ns raises
    db.after_statement = fn        called with each executed statement text
"""

import copy
import re
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set

from psycopg import sql
from psycopg.types.json import Jsonb

from core.catalog.ddl import SchemaBuilder
from exceptions import ContractViolationError, DatabaseConnectionError, DatabaseError


_CREATE_SCHEMA = re.compile(r'^CREATE SCHEMA IF NOT EXISTS "([^"]+)"$')
_GRANT = re.compile(r'^GRANT ALL ON SCHEMA "([^"]+)" TO "([^"]+)"$')
_DROP_SCHEMA = re.compile(r'^DROP SCHEMA IF EXISTS "([^"]+)" CASCADE$')
_CREATE_TABLE = re.compile(r'^CREATE TABLE IF NOT EXISTS "([^"]+)"\."([^"]+)" \(\n(.*)\n\)$', re.S)
_COLUMN_LINE = re.compile(r'^\s+"([^"]+)"\s', re.M)
_PKEY = re.compile(r'CONSTRAINT "([^"]+)" PRIMARY KEY')
_ADD_COLUMN = re.compile(r'^ALTER TABLE "([^"]+)"\."([^"]+)" ADD COLUMN IF NOT EXISTS "([^"]+)" ')
_ADD_CONSTRAINT = re.compile(
    r'^ALTER TABLE "([^"]+)"\."([^"]+)" ADD CONSTRAINT "([^"]+)" (CHECK|UNIQUE|FOREIGN KEY)', re.S
)
_REFERENCES = re.compile(r'REFERENCES "([^"]+)"\."([^"]+)"')
_CREATE_INDEX = re.compile(r'^CREATE (UNIQUE )?INDEX IF NOT EXISTS "([^"]+)" ON "([^"]+)"\."([^"]+)" \(')
_CREATE_FUNCTION = re.compile(r'^CREATE OR REPLACE FUNCTION "([^"]+)"\.(\w+)\(')
_DROP_TRIGGER = re.compile(r'^DROP TRIGGER IF EXISTS "([^"]+)" ON "([^"]+)"\."([^"]+)"$')
_CREATE_TRIGGER = re.compile(r'^CREATE TRIGGER "([^"]+)"\nBEFORE UPDATE ON "([^"]+)"\."([^"]+)"')
_INSERT = re.compile(r'^INSERT INTO "([^"]+)"\."([^"]+)" \(([^)]*)\) VALUES')


@dataclass
class FakeTable:
    columns: List[str]
    primary_key: Optional[str] = None
    rows: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class FakeNamespace:
    name: str
    tables: Dict[str, FakeTable] = field(default_factory=dict)
    constraints: Dict[str, Dict[str, str]] = field(default_factory=dict)  # table -> {name: type}
    indexes: Dict[str, str] = field(default_factory=dict)  # index -> table
    functions: Set[str] = field(default_factory=set)
    triggers: Dict[str, Set[str]] = field(default_factory=dict)  # table -> trigger names
    grants: Set[str] = field(default_factory=set)


@dataclass
class _Failure:
    fragment: str
    message: str
    sqlstate: Optional[str]
    error_cls: type


def _like_regex(pattern: str):
    out = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\" and i + 1 < len(pattern):
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        out.append(".*" if ch == "%" else "." if ch == "_" else re.escape(ch))
        i += 1
    return re.compile("^" + "".join(out) + "$")


class FakeDatabase:
    """Namespaces, statement log and failure injection."""

    def __init__(self):
        self.namespaces: Dict[str, FakeNamespace] = {"public": FakeNamespace("public")}
        self.statements: List[str] = []
        self.locks_taken: List[str] = []
        self.hidden_constraints: Set[str] = set()
        self.broken_namespaces: Set[str] = set()
        self.connect_error: Optional[str] = None
        self.after_statement: Optional[Callable[[str], None]] = None
        self._failures: List[_Failure] = []
        self._ignored: List[str] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Injection
    # ------------------------------------------------------------------

    def fail_on(self, fragment: str, message: str = "injected failure",
                sqlstate: Optional[str] = "XX000", error_cls: type = DatabaseError) -> None:
        self._failures.append(_Failure(fragment, message, sqlstate, error_cls))

    def ignore_on(self, fragment: str) -> None:
        self._ignored.append(fragment)

    def clear_failures(self) -> None:
        self._failures.clear()

    def hide_constraint(self, name: str) -> None:
        self.hidden_constraints.add(name)

    # ------------------------------------------------------------------
    # Direct state manipulation (test setup)
    # ------------------------------------------------------------------

    def ns(self, namespace: str) -> FakeNamespace:
        return self.namespaces[namespace]

    def drop_table(self, namespace: str, table: str) -> None:
        """DROP TABLE ... CASCADE: takes its constraints, indexes and triggers along."""
        ns = self.namespaces[namespace]
        del ns.tables[table]
        ns.constraints.pop(table, None)
        ns.triggers.pop(table, None)
        for index in [i for i, t in ns.indexes.items() if t == table]:
            del ns.indexes[index]

    def drop_column(self, namespace: str, table: str, column: str) -> None:
        self.namespaces[namespace].tables[table].columns.remove(column)

    def drop_constraint(self, namespace: str, table: str, name: str) -> None:
        ns = self.namespaces[namespace]
        kind = ns.constraints[table].pop(name)
        if kind == "UNIQUE":
            ns.indexes.pop(name, None)

    def drop_index(self, namespace: str, name: str) -> None:
        del self.namespaces[namespace].indexes[name]

    def add_table(self, namespace: str, table: str, columns: List[str]) -> None:
        self.namespaces[namespace].tables[table] = FakeTable(columns=list(columns))

    def snapshot(self, namespace: str) -> Optional[FakeNamespace]:
        return copy.deepcopy(self.namespaces.get(namespace))

    def statements_mentioning(self, text: str) -> List[str]:
        return [s for s in self.statements if text in s]

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _require_ns(self, namespace: str) -> FakeNamespace:
        if namespace not in self.namespaces:
            raise DatabaseError(f'schema "{namespace}" does not exist', sqlstate="3F000")
        return self.namespaces[namespace]

    def _require_table(self, namespace: str, table: str) -> FakeTable:
        ns = self._require_ns(namespace)
        if table not in ns.tables:
            raise DatabaseError(f'relation "{namespace}.{table}" does not exist', sqlstate="42P01")
        return ns.tables[table]

    def execute(self, text: str, params) -> None:
        with self._lock:
            self.statements.append(text)
            for failure in self._failures:
                if failure.fragment in text:
                    if issubclass(failure.error_cls, DatabaseError):
                        raise failure.error_cls(failure.message, sqlstate=failure.sqlstate)
                    raise failure.error_cls(failure.message)
            if not any(fragment in text for fragment in self._ignored):
                self._apply(text, params)
        if self.after_statement is not None:
            self.after_statement(text)

    def _apply(self, text: str, params) -> None:
        m = _CREATE_SCHEMA.match(text)
        if m:
            self.namespaces.setdefault(m.group(1), FakeNamespace(m.group(1)))
            return

        m = _GRANT.match(text)
        if m:
            self._require_ns(m.group(1)).grants.add(m.group(2))
            return

        m = _DROP_SCHEMA.match(text)
        if m:
            self.namespaces.pop(m.group(1), None)
            return

        m = _CREATE_TABLE.match(text)
        if m:
            ns = self._require_ns(m.group(1))
            if m.group(2) not in ns.tables:
                body = m.group(3)
                pkey = _PKEY.search(body)
                ns.tables[m.group(2)] = FakeTable(
                    columns=_COLUMN_LINE.findall(body),
                    primary_key=pkey.group(1) if pkey else None,
                )
            return

        m = _ADD_COLUMN.match(text)
        if m:
            table = self._require_table(m.group(1), m.group(2))
            if m.group(3) not in table.columns:
                table.columns.append(m.group(3))
            return

        m = _ADD_CONSTRAINT.match(text)
        if m:
            namespace, table_name, name, kind = m.groups()
            self._require_table(namespace, table_name)
            ns = self.namespaces[namespace]
            existing = ns.constraints.setdefault(table_name, {})
            if name in existing:
                raise DatabaseError(
                    f'constraint "{name}" for relation "{table_name}" already exists', sqlstate="42710"
                )
            if kind == "UNIQUE" and name in ns.indexes:
                raise DatabaseError(f'relation "{name}" already exists', sqlstate="42P07")
            if kind == "FOREIGN KEY":
                ref = _REFERENCES.search(text)
                self._require_table(ref.group(1), ref.group(2))
            existing[name] = kind
            if kind == "UNIQUE":
                ns.indexes[name] = table_name
            return

        m = _CREATE_INDEX.match(text)
        if m:
            _, name, namespace, table_name = m.groups()
            self._require_table(namespace, table_name)
            self.namespaces[namespace].indexes.setdefault(name, table_name)
            return

        m = _CREATE_FUNCTION.match(text)
        if m:
            self._require_ns(m.group(1)).functions.add(m.group(2))
            return

        m = _DROP_TRIGGER.match(text)
        if m:
            self._require_table(m.group(2), m.group(3))
            self.namespaces[m.group(2)].triggers.get(m.group(3), set()).discard(m.group(1))
            return

        m = _CREATE_TRIGGER.match(text)
        if m:
            name, namespace, table_name = m.groups()
            self._require_table(namespace, table_name)
            triggers = self.namespaces[namespace].triggers.setdefault(table_name, set())
            if name in triggers:
                raise DatabaseError(f'trigger "{name}" for relation "{table_name}" already exists',
                                    sqlstate="42710")
            triggers.add(name)
            return

        m = _INSERT.match(text)
        if m:
            table = self._require_table(m.group(1), m.group(2))
            names = re.findall(r'"([^"]+)"', m.group(3))
            row = {n: (v.obj if isinstance(v, Jsonb) else v) for n, v in zip(names, params)}
            if any(r.get("id") == row.get("id") for r in table.rows):
                raise DatabaseError(
                    f'duplicate key value violates unique constraint "{m.group(2)}_pkey"',
                    sqlstate="23505",
                )
            table.rows.append(row)
            return

        raise AssertionError(f"FakeDatabase cannot interpret statement: {text!r}")


class FakeSession:
    """Session plus inspector over a FakeDatabase."""

    def __init__(self, db: FakeDatabase):
        self.db = db

    @property
    def inspector(self):
        return self

    def execute(self, query, params=None) -> None:
        if not isinstance(query, (sql.Composed, sql.SQL)):
            raise ContractViolationError(f"Query must be psycopg.sql.Composed, got {type(query).__name__}")
        self.db.execute(query.as_string(None).strip(), params)

    @contextmanager
    def advisory_lock(self, key: str):
        self.db.locks_taken.append(key)
        yield

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def _ns(self, namespace: str) -> Optional[FakeNamespace]:
        if namespace in self.db.broken_namespaces:
            raise DatabaseError(f"permission denied for schema {namespace}", sqlstate="42501")
        return self.db.namespaces.get(namespace)

    def namespace_exists(self, namespace: str) -> bool:
        return self._ns(namespace) is not None

    def table_exists(self, namespace: str, table: str) -> bool:
        ns = self._ns(namespace)
        return ns is not None and table in ns.tables

    def column_exists(self, namespace: str, table: str, column: str) -> bool:
        ns = self._ns(namespace)
        return ns is not None and table in ns.tables and column in ns.tables[table].columns

    def constraint_exists(self, namespace: str, table: str, constraint: str) -> bool:
        ns = self._ns(namespace)
        if ns is None or constraint in self.db.hidden_constraints:
            return False
        return constraint in ns.constraints.get(table, {})

    def index_exists(self, namespace: str, index: str) -> bool:
        ns = self._ns(namespace)
        return ns is not None and index in ns.indexes

    def function_exists(self, namespace: str, function: str) -> bool:
        ns = self._ns(namespace)
        return ns is not None and function in ns.functions

    def trigger_exists(self, namespace: str, table: str, trigger: str) -> bool:
        ns = self._ns(namespace)
        return ns is not None and trigger in ns.triggers.get(table, set())

    def row_exists(self, namespace: str, table: str, key_column: str, value: Any) -> bool:
        ns = self._ns(namespace)
        if ns is None or table not in ns.tables:
            raise DatabaseError(f'relation "{namespace}.{table}" does not exist', sqlstate="42P01")
        return any(r.get(key_column) == value for r in ns.tables[table].rows)

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def list_namespaces(self, like_pattern: Optional[str] = None) -> List[str]:
        names = sorted(self.db.namespaces)
        if like_pattern is None:
            return names
        regex = _like_regex(like_pattern)
        return [n for n in names if regex.match(n)]

    def list_tables(self, namespace: str) -> List[str]:
        ns = self._ns(namespace)
        return sorted(ns.tables) if ns else []

    def list_columns(self, namespace: str) -> Dict[str, List[str]]:
        ns = self._ns(namespace)
        return {t: list(tbl.columns) for t, tbl in ns.tables.items()} if ns else {}

    def list_constraints(self, namespace: str) -> Dict[str, List[str]]:
        ns = self._ns(namespace)
        if ns is None:
            return {}
        return {t: sorted(c) for t, c in ns.constraints.items() if c}

    def list_indexes(self, namespace: str) -> Dict[str, List[str]]:
        ns = self._ns(namespace)
        grouped: Dict[str, List[str]] = {}
        for index, table in sorted((ns.indexes if ns else {}).items()):
            grouped.setdefault(table, []).append(index)
        return grouped

    def drop_namespace(self, namespace: str) -> None:
        self.execute(SchemaBuilder.drop_schema(namespace))


class FakeRepository:
    """Drop-in for PostgreSQLRepository."""

    def __init__(self, db: FakeDatabase):
        self.db = db
        self.sessions_opened = 0

    @contextmanager
    def session(self):
        if self.db.connect_error:
            raise DatabaseConnectionError(f"Cannot connect: {self.db.connect_error}")
        self.sessions_opened += 1
        yield FakeSession(self.db)
