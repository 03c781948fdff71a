# ============================================================================
# CATALOG ELEMENTS - DESIRED SCHEMA STATE AS DATA
# ============================================================================
# STATUS: Core - Element kinds, phases, predicates and creation actions
# PURPOSE: One class per element kind; every element knows how to check its
#          own existence and how to create itself in a tenant namespace
# ============================================================================
"""
Catalog Elements.

An element is a piece of desired structural state (table, column, constraint,
index, function, trigger, seed row) paired with:

    exists(session, target) -> bool    existence predicate
    apply(session, target)  -> None    creation action (raises on failure)

``session`` is a database session exposing ``execute(query, params)`` and an
``inspector`` (see infrastructure.catalog_inspector.CatalogInspector) that
answers the predicates. Elements never talk to psycopg directly.

Phases order the elements: NAMESPACE -> TABLES -> COLUMNS -> CONSTRAINTS ->
INDEXES -> FUNCTIONS -> SEED_ROWS. Elements within a phase are independent of
each other, with one exception: triggers follow the function they call inside
the FUNCTIONS phase.

Exports:
    Phase, ElementKind, ColumnDef, ProvisioningTarget
    SchemaElement and its subclasses
    columns: Helper turning column spec strings into ColumnDef tuples
"""

import hashlib
import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from psycopg.types.json import Jsonb

from .ddl import (
    Statement,
    SchemaBuilder,
    TableBuilder,
    ConstraintBuilder,
    IndexBuilder,
    TriggerBuilder,
    SeedBuilder,
)


# ============================================================================
# ENUMS
# ============================================================================

class Phase(IntEnum):
    """Provisioning phases in dependency order."""
    NAMESPACE = 0
    TABLES = 1
    COLUMNS = 2
    CONSTRAINTS = 3
    INDEXES = 4
    FUNCTIONS = 5
    SEED_ROWS = 6

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", " ")


class ElementKind(str, Enum):
    """Element kinds recorded in change and error logs."""
    NAMESPACE = "namespace"
    TABLE = "table"
    COLUMN = "column"
    CONSTRAINT = "constraint"
    INDEX = "index"
    FUNCTION = "function"
    TRIGGER = "trigger"
    SEED_ROW = "seed_row"


# SQLSTATE codes raised when an object being created already exists:
# duplicate_object (constraints) and duplicate_table (index-backed UNIQUE).
DUPLICATE_SQLSTATES = frozenset({"42710", "42P07"})


# ============================================================================
# VALUE TYPES
# ============================================================================

_COLUMN_SPEC = re.compile(
    r"^(?P<name>\S+)\s+(?P<type>.+?)(?P<notnull>\s+NOT NULL)?(?:\s+DEFAULT\s+(?P<default>.+))?$"
)


@dataclass(frozen=True)
class ColumnDef:
    """Column definition: name, SQL type, nullability, default expression."""
    name: str
    data_type: str
    nullable: bool = True
    default: Optional[str] = None

    @classmethod
    def parse(cls, spec: str) -> "ColumnDef":
        """
        Parse 'name TYPE [NOT NULL] [DEFAULT expr]'.

        Example:
            ColumnDef.parse("status TEXT NOT NULL DEFAULT 'draft'")
        """
        match = _COLUMN_SPEC.match(spec.strip())
        if not match:
            raise ValueError(f"Unparseable column spec: {spec!r}")
        return cls(
            name=match.group("name"),
            data_type=match.group("type"),
            nullable=match.group("notnull") is None,
            default=match.group("default"),
        )


def columns(*specs: str) -> Tuple[ColumnDef, ...]:
    """Build a column tuple from spec strings."""
    return tuple(ColumnDef.parse(s) for s in specs)


@dataclass(frozen=True)
class ProvisioningTarget:
    """The namespace being provisioned and the tenant it belongs to."""
    namespace: str
    tenant_slug: str
    organization_id: str


# ============================================================================
# BASE ELEMENT
# ============================================================================

class SchemaElement:
    """
    Base class for catalog elements.

    Subclasses set ``kind`` and ``phase`` and implement ``exists`` and
    ``statements``; ``apply`` executes the statements in order.
    """

    kind: ElementKind
    phase: Phase
    table: Optional[str] = None

    @property
    def name(self) -> str:
        raise NotImplementedError

    def exists(self, session, target: ProvisioningTarget) -> bool:
        raise NotImplementedError

    def statements(self, target: ProvisioningTarget) -> List[Statement]:
        raise NotImplementedError

    def apply(self, session, target: ProvisioningTarget) -> None:
        for stmt, params in self.statements(target):
            session.execute(stmt, params)

    def referenced_columns(self) -> Tuple[str, ...]:
        """Columns of ``table`` this element needs to exist."""
        return ()

    def is_benign_failure(self, exc: BaseException) -> bool:
        """True if a creation failure means the element is already present."""
        return False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


# ============================================================================
# NAMESPACE
# ============================================================================

class NamespaceElement(SchemaElement):
    """The tenant schema itself, optionally granted to the application role."""

    kind = ElementKind.NAMESPACE
    phase = Phase.NAMESPACE

    def __init__(self, grantee: Optional[str] = None):
        self.grantee = grantee or None

    @property
    def name(self) -> str:
        return "namespace"

    def exists(self, session, target: ProvisioningTarget) -> bool:
        return session.inspector.namespace_exists(target.namespace)

    def statements(self, target: ProvisioningTarget) -> List[Statement]:
        stmts = [(SchemaBuilder.create_schema(target.namespace), None)]
        if self.grantee:
            stmts.append((SchemaBuilder.grant_all(target.namespace, self.grantee), None))
        return stmts


# ============================================================================
# TABLES AND COLUMNS
# ============================================================================

class TableElement(SchemaElement):
    """
    A table with its base columns.

    Columns added to the application after the table first shipped are
    separate ColumnElements, so existing tenants receive them too.
    """

    kind = ElementKind.TABLE
    phase = Phase.TABLES

    def __init__(self, table: str, columns: Tuple[ColumnDef, ...],
                 primary_key: Optional[Tuple[str, ...]] = ("id",)):
        self.table = table
        self.columns = tuple(columns)
        self.primary_key = tuple(primary_key) if primary_key else None

    @property
    def name(self) -> str:
        return self.table

    @property
    def column_names(self) -> FrozenSet[str]:
        return frozenset(c.name for c in self.columns)

    def exists(self, session, target: ProvisioningTarget) -> bool:
        return session.inspector.table_exists(target.namespace, self.table)

    def statements(self, target: ProvisioningTarget) -> List[Statement]:
        return [(
            TableBuilder.create_table(target.namespace, self.table, self.columns, self.primary_key),
            None,
        )]

    def referenced_columns(self) -> Tuple[str, ...]:
        return self.primary_key or ()


class ColumnElement(SchemaElement):
    """A column added to an existing table."""

    kind = ElementKind.COLUMN
    phase = Phase.COLUMNS

    def __init__(self, table: str, column: ColumnDef):
        self.table = table
        self.column = column

    @property
    def name(self) -> str:
        return f"{self.table}.{self.column.name}"

    def exists(self, session, target: ProvisioningTarget) -> bool:
        return session.inspector.column_exists(target.namespace, self.table, self.column.name)

    def statements(self, target: ProvisioningTarget) -> List[Statement]:
        return [(TableBuilder.add_column(target.namespace, self.table, self.column), None)]


# ============================================================================
# CONSTRAINTS
# ============================================================================

class ConstraintElement(SchemaElement):
    """
    A named CHECK, UNIQUE or FOREIGN KEY constraint.

    The existence predicate is mandatory here: ADD CONSTRAINT has no
    IF NOT EXISTS form. A duplicate-object failure is still tolerated so two
    runs racing on the same namespace do not report an error.
    """

    kind = ElementKind.CONSTRAINT
    phase = Phase.CONSTRAINTS

    CHECK = "CHECK"
    UNIQUE = "UNIQUE"
    FOREIGN_KEY = "FOREIGN KEY"

    def __init__(self, table: str, constraint_name: str, constraint_type: str,
                 expression: Optional[str] = None,
                 columns: Tuple[str, ...] = (),
                 ref_table: Optional[str] = None,
                 ref_columns: Tuple[str, ...] = ("id",),
                 on_delete: Optional[str] = None):
        if constraint_type not in (self.CHECK, self.UNIQUE, self.FOREIGN_KEY):
            raise ValueError(f"Unsupported constraint type: {constraint_type}")
        if constraint_type == self.CHECK and not expression:
            raise ValueError(f"CHECK constraint {constraint_name} needs an expression")
        if constraint_type != self.CHECK and not columns:
            raise ValueError(f"{constraint_type} constraint {constraint_name} needs columns")
        if constraint_type == self.FOREIGN_KEY and not ref_table:
            raise ValueError(f"FOREIGN KEY constraint {constraint_name} needs ref_table")

        self.table = table
        self.constraint_name = constraint_name
        self.constraint_type = constraint_type
        self.expression = expression
        self.constraint_columns = tuple(columns)
        self.ref_table = ref_table
        self.ref_columns = tuple(ref_columns)
        self.on_delete = on_delete

    @classmethod
    def check(cls, table: str, name: str, expression: str,
              columns: Tuple[str, ...] = ()) -> "ConstraintElement":
        return cls(table, name, cls.CHECK, expression=expression, columns=columns)

    @classmethod
    def unique(cls, table: str, name: str, *cols: str) -> "ConstraintElement":
        return cls(table, name, cls.UNIQUE, columns=cols)

    @classmethod
    def foreign_key(cls, table: str, name: str, column: str, ref_table: str,
                    on_delete: Optional[str] = None) -> "ConstraintElement":
        return cls(table, name, cls.FOREIGN_KEY, columns=(column,),
                   ref_table=ref_table, on_delete=on_delete)

    @property
    def name(self) -> str:
        return self.constraint_name

    def exists(self, session, target: ProvisioningTarget) -> bool:
        return session.inspector.constraint_exists(target.namespace, self.table, self.constraint_name)

    def statements(self, target: ProvisioningTarget) -> List[Statement]:
        ns = target.namespace
        if self.constraint_type == self.CHECK:
            stmt = ConstraintBuilder.check(ns, self.table, self.constraint_name, self.expression)
        elif self.constraint_type == self.UNIQUE:
            stmt = ConstraintBuilder.unique(ns, self.table, self.constraint_name, self.constraint_columns)
        else:
            stmt = ConstraintBuilder.foreign_key(
                ns, self.table, self.constraint_name, self.constraint_columns,
                self.ref_table, self.ref_columns, self.on_delete,
            )
        return [(stmt, None)]

    def referenced_columns(self) -> Tuple[str, ...]:
        return self.constraint_columns

    def is_benign_failure(self, exc: BaseException) -> bool:
        if getattr(exc, "sqlstate", None) in DUPLICATE_SQLSTATES:
            return True
        # Fallback for drivers that surface no SQLSTATE
        return "already exists" in str(exc).lower()


# ============================================================================
# INDEXES
# ============================================================================

class IndexElement(SchemaElement):
    """A named btree index (optionally unique)."""

    kind = ElementKind.INDEX
    phase = Phase.INDEXES

    def __init__(self, table: str, index_name: str, columns: Tuple[str, ...],
                 unique: bool = False):
        self.table = table
        self.index_name = index_name
        self.index_columns = tuple(columns)
        self.unique = unique

    @property
    def name(self) -> str:
        return self.index_name

    def exists(self, session, target: ProvisioningTarget) -> bool:
        return session.inspector.index_exists(target.namespace, self.index_name)

    def statements(self, target: ProvisioningTarget) -> List[Statement]:
        builder = IndexBuilder.unique if self.unique else IndexBuilder.btree
        return [(builder(target.namespace, self.table, self.index_columns, self.index_name), None)]

    def referenced_columns(self) -> Tuple[str, ...]:
        return self.index_columns


# ============================================================================
# FUNCTIONS AND TRIGGERS
# ============================================================================

class FunctionElement(SchemaElement):
    """
    A namespace-local function created with CREATE OR REPLACE.

    ``builder`` is a callable taking the namespace and returning the
    sql.Composed definition.
    """

    kind = ElementKind.FUNCTION
    phase = Phase.FUNCTIONS

    def __init__(self, function_name: str, builder):
        self.function_name = function_name
        self.builder = builder

    @property
    def name(self) -> str:
        return self.function_name

    def exists(self, session, target: ProvisioningTarget) -> bool:
        return session.inspector.function_exists(target.namespace, self.function_name)

    def statements(self, target: ProvisioningTarget) -> List[Statement]:
        return [(self.builder(target.namespace), None)]


class TriggerElement(SchemaElement):
    """BEFORE UPDATE trigger keeping "updatedAt" current."""

    kind = ElementKind.TRIGGER
    phase = Phase.FUNCTIONS

    def __init__(self, table: str, function_name: str = "update_updated_at_column",
                 trigger_name: Optional[str] = None):
        self.table = table
        self.function_name = function_name
        self.trigger_name = trigger_name or f"trg_{table}_updated_at"

    @property
    def name(self) -> str:
        return self.trigger_name

    def exists(self, session, target: ProvisioningTarget) -> bool:
        return session.inspector.trigger_exists(target.namespace, self.table, self.trigger_name)

    def statements(self, target: ProvisioningTarget) -> List[Statement]:
        return [
            (stmt, None) for stmt in TriggerBuilder.updated_at_trigger(
                target.namespace, self.table, self.trigger_name, self.function_name
            )
        ]

    def referenced_columns(self) -> Tuple[str, ...]:
        return ("updatedAt",)


# ============================================================================
# SEED ROWS
# ============================================================================

class SeedRowElement(SchemaElement):
    """
    One default row per tenant, keyed on "organizationId".

    The row id is derived from namespace and table, so a second default row
    in the same namespace fails on the primary key instead of being added.
    """

    kind = ElementKind.SEED_ROW
    phase = Phase.SEED_ROWS

    NATURAL_KEY = "organizationId"

    def __init__(self, table: str, id_prefix: str, values: Dict[str, Any],
                 json_columns: Tuple[str, ...] = ()):
        self.table = table
        self.id_prefix = id_prefix
        self.values = dict(values)
        self.json_columns = tuple(json_columns)

    @property
    def name(self) -> str:
        return f"{self.table}.default"

    def row_id(self, target: ProvisioningTarget) -> str:
        digest = hashlib.sha256(f"{target.namespace}:{self.table}".encode("utf-8")).hexdigest()
        return f"{self.id_prefix}-{digest[:16]}"

    def row_values(self, target: ProvisioningTarget) -> Dict[str, Any]:
        row = {"id": self.row_id(target), self.NATURAL_KEY: target.organization_id}
        for key, value in self.values.items():
            row[key] = Jsonb(value) if key in self.json_columns else value
        return row

    def exists(self, session, target: ProvisioningTarget) -> bool:
        return session.inspector.row_exists(
            target.namespace, self.table, self.NATURAL_KEY, target.organization_id
        )

    def statements(self, target: ProvisioningTarget) -> List[Statement]:
        return [SeedBuilder.insert_row(target.namespace, self.table, self.row_values(target))]

    def referenced_columns(self) -> Tuple[str, ...]:
        return ("id", self.NATURAL_KEY) + tuple(self.values.keys())


__all__ = [
    'Phase',
    'ElementKind',
    'DUPLICATE_SQLSTATES',
    'ColumnDef',
    'columns',
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
]
