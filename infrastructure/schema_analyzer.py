# ============================================================================
# SCHEMA ANALYZER - NAMESPACE INTROSPECTION AND DRIFT DETECTION
# ============================================================================
# STATUS: Infrastructure - Namespace snapshots and structural comparison
# PURPOSE: Capture the structure of a tenant namespace and diff it against a
#          reference namespace (tables, columns, constraints, indexes)
# ============================================================================
"""
SchemaAnalyzer - Namespace Introspection and Drift Detection.

Drift is computed from two snapshots:

1. Introspect each namespace once (tables, columns, CHECK/UNIQUE/FOREIGN KEY
   constraints, non-primary-key indexes)
2. Set-difference the table lists in both directions
3. For every table present on both sides, diff column, constraint and index
   name sets

Only names are compared. A column with the right name and the wrong type is
not drift here; the provisioner never alters existing columns either.

Usage:
    from infrastructure.schema_analyzer import SchemaAnalyzer

    with repository.session() as session:
        analyzer = SchemaAnalyzer(session)
        result = analyzer.detect_drift('org_podcastflow_pro', 'org_acme_corp')

Exports:
    SchemaAnalyzer: Snapshot + compare
    NamespaceSnapshot: Structure of one namespace
    DriftResult: Comparison output
    DriftType: Kinds of drift
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Set

from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "SchemaAnalyzer")


# ============================================================================
# DATA CLASSES
# ============================================================================

class DriftType(Enum):
    """Types of schema drift that can be detected."""
    MISSING_TABLE = "missing_table"
    EXTRA_TABLE = "extra_table"  # Table exists in target but not in reference
    MISSING_COLUMN = "missing_column"
    MISSING_CONSTRAINT = "missing_constraint"
    MISSING_INDEX = "missing_index"


@dataclass
class NamespaceSnapshot:
    """Structural names of one namespace."""
    namespace: str
    exists: bool
    tables: Set[str] = field(default_factory=set)
    columns: Dict[str, Set[str]] = field(default_factory=dict)
    constraints: Dict[str, Set[str]] = field(default_factory=dict)
    indexes: Dict[str, Set[str]] = field(default_factory=dict)

    @property
    def total_columns(self) -> int:
        return sum(len(c) for c in self.columns.values())


@dataclass
class DriftResult:
    """
    Structural difference of ``target`` relative to ``reference``.

    Per-table maps only carry tables with at least one missing name; lists are
    sorted so results compare and serialize deterministically.
    """
    reference: str
    target: str
    missing_tables: List[str] = field(default_factory=list)
    extra_tables: List[str] = field(default_factory=list)
    missing_columns: Dict[str, List[str]] = field(default_factory=dict)
    missing_constraints: Dict[str, List[str]] = field(default_factory=dict)
    missing_indexes: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def has_drift(self) -> bool:
        return bool(
            self.missing_tables or self.extra_tables or self.missing_columns
            or self.missing_constraints or self.missing_indexes
        )

    def counts(self) -> Dict[str, int]:
        return {
            DriftType.MISSING_TABLE.value: len(self.missing_tables),
            DriftType.EXTRA_TABLE.value: len(self.extra_tables),
            DriftType.MISSING_COLUMN.value: sum(len(v) for v in self.missing_columns.values()),
            DriftType.MISSING_CONSTRAINT.value: sum(len(v) for v in self.missing_constraints.values()),
            DriftType.MISSING_INDEX.value: sum(len(v) for v in self.missing_indexes.values()),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "reference": self.reference,
            "target": self.target,
            "has_drift": self.has_drift,
            "summary": self.counts(),
            "missing_tables": self.missing_tables,
            "extra_tables": self.extra_tables,
            "missing_columns": self.missing_columns,
            "missing_constraints": self.missing_constraints,
            "missing_indexes": self.missing_indexes,
        }


def _missing_by_table(reference: Dict[str, Set[str]], target: Dict[str, Set[str]],
                      tables: Set[str]) -> Dict[str, List[str]]:
    missing = {}
    for table in sorted(tables):
        names = reference.get(table, set()) - target.get(table, set())
        if names:
            missing[table] = sorted(names)
    return missing


# ============================================================================
# ANALYZER
# ============================================================================

class SchemaAnalyzer:
    """
    Snapshot namespaces through a session's inspector and compare them.

    Args:
        session: Session exposing ``inspector`` (CatalogInspector or equivalent)
    """

    def __init__(self, session):
        self.session = session

    def snapshot(self, namespace: str) -> NamespaceSnapshot:
        """Introspect one namespace. A missing namespace yields an empty snapshot."""
        inspector = self.session.inspector

        if not inspector.namespace_exists(namespace):
            logger.warning(f"⚠️ Namespace '{namespace}' does not exist")
            return NamespaceSnapshot(namespace=namespace, exists=False)

        tables = set(inspector.list_tables(namespace))
        snap = NamespaceSnapshot(
            namespace=namespace,
            exists=True,
            tables=tables,
            columns={t: set(c) for t, c in inspector.list_columns(namespace).items() if t in tables},
            constraints={t: set(c) for t, c in inspector.list_constraints(namespace).items() if t in tables},
            indexes={t: set(i) for t, i in inspector.list_indexes(namespace).items() if t in tables},
        )
        logger.debug(
            f"📊 Snapshot {namespace}: {len(snap.tables)} tables, {snap.total_columns} columns"
        )
        return snap

    @staticmethod
    def compare(reference: NamespaceSnapshot, target: NamespaceSnapshot) -> DriftResult:
        """Diff two snapshots; reference is the source of truth."""
        common = reference.tables & target.tables
        result = DriftResult(
            reference=reference.namespace,
            target=target.namespace,
            missing_tables=sorted(reference.tables - target.tables),
            extra_tables=sorted(target.tables - reference.tables),
            missing_columns=_missing_by_table(reference.columns, target.columns, common),
            missing_constraints=_missing_by_table(reference.constraints, target.constraints, common),
            missing_indexes=_missing_by_table(reference.indexes, target.indexes, common),
        )
        if result.has_drift:
            logger.info(f"⚠️ Drift {reference.namespace} -> {target.namespace}: {result.counts()}")
        else:
            logger.info(f"✅ No drift {reference.namespace} -> {target.namespace}")
        return result

    def detect_drift(self, reference: str, target: str) -> DriftResult:
        """Snapshot both namespaces and compare them."""
        return self.compare(self.snapshot(reference), self.snapshot(target))


__all__ = [
    'SchemaAnalyzer',
    'NamespaceSnapshot',
    'DriftResult',
    'DriftType',
]
