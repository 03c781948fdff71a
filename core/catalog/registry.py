# ============================================================================
# SCHEMA CATALOG REGISTRY
# ============================================================================
# STATUS: Core - Versioned desired-state catalog
# PURPOSE: Assemble definition modules into one validated, phase-ordered
#          catalog shared by the provisioner and the drift auditor
# ============================================================================
"""
SchemaCatalog - Versioned Desired Tenant Schema.

The catalog is assembled once from the definition modules and validated
before use: a column, constraint, index, trigger or seed row that points at an
undeclared table or column is a catalog bug, and is reported as such instead
of surfacing later as a database error inside some tenant.

Usage:
    from core.catalog import get_catalog, Phase

    catalog = get_catalog()
    for phase in catalog.phases():
        for element in catalog.elements_for(phase):
            ...

Exports:
    SchemaCatalog: Phase-ordered element container
    CATALOG_VERSION: Revision stamped into reports and audit artifacts
    build_default_catalog: Build (and validate) the application catalog
    get_catalog: Cached default catalog
"""

from collections import Counter, OrderedDict
from functools import lru_cache
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence, Tuple

from config.defaults import TenantDefaults
from exceptions import CatalogDefinitionError
from util_logger import LoggerFactory, ComponentType

from .elements import (
    ElementKind,
    Phase,
    SchemaElement,
    TableElement,
    ColumnElement,
    ConstraintElement,
)
from .definitions.base_tables import BASE_TABLES
from .definitions.workflow_tables import WORKFLOW_TABLES
from .definitions.extension_tables import EXTENSION_TABLES
from .definitions.columns import EVOLUTION_COLUMNS
from .definitions.constraints import CONSTRAINTS
from .definitions.indexes import INDEXES
from .definitions.functions import build_functions
from .definitions.seeds import SEED_ROWS

logger = LoggerFactory.create_logger(ComponentType.SCHEMA, "SchemaCatalog")


CATALOG_VERSION = "2025.08.3"

# Elements the application cannot start without; re-checked after every run
CRITICAL_TABLES = (
    "Campaign",
    "Show",
    "Episode",
    "Invoice",
    "Order",
    "workflow_settings",
    "HierarchicalBudget",
    "Notification",
)
CRITICAL_COLUMNS = (
    ("Invoice", "type"),
)


class SchemaCatalog:
    """
    Phase-ordered collection of schema elements.

    The NAMESPACE phase carries no catalog elements: the namespace itself
    depends on runtime configuration (grantee) and is handled by the
    provisioner.
    """

    def __init__(
        self,
        elements: Sequence[SchemaElement],
        version: str = CATALOG_VERSION,
        critical_tables: Sequence[str] = CRITICAL_TABLES,
        critical_columns: Sequence[Tuple[str, str]] = CRITICAL_COLUMNS
    ):
        self.version = version
        self._by_phase: "OrderedDict[Phase, Tuple[SchemaElement, ...]]" = OrderedDict()
        for phase in Phase:
            if phase is Phase.NAMESPACE:
                continue
            self._by_phase[phase] = tuple(e for e in elements if e.phase is phase)
        self.critical_tables = tuple(critical_tables)
        self.critical_columns = tuple(critical_columns)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def phases(self) -> List[Phase]:
        return list(self._by_phase.keys())

    def elements_for(self, phase: Phase) -> Tuple[SchemaElement, ...]:
        return self._by_phase.get(phase, ())

    def __iter__(self) -> Iterator[SchemaElement]:
        for elements in self._by_phase.values():
            yield from elements

    def __len__(self) -> int:
        return sum(len(e) for e in self._by_phase.values())

    @property
    def tables(self) -> Tuple[TableElement, ...]:
        return self.elements_for(Phase.TABLES)

    @property
    def table_names(self) -> FrozenSet[str]:
        return frozenset(t.table for t in self.tables)

    def table(self, name: str) -> Optional[TableElement]:
        for table in self.tables:
            if table.table == name:
                return table
        return None

    def of_kind(self, kind: ElementKind) -> List[SchemaElement]:
        return [e for e in self if e.kind is kind]

    def expected_columns(self, table: str) -> FrozenSet[str]:
        """Base columns plus every evolution column declared for the table."""
        base = self.table(table)
        names = set(base.column_names) if base else set()
        names.update(
            e.column.name for e in self.elements_for(Phase.COLUMNS)
            if isinstance(e, ColumnElement) and e.table == table
        )
        return frozenset(names)

    def counts(self) -> Dict[str, int]:
        """Element count per kind."""
        return dict(Counter(e.kind.value for e in self))

    def critical_elements(self) -> List[SchemaElement]:
        """Catalog elements matching the critical table / column set."""
        critical = []
        for name in self.critical_tables:
            table = self.table(name)
            if table is not None:
                critical.append(table)
        for table_name, column_name in self.critical_columns:
            for element in self.elements_for(Phase.COLUMNS):
                if element.table == table_name and element.column.name == column_name:
                    critical.append(element)
        return critical

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> "SchemaCatalog":
        """
        Check internal consistency.

        Raises:
            CatalogDefinitionError: Listing every problem found
        """
        problems: List[str] = []
        tables = self.table_names

        seen: Dict[Tuple[str, str], int] = Counter(
            (e.kind.value, e.name) for e in self
        )
        for (kind, name), count in seen.items():
            if count > 1:
                problems.append(f"duplicate {kind} '{name}' ({count}x)")

        for element in self:
            if element.kind is ElementKind.TABLE or element.kind is ElementKind.FUNCTION:
                continue
            if element.table not in tables:
                problems.append(f"{element.kind.value} '{element.name}' targets undeclared table '{element.table}'")
                continue
            available = self.expected_columns(element.table)
            for column in element.referenced_columns():
                if column not in available:
                    problems.append(
                        f"{element.kind.value} '{element.name}' references unknown column "
                        f"'{element.table}.{column}'"
                    )
            if isinstance(element, ConstraintElement) and element.ref_table:
                if element.ref_table not in tables:
                    problems.append(
                        f"constraint '{element.name}' references undeclared table '{element.ref_table}'"
                    )
                else:
                    ref_columns = self.expected_columns(element.ref_table)
                    for column in element.ref_columns:
                        if column not in ref_columns:
                            problems.append(
                                f"constraint '{element.name}' references unknown column "
                                f"'{element.ref_table}.{column}'"
                            )

        for table in self.tables:
            for column in table.referenced_columns():
                if column not in table.column_names:
                    problems.append(f"table '{table.table}' primary key column '{column}' not declared")

        for name in self.critical_tables:
            if name not in tables:
                problems.append(f"critical table '{name}' not declared")
        for table_name, column_name in self.critical_columns:
            if column_name not in self.expected_columns(table_name):
                problems.append(f"critical column '{table_name}.{column_name}' not declared")

        if problems:
            for problem in problems:
                logger.error(f"❌ Catalog problem: {problem}")
            raise CatalogDefinitionError(
                f"Catalog {self.version} failed validation with {len(problems)} problem(s): "
                + "; ".join(problems)
            )

        logger.debug(f"✅ Catalog {self.version} validated: {self.counts()}")
        return self


def build_default_catalog(prefix: str = TenantDefaults.NAMESPACE_PREFIX) -> SchemaCatalog:
    """Assemble and validate the application catalog."""
    elements: List[SchemaElement] = []
    elements.extend(BASE_TABLES)
    elements.extend(WORKFLOW_TABLES)
    elements.extend(EXTENSION_TABLES)
    elements.extend(EVOLUTION_COLUMNS)
    elements.extend(CONSTRAINTS)
    elements.extend(INDEXES)
    elements.extend(build_functions(prefix))
    elements.extend(SEED_ROWS)
    return SchemaCatalog(elements).validate()


@lru_cache(maxsize=8)
def get_catalog(prefix: str = TenantDefaults.NAMESPACE_PREFIX) -> SchemaCatalog:
    """Cached default catalog for a namespace prefix."""
    return build_default_catalog(prefix)


__all__ = [
    'SchemaCatalog',
    'CATALOG_VERSION',
    'CRITICAL_TABLES',
    'CRITICAL_COLUMNS',
    'build_default_catalog',
    'get_catalog',
]
