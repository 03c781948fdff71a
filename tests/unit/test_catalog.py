"""
SchemaCatalog tests.

Anti-overfitting: count assertions catch silent additions/removals from the
definition modules.
"""

import pytest

from core.catalog import (
    CATALOG_VERSION,
    ColumnDef,
    ConstraintElement,
    ElementKind,
    IndexElement,
    Phase,
    ProvisioningTarget,
    SchemaCatalog,
    TableElement,
    ColumnElement,
    build_default_catalog,
    get_catalog,
)
from core.catalog.elements import columns
from core.catalog.definitions.seeds import DEFAULT_WORKFLOW_THRESHOLDS
from exceptions import CatalogDefinitionError


@pytest.fixture(scope="module")
def catalog():
    return get_catalog()


class TestCatalogCounts:

    def test_version(self, catalog):
        assert catalog.version == CATALOG_VERSION

    def test_at_least_80_tables(self, catalog):
        assert len(catalog.tables) == 82
        assert len(catalog.table_names) >= 80

    def test_counts_per_kind(self, catalog):
        assert catalog.counts() == {
            "table": 82,
            "column": 23,
            "constraint": 26,
            "index": 28,
            "function": 2,
            "trigger": 11,
            "seed_row": 2,
        }

    def test_constraint_types(self, catalog):
        types = [c.constraint_type for c in catalog.of_kind(ElementKind.CONSTRAINT)]
        assert types.count("CHECK") == 6
        assert types.count("UNIQUE") == 12
        assert types.count("FOREIGN KEY") == 8

    def test_namespace_is_not_a_catalog_element(self, catalog):
        assert Phase.NAMESPACE not in catalog.phases()
        assert not catalog.of_kind(ElementKind.NAMESPACE)


class TestCatalogOrdering:

    def test_phases_in_dependency_order(self, catalog):
        assert catalog.phases() == [
            Phase.TABLES, Phase.COLUMNS, Phase.CONSTRAINTS,
            Phase.INDEXES, Phase.FUNCTIONS, Phase.SEED_ROWS,
        ]

    def test_triggers_follow_functions(self, catalog):
        kinds = [e.kind for e in catalog.elements_for(Phase.FUNCTIONS)]
        last_function = max(i for i, k in enumerate(kinds) if k is ElementKind.FUNCTION)
        first_trigger = min(i for i, k in enumerate(kinds) if k is ElementKind.TRIGGER)
        assert last_function < first_trigger

    def test_iteration_walks_phases(self, catalog):
        phases = [e.phase for e in catalog]
        assert phases == sorted(phases)


class TestCriticalSet:

    def test_critical_tables_declared(self, catalog):
        names = {e.name for e in catalog.critical_elements()}
        assert {"Campaign", "Show", "Episode", "Invoice", "Order", "workflow_settings",
                "HierarchicalBudget", "Notification"} <= names

    def test_invoice_type_is_critical(self, catalog):
        assert "Invoice.type" in {e.name for e in catalog.critical_elements()}

    def test_expected_columns_include_evolution(self, catalog):
        assert "type" in catalog.expected_columns("Invoice")
        assert "type" not in catalog.table("Invoice").column_names


class TestCatalogValidation:

    def test_default_catalog_validates(self):
        assert build_default_catalog().validate() is not None

    def test_undeclared_table(self):
        elements = [TableElement("A", columns("id TEXT NOT NULL")),
                    IndexElement("B", "B_x_idx", ("x",))]
        with pytest.raises(CatalogDefinitionError, match="undeclared table 'B'"):
            SchemaCatalog(elements, critical_tables=(), critical_columns=()).validate()

    def test_unknown_column(self):
        elements = [TableElement("A", columns("id TEXT NOT NULL")),
                    ConstraintElement.unique("A", "A_x_key", "x")]
        with pytest.raises(CatalogDefinitionError, match="unknown column 'A.x'"):
            SchemaCatalog(elements, critical_tables=(), critical_columns=()).validate()

    def test_evolution_column_satisfies_reference(self):
        elements = [TableElement("A", columns("id TEXT NOT NULL")),
                    ColumnElement("A", ColumnDef.parse("x TEXT")),
                    IndexElement("A", "A_x_idx", ("x",))]
        SchemaCatalog(elements, critical_tables=(), critical_columns=()).validate()

    def test_duplicate_names(self):
        elements = [TableElement("A", columns("id TEXT NOT NULL", "x TEXT")),
                    IndexElement("A", "A_x_idx", ("x",)),
                    IndexElement("A", "A_x_idx", ("x",))]
        with pytest.raises(CatalogDefinitionError, match="duplicate index"):
            SchemaCatalog(elements, critical_tables=(), critical_columns=()).validate()

    def test_foreign_key_to_undeclared_table(self):
        elements = [TableElement("A", columns("id TEXT NOT NULL", "bId TEXT")),
                    ConstraintElement.foreign_key("A", "A_bId_fkey", "bId", "B")]
        with pytest.raises(CatalogDefinitionError, match="references undeclared table 'B'"):
            SchemaCatalog(elements, critical_tables=(), critical_columns=()).validate()

    def test_missing_critical_table(self):
        elements = [TableElement("A", columns("id TEXT NOT NULL"))]
        with pytest.raises(CatalogDefinitionError, match="critical table 'Campaign'"):
            SchemaCatalog(elements).validate()


class TestColumnDef:

    def test_parse_full(self):
        col = ColumnDef.parse("status TEXT NOT NULL DEFAULT 'draft'")
        assert col == ColumnDef("status", "TEXT", nullable=False, default="'draft'")

    def test_parse_nullable_array(self):
        col = ColumnDef.parse("categories TEXT[]")
        assert col.nullable is True
        assert col.data_type == "TEXT[]"
        assert col.default is None

    def test_parse_default_without_not_null(self):
        col = ColumnDef.parse("creditTerms INTEGER DEFAULT 30")
        assert col.nullable is True
        assert col.default == "30"

    def test_parse_rejects_bare_name(self):
        with pytest.raises(ValueError):
            ColumnDef.parse("lonely")


class TestElements:

    def test_constraint_argument_checks(self):
        with pytest.raises(ValueError):
            ConstraintElement("A", "A_check", "CHECK")
        with pytest.raises(ValueError):
            ConstraintElement("A", "A_bad", "EXCLUDE", columns=("x",))

    @pytest.mark.parametrize("exc,benign", [
        (Exception("constraint \"x\" for relation \"A\" already exists"), True),
        (type("E", (Exception,), {"sqlstate": "42710"})("dup"), True),
        (type("E", (Exception,), {"sqlstate": "42P07"})("dup"), True),
        (Exception("column \"x\" does not exist"), False),
    ])
    def test_constraint_benign_failure(self, exc, benign):
        element = ConstraintElement.unique("A", "A_x_key", "x")
        assert element.is_benign_failure(exc) is benign

    def test_other_elements_never_benign(self):
        assert IndexElement("A", "A_x_idx", ("x",)).is_benign_failure(Exception("already exists")) is False

    def test_seed_row_id_deterministic_per_namespace(self, catalog):
        seed = catalog.elements_for(Phase.SEED_ROWS)[0]
        acme = ProvisioningTarget("org_acme_corp", "acme-corp", "acme-corp")
        globex = ProvisioningTarget("org_globex", "globex", "globex")
        assert seed.row_id(acme) == seed.row_id(acme)
        assert seed.row_id(acme) != seed.row_id(globex)
        assert seed.row_id(acme).startswith("ws-")

    def test_seed_row_values(self, catalog):
        seed = catalog.elements_for(Phase.SEED_ROWS)[0]
        target = ProvisioningTarget("org_acme_corp", "acme-corp", "cmb123")
        values = seed.row_values(target)
        assert values["organizationId"] == "cmb123"
        assert values["thresholds"].obj == DEFAULT_WORKFLOW_THRESHOLDS
