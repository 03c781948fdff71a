"""
DDL builder tests.

Statements are rendered with as_string(None); identifiers must always be
quoted so tenant-derived names can never break out of their position.
"""

from core.catalog.ddl import (
    ConstraintBuilder,
    FunctionBuilder,
    IndexBuilder,
    SchemaBuilder,
    SeedBuilder,
    TableBuilder,
    TriggerBuilder,
)
from core.catalog.elements import columns, ColumnDef


def render(stmt) -> str:
    return stmt.as_string(None)


class TestSchemaBuilder:

    def test_create_schema(self):
        assert render(SchemaBuilder.create_schema("org_acme")) == 'CREATE SCHEMA IF NOT EXISTS "org_acme"'

    def test_grant(self):
        assert render(SchemaBuilder.grant_all("org_acme", "podcastflow")) == \
            'GRANT ALL ON SCHEMA "org_acme" TO "podcastflow"'

    def test_drop_is_cascade(self):
        assert render(SchemaBuilder.drop_schema("org_x")) == 'DROP SCHEMA IF EXISTS "org_x" CASCADE'

    def test_hostile_identifier_stays_quoted(self):
        text = render(SchemaBuilder.create_schema('org_x"; DROP SCHEMA public; --'))
        assert text == 'CREATE SCHEMA IF NOT EXISTS "org_x""; DROP SCHEMA public; --"'


class TestTableBuilder:

    def test_create_table(self):
        stmt = TableBuilder.create_table(
            "org_acme", "Campaign",
            columns("id TEXT NOT NULL", "status TEXT NOT NULL DEFAULT 'draft'", "budget DOUBLE PRECISION"),
            primary_key=("id",),
        )
        assert render(stmt) == (
            'CREATE TABLE IF NOT EXISTS "org_acme"."Campaign" (\n'
            '    "id" TEXT NOT NULL,\n'
            '    "status" TEXT NOT NULL DEFAULT \'draft\',\n'
            '    "budget" DOUBLE PRECISION,\n'
            '    CONSTRAINT "Campaign_pkey" PRIMARY KEY ("id")\n'
            ')'
        )

    def test_create_table_without_primary_key(self):
        stmt = TableBuilder.create_table("org_acme", "_ShowToUser", columns("A TEXT NOT NULL", "B TEXT NOT NULL"))
        assert "PRIMARY KEY" not in render(stmt)

    def test_add_column_is_idempotent_form(self):
        stmt = TableBuilder.add_column("org_acme", "Invoice", ColumnDef.parse("type TEXT NOT NULL DEFAULT 'incoming'"))
        assert render(stmt) == (
            'ALTER TABLE "org_acme"."Invoice" ADD COLUMN IF NOT EXISTS "type" TEXT NOT NULL DEFAULT \'incoming\''
        )


class TestConstraintBuilder:

    def test_check(self):
        stmt = ConstraintBuilder.check("org_a", "Invoice", "invoice_type_check", "\"type\" IN ('incoming', 'outgoing')")
        assert render(stmt) == (
            'ALTER TABLE "org_a"."Invoice" ADD CONSTRAINT "invoice_type_check" '
            'CHECK ("type" IN (\'incoming\', \'outgoing\'))'
        )

    def test_unique(self):
        stmt = ConstraintBuilder.unique("org_a", "CampaignCategory", "cc_key", ("campaignId", "category"))
        assert render(stmt).endswith('UNIQUE ("campaignId", "category")')

    def test_foreign_key_is_namespace_local(self):
        stmt = ConstraintBuilder.foreign_key("org_a", "ShowConfiguration", "sc_fkey", "showId", "Show",
                                             on_delete="CASCADE")
        assert render(stmt).endswith(
            'FOREIGN KEY ("showId") REFERENCES "org_a"."Show" ("id") ON DELETE CASCADE'
        )


class TestIndexBuilder:

    def test_btree(self):
        stmt = IndexBuilder.btree("org_a", "Campaign", ("organizationId",), "Campaign_organizationId_idx")
        assert render(stmt) == (
            'CREATE INDEX IF NOT EXISTS "Campaign_organizationId_idx" ON "org_a"."Campaign" ("organizationId")'
        )

    def test_unique_partial(self):
        stmt = IndexBuilder.unique("org_a", "T", "x", "T_x_key", partial_where='"x" IS NOT NULL')
        assert render(stmt) == 'CREATE UNIQUE INDEX IF NOT EXISTS "T_x_key" ON "org_a"."T" ("x") WHERE "x" IS NOT NULL'


class TestFunctionsAndTriggers:

    def test_updated_at_function_is_namespace_local(self):
        text = render(FunctionBuilder.updated_at_function("org_a"))
        assert text.startswith('CREATE OR REPLACE FUNCTION "org_a".update_updated_at_column()')
        assert 'NEW."updatedAt"' in text

    def test_set_org_context_uses_prefix(self):
        text = render(FunctionBuilder.set_org_context("org_a", "org_"))
        assert "'org_' || regexp_replace(lower(org_slug), '[^a-z0-9]', '_', 'g')" in text

    def test_trigger_is_drop_then_create(self):
        drop, create = TriggerBuilder.updated_at_trigger("org_a", "Campaign")
        assert render(drop) == 'DROP TRIGGER IF EXISTS "trg_Campaign_updated_at" ON "org_a"."Campaign"'
        assert render(create).startswith('CREATE TRIGGER "trg_Campaign_updated_at"\nBEFORE UPDATE ON "org_a"."Campaign"')
        assert render(create).endswith('EXECUTE FUNCTION "org_a"."update_updated_at_column"()')


class TestSeedBuilder:

    def test_insert_row_is_parameterized(self):
        stmt, params = SeedBuilder.insert_row("org_a", "BillingSettings",
                                              {"id": "bs-1", "organizationId": "acme", "currency": "USD"})
        assert render(stmt) == (
            'INSERT INTO "org_a"."BillingSettings" ("id", "organizationId", "currency") '
            'VALUES (%s, %s, %s)'
        )
        assert params == ("bs-1", "acme", "USD")
