"""
IsolationScanner tests over a throw-away route tree.
"""

import pytest

from services.isolation_scanner import (
    IsolationScanner,
    REASON_DIRECT_ORM,
    REASON_UNSCOPED_SQL,
)


@pytest.fixture
def route_tree(tmp_path):
    """Minimal app/api tree with one handler per pattern."""
    def write(relative, content):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    write("campaigns/route.ts", "const rows = await safeQuerySchema(orgSlug, (db) => db.campaign.findMany())")
    write("shows/route.ts", "const shows = await prisma.show.findMany()")
    write("reports/route.ts", "await db.query('SELECT id FROM \"Invoice\"')")
    write("auth/login/route.ts", "const user = await prisma.user.findUnique({ where: { email } })")
    write("health/route.ts", "await db.query('SELECT 1 FROM pg_catalog.pg_class')")
    write("master/orgs/route.ts", "await prisma.organization.findMany()")
    write("shows/helpers.ts", "prisma.show.findMany()")  # not a handler
    write("tools/export.py", "cursor.execute('SELECT * FROM org_acme.\"Order\"')")
    return tmp_path


class TestCheckSource:

    scanner = IsolationScanner("unused")

    def test_direct_orm_flagged(self):
        findings = self.scanner.check_source("x/route.ts", "await prisma.campaign.findMany()")
        assert [f.reason for f in findings] == [REASON_DIRECT_ORM]

    def test_tenant_helper_clears_orm(self):
        content = "await prisma.campaign.findMany(); await querySchema(org, q)"
        assert self.scanner.check_source("x/route.ts", content) == []

    def test_unscoped_select_flagged(self):
        findings = self.scanner.check_source("x/route.ts", "sql`SELECT *\n  FROM \"Show\"`")
        assert [f.reason for f in findings] == [REASON_UNSCOPED_SQL]

    def test_prefix_mention_clears_sql(self):
        assert self.scanner.check_source("x/route.ts", "SELECT * FROM org_acme.\"Show\"") == []

    def test_both_patterns(self):
        content = "prisma.x.findMany(); db.query('SELECT a FROM b')"
        reasons = {f.reason for f in self.scanner.check_source("x/route.ts", content)}
        assert reasons == {REASON_DIRECT_ORM, REASON_UNSCOPED_SQL}

    @pytest.mark.parametrize("path", ["auth/route.ts", "api/health/route.ts", "master/x/route.ts"])
    def test_exempt_paths(self, path):
        assert self.scanner.check_source(path, "prisma.user.findMany(); SELECT a FROM b") == []

    def test_finding_message(self):
        finding = self.scanner.check_source("x/route.ts", "prisma.a.b()")[0]
        assert finding.message == "Uses direct ORM client without tenant schema isolation"
        assert finding.to_dict()["path"] == "x/route.ts"


class TestScan:

    def test_scan_tree(self, route_tree):
        result = IsolationScanner(str(route_tree)).scan()
        assert result.root_exists
        assert result.files_scanned == 7
        flagged = {(f.path, f.reason) for f in result.findings}
        assert flagged == {
            ("shows/route.ts", REASON_DIRECT_ORM),
            ("reports/route.ts", REASON_UNSCOPED_SQL),
        }
        assert not result.clean

    def test_missing_root_reported_not_raised(self, tmp_path):
        result = IsolationScanner(str(tmp_path / "nope")).scan()
        assert result.root_exists is False
        assert result.files_scanned == 0
        assert result.clean

    def test_custom_prefix(self, tmp_path):
        (tmp_path / "route.ts").write_text("SELECT * FROM org_acme.\"Show\"", encoding="utf-8")
        result = IsolationScanner(str(tmp_path), namespace_prefix="tenant_").scan()
        assert [f.reason for f in result.findings] == [REASON_UNSCOPED_SQL]
