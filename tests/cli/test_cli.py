"""
provision-tenant / audit-tenants entry point tests.

Exit codes: 0 clean, 1 errors or drift, 2 bad arguments.
"""

import json

import pytest

from config import reset_config
from scripts import audit_tenants, provision_tenant


def _json_payload(out: str) -> dict:
    start = out.index('{\n  "success"')
    payload, _ = json.JSONDecoder().raw_decode(out, start)
    return payload


class TestProvisionTenantCli:

    def test_success_exit_zero(self, app_config, fake_repo, fake_db):
        code = provision_tenant.main(["--org", "acme-corp"], config=app_config, repository=fake_repo)
        assert code == 0
        assert "org_acme_corp" in fake_db.namespaces

    def test_dry_run(self, app_config, fake_repo, fake_db):
        code = provision_tenant.main(["--org", "acme-corp", "--dry-run", "-v"],
                                     config=app_config, repository=fake_repo)
        assert code == 0
        assert fake_db.statements == []

    def test_json_output(self, app_config, fake_repo, capsys):
        code = provision_tenant.main(["--org", "acme-corp", "--org-id", "cmb123", "--json"],
                                     config=app_config, repository=fake_repo)
        payload = _json_payload(capsys.readouterr().out)
        assert code == 0
        assert payload["namespace"] == "org_acme_corp"
        assert payload["organization_id"] == "cmb123"
        assert payload["summary"]["tables_created"] == 82

    def test_errors_exit_one(self, app_config, fake_repo, fake_db):
        fake_db.connect_error = "connection refused"
        code = provision_tenant.main(["--org", "acme-corp"], config=app_config, repository=fake_repo)
        assert code == 1

    def test_missing_org_exit_two(self):
        with pytest.raises(SystemExit) as exc_info:
            provision_tenant.main([])
        assert exc_info.value.code == 2

    def test_missing_database_url_exit_one(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        reset_config()
        try:
            assert provision_tenant.main(["--org", "acme-corp"]) == 1
        finally:
            reset_config()


class TestAuditTenantsCli:

    @pytest.fixture
    def fleet(self, provision):
        assert provision("podcastflow-pro").success
        assert provision("acme-corp").success

    def test_clean_fleet_exit_zero(self, app_config, fake_repo, fleet, tmp_path):
        code = audit_tenants.main(["--skip-scan", "-o", str(tmp_path)], config=app_config, repository=fake_repo)
        assert code == 0
        artifacts = list(tmp_path.glob("audit-report-*.json"))
        assert len(artifacts) == 1
        data = json.loads(artifacts[0].read_text(encoding="utf-8"))
        assert data["summary"]["tenants_audited"] == 1

    def test_drift_exit_one(self, app_config, fake_repo, fake_db, fleet, tmp_path):
        fake_db.drop_table("org_acme_corp", "InventoryAlert")
        code = audit_tenants.main(["--skip-scan", "-o", str(tmp_path)], config=app_config, repository=fake_repo)
        assert code == 1

    def test_self_validate(self, app_config, fake_repo, fake_db, fleet, tmp_path):
        code = audit_tenants.main(["--self-validate", "--skip-scan", "-o", str(tmp_path)],
                                  config=app_config, repository=fake_repo)
        assert code == 0
        assert not [n for n in fake_db.namespaces if n.startswith("org_test_audit")]

    def test_catalog_mode_with_tenant(self, app_config, fake_repo, fleet, tmp_path):
        code = audit_tenants.main(["--catalog", "--tenant", "acme-corp", "--skip-scan", "-o", str(tmp_path)],
                                  config=app_config, repository=fake_repo)
        assert code == 0

    def test_missing_reference_exit_one(self, app_config, fake_repo, provision, tmp_path):
        provision("acme-corp")
        code = audit_tenants.main(["--skip-scan", "-o", str(tmp_path)], config=app_config, repository=fake_repo)
        assert code == 1
        assert list(tmp_path.glob("*.json")) == []

    def test_isolation_scan_included(self, app_config, fake_repo, fleet, tmp_path):
        routes = tmp_path / "api" / "shows"
        routes.mkdir(parents=True)
        (routes / "route.ts").write_text("await prisma.show.findMany()", encoding="utf-8")
        out = tmp_path / "out"

        code = audit_tenants.main(["--scan-root", str(tmp_path / "api"), "-o", str(out)],
                                  config=app_config, repository=fake_repo)

        # Isolation findings are reported but do not fail the audit
        assert code == 0
        data = json.loads(next(out.glob("audit-report-*.json")).read_text(encoding="utf-8"))
        assert data["summary"]["isolation_findings"] == 1

    def test_conflicting_modes_exit_two(self):
        with pytest.raises(SystemExit) as exc_info:
            audit_tenants.main(["--self-validate", "--catalog"])
        assert exc_info.value.code == 2

    def test_zero_workers_exit_two(self):
        with pytest.raises(SystemExit) as exc_info:
            audit_tenants.main(["--max-workers", "0"])
        assert exc_info.value.code == 2
