"""
Config test fixtures: clean environment via monkeypatch.
"""

import pytest

from config import reset_config


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "DATABASE_URL", "DB_STATEMENT_TIMEOUT_MS", "DB_LOCK_TIMEOUT_MS",
        "DB_CONNECT_TIMEOUT", "DB_APPLICATION_NAME",
        "TENANT_NAMESPACE_PREFIX", "TENANT_REFERENCE_NAMESPACE",
        "TENANT_SCHEMA_GRANTEE", "TENANT_ADVISORY_LOCK",
        "AUDIT_MAX_WORKERS", "AUDIT_OUTPUT_DIR", "AUDIT_SCAN_ROOT",
        "DEBUG_LOGGING",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield monkeypatch
    reset_config()
