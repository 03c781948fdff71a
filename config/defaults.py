"""
Configuration Defaults - Single source of truth for all default values.

Organization:
    - DatabaseDefaults: Timeouts for every connection and statement
    - TenantDefaults: Namespace naming contract and provisioning behaviour
    - AuditDefaults: Drift audit fan-out and artifact locations

The namespace prefix is a fixed contract with the host application's own
namespace resolution. Changing it here without changing the host application
orphans every existing tenant.

Usage:
    from config.defaults import DatabaseDefaults, TenantDefaults

    # In Pydantic Field definitions:
    statement_timeout_ms: int = Field(default=DatabaseDefaults.STATEMENT_TIMEOUT_MS, ...)
"""


# =============================================================================
# DATABASE DEFAULTS
# =============================================================================

class DatabaseDefaults:
    """
    Database connection reference values.

    DATABASE_URL has no default: a run without it fails at config load.
    """

    STATEMENT_TIMEOUT_MS = 30000
    LOCK_TIMEOUT_MS = 5000
    CONNECT_TIMEOUT_SECONDS = 10
    APPLICATION_NAME = "tenant-provisioner"


# =============================================================================
# TENANT DEFAULTS
# =============================================================================

class TenantDefaults:
    """
    Tenant namespace contract and provisioning switches.
    """

    NAMESPACE_PREFIX = "org_"
    REFERENCE_NAMESPACE = "org_podcastflow_pro"
    # Role granted ALL on every new tenant schema; empty string disables the grant
    SCHEMA_GRANTEE = "podcastflow"
    USE_ADVISORY_LOCK = True
    # Postgres identifier limit (NAMEDATALEN - 1)
    MAX_IDENTIFIER_LENGTH = 63


# =============================================================================
# AUDIT DEFAULTS
# =============================================================================

class AuditDefaults:
    """
    Drift audit fan-out and output locations.
    """

    MAX_WORKERS = 4
    OUTPUT_DIR = "."
    SCAN_ROOT = "src/app/api"
    EPHEMERAL_SLUG_PREFIX = "test-audit"
    ARTIFACT_PREFIX = "audit-report"
