"""
Tenant Provisioning and Audit Configuration.

Exports:
    TenantConfig: Namespace contract, grant role, advisory locking, audit settings
"""

import os
import re
from pydantic import BaseModel, Field, field_validator

from .defaults import TenantDefaults, AuditDefaults


_PREFIX_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


class TenantConfig(BaseModel):
    """
    Tenant namespace and audit configuration.
    """

    namespace_prefix: str = Field(
        default=TenantDefaults.NAMESPACE_PREFIX,
        description="""Prefix prepended to every tenant namespace (TENANT_NAMESPACE_PREFIX).

        Must match the host application's schema resolution exactly:
        'acme-corp' resolves to '<prefix>acme_corp' on both sides.
        """
    )

    reference_namespace: str = Field(
        default=TenantDefaults.REFERENCE_NAMESPACE,
        description="Golden namespace used as the drift reference (TENANT_REFERENCE_NAMESPACE)"
    )

    schema_grantee: str = Field(
        default=TenantDefaults.SCHEMA_GRANTEE,
        description="Role granted ALL on new tenant schemas; empty disables (TENANT_SCHEMA_GRANTEE)"
    )

    use_advisory_lock: bool = Field(
        default=TenantDefaults.USE_ADVISORY_LOCK,
        description="""Serialize runs against the same namespace with pg_advisory_lock (TENANT_ADVISORY_LOCK).

        Two concurrent runs on one namespace can both observe an element as
        missing; the lock closes that window.
        """
    )

    audit_max_workers: int = Field(
        default=AuditDefaults.MAX_WORKERS,
        ge=1,
        description="Maximum tenants audited in parallel (AUDIT_MAX_WORKERS)"
    )

    audit_output_dir: str = Field(
        default=AuditDefaults.OUTPUT_DIR,
        description="Directory receiving audit-report-<timestamp>.json (AUDIT_OUTPUT_DIR)"
    )

    audit_scan_root: str = Field(
        default=AuditDefaults.SCAN_ROOT,
        description="Root of the route handlers scanned for isolation leaks (AUDIT_SCAN_ROOT)"
    )

    @field_validator("namespace_prefix")
    @classmethod
    def _valid_prefix(cls, value: str) -> str:
        if not _PREFIX_PATTERN.match(value):
            raise ValueError(
                f"namespace prefix '{value}' must be lowercase letters, digits and underscores"
            )
        return value

    def debug_dict(self) -> dict:
        """Debug output."""
        return self.model_dump()

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            namespace_prefix=os.environ.get("TENANT_NAMESPACE_PREFIX", TenantDefaults.NAMESPACE_PREFIX),
            reference_namespace=os.environ.get("TENANT_REFERENCE_NAMESPACE", TenantDefaults.REFERENCE_NAMESPACE),
            schema_grantee=os.environ.get("TENANT_SCHEMA_GRANTEE", TenantDefaults.SCHEMA_GRANTEE),
            use_advisory_lock=os.environ.get(
                "TENANT_ADVISORY_LOCK", str(TenantDefaults.USE_ADVISORY_LOCK)
            ).lower() in ("true", "1", "yes"),
            audit_max_workers=int(os.environ.get("AUDIT_MAX_WORKERS", str(AuditDefaults.MAX_WORKERS))),
            audit_output_dir=os.environ.get("AUDIT_OUTPUT_DIR", AuditDefaults.OUTPUT_DIR),
            audit_scan_root=os.environ.get("AUDIT_SCAN_ROOT", AuditDefaults.SCAN_ROOT),
        )
