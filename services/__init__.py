"""
Service Layer - Provisioning and audit orchestration.

Structure:
    tenant_provisioner.py  TenantProvisioner, ProvisioningReport, provision_tenant
    drift_auditor.py       DriftAuditor, AuditReport, ephemeral namespaces
    isolation_scanner.py   Static tenant-isolation heuristic over route handlers
    fleet.py               Bounded-parallel fan-out across tenants
"""

from .tenant_provisioner import (
    ProvisioningOptions,
    ProvisioningReport,
    TenantProvisioner,
    provision_tenant,
)
from .drift_auditor import AuditReport, DriftAuditor
from .isolation_scanner import IsolationScanner
from .fleet import provision_fleet, run_for_each

__all__ = [
    'ProvisioningOptions',
    'ProvisioningReport',
    'TenantProvisioner',
    'provision_tenant',
    'AuditReport',
    'DriftAuditor',
    'IsolationScanner',
    'provision_fleet',
    'run_for_each',
]
