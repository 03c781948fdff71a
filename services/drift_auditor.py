# ============================================================================
# DRIFT AUDITOR
# ============================================================================
# STATUS: Service - Read-only structural comparison of tenant namespaces
# PURPOSE: Quantify how far tenants have drifted from the golden namespace,
#          and self-validate the catalog against a throw-away tenant
# EXPORTS: DriftAuditor, AuditReport, DriftResult
# DEPENDENCIES: psycopg (via infrastructure)
# ============================================================================
"""
Drift Auditor Service.

Three modes:

    Fleet audit      every discovered tenant namespace vs the reference
    Self-validation  freshly provisioned ephemeral namespace vs the reference,
                     which checks the catalog itself
    Catalog audit    one namespace vs the catalog's own predicates (no
                     reference namespace needed)

The ephemeral namespace is acquired through a context manager that drops it
on every exit path, including failed provisioning and exceptions raised by
the caller.

Usage:
    from services.drift_auditor import DriftAuditor

    auditor = DriftAuditor()
    report = auditor.audit_tenants()
    report.write_artifact(".")
    print(report.format_text())
"""

import json
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from config import AppConfig, get_config
from config.defaults import AuditDefaults
from core.catalog import ElementKind, Phase, ProvisioningTarget, SchemaCatalog, get_catalog
from core.namespace import NamespaceResolver
from exceptions import AuditError, ProvisioningSystemError
from infrastructure.schema_analyzer import DriftResult, NamespaceSnapshot, SchemaAnalyzer
from util_logger import LoggerFactory, ComponentType, LogContext

from .fleet import run_for_each
from .isolation_scanner import IsolationScanResult
from .tenant_provisioner import ProvisioningOptions, ProvisioningReport, provision_tenant

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "DriftAuditor")


ARTIFACT_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"


# ============================================================================
# AUDIT REPORT
# ============================================================================

@dataclass
class AuditReport:
    """
    Everything one audit invocation found.

    ``results`` maps target namespace to DriftResult; ``failures`` maps
    namespace to the error that prevented its audit.
    """
    reference: str
    mode: str
    catalog_version: str
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    results: Dict[str, DriftResult] = field(default_factory=dict)
    failures: Dict[str, str] = field(default_factory=dict)
    provisioning: Optional[ProvisioningReport] = None
    isolation: Optional[IsolationScanResult] = None
    cleanup_failures: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def drifted(self) -> List[str]:
        return [ns for ns, r in self.results.items() if r.has_drift]

    @property
    def has_drift(self) -> bool:
        return bool(self.drifted)

    @property
    def success(self) -> bool:
        """No drift, no failed audits, no failed self-validation provisioning."""
        provisioning_ok = self.provisioning is None or self.provisioning.success
        return not self.has_drift and not self.failures and provisioning_ok and not self.cleanup_failures

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "reference": self.reference,
            "mode": self.mode,
            "catalog_version": self.catalog_version,
            "started_at": self.started_at.isoformat(),
            "duration_seconds": round(self.duration_seconds, 3),
            "success": self.success,
            "summary": {
                "tenants_audited": len(self.results),
                "tenants_with_drift": len(self.drifted),
                "audit_failures": len(self.failures),
                "isolation_findings": len(self.isolation.findings) if self.isolation else 0,
            },
            "results": {ns: r.to_dict() for ns, r in self.results.items()},
            "failures": dict(self.failures),
            "provisioning": self.provisioning.to_dict() if self.provisioning else None,
            "isolation": self.isolation.to_dict() if self.isolation else None,
            "cleanup_failures": list(self.cleanup_failures),
        }

    def artifact_name(self) -> str:
        stamp = self.started_at.astimezone(timezone.utc).strftime(ARTIFACT_TIMESTAMP_FORMAT)
        return f"{AuditDefaults.ARTIFACT_PREFIX}-{stamp}.json"

    def write_artifact(self, directory: str) -> Path:
        """Write audit-report-<timestamp>.json into ``directory``; returns the path."""
        out_dir = Path(directory)
        out_dir.mkdir(parents=True, exist_ok=True)
        path = out_dir / self.artifact_name()
        path.write_text(json.dumps(self.to_dict(), indent=2, sort_keys=False), encoding="utf-8")
        logger.info(f"📄 Audit artifact written: {path}")
        return path

    def format_text(self) -> str:
        """Human-readable report."""
        lines = [
            "=" * 70,
            f"AUDIT REPORT ({self.mode}) reference={self.reference} catalog={self.catalog_version}",
            "=" * 70,
        ]
        for namespace, result in self.results.items():
            if not result.has_drift:
                lines.append(f"✅ {namespace}: no drift")
                continue
            lines.append(f"❌ {namespace}:")
            if result.missing_tables:
                lines.append(f"   missing tables: {', '.join(result.missing_tables)}")
            if result.extra_tables:
                lines.append(f"   extra tables: {', '.join(result.extra_tables)}")
            for label, mapping in (
                ("missing columns", result.missing_columns),
                ("missing constraints", result.missing_constraints),
                ("missing indexes", result.missing_indexes),
            ):
                for table, names in mapping.items():
                    lines.append(f"   {label} {table}: {', '.join(names)}")
        for namespace, error in self.failures.items():
            lines.append(f"🚨 {namespace}: audit failed: {error}")
        if self.provisioning is not None and not self.provisioning.success:
            for issue in self.provisioning.errors:
                lines.append(f"🚨 provisioning {issue.category.value}: {issue.element_kind} "
                             f"{issue.element_name}: {issue.message}")
        if self.isolation is not None:
            lines.append("-" * 70)
            if not self.isolation.root_exists:
                lines.append(f"⚠️ isolation scan skipped: {self.isolation.root} not found")
            elif self.isolation.clean:
                lines.append(f"✅ isolation: {self.isolation.files_scanned} handler(s), no findings")
            else:
                lines.append(f"⚠️ isolation: {len(self.isolation.findings)} finding(s)")
                for finding in self.isolation.findings:
                    lines.append(f"   {finding.path}: {finding.message}")
        for failure in self.cleanup_failures:
            lines.append(f"🚨 cleanup failed: {failure}")
        lines.append("-" * 70)
        lines.append(
            f"{len(self.results)} audited, {len(self.drifted)} with drift, "
            f"{len(self.failures)} failed in {self.duration_seconds:.2f}s"
        )
        return "\n".join(lines)


# ============================================================================
# AUDITOR
# ============================================================================

class DriftAuditor:
    """
    Compare tenant namespaces against the reference namespace or the catalog.

    Args:
        config: AppConfig (default: get_config())
        repository: Object with a ``session()`` context manager
            (default: PostgreSQLRepository)
        catalog: SchemaCatalog (default: get_catalog(prefix))
    """

    def __init__(self, config: Optional[AppConfig] = None, repository=None,
                 catalog: Optional[SchemaCatalog] = None):
        self.config = config or get_config()
        if repository is None:
            from infrastructure.postgresql import PostgreSQLRepository
            repository = PostgreSQLRepository(self.config)
        self.repository = repository
        self.catalog = catalog or get_catalog(self.config.tenant.namespace_prefix)
        self.resolver = NamespaceResolver(self.config.tenant.namespace_prefix)
        self.cleanup_failures: List[str] = []

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def _reference_snapshot(self, reference: str) -> NamespaceSnapshot:
        with self.repository.session() as session:
            snapshot = SchemaAnalyzer(session).snapshot(reference)
        if not snapshot.exists:
            raise AuditError(f"Reference namespace '{reference}' does not exist")
        return snapshot

    def _compare_to(self, reference: NamespaceSnapshot, target: str) -> DriftResult:
        with self.repository.session() as session:
            return SchemaAnalyzer.compare(reference, SchemaAnalyzer(session).snapshot(target))

    def compare(self, reference: str, target: str) -> DriftResult:
        """
        Diff ``target`` against ``reference``.

        Raises:
            AuditError: Reference namespace does not exist
        """
        return self._compare_to(self._reference_snapshot(reference), target)

    def audit_catalog(self, target: str) -> DriftResult:
        """
        Evaluate the catalog's predicates against ``target`` without writing.

        Elements on a table that is itself missing are covered by the
        missing table entry.
        """
        result = DriftResult(reference=f"catalog:{self.catalog.version}", target=target)
        # Structural predicates only read the namespace
        probe = ProvisioningTarget(namespace=target, tenant_slug="", organization_id="")

        with self.repository.session() as session:
            inspector = session.inspector
            if not inspector.namespace_exists(target):
                result.missing_tables = sorted(self.catalog.table_names)
                return result

            present_tables = set(inspector.list_tables(target))
            present_columns = inspector.list_columns(target)

            result.missing_tables = sorted(self.catalog.table_names - present_tables)
            result.extra_tables = sorted(present_tables - self.catalog.table_names)

            for table in self.catalog.tables:
                if table.table not in present_tables:
                    continue
                missing = sorted(table.column_names - set(present_columns.get(table.table, ())))
                if missing:
                    result.missing_columns[table.table] = missing

            buckets = {
                Phase.COLUMNS: result.missing_columns,
                Phase.CONSTRAINTS: result.missing_constraints,
                Phase.INDEXES: result.missing_indexes,
            }
            for phase, bucket in buckets.items():
                for element in self.catalog.elements_for(phase):
                    if element.table not in present_tables or element.exists(session, probe):
                        continue
                    name = element.column.name if element.kind is ElementKind.COLUMN else element.name
                    bucket.setdefault(element.table, []).append(name)

        for bucket in buckets.values():
            for table in bucket:
                bucket[table] = sorted(set(bucket[table]))

        logger.info(f"{'⚠️' if result.has_drift else '✅'} Catalog audit {target}: {result.counts()}")
        return result

    # ------------------------------------------------------------------
    # Ephemeral namespace
    # ------------------------------------------------------------------

    @contextmanager
    def ephemeral_namespace(
        self,
        prefix: str = AuditDefaults.EPHEMERAL_SLUG_PREFIX
    ) -> Iterator[Tuple[str, ProvisioningReport]]:
        """
        Provision a throw-away tenant and drop it on exit.

        Yields:
            (namespace, ProvisioningReport)

        A failed drop is logged and recorded in ``cleanup_failures``; it is
        re-raised only when no other exception is already propagating.
        """
        slug = NamespaceResolver.ephemeral_slug(prefix)
        namespace = self.resolver.resolve(slug)
        extra = LogContext(namespace=namespace, tenant_slug=slug, operation="self_validate").as_extra()
        logger.info(f"🧪 Materializing ephemeral namespace {namespace}", extra=extra)

        in_flight = False
        try:
            report = provision_tenant(
                ProvisioningOptions(org_slug=slug),
                config=self.config,
                repository=self.repository,
            )
            yield namespace, report
        except BaseException:
            in_flight = True
            raise
        finally:
            self._drop_ephemeral(namespace, reraise=not in_flight, extra=extra)

    def _drop_ephemeral(self, namespace: str, reraise: bool, extra: Dict[str, Any]) -> None:
        try:
            with self.repository.session() as session:
                session.inspector.drop_namespace(namespace)
            logger.info(f"🧹 Ephemeral namespace {namespace} dropped", extra=extra)
        except ProvisioningSystemError as e:
            self.cleanup_failures.append(f"{namespace}: {e}")
            logger.error(f"🚨 Failed to drop ephemeral namespace {namespace}: {e}", extra=extra)
            if reraise:
                raise

    def self_validate(self, reference: Optional[str] = None) -> AuditReport:
        """
        Provision an ephemeral tenant from the live catalog and diff it
        against the reference.

        Raises:
            AuditError: The ephemeral namespace could not be materialized
        """
        reference = reference or self.config.tenant.reference_namespace
        report = AuditReport(reference=reference, mode="self_validate",
                             catalog_version=self.catalog.version)
        start = time.monotonic()
        earlier_failures = len(self.cleanup_failures)

        try:
            with self.ephemeral_namespace() as (namespace, provisioning):
                report.provisioning = provisioning
                fatal = provisioning.fatal_errors()
                if fatal:
                    raise AuditError(
                        f"Cannot materialize ephemeral namespace {namespace}: {fatal[0].message}"
                    )
                report.results[namespace] = self.compare(reference, namespace)
        finally:
            report.cleanup_failures = self.cleanup_failures[earlier_failures:]
            report.duration_seconds = time.monotonic() - start

        return report

    # ------------------------------------------------------------------
    # Fleet audit
    # ------------------------------------------------------------------

    def discover_namespaces(self, reference: Optional[str] = None) -> List[str]:
        """Tenant namespaces (by prefix), excluding the reference."""
        reference = reference or self.config.tenant.reference_namespace
        with self.repository.session() as session:
            names = session.inspector.list_namespaces(self.resolver.like_pattern())
        return [n for n in names if self.resolver.is_tenant_namespace(n) and n != reference]

    def audit_tenants(
        self,
        tenants: Optional[Sequence[str]] = None,
        reference: Optional[str] = None,
        max_workers: Optional[int] = None,
        against_catalog: bool = False
    ) -> AuditReport:
        """
        Audit tenants against the reference with bounded parallelism.

        Args:
            tenants: Tenant slugs; None audits every discovered namespace
            reference: Reference namespace (default: configured)
            max_workers: Parallel audits (default: configured)
            against_catalog: Compare with the catalog predicates instead of
                the reference namespace

        Raises:
            AuditError: Reference namespace does not exist
        """
        reference = reference or self.config.tenant.reference_namespace
        workers = max_workers or self.config.tenant.audit_max_workers
        mode = "catalog" if against_catalog else "fleet"
        label = f"catalog:{self.catalog.version}" if against_catalog else reference
        report = AuditReport(reference=label, mode=mode, catalog_version=self.catalog.version)
        start = time.monotonic()

        logger.info("=" * 70)
        logger.info(f"🔍 DRIFT AUDIT against {label}")
        logger.info("=" * 70)

        if tenants:
            namespaces = [self.resolver.resolve(slug) for slug in tenants]
        else:
            namespaces = self.discover_namespaces(reference)
        logger.info(f"📋 {len(namespaces)} tenant namespace(s) to audit")

        if against_catalog:
            task = self.audit_catalog
        else:
            reference_snapshot = self._reference_snapshot(reference)

            def task(namespace: str) -> DriftResult:
                return self._compare_to(reference_snapshot, namespace)

        outcomes = run_for_each(namespaces, task, max_workers=workers)
        for namespace, outcome in outcomes.items():
            if outcome.ok:
                report.results[namespace] = outcome.value
            else:
                report.failures[namespace] = outcome.error

        report.duration_seconds = time.monotonic() - start
        logger.info(
            f"{'✅' if report.success else '⚠️'} Audit complete: {len(report.results)} audited, "
            f"{len(report.drifted)} with drift, {len(report.failures)} failed"
        )
        return report


__all__ = [
    'DriftAuditor',
    'AuditReport',
    'DriftResult',
    'ARTIFACT_TIMESTAMP_FORMAT',
]
