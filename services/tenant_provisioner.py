# ============================================================================
# TENANT PROVISIONER
# ============================================================================
# STATUS: Service - Brings one tenant namespace to the catalog's desired state
# PURPOSE: Resolve the namespace, walk the SchemaCatalog phase by phase,
#          create what is missing, verify the critical set, report everything
# EXPORTS: TenantProvisioner, ProvisioningOptions, ProvisioningReport,
#          ProvisioningChange, ProvisioningIssue, provision_tenant
# DEPENDENCIES: psycopg (via infrastructure), pydantic
# ============================================================================
"""
Tenant Provisioner Service.

Applies the SchemaCatalog to one tenant namespace, or simulates doing so.

Key Design Principles:
    - Idempotent: every element is existence-checked first, so a second run
      against the same tenant produces an empty change log
    - Failure isolation: an element that fails to create is logged in the
      report and the run moves on to the next element
    - Dry run performs existence checks only; zero DDL is executed
    - A run never raises; callers decide policy from the returned report

Run flow:
    1. Resolve namespace from slug (invalid slug -> fatal)
    2. Open session (connection failure -> fatal)
    3. Take the per-namespace advisory lock (skipped for dry runs)
    4. NAMESPACE phase: create schema + grant if absent (failure -> fatal)
    5. TABLES, COLUMNS, CONSTRAINTS, INDEXES, FUNCTIONS, SEED_ROWS
    6. Verification pass over the catalog's critical elements
    7. Return ProvisioningReport

Usage:
    from services.tenant_provisioner import provision_tenant, ProvisioningOptions

    report = provision_tenant(ProvisioningOptions(org_slug="acme-corp"))
    if not report.success:
        for issue in report.errors:
            print(issue.message)
"""

import threading
import time
import uuid
from collections import Counter
from contextlib import nullcontext
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

from config import AppConfig, get_config
from core.catalog import (
    ElementKind,
    NamespaceElement,
    Phase,
    ProvisioningTarget,
    SchemaCatalog,
    SchemaElement,
    get_catalog,
)
from core.namespace import NamespaceResolver
from exceptions import (
    ContractViolationError,
    DatabaseConnectionError,
    PhaseOrderError,
    ProvisioningSystemError,
)
from util_logger import LoggerFactory, ComponentType, LogContext

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "TenantProvisioner")


# ============================================================================
# OPTIONS
# ============================================================================

class ProvisioningOptions(BaseModel):
    """Inputs of one provisioning run."""

    model_config = ConfigDict(frozen=True)

    org_slug: str = Field(..., description="Organization slug, e.g. 'acme-corp'")
    org_id: Optional[str] = Field(
        default=None,
        description="Organization id stamped into seed rows; defaults to the slug"
    )
    dry_run: bool = Field(default=False, description="Report intended changes without executing DDL")
    verbose: bool = Field(default=False, description="Also record elements that already exist")

    @property
    def organization_id(self) -> str:
        return self.org_id or self.org_slug


# ============================================================================
# REPORT TYPES
# ============================================================================

class ChangeOutcome(str, Enum):
    """Outcome of one element in the change log."""
    CREATED = "created"
    WOULD_CREATE = "would_create"
    ALREADY_EXISTS = "already_exists"


class IssueCategory(str, Enum):
    """Error taxonomy of a run."""
    FATAL = "fatal"  # Run aborted
    ELEMENT = "element"  # One element failed, run continued
    VERIFICATION = "verification"  # Critical element still missing afterwards


class NamespaceState(str, Enum):
    """Lifecycle of a tenant namespace as observed at the end of a run."""
    ABSENT = "absent"
    CREATED = "created"
    PARTIALLY_PROVISIONED = "partially_provisioned"
    FULLY_PROVISIONED = "fully_provisioned"


@dataclass(frozen=True)
class ProvisioningChange:
    """One entry of the change log. Never mutated after creation."""
    element_kind: str
    element_name: str
    outcome: ChangeOutcome

    def to_dict(self) -> Dict[str, str]:
        return {
            "element_kind": self.element_kind,
            "element_name": self.element_name,
            "outcome": self.outcome.value,
        }


@dataclass(frozen=True)
class ProvisioningIssue:
    """One entry of the error log."""
    element_kind: str
    element_name: str
    message: str
    category: IssueCategory

    def to_dict(self) -> Dict[str, str]:
        return {
            "element_kind": self.element_kind,
            "element_name": self.element_name,
            "message": self.message,
            "category": self.category.value,
        }


# Summary key per element kind
SUMMARY_KEYS = {
    ElementKind.NAMESPACE: "namespaces_created",
    ElementKind.TABLE: "tables_created",
    ElementKind.COLUMN: "columns_added",
    ElementKind.CONSTRAINT: "constraints_added",
    ElementKind.INDEX: "indexes_created",
    ElementKind.FUNCTION: "functions_created",
    ElementKind.TRIGGER: "triggers_created",
    ElementKind.SEED_ROW: "seed_rows_created",
}


@dataclass
class ProvisioningReport:
    """
    Structured result of one provisioning run.

    ``changes`` holds created / would_create entries only; already-present
    elements seen in verbose mode go to ``satisfied``. ``success`` is false
    iff the error log is non-empty.
    """
    tenant_slug: str
    organization_id: str
    dry_run: bool
    catalog_version: str
    namespace: Optional[str] = None
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    started_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    changes: List[ProvisioningChange] = field(default_factory=list)
    satisfied: List[ProvisioningChange] = field(default_factory=list)
    errors: List[ProvisioningIssue] = field(default_factory=list)
    technical_debt: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0
    final_state: NamespaceState = NamespaceState.ABSENT
    cancelled: bool = False

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def summary(self) -> Dict[str, int]:
        counts = Counter(c.element_kind for c in self.changes)
        return {key: counts.get(kind.value, 0) for kind, key in SUMMARY_KEYS.items()}

    def record_change(self, element: SchemaElement, outcome: ChangeOutcome) -> None:
        change = ProvisioningChange(element.kind.value, element.name, outcome)
        if outcome is ChangeOutcome.ALREADY_EXISTS:
            self.satisfied.append(change)
        else:
            self.changes.append(change)

    def record_issue(self, kind: str, name: str, message: str, category: IssueCategory) -> None:
        self.errors.append(ProvisioningIssue(kind, name, message, category))

    def fatal_errors(self) -> List[ProvisioningIssue]:
        return [e for e in self.errors if e.category is IssueCategory.FATAL]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "namespace": self.namespace,
            "tenant_slug": self.tenant_slug,
            "organization_id": self.organization_id,
            "dry_run": self.dry_run,
            "catalog_version": self.catalog_version,
            "run_id": self.run_id,
            "started_at": self.started_at,
            "duration_seconds": round(self.duration_seconds, 3),
            "final_state": self.final_state.value,
            "cancelled": self.cancelled,
            "summary": self.summary,
            "changes": [c.to_dict() for c in self.changes],
            "satisfied": [c.to_dict() for c in self.satisfied],
            "errors": [e.to_dict() for e in self.errors],
            "technical_debt": list(self.technical_debt),
        }


# ============================================================================
# PROVISIONER
# ============================================================================

class TenantProvisioner:
    """
    Apply the SchemaCatalog to one tenant namespace.

    Collaborators are injected; defaults come from ``get_config()``.

    Args:
        options: ProvisioningOptions for this run
        config: AppConfig (default: get_config())
        repository: Object with a ``session()`` context manager
            (default: PostgreSQLRepository)
        catalog: SchemaCatalog (default: get_catalog(prefix))
        resolver: NamespaceResolver (default: bound to the configured prefix)
    """

    def __init__(
        self,
        options: ProvisioningOptions,
        config: Optional[AppConfig] = None,
        repository=None,
        catalog: Optional[SchemaCatalog] = None,
        resolver: Optional[NamespaceResolver] = None
    ):
        self.options = options
        self.config = config or get_config()
        if repository is None:
            from infrastructure.postgresql import PostgreSQLRepository
            repository = PostgreSQLRepository(self.config)
        self.repository = repository
        self.catalog = catalog or get_catalog(self.config.tenant.namespace_prefix)
        self.resolver = resolver or NamespaceResolver(self.config.tenant.namespace_prefix)

        self._cancel_event = threading.Event()
        self._completed_phase: Optional[Phase] = None
        self._namespace_present = False
        self._planned_tables: Set[str] = set()
        self._log_extra: Dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    def cancel(self) -> None:
        """Stop the run at the next element boundary. Safe from any thread."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self) -> ProvisioningReport:
        """
        Execute the run and return its report. Never raises for runtime
        failures; those become fatal entries in the error log.
        """
        opts = self.options
        report = ProvisioningReport(
            tenant_slug=opts.org_slug,
            organization_id=opts.organization_id,
            dry_run=opts.dry_run,
            catalog_version=self.catalog.version,
        )
        start = time.monotonic()
        self._completed_phase = None
        self._namespace_present = False
        self._planned_tables = set()

        try:
            namespace = self.resolver.resolve(opts.org_slug)
        except ProvisioningSystemError as e:
            logger.error(f"❌ Cannot resolve namespace for '{opts.org_slug}': {e}")
            report.record_issue(ElementKind.NAMESPACE.value, opts.org_slug, str(e), IssueCategory.FATAL)
            return self._finish(report, start, namespace_present=False)

        report.namespace = namespace
        target = ProvisioningTarget(namespace, opts.org_slug, opts.organization_id)
        self._log_extra = LogContext(
            namespace=namespace,
            tenant_slug=opts.org_slug,
            organization_id=opts.organization_id,
            run_id=report.run_id,
            operation="provision",
            dry_run=opts.dry_run,
        ).as_extra()

        logger.info("=" * 70, extra=self._log_extra)
        logger.info(
            f"🏗️ PROVISIONING {namespace} (catalog {self.catalog.version}"
            f"{', DRY RUN' if opts.dry_run else ''})",
            extra=self._log_extra,
        )
        logger.info("=" * 70, extra=self._log_extra)

        try:
            with self.repository.session() as session:
                with self._namespace_lock(session, namespace):
                    self._provision(session, target, report)
        except DatabaseConnectionError as e:
            logger.error(f"❌ FATAL: database connection failed: {e}", extra=self._log_extra)
            report.record_issue("connection", namespace, str(e), IssueCategory.FATAL)
        except ContractViolationError:
            raise
        except ProvisioningSystemError as e:
            logger.error(f"❌ FATAL: {type(e).__name__}: {e}", extra=self._log_extra)
            report.record_issue("run", namespace, f"{type(e).__name__}: {e}", IssueCategory.FATAL)

        return self._finish(report, start, self._namespace_present)

    def _namespace_lock(self, session, namespace: str):
        if self.options.dry_run or not self.config.tenant.use_advisory_lock:
            return nullcontext()
        return session.advisory_lock(namespace)

    def _provision(self, session, target: ProvisioningTarget, report: ProvisioningReport) -> None:
        """Run all phases."""
        namespace_element = NamespaceElement(grantee=self.config.tenant.schema_grantee)
        assume_missing = False

        if namespace_element.exists(session, target):
            self._namespace_present = True
            if self.options.verbose:
                report.record_change(namespace_element, ChangeOutcome.ALREADY_EXISTS)
            logger.info(f"✅ Namespace {target.namespace} exists", extra=self._log_extra)
        elif self.options.dry_run:
            report.record_change(namespace_element, ChangeOutcome.WOULD_CREATE)
            logger.info(f"📝 Namespace {target.namespace} would be created", extra=self._log_extra)
            # Nothing can exist inside an absent namespace
            assume_missing = True
        else:
            try:
                namespace_element.apply(session, target)
            except DatabaseConnectionError:
                raise
            except ProvisioningSystemError as e:
                logger.error(f"❌ FATAL: cannot create namespace {target.namespace}: {e}",
                             extra=self._log_extra)
                report.record_issue(namespace_element.kind.value, target.namespace,
                                    f"Cannot create namespace: {e}", IssueCategory.FATAL)
                self._namespace_present = self._namespace_observed(session, namespace_element, target)
                return
            self._namespace_present = True
            report.record_change(namespace_element, ChangeOutcome.CREATED)
            logger.info(f"✅ Namespace {target.namespace} created", extra=self._log_extra)

        self._completed_phase = Phase.NAMESPACE

        for phase in self.catalog.phases():
            self.apply_phase(session, target, phase, report, assume_missing=assume_missing)
            if report.cancelled:
                break

        if not (self.options.dry_run or report.cancelled):
            self._verify(session, target, report)

    def apply_phase(
        self,
        session,
        target: ProvisioningTarget,
        phase: Phase,
        report: ProvisioningReport,
        assume_missing: bool = False
    ) -> None:
        """
        Apply every element of one phase.

        Raises:
            PhaseOrderError: The preceding phase has not completed in this run
        """
        if self._completed_phase is None or self._completed_phase < phase - 1:
            completed = self._completed_phase.label if self._completed_phase is not None else "none"
            raise PhaseOrderError(
                f"Cannot apply phase '{phase.label}' before '{Phase(phase - 1).label}' "
                f"has completed (last completed: {completed})"
            )

        elements = self.catalog.elements_for(phase)
        logger.info(f"🔍 Phase {phase.label}: {len(elements)} element(s)", extra=self._log_extra)

        for element in elements:
            if self.cancelled:
                report.cancelled = True
                report.record_issue(element.kind.value, element.name, "run cancelled", IssueCategory.ELEMENT)
                logger.warning(f"⚠️ Run cancelled before {element.kind.value} {element.name}",
                               extra=self._log_extra)
                return
            self._apply_element(session, target, element, report, assume_missing)

        self._completed_phase = phase

    def _apply_element(
        self,
        session,
        target: ProvisioningTarget,
        element: SchemaElement,
        report: ProvisioningReport,
        assume_missing: bool
    ) -> None:
        kind = element.kind.value

        if not assume_missing:
            present = self._planned_presence(element)
            if present is None:
                try:
                    present = element.exists(session, target)
                except DatabaseConnectionError:
                    raise
                except ProvisioningSystemError as e:
                    logger.error(f"❌ Existence check failed for {kind} {element.name}: {e}", extra=self._log_extra)
                    report.record_issue(kind, element.name, f"Existence check failed: {e}", IssueCategory.ELEMENT)
                    return
            if present:
                if self.options.verbose:
                    report.record_change(element, ChangeOutcome.ALREADY_EXISTS)
                    logger.info(f"   ✓ {kind} {element.name} already exists", extra=self._log_extra)
                return

        if self.options.dry_run:
            report.record_change(element, ChangeOutcome.WOULD_CREATE)
            if element.kind is ElementKind.TABLE:
                self._planned_tables.add(element.table)
            logger.info(f"   📝 Would create {kind} {element.name}", extra=self._log_extra)
            return

        try:
            element.apply(session, target)
        except DatabaseConnectionError:
            raise
        except ProvisioningSystemError as e:
            if element.is_benign_failure(e):
                # Predicate missed an existing object (or a concurrent run won the race)
                report.technical_debt.append(f"{kind} {element.name}: {e}")
                logger.warning(f"⚠️ {kind} {element.name} already exists (benign): {e}", extra=self._log_extra)
                return
            logger.error(f"❌ Failed to create {kind} {element.name}: {e}", extra=self._log_extra)
            report.record_issue(kind, element.name, str(e), IssueCategory.ELEMENT)
            return

        report.record_change(element, ChangeOutcome.CREATED)
        logger.info(f"   ✅ Created {kind} {element.name}", extra=self._log_extra)

    def _namespace_observed(self, session, element: NamespaceElement, target: ProvisioningTarget) -> bool:
        """Whether the namespace exists after a failed NAMESPACE phase (e.g. GRANT failed)."""
        try:
            return element.exists(session, target)
        except ProvisioningSystemError as e:
            logger.warning(f"⚠️ Cannot check namespace {target.namespace} after failure: {e}",
                           extra=self._log_extra)
            return False

    def _planned_presence(self, element: SchemaElement) -> Optional[bool]:
        """
        Presence of an element whose table this dry run only plans to create.

        The table does not exist yet, so its predicate cannot be asked. A real
        run creates the table with its own columns and then everything else
        on it. Returns None when the database has to be asked.
        """
        if not self.options.dry_run or element.table not in self._planned_tables:
            return None
        if element.kind is ElementKind.COLUMN:
            return element.column.name in self.catalog.table(element.table).column_names
        return False

    def _verify(self, session, target: ProvisioningTarget, report: ProvisioningReport) -> None:
        """Re-check the critical set; anything missing is a verification error."""
        critical = self.catalog.critical_elements()
        logger.info(f"🔍 Verifying {len(critical)} critical element(s)", extra=self._log_extra)

        for element in critical:
            try:
                present = element.exists(session, target)
            except DatabaseConnectionError:
                raise
            except ProvisioningSystemError as e:
                report.record_issue(element.kind.value, element.name,
                                    f"Verification query failed: {e}", IssueCategory.VERIFICATION)
                continue
            if not present:
                logger.error(f"🚨 Critical {element.kind.value} {element.name} missing after provisioning",
                             extra=self._log_extra)
                report.record_issue(element.kind.value, element.name,
                                    "Critical element missing after provisioning",
                                    IssueCategory.VERIFICATION)

    def _final_state(self, report: ProvisioningReport, namespace_present: bool) -> NamespaceState:
        if not namespace_present:
            return NamespaceState.ABSENT
        if report.dry_run:
            return NamespaceState.PARTIALLY_PROVISIONED if report.changes else NamespaceState.FULLY_PROVISIONED
        inside_changes = any(c.element_kind != ElementKind.NAMESPACE.value for c in report.changes)
        if self._completed_phase in (None, Phase.NAMESPACE) and not inside_changes:
            return NamespaceState.CREATED
        if report.errors:
            return NamespaceState.PARTIALLY_PROVISIONED
        return NamespaceState.FULLY_PROVISIONED

    def _finish(self, report: ProvisioningReport, start: float, namespace_present: bool) -> ProvisioningReport:
        report.duration_seconds = time.monotonic() - start
        report.final_state = self._final_state(report, namespace_present)

        status = "✅ SUCCESS" if report.success else f"❌ {len(report.errors)} ERROR(S)"
        logger.info(
            f"{status} {report.namespace or report.tenant_slug}: {report.summary} "
            f"in {report.duration_seconds:.2f}s ({report.final_state.value})",
            extra=self._log_extra,
        )
        if report.technical_debt:
            logger.warning(f"⚠️ {len(report.technical_debt)} benign duplicate(s) recorded as technical debt",
                           extra=self._log_extra)
        return report


# ============================================================================
# LIBRARY ENTRY POINT
# ============================================================================

def provision_tenant(
    options: ProvisioningOptions,
    config: Optional[AppConfig] = None,
    repository=None
) -> ProvisioningReport:
    """
    Provision one tenant and return the report.

    Used by tenant-onboarding flows; the caller surfaces ``report.errors``.
    """
    return TenantProvisioner(options, config=config, repository=repository).run()


__all__ = [
    'TenantProvisioner',
    'ProvisioningOptions',
    'ProvisioningReport',
    'ProvisioningChange',
    'ProvisioningIssue',
    'ChangeOutcome',
    'IssueCategory',
    'NamespaceState',
    'SUMMARY_KEYS',
    'provision_tenant',
]
