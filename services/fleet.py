# ============================================================================
# FLEET FAN-OUT
# ============================================================================
# STATUS: Service - Bounded-parallel execution across tenant namespaces
# PURPOSE: Run one provisioning or audit task per tenant with at most
#          max_workers in flight; one tenant's failure never affects another
# EXPORTS: run_for_each, provision_fleet, TaskOutcome
# ============================================================================
"""
Fleet Fan-Out.

Tenants are isolated from one another, so per-tenant work runs as independent
tasks on a thread pool. Each task opens its own connection; ``max_workers``
bounds the number of concurrent connections.

Usage:
    from services.fleet import run_for_each

    outcomes = run_for_each(namespaces, audit_one, max_workers=4)
    for namespace, outcome in outcomes.items():
        if not outcome.ok:
            print(namespace, outcome.error)
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

from config import AppConfig
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "Fleet")


@dataclass
class TaskOutcome:
    """Result or captured failure of one tenant task."""
    key: str
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_for_each(
    items: Iterable[str],
    fn: Callable[[str], Any],
    max_workers: int = 4
) -> Dict[str, TaskOutcome]:
    """
    Call ``fn(item)`` for every item with bounded parallelism.

    An exception raised by a task becomes that item's TaskOutcome.error.
    Results keep the input order.
    """
    keys = list(dict.fromkeys(items))
    if not keys:
        return {}

    workers = max(1, min(max_workers, len(keys)))
    logger.info(f"🚀 Fan-out over {len(keys)} tenant(s) with {workers} worker(s)")

    outcomes: Dict[str, TaskOutcome] = {}
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(fn, key): key for key in keys}

        for future in futures:
            key = futures[future]
            try:
                outcomes[key] = TaskOutcome(key=key, value=future.result())
            except Exception as e:
                logger.error(f"❌ Task for {key} failed: {type(e).__name__}: {e}")
                outcomes[key] = TaskOutcome(key=key, error=f"{type(e).__name__}: {e}")

    failed = sum(1 for o in outcomes.values() if not o.ok)
    logger.info(f"✅ Fan-out complete: {len(keys) - failed} ok, {failed} failed")
    return outcomes


def provision_fleet(
    slugs: Iterable[str],
    dry_run: bool = False,
    config: Optional[AppConfig] = None,
    repository=None,
    max_workers: int = 4
) -> Dict[str, TaskOutcome]:
    """Provision many tenants; each outcome's value is a ProvisioningReport."""
    from .tenant_provisioner import ProvisioningOptions, provision_tenant

    def _one(slug: str):
        return provision_tenant(
            ProvisioningOptions(org_slug=slug, dry_run=dry_run),
            config=config,
            repository=repository,
        )

    return run_for_each(slugs, _one, max_workers=max_workers)


__all__ = [
    'TaskOutcome',
    'run_for_each',
    'provision_fleet',
]
