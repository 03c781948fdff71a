"""
audit-tenants - Report structural drift of tenant namespaces.

Discovers every namespace carrying the tenant prefix (or audits the tenants
named with --tenant), compares each with the reference namespace, scans the
route handlers for tenant-isolation leaks, prints a summary and writes
audit-report-<timestamp>.json.

Exit codes:
    0  no drift and no failed audits
    1  drift found, an audit failed, or bad configuration
    2  invalid arguments

Usage:
    audit-tenants
    audit-tenants --tenant acme-corp --tenant globex
    audit-tenants --self-validate --reference org_podcastflow_pro
    audit-tenants --catalog --skip-scan
"""

import argparse
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from config import AppConfig, get_config
from config.env_validation import log_validation_results
from exceptions import ConfigurationError, ProvisioningSystemError
from services.drift_auditor import AuditReport, DriftAuditor
from services.isolation_scanner import IsolationScanner
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "AuditTenantsCLI")

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="audit-tenants",
        description="Diff tenant namespaces against the reference namespace",
    )
    parser.add_argument("--reference", default=None,
                        help="Reference namespace (default: TENANT_REFERENCE_NAMESPACE)")
    parser.add_argument("--tenant", action="append", default=None, metavar="SLUG",
                        help="Audit only this tenant (repeatable)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--self-validate", action="store_true",
                      help="Provision a throw-away tenant and diff it against the reference")
    mode.add_argument("--catalog", action="store_true",
                      help="Compare tenants with the catalog instead of the reference namespace")
    parser.add_argument("--scan-root", default=None,
                        help="Route handler directory for the isolation scan (default: AUDIT_SCAN_ROOT)")
    parser.add_argument("--skip-scan", action="store_true", help="Skip the isolation scan")
    parser.add_argument("--output-dir", "-o", default=None,
                        help="Directory for the JSON artifact (default: AUDIT_OUTPUT_DIR)")
    parser.add_argument("--max-workers", type=int, default=None,
                        help="Parallel tenant audits (default: AUDIT_MAX_WORKERS)")
    return parser


def render_report(report: AuditReport) -> None:
    console.rule(f"[bold]Drift audit ({report.mode}) vs {report.reference}[/]")

    table = Table(show_header=True, header_style="bold", border_style="dim")
    table.add_column("Namespace", style="bold")
    table.add_column("Missing tables", justify="right")
    table.add_column("Extra tables", justify="right")
    table.add_column("Missing columns", justify="right")
    table.add_column("Missing constraints", justify="right")
    table.add_column("Missing indexes", justify="right")
    for namespace, result in report.results.items():
        counts = result.counts()
        style = "red" if result.has_drift else "green"
        table.add_row(
            f"[{style}]{namespace}[/]",
            str(counts["missing_table"]),
            str(counts["extra_table"]),
            str(counts["missing_column"]),
            str(counts["missing_constraint"]),
            str(counts["missing_index"]),
        )
    for namespace, error in report.failures.items():
        table.add_row(f"[red]{namespace}[/]", "[red]failed[/]", "", "", "", error)
    console.print(table)

    console.print(report.format_text(), markup=False, highlight=False)


@log_exceptions(ComponentType.TRIGGER, "AuditTenantsCLI")
def main(argv: Optional[List[str]] = None, config: Optional[AppConfig] = None, repository=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_workers is not None and args.max_workers < 1:
        parser.error("--max-workers must be at least 1")

    if config is None:
        if not log_validation_results(logger):
            console.print("[red]Environment validation failed; see log for details[/]")
            return 1
        try:
            config = get_config()
        except ConfigurationError as e:
            console.print(f"[red]Configuration error: {e}[/]")
            return 1

    auditor = DriftAuditor(config=config, repository=repository)
    try:
        if args.self_validate:
            report = auditor.self_validate(reference=args.reference)
        else:
            report = auditor.audit_tenants(
                tenants=args.tenant,
                reference=args.reference,
                max_workers=args.max_workers,
                against_catalog=args.catalog,
            )
    except ProvisioningSystemError as e:
        logger.error(f"❌ Audit aborted: {e}")
        console.print(f"[red]❌ Audit aborted: {e}[/]")
        return 1

    if not args.skip_scan:
        scan_root = args.scan_root or config.tenant.audit_scan_root
        report.isolation = IsolationScanner(scan_root, config.tenant.namespace_prefix).scan()

    render_report(report)
    path = report.write_artifact(args.output_dir or config.tenant.audit_output_dir)
    console.print(f"\n  [dim]Report saved to {path}[/]")

    return 0 if report.success else 1


if __name__ == "__main__":
    sys.exit(main())
