"""
provision-tenant - Bring one tenant namespace to the catalog's desired state.

Exit codes:
    0  no errors after verification
    1  errors remain (element, verification or fatal), or bad configuration
    2  invalid arguments

Usage:
    provision-tenant --org acme-corp
    provision-tenant --org acme-corp --org-id cmb123 --dry-run -v
    provision-tenant --org acme-corp --json
"""

import argparse
import json
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from config import AppConfig, get_config
from config.env_validation import log_validation_results
from exceptions import ConfigurationError
from services.tenant_provisioner import ProvisioningOptions, ProvisioningReport, provision_tenant
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "ProvisionTenantCLI")

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="provision-tenant",
        description="Create or complete a tenant namespace from the schema catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Provision a new tenant
  provision-tenant --org acme-corp

  # See what would change, including elements already in place
  provision-tenant --org acme-corp --dry-run --verbose
        """,
    )
    parser.add_argument("--org", required=True, help="Organization slug, e.g. acme-corp")
    parser.add_argument("--org-id", default=None, help="Organization id for seed rows (default: slug)")
    parser.add_argument("--dry-run", action="store_true", help="Report changes without executing DDL")
    parser.add_argument("--verbose", "-v", action="store_true", help="Also list elements already in place")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    return parser


def render_report(report: ProvisioningReport, verbose: bool = False) -> None:
    title = f"{report.namespace or report.tenant_slug}{' (dry run)' if report.dry_run else ''}"
    console.rule(f"[bold]Provisioning {title}[/]")

    if report.changes:
        table = Table(show_header=True, header_style="bold", border_style="dim")
        table.add_column("Kind", style="bold")
        table.add_column("Element")
        table.add_column("Outcome")
        for change in report.changes:
            color = "green" if change.outcome.value == "created" else "yellow"
            table.add_row(change.element_kind, change.element_name, f"[{color}]{change.outcome.value}[/]")
        console.print(table)
    else:
        console.print("[green]No changes: namespace already matches the catalog[/]")

    if verbose and report.satisfied:
        console.print(f"[dim]{len(report.satisfied)} element(s) already in place[/]")

    if report.technical_debt:
        console.print(f"[yellow]⚠️ {len(report.technical_debt)} benign duplicate(s):[/]")
        for entry in report.technical_debt:
            console.print(f"  [dim]{entry}[/]")

    if report.errors:
        console.print(f"[red]❌ {len(report.errors)} error(s):[/]")
        for issue in report.errors:
            console.print(f"  [red]{issue.category.value}[/] {issue.element_kind} {issue.element_name}: {issue.message}")

    summary = Table(show_header=True, header_style="bold", border_style="dim")
    summary.add_column("Count")
    summary.add_column("Value", justify="right")
    for key, value in report.summary.items():
        summary.add_row(key, str(value))
    console.print(summary)

    status = "[green]SUCCESS[/]" if report.success else "[red]FAILED[/]"
    console.print(
        f"\n  [bold]{status}[/] {report.final_state.value} "
        f"(catalog {report.catalog_version}, {report.duration_seconds:.2f}s)"
    )


@log_exceptions(ComponentType.TRIGGER, "ProvisionTenantCLI")
def main(argv: Optional[List[str]] = None, config: Optional[AppConfig] = None, repository=None) -> int:
    args = build_parser().parse_args(argv)

    if config is None:
        if not log_validation_results(logger):
            console.print("[red]Environment validation failed; see log for details[/]")
            return 1
        try:
            config = get_config()
        except ConfigurationError as e:
            console.print(f"[red]Configuration error: {e}[/]")
            return 1

    options = ProvisioningOptions(
        org_slug=args.org,
        org_id=args.org_id,
        dry_run=args.dry_run,
        verbose=args.verbose,
    )
    report = provision_tenant(options, config=config, repository=repository)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        render_report(report, verbose=args.verbose)

    return 0 if report.success else 1


if __name__ == "__main__":
    sys.exit(main())
