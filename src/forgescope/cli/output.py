"""Rich output formatting helpers for the forgescope CLI.

Severity Color Mapping:
    CRITICAL = bold red, HIGH = yellow, MEDIUM = cyan, LOW = green
"""

from __future__ import annotations

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from forgescope.audit import AuditResult, Severity
from forgescope.entrypoints import Category, EntrypointReport

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "yellow",
    Severity.MEDIUM: "cyan",
    Severity.LOW: "green",
}

_CATEGORY_STYLES: dict[Category, str] = {
    Category.WEB_TRIGGER: "bold magenta",
    Category.INVOKABLE: "cyan",
}

console = Console()


def configure_logging(verbosity: int) -> None:
    """Send forgescope log records to stderr through Rich.

    Args:
        verbosity: 0 keeps the library quiet, 1 shows INFO, 2+ shows DEBUG.
    """
    if verbosity <= 0:
        return
    level = logging.INFO if verbosity == 1 else logging.DEBUG
    package_logger = logging.getLogger("forgescope")
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    package_logger.setLevel(level)


def severity_style(severity: Severity) -> str:
    """Return the Rich style string for a given severity level."""
    return _SEVERITY_STYLES.get(severity, "white")


def print_entrypoints(report: EntrypointReport) -> None:
    """Print resolved entrypoints and resolution failures for one app."""
    if not report.resolved and not report.failures:
        console.print(f"[dim]No user-facing entrypoints in {report.app_id}.[/dim]")
        return

    table = Table(title=f"Entrypoints of {report.app_id}", show_header=True, header_style="bold")
    table.add_column("Function", style="bold")
    table.add_column("Category", justify="center")
    table.add_column("Export")
    table.add_column("Source", style="dim")
    for entry in report.resolved:
        table.add_row(
            entry.function.key,
            Text(entry.category.value, style=_CATEGORY_STYLES[entry.category]),
            entry.location.export,
            str(entry.location.path),
        )
    for failure in report.failures:
        table.add_row(
            failure.function.key,
            Text(failure.category.value, style=_CATEGORY_STYLES[failure.category]),
            Text("UNRESOLVED", style="bold red"),
            str(failure.error),
        )
    console.print(table)
    console.print(
        f"[bold]{len(report.resolved)}[/bold] resolved | "
        f"[red]{len(report.failures)} unresolved[/red]"
    )


def print_scopes(method: str, url: str, endpoint: str | None, scopes: frozenset[str]) -> None:
    """Print the scopes required for one request."""
    if endpoint is None:
        console.print(f"[yellow]No endpoint matches {method.upper()} {url}[/yellow]")
        return
    console.print(f"[bold]{method.upper()}[/bold] {url} -> [dim]{endpoint}[/dim]")
    if not scopes:
        console.print("  [dim]No scopes listed for this operation.[/dim]")
    for scope in sorted(scopes):
        console.print(f"  {scope}")


def print_audit(result: AuditResult) -> None:
    """Print a findings table and summary for one audit."""
    if not result.findings:
        console.print(
            f"[green]{result.app_id}: all {result.calls_checked} call(s) covered.[/green]"
        )
        return

    table = Table(title=f"Scope audit of {result.app_id}", show_header=True, header_style="bold")
    table.add_column("Severity", justify="center")
    table.add_column("Type")
    table.add_column("Call")
    table.add_column("Required", style="dim")
    for f in result.findings:
        table.add_row(
            Text(f.severity.name, style=severity_style(f.severity)),
            f.finding_type,
            f"{f.call.method.upper()} {f.call.url}",
            ", ".join(sorted(f.required_scopes)) or "-",
        )
    console.print(table)
    status = "[green]SAFE[/green]" if result.is_safe else "[red]UNSAFE[/red]"
    console.print(
        f"{status} | {result.calls_checked} call(s) checked | "
        f"{len(result.findings)} finding(s)"
    )


def report_to_json(report: EntrypointReport) -> dict[str, Any]:
    """Convert an entrypoint report to a JSON-serializable dict."""
    return {
        "app_id": report.app_id,
        "entrypoints": [
            {
                "function": e.function.key,
                "category": e.category.value,
                "export": e.location.export,
                "path": str(e.location.path),
            }
            for e in report.resolved
        ],
        "failures": [
            {
                "function": f.function.key,
                "category": f.category.value,
                "error": type(f.error).__name__,
                "message": str(f.error),
            }
            for f in report.failures
        ],
    }


def audit_to_json(result: AuditResult) -> dict[str, Any]:
    """Convert an audit result to a JSON-serializable dict."""
    return {
        "app_id": result.app_id,
        "is_safe": result.is_safe,
        "calls_checked": result.calls_checked,
        "declared_scopes": sorted(result.declared_scopes),
        "max_severity": result.max_severity.name if result.max_severity else None,
        "findings": [
            {
                "severity": f.severity.name,
                "finding_type": f.finding_type,
                "message": f.message,
                "method": f.call.method,
                "url": f.call.url,
                "function": f.call.function,
                "endpoint": f.endpoint,
                "required_scopes": sorted(f.required_scopes),
            }
            for f in result.findings
        ],
    }
