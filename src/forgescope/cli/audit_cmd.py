"""``forgescope audit APP_DIR CALLS_FILE`` -- Check calls against declared scopes.

CALLS_FILE is a YAML or JSON list of ``{method, url, function}`` entries,
typically produced by a call-site scanner run over the app's entrypoints.

Exit Codes:
    0 -- Every call is covered (only LOW findings, if any).
    1 -- At least one call lacks a declared scope.
    2 -- The manifest or calls file is missing or malformed.
"""

from __future__ import annotations

import json
import sys

import click

from forgescope.audit import audit_calls, load_calls
from forgescope.cli.output import audit_to_json, print_audit
from forgescope.cli.specs import load_table, spec_option, timeout_option
from forgescope.exceptions import InvalidDocument
from forgescope.manifest import load_manifest


@click.command("audit")
@click.argument("app_dir", type=click.Path(exists=True, file_okay=False))
@click.argument("calls_file", type=click.Path(exists=True, dir_okay=False))
@spec_option
@timeout_option
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
def audit_command(
    app_dir: str,
    calls_file: str,
    specs: tuple[str, ...],
    timeout: float,
    output_format: str,
) -> None:
    """Report API calls whose required scopes APP_DIR does not declare."""
    try:
        manifest = load_manifest(app_dir)
        calls = load_calls(calls_file)
    except InvalidDocument as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    table = load_table(specs, timeout)
    result = audit_calls(manifest, table, calls)

    if output_format == "json":
        click.echo(json.dumps(audit_to_json(result), indent=2))
    else:
        print_audit(result)
    sys.exit(0 if result.is_safe else 1)
