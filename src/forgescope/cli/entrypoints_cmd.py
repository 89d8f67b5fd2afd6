"""``forgescope entrypoints APP_DIR`` -- List an app's user-facing entrypoints.

Exit Codes:
    0 -- Every classified function resolved to a source file.
    1 -- One or more handlers could not be resolved.
    2 -- The manifest is missing or malformed.
"""

from __future__ import annotations

import json
import sys

import click

from forgescope.cli.output import print_entrypoints, report_to_json
from forgescope.entrypoints import scan_app
from forgescope.exceptions import MalformedManifest


@click.command("entrypoints")
@click.argument("app_dir", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
def entrypoints_command(app_dir: str, output_format: str) -> None:
    """Classify the functions declared in APP_DIR's manifest and resolve
    each one's handler to a source file.

    Functions fired only by schedules, platform events or internal queue
    consumers are left out.
    """
    try:
        report = scan_app(app_dir)
    except MalformedManifest as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    if output_format == "json":
        click.echo(json.dumps(report_to_json(report), indent=2))
    else:
        print_entrypoints(report)
    sys.exit(0 if report.ok else 1)
