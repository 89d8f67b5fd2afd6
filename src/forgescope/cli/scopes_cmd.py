"""``forgescope scopes METHOD URL`` -- Show the scopes a request requires.

Exit Codes:
    0 -- An endpoint matched the request.
    1 -- No endpoint matched; the requirement is unknown.
"""

from __future__ import annotations

import json
import sys

import click

from forgescope.cli.output import print_scopes
from forgescope.cli.specs import load_table, spec_option, timeout_option
from forgescope.permissions import find_endpoint


@click.command("scopes")
@click.argument("method", type=click.Choice(["get", "put", "post", "patch", "delete"], case_sensitive=False))
@click.argument("url")
@spec_option
@timeout_option
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
def scopes_command(
    method: str,
    url: str,
    specs: tuple[str, ...],
    timeout: float,
    output_format: str,
) -> None:
    """Show the OAuth scopes required to call METHOD URL.

    The most specific endpoint template matching URL decides the answer.
    """
    table = load_table(specs, timeout)
    key = find_endpoint(table, method, url)
    scopes = table[key] if key is not None else frozenset()
    endpoint = key[0] if key is not None else None

    if output_format == "json":
        click.echo(json.dumps({
            "method": method.lower(),
            "url": url,
            "endpoint": endpoint,
            "scopes": sorted(scopes),
        }, indent=2))
    else:
        print_scopes(method, url, endpoint, scopes)
    sys.exit(0 if key is not None else 1)
