"""forgescope CLI -- entrypoint and scope analysis for extension apps.

Entry point for the ``forgescope`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    entrypoints -- Classify and resolve an app's user-facing functions.
    scopes      -- Show the scopes one API request requires.
    audit       -- Check an app's API calls against its declared scopes.

Usage::

    forgescope entrypoints ./my-app
    forgescope scopes get /rest/api/3/issue/ABC-1
    forgescope audit ./my-app calls.yml --spec ./jira-swagger.json
"""

from __future__ import annotations

import click

from forgescope import __version__
from forgescope.cli.audit_cmd import audit_command
from forgescope.cli.entrypoints_cmd import entrypoints_command
from forgescope.cli.output import configure_logging
from forgescope.cli.scopes_cmd import scopes_command


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", count=True, help="Log progress (-v) or debug detail (-vv).")
def cli(verbose: int) -> None:
    """forgescope: entrypoint and OAuth scope analysis for extension apps.

    Find the functions of an app that users or external callers can reach,
    and check that the API calls they make are covered by declared scopes.
    """
    configure_logging(verbose)


# Register all subcommands
cli.add_command(entrypoints_command)
cli.add_command(scopes_command)
cli.add_command(audit_command)
