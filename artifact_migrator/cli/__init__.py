"""
Unified CLI entry point for artifact-migrator using Click.

This module provides the main CLI group and shared options.
"""

import sys
from typing import Optional

import click

from . import auth, migrate
from .._version import __version__
from ..utils.constants import DEFAULT_AUTH_PATH, DEFAULT_CONFIG_PATH, EXIT_USER_INTERRUPT

# ============================================================================
# CLI Group
# ============================================================================


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="artifact-migrator")
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    help=f"Path to the configuration file (default: {DEFAULT_CONFIG_PATH})",
)
@click.option(
    "--auth-file",
    type=click.Path(dir_okay=False),
    envvar="ARTIFACT_MIGRATOR_AUTH_FILE",
    help=f"Path to the credential file (default: {DEFAULT_AUTH_PATH})",
)
@click.option(
    "-d",
    "--debug",
    count=True,
    help="Increase verbosity (use -d for INFO, -dd for DEBUG, -ddd for DEBUG with HTTP logs)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], auth_file: Optional[str], debug: int) -> None:
    """Artifact Migrator - Migrate artifacts from Nexus, JFrog or generic hosts into CODING repositories."""
    # Store shared options in context for subcommands to access
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["auth_file"] = auth_file
    ctx.obj["debug"] = debug


# Register subcommands
cli.add_command(migrate.migrate)
cli.add_command(auth.login)
cli.add_command(auth.logout)


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()  # pylint: disable=no-value-for-parameter  # Click handles parameters
    except KeyboardInterrupt:
        click.echo("\n\nOperation cancelled by user", err=True)
        sys.exit(EXIT_USER_INTERRUPT)


__all__ = ["cli", "main"]
