"""
Migrate command for the artifact-migrator CLI.

Values not given on the command line are taken from the configuration file
(``[source]``, ``[http]`` and ``[migrate]`` sections), then from the built-in
defaults.
"""

import sys
from typing import Any, Optional, Tuple

import click
import httpx

from ..exceptions import MigrationError
from ..models.artifacts import RepositoryType, SourceKind
from ..models.context import MigrationContext
from ..services.migration_service import MigrationService
from ..utils import setup_logging
from ..utils.config_manager import ConfigManager
from ..utils.constants import DEFAULT_CONNECT_RETRIES, DEFAULT_PAGE_SIZE, EXIT_GENERAL_ERROR
from ..utils.credentials import CredentialStore
from ..utils.error_handling import handle_generic_error, handle_http_error, handle_migration_error, log_and_exit
from .progress import ClickProgress


def _parse_property(
    ctx: click.Context, param: click.Parameter, value: Optional[str]
) -> Optional[Tuple[str, str]]:
    """Split a NAME=VALUE option."""
    if value is None:
        return None
    name, sep, prop_value = value.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter("expected NAME=VALUE")
    return name.strip(), prop_value


def _first_set(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


@click.command()
@click.option("--src", required=True, help="Source repository URL")
@click.option("--dst", required=True, help="Destination repository URL")
@click.option(
    "--src-type",
    type=click.Choice([kind.value for kind in SourceKind]),
    default=SourceKind.NEXUS.value,
    show_default=True,
    help="Kind of source registry",
)
@click.option(
    "--type",
    "artifact_type",
    type=click.Choice([repo_type.value for repo_type in RepositoryType]),
    default=RepositoryType.GENERIC.value,
    show_default=True,
    help="Type of the destination repository",
)
@click.option("--prefix", help="Only migrate artifacts whose path starts with this prefix")
@click.option("--force", is_flag=True, help="Skip the destination existence check and push every artifact")
@click.option("--fail-fast", is_flag=True, help="Abort on the first artifact that fails to migrate")
@click.option("--src-username", help="Source username")
@click.option("--src-password", help="Source password")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Per-request timeout in seconds (default: wait indefinitely)",
)
@click.option("--connect-retries", type=click.IntRange(min=0), help="Connection retries (default: 0)")
@click.option("--page-size", type=click.IntRange(min=1), help=f"Page size for listings (default: {DEFAULT_PAGE_SIZE})")
@click.option("--report-file", type=click.Path(dir_okay=False), help="Write the migration report as JSON")
@click.option(
    "--property",
    "artifact_property",
    callback=_parse_property,
    metavar="NAME=VALUE",
    help="Property attached to each migrated package version (generic destinations)",
)
@click.option("--progress/--no-progress", default=True, help="Show the progress bar")
@click.pass_context
def migrate(  # pylint: disable=too-many-arguments,too-many-positional-arguments,too-many-locals
    ctx: click.Context,
    src: str,
    dst: str,
    src_type: str,
    artifact_type: str,
    prefix: Optional[str],
    force: bool,
    fail_fast: bool,
    src_username: Optional[str],
    src_password: Optional[str],
    timeout: Optional[float],
    connect_retries: Optional[int],
    page_size: Optional[int],
    report_file: Optional[str],
    artifact_property: Optional[Tuple[str, str]],
    progress: bool,
) -> None:
    """Migrate artifacts from a source registry into a destination repository."""
    debug = ctx.obj["debug"]
    setup_logging(debug, use_wrapping=True)

    try:
        config = ConfigManager(ctx.obj["config"])
        context = MigrationContext(
            src=src,
            dst=dst,
            src_type=SourceKind(src_type),
            artifact_type=RepositoryType(artifact_type),
            prefix=prefix,
            force=force,
            fail_fast=fail_fast,
            debug=debug,
            src_username=_first_set(src_username, config.get("source.username")),
            src_password=_first_set(src_password, config.get("source.password")),
            timeout=_first_set(timeout, config.get("http.timeout")),
            connect_retries=_first_set(connect_retries, config.get("http.connect_retries"), DEFAULT_CONNECT_RETRIES),
            page_size=_first_set(page_size, config.get("migrate.page_size"), DEFAULT_PAGE_SIZE),
            report_file=report_file,
            property_name=artifact_property[0] if artifact_property else None,
            property_value=artifact_property[1] if artifact_property else None,
        )
    except (FileNotFoundError, ValueError) as e:
        log_and_exit(f"Invalid configuration: {e}")

    service = MigrationService(
        context,
        credential_store=CredentialStore(ctx.obj["auth_file"]),
        progress=ClickProgress() if progress else None,
    )
    try:
        result = service.run()
    except MigrationError as e:
        handle_migration_error(e, "migration")
        sys.exit(EXIT_GENERAL_ERROR)
    except httpx.HTTPError as e:
        handle_http_error(e, "migration")
        sys.exit(EXIT_GENERAL_ERROR)
    except Exception as e:
        handle_generic_error(e, "migration")
        sys.exit(EXIT_GENERAL_ERROR)

    click.echo(result.message)


__all__ = ["migrate"]
