"""
Credential commands.

``login`` stores the credentials used for a destination registry host and
``logout`` removes them. Credentials are keyed by host, so one login covers
every repository served from that host.
"""

import sys

import click

from ..exceptions import ConfigurationError, NotAuthenticatedError
from ..models.context import Credentials
from ..utils import host_of, setup_logging
from ..utils.constants import EXIT_GENERAL_ERROR
from ..utils.credentials import CredentialStore
from ..utils.error_handling import handle_migration_error


@click.command()
@click.option("--dst", required=True, help="Destination registry or repository URL")
@click.option("-u", "--username", required=True, help="Destination username")
@click.option("-p", "--password", prompt=True, hide_input=True, help="Destination password (prompted when omitted)")
@click.pass_context
def login(ctx: click.Context, dst: str, username: str, password: str) -> None:
    """Store credentials for a destination registry host."""
    setup_logging(ctx.obj["debug"], use_wrapping=True)

    try:
        host = host_of(dst)
        CredentialStore(ctx.obj["auth_file"]).add(host, Credentials(username=username, password=password))
    except ConfigurationError as e:
        handle_migration_error(e, "login")
        sys.exit(EXIT_GENERAL_ERROR)

    click.echo(f"Login succeeded for {host}")


@click.command()
@click.option("--dst", required=True, help="Destination registry or repository URL")
@click.pass_context
def logout(ctx: click.Context, dst: str) -> None:
    """Remove the credentials stored for a destination registry host."""
    setup_logging(ctx.obj["debug"], use_wrapping=True)

    try:
        host = host_of(dst)
        CredentialStore(ctx.obj["auth_file"]).remove(host)
    except NotAuthenticatedError as e:
        click.echo(f"Error: not logged in to {e.host}", err=True)
        sys.exit(EXIT_GENERAL_ERROR)
    except ConfigurationError as e:
        handle_migration_error(e, "logout")
        sys.exit(EXIT_GENERAL_ERROR)

    click.echo(f"Removed login credentials for {host}")


__all__ = ["login", "logout"]
