"""Command-line entry point for feedbin-cli.

Every FeedbinError is caught at the command boundary and echoed as a
message; the process exits 1 in that case so scripts can tell.
"""

import logging
import sys
from typing import NoReturn

import click

from . import session
from .aggregator import aggregate
from .client import AuthenticationError, FeedbinClient
from .config import Config, load_config
from .credentials import Credential, CredentialStore
from .errors import FeedbinError
from .terminal import Terminal

logger = logging.getLogger(__name__)


def configure_logging(level_name: str) -> None:
    """Send log records to stderr at ``level_name``."""
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        raise click.BadParameter(f"Unsupported log level: {level_name}")
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        force=True,
    )


def _fail(message: str) -> NoReturn:
    click.echo(message, err=True)
    sys.exit(1)


@click.group()
@click.option("--debug", is_flag=True, default=False, help="Show debug logs")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Read your Feedbin unread entries from the terminal."""
    config = load_config()
    configure_logging("DEBUG" if debug else config.log_level)
    ctx.obj = config


@cli.command()
@click.argument("email")
@click.argument("password")
@click.pass_obj
def authenticate(config: Config, email: str, password: str) -> None:
    """Authenticate with Feedbin using EMAIL and PASSWORD."""
    credential = Credential.from_plain(email, password)
    try:
        with FeedbinClient(config) as client:
            client.authenticate(credential)
        CredentialStore(config).save(credential)
    except AuthenticationError as e:
        logger.info("%s", e)
        _fail("Authentication failed. Please check your credentials.")
    except (FeedbinError, OSError) as e:
        _fail(f"Error occurred: {e}")

    click.echo("Authentication successful! Credentials stored.")


@cli.command()
@click.pass_obj
def stats(config: Config) -> None:
    """Show basic stats about your Feedbin account."""
    try:
        credential = CredentialStore(config).require()
        with FeedbinClient(config) as client:
            unread = client.list_unread_ids(credential)
            starred = client.list_starred_ids(credential)
            subscriptions = client.list_subscriptions(credential)
    except FeedbinError as e:
        _fail(str(e))

    click.echo("\nFeedbin Stats:")
    click.echo("-------------")
    click.echo(f"Unread entries: {len(unread)}")
    click.echo(f"Starred entries: {len(starred)}")
    click.echo(f"Total subscriptions: {len(subscriptions)}")


@cli.command()
@click.pass_obj
def unread(config: Config) -> None:
    """List and read unread entries."""
    try:
        credential = CredentialStore(config).require()
    except FeedbinError as e:
        _fail(str(e))

    with FeedbinClient(config) as client:
        try:
            reading_list = aggregate(client, credential)
        except FeedbinError as e:
            _fail(str(e))

        if not reading_list.feeds_resolved:
            click.echo("Feed titles are unavailable for this session.", err=True)
        if not len(reading_list):
            click.echo("No unread entries found.")
            return

        session.run(client, credential, reading_list, Terminal(page_size=config.page_size))


def main() -> None:
    """Run the feedbin command."""
    try:
        cli(prog_name="feedbin")
    except Exception:
        logger.exception("Unexpected error")
        sys.exit(1)


if __name__ == "__main__":
    main()
