"""stool command line interface."""

import logging
import sys
from collections.abc import Callable
from typing import Any

import click

from stool import __version__
from stool.commands import connect, transfer
from stool.config import Settings
from stool.dependencies import Dependencies
from stool.errors import OperatorCancelled, StoolError
from stool.models import SessionOutcome
from stool.services import TransferMode
from stool.utils.console import ColorfulFormatter

logger = logging.getLogger(__name__)

CONFIG_HELP = "External config file (default: STOOL_CONFIG, else the built-in default.yaml)"


def configure_logging(settings: Settings | None = None) -> None:
    """Configure colorful stderr logging for the stool package."""
    settings = settings or Settings.from_env()
    log_level = settings.log_level
    use_colors = settings.log_colors

    # Disable colors if not a TTY
    if not sys.stderr.isatty():
        use_colors = False

    stool_logger = logging.getLogger("stool")
    stool_logger.setLevel(getattr(logging, log_level, logging.WARNING))

    # Only add handler if not already configured
    if not stool_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            ColorfulFormatter(use_colors=use_colors, show_time=log_level == "DEBUG")
        )
        stool_logger.addHandler(handler)
        stool_logger.propagate = False

    logging.getLogger("asyncssh").setLevel(logging.WARNING)


def _run(
    ctx: click.Context,
    config_path: str | None,
    flow: Callable[[Dependencies], SessionOutcome],
) -> None:
    """Build dependencies, run a command flow and map errors to exit codes.

    Cancellation exits 0 without output. Errors print one line.
    """
    try:
        deps = Dependencies.create(config_path)
        outcome = flow(deps)
    except OperatorCancelled:
        ctx.exit(0)
    except StoolError as e:
        logger.debug("Command failed", exc_info=True)
        click.echo(f"stool: {e}", err=True)
        ctx.exit(e.exit_code)
    else:
        logger.debug("Command finished: %s", outcome.kind.value)


def _config_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "-c",
        "--config",
        "config_path",
        type=click.Path(dir_okay=False),
        default=None,
        help=CONFIG_HELP,
    )(func)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-v", "--version", prog_name="stool")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Operator CLI for remote shells and file transfers."""
    configure_logging()
    ctx.ensure_object(dict)


@cli.command()
@_config_option
@click.pass_context
def ssh(ctx: click.Context, config_path: str | None) -> None:
    """Connect to a server over SSH.

    The server is picked from the config or entered manually. The first
    available of key file, stored password and typed password is used;
    an empty password falls back to default SSH authentication.
    """
    _run(ctx, config_path, connect)


@cli.group(name="transfer", invoke_without_command=True)
@_config_option
@click.pass_context
def transfer_group(ctx: click.Context, config_path: str | None) -> None:
    """Copy files to or from a server over SCP.

    Without a sub-command the direction is asked interactively. Default
    destinations: uploads go to ~/ on the server, downloads to ~/Downloads.
    """
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        _run(ctx, config_path, transfer)


@transfer_group.command()
@_config_option
@click.pass_context
def upload(ctx: click.Context, config_path: str | None) -> None:
    """Upload a local file or directory."""
    _run(
        ctx,
        config_path or ctx.obj.get("config_path"),
        lambda deps: transfer(deps, TransferMode.UPLOAD),
    )


@transfer_group.command()
@_config_option
@click.pass_context
def download(ctx: click.Context, config_path: str | None) -> None:
    """Download a remote file."""
    _run(
        ctx,
        config_path or ctx.obj.get("config_path"),
        lambda deps: transfer(deps, TransferMode.DOWNLOAD),
    )


def main() -> None:
    """Console script entry point."""
    cli(obj={})
