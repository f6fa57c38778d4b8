"""SharpPkg CLI entrypoint."""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    name="sharppkg",
    add_completion=False,
    no_args_is_help=True,
    help="Package a compiled module's build output into a distributable zip.",
)


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.CRITICAL
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", force=True)


@app.callback()
def _callback(
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Show warnings and progress (-vv for debug)."),
) -> None:
    """SharpPkg CLI."""
    _configure_logging(verbose)


@app.command("version")
def version() -> None:
    """Print the installed SharpPkg version."""
    from sharppkg import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `sharppkg --help` is fast.
    """
    from sharppkg.cli.commands import list_entries as list_entries_cmd
    from sharppkg.cli.commands import pack as pack_cmd
    from sharppkg.cli.commands import validate_manifest as validate_manifest_cmd

    pack_cmd.register(app)
    list_entries_cmd.register(app)
    validate_manifest_cmd.register(app)


_register_commands()
