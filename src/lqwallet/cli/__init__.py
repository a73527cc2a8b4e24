"""
Liquid Wallet CLI package.

The ``lq-wallet`` console script starts an interactive shell. Shell commands
live in submodules and register themselves on the shared command registry
(:mod:`lqwallet.cli.registry`); the loop that reads and dispatches them is in
:mod:`lqwallet.cli.repl`.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from lqwallet.cli.common import setup_cli
from lqwallet.cli.repl import run_command_loop
from lqwallet.session import build_session_context
from lqwallet.settings import ensure_config_file
from lqwallet.version import get_version

app = typer.Typer(
    name="lq-wallet",
    help="Interactive Liquid Wallet",
    add_completion=False,
)


@app.command()
def shell(
    data_dir: Annotated[
        Path | None,
        typer.Option(
            "--data-dir",
            help="Data directory (default: ./wallet_data or $LQWALLET_DATA_DIR)",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", "-l", help="Log level"),
    ] = None,
    version: Annotated[
        bool,
        typer.Option("--version", help="Show the version and exit"),
    ] = False,
) -> None:
    """Start the interactive wallet shell. Type 'help' inside it for commands."""
    if version:
        typer.echo(f"lq-wallet {get_version()}")
        raise typer.Exit(0)

    settings = setup_cli(log_level, data_dir=data_dir)
    ensure_config_file(settings.get_data_dir())

    typer.echo("Welcome to the Liquid Wallet CLI")
    typer.echo("Type 'help' to see available commands")

    context = build_session_context(settings)
    if context.network is not None:
        typer.echo(f"Network initialized: {context.network}")
    else:
        typer.echo(f"{context.network_unavailable_message()} - wallet commands are disabled")

    try:
        asyncio.run(run_command_loop(context))
    except KeyboardInterrupt:
        typer.echo("\nExiting...")
    except Exception as e:
        # The loop already isolates handler failures; this only covers the driver
        logger.exception(f"Command loop stopped unexpectedly: {e}")
    finally:
        typer.echo("Program exited")

    raise typer.Exit(0)


def main() -> None:
    """Entry point for the ``lq-wallet`` console script."""
    app()


if __name__ == "__main__":
    main()
