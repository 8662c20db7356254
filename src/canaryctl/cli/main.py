# Copyright (c) Syntropy Systems
"""Main CLI entry point for canaryctl."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from canaryctl.cli.build import build
from canaryctl.cli.init_cmd import init
from canaryctl.cli.run import run
from canaryctl.cli.status import status

app = typer.Typer(
    name="canaryctl",
    help=(
        "Ad-hoc canary analysis client. Assemble a request, submit it, "
        "wait for the verdict."
    ),
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="CANARYCTL_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
) -> None:
    """Configure logging for all commands."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# Register commands
_ = app.command()(init)
_ = app.command()(run)
_ = app.command()(build)
_ = app.command()(status)


if __name__ == "__main__":
    app()
