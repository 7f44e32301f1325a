"""cloudtail CLI entry point."""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

import typer

from cloudtail import __version__
from cloudtail.cli.commands import tail_logs
from cloudtail.cli.config import settings

# Setup file logging
LOG_DIR = Path.home() / ".cloudtail" / "logs"
os.makedirs(LOG_DIR, exist_ok=True)
LOG_FILE = LOG_DIR / "cloudtail.log"

# Configure separate file logging without console output
file_handler = RotatingFileHandler(
    LOG_FILE,
    maxBytes=10 * 1024 * 1024,  # 10MB
    backupCount=5,
    encoding="utf-8",
)
file_handler.setFormatter(
    logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
)

# Configure logging - only sending to file, not to console
logging.basicConfig(
    level=logging.DEBUG if settings.VERBOSE else logging.INFO, handlers=[file_handler]
)

# Root typer for `cloudtail` CLI commands
app = typer.Typer(
    help="Tail Cloud Logging entries from the terminal", no_args_is_help=True
)

app.command(name="logs")(tail_logs)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cloudtail version: {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """cloudtail CLI."""


def run() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    run()
