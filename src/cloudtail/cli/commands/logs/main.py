"""Print Cloud Logging entries for a project."""

import asyncio
import webbrowser
from typing import Optional

import typer
from rich.markup import escape

from cloudtail.cli.config import settings
from cloudtail.cli.core.constants import LOGS_CONSOLE_URL
from cloudtail.cli.exceptions import CLIError
from cloudtail.cli.utils.ux import console, print_error, print_info, print_warning
from cloudtail.logging_api.client import LoggingAPIClient
from cloudtail.tail.poller import LogPoller


def _resolve_project_id(project: Optional[str]) -> str:
    project_id = project or settings.PROJECT_ID
    if not project_id:
        raise CLIError(
            "No GCP project configured. Pass --project or set CLOUDTAIL_PROJECT_ID.",
            exit_code=2,
        )
    return project_id


def _open_logs_console(project_id: str) -> None:
    url = LOGS_CONSOLE_URL.format(project_id=project_id)
    print_info(f"Opening logs: {url}")
    try:
        webbrowser.open(url)
    except Exception as e:
        print_warning(f"Could not open browser automatically: {str(e)}")
        print_info(f"Please open this URL manually: {url}")


def tail_logs(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print each entry as indented JSON instead of a formatted line",
    ),
    watch: bool = typer.Option(
        False,
        "--watch",
        "-w",
        help="Keep polling for new entries until interrupted with Ctrl+C",
    ),
    poll_interval: Optional[int] = typer.Option(
        None,
        "--poll-interval",
        min=1,
        help="Milliseconds between polls in --watch mode (default: 6000)",
    ),
    project: Optional[str] = typer.Option(
        None,
        "--project",
        "-p",
        help="GCP project ID whose logs to read (default: CLOUDTAIL_PROJECT_ID)",
    ),
    open_console: bool = typer.Option(
        False,
        "--open",
        help="Open the Cloud Console logs page for the project and exit",
    ),
) -> None:
    """Print the most recent log entries for a project.

    Entries are printed oldest first, one per line. With --watch the command polls
    until interrupted, printing only entries it has not printed before.

    Examples:
        # Print the latest entries
        cloudtail logs --project my-project

        # Stream new entries every 10 seconds
        cloudtail logs --watch --poll-interval 10000

        # Full entries as JSON
        cloudtail logs --json
    """
    try:
        project_id = _resolve_project_id(project)
    except CLIError as e:
        print_error(str(e))
        raise typer.Exit(e.exit_code)

    if open_console:
        _open_logs_console(project_id)
        return

    if not settings.ACCESS_TOKEN:
        print_error("Not authenticated. Set CLOUDTAIL_ACCESS_TOKEN first.")
        raise typer.Exit(4)

    client = LoggingAPIClient(
        api_url=settings.API_BASE_URL, access_token=settings.ACCESS_TOKEN
    )
    poller = LogPoller(
        client,
        project_id,
        json_mode=json_output,
        local_creds=settings.LOCAL_CREDS,
        console=console,
        show_progress=console.is_terminal,
    )

    try:
        if watch:
            interval_ms = poll_interval or settings.POLL_INTERVAL_MS
            if interval_ms <= 0:
                raise CLIError(
                    "Poll interval must be a positive number of milliseconds, "
                    f"got {interval_ms}.",
                    exit_code=2,
                )
            console.print(
                f"[blue]Watching logs for {escape(project_id)} every {interval_ms} ms... "
                "(Press Ctrl+C to stop)[/blue]"
            )
            asyncio.run(poller.run_watch(interval_ms))
        else:
            asyncio.run(poller.run_once())
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped watching logs[/yellow]")
        raise typer.Exit(0)
    except CLIError as e:
        print_error(escape(str(e)))
        raise typer.Exit(e.exit_code)
