"""Tests for the logs command in the CLI."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from cloudtail import __version__
from cloudtail.cli.core.constants import PERMISSION_DENIED, PERMISSION_DENIED_LOCAL
from cloudtail.cli.main import app
from cloudtail.logging_api.client import LoggingAPIClient
from cloudtail.logging_api.models import LogListResult


@pytest.fixture
def runner():
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_settings():
    with patch("cloudtail.cli.commands.logs.main.settings") as settings:
        settings.API_BASE_URL = "http://localhost:9000/v2"
        settings.ACCESS_TOKEN = "test-token"
        settings.LOCAL_CREDS = False
        settings.PROJECT_ID = "settings-project"
        settings.POLL_INTERVAL_MS = 6000
        yield settings


@pytest.fixture
def mock_client(make_entry):
    client = AsyncMock(spec=LoggingAPIClient)
    client.list_entries.return_value = LogListResult(
        status=200,
        entries=[
            make_entry(insert_id="b", textPayload="second"),
            make_entry(insert_id="a", textPayload="first"),
        ],
    )
    with patch(
        "cloudtail.cli.commands.logs.main.LoggingAPIClient", return_value=client
    ) as client_cls:
        client_cls.instance = client
        yield client_cls


def test_logs_command_help(runner):
    result = runner.invoke(app, ["logs", "--help"])

    assert result.exit_code == 0
    for option in ["--json", "--watch", "--poll-interval", "--project", "--open"]:
        assert option in result.stdout


def test_version(runner):
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_logs_prints_entries_oldest_first(runner, mock_settings, mock_client):
    result = runner.invoke(app, ["logs"])

    assert result.exit_code == 0, result.stdout
    assert result.stdout.index("first") < result.stdout.index("second")
    mock_client.assert_called_once_with(
        api_url="http://localhost:9000/v2", access_token="test-token"
    )
    mock_client.instance.list_entries.assert_awaited_once_with(
        resource_names=["projects/settings-project"],
        filter="",
        order_by="timestamp desc",
    )


def test_project_option_overrides_settings(runner, mock_settings, mock_client):
    result = runner.invoke(app, ["logs", "--project", "other-project"])

    assert result.exit_code == 0, result.stdout
    _, kwargs = mock_client.instance.list_entries.call_args
    assert kwargs["resource_names"] == ["projects/other-project"]


def test_json_output(runner, mock_settings, mock_client):
    result = runner.invoke(app, ["logs", "--json"])

    assert result.exit_code == 0, result.stdout
    assert '"insertId": "a"' in result.stdout
    assert '"textPayload": "first"' in result.stdout


def test_missing_project(runner, mock_settings, mock_client):
    mock_settings.PROJECT_ID = ""

    result = runner.invoke(app, ["logs"])

    assert result.exit_code == 2
    assert "--project" in result.stdout
    mock_client.instance.list_entries.assert_not_called()


def test_missing_access_token(runner, mock_settings, mock_client):
    mock_settings.ACCESS_TOKEN = ""

    result = runner.invoke(app, ["logs"])

    assert result.exit_code == 4
    assert "Not authenticated" in result.stdout


@pytest.mark.parametrize(
    "local_creds,expected,unexpected",
    [
        (True, PERMISSION_DENIED_LOCAL, PERMISSION_DENIED),
        (False, PERMISSION_DENIED, PERMISSION_DENIED_LOCAL),
    ],
)
def test_permission_denied_message_depends_on_credentials(
    runner, mock_settings, mock_client, local_creds, expected, unexpected
):
    mock_settings.LOCAL_CREDS = local_creds
    mock_client.instance.list_entries.return_value = LogListResult(
        status=403, status_text="forbidden"
    )

    with patch("cloudtail.cli.commands.logs.main.print_error") as print_error:
        result = runner.invoke(app, ["logs"])

    assert result.exit_code == 1
    print_error.assert_called_once()
    assert print_error.call_args.args[0] == expected
    assert print_error.call_args.args[0] != unexpected


def test_transport_error_exit_code(runner, mock_settings, mock_client):
    mock_client.instance.list_entries.return_value = LogListResult(
        status=500, status_text="backend unavailable"
    )

    result = runner.invoke(app, ["logs"])

    assert result.exit_code == 1
    assert "(500) Error: backend unavailable" in result.stdout


def test_watch_uses_poll_interval_option(runner, mock_settings, mock_client):
    with patch("cloudtail.cli.commands.logs.main.LogPoller") as poller_cls:
        poller_cls.return_value.run_watch = AsyncMock()
        result = runner.invoke(app, ["logs", "--watch", "--poll-interval", "2500"])

    assert result.exit_code == 0, result.stdout
    poller_cls.return_value.run_watch.assert_awaited_once_with(2500)


def test_watch_defaults_to_settings_interval(runner, mock_settings, mock_client):
    mock_settings.POLL_INTERVAL_MS = 6000
    with patch("cloudtail.cli.commands.logs.main.LogPoller") as poller_cls:
        poller_cls.return_value.run_watch = AsyncMock()
        result = runner.invoke(app, ["logs", "-w"])

    assert result.exit_code == 0, result.stdout
    poller_cls.return_value.run_watch.assert_awaited_once_with(6000)


def test_watch_rejects_zero_interval(runner, mock_settings, mock_client):
    result = runner.invoke(app, ["logs", "--watch", "--poll-interval", "0"])
    assert result.exit_code != 0


def test_watch_interrupted_by_user(runner, mock_settings, mock_client):
    with patch("cloudtail.cli.commands.logs.main.LogPoller") as poller_cls:
        poller_cls.return_value.run_watch = AsyncMock(side_effect=KeyboardInterrupt)
        result = runner.invoke(app, ["logs", "--watch"])

    assert result.exit_code == 0
    assert "Stopped watching logs" in result.stdout


def test_open_launches_browser(runner, mock_settings, mock_client):
    with patch("cloudtail.cli.commands.logs.main.webbrowser.open") as browser_open:
        result = runner.invoke(app, ["logs", "--open", "--project", "my-project"])

    assert result.exit_code == 0, result.stdout
    browser_open.assert_called_once_with(
        "https://console.cloud.google.com/logs/viewer?project=my-project"
    )
    mock_client.instance.list_entries.assert_not_called()


@pytest.mark.parametrize("interval", [0, -500])
def test_watch_rejects_non_positive_settings_interval(
    runner, mock_settings, mock_client, interval
):
    mock_settings.POLL_INTERVAL_MS = interval
    with patch("cloudtail.cli.commands.logs.main.LogPoller") as poller_cls:
        poller_cls.return_value.run_watch = AsyncMock()
        result = runner.invoke(app, ["logs", "--watch"])

    assert result.exit_code == 2
    assert "Poll interval must be a positive" in result.stdout
    poller_cls.return_value.run_watch.assert_not_called()
