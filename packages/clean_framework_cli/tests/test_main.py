"""Tests for CLI main module."""

import os
from collections.abc import Iterator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from clean_framework import ConnectivityStatus, RestMethod, RestResponseType, __version__
from clean_framework.config import get_config, reload_config
from clean_framework.infrastructure.connectivity import StaticConnectivity
from clean_framework.testing import RestApiMock
from clean_framework_cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture(autouse=True)
def mock_setup_logging() -> Iterator[MagicMock]:
    """Keep the CLI from reconfiguring the root logger during tests."""
    with patch("clean_framework_cli.main.setup_logging") as mock:
        yield mock


def invoke_request(rest_api: RestApiMock, *args: str) -> tuple[Any, MagicMock]:
    """Run the request command against a mock REST client."""
    with patch("clean_framework_cli.main._build_rest_api", return_value=rest_api) as build:
        result = runner.invoke(app, ["request", *args])
    return result, build


class TestCLICommands:
    """Test CLI commands."""

    def test_version_command(self) -> None:
        """Test version command."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert f"clean_framework version {__version__}" in result.stdout

    def test_help_command(self) -> None:
        """Test help command."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "version" in result.stdout
        assert "request" in result.stdout
        assert "connectivity" in result.stdout

    def test_invalid_command(self) -> None:
        """Test invalid command."""
        result = runner.invoke(app, ["invalid"])

        assert result.exit_code != 0

    def test_log_level_option(self, mock_setup_logging: MagicMock) -> None:
        """Test that the global option reaches the logging setup."""
        result = runner.invoke(app, ["--log-level", "DEBUG", "version"])

        assert result.exit_code == 0
        config = mock_setup_logging.call_args.args[0]
        assert config.level.value == "DEBUG"

    def test_log_level_from_environment(self, mock_setup_logging: MagicMock) -> None:
        """Test that the configured level applies when the option is omitted."""
        with patch.dict(os.environ, {"CLEAN_FRAMEWORK_LOGGING__LEVEL": "ERROR"}):
            reload_config()
            try:
                result = runner.invoke(app, ["version"])
            finally:
                get_config.cache_clear()

        assert result.exit_code == 0
        config = mock_setup_logging.call_args.args[0]
        assert config.level.value == "ERROR"

    def test_log_level_option_beats_environment(self, mock_setup_logging: MagicMock) -> None:
        """Test that an explicit option wins over the configured level."""
        with patch.dict(os.environ, {"CLEAN_FRAMEWORK_LOGGING__LEVEL": "ERROR"}):
            reload_config()
            try:
                result = runner.invoke(app, ["--log-level", "DEBUG", "version"])
            finally:
                get_config.cache_clear()

        assert result.exit_code == 0
        assert mock_setup_logging.call_args.args[0].level.value == "DEBUG"


class TestRequestCommand:
    """Test the request command."""

    def test_get_success(self) -> None:
        """Test a successful GET prints the decoded body."""
        rest_api = RestApiMock(content={"id": 1, "name": "ada"})

        result, build = invoke_request(rest_api, "get", "users/{id}", "-d", '{"id": 1}')

        assert result.exit_code == 0
        assert '"name": "ada"' in result.stdout
        build.assert_called_once_with(None)
        assert rest_api.requests[0].method is RestMethod.GET
        assert rest_api.requests[0].path == "users/1"

    def test_base_url_override(self) -> None:
        """Test that --base-url is handed to the client factory."""
        result, build = invoke_request(
            RestApiMock(content={}), "DELETE", "users/1", "--base-url", "https://x.example"
        )

        assert result.exit_code == 0
        build.assert_called_once_with("https://x.example")

    def test_http_error(self) -> None:
        """Test that an error status exits non-zero."""
        rest_api = RestApiMock(RestResponseType.NOT_FOUND, content="no such user")

        result, _ = invoke_request(rest_api, "GET", "users/9")

        assert result.exit_code == 1
        assert "Request failed (not_found): no such user" in result.stdout

    def test_missing_path_data(self) -> None:
        """Test a template whose variable has no value."""
        rest_api = RestApiMock(content={})

        result, _ = invoke_request(rest_api, "GET", "users/{id}")

        assert result.exit_code == 1
        assert "Missing path data" in result.stdout
        assert rest_api.requests == []

    def test_unsupported_method(self) -> None:
        """Test that unknown verbs are rejected before any request."""
        rest_api = RestApiMock()

        result, build = invoke_request(rest_api, "TRACE", "users")

        assert result.exit_code == 2
        assert "Unsupported method: TRACE" in result.output
        build.assert_not_called()

    @pytest.mark.parametrize("data", ["{not json", "[1, 2]"])
    def test_bad_data(self, data: str) -> None:
        """Test that --data must be a JSON object."""
        result, build = invoke_request(RestApiMock(), "POST", "users", "--data", data)

        assert result.exit_code == 2
        assert "--data" in result.output
        build.assert_not_called()

    def test_offline_check(self) -> None:
        """Test that --check-connectivity short-circuits when offline."""
        rest_api = RestApiMock(content={})
        offline = StaticConnectivity(ConnectivityStatus.OFFLINE)

        with patch("clean_framework_cli.main._build_connectivity", return_value=offline):
            result, _ = invoke_request(rest_api, "GET", "users", "--check-connectivity")

        assert result.exit_code == 1
        assert "No connectivity" in result.stdout
        assert rest_api.requests == []


class TestConnectivityCommand:
    """Test the connectivity command."""

    @pytest.mark.parametrize(
        ("status", "exit_code"),
        [(ConnectivityStatus.ONLINE, 0), (ConnectivityStatus.OFFLINE, 1)],
    )
    def test_reports_status(self, status: ConnectivityStatus, exit_code: int) -> None:
        """Test that the probed status is printed."""
        with patch(
            "clean_framework_cli.main._build_connectivity",
            return_value=StaticConnectivity(status),
        ):
            result = runner.invoke(app, ["connectivity"])

        assert result.exit_code == exit_code
        assert status.value in result.stdout
