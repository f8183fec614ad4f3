"""Main entry point for the clean_framework CLI."""

import asyncio
import json
from typing import Any

import typer
from clean_framework import (
    Connectivity,
    ConnectivityStatus,
    HttpProbeConnectivity,
    HttpxRestApi,
    JsonResponseModel,
    JsonService,
    RestApi,
    RestMethod,
    ServiceOutcome,
    Success,
    __version__,
)
from clean_framework.application.handlers import CallbackResponseHandler
from clean_framework.config import get_config
from clean_framework.domain.outcomes import (
    HttpError,
    InvalidRequest,
    InvalidResponse,
    MissingPathData,
    Offline,
)
from clean_framework.infrastructure.logging import (
    LoggingConfig,
    LogLevel,
    get_logger,
    setup_logging,
)
from pydantic import ConfigDict

logger = get_logger(__name__)

app = typer.Typer(help="Run JSON service requests from the command line.")


class RawJsonResponse(JsonResponseModel):
    """Response model accepting any JSON object."""

    model_config = ConfigDict(extra="allow")


class RawJsonRequest:
    """Request model wrapping a plain mapping."""

    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data

    def to_json(self) -> dict[str, Any]:
        return self._data


class RawJsonService(JsonService[RawJsonResponse]):
    """JSON service returning the decoded body as-is."""

    def parse_response(self, json_response: dict[str, Any]) -> RawJsonResponse:
        return RawJsonResponse.from_json(json_response)


def _build_rest_api(base_url: str | None) -> RestApi:
    config = get_config().rest
    if base_url:
        config = config.model_copy(update={"base_url": base_url})
    return HttpxRestApi.from_config(config)


def _build_connectivity() -> Connectivity:
    return HttpProbeConnectivity.from_config(get_config().connectivity)


def _log_outcome(outcome: ServiceOutcome) -> None:
    logger.debug("Request finished", extra={"outcome": type(outcome).__name__})


def _describe(outcome: ServiceOutcome) -> str:
    if isinstance(outcome, Success):
        return json.dumps(outcome.model.model_dump(mode="json"), indent=2)
    if isinstance(outcome, HttpError):
        return f"Request failed ({outcome.response_type.value}): {outcome.content}"
    if isinstance(outcome, MissingPathData):
        return f"Missing path data in request: {outcome.request_json}"
    if isinstance(outcome, InvalidRequest):
        return f"Invalid request: {outcome.request_json}"
    if isinstance(outcome, InvalidResponse):
        return f"Invalid response: {outcome.content}"
    if isinstance(outcome, Offline):
        return "No connectivity"
    return repr(outcome)


async def _run_request(
    method: RestMethod,
    path: str,
    data: dict[str, Any] | None,
    rest_api: RestApi,
    connectivity: Connectivity | None,
) -> ServiceOutcome:
    service = RawJsonService(
        CallbackResponseHandler(_log_outcome),
        method,
        path,
        rest_api,
        connectivity=connectivity,
    )
    try:
        return await service.request(RawJsonRequest(data) if data is not None else None)
    finally:
        if isinstance(rest_api, HttpxRestApi):
            await rest_api.aclose()


@app.callback()  # type: ignore[misc]
def main(
    log_level: LogLevel | None = typer.Option(
        None, "--log-level", help="Log level, CLEAN_FRAMEWORK_LOGGING__LEVEL when omitted"
    ),
) -> None:
    """Configure logging for every command."""
    settings = get_config().logging
    setup_logging(
        LoggingConfig(level=log_level or settings.level, json_format=settings.json_format)
    )


@app.command()  # type: ignore[misc]
def version() -> None:
    """Show the clean_framework version."""
    typer.echo(f"clean_framework version {__version__}")


@app.command()  # type: ignore[misc]
def connectivity() -> None:
    """Check network connectivity with the configured probe."""
    status = asyncio.run(_build_connectivity().get_connectivity_status())
    typer.echo(status.value)
    if status is ConnectivityStatus.OFFLINE:
        raise typer.Exit(code=1)


@app.command()  # type: ignore[misc]
def request(
    method: str = typer.Argument(..., help="HTTP verb: GET, POST, PUT, PATCH or DELETE"),
    path: str = typer.Argument(..., help="Path template, e.g. users/{id}"),
    data: str | None = typer.Option(None, "--data", "-d", help="Request JSON object"),
    base_url: str | None = typer.Option(None, "--base-url", help="Override the base URL"),
    check_connectivity: bool = typer.Option(
        False, "--check-connectivity", help="Probe connectivity before sending"
    ),
) -> None:
    """Send a JSON request and print the outcome."""
    try:
        rest_method = RestMethod(method.upper())
    except ValueError:
        typer.echo(f"Unsupported method: {method}", err=True)
        raise typer.Exit(code=2) from None

    request_data: dict[str, Any] | None = None
    if data is not None:
        try:
            request_data = json.loads(data)
        except ValueError as e:
            typer.echo(f"--data is not valid JSON: {e}", err=True)
            raise typer.Exit(code=2) from None
        if not isinstance(request_data, dict):
            typer.echo("--data must be a JSON object", err=True)
            raise typer.Exit(code=2)

    outcome = asyncio.run(
        _run_request(
            rest_method,
            path,
            request_data,
            _build_rest_api(base_url),
            _build_connectivity() if check_connectivity else None,
        )
    )
    typer.echo(_describe(outcome))
    if not isinstance(outcome, Success):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
