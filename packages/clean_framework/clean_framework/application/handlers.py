"""Routing JSON service outcomes to response handlers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from clean_framework.application.pipes import Pipe
from clean_framework.domain.enums import RestResponseType
from clean_framework.domain.interfaces import JsonServiceResponseHandler
from clean_framework.domain.outcomes import (
    HttpError,
    InvalidRequest,
    InvalidResponse,
    MissingPathData,
    Offline,
    ServiceOutcome,
    Success,
)

M = TypeVar("M")


def deliver(outcome: ServiceOutcome, handler: JsonServiceResponseHandler[Any]) -> None:
    """Call the handler method matching an outcome.

    Args:
        outcome: Terminal outcome of a request
        handler: Handler receiving it

    Raises:
        TypeError: If the outcome is not a known variant
    """
    if isinstance(outcome, Success):
        handler.on_success(outcome.model)
    elif isinstance(outcome, HttpError):
        handler.on_error(outcome.response_type, outcome.content)
    elif isinstance(outcome, InvalidRequest):
        handler.on_invalid_request(outcome.request_json)
    elif isinstance(outcome, MissingPathData):
        handler.on_missing_path_data(outcome.request_json)
    elif isinstance(outcome, InvalidResponse):
        handler.on_invalid_response(outcome.content)
    elif isinstance(outcome, Offline):
        handler.on_no_connectivity()
    else:
        raise TypeError(f"Unknown service outcome: {outcome!r}")


class CallbackResponseHandler(JsonServiceResponseHandler[M], Generic[M]):
    """Funnels every handler method into a single callback taking the outcome."""

    def __init__(self, callback: Callable[[ServiceOutcome], None]) -> None:
        self._callback = callback

    def on_success(self, response_model: M) -> None:
        self._callback(Success(response_model))

    def on_error(self, response_type: RestResponseType, response: str) -> None:
        self._callback(HttpError(response_type, response))

    def on_invalid_request(self, request_json: dict[str, Any] | None) -> None:
        self._callback(InvalidRequest(request_json))

    def on_missing_path_data(self, request_json: dict[str, Any] | None) -> None:
        self._callback(MissingPathData(request_json))

    def on_invalid_response(self, response: str) -> None:
        self._callback(InvalidResponse(response))

    def on_no_connectivity(self) -> None:
        self._callback(Offline())


class PipeResponseHandler(CallbackResponseHandler[M]):
    """Sends every outcome into a pipe, e.g. one a presenter listens to."""

    def __init__(self, pipe: Pipe[ServiceOutcome]) -> None:
        super().__init__(self._send)
        self._pipe = pipe

    @property
    def pipe(self) -> Pipe[ServiceOutcome]:
        """Pipe receiving the outcomes."""
        return self._pipe

    def _send(self, outcome: ServiceOutcome) -> None:
        self._pipe.send(outcome)
