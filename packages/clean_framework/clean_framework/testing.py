"""Test doubles for code built on clean_framework."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from clean_framework.domain.enums import ConnectivityStatus, RestMethod, RestResponseType
from clean_framework.domain.interfaces import JsonServiceResponseHandler, RestApi
from clean_framework.infrastructure.connectivity import StaticConnectivity
from clean_framework.models import JsonMapping, RestResponse

M = TypeVar("M")


@dataclass(frozen=True)
class RecordedRequest:
    """A call received by `RestApiMock`."""

    method: RestMethod
    path: str
    request_body: JsonMapping | None


class RestApiMock(RestApi):
    """REST client answering every request with a fixed response.

    Args:
        response_type: Classification returned for every request
        content: Body returned; mappings are encoded as JSON
    """

    def __init__(
        self,
        response_type: RestResponseType = RestResponseType.SUCCESS,
        content: str | Mapping[str, Any] = "",
    ) -> None:
        self.response_type = response_type
        self.content = content if isinstance(content, str) else json.dumps(dict(content))
        self.requests: list[RecordedRequest] = []

    async def request(
        self,
        method: RestMethod,
        path: str,
        request_body: JsonMapping | None = None,
    ) -> RestResponse:
        self.requests.append(RecordedRequest(method, path, request_body))
        return RestResponse(type=self.response_type, path=path, content=self.content)


class NoConnectivity(StaticConnectivity):
    """Connectivity checker that is always offline."""

    def __init__(self) -> None:
        super().__init__(ConnectivityStatus.OFFLINE)


class RecordingResponseHandler(JsonServiceResponseHandler[M], Generic[M]):
    """Handler that stores what it receives, for assertions."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Forget everything received so far."""
        self.calls: list[str] = []
        self.model: M | None = None
        self.error_type: RestResponseType | None = None
        self.error_response: str | None = None
        self.invalid_request_json: dict[str, Any] | None = None
        self.missing_path_json: dict[str, Any] | None = None
        self.invalid_response: str | None = None
        self.is_offline = False

    def on_success(self, response_model: M) -> None:
        self.calls.append("on_success")
        self.model = response_model

    def on_error(self, response_type: RestResponseType, response: str) -> None:
        self.calls.append("on_error")
        self.error_type = response_type
        self.error_response = response

    def on_invalid_request(self, request_json: dict[str, Any] | None) -> None:
        self.calls.append("on_invalid_request")
        self.invalid_request_json = request_json

    def on_missing_path_data(self, request_json: dict[str, Any] | None) -> None:
        self.calls.append("on_missing_path_data")
        self.missing_path_json = request_json

    def on_invalid_response(self, response: str) -> None:
        self.calls.append("on_invalid_response")
        self.invalid_response = response

    def on_no_connectivity(self) -> None:
        self.calls.append("on_no_connectivity")
        self.is_offline = True
