"""Declarative JSON REST services.

A `JsonService` binds an HTTP verb and a path template to a REST client and
a response handler. Each call to `request` runs the full lifecycle:

1. connectivity check
2. path resolution and request validation
3. dispatch through the REST client
4. response classification
5. JSON decoding
6. response model construction

and reports exactly one outcome to the handler.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from clean_framework.application.handlers import deliver
from clean_framework.application.path_template import (
    find_null_fields,
    resolve_path,
    unconsumed_fields,
)
from clean_framework.domain.enums import ConnectivityStatus, RestMethod, RestResponseType
from clean_framework.domain.exceptions import ResponseParseError, ServiceConfigurationError
from clean_framework.domain.interfaces import Connectivity, JsonServiceResponseHandler, RestApi
from clean_framework.domain.outcomes import (
    HttpError,
    InvalidRequest,
    InvalidResponse,
    MissingPathData,
    Offline,
    ServiceOutcome,
    Success,
)
from clean_framework.infrastructure.connectivity import AlwaysOnlineConnectivity
from clean_framework.infrastructure.logging import get_logger
from clean_framework.models import SupportsToJson

logger = get_logger(__name__)

M = TypeVar("M")


class JsonService(ABC, Generic[M]):
    """Base class for one JSON endpoint.

    Subclasses implement `parse_response` to turn a decoded JSON object into
    their response model:

        class UserService(JsonService[User]):
            def parse_response(self, json_response):
                return User.from_json(json_response)

        service = UserService(handler, RestMethod.GET, "users/{id}", rest_api)
        await service.request(UserRequest(id="42"))

    A service holds no per-request state and can be reused for any number of
    requests.
    """

    def __init__(
        self,
        handler: JsonServiceResponseHandler[M] | None,
        method: RestMethod | str | None,
        path: str | None,
        rest_api: RestApi | None,
        connectivity: Connectivity | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            handler: Receives the outcome of every request
            method: HTTP verb
            path: Path template with optional `{name}` placeholders
            rest_api: REST client used for dispatch
            connectivity: Connectivity checker, always online when omitted

        Raises:
            ServiceConfigurationError: If a mandatory argument is absent or invalid
        """
        service_name = type(self).__name__
        if handler is None:
            raise ServiceConfigurationError(service_name, "handler")
        if method is None:
            raise ServiceConfigurationError(service_name, "method")
        try:
            method = RestMethod(method.upper() if isinstance(method, str) else method)
        except ValueError as e:
            raise ServiceConfigurationError(
                service_name, "method", details={"method": str(method)}
            ) from e
        if not path:
            raise ServiceConfigurationError(service_name, "path")
        if rest_api is None:
            raise ServiceConfigurationError(service_name, "rest_api")

        self._handler = handler
        self._method = method
        self._path = path
        self._rest_api = rest_api
        self._connectivity = connectivity or AlwaysOnlineConnectivity()

    @property
    def handler(self) -> JsonServiceResponseHandler[M]:
        """Handler receiving the outcomes."""
        return self._handler

    @property
    def method(self) -> RestMethod:
        """HTTP verb."""
        return self._method

    @property
    def path(self) -> str:
        """Path template."""
        return self._path

    @property
    def rest_api(self) -> RestApi:
        """REST client used for dispatch."""
        return self._rest_api

    @abstractmethod
    def parse_response(self, json_response: dict[str, Any]) -> M:
        """Build the response model from a decoded JSON object.

        Raise `ValueError` (pydantic's `ValidationError` included), `TypeError`
        or `KeyError` when the object does not fit the model.
        """
        pass

    async def request(self, request_model: SupportsToJson | None = None) -> ServiceOutcome:
        """Run one request and report its outcome to the handler.

        Args:
            request_model: Source of path variables and request body

        Returns:
            The outcome that was delivered to the handler
        """
        outcome = await self._execute(request_model)
        deliver(outcome, self._handler)
        return outcome

    async def _execute(self, request_model: SupportsToJson | None) -> ServiceOutcome:
        context = {"service": type(self).__name__, "method": self._method.value}

        status = await self._connectivity.get_connectivity_status()
        if status is ConnectivityStatus.OFFLINE:
            logger.info("Request skipped, no connectivity", extra={**context, "path": self._path})
            return Offline()

        request_json = request_model.to_json() if request_model is not None else None

        resolution = resolve_path(self._path, request_json)
        if not resolution.is_complete:
            logger.debug(
                "Request is missing path data",
                extra={**context, "path": self._path, "missing": list(resolution.missing)},
            )
            return MissingPathData(request_json)

        if request_json is not None:
            null_fields = find_null_fields(request_json)
            if null_fields:
                logger.debug(
                    "Request has null fields",
                    extra={**context, "path": self._path, "null_fields": null_fields},
                )
                return InvalidRequest(request_json)

            if not self._method.has_body:
                unused = unconsumed_fields(request_json, resolution)
                if unused:
                    logger.debug(
                        "Request has fields a body-less request cannot carry",
                        extra={**context, "path": self._path, "unused_fields": unused},
                    )
                    return InvalidRequest(request_json)

        response = await self._rest_api.request(self._method, resolution.path, request_json)
        context["path"] = resolution.path

        if response.type is not RestResponseType.SUCCESS:
            logger.info(
                "Request failed",
                extra={**context, "response_type": response.type.value},
            )
            return HttpError(response.type, response.content)

        try:
            model = self._parse_content(response.content)
        except ResponseParseError as e:
            logger.debug("Invalid response", extra={**context, "reason": e.details["reason"]})
            return InvalidResponse(response.content)

        logger.debug("Request succeeded", extra=context)
        return Success(model)

    def _parse_content(self, content: str) -> M:
        try:
            decoded = json.loads(content)
        except ValueError as e:
            raise ResponseParseError(content, f"body is not valid JSON: {e}") from e

        if not isinstance(decoded, dict):
            raise ResponseParseError(content, "body is not a JSON object")

        try:
            return self.parse_response(decoded)
        except (ValueError, TypeError, KeyError) as e:
            raise ResponseParseError(content, f"body does not fit the response model: {e}") from e
