"""Abstract interface for consumers of JSON service outcomes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from clean_framework.domain.enums import RestResponseType

M = TypeVar("M")


class JsonServiceResponseHandler(ABC, Generic[M]):
    """Receives the single terminal outcome of each JSON service request.

    Exactly one of these methods is called per request. Implementations decide
    how the UI or application state reacts.
    """

    @abstractmethod
    def on_success(self, response_model: M) -> None:
        """The response was parsed into a model."""
        pass

    @abstractmethod
    def on_error(self, response_type: RestResponseType, response: str) -> None:
        """The REST client reported a non-success classification."""
        pass

    @abstractmethod
    def on_invalid_request(self, request_json: dict[str, Any] | None) -> None:
        """The request mapping contains nulls or fields the request cannot carry."""
        pass

    @abstractmethod
    def on_missing_path_data(self, request_json: dict[str, Any] | None) -> None:
        """A path variable could not be filled from the request mapping."""
        pass

    @abstractmethod
    def on_invalid_response(self, response: str) -> None:
        """The response body is not JSON or does not fit the response model."""
        pass

    @abstractmethod
    def on_no_connectivity(self) -> None:
        """The device is offline; no request was attempted."""
        pass
