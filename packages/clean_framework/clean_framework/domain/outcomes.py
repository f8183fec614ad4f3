"""Terminal outcomes of a JSON service request.

Every call to `JsonService.request` ends in exactly one of these variants. The
same value is delivered to the service's response handler and returned to the
caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .enums import RestResponseType

M = TypeVar("M")


@dataclass(frozen=True)
class Success(Generic[M]):
    """The response was parsed into a model."""

    model: M


@dataclass(frozen=True)
class HttpError:
    """The REST client reported anything other than success."""

    response_type: RestResponseType
    content: str


@dataclass(frozen=True)
class InvalidRequest:
    """The request mapping has nulls or fields the request cannot carry."""

    request_json: dict[str, Any] | None


@dataclass(frozen=True)
class MissingPathData:
    """A path variable has no value in the request mapping."""

    request_json: dict[str, Any] | None


@dataclass(frozen=True)
class InvalidResponse:
    """The response body is not JSON or does not fit the response model."""

    content: str


@dataclass(frozen=True)
class Offline:
    """The connectivity checker reported no network."""


ServiceOutcome = (
    Success[Any] | HttpError | InvalidRequest | MissingPathData | InvalidResponse | Offline
)
