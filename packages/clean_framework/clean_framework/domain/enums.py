"""Domain enums for clean_framework."""

from __future__ import annotations

from enum import Enum


class RestMethod(Enum):
    """HTTP verbs supported by the REST layer."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        """Whether requests with this verb carry a JSON body."""
        return self not in (RestMethod.GET, RestMethod.DELETE)


class RestResponseType(Enum):
    """Classification of the outcome of a single network attempt."""

    SUCCESS = "success"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    TIMEOUT = "timeout"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    UNKNOWN = "unknown"

    @classmethod
    def from_status_code(cls, status_code: int) -> RestResponseType:
        """Classify an HTTP status code.

        Args:
            status_code: Status code reported by the server

        Returns:
            The matching response type, UNKNOWN for codes outside 2xx-5xx
        """
        if 200 <= status_code < 300:
            return cls.SUCCESS
        if status_code in _CLIENT_ERROR_CODES:
            return _CLIENT_ERROR_CODES[status_code]
        if 400 <= status_code < 500:
            return cls.BAD_REQUEST
        if 500 <= status_code < 600:
            return cls.INTERNAL_SERVER_ERROR
        return cls.UNKNOWN

    @property
    def is_client_error(self) -> bool:
        """Whether the request was rejected as a client-side problem."""
        return self in _CLIENT_ERROR_CODES.values() or self is RestResponseType.BAD_REQUEST

    @property
    def is_server_error(self) -> bool:
        """Whether the server failed to handle the request."""
        return self is RestResponseType.INTERNAL_SERVER_ERROR


_CLIENT_ERROR_CODES: dict[int, RestResponseType] = {
    400: RestResponseType.BAD_REQUEST,
    401: RestResponseType.UNAUTHORIZED,
    403: RestResponseType.FORBIDDEN,
    404: RestResponseType.NOT_FOUND,
    408: RestResponseType.TIMEOUT,
    409: RestResponseType.CONFLICT,
}


class ConnectivityStatus(Enum):
    """Network reachability reported by a connectivity checker."""

    ONLINE = "online"
    OFFLINE = "offline"
