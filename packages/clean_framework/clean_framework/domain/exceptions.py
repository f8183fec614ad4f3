"""Domain-specific exceptions for clean_framework.

Data conditions met while serving a request (offline, bad path data, HTTP
errors, unparsable responses) are never raised to callers; they are routed to
a response handler. The exceptions below cover programming mistakes and
misuse of the framework's primitives.
"""

from typing import Any


class CleanFrameworkError(Exception):
    """Base exception for all clean_framework errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code for programmatic handling
            details: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(CleanFrameworkError):
    """Raised when a component is wired with invalid configuration."""

    def __init__(self, message: str, config_key: str | None = None, **kwargs: Any) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            config_key: Configuration key that is wrong or missing
            **kwargs: Additional error details
        """
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, error_code="CONFIGURATION_ERROR", details=details)


class ServiceConfigurationError(ConfigurationError):
    """Raised when a JSON service is constructed without a mandatory collaborator."""

    def __init__(self, service_name: str, missing: str, **kwargs: Any) -> None:
        """
        Initialize service configuration error.

        Args:
            service_name: Class name of the service being constructed
            missing: Name of the absent or invalid argument
            **kwargs: Additional error details
        """
        super().__init__(
            f"{service_name} requires a valid '{missing}'",
            config_key=missing,
            details={"service_name": service_name, **kwargs.pop("details", {})},
        )
        self.error_code = "SERVICE_CONFIGURATION_ERROR"


class PipeError(CleanFrameworkError):
    """Raised when a pipe is used in a way its type does not support."""

    def __init__(self, message: str, pipe_type: str | None = None, **kwargs: Any) -> None:
        """
        Initialize pipe error.

        Args:
            message: Error message
            pipe_type: Class name of the pipe involved
            **kwargs: Additional error details
        """
        details = kwargs.pop("details", {})
        if pipe_type:
            details["pipe_type"] = pipe_type
        super().__init__(message, error_code="PIPE_ERROR", details=details)


class PipeListenError(PipeError):
    """Raised when a single-consumer pipe gets a second listener."""

    def __init__(self, pipe_type: str) -> None:
        """
        Initialize pipe listen error.

        Args:
            pipe_type: Class name of the pipe involved
        """
        super().__init__(
            f"{pipe_type} has already been listened to; use a broadcast pipe for "
            "multiple listeners",
            pipe_type=pipe_type,
        )
        self.error_code = "PIPE_ALREADY_LISTENED"


class ResponseParseError(CleanFrameworkError):
    """Raised when a response body cannot be turned into a response model."""

    def __init__(self, content: str, reason: str, **kwargs: Any) -> None:
        """
        Initialize response parse error.

        Args:
            content: Raw response body
            reason: Why decoding or model construction failed
            **kwargs: Additional error details
        """
        details = {"content": content, "reason": reason, **kwargs.pop("details", {})}
        super().__init__(
            f"Invalid response: {reason}", error_code="INVALID_RESPONSE", details=details
        )
        self.content = content


class RestClientError(CleanFrameworkError):
    """Raised when a REST client is misused, for example after it was closed."""

    def __init__(self, message: str, path: str | None = None, **kwargs: Any) -> None:
        """
        Initialize REST client error.

        Args:
            message: Error message
            path: Request path involved
            **kwargs: Additional error details
        """
        details = kwargs.pop("details", {})
        if path:
            details["path"] = path
        super().__init__(message, error_code="REST_CLIENT_ERROR", details=details)
