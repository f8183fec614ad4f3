"""REST client backed by httpx."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from clean_framework.domain.enums import RestMethod, RestResponseType
from clean_framework.domain.exceptions import RestClientError
from clean_framework.domain.interfaces import RestApi
from clean_framework.infrastructure.logging import get_logger
from clean_framework.models import JsonMapping, RestResponse

if TYPE_CHECKING:
    from clean_framework.config import RestConfig

logger = get_logger(__name__)


class HttpxRestApi(RestApi):
    """Sends JSON requests with an `httpx.AsyncClient`.

    Paths are resolved against the base URL. HTTP status codes and transport
    failures are turned into a `RestResponseType`; nothing is raised for them.

    The client should be closed when no longer needed, either with `aclose`
    or by using the instance as an async context manager.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the REST client.

        Args:
            base_url: URL prepended to every request path
            timeout: Request timeout in seconds
            headers: Headers sent with every request
            client: Pre-built httpx client; base_url, timeout and headers are
                ignored when given
        """
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers=headers or {},
        )
        self._closed = False

    @classmethod
    def from_config(cls, config: RestConfig) -> HttpxRestApi:
        """Build a client from the REST configuration section."""
        return cls(base_url=config.base_url, timeout=config.timeout, headers=config.headers)

    @property
    def is_closed(self) -> bool:
        """Whether the underlying client was closed."""
        return self._closed

    async def __aenter__(self) -> HttpxRestApi:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if not self._closed:
            await self._client.aclose()
            self._closed = True

    async def request(
        self,
        method: RestMethod,
        path: str,
        request_body: JsonMapping | None = None,
    ) -> RestResponse:
        if self._closed:
            raise RestClientError("Request on a closed REST client", path=path)

        kwargs: dict[str, Any] = {}
        if method.has_body and request_body is not None:
            kwargs["json"] = request_body

        try:
            response = await self._client.request(method.value, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(
                "REST request timed out",
                extra={"method": method.value, "path": path, "error": str(e)},
            )
            return RestResponse(type=RestResponseType.TIMEOUT, path=path, content="")
        except httpx.RequestError as e:
            # Includes redirect loops and undecodable bodies
            logger.warning(
                "REST request failed",
                extra={"method": method.value, "path": path, "error": str(e)},
            )
            return RestResponse(type=RestResponseType.UNKNOWN, path=path, content="")

        response_type = RestResponseType.from_status_code(response.status_code)
        logger.debug(
            "REST request completed",
            extra={
                "method": method.value,
                "path": path,
                "status_code": response.status_code,
                "response_type": response_type.value,
            },
        )
        return RestResponse(type=response_type, path=path, content=response.text)
