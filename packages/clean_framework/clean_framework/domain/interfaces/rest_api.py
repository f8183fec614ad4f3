"""Abstract interface for REST clients."""

from __future__ import annotations

from abc import ABC, abstractmethod

from clean_framework.domain.enums import RestMethod
from clean_framework.models import JsonMapping, RestResponse


class RestApi(ABC):
    """Performs one HTTP call and classifies the result.

    Implementations never raise for HTTP or transport failures; they report
    them through `RestResponse.type` so that callers can route every outcome.
    """

    @abstractmethod
    async def request(
        self,
        method: RestMethod,
        path: str,
        request_body: JsonMapping | None = None,
    ) -> RestResponse:
        """Send a request.

        Args:
            method: HTTP verb.
            path: Resolved path, relative to the client's base URL.
            request_body: JSON object sent as the body for verbs that carry one.

        Returns:
            Classification of the attempt and the raw response body.
        """
        pass
