"""REST transport models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from clean_framework.domain.enums import RestResponseType


class RestResponse(BaseModel):
    """Result of one REST call as reported by a REST client.

    Attributes:
        type: Classification of the attempt
        path: Resolved path that was requested
        content: Raw response body
    """

    model_config = ConfigDict(frozen=True)

    type: RestResponseType = Field(..., description="Classification of the attempt")
    path: str = Field(default="", description="Resolved path that was requested")
    content: str = Field(default="", description="Raw response body")
