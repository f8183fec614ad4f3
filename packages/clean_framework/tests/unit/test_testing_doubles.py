"""Unit tests for the shipped test doubles."""

from __future__ import annotations

import json

import pytest
from clean_framework.domain.enums import RestMethod, RestResponseType
from clean_framework.testing import RecordedRequest, RecordingResponseHandler, RestApiMock


class TestRestApiMock:
    """Tests for RestApiMock."""

    @pytest.mark.asyncio
    async def test_records_requests(self) -> None:
        """Test that calls are recorded and answered with the fixed response."""
        rest_api = RestApiMock(RestResponseType.CONFLICT, content={"reason": "taken"})

        response = await rest_api.request(RestMethod.PUT, "users/1", {"name": "ada"})

        assert response.type is RestResponseType.CONFLICT
        assert response.path == "users/1"
        assert json.loads(response.content) == {"reason": "taken"}
        assert rest_api.requests == [RecordedRequest(RestMethod.PUT, "users/1", {"name": "ada"})]

    @pytest.mark.asyncio
    async def test_string_content_kept_verbatim(self) -> None:
        """Test that string bodies are not re-encoded."""
        response = await RestApiMock(content="not json").request(RestMethod.GET, "x")

        assert response.content == "not json"


class TestRecordingResponseHandler:
    """Tests for RecordingResponseHandler."""

    def test_records_and_resets(self) -> None:
        """Test that calls are stored and can be forgotten."""
        handler: RecordingResponseHandler[str] = RecordingResponseHandler()

        handler.on_error(RestResponseType.FORBIDDEN, "denied")
        handler.on_no_connectivity()

        assert handler.calls == ["on_error", "on_no_connectivity"]
        assert handler.error_type is RestResponseType.FORBIDDEN
        assert handler.error_response == "denied"
        assert handler.is_offline is True

        handler.reset()

        assert handler.calls == []
        assert handler.error_type is None
        assert handler.is_offline is False
