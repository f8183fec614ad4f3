"""Unit tests for request, response and view models."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from clean_framework.domain.enums import RestResponseType
from clean_framework.models import (
    JsonRequestModel,
    JsonResponseModel,
    RestResponse,
    SupportsToJson,
    ViewModel,
)
from pydantic import Field, ValidationError


class ExampleViewModel(ViewModel):
    """View model used by the tests."""

    last_login: datetime
    login_count: int = 0


class CreateUserRequest(JsonRequestModel):
    """Request model used by the tests."""

    user_name: str = Field(alias="userName")
    age: int | None = None


class UserResponse(JsonResponseModel):
    """Response model used by the tests."""

    id: int
    name: str


class TestViewModel:
    """Tests for the ViewModel base."""

    def test_value_equality(self) -> None:
        """Test that equal fields mean equal view models."""
        when = datetime(2024, 5, 1, tzinfo=UTC)

        assert ExampleViewModel(last_login=when) == ExampleViewModel(last_login=when)
        assert ExampleViewModel(last_login=when) != ExampleViewModel(
            last_login=when, login_count=1
        )

    def test_immutable(self) -> None:
        """Test that fields cannot be reassigned."""
        view_model = ExampleViewModel(last_login=datetime(2024, 5, 1, tzinfo=UTC))

        with pytest.raises(ValidationError):
            view_model.login_count = 3  # type: ignore[misc]

    def test_unknown_fields_rejected(self) -> None:
        """Test that typos in field names are caught."""
        with pytest.raises(ValidationError):
            ExampleViewModel(last_login=datetime(2024, 5, 1, tzinfo=UTC), logins=1)  # type: ignore[call-arg]


class TestJsonModels:
    """Tests for JSON request and response models."""

    def test_request_to_json_keeps_nulls(self) -> None:
        """Test that unset optional fields stay in the mapping."""
        request = CreateUserRequest(user_name="ada")

        assert request.to_json() == {"userName": "ada", "age": None}
        assert isinstance(request, SupportsToJson)

    def test_plain_object_supports_to_json(self) -> None:
        """Test that any object with to_json qualifies."""

        class Plain:
            def to_json(self) -> dict[str, str]:
                return {"id": "1"}

        assert isinstance(Plain(), SupportsToJson)
        assert not isinstance({"id": "1"}, SupportsToJson)

    def test_response_from_json_ignores_extra(self) -> None:
        """Test decoding with extra keys."""
        response = UserResponse.from_json({"id": 7, "name": "ada", "extra": True})

        assert response == UserResponse(id=7, name="ada")

    def test_response_from_json_missing_field(self) -> None:
        """Test that incomplete data is rejected."""
        with pytest.raises(ValidationError):
            UserResponse.from_json({"id": 7})


class TestRestResponse:
    """Tests for the transport result model."""

    def test_defaults(self) -> None:
        """Test default path and content."""
        response = RestResponse(type=RestResponseType.NOT_FOUND)

        assert response.path == ""
        assert response.content == ""
