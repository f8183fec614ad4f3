"""Request and response models exchanged with JSON services."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, Self, runtime_checkable

from pydantic import BaseModel, ConfigDict, JsonValue

JsonMapping = dict[str, JsonValue]


@runtime_checkable
class SupportsToJson(Protocol):
    """Anything that can describe itself as a JSON object.

    JSON services accept any object with this capability as a request model,
    regardless of its base class.
    """

    def to_json(self) -> JsonMapping:
        """Return the request as a mapping of field name to JSON value."""
        ...


class JsonRequestModel(BaseModel):
    """Base class for typed request models.

    Fields left as None stay in the mapping returned by `to_json`, so that a
    JSON service can tell a partially populated request from a complete one.
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_json(self) -> JsonMapping:
        """Return the request as a mapping of field name to JSON value."""
        return self.model_dump(mode="json", by_alias=True)


class JsonResponseModel(BaseModel):
    """Base class for typed response models.

    Unknown keys in the response body are ignored. A body that does not
    satisfy the declared fields raises `pydantic.ValidationError` from
    `from_json`.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Self:
        """Build the model from a decoded JSON object."""
        return cls.model_validate(dict(data))
