"""Shared data models for clean_framework."""

from __future__ import annotations

from .json_models import JsonMapping, JsonRequestModel, JsonResponseModel, SupportsToJson
from .rest_models import RestResponse
from .view_model import ViewModel

__all__ = [
    "JsonMapping",
    "JsonRequestModel",
    "JsonResponseModel",
    "RestResponse",
    "SupportsToJson",
    "ViewModel",
]
