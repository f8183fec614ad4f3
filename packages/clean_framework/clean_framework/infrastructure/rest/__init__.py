"""REST client implementations."""

from __future__ import annotations

from .httpx_rest_api import HttpxRestApi

__all__ = ["HttpxRestApi"]
