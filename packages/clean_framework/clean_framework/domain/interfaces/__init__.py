"""Domain interfaces for clean_framework.

This module contains abstract interfaces for the collaborators a JSON
service calls into.
"""

from __future__ import annotations

from .connectivity import Connectivity, ConnectivityListener
from .response_handler import JsonServiceResponseHandler
from .rest_api import RestApi

__all__ = ["Connectivity", "ConnectivityListener", "JsonServiceResponseHandler", "RestApi"]
