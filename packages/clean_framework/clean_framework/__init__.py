"""clean_framework: pipes, JSON services and view models for layered apps."""

from __future__ import annotations

from .application.handlers import CallbackResponseHandler, PipeResponseHandler, deliver
from .application.json_service import JsonService
from .application.pipes import (
    BroadcastEventPipe,
    BroadcastPipe,
    BroadcastPipeWithListener,
    EventPipe,
    Pipe,
    PipeReceiver,
    Subscription,
    ValidatorPipe,
    ViewModelBroadcastPipe,
    ViewModelPipe,
)
from .domain.enums import ConnectivityStatus, RestMethod, RestResponseType
from .domain.exceptions import (
    CleanFrameworkError,
    ConfigurationError,
    PipeError,
    PipeListenError,
    ResponseParseError,
    RestClientError,
    ServiceConfigurationError,
)
from .domain.interfaces import Connectivity, JsonServiceResponseHandler, RestApi
from .domain.outcomes import (
    HttpError,
    InvalidRequest,
    InvalidResponse,
    MissingPathData,
    Offline,
    ServiceOutcome,
    Success,
)
from .infrastructure.connectivity import (
    AlwaysOnlineConnectivity,
    HttpProbeConnectivity,
    StaticConnectivity,
)
from .infrastructure.rest import HttpxRestApi
from .models import (
    JsonMapping,
    JsonRequestModel,
    JsonResponseModel,
    RestResponse,
    SupportsToJson,
    ViewModel,
)

__version__ = "0.1.0"

__all__ = [
    "AlwaysOnlineConnectivity",
    "BroadcastEventPipe",
    "BroadcastPipe",
    "BroadcastPipeWithListener",
    "CallbackResponseHandler",
    "CleanFrameworkError",
    "ConfigurationError",
    "Connectivity",
    "ConnectivityStatus",
    "EventPipe",
    "HttpError",
    "HttpProbeConnectivity",
    "HttpxRestApi",
    "InvalidRequest",
    "InvalidResponse",
    "JsonMapping",
    "JsonRequestModel",
    "JsonResponseModel",
    "JsonService",
    "JsonServiceResponseHandler",
    "MissingPathData",
    "Offline",
    "Pipe",
    "PipeError",
    "PipeListenError",
    "PipeReceiver",
    "PipeResponseHandler",
    "ResponseParseError",
    "RestApi",
    "RestClientError",
    "RestMethod",
    "RestResponse",
    "RestResponseType",
    "ServiceConfigurationError",
    "ServiceOutcome",
    "StaticConnectivity",
    "Subscription",
    "Success",
    "SupportsToJson",
    "ValidatorPipe",
    "ViewModel",
    "ViewModelBroadcastPipe",
    "ViewModelPipe",
    "deliver",
]
