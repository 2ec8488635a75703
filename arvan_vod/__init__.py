from importlib.metadata import PackageNotFoundError, version

__version__ = "1.0.0"

try:
    __version__ = version("arvan-vod")
except PackageNotFoundError:
    pass

# Pipeline imports
from arvan_vod._api_requester import APIRequester
from arvan_vod._body_encoder import BodyEncoder, EncodedBody, sanitize_for_serialization, to_string
from arvan_vod._header_setup import HeaderSetup

# HTTP-related imports
from arvan_vod._http_client import HTTPClient, HTTPRequest, HTTPResponse
from arvan_vod._request_builder import RequestBuilder, build_route
from arvan_vod._response_decoder import decode_body

# Client and config-related imports
from arvan_vod._vod_client import VodClient
from arvan_vod._vod_config import VodConfig
from arvan_vod._vod_logging import LoggerConfig
from arvan_vod._vod_models import BaseModel, BodyKind, OperationParams
from arvan_vod.exceptions import (
    ApiError,
    ConfigurationError,
    FileAccessError,
    HttpStatusError,
    TransportError,
)

__all__ = [
    "APIRequester",
    "ApiError",
    "BaseModel",
    "BodyEncoder",
    "BodyKind",
    "ConfigurationError",
    "EncodedBody",
    "FileAccessError",
    "HTTPClient",
    "HTTPRequest",
    "HTTPResponse",
    "HeaderSetup",
    "HttpStatusError",
    "LoggerConfig",
    "OperationParams",
    "RequestBuilder",
    "TransportError",
    "VodClient",
    "VodConfig",
    "build_route",
    "decode_body",
    "sanitize_for_serialization",
    "to_string",
]
