from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

from arvan_vod._body_encoder import BodyEncoder, build_query, to_string
from arvan_vod._header_setup import HeaderSetup
from arvan_vod._http_client import HTTPRequest
from arvan_vod._vod_config import VodConfig
from arvan_vod._vod_logging import get_logger
from arvan_vod._vod_models import JSON_CONTENT_TYPE, BodyKind, OperationParams

logger = get_logger(__name__)

READ_METHODS = ("GET",)


def build_route(route: str, key: str | None = None, value: Any = None) -> str:
    """
    Substitute the ``{key}`` placeholder of a route template with a percent-encoded value.

    >>> build_route("/channels/{channel}/videos", "channel", "abc 1")
    '/channels/abc%201/videos'
    """
    if key is None or value is None:
        return route
    return route.replace("{" + key + "}", quote(to_string(value), safe=""))


class RequestBuilder:
    """
    Assembles an ``HTTPRequest`` from an ``OperationParams``.

    The header negotiator resolves the body encoding strategy, the body encoder produces
    the body, then the API key and the explicit headers are merged in. A multipart body
    always keeps its boundary content type. Neither the parameters nor the configuration
    are modified.

    Attributes:
    ----------
    config: VodConfig
        Source of the host, the API key and the timeout.
    header_setup: HeaderSetup
        The content type negotiator.
    body_encoder: BodyEncoder
        The body encoder.
    default_headers: Mapping[str, str]
        Headers sent with every request, overridden by every other source.
    """

    def __init__(
        self,
        config: VodConfig,
        header_setup: HeaderSetup | None = None,
        body_encoder: BodyEncoder | None = None,
        default_headers: Mapping[str, str] | None = None,
    ):
        self.config = config
        self.header_setup = header_setup or HeaderSetup()
        self.body_encoder = body_encoder or BodyEncoder()
        self.default_headers = dict(default_headers or {})

    def query_params(self, params: OperationParams) -> dict[str, str]:
        candidates = {
            "filter": params.filter,
            "page": params.page,
            "per_page": params.per_page,
        }
        if params.method.upper() in READ_METHODS:
            candidates["secure_ip"] = params.secure_ip
            candidates["secure_expire_time"] = params.secure_expire_time

        return {key: to_string(value) for key, value in candidates.items() if value is not None}

    def negotiate_headers(self, params: OperationParams) -> dict[str, str]:
        explicit = {"Content-Type": params.content_type, **dict(params.headers or {})}
        if params.is_multipart:
            return self.header_setup.select_headers_for_multipart(explicit)
        return self.header_setup.select_headers(explicit)

    def build_url(self, route: str, query: Mapping[str, str]) -> str:
        query_string = build_query(query)
        return self.config.get_host() + route + (f"?{query_string}" if query_string else "")

    def build(self, params: OperationParams) -> HTTPRequest:
        """
        Build the request for an operation.

        Parameters:
        ----------
        params: OperationParams
            The operation to build the request for.

        Returns:
        -------
        HTTPRequest:
            The immutable request, ready to be executed.

        Raises:
        -------
        ValueError
            If a query value is a nested structure, or the body parameters are inconsistent.
        FileAccessError
            If the file to upload cannot be opened.
        """
        query = self.query_params(params)

        negotiated = self.negotiate_headers(params)
        body_kind = self.header_setup.body_kind(negotiated)

        encoded = self.body_encoder.encode(params.body, body_kind, params.file_field, params.payload)

        headers = dict(self.default_headers)
        headers.update(negotiated)

        api_key = self.config.get_api_key()
        if api_key is not None:
            headers["Authorization"] = api_key

        headers.update(params.headers or {})

        # A multipart body is only labeled by its own boundary type; an empty one is sent as JSON.
        if body_kind == BodyKind.MULTIPART:
            headers["Content-Type"] = encoded.content_type or JSON_CONTENT_TYPE

        url = self.build_url(params.route, query)
        logger.debug(f"Built {params.method.upper()} {url} with a {body_kind.value} body strategy")

        return HTTPRequest(
            method=params.method,
            url=url,
            headers=headers,
            body=encoded.content,
            timeout_seconds=self.config.timeout_seconds,
        )
