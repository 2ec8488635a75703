from __future__ import annotations

from typing import Any, Mapping

from arvan_vod._api_requester import APIRequester
from arvan_vod._http_client import HTTPClient
from arvan_vod._request_builder import build_route
from arvan_vod._vod_config import VodConfig
from arvan_vod._vod_models import JSON_CONTENT_TYPE, OperationParams

GET_OPTIONS = ("filter", "page", "per_page", "secure_ip", "secure_expire_time")


class VodClient:
    """
    VodClient is the main entry point for calling the VOD API.

    Endpoint helpers are expressed with four call shapes (``request``, ``post``,
    ``patch_or_delete`` and ``get``) that all run through the same pipeline. Failures
    are raised as ``ApiError``; they are never turned into strings.

    Attributes:
    ----------
    config: VodConfig
        The configuration object containing the host, the API key and the debug settings.
    api_requester: APIRequester
        Builds, sends and decodes the requests.

    Examples:
    ---------
    >>> client = VodClient(VodConfig(api_key="Apikey xxxx"))
    >>> channels = client.get("/channels", {"page": 1, "per_page": 10})
    >>> video = client.post("/channels/{channel}/videos", {"title": "intro"}, "channel", channel_id)
    """

    def __init__(self, config: VodConfig, http_client: HTTPClient | None = None):
        self.config = config
        self.api_requester = APIRequester(config=config, http_client=http_client)

    def request(
        self,
        method: str,
        route: str,
        *,
        filter: Any = None,
        page: Any = None,
        per_page: Any = None,
        body: Mapping[str, Any] | None = None,
        payload: Any = None,
        multipart: bool = False,
        file_field: str | None = None,
        content_type: str = JSON_CONTENT_TYPE,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """
        Run an arbitrary operation.

        Parameters:
        -----------
        method : str
            HTTP method for the request (e.g., "GET", "POST").
        route : str
            Resource path appended to the configured host.
        filter, page, per_page : optional
            Listing query parameters.
        body : Mapping[str, Any], optional
            Body parameters.
        payload : Any, optional
            A direct object/array payload sent as JSON.
        multipart : bool
            Send the body as multipart/form-data.
        file_field : str, optional
            Body field holding the path of a file to upload.
        content_type : str
            Desired content type. Defaults to "application/json".
        headers : Mapping[str, str], optional
            Extra headers, merged over every other header.

        Returns:
        --------
        Any
            The decoded JSON response, or the raw body text.

        Raises:
        -------
        ApiError
            If the call fails.
        """
        params = OperationParams(
            route=route,
            method=method,
            filter=filter,
            page=page,
            per_page=per_page,
            body=body,
            payload=payload,
            multipart=multipart,
            file_field=file_field,
            content_type=content_type,
            headers=headers,
        )
        return self.api_requester.call(params)

    def post(
        self,
        route: str,
        body: Mapping[str, Any],
        key: str | None = None,
        value: Any = None,
        file_field: str | None = None,
        content_type: str = JSON_CONTENT_TYPE,
    ) -> Any:
        """
        Create a resource. When ``file_field`` is given, the body is sent as multipart
        with the file at ``body[file_field]`` attached.
        """
        params = OperationParams(
            route=build_route(route, key, value),
            method="POST",
            body=body,
            multipart=file_field is not None,
            file_field=file_field,
            content_type=content_type,
        )
        return self.api_requester.call(params)

    def patch_or_delete(
        self,
        route: str,
        key: str,
        value: Any,
        body: Mapping[str, Any] | None = None,
        method: str = "PATCH",
    ) -> Any:
        params = OperationParams(route=build_route(route, key, value), method=method, body=body)
        return self.api_requester.call(params)

    def patch(self, route: str, key: str, value: Any, body: Mapping[str, Any] | None = None) -> Any:
        return self.patch_or_delete(route, key, value, body, method="PATCH")

    def delete(self, route: str, key: str, value: Any, body: Mapping[str, Any] | None = None) -> Any:
        return self.patch_or_delete(route, key, value, body, method="DELETE")

    def get(
        self,
        route: str,
        options: Mapping[str, Any] | None = None,
        key: str | None = None,
        value: Any = None,
    ) -> Any:
        """
        Read a resource or a listing.

        Parameters:
        -----------
        route : str
            Route template, e.g. "/channels/{channel}/videos".
        options : Mapping[str, Any], optional
            Any of "filter", "page", "per_page", "secure_ip" and "secure_expire_time".
        key, value : optional
            Placeholder name and value substituted in ``route``.

        Raises:
        -------
        ValueError
            If ``options`` holds an unknown key.
        """
        options = dict(options or {})
        unknown = set(options) - set(GET_OPTIONS)
        if unknown:
            raise ValueError(f"Unsupported query options: {', '.join(sorted(unknown))}")

        params = OperationParams(
            route=build_route(route, key, value),
            method="GET",
            **{name: options.get(name) for name in GET_OPTIONS},
        )
        return self.api_requester.call(params)

    def close(self) -> None:
        self.api_requester.http_client.close()
