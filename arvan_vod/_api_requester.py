import json
import platform
from contextlib import contextmanager
from importlib.metadata import PackageNotFoundError, version
from typing import IO, Any, Iterator, Optional, Tuple

import requests

from arvan_vod._http_client import HTTPClient, HTTPRequest
from arvan_vod._request_builder import RequestBuilder
from arvan_vod._response_decoder import decode_body
from arvan_vod._vod_config import VodConfig
from arvan_vod._vod_logging import get_logger
from arvan_vod._vod_models import OperationParams
from arvan_vod.exceptions import ConfigurationError, HttpStatusError, TransportError

logger = get_logger(__name__)


class APIRequester:
    """
    Runs operations through the request pipeline: build, execute, decode.

    This class is responsible for preparing API requests through the RequestBuilder and
    delegating the actual HTTP calls to the HTTPClient. Any failure is raised as an
    ``ApiError`` carrying the status code, headers and body that were available.

    Attributes:
    ----------
    config: VodConfig
        The configuration object containing settings for the API requester.
    http_client: HTTPClient
        The HTTP client responsible for making actual HTTP requests.
    headers: dict
        The client identification headers included in every request.
    request_builder: RequestBuilder
        Builds an HTTPRequest from an OperationParams.

    Methods:
    -------
    call(params: OperationParams) -> Any:
        Builds, sends and decodes one operation.
    execute(request: HTTPRequest) -> Tuple[bytes, int]:
        Sends a built request and returns the raw body and status code of a 2xx response.
    """

    def __init__(self, config: VodConfig, http_client: Optional[HTTPClient] = None):
        """
        Initializes a new instance of APIRequester.

        Parameters:
        ----------
        config: VodConfig
            The configuration object containing settings for the API requester.
        http_client: HTTPClient, optional
            The HTTP transport. A new one is created when not given.
        """
        self.config = config
        self.http_client = http_client or HTTPClient()
        self.headers = self._generate_headers()
        self.request_builder = RequestBuilder(config, default_headers=self.headers)

    def _generate_headers(self) -> dict[str, str]:
        """
        Generates the client identification headers.

        Returns:
            dict[str, str]: A dictionary containing the following headers:
                - "X-Arvan-Client-User-Agent": A JSON string with detailed client metadata.
                - "User-Agent": A user agent string with the client version and system information.

        If any metadata collection fails, default values are used so the headers are always generated.
        """
        try:
            client_version = version("arvan-vod")
        except PackageNotFoundError:
            client_version = "0.0.0"

        try:
            python_version = platform.python_version()
            system_platform = platform.platform()
        except Exception:
            python_version = "(unknown)"
            system_platform = "(unknown)"

        client_metadata = {
            "client_version": client_version,
            "language": "Python",
            "http_library": "requests",
            "python_version": python_version,
            "platform": system_platform,
        }

        return {
            "X-Arvan-Client-User-Agent": json.dumps(client_metadata),
            "User-Agent": f"ArvanVod-Python-Client/{client_version} (Python/{python_version}; {system_platform})",
        }

    def call(self, params: OperationParams) -> Any:
        """
        Runs one operation through the pipeline.

        Parameters:
        ----------
        params: OperationParams
            The operation to run.

        Returns:
        -------
        Any:
            The decoded JSON document, or the raw body text when it is not JSON.

        Raises:
        -------
        ApiError
            ConfigurationError, TransportError, HttpStatusError or FileAccessError.
        """
        request = self.request_builder.build(params)
        content, status_code = self.execute(request)
        return decode_body(content, status_code)

    @contextmanager
    def _debug_trace(self) -> Iterator[Optional[IO[str]]]:
        if not self.config.get_debug():
            yield None
            return

        debug_file = self.config.get_debug_file()
        try:
            trace_file = open(debug_file, "a", encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to open the debug file: {debug_file} ({e})") from e

        with trace_file:
            yield trace_file

    def execute(self, request: HTTPRequest) -> Tuple[bytes, int]:
        """
        Sends a built request and checks its status code.

        Parameters:
        ----------
        request: HTTPRequest
            The request to send.

        Returns:
        -------
        Tuple[bytes, int]:
            The raw body and the status code of a response in the 200-299 range.

        Raises:
        -------
        ConfigurationError
            If debug mode is on and the debug file cannot be opened. Nothing is sent.
        TransportError
            If no complete response was received.
        HttpStatusError
            If the status code is outside 200-299.
        """
        with self._debug_trace() as trace_file:
            logger.debug(f"Sending {request.method} {request.url}")
            try:
                response = self.http_client.send(request, trace_file)
            except requests.RequestException as e:
                partial = e.response
                status_code = partial.status_code if partial is not None else 0
                logger.warning(f"Transport failure for {request.method} {request.url}: {e}")
                raise TransportError(
                    f"[{status_code}] {e}",
                    status_code,
                    partial.headers if partial is not None else None,
                    partial.text if partial is not None else None,
                ) from e

        status_code = response.status_code
        if status_code < 200 or status_code > 299:
            logger.warning(f"{request.method} {request.url} answered with status {status_code}")
            raise HttpStatusError(
                f"[{status_code}] Error connecting to the API ({request.url})",
                status_code,
                response.headers,
                response.text,
            )

        return response.content, status_code
