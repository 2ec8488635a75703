from datetime import datetime, timezone
from types import MappingProxyType
from typing import IO, Mapping, Optional, Union

import requests
from requests.structures import CaseInsensitiveDict

_MASKED_HEADERS = {"authorization"}


class HTTPRequest:
    """
    Represents a fully built HTTP request. Instances are immutable once built.

    Attributes:
    ----------
    method: str
        The HTTP method (e.g., "GET", "POST", "PATCH", etc.).
    url: str
        The absolute URL, query string included.
    headers: Mapping[str, str]
        The headers to be sent with the request (read-only view).
    body: str | bytes | None
        The encoded payload: a JSON document, a URL-encoded form or a multipart body.
    timeout_seconds: float
        Transport timeout for the request.
    """

    __slots__ = ("method", "url", "headers", "body", "timeout_seconds")

    def __init__(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Union[str, bytes, None] = None,
        timeout_seconds: float = 15,
    ):
        object.__setattr__(self, "method", method.upper())
        object.__setattr__(self, "url", url)
        object.__setattr__(self, "headers", MappingProxyType(dict(headers or {})))
        object.__setattr__(self, "body", body)
        object.__setattr__(self, "timeout_seconds", timeout_seconds)

    def __setattr__(self, name, value):
        raise AttributeError(f"HTTPRequest is immutable, cannot set '{name}'")

    def __repr__(self) -> str:
        return f"HTTPRequest(method={self.method!r}, url={self.url!r})"


class HTTPResponse:
    """
    Represents an HTTP response with status code, raw body and headers.

    Attributes:
    ----------
    status_code: int
        The HTTP status code of the response.
    content: bytes
        The raw body of the response.
    headers: CaseInsensitiveDict
        The headers returned by the server.
    """

    def __init__(self, status_code: int, content: bytes, headers: CaseInsensitiveDict[str]):
        self.status_code = status_code
        self.content = content
        self.headers = headers

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class HTTPClient:
    """
    Responsible for making actual HTTP requests using the `requests` library.

    A single `requests.Session` is created lazily and reused across sequential calls.
    The session is not safe for unsynchronized use from several threads; use one
    client per thread instead.

    Methods:
    -------
    send(request: HTTPRequest, trace_file: IO[str] | None = None) -> HTTPResponse:
        Sends the HTTP request and returns the HTTP response.
    """

    def __init__(self):
        self._session: Optional[requests.Session] = None

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def send(self, request: HTTPRequest, trace_file: Optional[IO[str]] = None) -> HTTPResponse:
        """
        Sends an HTTP request and returns the HTTP response, whatever its status code.

        Parameters:
        ----------
        request: HTTPRequest
            The built request.
        trace_file: IO[str], optional
            An open text file wire-level trace records are appended to.

        Returns:
        -------
        HTTPResponse:
            The response object containing status code, raw body, and headers.

        Raises:
        -------
        requests.RequestException
            On connection errors, timeouts and malformed responses.
        """
        body = request.body.encode("utf-8") if isinstance(request.body, str) else request.body
        hooks = {"response": [self._trace_hook(trace_file)]} if trace_file is not None else None

        response = self._get_session().request(
            method=request.method,
            url=request.url,
            headers=dict(request.headers),
            data=body,
            timeout=request.timeout_seconds,
            hooks=hooks,
        )

        return HTTPResponse(
            status_code=response.status_code,
            content=response.content or b"",
            headers=response.headers,
        )

    @staticmethod
    def _trace_hook(trace_file: IO[str]):
        def write_trace(response: requests.Response, *args, **kwargs) -> requests.Response:
            sent = response.request
            timestamp = datetime.now(timezone.utc).isoformat()
            lines = [f"* {timestamp}", f"> {sent.method} {sent.url}"]
            lines.extend(f"> {name}: {_mask(name, value)}" for name, value in sent.headers.items())
            lines.append(f"< {response.status_code} {response.reason}")
            lines.extend(f"< {name}: {value}" for name, value in response.headers.items())
            trace_file.write("\n".join(lines) + "\n\n")
            return response

        return write_trace


def _mask(name: str, value: str) -> str:
    if name.lower() in _MASKED_HEADERS:
        return "********"
    return value
