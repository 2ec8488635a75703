from typing import Mapping, Optional


class ApiError(Exception):
    """
    Exception raised when a call to the VOD API fails.

    Every failure of the request pipeline surfaces as an ``ApiError`` (or one of its
    subclasses, which name the kind of failure). When no response was received the
    status code is ``0`` and both headers and body are ``None``.

    Attributes:
        message (str): Explanation of the error.
        status_code (int): HTTP status code of the failed response, or 0 if there was none.
        headers (Mapping[str, str], optional): Headers of the failed response.
        body (str, optional): Body of the failed response, often containing additional error details.

    Args:
        message (str): Explanation of the error.
        status_code (int, optional): HTTP status code of the failed response.
        headers (Mapping[str, str], optional): Headers of the failed response.
        body (str, optional): Body of the failed response.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.headers = headers
        self.body = body


class ConfigurationError(ApiError):
    """Raised before sending when the debug trace file cannot be opened."""

    pass


class TransportError(ApiError):
    """Raised when the transport failed and no complete response was received."""

    pass


class HttpStatusError(ApiError):
    """Raised when the API answered with a status code outside 200-299."""

    pass


class FileAccessError(ApiError):
    """Raised when a file referenced by a multipart upload cannot be read."""

    pass
