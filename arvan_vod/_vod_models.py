from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
MULTIPART_CONTENT_TYPE = "multipart/form-data"


class BodyKind(str, Enum):
    """
    Encoding strategy of a request body, resolved once per request from the
    negotiated content type and the multipart flag.
    """

    JSON = "json"
    FORM = "form"
    MULTIPART = "multipart"


@dataclass
class BaseModel:
    """
    Base model class for VOD API payload models.

    Payload models are sanitized through ``to_dict`` before being JSON encoded,
    so ``None`` fields never reach the wire.
    """

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the model instance to a dictionary.

        Returns:
        -------
        Dict[str, Any]:
            A dictionary representation of the model, excluding None values.
        """
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class OperationParams:
    """
    Abstract description of one API operation.

    Attributes:
    ----------
    route: str
        Resource path appended to the configured host, placeholders already substituted.
    method: str
        The HTTP method. Defaults to "GET".
    filter, page, per_page: optional
        Listing query parameters.
    secure_ip, secure_expire_time: optional
        Secure link query parameters, only sent for GET operations.
    body: Mapping[str, Any], optional
        Form/body parameters. With a file upload, the value under ``file_field`` is a file path.
    payload: Any, optional
        A direct object or array payload, JSON encoded as a whole.
    multipart: bool
        Forces a multipart body.
    file_field: str, optional
        Name of the body field holding the path of the file to upload.
    content_type: str
        Desired content type. Defaults to "application/json".
    headers: Mapping[str, str], optional
        Explicit extra headers, merged over every other header source.
    """

    route: str
    method: str = "GET"
    filter: Optional[Any] = None
    page: Optional[Any] = None
    per_page: Optional[Any] = None
    secure_ip: Optional[Any] = None
    secure_expire_time: Optional[Any] = None
    body: Optional[Mapping[str, Any]] = None
    payload: Optional[Any] = None
    multipart: bool = False
    file_field: Optional[str] = None
    content_type: str = JSON_CONTENT_TYPE
    headers: Optional[Mapping[str, str]] = None

    @property
    def has_file(self) -> bool:
        return self.file_field is not None

    @property
    def is_multipart(self) -> bool:
        return self.multipart or self.has_file or self.content_type.startswith(MULTIPART_CONTENT_TYPE)
