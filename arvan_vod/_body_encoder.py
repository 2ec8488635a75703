from __future__ import annotations

import json
import mimetypes
import os
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, NamedTuple
from urllib.parse import quote

from urllib3 import encode_multipart_formdata

from arvan_vod._vod_logging import get_logger
from arvan_vod._vod_models import FORM_CONTENT_TYPE, JSON_CONTENT_TYPE, BodyKind
from arvan_vod.exceptions import FileAccessError

logger = get_logger(__name__)

_NESTED_TYPES = (Mapping, list, tuple, set, frozenset)


class EncodedBody(NamedTuple):
    """Wire body and the content type that goes with it (``None`` when the body is empty)."""

    content: str | bytes | None
    content_type: str | None


def to_string(value: Any) -> str:
    """
    Render a scalar the way it appears on the wire, in a query string or a form field.

    Booleans render as "true"/"false", enums by their value and dates in ISO-8601.

    Raises:
    -------
    ValueError
        If the value is a mapping or a sequence.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return to_string(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8")
    if isinstance(value, _NESTED_TYPES):
        raise ValueError(f"Nested value is not allowed here: {value!r}")
    return str(value)


def sanitize_for_serialization(value: Any) -> Any:
    """
    Normalize a value into plain dict/list/scalar forms ready for ``json.dumps``.

    Models exposing ``to_dict`` are converted with it, other dataclasses with ``asdict``
    and plain objects through their public attributes.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return sanitize_for_serialization(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8")
    if callable(getattr(value, "to_dict", None)):
        return sanitize_for_serialization(value.to_dict())
    if is_dataclass(value) and not isinstance(value, type):
        return sanitize_for_serialization(asdict(value))
    if isinstance(value, Mapping):
        return {str(k): sanitize_for_serialization(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [sanitize_for_serialization(v) for v in value]
    if hasattr(value, "__dict__"):
        return {k: sanitize_for_serialization(v) for k, v in vars(value).items() if not k.startswith("_")}
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def build_query(params: Mapping[str, Any]) -> str:
    """
    Percent-encode parameters (RFC 3986) as ``key=value`` pairs joined with ``&``.

    Pairs keep the insertion order of ``params``; ``None`` values are left out and
    sequence values repeat their key.
    """
    pairs = []
    for key, value in params.items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            pairs.append(f"{quote(str(key), safe='-_.~')}={quote(to_string(item), safe='-_.~')}")
    return "&".join(pairs)


class BodyEncoder:
    """
    Turns body parameters into a wire body using the strategy named by a ``BodyKind``.

    Attributes:
    ----------
    boundary: str, optional
        Fixed multipart boundary. A random one is generated for each body when not set.
    """

    def __init__(self, boundary: str | None = None):
        self.boundary = boundary

    def encode(
        self,
        form_params: Mapping[str, Any] | None,
        body_kind: BodyKind,
        file_field: str | None = None,
        payload: Any = None,
    ) -> EncodedBody:
        """
        Encode a request body.

        Parameters:
        ----------
        form_params: Mapping[str, Any], optional
            Body parameters. With a file upload, the value under ``file_field`` is the file path.
        body_kind: BodyKind
            The encoding strategy resolved from the negotiated headers.
        file_field: str, optional
            Name of the field holding the path of the file to upload.
        payload: Any, optional
            A direct object/array payload, JSON encoded as a whole.

        Returns:
        -------
        EncodedBody:
            The body and its content type, or ``EncodedBody(None, None)`` when there is nothing to send.

        Raises:
        -------
        FileAccessError
            If the file to upload cannot be opened.
        ValueError
            If a direct payload is combined with a file upload, or the file field is missing.
        """
        form_params = dict(form_params or {})

        if file_field is not None:
            if payload is not None:
                raise ValueError("A direct payload cannot be combined with a file upload")
            if file_field not in form_params:
                raise ValueError(f"File field '{file_field}' is missing from the body parameters")
            body_kind = BodyKind.MULTIPART

        if payload is None and not form_params:
            return EncodedBody(None, None)

        if body_kind == BodyKind.MULTIPART:
            if payload is not None:
                raise ValueError("A direct payload cannot be sent as a multipart body")
            return self._encode_multipart(form_params, file_field)
        if body_kind == BodyKind.JSON:
            source = payload if payload is not None else form_params
            return self._encode_json(source)
        if payload is not None:
            raise ValueError("A direct payload requires a JSON content type")
        return EncodedBody(build_query(form_params), FORM_CONTENT_TYPE)

    @staticmethod
    def _encode_json(value: Any) -> EncodedBody:
        return EncodedBody(json.dumps(sanitize_for_serialization(value), separators=(",", ":")), JSON_CONTENT_TYPE)

    def _encode_multipart(self, form_params: dict[str, Any], file_field: str | None) -> EncodedBody:
        fields: list[tuple[str, Any]] = []
        for name, value in form_params.items():
            if name == file_field:
                fields.append((name, self._read_file(name, value)))
                continue
            if value is None:
                continue
            values = value if isinstance(value, (list, tuple)) else [value]
            fields.extend((name, to_string(item)) for item in values)

        content, content_type = encode_multipart_formdata(fields, boundary=self.boundary)
        logger.debug(f"Encoded multipart body with {len(fields)} part(s)")
        return EncodedBody(content, content_type)

    @staticmethod
    def _read_file(field_name: str, path: Any) -> tuple[str, bytes, str]:
        if path is None:
            raise FileAccessError(f"No file path given for field '{field_name}'")
        file_path = os.fspath(path)
        try:
            with open(file_path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise FileAccessError(f"Failed to open file for field '{field_name}': {file_path} ({e})") from e

        mime_type = mimetypes.guess_type(file_path)[0] or "application/octet-stream"
        return os.path.basename(file_path), data, mime_type
