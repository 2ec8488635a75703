from typing import Dict, List, Mapping, Optional

from arvan_vod._vod_models import (
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    MULTIPART_CONTENT_TYPE,
    BodyKind,
)

DEFAULT_CONTENT_TYPES = [JSON_CONTENT_TYPE, FORM_CONTENT_TYPE]


class HeaderSetup:
    """
    Negotiates the ``Content-Type`` and ``Accept`` headers of a request.

    The caller's explicit content type is honored when it is one of the acceptable
    types; otherwise the first acceptable type is used. Multipart requests always get
    ``multipart/form-data``, the boundary parameter being filled in later from the
    encoded body.
    """

    def __init__(self, accept: str = JSON_CONTENT_TYPE):
        self.accept = accept

    def select_headers(
        self,
        explicit_headers: Optional[Mapping[str, str]] = None,
        acceptable_content_types: Optional[List[str]] = None,
    ) -> Dict[str, str]:
        headers = dict(explicit_headers or {})
        content_types = acceptable_content_types or DEFAULT_CONTENT_TYPES

        requested = headers.get("Content-Type")
        if requested in content_types:
            headers["Content-Type"] = requested
        else:
            headers["Content-Type"] = content_types[0]

        headers.setdefault("Accept", self.accept)
        return headers

    def select_headers_for_multipart(self, explicit_headers: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        headers = self.select_headers(explicit_headers, [MULTIPART_CONTENT_TYPE])
        headers["Content-Type"] = MULTIPART_CONTENT_TYPE
        return headers

    @staticmethod
    def body_kind(headers: Mapping[str, str]) -> BodyKind:
        """
        Resolve the body encoding strategy for negotiated headers.

        Parameters:
        ----------
        headers: Mapping[str, str]
            Headers returned by ``select_headers`` or ``select_headers_for_multipart``.

        Returns:
        -------
        BodyKind:
            ``MULTIPART`` for multipart content, ``JSON`` for JSON content and ``FORM`` otherwise.
        """
        content_type = headers.get("Content-Type", "")
        if content_type.startswith(MULTIPART_CONTENT_TYPE):
            return BodyKind.MULTIPART
        if content_type.startswith(JSON_CONTENT_TYPE):
            return BodyKind.JSON
        return BodyKind.FORM
