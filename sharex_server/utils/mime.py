"""Content-type lookup for served files."""

from __future__ import annotations

import mimetypes

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(filename: str) -> str:
    ctype, _ = mimetypes.guess_type(filename, strict=False)
    return ctype or DEFAULT_CONTENT_TYPE
