"""Storage adapter package.

Thin filesystem boundary for the upload directory. Keep this package free of
HTTP concerns; routers reach it through the services layer.
"""

from .local import DEFAULT_CHUNK_SIZE, UploadStorage, is_plain_name

__all__ = ["DEFAULT_CHUNK_SIZE", "UploadStorage", "is_plain_name"]
