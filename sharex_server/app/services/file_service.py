"""Serving stored files back to clients."""

from __future__ import annotations

from typing import Dict

from ...utils.mime import content_type_for
from ..adapters.storage import UploadStorage
from ..exceptions import BadRequestError, NotFoundError
from ..models.v1.files_models import FileStat


async def locate_file(storage: UploadStorage, filename: str) -> FileStat:
    """Validate a requested name and return its size/mtime.

    Raises ``BadRequestError`` for an empty name and ``NotFoundError`` when no
    such file is stored.
    """
    if not filename:
        raise BadRequestError("No filename provided.")
    if not await storage.exists(filename):
        raise NotFoundError("The requested file does not exist.")
    return await storage.stat_info(filename)


def download_headers(filename: str, stat: FileStat) -> Dict[str, str]:
    return {
        "Content-Length": str(stat.size),
        "Accept-Ranges": "bytes",
        "Content-Type": content_type_for(filename),
    }
