"""API models for stored files."""

from __future__ import annotations

from pydantic import BaseModel


class FileStat(BaseModel):
    """Size in bytes and modification time (POSIX timestamp) of a stored file."""

    size: int
    mtime: float


class StoredFileInfo(BaseModel):
    """One entry of the upload directory listing."""

    name: str
    mtime: float
