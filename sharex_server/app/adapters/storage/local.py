"""Filesystem facade over the flat upload directory.

Every method takes a bare file name; the storage root is fixed at construction.
File contents are moved in chunks through ``aiofiles`` so that large uploads
and downloads never block the event loop.
"""

from __future__ import annotations

import asyncio
import os
from typing import AsyncIterator, List, Optional, Protocol

import aiofiles
import aiofiles.os

from ...exceptions import NotFoundError
from ...models.v1.files_models import FileStat, StoredFileInfo
from ....utils.logging_setup import DebugLog, quiet_log

DEFAULT_CHUNK_SIZE = 1_048_576  # 1 MiB


class AsyncReadable(Protocol):
    async def read(self, size: int = -1) -> bytes: ...


def is_plain_name(name: str) -> bool:
    """True for a single path component that cannot escape the root."""
    if not name or name in (".", ".."):
        return False
    if "/" in name or "\\" in name or "\x00" in name:
        return False
    return os.path.basename(name) == name


async def safe_unlink(path: str) -> None:
    """Best-effort file removal (no exception if it fails)."""
    try:
        await aiofiles.os.remove(path)
    except OSError:
        pass


class UploadStorage:
    def __init__(
        self,
        root: str,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        log: Optional[DebugLog] = None,
    ) -> None:
        self.root = os.path.abspath(root)
        self.chunk_size = chunk_size
        self.log = log if log is not None else quiet_log()

    def path_for(self, name: str) -> str:
        if not is_plain_name(name):
            raise NotFoundError("The requested file does not exist.")
        return os.path.join(self.root, name)

    async def ensure_root(self) -> None:
        if await aiofiles.os.path.isdir(self.root):
            self.log.debug("Save path does exist at %s", self.root)
            return
        self.log.debug("Save path does not exist at %s, creating...", self.root)
        await aiofiles.os.makedirs(self.root, exist_ok=True)
        self.log.debug("Save path created at %s", self.root)

    async def exists(self, name: str) -> bool:
        if not is_plain_name(name):
            return False
        return await aiofiles.os.path.isfile(os.path.join(self.root, name))

    async def write(self, name: str, source: AsyncReadable) -> int:
        """Copy ``source`` into a new file called ``name`` and return its size.

        The file is opened in exclusive-create mode, so an existing file is
        never overwritten: ``FileExistsError`` propagates to the caller. A
        partially written file is removed if the copy fails or is cancelled.
        """
        path = self.path_for(name)
        size = 0
        created = False
        completed = False
        try:
            async with aiofiles.open(path, "xb") as out:
                created = True
                while True:
                    chunk = await source.read(self.chunk_size)
                    if not chunk:
                        break
                    await out.write(chunk)
                    size += len(chunk)
            completed = True
        finally:
            if created and not completed:
                await safe_unlink(path)
        return size

    async def open_new(self, name: str):
        """Create ``name`` exclusively and return it open for binary writing.

        Raises ``FileExistsError`` if the name is already taken.
        """
        return await aiofiles.open(self.path_for(name), "xb")

    async def discard(self, name: str) -> None:
        await safe_unlink(self.path_for(name))

    async def stat_info(self, name: str) -> FileStat:
        path = self.path_for(name)
        try:
            st = await aiofiles.os.stat(path)
        except FileNotFoundError:
            raise NotFoundError("The requested file does not exist.") from None
        return FileStat(size=st.st_size, mtime=st.st_mtime)

    async def open_stream(self, name: str) -> AsyncIterator[bytes]:
        """Yield the file's bytes chunk by chunk.

        Closing the generator early (client went away) closes the file.
        """
        path = self.path_for(name)
        async with aiofiles.open(path, "rb") as fh:
            while True:
                chunk = await fh.read(self.chunk_size)
                if not chunk:
                    break
                yield chunk

    async def _entry(self, name: str) -> Optional[StoredFileInfo]:
        try:
            st = await aiofiles.os.stat(os.path.join(self.root, name))
        except FileNotFoundError:
            # removed between listdir and stat
            return None
        return StoredFileInfo(name=name, mtime=st.st_mtime)

    async def list(self) -> List[StoredFileInfo]:
        """One entry per direct child of the root, in directory order."""
        names = await aiofiles.os.listdir(self.root)
        entries = await asyncio.gather(*(self._entry(n) for n in names))
        return [e for e in entries if e is not None]
