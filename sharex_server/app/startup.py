"""Lifespan hook for the upload app.

The save directory is created when the app starts serving, never at import.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable

from fastapi import FastAPI

from .adapters.storage import UploadStorage


def build_lifespan(storage: UploadStorage) -> Callable[[FastAPI], AsyncContextManager[None]]:
    """Return a lifespan handler that makes sure the save path exists."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await storage.ensure_root()
        yield

    return lifespan
