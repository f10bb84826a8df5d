"""FastAPI dependencies shared by the routers.

Per-server state (config, storage, debug channel) lives on ``app.state`` so
several servers can run in one process.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, Request

from ..utils.logging_setup import DebugLog
from ..utils.urls import client_address
from .adapters.storage import UploadStorage
from .config import ServerConfig
from .services.auth_service import authorize, unauthorized_error


def get_config(request: Request) -> ServerConfig:
    return request.app.state.config


def get_storage(request: Request) -> UploadStorage:
    return request.app.state.storage


def get_debug_log(request: Request) -> DebugLog:
    return request.app.state.log


async def require_password(
    request: Request,
    x_password: Optional[str] = Header(default=None),
    config: ServerConfig = Depends(get_config),
    log: DebugLog = Depends(get_debug_log),
) -> None:
    """Reject the request with 401 unless ``X-Password`` matches.

    Runs before the request body is read, so a rejected upload never touches
    the disk.
    """
    if not authorize(x_password, config.password):
        log.debug("Unauthorized upload attempt from %s", client_address(request))
        raise unauthorized_error(x_password)
