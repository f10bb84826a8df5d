from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ...utils.logging_setup import DebugLog
from ...utils.urls import client_address
from ..adapters.storage import UploadStorage
from ..config import ServerConfig
from ..dependencies import get_config, get_debug_log, get_storage
from ..services.pages import render_listing


async def file_listing(
    request: Request,
    config: ServerConfig = Depends(get_config),
    storage: UploadStorage = Depends(get_storage),
    log: DebugLog = Depends(get_debug_log),
):
    log.debug("File listing requested by %s", client_address(request))
    files = await storage.list()
    return HTMLResponse(render_listing(config.base_url, files))


def build_router(route_name: str) -> APIRouter:
    """The listing path is user-configured, so the router is built per app."""
    router = APIRouter()
    router.add_api_route(
        f"/{route_name}",
        file_listing,
        methods=["GET"],
        response_class=HTMLResponse,
        summary="HTML list of every stored file",
    )
    return router
