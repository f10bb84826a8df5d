from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from ...utils.logging_setup import DebugLog
from ...utils.urls import client_address
from ..adapters.storage import UploadStorage
from ..dependencies import get_debug_log, get_storage
from ..exceptions import RequestError
from ..services.file_service import download_headers, locate_file

router = APIRouter()


@router.get("/{filename}", response_class=StreamingResponse, summary="Download a stored file")
async def get_file(
    filename: str,
    request: Request,
    storage: UploadStorage = Depends(get_storage),
    log: DebugLog = Depends(get_debug_log),
):
    client = client_address(request)
    log.debug("File %s requested by %s", filename, client)

    try:
        stat = await locate_file(storage, filename)
    except RequestError as exc:
        log.debug("Request for %r from %s failed: %s", filename, client, exc.message)
        raise

    log.debug("Serving file %s to %s", filename, client)
    return StreamingResponse(
        content=storage.open_stream(filename),
        headers=download_headers(filename, stat),
    )
