from urllib.parse import quote

from fastapi import APIRouter, Depends, Request

from ...utils.logging_setup import DebugLog
from ...utils.urls import client_address, public_host, public_scheme
from ..adapters.storage import UploadStorage
from ..config import ServerConfig
from ..dependencies import get_config, get_debug_log, get_storage, require_password
from ..exceptions import BadRequestError
from ..models.v1.upload_models import UploadResponse
from ..services.upload_service import UploadReceiver

router = APIRouter()


@router.post(
    "/api/upload",
    response_model=UploadResponse,
    dependencies=[Depends(require_password)],
    summary="Store one uploaded file under a random name",
)
async def upload_file(
    request: Request,
    config: ServerConfig = Depends(get_config),
    storage: UploadStorage = Depends(get_storage),
    log: DebugLog = Depends(get_debug_log),
):
    """Accepts a multipart body with a single ``file`` part.

    The stored name is ``<random id><original extension>`` and the response
    carries the public URL to fetch it back.
    """
    client = client_address(request)

    receiver = UploadReceiver(storage, config.filename_length, log)
    try:
        name = await receiver.receive(request)
    except BadRequestError as exc:
        log.debug("Upload from %s rejected: %s", client, exc.message)
        raise

    log.debug("File %s uploaded successfully by %s", name, client)
    scheme = public_scheme(request, config.force_https)
    host = public_host(request, config.trust_proxy)
    return UploadResponse(url=f"{scheme}://{host}{config.base_url}{quote(name)}")
