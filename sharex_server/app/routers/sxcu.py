from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ...utils.logging_setup import DebugLog
from ...utils.urls import client_address, public_host, public_scheme
from ..config import ServerConfig
from ..dependencies import get_config, get_debug_log
from ..models.v1.sxcu_models import SXCU_FILENAME
from ..services.sxcu_service import build_sxcu

router = APIRouter()


@router.get("/api/sxcu", summary="Download a ShareX custom uploader config for this server")
def sxcu_config(
    request: Request,
    config: ServerConfig = Depends(get_config),
    log: DebugLog = Depends(get_debug_log),
):
    """
    Returns the .sxcu document as an attachment; it embeds the upload password.
    """
    log.debug("SXCU configuration requested by %s", client_address(request))
    doc = build_sxcu(
        config,
        scheme=public_scheme(request, config.force_https),
        host=public_host(request, config.trust_proxy),
    )
    return JSONResponse(
        content=doc.model_dump(by_alias=True),
        media_type="application/octet-stream",
        headers={"Content-Disposition": f"attachment;filename={SXCU_FILENAME}"},
    )
