from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..config import ServerConfig
from ..dependencies import get_config
from ..services.pages import render_index

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def index(config: ServerConfig = Depends(get_config)):
    return HTMLResponse(render_index(config))
