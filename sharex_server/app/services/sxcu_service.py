"""Building the ShareX custom uploader document for this server."""

from __future__ import annotations

from ..config import ServerConfig
from ..models.v1.sxcu_models import SxcuConfig


def build_sxcu(config: ServerConfig, scheme: str, host: str) -> SxcuConfig:
    return SxcuConfig(
        name=f"ShareX Server ({host})",
        request_url=f"{scheme}://{host}{config.upload_path}",
        headers={"X-Password": config.password},
    )
