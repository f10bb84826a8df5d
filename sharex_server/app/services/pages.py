"""HTML fragments for the index page and the file listing."""

from __future__ import annotations

import html
from datetime import datetime
from typing import Iterable
from urllib.parse import quote

from ..config import ServerConfig
from ..models.v1.files_models import StoredFileInfo

PROJECT_URL = "https://github.com/alexthemaster/sharex-server"


def format_mtime(mtime: float) -> str:
    """Local time in the locale's default date/time representation."""
    return datetime.fromtimestamp(mtime).strftime("%c")


def render_index(config: ServerConfig) -> str:
    parts = [f'<a href="{PROJECT_URL}" target=_blank>ShareX Server</a> is running.']
    if config.listing_path:
        parts.append(
            f' Visit <a href="{html.escape(config.listing_path)}">here</a> to see the file listing.'
        )
    if config.enable_sxcu:
        parts.append(f'<br><a href="{html.escape(config.sxcu_path)}">Download the .sxcu configuration file</a>')
    return "".join(parts)


def render_listing(base_url: str, files: Iterable[StoredFileInfo]) -> str:
    items = []
    for f in files:
        name = html.escape(f.name)
        href = html.escape(base_url + quote(f.name), quote=True)
        items.append(
            f'<li><a href="{href}" target=_blank>{name}</a> - uploaded {format_mtime(f.mtime)}</li>'
        )
    return "<ul>\n" + "\n".join(items) + "\n</ul>\n"
