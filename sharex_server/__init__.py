"""Self-hosted upload endpoint for the ShareX screenshot tool."""

from .app.config import ServerConfig, build_config
from .app.exceptions import (
    BadRequestError,
    BindError,
    ConfigError,
    NotFoundError,
    ServerStateError,
    ShareXServerError,
    UnauthorizedError,
)
from .app.main import create_app
from .app.server import ShareXServer

__version__ = "1.0.0"

__all__ = [
    "ShareXServer",
    "ServerConfig",
    "build_config",
    "create_app",
    "ShareXServerError",
    "ConfigError",
    "BindError",
    "ServerStateError",
    "BadRequestError",
    "UnauthorizedError",
    "NotFoundError",
]
