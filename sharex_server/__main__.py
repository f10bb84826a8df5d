"""Run the server from environment variables (see ``adapters/environment.py``).

    PASSWORD=secret PORT=8080 ENABLE_SXCU=true python -m sharex_server
"""

from __future__ import annotations

import asyncio
import logging
import sys

from .app.adapters.environment import config_from_env
from .app.exceptions import BindError, ConfigError
from .app.server import ShareXServer
from .utils.logging_setup import configure_logging

logger = logging.getLogger("sharex_server.cli")


def main() -> int:
    configure_logging()
    try:
        config = config_from_env()
    except ConfigError as exc:
        logger.error("%s", exc)
        return 2

    server = ShareXServer(config)
    try:
        asyncio.run(server.serve_forever())
    except BindError as exc:
        logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
