"""Logging setup for the server's debug side channel."""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "sharex_server"
DEBUG_FORMAT = "[Debug] %(message)s"
INFO_FORMAT = "[%(levelname)s] %(message)s"


class _LevelPrefixFormatter(logging.Formatter):
    """``[Debug] ...`` for debug records, ``[INFO] ...`` style for the rest."""

    def __init__(self) -> None:
        super().__init__(INFO_FORMAT)
        self._debug = logging.Formatter(DEBUG_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno <= logging.DEBUG:
            return self._debug.format(record)
        return super().format(record)


class DebugLog(logging.LoggerAdapter):
    """Logger adapter whose debug lines are dropped unless ``enabled``.

    Each server instance owns one, so a debug server and a quiet server can
    share the process-wide package logger.
    """

    def __init__(self, logger: logging.Logger, enabled: bool) -> None:
        super().__init__(logger, {})
        self.enabled = enabled

    def isEnabledFor(self, level: int) -> bool:
        if level <= logging.DEBUG and not self.enabled:
            return False
        return super().isEnabledFor(level)


def configure_logging(debug: bool = False) -> DebugLog:
    """Attach a stream handler to the package logger once and return a debug channel."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    if debug:
        logger.setLevel(logging.DEBUG)
    elif logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)

    # Avoid duplicate handlers when several servers run in one process
    if not any(getattr(h, "_sharex_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(_LevelPrefixFormatter())
        handler._sharex_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return DebugLog(logger, enabled=debug)


def quiet_log() -> DebugLog:
    """A debug channel that never emits, for components built without a server."""
    return DebugLog(logging.getLogger(PACKAGE_LOGGER), enabled=False)
