"""Environment-variable configuration for container and CLI runs."""

from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

from ..config import ServerConfig, build_config
from ..exceptions import ConfigError

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def parse_bool(name: str, raw: Optional[str]) -> Optional[bool]:
    """Parse a boolean env value; unset or blank returns None."""
    if raw is None or not raw.strip():
        return None
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean (got: {raw!r})")


def parse_int(name: str, raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer (got: {raw!r})") from None


def options_from_env(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect ``ShareXServer`` options from environment variables.

    Unset variables are left out so the config defaults apply. ``FILE_LISTING``
    set to ``false`` disables the listing route; ``FORCE_HTTPS`` left unset
    keeps it unset so ``TRUST_PROXY`` can imply it.
    """
    env = os.environ if env is None else env
    opts: Dict[str, Any] = {
        "password": env.get("PASSWORD") or None,
        "port": parse_int("PORT", env.get("PORT")),
        "host": env.get("HOST") or None,
        "base_url": env.get("BASE_URL") or None,
        "save_path": env.get("SAVE_PATH") or None,
        "filename_length": parse_int("LENGTH", env.get("LENGTH")),
        "enable_sxcu": parse_bool("ENABLE_SXCU", env.get("ENABLE_SXCU")),
        "debug": parse_bool("DEBUG", env.get("DEBUG")),
        "force_https": parse_bool("FORCE_HTTPS", env.get("FORCE_HTTPS")),
        "trust_proxy": parse_bool("TRUST_PROXY", env.get("TRUST_PROXY")),
    }

    listing = env.get("FILE_LISTING")
    if listing is not None and listing.strip():
        opts["file_listing"] = False if listing.strip().lower() == "false" else listing.strip()

    return {k: v for k, v in opts.items() if v is not None}


def config_from_env(env: Optional[Mapping[str, str]] = None) -> ServerConfig:
    return build_config(**options_from_env(env))
