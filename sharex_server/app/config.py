"""Server configuration.

``ServerConfig`` is resolved once, before any route is registered, and is never
mutated afterwards. All defaulting and normalization of user options lives
here so the routers can read plain, fully-populated values.
"""

from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigError

DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"
DEFAULT_BASE_URL = "/"
DEFAULT_SAVE_PATH = "./uploads"
DEFAULT_FILENAME_LENGTH = 10
DEFAULT_FILE_LISTING = "files"

MISSING_PASSWORD_MESSAGE = "A password must be provided to start the server."


def normalize_base_url(value: str) -> str:
    """``"/"`` stays as is; anything else becomes ``/<value without slashes>/``."""
    if value == "/":
        return value
    stripped = value.replace("/", "")
    if not stripped:
        return "/"
    return f"/{stripped}/"


def normalize_file_listing(value: Union[str, bool, None]) -> Union[str, Literal[False]]:
    if value is None or value is False:
        return False
    if value is True or not isinstance(value, str):
        raise ValueError("file_listing must be a route name or False")
    name = value[1:] if value.startswith("/") else value
    return name or False


class ServerConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    password: str
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    host: str = DEFAULT_HOST
    base_url: str = DEFAULT_BASE_URL
    save_path: str = DEFAULT_SAVE_PATH
    filename_length: int = Field(default=DEFAULT_FILENAME_LENGTH, ge=1)
    enable_sxcu: bool = False
    file_listing: Union[str, Literal[False]] = DEFAULT_FILE_LISTING
    debug: bool = False
    force_https: Optional[bool] = None
    trust_proxy: bool = False

    @model_validator(mode="before")
    @classmethod
    def _trust_proxy_implies_https(cls, data: Any) -> Any:
        # trust_proxy implies https unless force_https was given explicitly
        if isinstance(data, dict) and data.get("trust_proxy") and data.get("force_https") is None:
            data = {**data, "force_https": True}
        return data

    @field_validator("password")
    @classmethod
    def _password_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError(MISSING_PASSWORD_MESSAGE)
        return v

    @field_validator("base_url")
    @classmethod
    def _normalize_base_url(cls, v: str) -> str:
        return normalize_base_url(v)

    @field_validator("file_listing", mode="before")
    @classmethod
    def _normalize_file_listing(cls, v: Any) -> Any:
        return normalize_file_listing(v)

    @property
    def upload_path(self) -> str:
        return f"{self.base_url}api/upload"

    @property
    def sxcu_path(self) -> str:
        return f"{self.base_url}api/sxcu"

    @property
    def listing_path(self) -> Optional[str]:
        if not self.file_listing:
            return None
        return f"{self.base_url}{self.file_listing}"


def build_config(**options: Any) -> ServerConfig:
    """Resolve keyword options into a ``ServerConfig``.

    Options passed as ``None`` fall back to their defaults, except
    ``force_https`` where ``None`` means "not set" and ``file_listing`` where
    it disables the listing route.
    """
    if not options.get("password"):
        raise ConfigError(MISSING_PASSWORD_MESSAGE)

    keep_none = {"force_https", "file_listing"}
    cleaned = {k: v for k, v in options.items() if v is not None or k in keep_none}

    try:
        return ServerConfig(**cleaned)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'options'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigError(f"Invalid server options: {problems}") from exc
