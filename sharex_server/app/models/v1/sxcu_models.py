"""The ShareX custom uploader (.sxcu) document."""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

SXCU_VERSION = "18.0.0"
SXCU_FILENAME = "sharex-server.sxcu"


class SxcuConfig(BaseModel):
    """Serialized with ``model_dump(by_alias=True)`` to get ShareX's key names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    version: str = Field(default=SXCU_VERSION, alias="Version")
    name: str = Field(alias="Name")
    destination_type: str = Field(
        default="ImageUploader, TextUploader, FileUploader", alias="DestinationType"
    )
    request_method: str = Field(default="POST", alias="RequestMethod")
    request_url: str = Field(alias="RequestURL")
    body: str = Field(default="MultipartFormData", alias="Body")
    headers: Dict[str, str] = Field(alias="Headers")
    file_form_name: str = Field(default="file", alias="FileFormName")
    url: str = Field(default="{json:url}", alias="URL")
    error_message: str = Field(default="{json:error}", alias="ErrorMessage")
