"""API models for upload responses."""

from __future__ import annotations

from pydantic import BaseModel


class UploadResponse(BaseModel):
    url: str


class ErrorResponse(BaseModel):
    error: str
