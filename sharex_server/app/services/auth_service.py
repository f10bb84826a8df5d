"""Shared-password check for uploads."""

from __future__ import annotations

import secrets
from typing import Optional

from ..exceptions import UnauthorizedError


def authorize(supplied: Optional[str], password: str) -> bool:
    if not supplied:
        return False
    return secrets.compare_digest(supplied.encode("utf-8"), password.encode("utf-8"))


def unauthorized_error(supplied: Optional[str]) -> UnauthorizedError:
    valid = " valid" if supplied else ""
    return UnauthorizedError(f"Unauthorized. Provide a{valid} password.")
