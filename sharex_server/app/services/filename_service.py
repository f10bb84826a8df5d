"""Random names for stored uploads."""

from __future__ import annotations

import secrets
import string

from ..adapters.storage import UploadStorage

# nanoid's URL-safe alphabet: 64 symbols, 6 bits per character
ALPHABET = string.ascii_letters + string.digits + "_-"


def generate(length: int) -> str:
    if length < 1:
        raise ValueError("length must be >= 1")
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def extension_of(original_filename: str) -> str:
    """Return ``"." + <text after the last dot>`` of the client name, or ``""``."""
    base = (original_filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in base:
        return ""
    return "." + base.rsplit(".", 1)[1]


async def allocate_name(storage: UploadStorage, original_filename: str, length: int) -> str:
    """Pick a stored name for an upload.

    If the first candidate is already taken, exactly one more candidate is drawn
    and accepted without checking. Two concurrent uploads can still pick the
    same name; ``UploadStorage.write`` refuses to overwrite in that case.
    """
    ext = extension_of(original_filename)
    name = f"{generate(length)}{ext}"
    if await storage.exists(name):
        storage.log.debug("Generated name %s already exists, drawing another", name)
        name = f"{generate(length)}{ext}"
    return name
