"""Receiving uploads into storage.

The multipart body is parsed as it arrives and the ``file`` part is written
straight into its allocated path, so nothing is spooled to a temporary file
first.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header
from starlette.requests import Request

from ...utils.logging_setup import DebugLog
from ..adapters.storage import UploadStorage
from ..exceptions import BadRequestError
from .filename_service import allocate_name

FILE_FIELD = "file"
MULTIPART_TYPE = b"multipart/form-data"


class UploadReceiver:
    """Stream one multipart upload request into ``storage``.

    Exactly one part named ``file`` with a non-empty filename is accepted;
    other fields are skipped. If the request is rejected or breaks off, the
    file written so far is removed.
    """

    def __init__(self, storage: UploadStorage, filename_length: int, log: Optional[DebugLog] = None) -> None:
        self.storage = storage
        self.filename_length = filename_length
        self.log = log if log is not None else storage.log
        self.original_filename: Optional[str] = None
        self.stored_name: Optional[str] = None
        self.size = 0
        self._events: List[Tuple[str, bytes]] = []
        self._headers: Dict[bytes, bytes] = {}
        self._field = b""
        self._value = b""
        self._out: Any = None

    def _callbacks(self) -> Dict[str, Any]:
        def note(kind):
            return lambda: self._events.append((kind, b""))

        def data(kind):
            return lambda buf, start, end: self._events.append((kind, bytes(buf[start:end])))

        return {
            "on_part_begin": note("part_begin"),
            "on_header_field": data("header_field"),
            "on_header_value": data("header_value"),
            "on_header_end": note("header_end"),
            "on_headers_finished": note("headers_finished"),
            "on_part_data": data("part_data"),
            "on_part_end": note("part_end"),
        }

    async def receive(self, request: Request) -> str:
        """Consume the request body and return the stored name."""
        content_type, options = parse_options_header(request.headers.get("content-type", ""))
        if content_type != MULTIPART_TYPE:
            raise BadRequestError("No file provided.")
        boundary = options.get(b"boundary")
        if not boundary:
            raise BadRequestError("Missing boundary in multipart.")

        parser = MultipartParser(boundary, self._callbacks())
        try:
            async for chunk in request.stream():
                parser.write(chunk)
                await self._drain()
            parser.finalize()
            await self._drain()
            if self._out is not None:
                raise BadRequestError("Incomplete multipart body.")
        except MultipartParseError as exc:
            await self._discard()
            raise BadRequestError(f"Malformed multipart body: {exc}") from exc
        except BaseException:
            await self._discard()
            raise

        if self.stored_name is None:
            raise BadRequestError("No file provided.")
        self.log.debug("Stored %s (%d bytes) as %s", self.original_filename, self.size, self.stored_name)
        return self.stored_name

    async def _drain(self) -> None:
        events, self._events = self._events, []
        for kind, payload in events:
            if kind == "part_begin":
                self._headers = {}
            elif kind == "header_field":
                self._field += payload
            elif kind == "header_value":
                self._value += payload
            elif kind == "header_end":
                self._headers[self._field.lower()] = self._value
                self._field = self._value = b""
            elif kind == "headers_finished":
                await self._begin_part()
            elif kind == "part_data":
                if self._out is not None:
                    await self._out.write(payload)
                    self.size += len(payload)
            elif kind == "part_end":
                await self._close_target()

    async def _begin_part(self) -> None:
        _, options = parse_options_header(self._headers.get(b"content-disposition", b""))
        field = options.get(b"name", b"").decode("utf-8", "replace")
        filename = options.get(b"filename", b"").decode("utf-8", "replace")
        if field != FILE_FIELD or not filename:
            return
        if self.stored_name is not None:
            raise BadRequestError("Only one file may be uploaded.")
        self.original_filename = filename
        self.stored_name, self._out = await self._open_target(filename)

    async def _open_target(self, filename: str) -> Tuple[str, Any]:
        name = await allocate_name(self.storage, filename, self.filename_length)
        try:
            return name, await self.storage.open_new(name)
        except FileExistsError:
            # another upload claimed the name after our existence check
            self.log.debug("Stored name %s was taken concurrently, allocating again", name)
            name = await allocate_name(self.storage, filename, self.filename_length)
            return name, await self.storage.open_new(name)

    async def _close_target(self) -> None:
        out, self._out = self._out, None
        if out is not None:
            await out.close()

    async def _discard(self) -> None:
        await self._close_target()
        if self.stored_name is not None:
            await self.storage.discard(self.stored_name)
            self.stored_name = None
