"""
Multipart form-data handling for the split proxy.

Inbound bodies are parsed with the python-multipart streaming parser (the
same one Starlette uses for ``request.form()``). Driving it directly means a
part without a ``name`` is kept as a nameless part rather than failing the
whole request, so it can be dropped when the outbound payload is built.
"""

from typing import Dict, List, Optional

from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from models.split import (
    InboundPart,
    OutboundField,
    OutboundFile,
    OutboundPayload,
    SplitError,
)


def _decode(value: bytes) -> str:
    """Decode a header parameter, falling back to latin-1 like Starlette does."""
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError:
        return value.decode("latin-1")


def get_boundary(content_type: Optional[str]) -> Optional[bytes]:
    """
    Extract the multipart boundary from a Content-Type header.

    Args:
        content_type: The raw Content-Type header value, if any

    Returns:
        The boundary bytes, or None when the body is not multipart/form-data
    """
    if not content_type:
        return None

    media_type, options = parse_options_header(content_type)
    if media_type != b"multipart/form-data":
        return None

    return options.get(b"boundary") or None


class _PartCollector:
    """Turns parser callbacks into InboundPart objects."""

    def __init__(self):
        self.parts: List[InboundPart] = []
        self._headers: Dict[str, bytes] = {}
        self._header_field = b""
        self._header_value = b""
        self._data = bytearray()

    def callbacks(self) -> Dict[str, object]:
        return {
            "on_part_begin": self.on_part_begin,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
        }

    def on_part_begin(self):
        self._headers = {}
        self._data = bytearray()

    def on_part_data(self, data: bytes, start: int, end: int):
        self._data.extend(data[start:end])

    def on_header_field(self, data: bytes, start: int, end: int):
        self._header_field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int):
        self._header_value += data[start:end]

    def on_header_end(self):
        self._headers[_decode(self._header_field).lower()] = self._header_value
        self._header_field = b""
        self._header_value = b""

    def on_part_end(self):
        _, options = parse_options_header(self._headers.get("content-disposition", b""))

        name = options.get(b"name")
        filename = options.get(b"filename")
        content_type = self._headers.get("content-type")

        self.parts.append(InboundPart(
            name=_decode(name) if name is not None else None,
            filename=_decode(filename) if filename is not None else None,
            data=bytes(self._data),
            content_type=_decode(content_type) if content_type is not None else None,
        ))


def parse_multipart(body: bytes, content_type: Optional[str]) -> List[InboundPart]:
    """
    Parse an inbound multipart/form-data body into its parts.

    Args:
        body: The raw request body
        content_type: The request's Content-Type header

    Returns:
        The parts in submission order. Empty when the body is missing or the
        request is not multipart/form-data.

    Raises:
        SplitError: The body claims to be multipart but cannot be parsed
    """
    boundary = get_boundary(content_type)
    if boundary is None or not body:
        return []

    collector = _PartCollector()
    parser = MultipartParser(boundary, collector.callbacks())

    try:
        parser.write(body)
        parser.finalize()
    except MultipartParseError as e:
        print(f"❌ Malformed multipart body: {e}")
        raise SplitError.invalid_form() from e

    return collector.parts


def build_outbound_payload(parts: List[InboundPart]) -> OutboundPayload:
    """
    Rebuild inbound parts as the payload sent to the splitting service.

    Parts without a name are skipped. Parts with a filename become PDF
    attachments keeping that filename; the rest become text fields holding
    the part's bytes decoded as UTF-8.
    """
    payload = OutboundPayload()

    for part in parts:
        if not part.name:
            continue

        if part.filename:
            payload.items.append(OutboundFile(
                name=part.name,
                filename=part.filename,
                data=part.data,
            ))
        else:
            payload.items.append(OutboundField(
                name=part.name,
                value=part.data.decode("utf-8", errors="replace"),
            ))

    return payload
