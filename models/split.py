"""
Request-scoped types for the split proxy.

Nothing here outlives a single request/response cycle.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

import httpx

PDF_MEDIA_TYPE = "application/pdf"
JSON_MEDIA_TYPE = "application/json"

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"
INVALID_FORM_MESSAGE = "Invalid FormData"
UPSTREAM_FAILURE_MESSAGE = "Failed to split PDF"


@dataclass
class InboundPart:
    """One part of the inbound multipart submission."""
    name: Optional[str]
    filename: Optional[str]
    data: bytes = b""
    content_type: Optional[str] = None


@dataclass
class OutboundField:
    name: str
    value: str


@dataclass
class OutboundFile:
    name: str
    filename: str
    data: bytes
    content_type: str = PDF_MEDIA_TYPE


@dataclass
class OutboundPayload:
    """
    Multipart container sent to the splitting service.

    Items keep the order of the inbound parts they were built from.
    """
    items: List[Union[OutboundField, OutboundFile]] = field(default_factory=list)

    @property
    def fields(self) -> List[OutboundField]:
        return [item for item in self.items if isinstance(item, OutboundField)]

    @property
    def files(self) -> List[OutboundFile]:
        return [item for item in self.items if isinstance(item, OutboundFile)]

    def to_httpx(self) -> Dict[str, object]:
        """
        Keyword arguments for ``httpx.AsyncClient.post``.

        Every item goes in one ordered ``files`` list so the body is always
        multipart/form-data: attachments as ``(name, (filename, content,
        content_type))``, text fields as ``(name, (None, value))`` which httpx
        renders without a filename. httpx falls back to an empty body for an
        empty ``files`` list, so an empty payload is sent as an explicit
        multipart body holding only the closing boundary.
        """
        if not self.items:
            boundary = os.urandom(16).hex()
            return {
                "content": f"--{boundary}--\r\n".encode("ascii"),
                "headers": {"Content-Type": f"multipart/form-data; boundary={boundary}"},
            }

        files: List[Tuple[str, Tuple[Optional[str], bytes, Optional[str]]]] = []
        for item in self.items:
            if isinstance(item, OutboundFile):
                files.append((item.name, (item.filename, item.data, item.content_type)))
            else:
                files.append((item.name, (None, item.value.encode("utf-8"), None)))

        return {"files": files}


@dataclass
class SplitResult:
    """Framework-independent response: status, headers and body."""
    status_code: int
    headers: Dict[str, str]
    body: bytes


class SplitErrorKind(str, Enum):
    INVALID_FORM = "invalid_form"
    UPSTREAM_FAILURE = "upstream_failure"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"


_DEFAULT_STATUS = {
    SplitErrorKind.INVALID_FORM: 400,
    SplitErrorKind.UPSTREAM_FAILURE: 502,
    SplitErrorKind.TRANSPORT: 502,
    SplitErrorKind.UNKNOWN: 500,
}


class SplitError(Exception):
    """
    Failure raised by any step of the split handler.

    Carries an explicit kind and the HTTP status the failure maps to, so the
    terminal error translation never has to inspect arbitrary exceptions.
    """

    def __init__(self, kind: SplitErrorKind, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code if status_code is not None else _DEFAULT_STATUS[kind]

    @classmethod
    def invalid_form(cls) -> "SplitError":
        return cls(SplitErrorKind.INVALID_FORM, INVALID_FORM_MESSAGE)

    @classmethod
    def upstream_failure(cls, status_code: int) -> "SplitError":
        return cls(SplitErrorKind.UPSTREAM_FAILURE, UPSTREAM_FAILURE_MESSAGE, status_code)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "SplitError":
        """Wrap an unexpected exception, keeping its message when it has one."""
        if isinstance(exc, SplitError):
            return exc
        message = str(exc) or UNKNOWN_ERROR_MESSAGE
        kind = SplitErrorKind.TRANSPORT if isinstance(exc, httpx.HTTPError) else SplitErrorKind.UNKNOWN
        return cls(kind, message)
