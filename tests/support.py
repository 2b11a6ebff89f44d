"""Shared helpers for split proxy tests."""

import httpx

from services.multipart_parser import parse_multipart

BOUNDARY = "splitproxyboundary"
PDF_IN = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\n%%EOF"
PDF_OUT = b"%PDF-OUT...\n%%EOF"


def build_multipart_body(parts, boundary=BOUNDARY):
    """
    Build a raw multipart/form-data body.

    Each part is a (name, filename, data) tuple; None leaves the parameter
    out of the Content-Disposition header so nameless parts can be sent.
    """
    body = b""
    for name, filename, data in parts:
        disposition = b"Content-Disposition: form-data"
        if name is not None:
            disposition += b'; name="' + name.encode("utf-8") + b'"'
        if filename is not None:
            disposition += b'; filename="' + filename.encode("utf-8") + b'"'

        body += b"--" + boundary.encode("ascii") + b"\r\n"
        body += disposition + b"\r\n"
        if filename is not None:
            body += b"Content-Type: application/octet-stream\r\n"
        body += b"\r\n" + data + b"\r\n"

    body += b"--" + boundary.encode("ascii") + b"--\r\n"
    return body


def multipart_content_type(boundary=BOUNDARY):
    return f"multipart/form-data; boundary={boundary}"


class FakeSplitter:
    """Stands in for the PDF splitting service and records what it receives."""

    def __init__(self, status_code=200, content=PDF_OUT, error=None):
        self.status_code = status_code
        self.content = content
        self.error = error
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, content=self.content)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def forwarded_parts(self, index=-1):
        """Parse the multipart body of a request the splitter received."""
        request = self.requests[index]
        return parse_multipart(request.content, request.headers.get("content-type"))
