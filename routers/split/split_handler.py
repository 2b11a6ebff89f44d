"""
Split proxy handler.

Turns one inbound multipart request into one POST to the PDF splitting
service and relays the resulting PDF. The handler works on plain values
(body, content type, client) so it runs without a live HTTP server.
"""

from typing import Optional
import httpx

from models.schemas import ErrorResponse
from models.split import (
    JSON_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
    SplitError,
    SplitResult,
)
from services.multipart_parser import build_outbound_payload, parse_multipart

from .base import get_upstream_url, propagate_error_status


def error_result(error: Exception, propagate_status: bool = False) -> SplitResult:
    """
    Translate any failure into the JSON error response.

    Args:
        error: The exception raised while handling the request
        propagate_status: Use the error's own status instead of 200

    Returns:
        A result whose body is {"error": "<message>"}
    """
    split_error = SplitError.from_exception(error)
    print(f"❌ Split failed ({split_error.kind.value}): {split_error.message}")

    body = ErrorResponse(error=split_error.message).model_dump_json().encode("utf-8")
    return SplitResult(
        status_code=split_error.status_code if propagate_status else 200,
        headers={'Content-Type': JSON_MEDIA_TYPE},
        body=body,
    )


async def forward_to_splitter(payload, client: httpx.AsyncClient, upstream_url: str) -> bytes:
    """
    Send the rebuilt payload to the splitting service.

    Returns:
        The upstream response body

    Raises:
        SplitError: The upstream answered with a non-2xx status
        httpx.HTTPError: The call itself failed
    """
    print(f"🔄 Forwarding {len(payload.fields)} field(s) and {len(payload.files)} file(s) -> {upstream_url}")

    response = await client.post(upstream_url, **payload.to_httpx())

    print(f"📥 Splitter responded {response.status_code} ({len(response.content)} bytes)")

    if not response.is_success:
        raise SplitError.upstream_failure(response.status_code)

    return response.content


async def handle_split(
    body: bytes,
    content_type: Optional[str],
    client: httpx.AsyncClient,
    upstream_url: Optional[str] = None,
    propagate_status: Optional[bool] = None,
) -> SplitResult:
    """
    Proxy one split request.

    Args:
        body: The raw inbound request body
        content_type: The inbound Content-Type header
        client: HTTP client used for the single outbound call
        upstream_url: Splitting service URL, defaults to the configured one
        propagate_status: Return error statuses instead of 200, defaults to
            the configured mode

    Returns:
        The PDF from the splitting service, or a JSON error body
    """
    if upstream_url is None:
        upstream_url = get_upstream_url()
    if propagate_status is None:
        propagate_status = propagate_error_status()

    try:
        parts = parse_multipart(body, content_type)
        if not parts:
            raise SplitError.invalid_form()

        print(f"📦 Received {len(parts)} multipart part(s)")

        payload = build_outbound_payload(parts)
        pdf_bytes = await forward_to_splitter(payload, client, upstream_url)

        print(f"✅ Returning split PDF ({len(pdf_bytes)} bytes)")
        return SplitResult(
            status_code=200,
            headers={'Content-Type': PDF_MEDIA_TYPE},
            body=pdf_bytes,
        )
    except Exception as e:
        return error_result(e, propagate_status)
