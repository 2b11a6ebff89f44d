"""
FastAPI router for the split proxy.
"""

from fastapi import APIRouter, Depends, Request, Response
import httpx

from models.schemas import SplitInfoResponse
from .base import (
    get_split_client, get_upstream_url, get_upstream_timeout, propagate_error_status
)
from .split_handler import handle_split

router = APIRouter(prefix="/api", tags=["split"])


@router.post("/split")
async def split_pdf(request: Request, client: httpx.AsyncClient = Depends(get_split_client)):
    """
    Forward an uploaded PDF to the splitting service and return its PDF.
    Failures come back as {"error": "<message>"}.
    """
    body = await request.body()
    content_type = request.headers.get('content-type')

    print(f"📨 {request.method} {request.url.path} ({len(body)} bytes, {content_type})")

    result = await handle_split(
        body,
        content_type,
        client,
        upstream_url=get_upstream_url(),
        propagate_status=propagate_error_status(),
    )

    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers,
    )


@router.get("/split/info", response_model=SplitInfoResponse)
async def split_info():
    """
    Show where split requests are forwarded and how errors are reported.
    """
    return SplitInfoResponse(
        upstream_url=get_upstream_url(),
        timeout=get_upstream_timeout(),
        propagate_error_status=propagate_error_status(),
    )
