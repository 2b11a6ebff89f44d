"""
Configuration and shared helpers for the split proxy.
"""

from typing import Dict, Any, AsyncIterator, Optional
import httpx
import os


DEFAULT_UPSTREAM_URL = "https://pdf-splitter.koyeb.app/split"


def get_upstream_url() -> str:
    """
    Get the URL of the PDF splitting service.

    Returns:
        PDF_SPLITTER_URL from the environment, or the public splitter endpoint
    """
    return os.environ.get('PDF_SPLITTER_URL', DEFAULT_UPSTREAM_URL)


def get_upstream_timeout() -> Optional[float]:
    """
    Get the timeout in seconds for the outbound call.

    Returns:
        PDF_SPLITTER_TIMEOUT as a float, or None to wait as long as the
        splitting service takes
    """
    value = os.environ.get('PDF_SPLITTER_TIMEOUT', '').strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        print(f"⚠️  Ignoring invalid PDF_SPLITTER_TIMEOUT: {value!r}")
        return None


def propagate_error_status() -> bool:
    """
    Whether error responses carry their own HTTP status.

    Existing clients expect every error as a 200 JSON body, so this is off
    unless SPLIT_PROPAGATE_ERROR_STATUS is set to a true value.
    """
    value = os.environ.get('SPLIT_PROPAGATE_ERROR_STATUS', '')
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def get_httpx_client_config() -> Dict[str, Any]:
    """
    Get the configuration for httpx client.

    Returns:
        Dictionary with httpx client configuration
    """
    return {
        'timeout': httpx.Timeout(get_upstream_timeout()),
        'follow_redirects': True,
    }


async def get_split_client() -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client dependency providing one client per request."""
    async with httpx.AsyncClient(**get_httpx_client_config()) as client:
        yield client
