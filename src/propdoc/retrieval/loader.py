"""Template asset fetch — remote (http/https) or local file.

Remote assets are fetched with httpx; local files are read on a worker
thread so the event loop is never blocked by disk I/O.
"""

import asyncio
import logging
import time
from pathlib import Path
from urllib.parse import unquote, urlparse

import httpx

from propdoc.config import settings
from propdoc.core.errors import AssetUnavailable
from propdoc.observability.tracing import trace

logger = logging.getLogger(__name__)


def _is_remote(location: str) -> bool:
    return urlparse(location).scheme in ("http", "https")


def _local_path(location: str) -> Path:
    parsed = urlparse(location)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return Path(location)


@trace(name="fetch_asset", span_type="RETRIEVER")
async def fetch_asset(location: str) -> bytes:
    """Retrieve the raw template asset.

    Raises:
        AssetUnavailable: on network/storage error or a non-success response.
    """
    start = time.monotonic()
    if _is_remote(location):
        data = await _fetch_remote(location)
    else:
        data = await _read_local(location)

    logger.info(
        "Loaded template asset %s (%d bytes)", location, len(data),
        extra={"step": "fetch_asset", "duration_ms": round((time.monotonic() - start) * 1000, 1)},
    )
    return data


async def _fetch_remote(url: str) -> bytes:
    try:
        async with httpx.AsyncClient(timeout=settings.asset_timeout_seconds, follow_redirects=True) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            return resp.content
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.error("Template asset %s returned HTTP %d", url, status)
        raise AssetUnavailable(url, f"HTTP {status}", status_code=status) from e
    except httpx.TimeoutException as e:
        logger.error("Template asset %s timed out", url)
        raise AssetUnavailable(url, "timed out") from e
    except httpx.HTTPError as e:
        logger.error("Template asset %s failed: %s", url, e)
        raise AssetUnavailable(url, str(e) or type(e).__name__) from e


async def _read_local(location: str) -> bytes:
    path = _local_path(location)
    try:
        return await asyncio.to_thread(path.read_bytes)
    except OSError as e:
        logger.error("Template asset %s unreadable: %s", path, e)
        raise AssetUnavailable(location, e.strerror or str(e)) from e
