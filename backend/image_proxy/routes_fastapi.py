"""
Image Proxy API Routes

Provides endpoints for:
- Relaying one image from the upstream API (GET /image-from-api)
"""

import asyncio
import logging
from typing import AsyncIterator, Mapping

import httpx
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from .upstream import UpstreamImageClient, get_upstream_client

logger = logging.getLogger(__name__)

# ============================================
# Configuration
# ============================================

DEFAULT_CONTENT_TYPE = "image/jpeg"

# Browsers and intermediate caches must re-request every time
NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

# ============================================
# Router
# ============================================

router = APIRouter(tags=["Image Proxy"])


# ============================================
# Helpers
# ============================================

def resolve_content_type(headers: Mapping[str, str]) -> str:
    """
    Content type to send to the client.

    The upstream value is trusted and forwarded as-is; the body is never
    sniffed. Falls back to image/jpeg when the header is missing.
    """
    content_type = headers.get("content-type", "")
    if not content_type:
        logger.warning(
            f"[ImageProxy] Upstream did not provide Content-Type, assuming {DEFAULT_CONTENT_TYPE}"
        )
        return DEFAULT_CONTENT_TYPE
    return content_type


async def relay_body(upstream: httpx.Response, content_type: str) -> AsyncIterator[bytes]:
    """
    Yield the upstream body chunk by chunk, then release it.

    Once the first chunk is out the status line and headers are already
    committed, so failures here are logged and the body is cut short.
    """
    try:
        async for chunk in upstream.aiter_bytes():
            yield chunk
    except httpx.HTTPError as e:
        logger.error(f"[ImageProxy] Failed to stream image data to client: {e}")
        return
    except asyncio.CancelledError:
        logger.warning("[ImageProxy] Client went away while streaming image")
        raise
    finally:
        await upstream.aclose()

    logger.info(f"[ImageProxy] Successfully served image with Content-Type: {content_type}")


# ============================================
# Endpoints
# ============================================

@router.get("/image-from-api")
async def serve_image_from_api(
    upstream_client: UpstreamImageClient = Depends(get_upstream_client),
):
    """
    Fetch one image from the upstream API and stream it back.

    This endpoint:
    1. Issues a single GET to the upstream (no retries)
    2. Answers 502 on transport errors or any non-200 upstream status
    3. Forwards the upstream Content-Type (image/jpeg if absent)
    4. Streams the body through without buffering it
    """
    logger.info("[ImageProxy] Request received for /image-from-api")

    try:
        upstream = await upstream_client.open()
    except httpx.RequestError as e:
        logger.error(f"[ImageProxy] Failed to get image from external API: {e!r}")
        raise HTTPException(status_code=502, detail="Failed to fetch image from source")

    if upstream.status_code != 200:
        await upstream.aclose()
        logger.error(
            f"[ImageProxy] External API request failed with status code: "
            f"{upstream.status_code} {upstream.reason_phrase}"
        )
        raise HTTPException(status_code=502, detail="Image source API returned an error")

    content_type = resolve_content_type(upstream.headers)

    # relay_body closes the upstream once it has been iterated; the
    # background task covers a body that was never started. aclose is
    # idempotent.
    return StreamingResponse(
        relay_body(upstream, content_type),
        headers={"Content-Type": content_type, **NO_CACHE_HEADERS},
        background=BackgroundTask(upstream.aclose),
    )
