"""
Page API Routes

Provides endpoints for:
- The landing page (GET /)
"""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse
from jinja2 import TemplateError

from .renderer import render_page, new_cache_buster

logger = logging.getLogger(__name__)

# ============================================
# Router
# ============================================

router = APIRouter(tags=["Page"])


# ============================================
# Endpoints
# ============================================

@router.get("/", response_class=HTMLResponse)
async def serve_html():
    """
    Serve the landing page.

    The embedded image URL carries a fresh timestamp on every render, so
    each page load triggers a new request to the proxy endpoint.
    """
    try:
        body = render_page(new_cache_buster())
    except TemplateError:
        logger.exception("[PageRenderer] Error executing HTML template")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    return HTMLResponse(content=body)
