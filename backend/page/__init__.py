"""
Page Module

Serves the landing page that embeds the proxied image.

Features:
- Template compiled once at import, shared read-only by every request
- Nanosecond cache-busting token on the image URL
"""

from .routes_fastapi import router
from .renderer import render_page, new_cache_buster

__all__ = ["router", "render_page", "new_cache_buster"]
