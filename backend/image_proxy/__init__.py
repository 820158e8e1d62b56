"""
Image Proxy Module

Relays a single image from a fixed upstream image API.

Features:
- One outbound request per inbound request, no retries
- Upstream Content-Type forwarded as-is (image/jpeg fallback)
- Streaming copy with cache suppression headers
"""

from .routes_fastapi import router, resolve_content_type, NO_CACHE_HEADERS
from .upstream import UpstreamImageClient, get_upstream_client

__all__ = [
    "router",
    "resolve_content_type",
    "NO_CACHE_HEADERS",
    "UpstreamImageClient",
    "get_upstream_client",
]
