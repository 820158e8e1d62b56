"""
Upstream Image Client

Thin wrapper around the shared httpx client used to reach the upstream
image API. One instance lives for the whole process and is safe to use
from concurrent requests; it holds no per-request state.
"""

import logging
from typing import Optional

import httpx
from fastapi import Request

import config

logger = logging.getLogger(__name__)


class UpstreamImageClient:
    """
    Fetches images from a single fixed upstream endpoint.

    Usage:
        client = UpstreamImageClient()
        response = await client.open()
        try:
            async for chunk in response.aiter_bytes():
                ...
        finally:
            await response.aclose()
    """

    def __init__(
        self,
        url: str = config.UPSTREAM_IMAGE_URL,
        timeout: Optional[float] = config.UPSTREAM_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url

        client_kwargs = {"follow_redirects": True}
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        if transport is not None:
            client_kwargs["transport"] = transport

        self.http_client = httpx.AsyncClient(**client_kwargs)

    async def open(self) -> httpx.Response:
        """
        Issue one GET to the upstream and return the open response.

        The body is not read; the caller owns the response and must
        close it. No retries are attempted.

        Raises:
            httpx.RequestError: on DNS, connection or timeout failures.
        """
        request = self.http_client.build_request("GET", self.url)
        return await self.http_client.send(request, stream=True)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.http_client.aclose()
        logger.info("[ImageProxy] Upstream client closed")


def get_upstream_client(request: Request) -> UpstreamImageClient:
    """Dependency returning the process-wide upstream client."""
    return request.app.state.upstream_client
