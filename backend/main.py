"""
Cat Vibe Checker Server

Process entry point: builds the FastAPI app, binds the listener and runs
uvicorn until the process is terminated.

Usage:
    cd backend
    python main.py
"""

import logging
import socket
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
from image_proxy import router as image_proxy_router, UpstreamImageClient
from page import router as page_router

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Response model for the health endpoint."""
    status: str
    service: str


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    """Send all log records to stderr with a single format."""
    logging.basicConfig(level=level, format=config.LOG_FORMAT)


def create_app(upstream_client: Optional[UpstreamImageClient] = None) -> FastAPI:
    """
    Build the application.

    Args:
        upstream_client: client to use for the proxy endpoint. When omitted
            one is created on startup from the environment settings.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "upstream_client", None) is None:
            app.state.upstream_client = UpstreamImageClient()
        logger.info(f"[Server] Proxying images from {app.state.upstream_client.url}")
        yield
        await app.state.upstream_client.aclose()

    app = FastAPI(title="Cat Vibe Checker", lifespan=lifespan)
    if upstream_client is not None:
        app.state.upstream_client = upstream_client

    @app.exception_handler(StarletteHTTPException)
    async def plain_text_error(request: Request, exc: StarletteHTTPException):
        """Error responses are a short plain-text message, never JSON detail."""
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    app.include_router(page_router)
    app.include_router(image_proxy_router)

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            service="cat-vibe-checker",
        )

    return app


def bind_listener(host: str, port: int) -> socket.socket:
    """
    Bind the listening socket.

    Raises:
        OSError: if the address cannot be bound (e.g. port already in use).
    """
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    return sock


def main() -> None:
    configure_logging()
    logger.info("[Server] Starting server...")

    try:
        sock = bind_listener(config.HOST, config.PORT)
    except OSError as e:
        logger.critical(f"[Server] Server failed to start: {e}")
        sys.exit(1)

    logger.info(f"[Server] Server starting on http://localhost:{config.PORT}")
    server = uvicorn.Server(uvicorn.Config(create_app(), log_config=None))
    server.run(sockets=[sock])


if __name__ == "__main__":
    main()
