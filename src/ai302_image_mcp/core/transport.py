# ============================================================================
# 302AI IMAGE MCP - TRANSPORT LAYER
# ============================================================================
# Copyright 2026 302.AI. All Rights Reserved.
#
# DUAL TRANSPORT ARCHITECTURE:
# - STDIO:  Local MCP clients (Claude Desktop, Cursor, VS Code)
# - REST:   Hosted deployment, MCP over HTTP at a single endpoint
#           (stateless streamable HTTP with plain JSON responses)
#
# Only one transport runs per process.
# ============================================================================

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from typing import Any, Callable

from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.types import Receive, Scope, Send

logger = logging.getLogger(__name__)

__all__ = [
    "run_stdio",
    "run_http",
    "create_http_app",
]


# ============================================================================
# STDIO TRANSPORT - Local IDE Integration
# ============================================================================

def run_stdio(
    server: Server,
    init_options: InitializationOptions,
) -> None:
    """Run MCP server in STDIO mode. Blocks until stdin closes."""
    asyncio.run(_stdio_async(server, init_options))


async def _stdio_async(
    server: Server,
    init_options: InitializationOptions,
) -> None:
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Stdio server started successfully")
        await server.run(read_stream, write_stream, init_options)


# ============================================================================
# REST TRANSPORT - Hosted Deployment
# ============================================================================

def run_http(
    server: Server,
    name: str,
    version: str,
    host: str = "0.0.0.0",
    port: int = 9593,
    endpoint: str = "/rest",
    server_card_builder: Callable[[], dict] | None = None,
) -> None:
    """Run MCP server over HTTP. Blocks until uvicorn shuts down (SIGINT/SIGTERM)."""
    import uvicorn

    app = create_http_app(server, name, version, endpoint, server_card_builder)

    logger.info(
        "HTTP server starting",
        extra={"data": {"url": f"http://{host}:{port}{endpoint}"}},
    )
    uvicorn.run(app, host=host, port=port, log_level="info")


class _StreamableEndpoint:
    """Raw ASGI endpoint so Starlette routes it without a trailing-slash redirect."""

    def __init__(self, session_manager: StreamableHTTPSessionManager) -> None:
        self.session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.session_manager.handle_request(scope, receive, send)


def create_http_app(
    server: Server,
    name: str,
    version: str,
    endpoint: str = "/rest",
    server_card_builder: Callable[[], dict] | None = None,
) -> Any:
    """Create Starlette ASGI application serving MCP at `endpoint`."""
    from starlette.applications import Starlette
    from starlette.routing import Route
    from starlette.responses import JSONResponse
    from starlette.middleware.cors import CORSMiddleware

    session_manager = StreamableHTTPSessionManager(
        app=server,
        json_response=True,
        stateless=True,
    )

    async def server_card(request):
        card = server_card_builder() if server_card_builder else {"name": name, "version": version}
        return JSONResponse(card)

    async def health(request):
        return JSONResponse({"status": "ok", "version": version})

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info("REST server started successfully", extra={"data": {"endpoint": endpoint}})
            yield
        logger.info("REST server stopped")

    app = Starlette(
        debug=False,
        routes=[
            Route("/.well-known/mcp/server-card.json", endpoint=server_card, methods=["GET"]),
            Route("/health", endpoint=health, methods=["GET"]),
            Route(endpoint, endpoint=_StreamableEndpoint(session_manager), methods=["GET", "POST", "DELETE"]),
        ],
        lifespan=lifespan,
    )

    app = CORSMiddleware(
        app,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
        expose_headers=["Mcp-Session-Id"],
    )

    return app
