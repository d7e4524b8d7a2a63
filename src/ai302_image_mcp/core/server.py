# ============================================================================
# 302AI IMAGE MCP - BASE SERVER
# ============================================================================
# Copyright 2026 302.AI. All Rights Reserved.
#
# Base MCP server: owns the low-level mcp Server, binds tools/list and
# tools/call to subclass coroutines, and picks the transport.
#
# Handlers are registered directly on server.request_handlers so that
# tools/call errors travel through the JSON-RPC error channel unchanged and
# tools/call never triggers an implicit tools/list.
# ============================================================================

import logging
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.lowlevel.server import NotificationOptions
from pydantic import ValidationError
from starlette.requests import Request

from .errors import UpstreamTransportError
from .transport import run_stdio, run_http

logger = logging.getLogger(__name__)

__all__ = [
    "BaseMCPServer",
    "create_mcp_server",
]


def create_mcp_server(name: str, version: str, instructions: str) -> Server:
    """Create a configured MCP Server instance."""
    return Server(name=name, version=version, instructions=instructions)


class BaseMCPServer:
    """Base MCP server with shared infrastructure.
    Provides: Server initialization, protocol handlers, transport selection.
    Subclasses implement: handle_list_tools, handle_call_tool.
    """

    def __init__(self, name: str, version: str, instructions: str) -> None:
        self.name = name
        self.version = version
        self.instructions = instructions
        self.server = create_mcp_server(name, version, instructions)

    async def handle_list_tools(self, request: types.ListToolsRequest) -> dict[str, Any]:
        raise NotImplementedError

    async def handle_call_tool(self, request: types.CallToolRequest) -> dict[str, Any]:
        raise NotImplementedError

    def setup_handlers(self) -> None:
        """Set up MCP protocol handlers."""
        self._setup_tool_handlers()

    def _setup_tool_handlers(self) -> None:
        async def list_tools(request: types.ListToolsRequest) -> types.ServerResult:
            result = await self.handle_list_tools(request)
            try:
                tools_result = types.ListToolsResult.model_validate(result)
            except ValidationError as e:
                # Descriptors the SDK cannot represent, e.g. without inputSchema
                logger.error("Invalid tool descriptors", extra={"data": {"error": str(e)}})
                raise UpstreamTransportError(f"Failed to fetch tools: {e}") from e
            return types.ServerResult(tools_result)

        async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
            result = await self.handle_call_tool(request)
            return types.ServerResult(types.CallToolResult.model_validate(result))

        self.server.request_handlers[types.ListToolsRequest] = list_tools
        self.server.request_handlers[types.CallToolRequest] = call_tool

    def get_http_request(self) -> Request | None:
        """HTTP request behind the MCP request being handled, if any.
        None in STDIO mode or outside a request.
        """
        try:
            ctx = self.server.request_context
        except LookupError:
            return None

        request = getattr(ctx, "request", None)
        if request is None or not isinstance(request, Request):
            return None
        return request

    def get_init_options(self) -> InitializationOptions:
        return InitializationOptions(
            server_name=self.name,
            server_version=self.version,
            capabilities=self.server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
            instructions=self.instructions,
        )

    def build_server_card(self) -> dict:
        return {
            "name": self.name,
            "version": self.version,
            "description": self.instructions,
            "capabilities": {"tools": True},
        }

    def run(
        self,
        mode: str = "stdio",
        host: str = "0.0.0.0",
        port: int = 9593,
        endpoint: str = "/rest",
    ) -> None:
        """Run the MCP server on exactly one transport."""
        logger.info(
            "Starting server",
            extra={"data": {"mode": mode, "port": port, "endpoint": endpoint}},
        )
        if mode == "rest":
            logger.info("Starting REST server", extra={"data": {"port": port, "endpoint": endpoint}})
            run_http(
                server=self.server,
                name=self.name,
                version=self.version,
                host=host,
                port=port,
                endpoint=endpoint,
                server_card_builder=self.build_server_card,
            )
        else:
            logger.info("Starting stdio server")
            run_stdio(
                server=self.server,
                init_options=self.get_init_options(),
            )
