# ============================================================================
# 302AI IMAGE MCP - CORE MODULE
# ============================================================================
# Copyright 2026 302.AI. All Rights Reserved.
#
# Shared core components for the MCP server:
#   - Base MCP server class
#   - Transport layer (STDIO + REST)
#   - Credential resolution
#   - Settings, logging, error kinds
#
# ARCHITECTURE:
# ImageToolsMCPServer (backend) extends BaseMCPServer and forwards
# tools/list and tools/call to the 302.AI tool gateway.
# ============================================================================

from .auth import (
    API_KEY_NAME,
    extract_api_key_from_meta,
    extract_api_key_from_request,
    CredentialResolver,
)
from .config import Settings
from .errors import (
    ImageMCPError,
    MissingCredentialError,
    UpstreamHTTPError,
    UpstreamTransportError,
)
from .logger import configure_logging
from .server import (
    BaseMCPServer,
    create_mcp_server,
)
from .transport import (
    run_stdio,
    run_http,
    create_http_app,
)

__all__ = [
    "API_KEY_NAME",
    "extract_api_key_from_meta",
    "extract_api_key_from_request",
    "CredentialResolver",
    "Settings",
    "ImageMCPError",
    "MissingCredentialError",
    "UpstreamHTTPError",
    "UpstreamTransportError",
    "configure_logging",
    "BaseMCPServer",
    "create_mcp_server",
    "run_stdio",
    "run_http",
    "create_http_app",
]
