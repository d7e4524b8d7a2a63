# ============================================================================
# 302AI IMAGE MCP - ERROR KINDS
# ============================================================================
# Copyright 2026 302.AI. All Rights Reserved.
#
# All errors derive from McpError so the MCP session returns them to the
# caller as JSON-RPC errors with the original code and message.
#
#   MissingCredentialError  - INVALID_PARAMS, no API key could be resolved
#   UpstreamHTTPError       - INTERNAL_ERROR, upstream answered non-2xx
#   UpstreamTransportError  - INTERNAL_ERROR, network failure / bad body
# ============================================================================

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, ErrorData

__all__ = [
    "ImageMCPError",
    "MissingCredentialError",
    "UpstreamHTTPError",
    "UpstreamTransportError",
]


class ImageMCPError(McpError):
    """Base class for errors surfaced through the MCP error channel."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(ErrorData(code=self.code, message=message))

    @property
    def message(self) -> str:
        return self.error.message


class MissingCredentialError(ImageMCPError):
    code = INVALID_PARAMS

    def __init__(self, message: str = "API key is required to call the tool") -> None:
        super().__init__(message)


class UpstreamHTTPError(ImageMCPError):
    """Upstream returned a non-success status."""

    def __init__(self, status_code: int, reason: str, body: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"HTTP {status_code}: {reason}")


class UpstreamTransportError(ImageMCPError):
    """Request never produced a usable response (network error, malformed JSON)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
