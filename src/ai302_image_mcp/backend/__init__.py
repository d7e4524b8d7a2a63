# ============================================================================
# 302AI IMAGE MCP - BACKEND MODULE
# ============================================================================
# Copyright 2026 302.AI. All Rights Reserved.
#
# Public API:
#   AI302Client            - HTTP client for the 302.AI tool gateway
#   ImageToolsMCPServer    - MCP server proxying the imageTools pack
#   create_image_server    - Factory function
# ============================================================================

from .client import AI302Client
from .tools import (
    SERVER_NAME,
    ImageToolsMCPServer,
    create_image_server,
)

__all__ = [
    "AI302Client",
    "SERVER_NAME",
    "ImageToolsMCPServer",
    "create_image_server",
]
