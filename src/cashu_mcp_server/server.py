"""Cashu Mint MCP Server — NUT mint operations exposed as tools."""

import asyncio
import logging
import sys
from typing import Any, Dict, Optional

import structlog
from mcp import types
from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import Tool

from . import __version__
from .client import CashuMintConfig
from .tools.mint_tools import MintTools
from .tools.registry import ToolRegistry
from .tools.result import Failure

logger = structlog.get_logger(__name__)


class CashuMintMCPServer:
    """MCP server bridging tool calls to Cashu mints."""

    def __init__(self, config: Optional[CashuMintConfig] = None):
        self.config = config or CashuMintConfig()
        self.server = Server("cashu-mint-mcp-server")
        self.registry = ToolRegistry.for_mint_tools(MintTools(self.config))

        # Register MCP handlers
        self._register_handlers()

    # ------------------------------------------------------------------
    # MCP handlers
    # ------------------------------------------------------------------

    async def handle_call(self, name: str, arguments: Dict[str, Any]) -> str:
        """Run a tool and return its JSON text."""
        try:
            result = await self.registry.call(name, arguments)
        except Exception as e:
            logger.error("Unexpected error", error=str(e), tool=name, exc_info=True)
            result = Failure(str(e) or type(e).__name__)
        return result.to_json()

    def _register_handlers(self) -> None:
        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            tools = self.registry.get_mcp_tools()
            logger.info("list_tools", count=len(tools))
            return tools

        # Arguments are validated by the registry so failures stay JSON.
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: Dict[str, Any]) -> list[types.TextContent]:
            text = await self.handle_call(name, arguments)
            return [types.TextContent(type="text", text=text)]

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self) -> None:
        logger.info("Starting Cashu mint MCP server")
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name="cashu-mint-mcp-server",
                    server_version=__version__,
                    capabilities=types.ServerCapabilities(
                        tools=types.ToolsCapability(listChanged=False),
                    ),
                ),
            )


# ------------------------------------------------------------------
# Entry points
# ------------------------------------------------------------------


def configure_logging(level: str = "INFO") -> None:
    """JSON logs on stderr; stdout carries the MCP stream."""
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


async def async_main() -> None:
    config = CashuMintConfig()
    configure_logging(config.log_level)

    try:
        server = CashuMintMCPServer(config)
        await server.run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error("Server error", error=str(e), exc_info=True)
        sys.exit(1)


def main() -> None:
    """Synchronous entry point for console script."""
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
