"""Cashu mint tools exposed over MCP."""

from .definitions import TOOL_DEFINITIONS
from .mint_tools import MintTools
from .registry import RegisteredTool, ToolRegistry
from .result import Failure, Success, ToolResult

__all__ = [
    "TOOL_DEFINITIONS",
    "MintTools",
    "RegisteredTool",
    "ToolRegistry",
    "Success",
    "Failure",
    "ToolResult",
]
