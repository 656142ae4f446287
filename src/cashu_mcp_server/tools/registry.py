"""Tool registry: maps tool names to handlers and guards every call."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping

import structlog
from mcp.types import Tool
from pydantic import BaseModel, ValidationError

from ..client import CashuMintError
from ..models.schemas import (
    CheckProofStatesArgs,
    ExecuteMintArgs,
    GetMintKeysArgs,
    GetMintQuoteStateArgs,
    MintToolArgs,
    RequestMintQuoteArgs,
)
from .definitions import TOOL_DEFINITIONS
from .mint_tools import MintTools
from .result import Failure, ToolResult

logger = structlog.get_logger(__name__)

Handler = Callable[[Any], Awaitable[ToolResult]]


@dataclass(frozen=True)
class RegisteredTool:
    """One callable tool: its MCP definition, argument model and handler."""

    definition: Tool
    args_model: type[BaseModel]
    handler: Handler

    @property
    def name(self) -> str:
        return self.definition.name


def describe_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        where = ".".join(str(p) for p in err["loc"]) or "arguments"
        parts.append(f"{where}: {err['msg']}")
    return "Invalid arguments: " + "; ".join(parts)


class ToolRegistry:
    """Immutable name → tool mapping, built once at start-up."""

    def __init__(self, tools: list[RegisteredTool]):
        self._tools: Mapping[str, RegisteredTool] = MappingProxyType(
            {t.name: t for t in tools}
        )
        logger.info("Tool registry loaded", tool_count=len(self._tools))

    @classmethod
    def for_mint_tools(cls, mint_tools: MintTools) -> "ToolRegistry":
        """Build the registry of the seven mint tools."""
        definitions = {t.name: t for t in TOOL_DEFINITIONS}
        wiring: list[tuple[str, type[BaseModel], Handler]] = [
            ("get_mint_info", MintToolArgs, mint_tools.get_mint_info),
            ("get_mint_keysets", MintToolArgs, mint_tools.get_mint_keysets),
            ("get_mint_keys", GetMintKeysArgs, mint_tools.get_mint_keys),
            ("check_proof_states", CheckProofStatesArgs, mint_tools.check_proof_states),
            ("request_mint_quote", RequestMintQuoteArgs, mint_tools.request_mint_quote),
            ("get_mint_quote_state", GetMintQuoteStateArgs, mint_tools.get_mint_quote_state),
            ("execute_mint", ExecuteMintArgs, mint_tools.execute_mint),
        ]
        return cls(
            [
                RegisteredTool(definitions[name], args_model, handler)
                for name, args_model, handler in wiring
            ]
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, tool_name: str) -> RegisteredTool | None:
        return self._tools.get(tool_name)

    def get_mcp_tools(self) -> list[Tool]:
        return [t.definition for t in self._tools.values()]

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    async def call(self, tool_name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """Run one tool call. Never raises; failures come back as Failure."""
        tool = self.get(tool_name)
        if tool is None:
            return Failure(f"Unknown tool: {tool_name}")

        logger.info("call_tool", tool=tool_name)
        try:
            args = tool.args_model.model_validate(arguments or {})
            result = await tool.handler(args)
        except ValidationError as e:
            result = Failure(describe_validation_error(e))
        except CashuMintError as e:
            logger.warning(
                "Mint error",
                tool=tool_name,
                status_code=e.status_code,
                code=e.code,
            )
            result = Failure(str(e))
        except Exception as e:
            result = Failure(str(e) or type(e).__name__)

        if isinstance(result, Failure):
            logger.warning("Tool call failed", tool=tool_name, error=result.message)
        return result
