"""Tests for tools.registry."""

import json

import pytest
from mcp.types import Tool

from cashu_mcp_server.client import CashuMintError
from cashu_mcp_server.models.schemas import MintToolArgs
from cashu_mcp_server.tools.definitions import TOOL_DEFINITIONS
from cashu_mcp_server.tools.registry import RegisteredTool, ToolRegistry
from cashu_mcp_server.tools.result import Failure, Success


def _tool(name: str, handler) -> RegisteredTool:
    return RegisteredTool(
        definition=Tool(name=name, description="test", inputSchema={"type": "object"}),
        args_model=MintToolArgs,
        handler=handler,
    )


MINT_TOOL_NAMES = {
    "get_mint_info",
    "get_mint_keysets",
    "get_mint_keys",
    "check_proof_states",
    "request_mint_quote",
    "get_mint_quote_state",
    "execute_mint",
}


class TestToolDefinitions:
    def test_tool_names(self):
        assert {t.name for t in TOOL_DEFINITIONS} == MINT_TOOL_NAMES

    def test_all_have_schemas_requiring_mint_url(self):
        for tool in TOOL_DEFINITIONS:
            assert tool.inputSchema["type"] == "object"
            assert "mintUrl" in tool.inputSchema["properties"]
            assert "mintUrl" in tool.inputSchema["required"]

    def test_unit_defaults_to_sat(self):
        quote_tool = next(t for t in TOOL_DEFINITIONS if t.name == "request_mint_quote")
        assert quote_tool.inputSchema["properties"]["unit"]["default"] == "sat"
        assert quote_tool.inputSchema["required"] == ["mintUrl", "amount"]

    def test_optional_and_payload_schemas_accept_registry_inputs(self):
        schemas = {t.name: t.inputSchema["properties"] for t in TOOL_DEFINITIONS}
        assert "null" in schemas["get_mint_keys"]["keysetId"]["type"]
        assert "array" in schemas["check_proof_states"]["proofsJson"]["type"]
        assert "array" in schemas["execute_mint"]["blindedOutputsJson"]["type"]


class TestToolRegistry:
    def test_for_mint_tools_registers_all(self, registry):
        names = [t.name for t in registry.get_mcp_tools()]
        assert len(names) == 7
        assert set(names) == MINT_TOOL_NAMES
        assert all(registry.get(name) is not None for name in names)

    def test_get_mcp_tools(self, registry):
        tools = registry.get_mcp_tools()
        assert all(isinstance(t, Tool) for t in tools)
        for t in tools:
            assert t.name
            assert t.description
            assert t.inputSchema

    def test_registry_is_immutable(self, registry):
        with pytest.raises(TypeError):
            registry._tools["evil"] = registry.get("get_mint_info")

    def test_get_unknown_returns_none(self, registry):
        assert registry.get("melt") is None

    async def test_unknown_tool_is_failure(self, registry):
        result = await registry.call("melt", {})
        assert isinstance(result, Failure)
        assert json.loads(result.to_json()) == {"error": "Unknown tool: melt"}

    async def test_missing_required_argument(self, registry):
        result = await registry.call("get_mint_info", {})
        assert isinstance(result, Failure)
        assert result.message == "Invalid arguments: mintUrl: Field required"

    async def test_none_arguments_treated_as_empty(self, registry):
        result = await registry.call("get_mint_keysets", None)
        assert isinstance(result, Failure)
        assert "mintUrl" in result.message


class TestFailureBoundary:
    async def test_handler_exception_becomes_failure(self):
        async def explode(args):
            raise RuntimeError("kaboom")

        registry = ToolRegistry([_tool("explode", explode)])
        result = await registry.call("explode", {"mintUrl": "https://mint.example.com"})
        assert result == Failure("kaboom")

    async def test_exception_without_message_uses_class_name(self):
        async def explode(args):
            raise KeyError()

        registry = ToolRegistry([_tool("explode", explode)])
        result = await registry.call("explode", {"mintUrl": "https://mint.example.com"})
        assert result == Failure("KeyError")

    async def test_mint_error_message_kept(self):
        async def reject(args):
            raise CashuMintError("Mint request failed: 400 - quote not paid", 400, 20001)

        registry = ToolRegistry([_tool("reject", reject)])
        result = await registry.call("reject", {"mintUrl": "https://mint.example.com"})
        assert result == Failure("Mint request failed: 400 - quote not paid")

    async def test_success_passes_through(self):
        async def echo(args):
            return Success({"mint": args.mint_url})

        registry = ToolRegistry([_tool("echo", echo)])
        result = await registry.call("echo", {"mintUrl": "https://mint.example.com"})
        assert json.loads(result.to_json()) == {"mint": "https://mint.example.com"}


class TestResultJson:
    def test_success_is_indented(self):
        text = Success({"a": 1}).to_json()
        assert text == '{\n  "a": 1\n}'

    def test_failure_is_indented(self):
        text = Failure("nope").to_json()
        assert text == '{\n  "error": "nope"\n}'
