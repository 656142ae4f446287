"""Shared fixtures for tests."""

import json
from pathlib import Path

import pytest

from cashu_mcp_server.client import CashuMintConfig
from cashu_mcp_server.tools.mint_tools import MintTools
from cashu_mcp_server.tools.registry import ToolRegistry

FIXTURES_DIR = Path(__file__).parent / "fixtures"

MINT_URL = "https://mint.example.com"


def _load(name: str) -> dict:
    with open(FIXTURES_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def mint_info() -> dict:
    """NUT-06 /v1/info response."""
    return _load("mint_info.json")


@pytest.fixture
def keysets() -> dict:
    """NUT-02 /v1/keysets response."""
    return _load("keysets.json")


@pytest.fixture
def keys() -> dict:
    """NUT-01 /v1/keys response."""
    return _load("keys.json")


@pytest.fixture
def config() -> CashuMintConfig:
    return CashuMintConfig(timeout=5, max_retries=0)


@pytest.fixture
def registry(config) -> ToolRegistry:
    return ToolRegistry.for_mint_tools(MintTools(config))
