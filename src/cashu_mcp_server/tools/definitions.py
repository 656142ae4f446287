"""MCP tool definitions for the Cashu mint tools."""

from __future__ import annotations

from mcp.types import Tool

# ─── Shared schema fragments ─────────────────────────────────────────

_MINT_URL = {
    "type": "string",
    "description": "Base URL of the Cashu mint (e.g. https://mint.example.com)",
}

_QUOTE_ID = {
    "type": "string",
    "description": "Quote ID returned by request_mint_quote",
}

# ─── Tool definitions ────────────────────────────────────────────────

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="get_mint_info",
        description=(
            "Get information about a Cashu mint including name, version, "
            "contact info, and supported features (NUTs)."
        ),
        inputSchema={
            "type": "object",
            "properties": {"mintUrl": _MINT_URL},
            "required": ["mintUrl"],
        },
    ),
    Tool(
        name="get_mint_keysets",
        description=(
            "Get all keysets from a Cashu mint with their IDs, units, active "
            "flag, and input fee (ppk)."
        ),
        inputSchema={
            "type": "object",
            "properties": {"mintUrl": _MINT_URL},
            "required": ["mintUrl"],
        },
    ),
    Tool(
        name="get_mint_keys",
        description=(
            "Get the public keys of a Cashu mint, per denomination. Returns all "
            "active keysets unless keysetId is given."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "mintUrl": _MINT_URL,
                "keysetId": {
                    "type": ["string", "null"],
                    "description": "Optional keyset ID to fetch keys for",
                },
            },
            "required": ["mintUrl"],
        },
    ),
    Tool(
        name="check_proof_states",
        description=(
            "Check the state of Cashu proofs (UNSPENT, PENDING or SPENT) on a mint."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "mintUrl": _MINT_URL,
                "proofsJson": {
                    "type": ["string", "array"],
                    "description": (
                        "JSON array of proofs, each with amount, id, secret and C"
                    ),
                },
            },
            "required": ["mintUrl", "proofsJson"],
        },
    ),
    Tool(
        name="request_mint_quote",
        description=(
            "Request a mint quote for creating new Cashu tokens. Returns a "
            "Lightning invoice to pay."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "mintUrl": _MINT_URL,
                "amount": {
                    "type": "integer",
                    "description": "Amount to mint, in the given unit",
                    "minimum": 0,
                },
                "unit": {
                    "type": ["string", "null"],
                    "description": "Currency unit",
                    "default": "sat",
                },
                "description": {
                    "type": ["string", "null"],
                    "description": "Optional description attached to the invoice",
                },
            },
            "required": ["mintUrl", "amount"],
        },
    ),
    Tool(
        name="get_mint_quote_state",
        description=(
            "Check the state of a mint quote to see if the Lightning invoice "
            "has been paid."
        ),
        inputSchema={
            "type": "object",
            "properties": {"mintUrl": _MINT_URL, "quoteId": _QUOTE_ID},
            "required": ["mintUrl", "quoteId"],
        },
    ),
    Tool(
        name="execute_mint",
        description=(
            "Execute the mint operation after the Lightning invoice is paid. "
            "Requires blinded outputs; returns blind signatures."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "mintUrl": _MINT_URL,
                "quoteId": _QUOTE_ID,
                "blindedOutputsJson": {
                    "type": ["string", "array"],
                    "description": (
                        "JSON array of blinded messages, each with amount, id and B_"
                    ),
                },
            },
            "required": ["mintUrl", "quoteId", "blindedOutputsJson"],
        },
    ),
]
