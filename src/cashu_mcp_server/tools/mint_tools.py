"""Handlers that map each tool onto one mint exchange."""

from __future__ import annotations

import json
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..client import CashuMintClient, CashuMintConfig
from ..models.schemas import (
    BlindedMessage,
    CheckProofStatesArgs,
    ExecuteMintArgs,
    GetMintKeysArgs,
    GetMintQuoteStateArgs,
    MintToolArgs,
    PostCheckStateRequest,
    PostMintBolt11Request,
    PostMintQuoteBolt11Request,
    PostMintQuoteBolt11Response,
    Proof,
    RequestMintQuoteArgs,
)
from .result import Failure, Success, ToolResult

PAYMENT_METHOD = "bolt11"

INVALID_PROOFS = "Invalid or empty proofs array"
INVALID_OUTPUTS = "Invalid or empty blinded outputs array"

ItemT = TypeVar("ItemT", bound=BaseModel)


def parse_json_array(raw: Any, item_model: Type[ItemT]) -> Optional[list[ItemT]]:
    """Parse *raw* into a non-empty list of *item_model*, or None."""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except (ValueError, RecursionError):
            return None
    if not isinstance(raw, list) or not raw:
        return None
    try:
        return TypeAdapter(list[item_model]).validate_python(raw)
    except ValidationError:
        return None


def _quote_payload(response: PostMintQuoteBolt11Response) -> dict[str, Any]:
    return {
        "quote": response.quote,
        "request": response.request,
        "state": response.state,
        "expiry": response.expiry,
        "amount": response.amount,
        "unit": response.unit,
    }


class MintTools:
    """One handler per tool. Handlers return a ToolResult."""

    def __init__(self, config: Optional[CashuMintConfig] = None):
        self.config = config or CashuMintConfig()

    def _connect(self, mint_url: str) -> CashuMintClient:
        # A fresh client per call; nothing is shared between calls.
        return CashuMintClient(mint_url, self.config)

    # ─── Handlers ──────────────────────────────────────────────────

    async def get_mint_info(self, args: MintToolArgs) -> ToolResult:
        async with self._connect(args.mint_url) as mint:
            info = await mint.get_info()
        return Success({
            "name": info.name,
            "version": info.version,
            "description": info.description,
            "description_long": info.description_long,
            "pubkey": info.pubkey,
            "contact": (
                [c.model_dump() for c in info.contact] if info.contact is not None else None
            ),
            "motd": info.motd,
            "icon_url": info.icon_url,
            "time": info.time,
            "tos_url": info.tos_url,
            "nuts": list(info.nuts) if info.nuts is not None else None,
        })

    async def get_mint_keysets(self, args: MintToolArgs) -> ToolResult:
        async with self._connect(args.mint_url) as mint:
            response = await mint.get_keysets()
        return Success({
            "keysets": [
                {
                    "id": k.id,
                    "unit": k.unit,
                    "active": k.active,
                    "input_fee_ppk": k.input_fee_ppk,
                }
                for k in response.keysets
            ]
        })

    async def get_mint_keys(self, args: GetMintKeysArgs) -> ToolResult:
        async with self._connect(args.mint_url) as mint:
            response = await mint.get_keys(args.keyset_id or None)
        return Success({
            "keysets": [
                {
                    "id": k.id,
                    "unit": k.unit,
                    "keys": dict(
                        sorted(k.keys.items(), key=lambda kv: _amount_order(kv[0]))
                    ),
                }
                for k in response.keysets
            ]
        })

    async def check_proof_states(self, args: CheckProofStatesArgs) -> ToolResult:
        proofs = parse_json_array(args.proofs_json, Proof)
        if not proofs:
            return Failure(INVALID_PROOFS)

        request = PostCheckStateRequest(Ys=[p.C for p in proofs])
        async with self._connect(args.mint_url) as mint:
            response = await mint.check_state(request)
        return Success({
            "states": [
                {"Y": s.Y, "state": s.state, "witness": s.witness}
                for s in response.states
            ]
        })

    async def request_mint_quote(self, args: RequestMintQuoteArgs) -> ToolResult:
        request = PostMintQuoteBolt11Request(
            amount=args.amount,
            unit=args.unit if args.unit is not None else "sat",
            description=args.description,
        )
        async with self._connect(args.mint_url) as mint:
            response = await mint.create_mint_quote(PAYMENT_METHOD, request)
        return Success(_quote_payload(response))

    async def get_mint_quote_state(self, args: GetMintQuoteStateArgs) -> ToolResult:
        async with self._connect(args.mint_url) as mint:
            response = await mint.check_mint_quote(PAYMENT_METHOD, args.quote_id)
        return Success(_quote_payload(response))

    async def execute_mint(self, args: ExecuteMintArgs) -> ToolResult:
        outputs = parse_json_array(args.blinded_outputs_json, BlindedMessage)
        if not outputs:
            return Failure(INVALID_OUTPUTS)

        request = PostMintBolt11Request(quote=args.quote_id, outputs=outputs)
        async with self._connect(args.mint_url) as mint:
            response = await mint.mint(PAYMENT_METHOD, request)
        return Success({
            "signatures": [
                {
                    "id": s.id,
                    "amount": s.amount,
                    "C_": s.C_,
                    "dleq": {"e": s.dleq.e, "s": s.dleq.s} if s.dleq else None,
                }
                for s in response.signatures
            ]
        })


def _amount_order(amount: str) -> tuple[int, Any]:
    # Numeric amounts first, in ascending order; anything else after, as-is.
    try:
        return (0, int(amount))
    except ValueError:
        return (1, amount)
