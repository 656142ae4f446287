"""Pydantic models for the Cashu NUT wire format and the tool argument sets.

Field names follow the mint's JSON exactly (``C_``, ``B_``, ``Ys`` …) so the
models can be dumped straight into request bodies.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# NUT-06 mint info
# ---------------------------------------------------------------------------


class ContactInfo(BaseModel):
    method: str
    info: str


class MintInfo(BaseModel):
    name: Optional[str] = None
    pubkey: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    description_long: Optional[str] = None
    contact: Optional[List[ContactInfo]] = None
    motd: Optional[str] = None
    icon_url: Optional[str] = None
    time: Optional[int] = None
    tos_url: Optional[str] = None
    nuts: Optional[Dict[str, Any]] = None

    @field_validator("contact", mode="before")
    @classmethod
    def normalize_contact(cls, v):
        # Older mints send [[method, info], ...]
        if isinstance(v, list):
            return [
                {"method": c[0], "info": c[1]}
                if isinstance(c, (list, tuple)) and len(c) == 2
                else c
                for c in v
            ]
        return v


# ---------------------------------------------------------------------------
# NUT-01 / NUT-02 keys and keysets
# ---------------------------------------------------------------------------


class KeysetInfo(BaseModel):
    id: str
    unit: str
    active: bool
    input_fee_ppk: int = 0


class KeysetsResponse(BaseModel):
    keysets: List[KeysetInfo]


class Keyset(BaseModel):
    id: str
    unit: str
    keys: Dict[str, str]


class KeysResponse(BaseModel):
    keysets: List[Keyset]


# ---------------------------------------------------------------------------
# NUT-00 proofs / blinded messages / signatures
# ---------------------------------------------------------------------------


class Proof(BaseModel):
    id: str
    amount: int
    secret: str
    C: str
    witness: Optional[str] = None
    dleq: Optional[Dict[str, Any]] = None


class BlindedMessage(BaseModel):
    amount: int
    id: str
    B_: str
    witness: Optional[str] = None


class DLEQ(BaseModel):
    e: str
    s: str


class BlindedSignature(BaseModel):
    id: str
    amount: int
    C_: str
    dleq: Optional[DLEQ] = None


# ---------------------------------------------------------------------------
# NUT-07 token state check
# ---------------------------------------------------------------------------


class PostCheckStateRequest(BaseModel):
    Ys: List[str]


class ProofState(BaseModel):
    Y: str
    state: str
    witness: Optional[str] = None


class PostCheckStateResponse(BaseModel):
    states: List[ProofState]


# ---------------------------------------------------------------------------
# NUT-04 minting (bolt11)
# ---------------------------------------------------------------------------


class PostMintQuoteBolt11Request(BaseModel):
    amount: int = Field(ge=0)
    unit: str
    description: Optional[str] = None


class PostMintQuoteBolt11Response(BaseModel):
    quote: str
    request: str
    state: Optional[str] = None
    expiry: Optional[int] = None
    amount: Optional[int] = None
    unit: Optional[str] = None
    paid: Optional[bool] = None

    @model_validator(mode="after")
    def derive_state_from_paid(self):
        # Pre-state mints only report a paid flag.
        if self.state is None and self.paid is not None:
            self.state = "PAID" if self.paid else "UNPAID"
        return self


class PostMintBolt11Request(BaseModel):
    quote: str
    outputs: List[BlindedMessage]


class PostMintBolt11Response(BaseModel):
    signatures: List[BlindedSignature]


# ---------------------------------------------------------------------------
# Tool arguments (camelCase on the wire)
# ---------------------------------------------------------------------------


class MintToolArgs(BaseModel):
    """Arguments shared by every tool."""

    mint_url: str = Field(alias="mintUrl", description="Base URL of the Cashu mint")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class GetMintKeysArgs(MintToolArgs):
    keyset_id: Optional[str] = Field(default=None, alias="keysetId")


class CheckProofStatesArgs(MintToolArgs):
    proofs_json: Optional[Union[str, List[Any]]] = Field(default=None, alias="proofsJson")


class RequestMintQuoteArgs(MintToolArgs):
    amount: int = Field(ge=0)
    unit: Optional[str] = "sat"
    description: Optional[str] = None


class GetMintQuoteStateArgs(MintToolArgs):
    quote_id: str = Field(alias="quoteId")


class ExecuteMintArgs(MintToolArgs):
    quote_id: str = Field(alias="quoteId")
    blinded_outputs_json: Optional[Union[str, List[Any]]] = Field(
        default=None, alias="blindedOutputsJson"
    )
