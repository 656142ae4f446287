"""Cashu mint API client for MCP server."""

import asyncio
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
import structlog
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings

from .models.schemas import (
    KeysResponse,
    KeysetsResponse,
    MintInfo,
    PostCheckStateRequest,
    PostCheckStateResponse,
    PostMintBolt11Request,
    PostMintBolt11Response,
    PostMintQuoteBolt11Request,
    PostMintQuoteBolt11Response,
)

logger = structlog.get_logger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class CashuMintConfig(BaseSettings):
    """Configuration shared by every mint client."""

    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    max_retries: int = Field(
        default=0,
        ge=0,
        description="Retries for GET requests that fail at the transport level",
    )
    retry_backoff: float = Field(
        default=0.5, ge=0, description="Initial retry delay in seconds, doubled per attempt"
    )
    user_agent: str = Field(
        default="cashu-mint-mcp-server/0.1.0", description="User-Agent header sent to mints"
    )
    log_level: str = Field(default="INFO", description="Log level for stderr output")

    model_config = {"env_prefix": "CASHU_MINT_", "case_sensitive": False}


class CashuMintError(Exception):
    """Base exception for Cashu mint API errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[int] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


def normalize_mint_url(mint_url: str) -> str:
    """Return *mint_url* as an absolute base URL, or raise CashuMintError."""
    try:
        url = httpx.URL(mint_url.strip())
    except (httpx.InvalidURL, TypeError, AttributeError):
        raise CashuMintError(f"Invalid mint URL: {mint_url!r}")
    if url.scheme not in ("http", "https") or not url.host:
        raise CashuMintError(f"Invalid mint URL: {mint_url!r}")
    return str(url).rstrip("/")


class CashuMintClient:
    """Asynchronous client for a single Cashu mint (NUT-00..07)."""

    def __init__(self, mint_url: str, config: Optional[CashuMintConfig] = None):
        self.config = config or CashuMintConfig()
        self.mint_url = normalize_mint_url(mint_url)
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()
            self.client = None

    async def _ensure_client(self):
        if not self.client:
            self.client = httpx.AsyncClient(
                base_url=self.mint_url,
                timeout=self.config.timeout,
                headers={"User-Agent": self.config.user_agent},
            )

    # ------------------------------------------------------------------
    # Core HTTP methods
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make a request to the mint and return the decoded JSON body."""
        await self._ensure_client()

        # Only idempotent reads are retried.
        attempts = 1 + (self.config.max_retries if method == "GET" else 0)
        for attempt in range(attempts):
            try:
                response = await self.client.request(method=method, url=path, json=json)
                break
            except httpx.TransportError as e:
                if attempt + 1 < attempts:
                    delay = self.config.retry_backoff * (2**attempt)
                    logger.warning(
                        "Retrying mint request",
                        path=path,
                        attempt=attempt + 1,
                        delay=delay,
                        error=str(e),
                    )
                    await asyncio.sleep(delay)
                    continue
                logger.error("Request error", error=str(e), path=path)
                raise CashuMintError(f"Request failed: {e}")

        logger.info(
            "Mint request",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        if response.status_code >= 400:
            raise self._error_from_response(response)

        try:
            return response.json()
        except ValueError:
            raise CashuMintError(
                f"Malformed mint response from {path}: body is not JSON",
                response.status_code,
            )

    @staticmethod
    def _error_from_response(response: httpx.Response) -> CashuMintError:
        """Build an error from a NUT-00 error body (``detail`` / ``code``)."""
        error_msg = f"Mint request failed: {response.status_code}"
        code = None
        try:
            error_detail = response.json()
        except ValueError:
            error_detail = None
        if isinstance(error_detail, dict) and "detail" in error_detail:
            error_msg += f" - {error_detail['detail']}"
            code = error_detail.get("code")
            if code is not None:
                error_msg += f" (code {code})"
        elif response.text:
            error_msg += f" - {response.text}"
        return CashuMintError(error_msg, response.status_code, code)

    async def _call(
        self,
        model: Type[ResponseT],
        method: str,
        path: str,
        body: Optional[BaseModel] = None,
    ) -> ResponseT:
        payload = body.model_dump(by_alias=True, exclude_none=True) if body else None
        data = await self._request(method, path, json=payload)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            where = ".".join(str(p) for p in first["loc"]) or "body"
            raise CashuMintError(
                f"Malformed mint response from {path}: {where}: {first['msg']}"
            )

    # ------------------------------------------------------------------
    # NUT endpoints
    # ------------------------------------------------------------------

    async def get_info(self) -> MintInfo:
        return await self._call(MintInfo, "GET", "/v1/info")

    async def get_keysets(self) -> KeysetsResponse:
        return await self._call(KeysetsResponse, "GET", "/v1/keysets")

    async def get_keys(self, keyset_id: Optional[str] = None) -> KeysResponse:
        """Keys for one keyset, or for every active keyset when no id is given."""
        if keyset_id:
            return await self._call(
                KeysResponse, "GET", f"/v1/keys/{quote(keyset_id, safe='')}"
            )
        return await self._call(KeysResponse, "GET", "/v1/keys")

    async def check_state(self, request: PostCheckStateRequest) -> PostCheckStateResponse:
        return await self._call(PostCheckStateResponse, "POST", "/v1/checkstate", request)

    async def create_mint_quote(
        self, method: str, request: PostMintQuoteBolt11Request
    ) -> PostMintQuoteBolt11Response:
        return await self._call(
            PostMintQuoteBolt11Response, "POST", f"/v1/mint/quote/{method}", request
        )

    async def check_mint_quote(
        self, method: str, quote_id: str
    ) -> PostMintQuoteBolt11Response:
        return await self._call(
            PostMintQuoteBolt11Response,
            "GET",
            f"/v1/mint/quote/{method}/{quote(quote_id, safe='')}",
        )

    async def mint(
        self, method: str, request: PostMintBolt11Request
    ) -> PostMintBolt11Response:
        return await self._call(PostMintBolt11Response, "POST", f"/v1/mint/{method}", request)
