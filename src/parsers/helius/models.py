"""Pydantic models for Helius Solana RPC responses."""

from pydantic import BaseModel


class MintAuthorities(BaseModel):
    """Supply-control authorities of an SPL mint (None = revoked or unknown)."""

    mint_authority: str | None = None
    freeze_authority: str | None = None


class HeliusSignature(BaseModel):
    """Transaction signature metadata."""

    signature: str
    slot: int = 0
    timestamp: int | None = None  # unix seconds, None when the node has no blockTime
    err: dict | str | None = None  # non-None means failed
