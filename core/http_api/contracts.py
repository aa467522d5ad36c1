"""
Shares HTTP API - Contracts
===========================
Framework-agnostic request/response DTOs for the /api endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from core.shares.exceptions import ValidationError

CREDENTIAL_FIELDS = frozenset(
    {"marketPrivateKey", "recipientPrivateKey", "privateKey"}
)


def redacted(body: dict[str, Any]) -> dict[str, Any]:
    """Copy of a request body that is safe to log."""
    return {
        key: ("***" if key in CREDENTIAL_FIELDS and value else value)
        for key, value in body.items()
    }


def _missing(*values: Any) -> bool:
    return any(
        value is None or (isinstance(value, str) and not value.strip())
        for value in values
    )


@dataclass(frozen=True)
class CreateTokenHttpRequest:
    name: str
    symbol: str
    market_account_id: str
    market_private_key: str = field(repr=False)
    nft_token_id: Optional[str] = None
    nft_serial_number: Optional[int] = None

    def __post_init__(self):
        if _missing(self.name, self.symbol, self.market_account_id, self.market_private_key):
            raise ValidationError(
                "Name, symbol, marketAccountId, and marketPrivateKey are required"
            )
        if self.nft_serial_number is not None and (
            not isinstance(self.nft_serial_number, int)
            or isinstance(self.nft_serial_number, bool)
        ):
            raise ValidationError("nftSerialNumber must be an integer.")


@dataclass(frozen=True)
class ShareOwnershipHttpRequest:
    token_id: str
    recipient_id: str
    percentage_to_share: Any
    market_account_id: str
    market_private_key: str = field(repr=False)
    recipient_private_key: Optional[str] = field(default=None, repr=False)

    def __post_init__(self):
        if _missing(
            self.token_id,
            self.recipient_id,
            self.percentage_to_share,
            self.market_account_id,
            self.market_private_key,
        ):
            raise ValidationError(
                "Token ID, recipient ID, percentage, market account ID "
                "and market private key are required"
            )


@dataclass(frozen=True)
class AssociateTokenHttpRequest:
    token_id: str
    account_id: str
    private_key: str = field(repr=False)

    def __post_init__(self):
        if _missing(self.token_id, self.account_id, self.private_key):
            raise ValidationError("Token ID, account ID and private key are required")


@dataclass(frozen=True)
class OwnershipCheckRequest:
    token_id: str
    market_account_id: str

    def __post_init__(self):
        if _missing(self.token_id):
            raise ValidationError("Token ID is required")
        if _missing(self.market_account_id):
            raise ValidationError("Market account ID is required to check ownership")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    success: bool
    message: str
    status_code: int = 200
    data: Any = None
    error: Optional[HttpApiErrorBody] = None

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "message": self.message, "data": self.data}
        if self.error is None:
            raise ValueError("error must be set when success is False.")
        return {
            "success": False,
            "message": self.message,
            "error": self.error.to_dict(),
        }
