"""
Shares Issuance — Records
=========================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from core.shares.exceptions import ValidationError


@dataclass(frozen=True)
class ShareIssuanceRequest:
    """Create a share token and hand its full supply to a market account."""
    name: str
    symbol: str
    market_account_id: str
    market_credential: str = field(repr=False)
    nft_token_id: Optional[str] = None
    nft_serial_number: Optional[int] = None

    def __post_init__(self):
        for field_name, value in (
            ("name", self.name),
            ("symbol", self.symbol),
            ("marketAccountId", self.market_account_id),
            ("marketPrivateKey", self.market_credential),
        ):
            if not value or not isinstance(value, str) or not value.strip():
                raise ValidationError(
                    "Name, symbol, marketAccountId, and marketPrivateKey are required",
                    details={"field": field_name},
                )
        if self.nft_serial_number is not None and (
            not isinstance(self.nft_serial_number, int)
            or isinstance(self.nft_serial_number, bool)
            or self.nft_serial_number < 0
        ):
            raise ValidationError("nftSerialNumber must be an integer >= 0.")


@dataclass(frozen=True)
class ShareIssuanceResult:
    token_id: str
    token_name: str
    symbol: str
    total_shares: int
    issuer_account_id: str
    issuer_shares: int
    market_account_id: Optional[str] = None
    market_shares: int = 0
