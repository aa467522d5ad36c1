"""
Shares Ownership — Records
==========================
Requests and results for the association, transfer and query workflows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional

from core.shares.exceptions import ValidationError


def _require_text(value, field_name: str) -> None:
    if not value or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required.")


class AssociationOutcome(Enum):
    ASSOCIATED = "ASSOCIATED"
    ALREADY_ASSOCIATED = "ALREADY_ASSOCIATED"


class TransferStage(Enum):
    """Ordered stages of the ownership transfer workflow."""
    VERIFY_TOKEN = "VERIFY_TOKEN"
    VERIFY_SENDER_BALANCE = "VERIFY_SENDER_BALANCE"
    CHECK_RECIPIENT_ASSOCIATION = "CHECK_RECIPIENT_ASSOCIATION"
    ASSOCIATE_RECIPIENT = "ASSOCIATE_RECIPIENT"
    EXECUTE_TRANSFER = "EXECUTE_TRANSFER"
    REPORT = "REPORT"


@dataclass(frozen=True)
class HolderState:
    account_id: str
    shares: int
    percentage: float

    def to_dict(self) -> dict:
        return {
            "accountId": self.account_id,
            "shares": self.shares,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class AssociationRequest:
    token_id: str
    account_id: str
    credential: str = field(repr=False)

    def __post_init__(self):
        _require_text(self.token_id, "tokenId")
        _require_text(self.account_id, "accountId")
        _require_text(self.credential, "privateKey")


@dataclass(frozen=True)
class AssociationResult:
    token_id: str
    account_id: str
    outcome: AssociationOutcome


@dataclass(frozen=True)
class OwnershipTransferRequest:
    token_id: str
    recipient_id: str
    percentage: Decimal
    sender_account_id: str
    sender_credential: str = field(repr=False)
    recipient_credential: Optional[str] = field(default=None, repr=False)

    def __post_init__(self):
        _require_text(self.token_id, "tokenId")
        _require_text(self.recipient_id, "recipientId")
        _require_text(self.sender_account_id, "marketAccountId")
        _require_text(self.sender_credential, "marketPrivateKey")
        if not isinstance(self.percentage, Decimal):
            raise ValidationError("percentage must be a validated Decimal.")
        if self.recipient_credential is not None and not isinstance(
            self.recipient_credential, str
        ):
            raise ValidationError("recipientPrivateKey must be a string.")
        if self.sender_account_id == self.recipient_id:
            raise ValidationError("recipientId must differ from marketAccountId.")


@dataclass(frozen=True)
class OwnershipTransferResult:
    token_id: str
    transaction_id: str
    status: str
    units_transferred: int
    percentage: Decimal
    total_shares: int
    sender: HolderState
    recipient: HolderState
    recipient_associated: bool = False


@dataclass(frozen=True)
class OwnershipSnapshot:
    token_id: str
    token_name: str
    symbol: str
    total_shares: int
    holdings: tuple[HolderState, ...] = ()
