"""
Shares — Error Taxonomy
=======================
Domain errors raised by the issuance, association, transfer and query
workflows. The HTTP and CLI surfaces translate them into responses.

Every error carries:
- code:        machine-readable (SCREAMING_SNAKE_CASE)
- message:     human-readable
- http_status: transport status used by the HTTP adapter
- details:     structured context (never credentials)
"""

from __future__ import annotations

from typing import Any, Optional


class SharesError(Exception):
    """Base error for share workflows."""

    code = "SHARES_ERROR"
    http_status = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = dict(details or {})
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


class ValidationError(SharesError):
    """Missing or malformed request fields."""

    code = "VALIDATION_ERROR"
    http_status = 400


class IssuanceBalanceMismatchError(ValidationError):
    """Token created but the market account does not hold the full supply."""

    code = "ISSUANCE_BALANCE_MISMATCH"

    def __init__(self, token_id: str, market_account_id: str, expected: int, actual: int):
        self.token_id = token_id
        self.market_account_id = market_account_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Token {token_id} created but market account {market_account_id} "
            f"holds {actual} of {expected} shares. "
            f"Check association and transfer steps.",
            details={
                "tokenId": token_id,
                "marketAccountId": market_account_id,
                "expected": expected,
                "actual": actual,
            },
        )


class NothingToTransferError(ValidationError):
    """Sender holds no units of the token."""

    code = "NOTHING_TO_TRANSFER"

    def __init__(self, account_id: str, token_id: str):
        self.account_id = account_id
        self.token_id = token_id
        super().__init__(
            f"Market account {account_id} does not have any {token_id} tokens to transfer",
            details={"accountId": account_id, "tokenId": token_id},
        )


class NotFoundError(SharesError):
    """Unknown or inaccessible token."""

    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, token_id: str, reason: str = ""):
        self.token_id = token_id
        message = f"Token {token_id} not found or not accessible"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, details={"tokenId": token_id})


class InsufficientBalanceError(SharesError):
    """Sender units are below the requested transfer units."""

    code = "INSUFFICIENT_BALANCE"
    http_status = 400

    def __init__(self, available: int, requested: int, account_id: str = ""):
        self.available = available
        self.requested = requested
        self.account_id = account_id
        super().__init__(
            f"Insufficient balance: account {account_id or '<sender>'} has "
            f"{available} shares, but trying to transfer {requested} shares",
            details={
                "accountId": account_id,
                "available": available,
                "requested": requested,
            },
        )


class NotAssociatedError(SharesError):
    """Recipient cannot hold the token and no remediation was supplied."""

    code = "NOT_ASSOCIATED"
    http_status = 400

    def __init__(self, account_id: str, token_id: str):
        self.account_id = account_id
        self.token_id = token_id
        super().__init__(
            f"Account {account_id} is not associated with token {token_id}. "
            f"Supply the recipient private key to associate automatically, "
            f"or call associate-token for the account first.",
            details={
                "accountId": account_id,
                "tokenId": token_id,
                "remediation": ["recipientPrivateKey", "associate-token"],
            },
        )


class GatewayError(SharesError):
    """Unclassified failure reported by the ledger gateway."""

    code = "GATEWAY_ERROR"
    http_status = 500

    def __init__(self, message: str, status: Optional[str] = None):
        self.status = status
        details = {"status": status} if status else {}
        super().__init__(message, details=details)
