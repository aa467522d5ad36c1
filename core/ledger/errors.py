"""
Ledger Gateway — Errors
=======================
Failures reported by a gateway implementation. These are transport-level
signals; workflows translate them into core.shares.exceptions.
"""

from __future__ import annotations

from typing import Optional


class LedgerGatewayError(Exception):
    """Base error for gateway operations."""

    def __init__(self, message: str, status: Optional[str] = None):
        self.status = status
        super().__init__(message)


class TokenAlreadyAssociatedError(LedgerGatewayError):
    """Account is already associated with the token."""

    def __init__(self, account_id: str, token_id: str):
        self.account_id = account_id
        self.token_id = token_id
        super().__init__(
            f"Token {token_id} is already associated to account {account_id}.",
            status="TOKEN_ALREADY_ASSOCIATED_TO_ACCOUNT",
        )


class TokenNotAssociatedError(LedgerGatewayError):
    """Transfer target has not associated the token."""

    def __init__(self, account_id: str, token_id: str):
        self.account_id = account_id
        self.token_id = token_id
        super().__init__(
            f"Token {token_id} is not associated to account {account_id}.",
            status="TOKEN_NOT_ASSOCIATED_TO_ACCOUNT",
        )


class LedgerInsufficientBalanceError(LedgerGatewayError):
    """Sender token balance is below the transfer amount."""

    def __init__(self, account_id: str, token_id: str):
        self.account_id = account_id
        self.token_id = token_id
        super().__init__(
            f"Account {account_id} has insufficient {token_id} balance.",
            status="INSUFFICIENT_TOKEN_BALANCE",
        )


class TokenNotFoundError(LedgerGatewayError):
    """Token id is unknown to the ledger."""

    def __init__(self, token_id: str):
        self.token_id = token_id
        super().__init__(f"Token {token_id} does not exist.", status="INVALID_TOKEN_ID")
