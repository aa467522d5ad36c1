"""
Ledger Gateway — Public API
===========================
"""

from core.ledger.errors import (
    LedgerGatewayError,
    LedgerInsufficientBalanceError,
    TokenAlreadyAssociatedError,
    TokenNotAssociatedError,
    TokenNotFoundError,
)
from core.ledger.gateway import (
    AccountBalances,
    LedgerGateway,
    TokenInfo,
    TransferReceipt,
)

__all__ = [
    "AccountBalances",
    "LedgerGateway",
    "TokenInfo",
    "TransferReceipt",
    "LedgerGatewayError",
    "LedgerInsufficientBalanceError",
    "TokenAlreadyAssociatedError",
    "TokenNotAssociatedError",
    "TokenNotFoundError",
]
