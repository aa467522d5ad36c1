"""
Shares — Public API
===================
Ownership arithmetic and the domain error taxonomy.
"""

from core.shares.exceptions import (
    GatewayError,
    InsufficientBalanceError,
    IssuanceBalanceMismatchError,
    NotAssociatedError,
    NotFoundError,
    NothingToTransferError,
    SharesError,
    ValidationError,
)
from core.shares.units import (
    DEFAULT_SHARE_NAME,
    DEFAULT_SHARE_SYMBOL,
    SHARE_DECIMALS,
    TOTAL_SHARES,
    effective_total_supply,
    percentage_to_units,
    share_token_name,
    units_to_percentage,
    validate_percentage,
)

__all__ = [
    "TOTAL_SHARES",
    "SHARE_DECIMALS",
    "DEFAULT_SHARE_NAME",
    "DEFAULT_SHARE_SYMBOL",
    "effective_total_supply",
    "percentage_to_units",
    "share_token_name",
    "units_to_percentage",
    "validate_percentage",
    "SharesError",
    "ValidationError",
    "IssuanceBalanceMismatchError",
    "NothingToTransferError",
    "NotFoundError",
    "InsufficientBalanceError",
    "NotAssociatedError",
    "GatewayError",
]
