"""
Shares — Units & Percentages
============================
Fixed-denominator ownership arithmetic.

RULES:
- One unit is one basis point of the referenced asset (10,000 = 100%).
- Percentage → units uses floor semantics, never rounding, so fractional
  requests never over-transfer.
- Arithmetic is done in Decimal over the decimal string form of the input.
"""

from __future__ import annotations

import math
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from typing import Optional, Union

from core.shares.exceptions import ValidationError

TOTAL_SHARES = 10_000
SHARE_DECIMALS = 0
DEFAULT_SHARE_SYMBOL = "SHARE"
DEFAULT_SHARE_NAME = "Fractional Ownership Token"

Percentage = Union[int, float, str, Decimal]

_HUNDRED = Decimal(100)


def _to_decimal(value: Percentage) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError("percentageToShare must be a number.")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError("percentageToShare must be a finite number.")
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(
            f"percentageToShare must be a number, got {value!r}."
        ) from exc
    if not result.is_finite():
        raise ValidationError("percentageToShare must be a finite number.")
    return result


def validate_percentage(value: Percentage) -> Decimal:
    """
    Parse and bound a requested ownership percentage.

    Zero is rejected: a zero-percent share would submit a no-op transfer.
    """
    percentage = _to_decimal(value)
    if percentage <= 0:
        raise ValidationError(
            f"percentageToShare must be greater than 0, got {value}."
        )
    if percentage > _HUNDRED:
        raise ValidationError(
            f"percentageToShare must be at most 100, got {value}."
        )
    return percentage


def percentage_to_units(percentage: Percentage, total_supply: int = TOTAL_SHARES) -> int:
    """floor(percentage / 100 * total_supply)."""
    if total_supply < 0:
        raise ValueError("total_supply must be >= 0.")
    exact = _to_decimal(percentage) * Decimal(total_supply) / _HUNDRED
    return int(exact.to_integral_value(rounding=ROUND_FLOOR))


def units_to_percentage(units: int, total_supply: int = TOTAL_SHARES) -> float:
    if total_supply <= 0:
        raise ValueError("total_supply must be > 0.")
    # Single division keeps the result the nearest float to the exact ratio.
    return units * 100 / total_supply


def effective_total_supply(total_supply: Optional[int]) -> int:
    """On-ledger supply when usable, otherwise the fixed constant."""
    if isinstance(total_supply, int) and not isinstance(total_supply, bool) and total_supply > 0:
        return total_supply
    return TOTAL_SHARES


def share_token_name(
    name: Optional[str],
    nft_token_id: Optional[str] = None,
    nft_serial_number: Optional[int] = None,
) -> str:
    if nft_token_id and nft_serial_number is not None:
        return f"Shares of NFT {nft_token_id} #{nft_serial_number}"
    return name or DEFAULT_SHARE_NAME
