"""
Shares Django HTTP adapter.
Thin framework glue over core/http_api handlers.
"""

from adapters.django_api.wiring import (
    DEV_MARKET_ACCOUNT_ID,
    DEV_MARKET_PRIVATE_KEY,
    DEV_OPERATOR_ACCOUNT_ID,
    DEV_RECIPIENT_ACCOUNT_ID,
    DEV_RECIPIENT_PRIVATE_KEY,
    build_dependencies,
    create_dependencies,
    reset_dependencies,
)

__all__ = [
    "DEV_OPERATOR_ACCOUNT_ID",
    "DEV_MARKET_ACCOUNT_ID",
    "DEV_MARKET_PRIVATE_KEY",
    "DEV_RECIPIENT_ACCOUNT_ID",
    "DEV_RECIPIENT_PRIVATE_KEY",
    "build_dependencies",
    "create_dependencies",
    "reset_dependencies",
]
