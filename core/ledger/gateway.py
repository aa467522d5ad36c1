"""
Ledger Gateway — Contract
=========================
The external ledger SDK seen as a black box. Implementations live in
adapters/ (Hedera over hiero-sdk-python, in-memory for tests and dev).

Every method is one blocking remote call that either returns or raises a
core.ledger.errors.LedgerGatewayError. No retries happen at this layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Protocol


# ══════════════════════════════════════════════════════════════
# RECORDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TokenInfo:
    token_id: str
    name: str
    symbol: str
    decimals: int = 0
    total_supply: Optional[int] = None
    treasury_account_id: Optional[str] = None


@dataclass(frozen=True)
class AccountBalances:
    """
    Token balance snapshot of one account.

    A token id present in ``balances`` means the account is associated
    with it, even at zero units. Absent means not associated.
    """

    account_id: str
    balances: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        if not self.account_id or not isinstance(self.account_id, str):
            raise ValueError("account_id must be a non-empty string.")
        for token_id, units in self.balances.items():
            if not isinstance(units, int) or isinstance(units, bool) or units < 0:
                raise ValueError(f"balance for {token_id} must be int >= 0.")
        object.__setattr__(
            self, "balances", MappingProxyType(dict(self.balances))
        )

    def is_associated(self, token_id: str) -> bool:
        return token_id in self.balances

    def units_of(self, token_id: str) -> Optional[int]:
        return self.balances.get(token_id)

    def units_or_zero(self, token_id: str) -> int:
        return self.balances.get(token_id, 0)


@dataclass(frozen=True)
class TransferReceipt:
    transaction_id: str
    status: str


# ══════════════════════════════════════════════════════════════
# GATEWAY PROTOCOL
# ══════════════════════════════════════════════════════════════

class LedgerGateway(Protocol):
    """Primitive ledger operations consumed by the share workflows."""

    network: str

    def create_fungible_token(
        self,
        *,
        name: str,
        symbol: str,
        decimals: int,
        total_supply: int,
        treasury_account_id: str,
        admin_credential: str,
    ) -> str:
        ...  # pragma: no cover

    def get_account_token_balances(self, account_id: str) -> AccountBalances:
        ...  # pragma: no cover

    def associate_token(
        self,
        *,
        account_id: str,
        token_id: str,
        credential: str,
    ) -> str:
        ...  # pragma: no cover

    def transfer_token_units(
        self,
        *,
        token_id: str,
        from_account_id: str,
        to_account_id: str,
        units: int,
        sender_credential: str,
    ) -> TransferReceipt:
        ...  # pragma: no cover

    def get_token_info(self, token_id: str) -> TokenInfo:
        ...  # pragma: no cover
