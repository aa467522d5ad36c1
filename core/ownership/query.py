"""
Shares Ownership — Query
========================
Read-only ownership lookup for one (token, account) pair.

Enumerating every holder needs an external indexer and is not done here.
"""

from __future__ import annotations

import logging

from core.ledger.errors import LedgerGatewayError, TokenNotFoundError
from core.ledger.gateway import LedgerGateway
from core.ownership.models import HolderState, OwnershipSnapshot
from core.shares.exceptions import GatewayError, NotFoundError, ValidationError
from core.shares.units import effective_total_supply, units_to_percentage

logger = logging.getLogger("shares.ownership")


class OwnershipQueryService:
    def __init__(self, *, gateway: LedgerGateway):
        self._gateway = gateway

    def check(self, token_id: str, account_id: str) -> OwnershipSnapshot:
        if not token_id:
            raise ValidationError("Token ID is required")
        if not account_id:
            raise ValidationError("Market account ID is required to check ownership")

        try:
            info = self._gateway.get_token_info(token_id)
        except TokenNotFoundError as exc:
            raise NotFoundError(token_id, str(exc)) from exc
        except LedgerGatewayError as exc:
            raise GatewayError(
                f"Failed to read token {token_id}: {exc}", status=exc.status
            ) from exc

        try:
            balances = self._gateway.get_account_token_balances(account_id)
        except LedgerGatewayError as exc:
            raise GatewayError(
                f"Failed to read balances for {account_id}: {exc}",
                status=exc.status,
            ) from exc

        total_supply = effective_total_supply(info.total_supply)
        units = balances.units_or_zero(token_id)
        logger.debug(f"{account_id} holds {units}/{total_supply} of {token_id}")
        return OwnershipSnapshot(
            token_id=token_id,
            token_name=info.name,
            symbol=info.symbol,
            total_shares=total_supply,
            holdings=(
                HolderState(
                    account_id=account_id,
                    shares=units,
                    percentage=units_to_percentage(units, total_supply),
                ),
            ),
        )
