"""
Shares Ownership — Transfer Workflow
====================================
Moves a percentage of ownership from the sender (market) account to a
recipient.

Stages (strictly sequential, one blocking gateway call at a time):
  VERIFY_TOKEN → VERIFY_SENDER_BALANCE → CHECK_RECIPIENT_ASSOCIATION
  → [ASSOCIATE_RECIPIENT] → EXECUTE_TRANSFER → REPORT

RULES:
- units = floor(percentage / 100 * total_supply)
- total_supply comes from the token record, falling back to TOTAL_SHARES
- an over-transfer is rejected before anything is submitted
- the sender's lock is held from the balance check through the report
"""

from __future__ import annotations

import logging
from typing import Optional

from core.ledger.errors import (
    LedgerGatewayError,
    LedgerInsufficientBalanceError,
    TokenNotAssociatedError,
    TokenNotFoundError,
)
from core.ledger.gateway import AccountBalances, LedgerGateway, TokenInfo
from core.ownership.association import associate
from core.ownership.locks import TransferLockRegistry
from core.ownership.models import (
    AssociationOutcome,
    HolderState,
    OwnershipTransferRequest,
    OwnershipTransferResult,
    TransferStage,
)
from core.shares.exceptions import (
    GatewayError,
    InsufficientBalanceError,
    NotAssociatedError,
    NotFoundError,
    NothingToTransferError,
)
from core.shares.units import (
    effective_total_supply,
    percentage_to_units,
    units_to_percentage,
)

logger = logging.getLogger("shares.ownership")


class OwnershipTransferService:
    """Runs the ownership transfer workflow against a ledger gateway."""

    def __init__(
        self,
        *,
        gateway: LedgerGateway,
        locks: Optional[TransferLockRegistry] = None,
    ):
        self._gateway = gateway
        self._locks = locks or TransferLockRegistry()

    # ── Stages ────────────────────────────────────────────────

    def _enter(self, stage: TransferStage, request: OwnershipTransferRequest) -> None:
        logger.info(
            f"[{stage.value}] token={request.token_id} "
            f"sender={request.sender_account_id} recipient={request.recipient_id}"
        )

    def _verify_token(self, token_id: str) -> TokenInfo:
        try:
            info = self._gateway.get_token_info(token_id)
        except TokenNotFoundError as exc:
            raise NotFoundError(token_id, str(exc)) from exc
        except LedgerGatewayError as exc:
            raise GatewayError(
                f"Failed to read token {token_id}: {exc}", status=exc.status
            ) from exc
        logger.info(f"Token verified: {info.name} ({info.symbol})")
        return info

    def _balances(self, account_id: str) -> AccountBalances:
        try:
            return self._gateway.get_account_token_balances(account_id)
        except LedgerGatewayError as exc:
            raise GatewayError(
                f"Failed to read balances for {account_id}: {exc}",
                status=exc.status,
            ) from exc

    def _verify_sender_balance(
        self,
        request: OwnershipTransferRequest,
        total_supply: int,
    ) -> int:
        sender_units = self._balances(request.sender_account_id).units_of(
            request.token_id
        )
        if not sender_units:
            raise NothingToTransferError(request.sender_account_id, request.token_id)
        logger.debug(f"Sender {request.sender_account_id} holds {sender_units} shares")

        units = percentage_to_units(request.percentage, total_supply)
        if units > sender_units:
            raise InsufficientBalanceError(
                available=sender_units,
                requested=units,
                account_id=request.sender_account_id,
            )
        return units

    def _ensure_recipient_association(self, request: OwnershipTransferRequest) -> bool:
        """Return True when the recipient was associated by this call."""
        snapshot = self._balances(request.recipient_id)
        if snapshot.is_associated(request.token_id):
            return False

        if not request.recipient_credential:
            raise NotAssociatedError(request.recipient_id, request.token_id)

        self._enter(TransferStage.ASSOCIATE_RECIPIENT, request)
        outcome = associate(
            self._gateway,
            request.recipient_id,
            request.token_id,
            request.recipient_credential,
        )
        return outcome is AssociationOutcome.ASSOCIATED

    def _execute_transfer(self, request: OwnershipTransferRequest, units: int):
        logger.info(
            f"Transferring {request.percentage}% ownership ({units} shares) "
            f"from {request.sender_account_id} to {request.recipient_id}"
        )
        try:
            return self._gateway.transfer_token_units(
                token_id=request.token_id,
                from_account_id=request.sender_account_id,
                to_account_id=request.recipient_id,
                units=units,
                sender_credential=request.sender_credential,
            )
        except TokenNotAssociatedError as exc:
            raise NotAssociatedError(request.recipient_id, request.token_id) from exc
        except LedgerInsufficientBalanceError as exc:
            available = self._balances(request.sender_account_id).units_or_zero(
                request.token_id
            )
            raise InsufficientBalanceError(
                available=available,
                requested=units,
                account_id=request.sender_account_id,
            ) from exc
        except LedgerGatewayError as exc:
            logger.error(f"Transfer error: {exc}", exc_info=True)
            raise GatewayError(str(exc), status=exc.status) from exc

    def _holder_state(self, account_id: str, token_id: str, total_supply: int) -> HolderState:
        units = self._balances(account_id).units_or_zero(token_id)
        return HolderState(
            account_id=account_id,
            shares=units,
            percentage=units_to_percentage(units, total_supply),
        )

    # ── Workflow ──────────────────────────────────────────────

    def transfer(self, request: OwnershipTransferRequest) -> OwnershipTransferResult:
        logger.info(
            f"Processing share request: {request.percentage}% of token "
            f"{request.token_id} from {request.sender_account_id} "
            f"to {request.recipient_id}"
        )
        self._enter(TransferStage.VERIFY_TOKEN, request)
        token_info = self._verify_token(request.token_id)
        total_supply = effective_total_supply(token_info.total_supply)

        with self._locks.hold(request.token_id, request.sender_account_id):
            self._enter(TransferStage.VERIFY_SENDER_BALANCE, request)
            units = self._verify_sender_balance(request, total_supply)

            self._enter(TransferStage.CHECK_RECIPIENT_ASSOCIATION, request)
            newly_associated = self._ensure_recipient_association(request)

            self._enter(TransferStage.EXECUTE_TRANSFER, request)
            receipt = self._execute_transfer(request, units)
            logger.info(f"Ownership transfer status: {receipt.status}")

            self._enter(TransferStage.REPORT, request)
            sender = self._holder_state(
                request.sender_account_id, request.token_id, total_supply
            )
            recipient = self._holder_state(
                request.recipient_id, request.token_id, total_supply
            )

        logger.info(
            f"New ownership distribution: "
            f"{sender.account_id}: {sender.shares} shares ({sender.percentage:.2f}%), "
            f"{recipient.account_id}: {recipient.shares} shares ({recipient.percentage:.2f}%)"
        )
        return OwnershipTransferResult(
            token_id=request.token_id,
            transaction_id=receipt.transaction_id,
            status=receipt.status,
            units_transferred=units,
            percentage=request.percentage,
            total_shares=total_supply,
            sender=sender,
            recipient=recipient,
            recipient_associated=newly_associated,
        )
