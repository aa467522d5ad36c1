"""
Shares Ownership — Association
==============================
An account must associate a token before it can hold units of it.

associate() is idempotent: the gateway's already-associated signal is
success, never a user-visible error.
"""

from __future__ import annotations

import logging

from core.ledger.errors import (
    LedgerGatewayError,
    TokenAlreadyAssociatedError,
    TokenNotFoundError,
)
from core.ledger.gateway import LedgerGateway
from core.ownership.models import (
    AssociationOutcome,
    AssociationRequest,
    AssociationResult,
)
from core.shares.exceptions import GatewayError, NotFoundError

logger = logging.getLogger("shares.ownership")


def is_associated(gateway: LedgerGateway, account_id: str, token_id: str) -> bool:
    try:
        snapshot = gateway.get_account_token_balances(account_id)
    except LedgerGatewayError as exc:
        raise GatewayError(
            f"Failed to read balances for {account_id}: {exc}", status=exc.status
        ) from exc
    return snapshot.is_associated(token_id)


def associate(
    gateway: LedgerGateway,
    account_id: str,
    token_id: str,
    credential: str,
) -> AssociationOutcome:
    logger.info(f"Associating token {token_id} with account {account_id}")
    try:
        status = gateway.associate_token(
            account_id=account_id,
            token_id=token_id,
            credential=credential,
        )
    except TokenAlreadyAssociatedError:
        logger.info(f"Token {token_id} already associated with {account_id}")
        return AssociationOutcome.ALREADY_ASSOCIATED
    except TokenNotFoundError as exc:
        raise NotFoundError(token_id, str(exc)) from exc
    except LedgerGatewayError as exc:
        logger.error(
            f"Association of {token_id} with {account_id} failed: {exc}",
            exc_info=True,
        )
        raise GatewayError(str(exc), status=exc.status) from exc
    logger.info(f"Token association status: {status}")
    return AssociationOutcome.ASSOCIATED


class AssociationService:
    """Explicit association step exposed through the API and CLI."""

    def __init__(self, *, gateway: LedgerGateway):
        self._gateway = gateway

    def associate_account(self, request: AssociationRequest) -> AssociationResult:
        try:
            self._gateway.get_token_info(request.token_id)
        except TokenNotFoundError as exc:
            raise NotFoundError(request.token_id, str(exc)) from exc
        except LedgerGatewayError as exc:
            logger.error(f"Token lookup for {request.token_id} failed: {exc}", exc_info=True)
            raise GatewayError(str(exc), status=exc.status) from exc

        outcome = associate(
            self._gateway,
            request.account_id,
            request.token_id,
            request.credential,
        )
        return AssociationResult(
            token_id=request.token_id,
            account_id=request.account_id,
            outcome=outcome,
        )
