"""
Shares HTTP API - Framework-Agnostic Handlers
=============================================
Pure handler functions over contracts and injected dependencies.
Each returns an HttpApiResponse carrying its own status code.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from core.http_api.contracts import (
    AssociateTokenHttpRequest,
    CreateTokenHttpRequest,
    HttpApiResponse,
    OwnershipCheckRequest,
    ShareOwnershipHttpRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    shares_error_response,
    success_response,
    unexpected_error_response,
)
from core.issuance.models import ShareIssuanceRequest
from core.ownership.models import AssociationRequest, OwnershipTransferRequest
from core.shares.exceptions import SharesError
from core.shares.units import validate_percentage

logger = logging.getLogger("shares.http")


def _guarded(prefix: str, action: Callable[[], HttpApiResponse]) -> HttpApiResponse:
    try:
        return action()
    except SharesError as exc:
        if exc.http_status >= 500:
            logger.error(f"{prefix}: {exc.message}", exc_info=True)
        else:
            logger.info(f"{prefix}: [{exc.code}] {exc.message}")
        return shares_error_response(exc, prefix=prefix)
    except Exception as exc:
        logger.error(f"{prefix}: {exc}", exc_info=True)
        return unexpected_error_response(exc, prefix=prefix)


# ══════════════════════════════════════════════════════════════
# POST /api/create
# ══════════════════════════════════════════════════════════════

def post_create_token(
    request: CreateTokenHttpRequest,
    dependencies: HttpApiDependencies,
) -> HttpApiResponse:
    def _create() -> HttpApiResponse:
        result = dependencies.issuance_service.issue(
            ShareIssuanceRequest(
                name=request.name,
                symbol=request.symbol,
                market_account_id=request.market_account_id,
                market_credential=request.market_private_key,
                nft_token_id=request.nft_token_id,
                nft_serial_number=request.nft_serial_number,
            )
        )
        return success_response(
            {
                "tokenId": result.token_id,
                "tokenName": result.token_name,
                "symbol": result.symbol,
                "totalShares": result.total_shares,
                "marketAccount": result.market_account_id,
                "marketShares": result.market_shares,
            },
            message="Fractional token created successfully",
            status_code=201,
        )

    return _guarded("Failed to create token", _create)


# ══════════════════════════════════════════════════════════════
# POST /api/share
# ══════════════════════════════════════════════════════════════

def post_share_ownership(
    request: ShareOwnershipHttpRequest,
    dependencies: HttpApiDependencies,
) -> HttpApiResponse:
    def _share() -> HttpApiResponse:
        result = dependencies.transfer_service.transfer(
            OwnershipTransferRequest(
                token_id=request.token_id,
                recipient_id=request.recipient_id,
                percentage=validate_percentage(request.percentage_to_share),
                sender_account_id=request.market_account_id,
                sender_credential=request.market_private_key,
                recipient_credential=request.recipient_private_key or None,
            )
        )
        return success_response(
            {
                "sender": result.sender.to_dict(),
                "recipient": result.recipient.to_dict(),
                "transactionId": result.transaction_id,
                "sharesTransferred": result.units_transferred,
                "recipientAssociated": result.recipient_associated,
            },
            message="Ownership shared successfully",
        )

    return _guarded("Failed to share ownership", _share)


# ══════════════════════════════════════════════════════════════
# POST /api/associate
# ══════════════════════════════════════════════════════════════

def post_associate_token(
    request: AssociateTokenHttpRequest,
    dependencies: HttpApiDependencies,
) -> HttpApiResponse:
    def _associate() -> HttpApiResponse:
        result = dependencies.association_service.associate_account(
            AssociationRequest(
                token_id=request.token_id,
                account_id=request.account_id,
                credential=request.private_key,
            )
        )
        return success_response(
            {
                "tokenId": result.token_id,
                "accountId": result.account_id,
                "status": result.outcome.value,
            },
            message="Token associated successfully",
        )

    return _guarded("Failed to associate token", _associate)


# ══════════════════════════════════════════════════════════════
# GET /api/check
# ══════════════════════════════════════════════════════════════

def get_ownership(
    request: OwnershipCheckRequest,
    dependencies: HttpApiDependencies,
) -> HttpApiResponse:
    def _check() -> HttpApiResponse:
        snapshot = dependencies.query_service.check(
            request.token_id, request.market_account_id
        )
        return success_response(
            {
                "fractionalTokenId": snapshot.token_id,
                "tokenName": snapshot.token_name,
                "symbol": snapshot.symbol,
                "totalShares": snapshot.total_shares,
                "ownershipDistribution": [
                    holder.to_dict() for holder in snapshot.holdings
                ],
            },
            message="Ownership distribution retrieved successfully",
        )

    return _guarded("Failed to check ownership", _check)


# ══════════════════════════════════════════════════════════════
# GET /api/health
# ══════════════════════════════════════════════════════════════

def get_health(dependencies: HttpApiDependencies) -> HttpApiResponse:
    data: dict[str, Any] = {
        "network": dependencies.config.network,
        "ledger": dependencies.ledger_backend,
        "operatorAccountId": dependencies.config.operator_account_id,
        "endpoints": [
            "POST /api/create",
            "POST /api/share",
            "POST /api/associate",
            "GET /api/check",
        ],
    }
    return success_response(data, message="Fractional NFT API is running")
