"""
Shares Issuance — Service
=========================
Creates a fixed-supply fungible share token for a referenced asset.

issue():
  1. create token (issuer = treasury, holds admin/supply/freeze/fee keys)
  2. associate token with the market account (market key signs)
  3. transfer the full supply issuer → market
  4. confirm the market holds the full supply

A failure at any step aborts the remaining steps. Nothing is rolled back:
a failed transfer leaves the market associated but empty.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.config.ledger import LedgerConfig
from core.issuance.models import ShareIssuanceRequest, ShareIssuanceResult
from core.ledger.errors import LedgerGatewayError
from core.ledger.gateway import LedgerGateway
from core.ownership.association import associate
from core.shares.exceptions import GatewayError, IssuanceBalanceMismatchError, ValidationError
from core.shares.units import (
    DEFAULT_SHARE_SYMBOL,
    SHARE_DECIMALS,
    TOTAL_SHARES,
    share_token_name,
    units_to_percentage,
)

logger = logging.getLogger("shares.issuance")


class ShareIssuanceService:
    def __init__(self, *, gateway: LedgerGateway, config: LedgerConfig):
        self._gateway = gateway
        self._config = config

    def _create_token(self, token_name: str, symbol: str) -> str:
        try:
            token_id = self._gateway.create_fungible_token(
                name=token_name,
                symbol=symbol,
                decimals=SHARE_DECIMALS,
                total_supply=TOTAL_SHARES,
                treasury_account_id=self._config.operator_account_id,
                admin_credential=self._config.operator_private_key,
            )
        except LedgerGatewayError as exc:
            logger.error(f"Token creation failed: {exc}", exc_info=True)
            raise GatewayError(f"Failed to create token: {exc}", status=exc.status) from exc
        logger.info(f"Token created successfully! ID: {token_id}")
        return token_id

    def _units(self, account_id: str, token_id: str) -> int:
        try:
            balances = self._gateway.get_account_token_balances(account_id)
        except LedgerGatewayError as exc:
            raise GatewayError(
                f"Failed to read balances for {account_id}: {exc}",
                status=exc.status,
            ) from exc
        return balances.units_or_zero(token_id)

    def issue(self, request: ShareIssuanceRequest) -> ShareIssuanceResult:
        token_name = share_token_name(
            request.name, request.nft_token_id, request.nft_serial_number
        )
        issuer_id = self._config.operator_account_id
        logger.info(
            f"Creating fractional ownership token for market account "
            f"{request.market_account_id}..."
        )
        token_id = self._create_token(token_name, request.symbol)

        associate(
            self._gateway,
            request.market_account_id,
            token_id,
            request.market_credential,
        )

        logger.info(f"Transferring tokens to market account {request.market_account_id}...")
        try:
            receipt = self._gateway.transfer_token_units(
                token_id=token_id,
                from_account_id=issuer_id,
                to_account_id=request.market_account_id,
                units=TOTAL_SHARES,
                sender_credential=self._config.operator_private_key,
            )
        except LedgerGatewayError as exc:
            logger.error(
                f"Supply transfer for {token_id} failed; market "
                f"{request.market_account_id} left associated but empty: {exc}",
                exc_info=True,
            )
            raise GatewayError(
                f"Token {token_id} created but transfer to market failed: {exc}",
                status=exc.status,
            ) from exc
        logger.info(f"Transfer status: {receipt.status}")

        issuer_shares = self._units(issuer_id, token_id)
        market_shares = self._units(request.market_account_id, token_id)
        logger.info(
            f"Final distribution: operator {issuer_id}: {issuer_shares} shares "
            f"({units_to_percentage(issuer_shares):.2f}%), market "
            f"{request.market_account_id}: {market_shares} shares "
            f"({units_to_percentage(market_shares):.2f}%)"
        )
        if market_shares != TOTAL_SHARES:
            raise IssuanceBalanceMismatchError(
                token_id=token_id,
                market_account_id=request.market_account_id,
                expected=TOTAL_SHARES,
                actual=market_shares,
            )

        return ShareIssuanceResult(
            token_id=token_id,
            token_name=token_name,
            symbol=request.symbol,
            total_shares=TOTAL_SHARES,
            issuer_account_id=issuer_id,
            issuer_shares=issuer_shares,
            market_account_id=request.market_account_id,
            market_shares=market_shares,
        )

    def issue_to_issuer(
        self,
        nft_token_id: str,
        nft_serial_number: int,
        symbol: Optional[str] = None,
    ) -> ShareIssuanceResult:
        """Create shares of an NFT and keep the full supply with the issuer."""
        if not nft_token_id:
            raise ValidationError("nftTokenId is required.")
        if not isinstance(nft_serial_number, int) or nft_serial_number < 0:
            raise ValidationError("nftSerialNumber must be an integer >= 0.")

        token_name = share_token_name(None, nft_token_id, nft_serial_number)
        symbol = symbol or DEFAULT_SHARE_SYMBOL
        logger.info("Creating fractional ownership token...")
        token_id = self._create_token(token_name, symbol)

        issuer_id = self._config.operator_account_id
        issuer_shares = self._units(issuer_id, token_id)
        logger.info(
            f"Initial owner ({issuer_id}) has "
            f"{units_to_percentage(issuer_shares):.2f}% ownership ({issuer_shares} shares)"
        )
        return ShareIssuanceResult(
            token_id=token_id,
            token_name=token_name,
            symbol=symbol,
            total_shares=TOTAL_SHARES,
            issuer_account_id=issuer_id,
            issuer_shares=issuer_shares,
        )
