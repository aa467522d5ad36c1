"""
Shares Hedera Ledger Gateway
============================
LedgerGateway implementation over hiero-sdk-python.

- The operator from LedgerConfig pays for every transaction and query.
- Transactions that move another account's assets are frozen with the
  operator client and additionally signed with that account's key.
- Private keys are parsed with one canonical call (PrivateKey.from_string).
- SDK failures are mapped onto core.ledger.errors by response status.
"""

from __future__ import annotations

import logging
from typing import Any

from hiero_sdk_python import (
    AccountId,
    Client,
    CryptoGetAccountBalanceQuery,
    Network,
    PrivateKey,
    ResponseCode,
    SupplyType,
    TokenAssociateTransaction,
    TokenCreateTransaction,
    TokenId,
    TokenInfoQuery,
    TokenType,
    TransferTransaction,
)
from hiero_sdk_python.exceptions import PrecheckError, ReceiptStatusError

from core.config.ledger import LedgerConfig
from core.ledger.errors import (
    LedgerGatewayError,
    LedgerInsufficientBalanceError,
    TokenAlreadyAssociatedError,
    TokenNotAssociatedError,
    TokenNotFoundError,
)
from core.ledger.gateway import AccountBalances, TokenInfo, TransferReceipt

logger = logging.getLogger("shares.ledger")

_SUCCESS = "SUCCESS"
_ALREADY_ASSOCIATED = "TOKEN_ALREADY_ASSOCIATED_TO_ACCOUNT"
_NOT_ASSOCIATED = "TOKEN_NOT_ASSOCIATED_TO_ACCOUNT"
_INSUFFICIENT_BALANCE = "INSUFFICIENT_TOKEN_BALANCE"
_TOKEN_NOT_FOUND = frozenset({"INVALID_TOKEN_ID", "TOKEN_WAS_DELETED"})


def _status_name(status: Any) -> str:
    if status is None:
        return "UNKNOWN"
    if isinstance(status, ResponseCode):
        return status.name
    try:
        return ResponseCode(int(status)).name
    except (TypeError, ValueError):
        return str(status)


def _parse_key(credential: str) -> PrivateKey:
    try:
        return PrivateKey.from_string(credential)
    except Exception as exc:
        raise LedgerGatewayError(
            f"Invalid private key: {type(exc).__name__}", status="INVALID_PRIVATE_KEY"
        ) from exc


def _parse_account(account_id: str) -> AccountId:
    try:
        return AccountId.from_string(account_id)
    except Exception as exc:
        raise LedgerGatewayError(
            f"Invalid account id {account_id!r}.", status="INVALID_ACCOUNT_ID"
        ) from exc


def _parse_token(token_id: str) -> TokenId:
    try:
        return TokenId.from_string(token_id)
    except Exception as exc:
        raise TokenNotFoundError(token_id) from exc


class HederaLedgerGateway:
    """Blocking gateway onto the Hedera test network."""

    def __init__(self, config: LedgerConfig):
        self.network = config.network
        self._operator_id = _parse_account(config.operator_account_id)
        self._operator_key = _parse_key(config.operator_private_key)
        self._client = Client(Network(network=config.network))
        self._client.set_operator(self._operator_id, self._operator_key)
        logger.info(
            f"Hedera client initialised on {config.network} "
            f"with operator {config.operator_account_id}"
        )

    # ── Execution helpers ─────────────────────────────────────

    def _submit(self, transaction, description: str, *signers: PrivateKey):
        """Freeze, sign, execute and return the receipt; raise on non-SUCCESS."""
        try:
            transaction.freeze_with(self._client)
            for key in signers:
                transaction.sign(key)
            receipt = transaction.execute(self._client)
        except (PrecheckError, ReceiptStatusError) as exc:
            status = _status_name(getattr(exc, "status", None))
            raise LedgerGatewayError(f"{description} failed: {status}", status=status) from exc
        except Exception as exc:
            raise LedgerGatewayError(f"{description} failed: {exc}") from exc

        status = _status_name(getattr(receipt, "status", None))
        if status != _SUCCESS:
            raise LedgerGatewayError(f"{description} failed: {status}", status=status)
        logger.debug(f"{description} status: {status}")
        return receipt

    def _query(self, query, description: str):
        try:
            return query.execute(self._client)
        except (PrecheckError, ReceiptStatusError) as exc:
            status = _status_name(getattr(exc, "status", None))
            raise LedgerGatewayError(f"{description} failed: {status}", status=status) from exc
        except Exception as exc:
            raise LedgerGatewayError(f"{description} failed: {exc}") from exc

    @staticmethod
    def _transaction_id(transaction, receipt) -> str:
        value = getattr(receipt, "transaction_id", None) or getattr(
            transaction, "transaction_id", None
        )
        return str(value) if value is not None else ""

    # ── Gateway operations ────────────────────────────────────

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
        admin_key = _parse_key(admin_credential)
        public_key = admin_key.public_key()
        transaction = (
            TokenCreateTransaction()
            .set_token_name(name)
            .set_token_symbol(symbol)
            .set_token_type(TokenType.FUNGIBLE_COMMON)
            .set_decimals(decimals)
            .set_initial_supply(total_supply)
            .set_supply_type(SupplyType.FINITE)
            .set_max_supply(total_supply)
            .set_treasury_account_id(_parse_account(treasury_account_id))
            .set_admin_key(public_key)
            .set_supply_key(public_key)
            .set_freeze_key(public_key)
            .set_fee_schedule_key(public_key)
        )
        receipt = self._submit(transaction, "Token create", admin_key)
        token_id = getattr(receipt, "token_id", None)
        if token_id is None:
            raise LedgerGatewayError("Token create receipt carries no token id.")
        return str(token_id)

    def get_account_token_balances(self, account_id: str) -> AccountBalances:
        result = self._query(
            CryptoGetAccountBalanceQuery().set_account_id(_parse_account(account_id)),
            f"Balance query for {account_id}",
        )
        raw = getattr(result, "token_balances", None) or {}
        return AccountBalances(
            account_id=account_id,
            balances={str(token): int(units) for token, units in raw.items()},
        )

    def associate_token(self, *, account_id: str, token_id: str, credential: str) -> str:
        transaction = (
            TokenAssociateTransaction()
            .set_account_id(_parse_account(account_id))
            .add_token_id(_parse_token(token_id))
        )
        try:
            receipt = self._submit(
                transaction, f"Association of {token_id} with {account_id}", _parse_key(credential)
            )
        except LedgerGatewayError as exc:
            if exc.status == _ALREADY_ASSOCIATED:
                raise TokenAlreadyAssociatedError(account_id, token_id) from exc
            if exc.status in _TOKEN_NOT_FOUND:
                raise TokenNotFoundError(token_id) from exc
            raise
        return _status_name(receipt.status)

    def transfer_token_units(
        self,
        *,
        token_id: str,
        from_account_id: str,
        to_account_id: str,
        units: int,
        sender_credential: str,
    ) -> TransferReceipt:
        token = _parse_token(token_id)
        transaction = (
            TransferTransaction()
            .add_token_transfer(token, _parse_account(from_account_id), -units)
            .add_token_transfer(token, _parse_account(to_account_id), units)
        )
        try:
            receipt = self._submit(
                transaction,
                f"Transfer of {units} {token_id} from {from_account_id} to {to_account_id}",
                _parse_key(sender_credential),
            )
        except LedgerGatewayError as exc:
            if exc.status == _NOT_ASSOCIATED:
                raise TokenNotAssociatedError(to_account_id, token_id) from exc
            if exc.status == _INSUFFICIENT_BALANCE:
                raise LedgerInsufficientBalanceError(from_account_id, token_id) from exc
            if exc.status in _TOKEN_NOT_FOUND:
                raise TokenNotFoundError(token_id) from exc
            raise
        return TransferReceipt(
            transaction_id=self._transaction_id(transaction, receipt),
            status=_status_name(receipt.status),
        )

    def get_token_info(self, token_id: str) -> TokenInfo:
        try:
            info = self._query(
                TokenInfoQuery().set_token_id(_parse_token(token_id)),
                f"Token info query for {token_id}",
            )
        except LedgerGatewayError as exc:
            if exc.status in _TOKEN_NOT_FOUND:
                raise TokenNotFoundError(token_id) from exc
            raise
        treasury = getattr(info, "treasury", None)
        total_supply = getattr(info, "total_supply", None)
        return TokenInfo(
            token_id=token_id,
            name=str(getattr(info, "name", "")),
            symbol=str(getattr(info, "symbol", "")),
            decimals=int(getattr(info, "decimals", 0) or 0),
            total_supply=int(total_supply) if total_supply is not None else None,
            treasury_account_id=str(treasury) if treasury is not None else None,
        )
