"""
Shares In-Memory Ledger Gateway
===============================
Deterministic, thread-safe ledger for tests and local dev runs
(`--ledger memory`, SHARES_LEDGER_BACKEND=memory).

Models only what the share workflows rely on:
- accounts with a single signing key
- fungible tokens with a fixed supply held by the treasury at creation
- explicit association before an account can hold units
- atomic debit/credit transfers
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from typing import Optional

from core.config.ledger import NETWORK_TESTNET
from core.ledger.errors import (
    LedgerGatewayError,
    LedgerInsufficientBalanceError,
    TokenAlreadyAssociatedError,
    TokenNotAssociatedError,
    TokenNotFoundError,
)
from core.ledger.gateway import AccountBalances, TokenInfo, TransferReceipt


@dataclass
class _Token:
    info: TokenInfo
    admin_key: str


@dataclass
class _Account:
    account_id: str
    private_key: str
    holdings: dict[str, int] = field(default_factory=dict)


class InMemoryLedgerGateway:
    """In-process stand-in for the ledger network."""

    network = NETWORK_TESTNET

    def __init__(self, *, shard: int = 0, realm: int = 0, first_entity: int = 1000):
        self._lock = threading.Lock()
        self._prefix = f"{shard}.{realm}."
        self._entity_ids = itertools.count(first_entity)
        self._tx_sequence = itertools.count(1)
        self._accounts: dict[str, _Account] = {}
        self._tokens: dict[str, _Token] = {}
        self.transfers: list[dict] = []

    # ── Setup ─────────────────────────────────────────────────

    def create_account(self, private_key: str, account_id: Optional[str] = None) -> str:
        with self._lock:
            if account_id is None:
                account_id = f"{self._prefix}{next(self._entity_ids)}"
            if account_id in self._accounts:
                raise ValueError(f"Account {account_id} already exists.")
            self._accounts[account_id] = _Account(account_id, private_key)
            return account_id

    # ── Internal helpers (caller holds the lock) ──────────────

    def _account(self, account_id: str) -> _Account:
        account = self._accounts.get(account_id)
        if account is None:
            raise LedgerGatewayError(
                f"Account {account_id} does not exist.", status="INVALID_ACCOUNT_ID"
            )
        return account

    def _token(self, token_id: str) -> _Token:
        token = self._tokens.get(token_id)
        if token is None:
            raise TokenNotFoundError(token_id)
        return token

    @staticmethod
    def _check_signature(account: _Account, credential: str) -> None:
        if credential != account.private_key:
            raise LedgerGatewayError(
                f"Invalid signature for account {account.account_id}.",
                status="INVALID_SIGNATURE",
            )

    def _next_transaction_id(self, payer: str) -> str:
        return f"{payer}@{next(self._tx_sequence)}"

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
        with self._lock:
            treasury = self._account(treasury_account_id)
            self._check_signature(treasury, admin_credential)
            if total_supply <= 0:
                raise LedgerGatewayError(
                    "Initial supply must be positive.", status="INVALID_TOKEN_INITIAL_SUPPLY"
                )
            token_id = f"{self._prefix}{next(self._entity_ids)}"
            self._tokens[token_id] = _Token(
                info=TokenInfo(
                    token_id=token_id,
                    name=name,
                    symbol=symbol,
                    decimals=decimals,
                    total_supply=total_supply,
                    treasury_account_id=treasury_account_id,
                ),
                admin_key=admin_credential,
            )
            # Treasury is implicitly associated and receives the initial supply.
            treasury.holdings[token_id] = total_supply
            return token_id

    def get_account_token_balances(self, account_id: str) -> AccountBalances:
        with self._lock:
            account = self._account(account_id)
            return AccountBalances(account_id=account_id, balances=dict(account.holdings))

    def associate_token(self, *, account_id: str, token_id: str, credential: str) -> str:
        with self._lock:
            account = self._account(account_id)
            self._token(token_id)
            self._check_signature(account, credential)
            if token_id in account.holdings:
                raise TokenAlreadyAssociatedError(account_id, token_id)
            account.holdings[token_id] = 0
            return "SUCCESS"

    def transfer_token_units(
        self,
        *,
        token_id: str,
        from_account_id: str,
        to_account_id: str,
        units: int,
        sender_credential: str,
    ) -> TransferReceipt:
        with self._lock:
            self._token(token_id)
            sender = self._account(from_account_id)
            recipient = self._account(to_account_id)
            self._check_signature(sender, sender_credential)
            if units < 0:
                raise LedgerGatewayError("Transfer amount must be >= 0.", status="INVALID_ACCOUNT_AMOUNTS")
            if token_id not in sender.holdings:
                raise TokenNotAssociatedError(from_account_id, token_id)
            if token_id not in recipient.holdings:
                raise TokenNotAssociatedError(to_account_id, token_id)
            if sender.holdings[token_id] < units:
                raise LedgerInsufficientBalanceError(from_account_id, token_id)

            sender.holdings[token_id] -= units
            recipient.holdings[token_id] += units
            transaction_id = self._next_transaction_id(from_account_id)
            self.transfers.append(
                {
                    "transaction_id": transaction_id,
                    "token_id": token_id,
                    "from": from_account_id,
                    "to": to_account_id,
                    "units": units,
                }
            )
            return TransferReceipt(transaction_id=transaction_id, status="SUCCESS")

    def get_token_info(self, token_id: str) -> TokenInfo:
        with self._lock:
            return self._token(token_id).info
