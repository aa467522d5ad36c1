"""
Tests for the in-memory ledger gateway and the ledger records it returns.
"""

import pytest

from adapters.memory.gateway import InMemoryLedgerGateway
from core.ledger.errors import (
    LedgerGatewayError,
    LedgerInsufficientBalanceError,
    TokenAlreadyAssociatedError,
    TokenNotAssociatedError,
    TokenNotFoundError,
)
from core.ledger.gateway import AccountBalances


TREASURY_ID = "0.0.2"
TREASURY_KEY = "treasury-key"
HOLDER_ID = "0.0.3001"
HOLDER_KEY = "holder-key"


def _ledger_with_token(total_supply: int = 10_000):
    ledger = InMemoryLedgerGateway()
    ledger.create_account(TREASURY_KEY, TREASURY_ID)
    ledger.create_account(HOLDER_KEY, HOLDER_ID)
    token_id = ledger.create_fungible_token(
        name="Test Shares",
        symbol="TST",
        decimals=0,
        total_supply=total_supply,
        treasury_account_id=TREASURY_ID,
        admin_credential=TREASURY_KEY,
    )
    return ledger, token_id


# ── AccountBalances ──────────────────────────────────────────

class TestAccountBalances:
    def test_zero_entry_means_associated(self):
        balances = AccountBalances("0.0.5", {"0.0.100": 0})
        assert balances.is_associated("0.0.100")
        assert balances.units_of("0.0.100") == 0

    def test_absent_entry_means_not_associated(self):
        balances = AccountBalances("0.0.5", {})
        assert not balances.is_associated("0.0.100")
        assert balances.units_of("0.0.100") is None
        assert balances.units_or_zero("0.0.100") == 0

    def test_balances_are_read_only(self):
        source = {"0.0.100": 5}
        balances = AccountBalances("0.0.5", source)
        source["0.0.100"] = 999
        assert balances.units_of("0.0.100") == 5
        with pytest.raises(TypeError):
            balances.balances["0.0.100"] = 1

    @pytest.mark.parametrize("units", [-1, 1.5, True])
    def test_invalid_units_rejected(self, units):
        with pytest.raises(ValueError):
            AccountBalances("0.0.5", {"0.0.100": units})


# ── InMemoryLedgerGateway ────────────────────────────────────

class TestInMemoryLedgerGateway:
    def test_treasury_holds_supply_at_creation(self):
        ledger, token_id = _ledger_with_token()
        info = ledger.get_token_info(token_id)
        assert info.total_supply == 10_000
        assert info.decimals == 0
        assert info.treasury_account_id == TREASURY_ID
        assert ledger.get_account_token_balances(TREASURY_ID).units_of(token_id) == 10_000

    def test_entity_ids_are_sequential(self):
        ledger = InMemoryLedgerGateway(first_entity=500)
        assert ledger.create_account("k1") == "0.0.500"
        assert ledger.create_account("k2") == "0.0.501"

    def test_duplicate_account_rejected(self):
        ledger = InMemoryLedgerGateway()
        ledger.create_account("k", "0.0.7")
        with pytest.raises(ValueError):
            ledger.create_account("k", "0.0.7")

    def test_create_requires_treasury_signature(self):
        ledger = InMemoryLedgerGateway()
        ledger.create_account(TREASURY_KEY, TREASURY_ID)
        with pytest.raises(LedgerGatewayError) as exc_info:
            ledger.create_fungible_token(
                name="X",
                symbol="X",
                decimals=0,
                total_supply=10,
                treasury_account_id=TREASURY_ID,
                admin_credential="wrong",
            )
        assert exc_info.value.status == "INVALID_SIGNATURE"

    def test_associate_then_already_associated(self):
        ledger, token_id = _ledger_with_token()
        assert ledger.associate_token(
            account_id=HOLDER_ID, token_id=token_id, credential=HOLDER_KEY
        ) == "SUCCESS"
        assert ledger.get_account_token_balances(HOLDER_ID).units_of(token_id) == 0
        with pytest.raises(TokenAlreadyAssociatedError):
            ledger.associate_token(
                account_id=HOLDER_ID, token_id=token_id, credential=HOLDER_KEY
            )

    def test_associate_unknown_token(self):
        ledger, _ = _ledger_with_token()
        with pytest.raises(TokenNotFoundError):
            ledger.associate_token(
                account_id=HOLDER_ID, token_id="0.0.404", credential=HOLDER_KEY
            )

    def test_transfer_to_unassociated_account_rejected(self):
        ledger, token_id = _ledger_with_token()
        with pytest.raises(TokenNotAssociatedError):
            ledger.transfer_token_units(
                token_id=token_id,
                from_account_id=TREASURY_ID,
                to_account_id=HOLDER_ID,
                units=10,
                sender_credential=TREASURY_KEY,
            )
        assert ledger.transfers == []

    def test_transfer_moves_units_atomically(self):
        ledger, token_id = _ledger_with_token()
        ledger.associate_token(account_id=HOLDER_ID, token_id=token_id, credential=HOLDER_KEY)
        receipt = ledger.transfer_token_units(
            token_id=token_id,
            from_account_id=TREASURY_ID,
            to_account_id=HOLDER_ID,
            units=2500,
            sender_credential=TREASURY_KEY,
        )
        assert receipt.status == "SUCCESS"
        assert receipt.transaction_id.startswith(f"{TREASURY_ID}@")
        assert ledger.get_account_token_balances(TREASURY_ID).units_of(token_id) == 7500
        assert ledger.get_account_token_balances(HOLDER_ID).units_of(token_id) == 2500
        assert len(ledger.transfers) == 1

    def test_overdraft_rejected_without_state_change(self):
        ledger, token_id = _ledger_with_token(total_supply=100)
        ledger.associate_token(account_id=HOLDER_ID, token_id=token_id, credential=HOLDER_KEY)
        with pytest.raises(LedgerInsufficientBalanceError):
            ledger.transfer_token_units(
                token_id=token_id,
                from_account_id=TREASURY_ID,
                to_account_id=HOLDER_ID,
                units=101,
                sender_credential=TREASURY_KEY,
            )
        assert ledger.get_account_token_balances(TREASURY_ID).units_of(token_id) == 100
        assert ledger.get_account_token_balances(HOLDER_ID).units_of(token_id) == 0

    def test_transfer_requires_sender_signature(self):
        ledger, token_id = _ledger_with_token()
        ledger.associate_token(account_id=HOLDER_ID, token_id=token_id, credential=HOLDER_KEY)
        with pytest.raises(LedgerGatewayError) as exc_info:
            ledger.transfer_token_units(
                token_id=token_id,
                from_account_id=TREASURY_ID,
                to_account_id=HOLDER_ID,
                units=1,
                sender_credential=HOLDER_KEY,
            )
        assert exc_info.value.status == "INVALID_SIGNATURE"

    def test_unknown_account_and_token(self):
        ledger = InMemoryLedgerGateway()
        with pytest.raises(LedgerGatewayError) as exc_info:
            ledger.get_account_token_balances("0.0.999")
        assert exc_info.value.status == "INVALID_ACCOUNT_ID"
        with pytest.raises(TokenNotFoundError):
            ledger.get_token_info("0.0.404")
