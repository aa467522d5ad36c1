"""
Tests for the command-line adapter.
"""

import json
import sys

import pytest

from adapters.cli.main import EXIT_FAILURE, EXIT_OK, build_parser, main
from adapters.django_api.wiring import (
    DEV_MARKET_ACCOUNT_ID,
    DEV_MARKET_PRIVATE_KEY,
    DEV_OPERATOR_ACCOUNT_ID,
    DEV_RECIPIENT_ACCOUNT_ID,
    DEV_RECIPIENT_PRIVATE_KEY,
    create_dependencies,
)
from core.ledger.errors import LedgerGatewayError


@pytest.fixture
def dependencies(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MY_ACCOUNT_ID", raising=False)
    monkeypatch.delenv("MY_PRIVATE_KEY", raising=False)
    return create_dependencies(backend="memory")


def _json_after_label(output: str) -> dict:
    """Parse the JSON block printed after a `Label:` line."""
    _, _, payload = output.partition(":\n")
    return json.loads(payload)


def _create_token(dependencies) -> str:
    return dependencies.issuance_service.issue_to_issuer("0.0.9999", 1).token_id


def _market_token(dependencies, capsys) -> str:
    assert main(
        ["create-token", "Villa Shares", "VILLA", DEV_MARKET_ACCOUNT_ID, DEV_MARKET_PRIVATE_KEY],
        dependencies=dependencies,
    ) == EXIT_OK
    return _json_after_label(capsys.readouterr().out)["tokenId"]


class TestCommands:
    def test_create_token(self, dependencies, capsys):
        code = main(
            [
                "create-token",
                "Villa Shares",
                "VILLA",
                DEV_MARKET_ACCOUNT_ID,
                DEV_MARKET_PRIVATE_KEY,
                "0.0.9999",
                "7",
            ],
            dependencies=dependencies,
        )
        payload = _json_after_label(capsys.readouterr().out)
        assert code == EXIT_OK
        assert payload["tokenName"] == "Shares of NFT 0.0.9999 #7"
        assert payload["marketShares"] == 10_000

    def test_create_shares_keeps_supply_with_operator(self, dependencies, capsys):
        code = main(["create-shares", "0.0.9999", "1"], dependencies=dependencies)
        payload = _json_after_label(capsys.readouterr().out)
        assert code == EXIT_OK
        assert payload["ownerAccount"] == DEV_OPERATOR_ACCOUNT_ID
        assert payload["ownerShares"] == 10_000

    def test_share_ownership(self, dependencies, capsys):
        token_id = _market_token(dependencies, capsys)
        code = main(
            [
                "share-ownership",
                token_id,
                DEV_RECIPIENT_ACCOUNT_ID,
                "25",
                DEV_MARKET_ACCOUNT_ID,
                DEV_MARKET_PRIVATE_KEY,
                DEV_RECIPIENT_PRIVATE_KEY,
            ],
            dependencies=dependencies,
        )
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "Sharing 25% ownership" in out
        payload = json.loads(out[out.index("{"):])
        assert payload["sharesTransferred"] == 2500
        assert payload["market"]["shares"] == 7500

    def test_share_without_recipient_key_fails(self, dependencies, capsys):
        token_id = _market_token(dependencies, capsys)
        code = main(
            [
                "share-ownership",
                token_id,
                DEV_RECIPIENT_ACCOUNT_ID,
                "25",
                DEV_MARKET_ACCOUNT_ID,
                DEV_MARKET_PRIVATE_KEY,
            ],
            dependencies=dependencies,
        )
        assert code == EXIT_FAILURE
        assert "NOT_ASSOCIATED" in capsys.readouterr().err

    def test_associate_token(self, dependencies, capsys):
        token_id = _create_token(dependencies)
        code = main(
            ["associate-token", token_id, DEV_RECIPIENT_ACCOUNT_ID, DEV_RECIPIENT_PRIVATE_KEY],
            dependencies=dependencies,
        )
        payload = _json_after_label(capsys.readouterr().out)
        assert code == EXIT_OK
        assert payload["status"] == "ASSOCIATED"

    def test_check_ownership(self, dependencies, capsys):
        token_id = _create_token(dependencies)
        code = main(["check-ownership", token_id, DEV_OPERATOR_ACCOUNT_ID], dependencies=dependencies)
        payload = _json_after_label(capsys.readouterr().out)
        assert code == EXIT_OK
        assert payload["ownershipDistribution"][0]["percentage"] == 100.0

    def test_domain_error_exits_nonzero(self, dependencies, capsys):
        code = main(["check-ownership", "0.0.404", DEV_MARKET_ACCOUNT_ID], dependencies=dependencies)
        assert code == EXIT_FAILURE
        assert "NOT_FOUND" in capsys.readouterr().err

    def test_invalid_percentage_exits_nonzero(self, dependencies, capsys):
        code = main(
            [
                "share-ownership",
                "0.0.1",
                DEV_RECIPIENT_ACCOUNT_ID,
                "abc",
                DEV_MARKET_ACCOUNT_ID,
                DEV_MARKET_PRIVATE_KEY,
            ],
            dependencies=dependencies,
        )
        assert code == EXIT_FAILURE
        assert "VALIDATION_ERROR" in capsys.readouterr().err


class TestParser:
    def test_missing_arguments_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["share-ownership", "0.0.1"])
        assert exc_info.value.code == 2

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_unknown_ledger_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--ledger", "sqlite", "check-ownership", "0.0.1", "0.0.2"])

    def test_missing_operator_credentials(self, monkeypatch, capsys, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("MY_ACCOUNT_ID", raising=False)
        monkeypatch.delenv("MY_PRIVATE_KEY", raising=False)
        code = main(["--ledger", "hedera", "check-ownership", "0.0.1", "0.0.2"])
        assert code == EXIT_FAILURE
        assert "MY_ACCOUNT_ID" in capsys.readouterr().err

    def test_memory_ledger_from_command_line(self, monkeypatch, capsys, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("MY_ACCOUNT_ID", raising=False)
        monkeypatch.delenv("MY_PRIVATE_KEY", raising=False)
        code = main(
            [
                "--ledger",
                "memory",
                "create-token",
                "Villa Shares",
                "VILLA",
                DEV_MARKET_ACCOUNT_ID,
                DEV_MARKET_PRIVATE_KEY,
            ]
        )
        assert code == EXIT_OK
        assert _json_after_label(capsys.readouterr().out)["marketShares"] == 10_000


class TestWiringFailures:
    def test_ledger_error_during_wiring_exits_nonzero(self, monkeypatch, capsys):
        cli_main = sys.modules["adapters.cli.main"]

        def _broken_wiring(**kwargs):
            raise LedgerGatewayError("Invalid private key: ValueError", status="INVALID_PRIVATE_KEY")

        monkeypatch.setattr(cli_main, "create_dependencies", _broken_wiring)
        code = main(["check-ownership", "0.0.1", "0.0.2"])
        assert code == EXIT_FAILURE
        assert "INVALID_PRIVATE_KEY" in capsys.readouterr().err
