"""
Tests for core.http_api — handler envelopes and status mapping.
"""

import pytest

from adapters.memory.gateway import InMemoryLedgerGateway
from core.config.ledger import LedgerConfig
from core.http_api.contracts import (
    AssociateTokenHttpRequest,
    CreateTokenHttpRequest,
    HttpApiResponse,
    OwnershipCheckRequest,
    ShareOwnershipHttpRequest,
    redacted,
)
from core.http_api.dependencies import build_http_dependencies
from core.http_api.errors import shares_error_response, unexpected_error_response
from core.http_api.handlers import (
    get_health,
    get_ownership,
    post_associate_token,
    post_create_token,
    post_share_ownership,
)
from core.ledger.errors import LedgerGatewayError
from core.shares.exceptions import GatewayError, NotFoundError, ValidationError


ISSUER_ID = "0.0.2"
ISSUER_KEY = "issuer-key"
MARKET_ID = "0.0.2001"
MARKET_KEY = "market-key"
RECIPIENT_ID = "0.0.2002"
RECIPIENT_KEY = "recipient-key"


class BrokenTransferLedger(InMemoryLedgerGateway):
    def transfer_token_units(self, **kwargs):
        raise LedgerGatewayError("network unavailable", status="PLATFORM_NOT_ACTIVE")


def _build_dependencies(ledger=None):
    ledger = ledger or InMemoryLedgerGateway()
    ledger.create_account(ISSUER_KEY, ISSUER_ID)
    ledger.create_account(MARKET_KEY, MARKET_ID)
    ledger.create_account(RECIPIENT_KEY, RECIPIENT_ID)
    return build_http_dependencies(
        config=LedgerConfig(operator_account_id=ISSUER_ID, operator_private_key=ISSUER_KEY),
        gateway=ledger,
        ledger_backend="memory",
    )


def _create(dependencies) -> str:
    response = post_create_token(
        CreateTokenHttpRequest(
            name="Villa Shares",
            symbol="VILLA",
            market_account_id=MARKET_ID,
            market_private_key=MARKET_KEY,
        ),
        dependencies,
    )
    assert response.status_code == 201
    return response.data["tokenId"]


def _share_request(token_id, percentage=10, recipient_key=RECIPIENT_KEY):
    return ShareOwnershipHttpRequest(
        token_id=token_id,
        recipient_id=RECIPIENT_ID,
        percentage_to_share=percentage,
        market_account_id=MARKET_ID,
        market_private_key=MARKET_KEY,
        recipient_private_key=recipient_key,
    )


# ── POST /api/create ─────────────────────────────────────────

def test_create_returns_201_envelope():
    dependencies = _build_dependencies()
    response = post_create_token(
        CreateTokenHttpRequest(
            name="Villa Shares",
            symbol="VILLA",
            market_account_id=MARKET_ID,
            market_private_key=MARKET_KEY,
            nft_token_id="0.0.9999",
            nft_serial_number=1,
        ),
        dependencies,
    )
    body = response.to_dict()

    assert response.status_code == 201
    assert body["success"] is True
    assert body["message"] == "Fractional token created successfully"
    assert body["data"]["tokenName"] == "Shares of NFT 0.0.9999 #1"
    assert body["data"]["totalShares"] == 10_000
    assert body["data"]["marketShares"] == 10_000
    assert body["data"]["marketAccount"] == MARKET_ID


def test_create_contract_requires_fields():
    with pytest.raises(ValidationError, match="Name, symbol, marketAccountId, and marketPrivateKey are required"):
        CreateTokenHttpRequest(
            name="Villa Shares",
            symbol="",
            market_account_id=MARKET_ID,
            market_private_key=MARKET_KEY,
        )


def test_create_gateway_failure_is_500_with_prefix():
    dependencies = _build_dependencies()
    response = post_create_token(
        CreateTokenHttpRequest(
            name="Villa Shares",
            symbol="VILLA",
            market_account_id=MARKET_ID,
            market_private_key="wrong-key",
        ),
        dependencies,
    )
    body = response.to_dict()
    assert response.status_code == 500
    assert body["success"] is False
    assert body["message"].startswith("Failed to create token:")
    assert body["error"]["code"] == "GATEWAY_ERROR"


# ── POST /api/share ──────────────────────────────────────────

def test_share_success_envelope():
    dependencies = _build_dependencies()
    token_id = _create(dependencies)
    response = post_share_ownership(_share_request(token_id), dependencies)
    data = response.to_dict()["data"]

    assert response.status_code == 200
    assert data["sharesTransferred"] == 1000
    assert data["recipientAssociated"] is True
    assert data["sender"] == {"accountId": MARKET_ID, "shares": 9000, "percentage": 90.0}
    assert data["recipient"] == {"accountId": RECIPIENT_ID, "shares": 1000, "percentage": 10.0}
    assert data["transactionId"]


def test_share_not_associated_is_400():
    dependencies = _build_dependencies()
    token_id = _create(dependencies)
    response = post_share_ownership(_share_request(token_id, recipient_key=None), dependencies)
    assert response.status_code == 400
    assert response.error.code == "NOT_ASSOCIATED"


def test_share_unknown_token_is_404():
    dependencies = _build_dependencies()
    response = post_share_ownership(_share_request("0.0.404"), dependencies)
    assert response.status_code == 404
    assert response.error.code == "NOT_FOUND"


@pytest.mark.parametrize("percentage", [0, -5, 101, "abc"])
def test_share_invalid_percentage_is_400(percentage):
    dependencies = _build_dependencies()
    token_id = _create(dependencies)
    response = post_share_ownership(_share_request(token_id, percentage=percentage), dependencies)
    assert response.status_code == 400
    assert response.error.code == "VALIDATION_ERROR"


def test_share_over_transfer_is_400_with_balances():
    dependencies = _build_dependencies()
    token_id = _create(dependencies)
    post_share_ownership(_share_request(token_id, percentage=60), dependencies)
    response = post_share_ownership(_share_request(token_id, percentage=50), dependencies)
    assert response.status_code == 400
    assert response.error.code == "INSUFFICIENT_BALANCE"
    assert response.error.details["available"] == 4000
    assert response.error.details["requested"] == 5000


def test_share_gateway_failure_is_500():
    dependencies = _build_dependencies(BrokenTransferLedger())
    token_id = dependencies.gateway.create_fungible_token(
        name="X",
        symbol="X",
        decimals=0,
        total_supply=10_000,
        treasury_account_id=MARKET_ID,
        admin_credential=MARKET_KEY,
    )
    response = post_share_ownership(_share_request(token_id), dependencies)
    assert response.status_code == 500
    assert response.message.startswith("Failed to share ownership:")
    assert response.error.details == {"status": "PLATFORM_NOT_ACTIVE"}


def test_share_contract_requires_fields():
    with pytest.raises(ValidationError):
        ShareOwnershipHttpRequest(
            token_id="0.0.1",
            recipient_id=RECIPIENT_ID,
            percentage_to_share=None,
            market_account_id=MARKET_ID,
            market_private_key=MARKET_KEY,
        )


# ── POST /api/associate ──────────────────────────────────────

def test_associate_is_idempotent():
    dependencies = _build_dependencies()
    token_id = _create(dependencies)
    request = AssociateTokenHttpRequest(token_id=token_id, account_id=RECIPIENT_ID, private_key=RECIPIENT_KEY)

    first = post_associate_token(request, dependencies)
    second = post_associate_token(request, dependencies)

    assert first.status_code == second.status_code == 200
    assert first.data["status"] == "ASSOCIATED"
    assert second.data["status"] == "ALREADY_ASSOCIATED"


def test_associate_unknown_token_is_404():
    dependencies = _build_dependencies()
    response = post_associate_token(
        AssociateTokenHttpRequest(token_id="0.0.404", account_id=RECIPIENT_ID, private_key=RECIPIENT_KEY),
        dependencies,
    )
    assert response.status_code == 404


class BusyTokenInfoLedger(InMemoryLedgerGateway):
    def get_token_info(self, token_id):
        raise LedgerGatewayError("platform busy", status="BUSY")


def test_associate_ledger_failure_is_500():
    dependencies = _build_dependencies(BusyTokenInfoLedger())
    response = post_associate_token(
        AssociateTokenHttpRequest(token_id="0.0.100", account_id=RECIPIENT_ID, private_key=RECIPIENT_KEY),
        dependencies,
    )
    assert response.status_code == 500
    assert response.error.code == "GATEWAY_ERROR"
    assert response.message.startswith("Failed to associate token:")


# ── GET /api/check and /api/health ───────────────────────────

def test_check_after_share():
    dependencies = _build_dependencies()
    token_id = _create(dependencies)
    post_share_ownership(_share_request(token_id), dependencies)
    response = get_ownership(OwnershipCheckRequest(token_id=token_id, market_account_id=MARKET_ID), dependencies)
    data = response.to_dict()["data"]

    assert response.status_code == 200
    assert data["fractionalTokenId"] == token_id
    assert data["tokenName"] == "Villa Shares"
    assert data["symbol"] == "VILLA"
    assert data["totalShares"] == 10_000
    assert data["ownershipDistribution"] == [
        {"accountId": MARKET_ID, "shares": 9000, "percentage": 90.0}
    ]


def test_check_contract_messages():
    with pytest.raises(ValidationError, match="Token ID is required"):
        OwnershipCheckRequest(token_id="", market_account_id=MARKET_ID)
    with pytest.raises(ValidationError, match="Market account ID is required"):
        OwnershipCheckRequest(token_id="0.0.1", market_account_id=None)


def test_health_reports_wiring():
    dependencies = _build_dependencies()
    data = get_health(dependencies).to_dict()["data"]
    assert data["network"] == "testnet"
    assert data["ledger"] == "memory"
    assert data["operatorAccountId"] == ISSUER_ID
    assert "POST /api/share" in data["endpoints"]


# ── Error mapping ────────────────────────────────────────────

def test_client_errors_keep_plain_message():
    response = shares_error_response(NotFoundError("0.0.404"), prefix="Failed to check ownership")
    assert response.message == "Token 0.0.404 not found or not accessible"
    assert response.to_dict()["error"] == {"code": "NOT_FOUND", "details": {"tokenId": "0.0.404"}}


def test_server_errors_get_prefix():
    response = shares_error_response(GatewayError("boom", status="BUSY"), prefix="Failed to share ownership")
    assert response.message == "Failed to share ownership: boom"


def test_unexpected_errors_map_to_internal_error():
    response = unexpected_error_response(RuntimeError("kaput"), prefix="Failed to create token")
    assert response.status_code == 500
    assert response.error.code == "INTERNAL_ERROR"


def test_error_envelope_requires_error_body():
    with pytest.raises(ValueError):
        HttpApiResponse(success=False, message="x", status_code=400).to_dict()


def test_redacted_masks_credentials():
    body = {"tokenId": "0.0.1", "marketPrivateKey": "k1", "recipientPrivateKey": "k2", "privateKey": "k3"}
    assert redacted(body) == {
        "tokenId": "0.0.1",
        "marketPrivateKey": "***",
        "recipientPrivateKey": "***",
        "privateKey": "***",
    }
