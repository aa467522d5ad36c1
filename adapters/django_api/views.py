"""
Shares Django Adapter Views
===========================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.config.ledger import ConfigurationError
from core.http_api.contracts import (
    AssociateTokenHttpRequest,
    CreateTokenHttpRequest,
    HttpApiResponse,
    OwnershipCheckRequest,
    ShareOwnershipHttpRequest,
    redacted,
)
from core.http_api.errors import error_response
from core.http_api.handlers import (
    get_health,
    get_ownership,
    post_associate_token,
    post_create_token,
    post_share_ownership,
)
from core.ledger.errors import LedgerGatewayError
from core.shares.exceptions import ValidationError

logger = logging.getLogger("shares.http")


def _to_json(response: HttpApiResponse) -> JsonResponse:
    return JsonResponse(response.to_dict(), status=response.status_code)


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return _to_json(error_response(code=code, message=message, status_code=status))


def _respond(handler, *args) -> JsonResponse:
    """Resolve wiring, then run the handler; wiring failures stay JSON."""
    try:
        dependencies = build_dependencies()
    except (ConfigurationError, LedgerGatewayError) as exc:
        logger.error(f"Ledger wiring failed: {exc}")
        return _json_error(
            "CONFIGURATION_ERROR",
            f"Server is not configured for the ledger: {exc}",
            status=500,
        )
    return _to_json(handler(*args, dependencies))


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValidationError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValidationError("Request body must be a JSON object.")
    return parsed


def _parse_optional_int(value: Any, field_name: str) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be an integer.") from exc


def _optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _dispatch_write(label: str, write_handler, request_contract_factory, request: HttpRequest):
    try:
        body = _parse_json_body(request)
        logger.info(f"{label} request received: {redacted(body)}")
        contract = request_contract_factory(body)
    except ValidationError as exc:
        return _json_error(exc.code, exc.message, status=exc.http_status)

    return _respond(write_handler, contract)


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


def _create_token_contract_factory(body: dict[str, Any]) -> CreateTokenHttpRequest:
    return CreateTokenHttpRequest(
        name=body.get("name"),
        symbol=body.get("symbol"),
        market_account_id=body.get("marketAccountId"),
        market_private_key=body.get("marketPrivateKey"),
        nft_token_id=_optional_text(body.get("nftTokenId")),
        nft_serial_number=_parse_optional_int(body.get("nftSerialNumber"), "nftSerialNumber"),
    )


def _share_contract_factory(body: dict[str, Any]) -> ShareOwnershipHttpRequest:
    return ShareOwnershipHttpRequest(
        token_id=body.get("tokenId"),
        recipient_id=body.get("recipientId"),
        percentage_to_share=body.get("percentageToShare"),
        market_account_id=body.get("marketAccountId"),
        market_private_key=body.get("marketPrivateKey"),
        recipient_private_key=_optional_text(body.get("recipientPrivateKey")),
    )


def _associate_contract_factory(body: dict[str, Any]) -> AssociateTokenHttpRequest:
    return AssociateTokenHttpRequest(
        token_id=body.get("tokenId"),
        account_id=body.get("accountId"),
        private_key=body.get("privateKey"),
    )


@csrf_exempt
def create_token_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        "Create token",
        post_create_token,
        _create_token_contract_factory,
        request,
    )


@csrf_exempt
def share_ownership_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        "Share token",
        post_share_ownership,
        _share_contract_factory,
        request,
    )


@csrf_exempt
def associate_token_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        "Associate token",
        post_associate_token,
        _associate_contract_factory,
        request,
    )


@csrf_exempt
def check_ownership_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    try:
        contract = OwnershipCheckRequest(
            token_id=request.GET.get("tokenId"),
            market_account_id=request.GET.get("marketAccountId"),
        )
    except ValidationError as exc:
        return _json_error(exc.code, exc.message, status=exc.http_status)
    return _respond(get_ownership, contract)


@csrf_exempt
def health_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(get_health)
