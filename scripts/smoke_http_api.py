"""
Manual smoke runner for the fractional shares HTTP API.

Start a server against the in-memory ledger first:
    fractional-shares --ledger memory serve --port 8000

Usage:
    python scripts/smoke_http_api.py
    python scripts/smoke_http_api.py --base-url http://127.0.0.1:8000
"""

from __future__ import annotations

import argparse
import json
from urllib import error, parse, request


DEV_MARKET_ACCOUNT_ID = "0.0.2001"
DEV_MARKET_PRIVATE_KEY = "dev-market-key"
DEV_RECIPIENT_ACCOUNT_ID = "0.0.2002"
DEV_RECIPIENT_PRIVATE_KEY = "dev-recipient-key"


def _call(
    *,
    method: str,
    url: str,
    body: dict | None = None,
    params: dict | None = None,
) -> tuple[int, dict]:
    if params:
        url = f"{url}?{parse.urlencode(params)}"
    encoded = None
    headers = {}
    if body is not None:
        encoded = json.dumps(body).encode("utf-8")
        headers["Content-Type"] = "application/json"

    req = request.Request(url=url, method=method, headers=headers, data=encoded)
    try:
        with request.urlopen(req) as response:
            return response.status, json.loads(response.read().decode("utf-8"))
    except error.HTTPError as exc:
        return exc.code, json.loads(exc.read().decode("utf-8"))


def _print_case(label: str, status: int, payload: dict) -> None:
    print(f"\n[{label}] status={status}")
    print(json.dumps(payload, indent=2, sort_keys=True))


def run(base_url: str) -> None:
    api = base_url.rstrip("/") + "/api"

    status, payload = _call(method="POST", url=f"{api}/create", body={"name": "x"})
    _print_case("create-missing-fields", status, payload)

    status, payload = _call(
        method="POST",
        url=f"{api}/create",
        body={
            "name": "Smoke Shares",
            "symbol": "SMK",
            "marketAccountId": DEV_MARKET_ACCOUNT_ID,
            "marketPrivateKey": DEV_MARKET_PRIVATE_KEY,
            "nftTokenId": "0.0.9999",
            "nftSerialNumber": 1,
        },
    )
    _print_case("create-success", status, payload)
    token_id = payload.get("data", {}).get("tokenId")
    if not token_id:
        return

    share_body = {
        "tokenId": token_id,
        "recipientId": DEV_RECIPIENT_ACCOUNT_ID,
        "percentageToShare": 10,
        "marketAccountId": DEV_MARKET_ACCOUNT_ID,
        "marketPrivateKey": DEV_MARKET_PRIVATE_KEY,
    }
    status, payload = _call(method="POST", url=f"{api}/share", body=share_body)
    _print_case("share-not-associated", status, payload)

    status, payload = _call(
        method="POST",
        url=f"{api}/share",
        body={**share_body, "recipientPrivateKey": DEV_RECIPIENT_PRIVATE_KEY},
    )
    _print_case("share-success", status, payload)

    status, payload = _call(
        method="POST",
        url=f"{api}/associate",
        body={
            "tokenId": token_id,
            "accountId": DEV_RECIPIENT_ACCOUNT_ID,
            "privateKey": DEV_RECIPIENT_PRIVATE_KEY,
        },
    )
    _print_case("associate-idempotent", status, payload)

    status, payload = _call(
        method="GET",
        url=f"{api}/check",
        params={"tokenId": token_id, "marketAccountId": DEV_MARKET_ACCOUNT_ID},
    )
    _print_case("check-market", status, payload)

    status, payload = _call(
        method="GET",
        url=f"{api}/check",
        params={"tokenId": "0.0.404", "marketAccountId": DEV_MARKET_ACCOUNT_ID},
    )
    _print_case("check-unknown-token", status, payload)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:8000",
        help="Server base URL.",
    )
    args = parser.parse_args()
    run(args.base_url)


if __name__ == "__main__":
    main()
