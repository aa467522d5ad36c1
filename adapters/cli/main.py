"""
Shares command-line interface.

Usage:
    fractional-shares create-token <name> <symbol> <marketAccountId> <marketPrivateKey> [nftTokenId] [nftSerialNumber]
    fractional-shares create-shares <nftTokenId> <nftSerialNumber>
    fractional-shares share-ownership <tokenId> <recipientId> <percentageToShare> <marketAccountId> <marketPrivateKey> [recipientPrivateKey]
    fractional-shares associate-token <tokenId> <accountId> <privateKey>
    fractional-shares check-ownership <tokenId> <accountId>
    fractional-shares serve [--port PORT]

Global options select the ledger backend (--ledger hedera|memory), an
optional .env file, and verbose logging. The memory ledger lives only for
the duration of one process.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Optional, Sequence

from adapters.django_api.wiring import (
    LEDGER_BACKEND_HEDERA,
    LEDGER_BACKENDS,
    create_dependencies,
)
from core.config.ledger import ConfigurationError, load_server_settings
from core.http_api.dependencies import HttpApiDependencies
from core.ledger.errors import LedgerGatewayError
from core.issuance.models import ShareIssuanceRequest
from core.ownership.models import AssociationRequest, OwnershipTransferRequest
from core.shares.exceptions import SharesError
from core.shares.units import validate_percentage

logger = logging.getLogger("shares.cli")

EXIT_OK = 0
EXIT_FAILURE = 1


def _print_json(label: str, payload: dict[str, Any]) -> None:
    print(f"{label}:")
    print(json.dumps(payload, indent=2, sort_keys=True, default=str))


# ══════════════════════════════════════════════════════════════
# COMMANDS
# ══════════════════════════════════════════════════════════════

def _cmd_create_token(args, dependencies: HttpApiDependencies) -> int:
    result = dependencies.issuance_service.issue(
        ShareIssuanceRequest(
            name=args.name,
            symbol=args.symbol,
            market_account_id=args.market_account_id,
            market_credential=args.market_private_key,
            nft_token_id=args.nft_token_id,
            nft_serial_number=args.nft_serial_number,
        )
    )
    _print_json(
        "Token created",
        {
            "tokenId": result.token_id,
            "tokenName": result.token_name,
            "symbol": result.symbol,
            "totalShares": result.total_shares,
            "marketAccount": result.market_account_id,
            "marketShares": result.market_shares,
        },
    )
    return EXIT_OK


def _cmd_create_shares(args, dependencies: HttpApiDependencies) -> int:
    result = dependencies.issuance_service.issue_to_issuer(
        args.nft_token_id, args.nft_serial_number
    )
    _print_json(
        "Fractional shares creation completed",
        {
            "fractionalTokenId": result.token_id,
            "tokenName": result.token_name,
            "totalShares": result.total_shares,
            "ownerAccount": result.issuer_account_id,
            "ownerShares": result.issuer_shares,
        },
    )
    return EXIT_OK


def _cmd_share_ownership(args, dependencies: HttpApiDependencies) -> int:
    percentage = validate_percentage(args.percentage_to_share)
    print(f"Sharing {percentage}% ownership of token {args.token_id} with {args.recipient_id}...")
    print(f"Using market account {args.market_account_id}")
    result = dependencies.transfer_service.transfer(
        OwnershipTransferRequest(
            token_id=args.token_id,
            recipient_id=args.recipient_id,
            percentage=percentage,
            sender_account_id=args.market_account_id,
            sender_credential=args.market_private_key,
            recipient_credential=args.recipient_private_key,
        )
    )
    _print_json(
        "Ownership shared",
        {
            "status": result.status,
            "transactionId": result.transaction_id,
            "sharesTransferred": result.units_transferred,
            "market": result.sender.to_dict(),
            "recipient": result.recipient.to_dict(),
        },
    )
    return EXIT_OK


def _cmd_associate_token(args, dependencies: HttpApiDependencies) -> int:
    result = dependencies.association_service.associate_account(
        AssociationRequest(
            token_id=args.token_id,
            account_id=args.account_id,
            credential=args.private_key,
        )
    )
    _print_json(
        "Token association",
        {
            "tokenId": result.token_id,
            "accountId": result.account_id,
            "status": result.outcome.value,
        },
    )
    return EXIT_OK


def _cmd_check_ownership(args, dependencies: HttpApiDependencies) -> int:
    snapshot = dependencies.query_service.check(args.token_id, args.account_id)
    _print_json(
        "Ownership",
        {
            "fractionalTokenId": snapshot.token_id,
            "tokenName": snapshot.token_name,
            "symbol": snapshot.symbol,
            "totalShares": snapshot.total_shares,
            "ownershipDistribution": [h.to_dict() for h in snapshot.holdings],
        },
    )
    return EXIT_OK


def _cmd_serve(args) -> int:
    port = args.port if args.port is not None else load_server_settings().port
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
    os.environ["SHARES_LEDGER_BACKEND"] = args.ledger
    if args.env_file:
        os.environ["SHARES_ENV_FILE"] = args.env_file

    from django.core.management import execute_from_command_line

    print(f"Fractional NFT API server running on port {port}")
    print("Available endpoints:")
    print("- POST /api/create - Create fractional token")
    print("- POST /api/share - Share fractional ownership")
    print("- POST /api/associate - Associate token with an account")
    print("- GET /api/check - Check token ownership distribution")
    execute_from_command_line(
        ["fractional-shares", "runserver", f"0.0.0.0:{port}", "--noreload"]
    )
    return EXIT_OK


# ══════════════════════════════════════════════════════════════
# PARSER
# ══════════════════════════════════════════════════════════════

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fractional-shares",
        description="Issue and share fractional ownership tokens.",
    )
    parser.add_argument(
        "--ledger",
        choices=LEDGER_BACKENDS,
        default=os.environ.get("SHARES_LEDGER_BACKEND", LEDGER_BACKEND_HEDERA),
        help="Ledger backend (default: hedera testnet).",
    )
    parser.add_argument("--env-file", default=None, help="Load credentials from a .env file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")

    commands = parser.add_subparsers(dest="command", metavar="command")
    commands.required = True

    create = commands.add_parser("create-token", help="Create a share token for a market account.")
    create.add_argument("name")
    create.add_argument("symbol")
    create.add_argument("market_account_id", metavar="marketAccountId")
    create.add_argument("market_private_key", metavar="marketPrivateKey")
    create.add_argument("nft_token_id", metavar="nftTokenId", nargs="?", default=None)
    create.add_argument("nft_serial_number", metavar="nftSerialNumber", nargs="?", type=int, default=None)
    create.set_defaults(handler=_cmd_create_token)

    shares = commands.add_parser("create-shares", help="Create shares of an NFT held by the issuer.")
    shares.add_argument("nft_token_id", metavar="nftTokenId")
    shares.add_argument("nft_serial_number", metavar="nftSerialNumber", type=int)
    shares.set_defaults(handler=_cmd_create_shares)

    share = commands.add_parser("share-ownership", help="Transfer a percentage of ownership.")
    share.add_argument("token_id", metavar="tokenId")
    share.add_argument("recipient_id", metavar="recipientId")
    share.add_argument("percentage_to_share", metavar="percentageToShare")
    share.add_argument("market_account_id", metavar="marketAccountId")
    share.add_argument("market_private_key", metavar="marketPrivateKey")
    share.add_argument("recipient_private_key", metavar="recipientPrivateKey", nargs="?", default=None)
    share.set_defaults(handler=_cmd_share_ownership)

    associate = commands.add_parser("associate-token", help="Associate a token with an account.")
    associate.add_argument("token_id", metavar="tokenId")
    associate.add_argument("account_id", metavar="accountId")
    associate.add_argument("private_key", metavar="privateKey")
    associate.set_defaults(handler=_cmd_associate_token)

    check = commands.add_parser("check-ownership", help="Show one account's ownership of a token.")
    check.add_argument("token_id", metavar="tokenId")
    check.add_argument("account_id", metavar="accountId")
    check.set_defaults(handler=_cmd_check_ownership)

    serve = commands.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(handler=None)

    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    dependencies: Optional[HttpApiDependencies] = None,
) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        return _cmd_serve(args)

    try:
        if dependencies is None:
            dependencies = create_dependencies(backend=args.ledger, env_file=args.env_file)
        return args.handler(args, dependencies)
    except ConfigurationError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_FAILURE
    except LedgerGatewayError as exc:
        print(f"Ledger error ({exc.status or 'UNKNOWN'}): {exc}", file=sys.stderr)
        return EXIT_FAILURE
    except SharesError as exc:
        logger.debug(f"{args.command} failed", exc_info=True)
        print(f"Error ({exc.code}): {exc.message}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
