"""
Shares HTTP API - Dependencies
==============================
Injected configuration, gateway and services for handler wiring.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.config.ledger import LedgerConfig
from core.issuance.service import ShareIssuanceService
from core.ledger.gateway import LedgerGateway
from core.ownership.association import AssociationService
from core.ownership.locks import TransferLockRegistry
from core.ownership.query import OwnershipQueryService
from core.ownership.transfer import OwnershipTransferService


@dataclass(frozen=True)
class HttpApiDependencies:
    config: LedgerConfig
    gateway: LedgerGateway
    issuance_service: ShareIssuanceService
    transfer_service: OwnershipTransferService
    association_service: AssociationService
    query_service: OwnershipQueryService
    ledger_backend: str = "hedera"


def build_http_dependencies(
    *,
    config: LedgerConfig,
    gateway: LedgerGateway,
    locks: Optional[TransferLockRegistry] = None,
    ledger_backend: str = "hedera",
) -> HttpApiDependencies:
    return HttpApiDependencies(
        config=config,
        gateway=gateway,
        issuance_service=ShareIssuanceService(gateway=gateway, config=config),
        transfer_service=OwnershipTransferService(gateway=gateway, locks=locks),
        association_service=AssociationService(gateway=gateway),
        query_service=OwnershipQueryService(gateway=gateway),
        ledger_backend=ledger_backend,
    )
