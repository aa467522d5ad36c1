"""
Shares Ownership — Public API
=============================
Association, transfer workflow and ownership query.
"""

from core.ownership.association import AssociationService, associate, is_associated
from core.ownership.locks import TransferLockRegistry
from core.ownership.models import (
    AssociationOutcome,
    AssociationRequest,
    AssociationResult,
    HolderState,
    OwnershipSnapshot,
    OwnershipTransferRequest,
    OwnershipTransferResult,
    TransferStage,
)
from core.ownership.query import OwnershipQueryService
from core.ownership.transfer import OwnershipTransferService

__all__ = [
    "AssociationService",
    "associate",
    "is_associated",
    "TransferLockRegistry",
    "AssociationOutcome",
    "AssociationRequest",
    "AssociationResult",
    "HolderState",
    "OwnershipSnapshot",
    "OwnershipTransferRequest",
    "OwnershipTransferResult",
    "TransferStage",
    "OwnershipQueryService",
    "OwnershipTransferService",
]
