"""
Shares Issuance — Public API
============================
"""

from core.issuance.models import ShareIssuanceRequest, ShareIssuanceResult
from core.issuance.service import ShareIssuanceService

__all__ = [
    "ShareIssuanceRequest",
    "ShareIssuanceResult",
    "ShareIssuanceService",
]
