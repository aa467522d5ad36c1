"""
Shares Hedera ledger adapter.
"""

from adapters.hedera.gateway import HederaLedgerGateway

__all__ = ["HederaLedgerGateway"]
