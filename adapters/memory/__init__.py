"""
Shares in-memory ledger adapter.
"""

from adapters.memory.gateway import InMemoryLedgerGateway

__all__ = ["InMemoryLedgerGateway"]
