"""
Shares Ownership — Transfer Serialization
=========================================
Per-(token, sender) mutual exclusion for the transfer workflow.

The balance check and the debit are separate remote calls, so two
concurrent transfers from one sender could both pass the check. Holding
the sender's lock across check → transfer closes that window inside
one process. Other processes sharing the sender are not coordinated.

Entries are reference-counted: a lock is dropped once no thread holds or
waits on it, so the registry stays bounded by concurrent senders.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class _Entry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class TransferLockRegistry:
    """Thread-safe registry of locks keyed by (token_id, sender_account_id)."""

    def __init__(self):
        self._guard = threading.Lock()
        self._entries: dict[tuple[str, str], _Entry] = {}

    def _checkout(self, key: tuple[str, str]) -> _Entry:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = _Entry()
                self._entries[key] = entry
            entry.users += 1
            return entry

    def _checkin(self, key: tuple[str, str], entry: _Entry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[key]

    @contextmanager
    def hold(self, token_id: str, sender_account_id: str) -> Iterator[None]:
        key = (token_id, sender_account_id)
        entry = self._checkout(key)
        try:
            with entry.lock:
                yield
        finally:
            self._checkin(key, entry)

    def is_held(self, token_id: str, sender_account_id: str) -> bool:
        with self._guard:
            entry = self._entries.get((token_id, sender_account_id))
            return entry is not None and entry.lock.locked()

    @property
    def size(self) -> int:
        """Number of (token, sender) keys currently held or awaited."""
        with self._guard:
            return len(self._entries)
