"""Per-tender locks.

Every mutation of a tender runs inside ``TenderLocks.hold(tender_id)`` so
that concurrent requests against the same tender are serialized inside this
process. Different tenders get different locks and never wait on each other.

Locks are created on first use and dropped once nobody holds or waits on
them, so the registry only ever contains tenders with in-flight work.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from crew.domain.value import TenderId


class TenderLocks:
    """Registry of asyncio locks keyed by tender ID."""

    def __init__(self) -> None:
        self._locks: dict[TenderId, asyncio.Lock] = {}
        self._users: dict[TenderId, int] = {}

    @asynccontextmanager
    async def hold(self, tender_id: TenderId) -> AsyncIterator[None]:
        """Hold the lock for one tender for the duration of the block."""
        lock = self._locks.get(tender_id)
        if lock is None:
            lock = self._locks[tender_id] = asyncio.Lock()
        self._users[tender_id] = self._users.get(tender_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[tender_id] -= 1
            if self._users[tender_id] == 0:
                del self._users[tender_id]
                del self._locks[tender_id]

    def is_locked(self, tender_id: TenderId) -> bool:
        """Whether some task currently holds the lock for a tender."""
        lock = self._locks.get(tender_id)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)
