"""In-memory tender repository for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar
from datetime import date
from typing import Optional

from crew.domain.model.tender import Tender
from crew.domain.repository.tender import TenderRepository
from crew.domain.value import TenderId, UserId


class InMemoryTenderRepository(TenderRepository):
    """In-memory implementation of TenderRepository for testing.

    Saves made inside ``transaction()`` are staged per task and only become
    visible to other tasks when the block exits normally. Row locking is
    not emulated; callers in the same process are serialized by TenderLocks.
    """

    def __init__(self) -> None:
        self._tenders: dict[TenderId, Tender] = {}
        self._staged: ContextVar[dict[TenderId, Tender] | None] = ContextVar(
            f"staged_tenders_{id(self)}", default=None
        )

    async def find_by_id(self, tender_id: TenderId) -> Optional[Tender]:
        """Find a tender by ID."""
        staged = self._staged.get()
        if staged is not None and tender_id in staged:
            return staged[tender_id]
        return self._tenders.get(tender_id)

    async def find_by_id_for_update(self, tender_id: TenderId) -> Optional[Tender]:
        """Find a tender by ID (no row lock in memory)."""
        return await self.find_by_id(tender_id)

    async def find_by_organizer(
        self, organizer_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[Tender]:
        """Find tenders by organizer, newest first."""
        tenders = [t for t in self._tenders.values() if t.organizer_id == organizer_id]
        tenders.sort(key=lambda t: t.created_at, reverse=True)
        return tenders[offset : offset + limit]

    async def find_by_invitee(
        self, user_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[Tender]:
        """Find tenders holding an invite for a registered user, newest first."""
        tenders = [
            t for t in self._tenders.values() if t.find_invite(user_id) is not None
        ]
        tenders.sort(key=lambda t: t.created_at, reverse=True)
        return tenders[offset : offset + limit]

    async def find_unclosed_before(self, before: date) -> list[TenderId]:
        """Find IDs of open or full tenders scheduled before a date."""
        tenders = [
            t
            for t in self._tenders.values()
            if t.scheduled_date < before and not t.is_closed
        ]
        tenders.sort(key=lambda t: t.scheduled_date)
        return [t.id for t in tenders]

    async def save(self, tender: Tender) -> Tender:
        """Save or update a tender."""
        staged = self._staged.get()
        if staged is not None:
            staged[tender.id] = tender
        else:
            self._tenders[tender.id] = tender
        return tender

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Apply staged saves on normal exit, discard them otherwise."""
        if self._staged.get() is not None:
            # Joins the enclosing transaction
            yield
            return

        staged: dict[TenderId, Tender] = {}
        token = self._staged.set(staged)
        try:
            yield
        finally:
            self._staged.reset(token)
        self._tenders.update(staged)
