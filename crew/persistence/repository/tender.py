"""PostgreSQL implementation of Tender repository."""

from collections import defaultdict
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import date
from typing import Any, Optional

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from crew.domain.model import Tender
from crew.domain.repository import TenderRepository
from crew.domain.value import TenderId, TenderStatus, UserId
from crew.persistence.mappers import invite_to_dict, row_to_tender, tender_to_dict
from crew.persistence.tables import tender_invites_table, tenders_table


class PostgresTenderRepository(TenderRepository):
    """PostgreSQL implementation of TenderRepository.

    A tender is stored as one ``tenders`` row plus its ``tender_invites``
    rows. Saving rewrites the invite rows in full so the stored invite list
    always equals the snapshot that was reconciled.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, tender_id: TenderId) -> Optional[Tender]:
        """Find a tender by ID.

        Args:
            tender_id: Tender ID to look up

        Returns:
            Tender if found, None otherwise
        """
        stmt = select(tenders_table).where(tenders_table.c.id == tender_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        invites = await self._load_invites([tender_id])
        return row_to_tender(dict(row), invites[tender_id])

    async def find_by_id_for_update(self, tender_id: TenderId) -> Optional[Tender]:
        """Find a tender by ID and take a row lock on it.

        The lock is held until the surrounding transaction ends, which
        serializes writers of the same tender across processes.

        Args:
            tender_id: Tender ID to look up

        Returns:
            Tender if found, None otherwise
        """
        stmt = (
            select(tenders_table)
            .where(tenders_table.c.id == tender_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        invites = await self._load_invites([tender_id])
        return row_to_tender(dict(row), invites[tender_id])

    async def find_by_organizer(
        self, organizer_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[Tender]:
        """Find tenders by organizer, newest first.

        Args:
            organizer_id: Organizer user ID
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of tenders with their invites
        """
        stmt = (
            select(tenders_table)
            .where(tenders_table.c.organizer_id == organizer_id)
            .order_by(tenders_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return await self._with_invites(result.mappings().all())

    async def find_by_invitee(
        self, user_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[Tender]:
        """Find tenders holding an invite for a registered user, newest first.

        Args:
            user_id: Invitee user ID
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of tenders with their invites
        """
        invited = select(tender_invites_table.c.tender_id).where(
            tender_invites_table.c.user_id == user_id
        )
        stmt = (
            select(tenders_table)
            .where(tenders_table.c.id.in_(invited))
            .order_by(tenders_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return await self._with_invites(result.mappings().all())

    async def find_unclosed_before(self, before: date) -> list[TenderId]:
        """Find IDs of open or full tenders scheduled before a date.

        Args:
            before: Exclusive upper bound on scheduled_date

        Returns:
            List of tender IDs, oldest first
        """
        stmt = (
            select(tenders_table.c.id)
            .where(
                and_(
                    tenders_table.c.scheduled_date < before,
                    tenders_table.c.status != TenderStatus.CLOSED.value,
                )
            )
            .order_by(tenders_table.c.scheduled_date)
        )
        result = await self.session.execute(stmt)
        return [TenderId(row.id) for row in result.all()]

    async def save(self, tender: Tender) -> Tender:
        """Save a tender and replace its invites.

        Args:
            tender: Tender to save

        Returns:
            Saved tender
        """
        tender_dict = tender_to_dict(tender)

        exists = await self.session.execute(
            select(tenders_table.c.id).where(tenders_table.c.id == tender.id)
        )
        if exists.first() is not None:
            await self.session.execute(
                update(tenders_table)
                .where(tenders_table.c.id == tender.id)
                .values(**tender_dict)
            )
            await self.session.execute(
                delete(tender_invites_table).where(
                    tender_invites_table.c.tender_id == tender.id
                )
            )
        else:
            await self.session.execute(insert(tenders_table).values(**tender_dict))

        if tender.invites:
            await self.session.execute(
                insert(tender_invites_table),
                [
                    invite_to_dict(tender.id, position, invite)
                    for position, invite in enumerate(tender.invites)
                ],
            )

        await self.session.flush()
        return tender

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Commit the session when the block succeeds, roll back otherwise.

        Committing also releases row locks taken by find_by_id_for_update.
        """
        try:
            yield
            await self.session.commit()
        except BaseException:
            await self.session.rollback()
            raise

    async def _load_invites(
        self, tender_ids: Sequence[TenderId]
    ) -> dict[TenderId, list[dict[str, Any]]]:
        """Load invite rows for several tenders in one query."""
        grouped: dict[TenderId, list[dict[str, Any]]] = defaultdict(list)
        if not tender_ids:
            return grouped
        stmt = (
            select(tender_invites_table)
            .where(tender_invites_table.c.tender_id.in_(tender_ids))
            .order_by(tender_invites_table.c.tender_id, tender_invites_table.c.position)
        )
        result = await self.session.execute(stmt)
        for row in result.mappings().all():
            grouped[TenderId(row["tender_id"])].append(dict(row))
        return grouped

    async def _with_invites(self, rows: Sequence[Any]) -> list[Tender]:
        """Attach invites to tender rows (avoids one query per tender)."""
        tender_ids = [TenderId(row["id"]) for row in rows]
        invites = await self._load_invites(tender_ids)
        return [
            row_to_tender(dict(row), invites[TenderId(row["id"])]) for row in rows
        ]
