"""Tender repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import date

from crew.domain.model.tender import Tender
from crew.domain.value import TenderId, UserId


class TenderRepository(ABC):
    """Repository for the Tender aggregate.

    A tender and its invites are always loaded and stored together as one
    unit. Implementations must support atomic read-modify-write of that unit
    through ``transaction()`` combined with ``find_by_id_for_update()``.
    """

    @abstractmethod
    async def find_by_id(self, tender_id: TenderId) -> Tender | None:
        """Find a tender by ID.

        Args:
            tender_id: The tender's unique identifier

        Returns:
            The tender with its invites if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_for_update(self, tender_id: TenderId) -> Tender | None:
        """Find a tender by ID and lock it for the current transaction.

        Concurrent writers of the same tender block until the transaction
        that took the lock commits or rolls back.

        Args:
            tender_id: The tender's unique identifier

        Returns:
            The tender with its invites if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_organizer(
        self, organizer_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[Tender]:
        """Find tenders posted by an organizer, newest first.

        Args:
            organizer_id: The organizer's ID
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of tenders
        """
        pass

    @abstractmethod
    async def find_by_invitee(
        self, user_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[Tender]:
        """Find tenders holding an invite for a registered user, newest first.

        Args:
            user_id: The invitee's user ID
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of tenders
        """
        pass

    @abstractmethod
    async def find_unclosed_before(self, before: date) -> list[TenderId]:
        """Find IDs of tenders scheduled before a date that are not closed.

        Used by the date-based closing sweep.

        Args:
            before: Exclusive upper bound on the scheduled date

        Returns:
            List of tender IDs
        """
        pass

    @abstractmethod
    async def save(self, tender: Tender) -> Tender:
        """Save a tender and its full invite list (create or update).

        Args:
            tender: The tender to save

        Returns:
            The saved tender
        """
        pass

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Run the enclosed reads and writes as one atomic unit.

        Changes become durable when the context exits normally and are
        discarded when it exits with an exception.
        """
        pass
