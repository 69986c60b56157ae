"""Tender store domain service.

The store owns every change to a tender. Each change runs as one atomic unit
per tender:

1. take the in-process lock for the tender (``TenderLocks``)
2. open a repository transaction and re-read the tender with a row lock
3. run the capacity guard and the reconciler on that snapshot
4. save the full snapshot and commit

Success is only returned after the commit. Storage failures and timeouts
surface as ``PersistenceError`` and leave the stored tender untouched.
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import date, datetime, time
from enum import Enum
from typing import TypeVar
from uuid import uuid4

import logfire
from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import SQLAlchemyError

from crew.config import StoreSettings
from crew.domain.error import (
    InviteNotFoundError,
    PersistenceError,
    TenderNotFoundError,
    ValidationError,
)
from crew.domain.model import Invite, Tender
from crew.domain.repository import TenderRepository
from crew.domain.value import (
    InviteStatus,
    QuotaFull,
    TenderId,
    TenderStatus,
    UserId,
)
from crew.util.locking import TenderLocks

from .base import Service
from .capacity_guard import check_capacity
from .reconciler import reconcile

T = TypeVar("T")


class TransitionOutcome(str, Enum):
    """Business outcome of an invite transition."""

    APPLIED = "applied"
    QUOTA_FULL = "quota_full"


class TransitionResult(BaseModel):
    """Result of applying an invite transition.

    ``tender`` is always the authoritative snapshot after the call: the
    updated tender when the transition was applied, the unchanged stored
    tender when it was refused.
    """

    model_config = ConfigDict(frozen=True)

    outcome: TransitionOutcome
    tender: Tender
    changed: bool = False  # False for no-op re-applies and refusals
    quota_full: QuotaFull | None = None

    @property
    def applied(self) -> bool:
        return self.outcome == TransitionOutcome.APPLIED


class ExpirySweepResult(BaseModel):
    """Result of one date-based closure sweep.

    ``failed`` lists tenders whose closure could not be committed. They keep
    their status and are picked up again by the next sweep.
    """

    model_config = ConfigDict(frozen=True)

    closed: list[Tender]
    failed: list[TenderId] = []


class TenderStore(Service):
    """Domain service guarding all reads and writes of tenders."""

    def __init__(
        self,
        tender_repository: TenderRepository,
        tender_locks: TenderLocks,
        store_settings: StoreSettings,
    ) -> None:
        """Initialize tender store.

        Args:
            tender_repository: Tender repository
            tender_locks: Process-wide per-tender lock registry
            store_settings: Store configuration (timeouts, paging)
        """
        self.tender_repository = tender_repository
        self.tender_locks = tender_locks
        self.settings = store_settings

    async def get(self, tender_id: TenderId) -> Tender:
        """Get a tender snapshot.

        Args:
            tender_id: Tender ID

        Returns:
            The tender with all its invites

        Raises:
            TenderNotFoundError: If the tender does not exist
            PersistenceError: If the store could not be read
        """
        with logfire.span("tender_store.get", tender_id=str(tender_id)):
            tender = await self._with_storage(
                lambda: self.tender_repository.find_by_id(tender_id)
            )
            if tender is None:
                logfire.warn("Tender not found", tender_id=str(tender_id))
                raise TenderNotFoundError(str(tender_id))
            return tender

    async def list_by_organizer(
        self, organizer_id: UserId, limit: int | None = None, offset: int = 0
    ) -> list[Tender]:
        """List tenders posted by an organizer, newest first."""
        with logfire.span(
            "tender_store.list_by_organizer", organizer_id=str(organizer_id)
        ):
            tenders = await self._with_storage(
                lambda: self.tender_repository.find_by_organizer(
                    organizer_id, limit or self.settings.default_page_size, offset
                )
            )
            logfire.info(
                "Tenders listed for organizer",
                organizer_id=str(organizer_id),
                count=len(tenders),
            )
            return tenders

    async def list_by_invitee(
        self, user_id: UserId, limit: int | None = None, offset: int = 0
    ) -> list[Tender]:
        """List tenders the user holds an invite for, newest first."""
        with logfire.span("tender_store.list_by_invitee", user_id=str(user_id)):
            tenders = await self._with_storage(
                lambda: self.tender_repository.find_by_invitee(
                    user_id, limit or self.settings.default_page_size, offset
                )
            )
            logfire.info(
                "Tenders listed for invitee", user_id=str(user_id), count=len(tenders)
            )
            return tenders

    async def create_tender(
        self,
        organizer_id: UserId,
        title: str,
        scheduled_date: date,
        start_time: time,
        end_time: time,
        pay: int,
        quota: int,
        invites: list[Invite],
        organizer_name: str | None = None,
        description: str | None = None,
        location: str | None = None,
    ) -> Tender:
        """Create an open tender whose invites all start out pending.

        Args:
            organizer_id: Organizer posting the tender
            title: Short title shown in lists
            scheduled_date: Day of the shift
            start_time: Shift start
            end_time: Shift end
            pay: Pay per worker in whole currency units
            quota: Number of workers needed (at least 1)
            invites: Initial invitees, in display order
            organizer_name: Organizer display name snapshot
            description: Optional free text
            location: Optional location

        Returns:
            The persisted tender

        Raises:
            ValidationError: If quota < 1 or an invitee appears twice
            PersistenceError: If the tender could not be stored
        """
        with logfire.span(
            "tender_store.create_tender",
            organizer_id=str(organizer_id),
            quota=quota,
            invite_count=len(invites),
        ):
            if quota < 1:
                raise ValidationError("Quota must be at least 1")

            keys = [invite.invitee_key for invite in invites]
            if len(keys) != len(set(keys)):
                raise ValidationError("Each invitee can only be invited once")

            now = datetime.now()
            pending = [invite.with_status(InviteStatus.PENDING, now) for invite in invites]
            try:
                tender = Tender(
                    id=TenderId(uuid4()),
                    organizer_id=organizer_id,
                    organizer_name=organizer_name,
                    title=title,
                    description=description,
                    location=location,
                    scheduled_date=scheduled_date,
                    start_time=start_time,
                    end_time=end_time,
                    pay=pay,
                    quota=quota,
                    status=reconcile(pending, quota, TenderStatus.OPEN),
                    invites=pending,
                    created_at=now,
                )
            except ValueError as e:
                raise ValidationError(str(e)) from e

            async def persist() -> Tender:
                async with self.tender_repository.transaction():
                    return await self.tender_repository.save(tender)

            saved = await self._with_storage(persist)
            logfire.info(
                "Tender created",
                tender_id=str(saved.id),
                organizer_id=str(organizer_id),
                quota=quota,
            )
            return saved

    async def apply_invite_transition(
        self, tender_id: TenderId, user_id: UserId, new_status: InviteStatus
    ) -> TransitionResult:
        """Move a user's invite to a new status and reconcile the tender.

        Acceptances pass through the capacity guard first. A refused
        acceptance is a normal result (``QUOTA_FULL``), not an exception,
        and nothing is written. Re-applying the status an invite already has
        succeeds without writing.

        Closed tenders still record invite responses, but their status stays
        CLOSED.

        Args:
            tender_id: Tender ID
            user_id: Registered user holding the invite
            new_status: ACCEPTED or REJECTED

        Returns:
            Outcome and the authoritative tender snapshot

        Raises:
            ValidationError: If new_status is PENDING
            TenderNotFoundError: If the tender does not exist
            InviteNotFoundError: If the user holds no invite on the tender
            PersistenceError: If the change could not be committed
        """
        with logfire.span(
            "tender_store.apply_invite_transition",
            tender_id=str(tender_id),
            user_id=str(user_id),
            new_status=new_status.value,
        ):
            if new_status == InviteStatus.PENDING:
                raise ValidationError("Invites cannot be moved back to pending")

            async with self.tender_locks.hold(tender_id):
                result = await self._with_storage(
                    lambda: self._transition(tender_id, user_id, new_status)
                )

            if result.outcome == TransitionOutcome.QUOTA_FULL:
                logfire.info(
                    "Acceptance refused, tender is full",
                    tender_id=str(tender_id),
                    user_id=str(user_id),
                    quota=result.tender.quota,
                )
            else:
                logfire.info(
                    "Invite transition applied",
                    tender_id=str(tender_id),
                    user_id=str(user_id),
                    new_status=new_status.value,
                    tender_status=result.tender.status.value,
                    changed=result.changed,
                )
            return result

    async def close_tender(self, tender_id: TenderId) -> Tender:
        """Close a tender. Closing an already closed tender is a no-op.

        Raises:
            TenderNotFoundError: If the tender does not exist
            PersistenceError: If the change could not be committed
        """
        with logfire.span("tender_store.close_tender", tender_id=str(tender_id)):
            async with self.tender_locks.hold(tender_id):
                tender = await self._with_storage(lambda: self._close(tender_id))
            logfire.info("Tender closed", tender_id=str(tender_id))
            return tender

    async def close_expired(self, as_of: date) -> ExpirySweepResult:
        """Close every tender scheduled before ``as_of`` that is still open or full.

        Each tender is closed in its own transaction. A tender that fails to
        close is reported in the result and does not stop the sweep.

        Args:
            as_of: First day that is not considered expired

        Returns:
            The tenders closed by this sweep and the IDs that failed

        Raises:
            PersistenceError: If the expired tenders could not be listed
        """
        with logfire.span("tender_store.close_expired", as_of=as_of.isoformat()):
            tender_ids = await self._with_storage(
                lambda: self.tender_repository.find_unclosed_before(as_of)
            )
            closed: list[Tender] = []
            failed: list[TenderId] = []
            for tender_id in tender_ids:
                try:
                    closed.append(await self.close_tender(tender_id))
                except TenderNotFoundError:
                    # Removed between listing and closing
                    continue
                except PersistenceError as e:
                    logfire.error(
                        "Failed to close expired tender",
                        tender_id=str(tender_id),
                        error=str(e),
                    )
                    failed.append(tender_id)
            logfire.info(
                "Expired tenders closed",
                as_of=as_of.isoformat(),
                count=len(closed),
                failed=[str(tender_id) for tender_id in failed],
            )
            return ExpirySweepResult(closed=closed, failed=failed)

    async def _transition(
        self, tender_id: TenderId, user_id: UserId, new_status: InviteStatus
    ) -> TransitionResult:
        async with self.tender_repository.transaction():
            tender = await self.tender_repository.find_by_id_for_update(tender_id)
            if tender is None:
                raise TenderNotFoundError(str(tender_id))

            invite = tender.find_invite(user_id)
            if invite is None:
                raise InviteNotFoundError(str(tender_id), str(user_id))

            if invite.status == new_status:
                return TransitionResult(
                    outcome=TransitionOutcome.APPLIED, tender=tender
                )

            if new_status == InviteStatus.ACCEPTED:
                quota_full = check_capacity(tender, invite)
                if quota_full is not None:
                    return TransitionResult(
                        outcome=TransitionOutcome.QUOTA_FULL,
                        tender=tender,
                        quota_full=quota_full,
                    )

            now = datetime.now()
            invites = [
                other.with_status(new_status, now) if other.is_for_user(user_id) else other
                for other in tender.invites
            ]
            updated = tender.model_copy(
                update={
                    "invites": invites,
                    "status": reconcile(invites, tender.quota, tender.status),
                    "version": tender.version + 1,
                }
            )
            saved = await self.tender_repository.save(updated)

        return TransitionResult(
            outcome=TransitionOutcome.APPLIED, tender=saved, changed=True
        )

    async def _close(self, tender_id: TenderId) -> Tender:
        async with self.tender_repository.transaction():
            tender = await self.tender_repository.find_by_id_for_update(tender_id)
            if tender is None:
                raise TenderNotFoundError(str(tender_id))
            if tender.is_closed:
                return tender

            closed = tender.model_copy(
                update={
                    "status": TenderStatus.CLOSED,
                    "closed_at": datetime.now(),
                    "version": tender.version + 1,
                }
            )
            saved = await self.tender_repository.save(closed)
        return saved

    async def _with_storage(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run a storage operation under the configured timeout.

        Storage failures and timeouts become PersistenceError. Domain errors
        raised by the operation pass through unchanged.
        """
        timeout = self.settings.persistence_timeout_seconds
        try:
            async with asyncio.timeout(timeout):
                return await operation()
        except TimeoutError as e:
            logfire.error("Tender store operation timed out", timeout=timeout)
            raise PersistenceError(
                f"Tender store did not respond within {timeout}s", cause=e
            ) from e
        except (SQLAlchemyError, OSError) as e:
            logfire.error(
                "Tender store operation failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise PersistenceError("Tender store failed to commit", cause=e) from e
