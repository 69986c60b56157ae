"""Concurrency and failure tests for TenderStore.

The in-memory repository never yields to the event loop, so these tests use
subclasses that sleep inside the critical section. Without per-tender
serialization, concurrent transitions would interleave there.
"""

import asyncio

import pytest
from sqlalchemy.exc import OperationalError

from crew.config import StoreSettings
from crew.domain.error import PersistenceError
from crew.domain.service import TenderStore, TransitionOutcome, count_accepted
from crew.domain.value import InviteStatus, TenderStatus
from crew.persistence.repository.inmemory import InMemoryTenderRepository
from crew.util.locking import TenderLocks
from tests.conftest import make_registered_invite, make_tender


class SlowTenderRepository(InMemoryTenderRepository):
    """Yields to the event loop between reading and writing a tender."""

    def __init__(self, delay: float = 0.01) -> None:
        super().__init__()
        self.delay = delay

    async def find_by_id_for_update(self, tender_id):
        tender = await super().find_by_id_for_update(tender_id)
        await asyncio.sleep(self.delay)
        return tender

    async def save(self, tender):
        await asyncio.sleep(self.delay)
        return await super().save(tender)


class FailingSaveTenderRepository(InMemoryTenderRepository):
    """Fails every write after the tender was seeded."""

    def __init__(self) -> None:
        super().__init__()
        self.fail = False

    async def save(self, tender):
        if self.fail:
            raise OperationalError("UPDATE tenders", {}, ConnectionError("lost"))
        return await super().save(tender)


def _store(repository, timeout: float = 5.0) -> TenderStore:
    return TenderStore(
        tender_repository=repository,
        tender_locks=TenderLocks(),
        store_settings=StoreSettings(persistence_timeout_seconds=timeout),
    )


class TestConcurrentAccepts:
    """Serialization of transitions on one tender."""

    @pytest.mark.asyncio
    async def test_race_scenario(self):
        """Quota 1, two simultaneous accepts: one wins, one gets QuotaFull."""
        first, second = make_registered_invite(), make_registered_invite()
        tender = make_tender(invites=[first, second], quota=1)
        repository = SlowTenderRepository()
        await repository.save(tender)
        store = _store(repository)

        results = await asyncio.gather(
            store.apply_invite_transition(
                tender.id, first.user_id, InviteStatus.ACCEPTED
            ),
            store.apply_invite_transition(
                tender.id, second.user_id, InviteStatus.ACCEPTED
            ),
        )

        outcomes = sorted(result.outcome.value for result in results)
        assert outcomes == ["applied", "quota_full"]
        winner = next(r for r in results if r.applied)
        assert winner.tender.status == TenderStatus.FULL
        stored = await repository.find_by_id(tender.id)
        assert count_accepted(stored.invites) == 1
        assert stored.status == TenderStatus.FULL

    @pytest.mark.asyncio
    @pytest.mark.parametrize("quota", [1, 3, 5])
    async def test_quota_monotonicity(self, quota):
        """However many accept at once, at most quota invites end accepted."""
        invites = [make_registered_invite() for _ in range(8)]
        tender = make_tender(invites=invites, quota=quota)
        repository = SlowTenderRepository(delay=0.001)
        await repository.save(tender)
        store = _store(repository)

        results = await asyncio.gather(
            *(
                store.apply_invite_transition(
                    tender.id, invite.user_id, InviteStatus.ACCEPTED
                )
                for invite in invites
            )
        )

        applied = [r for r in results if r.outcome == TransitionOutcome.APPLIED]
        assert len(applied) == quota
        stored = await repository.find_by_id(tender.id)
        assert count_accepted(stored.invites) == quota
        assert stored.version == 1 + quota

    @pytest.mark.asyncio
    async def test_different_tenders_do_not_block_each_other(self):
        """A stalled transition on one tender leaves other tenders free."""
        invite_a, invite_b = make_registered_invite(), make_registered_invite()
        tender_a = make_tender(invites=[invite_a])
        tender_b = make_tender(invites=[invite_b])
        repository = InMemoryTenderRepository()
        await repository.save(tender_a)
        await repository.save(tender_b)
        locks = TenderLocks()
        store = TenderStore(repository, locks, StoreSettings())

        async with locks.hold(tender_a.id):
            result = await asyncio.wait_for(
                store.apply_invite_transition(
                    tender_b.id, invite_b.user_id, InviteStatus.ACCEPTED
                ),
                timeout=1,
            )

        assert result.applied
        assert len(locks) == 0


class TestPersistenceFailures:
    """Failed or slow storage leaves no visible change."""

    @pytest.mark.asyncio
    async def test_failed_save_raises_persistence_error_and_changes_nothing(self):
        invite = make_registered_invite()
        tender = make_tender(invites=[invite], quota=1)
        repository = FailingSaveTenderRepository()
        await repository.save(tender)
        repository.fail = True
        store = _store(repository)

        with pytest.raises(PersistenceError) as exc_info:
            await store.apply_invite_transition(
                tender.id, invite.user_id, InviteStatus.ACCEPTED
            )

        assert isinstance(exc_info.value.cause, OperationalError)
        assert await store.get(tender.id) == tender

    @pytest.mark.asyncio
    async def test_retry_after_failure_is_safe(self):
        """Re-sending the same transition after a failure applies it once."""
        invite = make_registered_invite()
        tender = make_tender(invites=[invite], quota=1)
        repository = FailingSaveTenderRepository()
        await repository.save(tender)
        store = _store(repository)

        repository.fail = True
        with pytest.raises(PersistenceError):
            await store.apply_invite_transition(
                tender.id, invite.user_id, InviteStatus.ACCEPTED
            )
        repository.fail = False
        retried = await store.apply_invite_transition(
            tender.id, invite.user_id, InviteStatus.ACCEPTED
        )

        assert retried.changed
        assert count_accepted(retried.tender.invites) == 1
        assert retried.tender.version == tender.version + 1

    @pytest.mark.asyncio
    async def test_timeout_raises_persistence_error_and_changes_nothing(self):
        invite = make_registered_invite()
        tender = make_tender(invites=[invite], quota=1)
        repository = SlowTenderRepository(delay=0.2)
        await InMemoryTenderRepository.save(repository, tender)
        store = _store(repository, timeout=0.05)

        with pytest.raises(PersistenceError):
            await store.apply_invite_transition(
                tender.id, invite.user_id, InviteStatus.ACCEPTED
            )

        assert await repository.find_by_id(tender.id) == tender
        assert len(store.tender_locks) == 0
