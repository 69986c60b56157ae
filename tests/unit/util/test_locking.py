"""Unit tests for the per-tender lock registry."""

import asyncio
from uuid import uuid4

import pytest

from crew.domain.value import TenderId
from crew.util.locking import TenderLocks


class TestTenderLocks:
    """Tests for TenderLocks."""

    @pytest.mark.asyncio
    async def test_hold_serializes_same_tender(self):
        locks = TenderLocks()
        tender_id = TenderId(uuid4())
        events: list[str] = []

        async def worker(name: str) -> None:
            async with locks.hold(tender_id):
                events.append(f"{name}:in")
                await asyncio.sleep(0.01)
                events.append(f"{name}:out")

        await asyncio.gather(worker("a"), worker("b"))

        assert events in (
            ["a:in", "a:out", "b:in", "b:out"],
            ["b:in", "b:out", "a:in", "a:out"],
        )

    @pytest.mark.asyncio
    async def test_different_tenders_hold_concurrently(self):
        locks = TenderLocks()
        first, second = TenderId(uuid4()), TenderId(uuid4())

        async with locks.hold(first):
            async with locks.hold(second):
                assert locks.is_locked(first)
                assert locks.is_locked(second)
                assert len(locks) == 2

    @pytest.mark.asyncio
    async def test_lock_is_dropped_when_unused(self):
        locks = TenderLocks()
        tender_id = TenderId(uuid4())

        async with locks.hold(tender_id):
            pass

        assert len(locks) == 0
        assert not locks.is_locked(tender_id)

    @pytest.mark.asyncio
    async def test_lock_released_when_block_raises(self):
        locks = TenderLocks()
        tender_id = TenderId(uuid4())

        with pytest.raises(RuntimeError):
            async with locks.hold(tender_id):
                raise RuntimeError("boom")

        assert len(locks) == 0
