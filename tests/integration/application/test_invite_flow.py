"""Integration tests for the invite response flow.

Runs use cases through the DI container the way the API does, with
in-memory persistence.
"""

import asyncio
from datetime import date, time, timedelta

import pytest

from crew.application.usecase.tender import (
    CreateTenderRequest,
    CreateTenderUseCase,
    GetTenderRequest,
    GetTenderUseCase,
    InviteeInfo,
    RespondToInviteRequest,
    RespondToInviteUseCase,
)
from crew.domain.repository import UserRepository
from crew.domain.service import TransitionOutcome
from crew.domain.value import InviteResponse, TenderStatus, UserRole
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture()


class TestInviteFlowIntegration:
    """Create a tender, respond to it and read it back."""

    async def _post_tender(self, env, quota: int, participants: int):
        user_repo = await env.get(UserRepository)
        organizer = make_user(role=UserRole.ORGANIZER, name="Dana")
        await user_repo.save(organizer)
        users = [make_user(name=f"Worker {n}") for n in range(participants)]
        for user in users:
            await user_repo.save(user)

        create = await env.get(CreateTenderUseCase)
        response = await create.execute(
            CreateTenderRequest(
                organizer_id=str(organizer.id),
                title="Moving crew",
                scheduled_date=date.today() + timedelta(days=1),
                start_time=time(9, 0),
                end_time=time(13, 0),
                pay=60,
                quota=quota,
                invitees=[
                    InviteeInfo(name=user.name, phone=user.phone.root)
                    for user in users
                ],
            )
        )
        return response.tender, users

    @pytest.mark.asyncio
    async def test_race_through_use_case(self, integration_env):
        """Two simultaneous accepts on a one-slot tender: one wins."""
        tender, users = await self._post_tender(integration_env, quota=1, participants=2)
        respond = await integration_env.get(RespondToInviteUseCase)

        results = await asyncio.gather(
            *(
                respond.execute(
                    RespondToInviteRequest(
                        tender_id=tender.tender_id,
                        user_id=str(user.id),
                        response=InviteResponse.ACCEPTED,
                    )
                )
                for user in users
            )
        )

        assert sorted(r.outcome for r in results) == [
            TransitionOutcome.APPLIED,
            TransitionOutcome.QUOTA_FULL,
        ]
        get = await integration_env.get(GetTenderUseCase)
        snapshot = (
            await get.execute(GetTenderRequest(tender_id=tender.tender_id))
        ).tender
        assert snapshot.status == TenderStatus.FULL
        assert snapshot.counts.accepted == 1

    @pytest.mark.asyncio
    async def test_withdrawal_frees_slot_for_next_participant(self, integration_env):
        tender, (first, second) = await self._post_tender(
            integration_env, quota=1, participants=2
        )
        respond = await integration_env.get(RespondToInviteUseCase)

        def request(user, response):
            return RespondToInviteRequest(
                tender_id=tender.tender_id, user_id=str(user.id), response=response
            )

        await respond.execute(request(first, InviteResponse.ACCEPTED))
        refused = await respond.execute(request(second, InviteResponse.ACCEPTED))
        await respond.execute(request(first, InviteResponse.REJECTED))
        accepted = await respond.execute(request(second, InviteResponse.ACCEPTED))

        assert refused.outcome == TransitionOutcome.QUOTA_FULL
        assert accepted.outcome == TransitionOutcome.APPLIED
        assert accepted.tender.status == TenderStatus.FULL
        assert accepted.tender.version == 4
