"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from crew.domain.error import UserNotFoundError
from crew.domain.model import GuestInvite, RegisteredInvite
from crew.domain.service import UserService
from crew.domain.value import InviteStatus, Phone, UserId
from crew.persistence.repository.inmemory import InMemoryUserRepository
from tests.conftest import make_user


class TestGetById:
    @pytest.mark.asyncio
    async def test_returns_user(self):
        user_repo = InMemoryUserRepository()
        service = UserService(user_repo)
        user = make_user()
        await user_repo.save(user)

        assert await service.get_by_id(user.id) == user

    @pytest.mark.asyncio
    async def test_unknown_user_raises(self):
        service = UserService(InMemoryUserRepository())

        with pytest.raises(UserNotFoundError):
            await service.get_by_id(UserId(uuid4()))


class TestResolveInvitee:
    """Tests for UserService.resolve_invitee()."""

    @pytest.mark.asyncio
    async def test_known_phone_becomes_registered_invite(self):
        user_repo = InMemoryUserRepository()
        service = UserService(user_repo)
        user = make_user(phone=Phone("+4917011122233"))
        await user_repo.save(user)

        # Formatting differs from the stored number
        invite = await service.resolve_invitee("Sam", Phone("+49 170 111 222 33"))

        assert isinstance(invite, RegisteredInvite)
        assert invite.user_id == user.id
        assert invite.name == "Sam"
        assert invite.status == InviteStatus.PENDING

    @pytest.mark.asyncio
    async def test_unknown_phone_becomes_guest_invite(self):
        service = UserService(InMemoryUserRepository())

        invite = await service.resolve_invitee("Kim", Phone("+4917099988877"))

        assert isinstance(invite, GuestInvite)
        assert invite.guest_phone == Phone("+4917099988877")
