"""User domain service."""

import logfire

from crew.domain.error import UserNotFoundError
from crew.domain.model import GuestInvite, Invite, RegisteredInvite, User
from crew.domain.repository import UserRepository
from crew.domain.value import Phone, UserId

from .base import Service


class UserService(Service):
    """Domain service for user lookups and invitee resolution."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User

        Raises:
            UserNotFoundError: If user not found
        """
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))
        return user

    async def find_by_phone(self, phone: Phone) -> User | None:
        """Find a registered user by phone number."""
        return await self.user_repository.find_by_phone(phone)

    async def resolve_invitee(self, name: str, phone: Phone) -> Invite:
        """Build a pending invite for a contact.

        A contact whose phone belongs to a registered user becomes a
        registered invite; anyone else is invited as a guest. The name is
        kept as the organizer entered it.

        Args:
            name: Contact name as shown to the organizer
            phone: Contact phone number

        Returns:
            A pending RegisteredInvite or GuestInvite
        """
        with logfire.span("user_service.resolve_invitee", phone=phone.root[-4:]):
            user = await self.user_repository.find_by_phone(phone)
            if user:
                logfire.info("Invitee resolved to user", user_id=str(user.id))
                return RegisteredInvite(user_id=user.id, name=name, phone=phone)

            logfire.info("Invitee has no account, inviting as guest")
            return GuestInvite(guest_phone=phone, name=name)
