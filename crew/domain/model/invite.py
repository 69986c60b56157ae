"""Invite entity.

An invite ties one invitee to exactly one tender. Invitees are either
registered users (referenced by id) or guests known only by phone number,
so the invite is a tagged union discriminated by ``kind``.

Name and phone are a snapshot taken at invite time so the invite survives
profile edits and guest-to-registered promotion.
"""

from abc import abstractmethod
from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import Field

from crew.domain.model.common import DomainModel
from crew.domain.value import InviteKind, InviteStatus, Phone, UserId


class BaseInvite(DomainModel):
    """Fields shared by both invite variants.

    Abstract: only RegisteredInvite and GuestInvite are ever instantiated.
    """

    name: str = Field(min_length=1, max_length=255)
    status: InviteStatus = InviteStatus.PENDING
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    @abstractmethod
    def invitee_key(self) -> str:
        """Identity of the invitee within a tender (unique per tender)."""

    def is_for_user(self, user_id: UserId) -> bool:
        """Whether this invite belongs to the given registered user."""
        return False

    def with_status(self, status: InviteStatus, at: datetime | None = None):
        """Return a copy of this invite moved to ``status``."""
        return self.model_copy(
            update={"status": status, "updated_at": at or datetime.now()}
        )


class RegisteredInvite(BaseInvite):
    """Invite addressed to a registered user."""

    kind: Literal[InviteKind.REGISTERED] = InviteKind.REGISTERED
    user_id: UserId
    phone: Phone

    @property
    def invitee_key(self) -> str:
        return f"user:{self.user_id}"

    def is_for_user(self, user_id: UserId) -> bool:
        return self.user_id == user_id


class GuestInvite(BaseInvite):
    """Invite addressed to someone without an account, by phone only.

    Guests cannot respond in-app; their invites stay pending until the
    guest registers and the organizer re-invites them.
    """

    kind: Literal[InviteKind.GUEST] = InviteKind.GUEST
    guest_phone: Phone

    @property
    def invitee_key(self) -> str:
        return f"guest:{self.guest_phone.root}"


Invite = Annotated[Union[RegisteredInvite, GuestInvite], Field(discriminator="kind")]
