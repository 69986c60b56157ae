"""Tender aggregate root.

A tender is one staffing request: an organizer needs ``quota`` workers for
a shift and invites a set of people. The tender exclusively owns its
invites; they have no lifecycle of their own.
"""

from datetime import date, datetime, time
from typing import Optional

from pydantic import Field, model_validator

from crew.domain.model.common import DomainModel
from crew.domain.model.invite import Invite, RegisteredInvite
from crew.domain.value import TenderId, TenderStatus, UserId


class Tender(DomainModel):
    """Tender aggregate root.

    Business rules:
    - status is FULL iff accepted invites >= quota (unless CLOSED)
    - CLOSED is terminal: invite responses never change it
    - At most one invite per invitee
    - Invite order is insertion order and is preserved for display
    """

    id: TenderId
    organizer_id: UserId
    organizer_name: Optional[str] = None  # Denormalized from users
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    location: Optional[str] = Field(default=None, max_length=255)
    scheduled_date: date
    start_time: time
    end_time: time
    pay: int = Field(ge=0)  # Whole currency units
    quota: int = Field(ge=1)
    status: TenderStatus = TenderStatus.OPEN
    invites: list[Invite] = Field(default_factory=list)
    version: int = Field(default=1, ge=1)  # Bumped on every persisted change
    created_at: datetime = Field(default_factory=datetime.now)
    closed_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_unique_invitees(self) -> "Tender":
        """Validate there is at most one invite per invitee."""
        keys = [invite.invitee_key for invite in self.invites]
        if len(keys) != len(set(keys)):
            raise ValueError("A tender can hold at most one invite per invitee")
        return self

    @property
    def is_closed(self) -> bool:
        return self.status == TenderStatus.CLOSED

    def find_invite(self, user_id: UserId) -> Optional[RegisteredInvite]:
        """Find the invite addressed to a registered user."""
        for invite in self.invites:
            if invite.is_for_user(user_id):
                return invite  # type: ignore[return-value]
        return None
