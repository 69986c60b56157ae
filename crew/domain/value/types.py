"""Domain value objects for Crew.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum

from pydantic import field_validator

from crew.domain.value.common import RootValueObject, ValueObject
from crew.domain.value.identifiers import TenderId


class UserRole(str, Enum):
    """Role a user signed up with."""

    ORGANIZER = "organizer"
    PARTICIPANT = "participant"


class InviteStatus(str, Enum):
    """Status of an invite on a tender."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class InviteResponse(str, Enum):
    """Response a participant can give to an invite.

    Subset of InviteStatus - nobody can move an invite back to pending.
    """

    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def status(self) -> InviteStatus:
        """Invite status this response transitions to."""
        return InviteStatus(self.value)


class TenderStatus(str, Enum):
    """Aggregate status of a tender.

    OPEN and FULL are derived from invite responses. CLOSED is only ever
    set explicitly (organizer action or date-based sweep) and is terminal.
    """

    OPEN = "open"
    FULL = "full"
    CLOSED = "closed"


class InviteKind(str, Enum):
    """Discriminator for the invite variants."""

    REGISTERED = "registered"
    GUEST = "guest"


class Phone(RootValueObject[str]):
    """Phone number used as a contact handle.

    Stored normalized: optional leading '+', digits only, 6-20 digits.
    Spaces, dashes, dots and parentheses are stripped on input.
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize_phone(cls, v: str) -> str:
        """Strip formatting characters and validate the digits."""
        if not isinstance(v, str):
            raise ValueError("Phone must be a string")
        cleaned = re.sub(r"[\s\-().]", "", v)
        if not re.match(r"^\+?\d{6,20}$", cleaned):
            raise ValueError("Phone must contain 6-20 digits")
        return cleaned


class QuotaFull(ValueObject):
    """Capacity already consumed by other accepted invites.

    Returned (never raised) by the capacity guard. This is an expected,
    user-facing outcome and not a system fault.
    """

    tender_id: TenderId
    quota: int
    accepted_count: int


class InviteCounts(ValueObject):
    """Aggregate counts over a tender's invites."""

    pending: int = 0
    accepted: int = 0
    rejected: int = 0
    remaining_slots: int = 0
