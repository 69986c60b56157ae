"""Domain model entities for Crew."""

from crew.domain.model.invite import BaseInvite, GuestInvite, Invite, RegisteredInvite
from crew.domain.model.tender import Tender
from crew.domain.model.user import User

__all__ = [
    "User",
    "Tender",
    "Invite",
    "BaseInvite",
    "RegisteredInvite",
    "GuestInvite",
]
