"""Domain value objects for Crew."""

from crew.domain.value.identifiers import TenderId, UserId
from crew.domain.value.types import (
    InviteCounts,
    InviteKind,
    InviteResponse,
    InviteStatus,
    Phone,
    QuotaFull,
    TenderStatus,
    UserRole,
)

__all__ = [
    # Identifiers
    "UserId",
    "TenderId",
    # Types
    "UserRole",
    "InviteStatus",
    "InviteResponse",
    "InviteKind",
    "TenderStatus",
    "Phone",
    "QuotaFull",
    "InviteCounts",
]
