"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Sequence
from uuid import UUID

from crew.domain.model import GuestInvite, Invite, RegisteredInvite, Tender, User
from crew.domain.value import (
    InviteKind,
    InviteStatus,
    Phone,
    TenderId,
    TenderStatus,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        name=row["name"],
        phone=Phone(row["phone"]),
        role=UserRole(row["role"]),
        credits=row["credits"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert a tender_invites row to the matching invite variant.

    Args:
        row: Database row as dict

    Returns:
        RegisteredInvite or GuestInvite
    """
    if InviteKind(row["kind"]) == InviteKind.REGISTERED:
        return RegisteredInvite(
            user_id=UserId(_uuid(row["user_id"])),
            name=row["name"],
            phone=Phone(row["phone"]),
            status=InviteStatus(row["status"]),
            updated_at=row["updated_at"],
        )
    return GuestInvite(
        guest_phone=Phone(row["phone"]),
        name=row["name"],
        status=InviteStatus(row["status"]),
        updated_at=row["updated_at"],
    )


def invite_to_dict(tender_id: TenderId, position: int, invite: Invite) -> Dict[str, Any]:
    """Convert an invite to a tender_invites row.

    Args:
        tender_id: Owning tender
        position: Index of the invite in the tender's invite list
        invite: Invite domain model

    Returns:
        Dict suitable for database insertion
    """
    if isinstance(invite, RegisteredInvite):
        user_id, phone = invite.user_id, invite.phone.root
    else:
        user_id, phone = None, invite.guest_phone.root
    return {
        "tender_id": tender_id,
        "position": position,
        "kind": invite.kind.value,
        "user_id": user_id,
        "name": invite.name,
        "phone": phone,
        "status": invite.status.value,
        "updated_at": invite.updated_at,
    }


def row_to_tender(row: Dict[str, Any], invite_rows: Sequence[Dict[str, Any]]) -> Tender:
    """Convert a tenders row plus its invite rows to a Tender.

    Args:
        row: Tender row as dict
        invite_rows: Invite rows of this tender, ordered by position

    Returns:
        Tender domain model
    """
    return Tender(
        id=TenderId(_uuid(row["id"])),
        organizer_id=UserId(_uuid(row["organizer_id"])),
        organizer_name=row.get("organizer_name"),
        title=row["title"],
        description=row.get("description"),
        location=row.get("location"),
        scheduled_date=row["scheduled_date"],
        start_time=row["start_time"],
        end_time=row["end_time"],
        pay=row["pay"],
        quota=row["quota"],
        status=TenderStatus(row["status"]),
        invites=[row_to_invite(invite_row) for invite_row in invite_rows],
        version=row["version"],
        created_at=row["created_at"],
        closed_at=row.get("closed_at"),
    )


def tender_to_dict(tender: Tender) -> Dict[str, Any]:
    """Convert Tender domain model to a tenders row (without invites).

    Args:
        tender: Tender domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = tender.model_dump(exclude={"invites"})
    data["status"] = tender.status.value
    return data
