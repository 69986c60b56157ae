"""Test configuration and shared builders."""

from datetime import date, datetime, time, timedelta
from uuid import uuid4

from crew.domain.model import GuestInvite, Invite, RegisteredInvite, Tender, User
from crew.domain.value import (
    InviteStatus,
    Phone,
    TenderId,
    TenderStatus,
    UserId,
    UserRole,
)

_phone_counter = iter(range(10_000_000, 99_999_999))


def next_phone() -> Phone:
    """Return a phone number no other test builder has handed out."""
    return Phone(f"+49{next(_phone_counter)}")


def make_user(
    role: UserRole = UserRole.PARTICIPANT,
    name: str = "Test User",
    phone: Phone | None = None,
) -> User:
    """Build a user with a unique phone number."""
    return User(
        id=UserId(uuid4()),
        name=name,
        phone=phone or next_phone(),
        role=role,
        credits=100 if role == UserRole.ORGANIZER else 50,
    )


def make_registered_invite(
    user_id: UserId | None = None,
    status: InviteStatus = InviteStatus.PENDING,
    name: str = "Invitee",
) -> RegisteredInvite:
    """Build an invite for a registered user."""
    return RegisteredInvite(
        user_id=user_id or UserId(uuid4()),
        name=name,
        phone=next_phone(),
        status=status,
    )


def make_guest_invite(
    status: InviteStatus = InviteStatus.PENDING, name: str = "Guest"
) -> GuestInvite:
    """Build an invite for someone without an account."""
    return GuestInvite(guest_phone=next_phone(), name=name, status=status)


def make_tender(
    invites: list[Invite] | None = None,
    quota: int = 2,
    status: TenderStatus = TenderStatus.OPEN,
    organizer_id: UserId | None = None,
    scheduled_date: date | None = None,
    created_at: datetime | None = None,
) -> Tender:
    """Build a tender directly, bypassing the store's checks."""
    return Tender(
        id=TenderId(uuid4()),
        organizer_id=organizer_id or UserId(uuid4()),
        organizer_name="Organizer",
        title="Warehouse shift",
        location="Dock 4",
        scheduled_date=scheduled_date or date.today() + timedelta(days=3),
        start_time=time(8, 0),
        end_time=time(16, 0),
        pay=120,
        quota=quota,
        status=status,
        invites=invites or [],
        created_at=created_at or datetime.now(),
    )
