"""Tender snapshot shared by the tender use case responses."""

from datetime import date, datetime, time

from pydantic import BaseModel

from crew.domain.model import RegisteredInvite, Tender
from crew.domain.model.invite import BaseInvite
from crew.domain.service import can_accept, summarize
from crew.domain.value import InviteCounts, InviteKind, InviteStatus, TenderStatus


class InviteItem(BaseModel):
    """Invite as shown to API clients."""

    kind: InviteKind
    user_id: str | None  # None for guests
    name: str
    phone: str
    status: InviteStatus
    updated_at: datetime
    can_accept: bool  # False for guests, who cannot respond in-app

    @classmethod
    def from_invite(cls, invite: BaseInvite, tender: Tender) -> "InviteItem":
        if isinstance(invite, RegisteredInvite):
            user_id, phone = str(invite.user_id), invite.phone.root
            accept_allowed = can_accept(tender, invite)
        else:
            user_id, phone = None, invite.guest_phone.root  # type: ignore[attr-defined]
            accept_allowed = False
        return cls(
            kind=invite.kind,  # type: ignore[attr-defined]
            user_id=user_id,
            name=invite.name,
            phone=phone,
            status=invite.status,
            updated_at=invite.updated_at,
            can_accept=accept_allowed,
        )


class TenderSnapshot(BaseModel):
    """Authoritative view of a tender and its invites."""

    tender_id: str
    organizer_id: str
    organizer_name: str | None
    title: str
    description: str | None
    location: str | None
    scheduled_date: date
    start_time: time
    end_time: time
    pay: int
    quota: int
    status: TenderStatus
    counts: InviteCounts
    invites: list[InviteItem]
    version: int
    created_at: datetime
    closed_at: datetime | None

    @classmethod
    def from_tender(cls, tender: Tender) -> "TenderSnapshot":
        return cls(
            tender_id=str(tender.id),
            organizer_id=str(tender.organizer_id),
            organizer_name=tender.organizer_name,
            title=tender.title,
            description=tender.description,
            location=tender.location,
            scheduled_date=tender.scheduled_date,
            start_time=tender.start_time,
            end_time=tender.end_time,
            pay=tender.pay,
            quota=tender.quota,
            status=tender.status,
            counts=summarize(tender.invites, tender.quota),
            invites=[
                InviteItem.from_invite(invite, tender) for invite in tender.invites
            ],
            version=tender.version,
            created_at=tender.created_at,
            closed_at=tender.closed_at,
        )
