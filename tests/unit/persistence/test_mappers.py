"""Unit tests for row <-> domain model mappers."""

from uuid import uuid4

from crew.domain.model import GuestInvite, RegisteredInvite
from crew.domain.value import InviteStatus, TenderStatus, UserRole
from crew.persistence.mappers import (
    invite_to_dict,
    row_to_invite,
    row_to_tender,
    row_to_user,
    tender_to_dict,
    user_to_dict,
)
from tests.conftest import (
    make_guest_invite,
    make_registered_invite,
    make_tender,
    make_user,
)


class TestUserMapping:
    def test_user_dict_uses_plain_values(self):
        user = make_user(role=UserRole.ORGANIZER)

        data = user_to_dict(user)

        assert data["role"] == "organizer"
        assert row_to_user(data) == user

    def test_row_with_string_uuid(self):
        user = make_user()
        data = user_to_dict(user)
        data["id"] = str(user.id)

        assert row_to_user(data).id == user.id


class TestInviteMapping:
    def test_registered_invite_row(self):
        invite = make_registered_invite(status=InviteStatus.ACCEPTED)
        tender_id = uuid4()

        row = invite_to_dict(tender_id, 3, invite)

        assert row["kind"] == "registered"
        assert row["position"] == 3
        assert row["user_id"] == invite.user_id
        assert row["status"] == "accepted"
        assert row_to_invite(row) == invite

    def test_guest_invite_row_has_no_user(self):
        invite = make_guest_invite()

        row = invite_to_dict(uuid4(), 0, invite)

        assert row["kind"] == "guest"
        assert row["user_id"] is None
        assert row["phone"] == invite.guest_phone.root
        mapped = row_to_invite(row)
        assert isinstance(mapped, GuestInvite)
        assert mapped == invite


class TestTenderMapping:
    def test_tender_dict_excludes_invites(self):
        tender = make_tender(
            invites=[make_registered_invite()], status=TenderStatus.FULL
        )

        data = tender_to_dict(tender)

        assert "invites" not in data
        assert data["status"] == "full"
        assert data["version"] == 1

    def test_row_to_tender_keeps_invite_order(self):
        invites = [make_guest_invite(), make_registered_invite(), make_guest_invite()]
        tender = make_tender(invites=invites)
        invite_rows = [
            invite_to_dict(tender.id, position, invite)
            for position, invite in enumerate(tender.invites)
        ]

        mapped = row_to_tender(tender_to_dict(tender), invite_rows)

        assert mapped == tender
        assert isinstance(mapped.invites[1], RegisteredInvite)
