"""Unit tests for the capacity guard."""

from crew.domain.service import can_accept, check_capacity
from crew.domain.value import InviteStatus, QuotaFull
from tests.conftest import make_registered_invite, make_tender


class TestCheckCapacity:
    """Tests for check_capacity()."""

    def test_accept_with_free_slot(self):
        """An acceptance fits while accepted invites are below the quota."""
        pending = make_registered_invite()
        tender = make_tender(
            invites=[make_registered_invite(status=InviteStatus.ACCEPTED), pending],
            quota=2,
        )

        assert check_capacity(tender, pending) is None
        assert can_accept(tender, pending)

    def test_accept_when_full_returns_quota_full(self):
        """Once the quota is reached another acceptance is refused."""
        pending = make_registered_invite()
        tender = make_tender(
            invites=[make_registered_invite(status=InviteStatus.ACCEPTED), pending],
            quota=1,
        )

        result = check_capacity(tender, pending)

        assert result == QuotaFull(tender_id=tender.id, quota=1, accepted_count=1)
        assert not can_accept(tender, pending)

    def test_reaccepting_accepted_invite_always_passes(self):
        """An already accepted invite does not consume a second slot."""
        accepted = make_registered_invite(status=InviteStatus.ACCEPTED)
        tender = make_tender(
            invites=[accepted, make_registered_invite(status=InviteStatus.ACCEPTED)],
            quota=2,
        )

        assert check_capacity(tender, accepted) is None

    def test_rejected_invite_can_accept_when_slot_free(self):
        """A previously rejected invite may flip to accepted if room is left."""
        rejected = make_registered_invite(status=InviteStatus.REJECTED)
        tender = make_tender(invites=[rejected], quota=1)

        assert can_accept(tender, rejected)

    def test_transitioning_invite_is_excluded_from_count(self):
        """Only other invites count against the quota."""
        pending = make_registered_invite()
        tender = make_tender(invites=[pending], quota=1)

        assert check_capacity(tender, pending) is None
