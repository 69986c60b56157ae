"""Capacity guard.

Re-validates the quota at the moment an acceptance is committed. Whatever
the client believed about free slots is stale by definition, so the check
runs against the tender snapshot read inside the store's critical section.
"""

from crew.domain.model.invite import BaseInvite
from crew.domain.model.tender import Tender
from crew.domain.value import InviteStatus, QuotaFull


def check_capacity(tender: Tender, invite: BaseInvite) -> QuotaFull | None:
    """Check whether ``invite`` may move to ACCEPTED.

    Accepted invites are counted excluding the transitioning one. An invite
    that is already accepted passes regardless of quota because re-accepting
    it does not consume another slot.

    Only call this for transitions to ACCEPTED. Rejections free capacity and
    never need the guard.

    Args:
        tender: Authoritative tender snapshot
        invite: The invite about to be accepted, in its current state

    Returns:
        None when the acceptance fits, QuotaFull otherwise
    """
    if invite.status == InviteStatus.ACCEPTED:
        return None

    accepted_count = sum(
        1
        for other in tender.invites
        if other.status == InviteStatus.ACCEPTED
        and other.invitee_key != invite.invitee_key
    )
    if accepted_count >= tender.quota:
        return QuotaFull(
            tender_id=tender.id,
            quota=tender.quota,
            accepted_count=accepted_count,
        )
    return None


def can_accept(tender: Tender, invite: BaseInvite) -> bool:
    """Whether ``invite`` may move to ACCEPTED without exceeding the quota."""
    return check_capacity(tender, invite) is None
