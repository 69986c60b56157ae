"""Invite reconciliation.

Pure functions deriving a tender's aggregate status from its invites. They
never read or write storage; the tender store passes them a snapshot and
persists whatever they return.

Status is always recomputed from the full invite list. Nothing here keeps
incremental counters, so a partially failed write can never leave a count
drifting away from the invites it describes.
"""

from collections.abc import Iterable, Sequence

from crew.domain.model.invite import BaseInvite
from crew.domain.value import InviteCounts, InviteStatus, TenderStatus


def count_accepted(invites: Iterable[BaseInvite]) -> int:
    """Count invites in ACCEPTED status."""
    return sum(1 for invite in invites if invite.status == InviteStatus.ACCEPTED)


def reconcile(
    invites: Sequence[BaseInvite], quota: int, current_status: TenderStatus
) -> TenderStatus:
    """Compute a tender's status from its invites.

    CLOSED is terminal with respect to invite responses and is returned
    unchanged. Otherwise the tender is FULL once accepted invites reach the
    quota and OPEN below it.

    A quota of zero or less cannot be created through the tender store. If
    one shows up anyway it is treated as already satisfied, so such a tender
    reports FULL rather than accepting workers it has no room for.

    Args:
        invites: Every invite on the tender
        quota: Number of workers the tender needs
        current_status: Status currently stored on the tender

    Returns:
        The status the tender should have
    """
    if current_status == TenderStatus.CLOSED:
        return TenderStatus.CLOSED
    if quota <= 0:
        return TenderStatus.FULL
    if count_accepted(invites) >= quota:
        return TenderStatus.FULL
    return TenderStatus.OPEN


def summarize(invites: Sequence[BaseInvite], quota: int) -> InviteCounts:
    """Count invites per status and the slots still free."""
    counts = {status: 0 for status in InviteStatus}
    for invite in invites:
        counts[invite.status] += 1
    return InviteCounts(
        pending=counts[InviteStatus.PENDING],
        accepted=counts[InviteStatus.ACCEPTED],
        rejected=counts[InviteStatus.REJECTED],
        remaining_slots=max(0, quota - counts[InviteStatus.ACCEPTED]),
    )
