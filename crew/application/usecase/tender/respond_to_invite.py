"""Respond to invite use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from crew.application.usecase.base import BaseUseCase
from crew.domain.service import TenderStore, TransitionOutcome
from crew.domain.value import InviteResponse, QuotaFull, TenderId, UserId

from .snapshot import TenderSnapshot


class RespondToInviteRequest(BaseModel):
    """Request to accept or reject an invite."""

    tender_id: str
    user_id: str
    response: InviteResponse


class RespondToInviteResponse(BaseModel):
    """Outcome of an invite response.

    ``tender`` is the authoritative snapshot after the call, whether or not
    the response was applied.
    """

    outcome: TransitionOutcome
    changed: bool
    tender: TenderSnapshot
    quota_full: QuotaFull | None = None


class RespondToInviteUseCase(BaseUseCase):
    """Use case for a participant answering an invite."""

    def __init__(self, tender_store: TenderStore) -> None:
        """Initialize respond to invite use case.

        Args:
            tender_store: Tender store domain service
        """
        self.tender_store = tender_store

    async def execute(self, request: RespondToInviteRequest) -> RespondToInviteResponse:
        """Execute respond to invite flow.

        Args:
            request: Tender, responding user and the response

        Returns:
            Outcome (applied or quota_full) with the tender snapshot

        Raises:
            TenderNotFoundError: If the tender does not exist
            InviteNotFoundError: If the user holds no invite on the tender
            PersistenceError: If the response could not be stored
        """
        tender_id = TenderId(UUID(request.tender_id))
        user_id = UserId(UUID(request.user_id))

        with logfire.span(
            "respond_to_invite",
            tender_id=str(tender_id),
            user_id=str(user_id),
            response=request.response.value,
        ):
            result = await self.tender_store.apply_invite_transition(
                tender_id, user_id, request.response.status
            )
            return RespondToInviteResponse(
                outcome=result.outcome,
                changed=result.changed,
                tender=TenderSnapshot.from_tender(result.tender),
                quota_full=result.quota_full,
            )
