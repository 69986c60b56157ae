"""Close tender use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from crew.application.usecase.base import BaseUseCase
from crew.domain.error import BusinessRuleViolationError
from crew.domain.service import TenderStore
from crew.domain.value import TenderId, UserId

from .snapshot import TenderSnapshot


class CloseTenderRequest(BaseModel):
    """Request to close a tender."""

    tender_id: str
    organizer_id: str


class CloseTenderResponse(BaseModel):
    """Close tender response."""

    tender: TenderSnapshot


class CloseTenderUseCase(BaseUseCase):
    """Use case for an organizer closing their tender."""

    def __init__(self, tender_store: TenderStore) -> None:
        """Initialize close tender use case.

        Args:
            tender_store: Tender store domain service
        """
        self.tender_store = tender_store

    async def execute(self, request: CloseTenderRequest) -> CloseTenderResponse:
        """Execute close tender flow.

        Raises:
            TenderNotFoundError: If the tender does not exist
            BusinessRuleViolationError: If the caller did not post the tender
        """
        tender_id = TenderId(UUID(request.tender_id))
        organizer_id = UserId(UUID(request.organizer_id))

        with logfire.span(
            "close_tender", tender_id=str(tender_id), organizer_id=str(organizer_id)
        ):
            tender = await self.tender_store.get(tender_id)
            if tender.organizer_id != organizer_id:
                logfire.warn(
                    "Close attempted by non-organizer",
                    tender_id=str(tender_id),
                    organizer_id=str(organizer_id),
                )
                raise BusinessRuleViolationError(
                    "Only the organizer can close a tender"
                )

            closed = await self.tender_store.close_tender(tender_id)
            return CloseTenderResponse(tender=TenderSnapshot.from_tender(closed))
