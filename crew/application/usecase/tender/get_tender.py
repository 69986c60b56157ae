"""Get tender use case."""

from uuid import UUID

from pydantic import BaseModel

from crew.application.usecase.base import BaseUseCase
from crew.domain.service import TenderStore
from crew.domain.value import TenderId

from .snapshot import TenderSnapshot


class GetTenderRequest(BaseModel):
    """Get tender request."""

    tender_id: str


class GetTenderResponse(BaseModel):
    """Get tender response."""

    tender: TenderSnapshot


class GetTenderUseCase(BaseUseCase):
    """Use case for reading the authoritative snapshot of a tender."""

    def __init__(self, tender_store: TenderStore) -> None:
        """Initialize get tender use case.

        Args:
            tender_store: Tender store domain service
        """
        self.tender_store = tender_store

    async def execute(self, request: GetTenderRequest) -> GetTenderResponse:
        """Execute get tender flow.

        Reading never changes the tender, even when its date has passed.

        Raises:
            TenderNotFoundError: If the tender does not exist
        """
        tender = await self.tender_store.get(TenderId(UUID(request.tender_id)))
        return GetTenderResponse(tender=TenderSnapshot.from_tender(tender))
