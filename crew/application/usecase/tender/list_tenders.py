"""List tenders use case."""

from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from crew.application.usecase.base import BaseUseCase
from crew.domain.service import TenderStore
from crew.domain.value import UserId

from .snapshot import TenderSnapshot


class ListTendersRequest(BaseModel):
    """List tenders request.

    Lists either the tenders an organizer posted or the tenders a
    participant was invited to.
    """

    organizer_id: str | None = None
    invitee_id: str | None = None
    limit: int | None = Field(default=None, ge=1, le=200)
    offset: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_single_filter(self) -> "ListTendersRequest":
        """Validate that exactly one of organizer_id or invitee_id is provided."""
        if not self.organizer_id and not self.invitee_id:
            raise ValueError("Either organizer_id or invitee_id must be provided")
        if self.organizer_id and self.invitee_id:
            raise ValueError("Provide either organizer_id or invitee_id, not both")
        return self


class ListTendersResponse(BaseModel):
    """List tenders response."""

    tenders: list[TenderSnapshot]


class ListTendersUseCase(BaseUseCase):
    """Use case for listing tenders, newest first."""

    def __init__(self, tender_store: TenderStore) -> None:
        """Initialize list tenders use case.

        Args:
            tender_store: Tender store domain service
        """
        self.tender_store = tender_store

    async def execute(self, request: ListTendersRequest) -> ListTendersResponse:
        """Execute list tenders flow."""
        if request.organizer_id:
            tenders = await self.tender_store.list_by_organizer(
                UserId(UUID(request.organizer_id)), request.limit, request.offset
            )
        else:
            tenders = await self.tender_store.list_by_invitee(
                UserId(UUID(request.invitee_id)), request.limit, request.offset  # type: ignore[arg-type]
            )
        return ListTendersResponse(
            tenders=[TenderSnapshot.from_tender(tender) for tender in tenders]
        )
