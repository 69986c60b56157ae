"""Create tender use case."""

from datetime import date, time
from uuid import UUID

import logfire
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from crew.application.usecase.base import BaseUseCase
from crew.domain.error import BusinessRuleViolationError, ValidationError
from crew.domain.model import Invite
from crew.domain.service import TenderStore, UserService
from crew.domain.value import Phone, UserId, UserRole

from .snapshot import TenderSnapshot


class InviteeInfo(BaseModel):
    """Contact to invite."""

    name: str
    phone: str


class CreateTenderRequest(BaseModel):
    """Request to post a tender."""

    organizer_id: str
    title: str
    description: str | None = None
    location: str | None = None
    scheduled_date: date
    start_time: time
    end_time: time
    pay: int
    quota: int
    invitees: list[InviteeInfo] = Field(default_factory=list, max_length=200)


class CreateTenderResponse(BaseModel):
    """Create tender response."""

    tender: TenderSnapshot


class CreateTenderUseCase(BaseUseCase):
    """Use case for an organizer posting a tender and inviting contacts."""

    def __init__(self, tender_store: TenderStore, user_service: UserService) -> None:
        """Initialize create tender use case.

        Args:
            tender_store: Tender store domain service
            user_service: User domain service
        """
        self.tender_store = tender_store
        self.user_service = user_service

    async def execute(self, request: CreateTenderRequest) -> CreateTenderResponse:
        """Execute create tender flow.

        Each invitee is resolved by phone: contacts with an account get a
        registered invite, everyone else a guest invite.

        Args:
            request: Tender details and contacts to invite

        Returns:
            Snapshot of the new open tender

        Raises:
            UserNotFoundError: If the organizer does not exist
            BusinessRuleViolationError: If the user is not an organizer
            ValidationError: If the tender details or a phone are invalid
        """
        organizer_id = UserId(UUID(request.organizer_id))

        with logfire.span(
            "create_tender",
            organizer_id=str(organizer_id),
            invite_count=len(request.invitees),
        ):
            organizer = await self.user_service.get_by_id(organizer_id)
            if organizer.role != UserRole.ORGANIZER:
                logfire.warn(
                    "Tender creation by non-organizer", user_id=str(organizer_id)
                )
                raise BusinessRuleViolationError("Only organizers can post tenders")

            invites: list[Invite] = []
            for invitee in request.invitees:
                try:
                    phone = Phone(invitee.phone)
                except PydanticValidationError as e:
                    raise ValidationError(
                        f"Invalid phone for {invitee.name}: {invitee.phone}"
                    ) from e
                invites.append(
                    await self.user_service.resolve_invitee(invitee.name, phone)
                )

            tender = await self.tender_store.create_tender(
                organizer_id=organizer_id,
                organizer_name=organizer.name,
                title=request.title,
                description=request.description,
                location=request.location,
                scheduled_date=request.scheduled_date,
                start_time=request.start_time,
                end_time=request.end_time,
                pay=request.pay,
                quota=request.quota,
                invites=invites,
            )
            return CreateTenderResponse(tender=TenderSnapshot.from_tender(tender))
