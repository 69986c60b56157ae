"""Tender routes."""

from datetime import date, time
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from crew.application.usecase.tender import (
    CloseTenderRequest,
    CloseTenderResponse,
    CloseTenderUseCase,
    CreateTenderRequest,
    CreateTenderResponse,
    CreateTenderUseCase,
    GetTenderRequest,
    GetTenderResponse,
    GetTenderUseCase,
    InviteeInfo,
    ListTendersRequest,
    ListTendersResponse,
    ListTendersUseCase,
    RespondToInviteRequest,
    RespondToInviteResponse,
    RespondToInviteUseCase,
)
from crew.domain.error import (
    BusinessRuleViolationError,
    DomainError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from crew.domain.service import TransitionOutcome
from crew.domain.value import InviteResponse

router = APIRouter(prefix="/tenders", tags=["tenders"], route_class=DishkaRoute)


class CreateTenderAPIRequest(BaseModel):
    """API request for posting a tender."""

    organizer_id: UUID
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    location: str | None = Field(default=None, max_length=255)
    scheduled_date: date
    start_time: time
    end_time: time
    pay: int = Field(ge=0)
    quota: int = Field(ge=1)
    invitees: list[InviteeInfo] = Field(default_factory=list)


class RespondToInviteAPIRequest(BaseModel):
    """API request for answering an invite."""

    response: InviteResponse


class CloseTenderAPIRequest(BaseModel):
    """API request for closing a tender."""

    organizer_id: UUID


def _http_error(e: DomainError) -> HTTPException:
    """Translate a domain error into the matching HTTP error."""
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, BusinessRuleViolationError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if isinstance(e, PersistenceError):
        logfire.error("Tender store unavailable", error=str(e))
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Tender store unavailable, please retry",
        )
    logfire.error("Unhandled domain error", error=str(e), error_type=type(e).__name__)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
    )


@router.post(
    "/", response_model=CreateTenderResponse, status_code=status.HTTP_201_CREATED
)
async def create_tender(
    request: CreateTenderAPIRequest,
    create_tender_use_case: FromDishka[CreateTenderUseCase],
) -> CreateTenderResponse:
    """Post a tender and invite contacts.

    Raises:
        HTTPException: 400 on invalid details, 403 if the user is not an
            organizer, 404 if the organizer does not exist
    """
    try:
        return await create_tender_use_case.execute(
            CreateTenderRequest(
                organizer_id=str(request.organizer_id),
                title=request.title,
                description=request.description,
                location=request.location,
                scheduled_date=request.scheduled_date,
                start_time=request.start_time,
                end_time=request.end_time,
                pay=request.pay,
                quota=request.quota,
                invitees=request.invitees,
            )
        )
    except DomainError as e:
        logfire.warn("Tender creation failed", error=str(e))
        raise _http_error(e)


@router.get("/", response_model=ListTendersResponse)
async def list_tenders(
    list_tenders_use_case: FromDishka[ListTendersUseCase],
    organizer_id: UUID | None = Query(default=None),
    invitee_id: UUID | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> ListTendersResponse:
    """List tenders posted by an organizer or addressed to an invitee.

    Exactly one of organizer_id or invitee_id must be given.
    """
    try:
        use_case_request = ListTendersRequest(
            organizer_id=str(organizer_id) if organizer_id else None,
            invitee_id=str(invitee_id) if invitee_id else None,
            limit=limit,
            offset=offset,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        return await list_tenders_use_case.execute(use_case_request)
    except DomainError as e:
        raise _http_error(e)


@router.get("/{tender_id}", response_model=GetTenderResponse)
async def get_tender(
    tender_id: UUID,
    get_tender_use_case: FromDishka[GetTenderUseCase],
) -> GetTenderResponse:
    """Get the authoritative snapshot of a tender."""
    try:
        return await get_tender_use_case.execute(
            GetTenderRequest(tender_id=str(tender_id))
        )
    except DomainError as e:
        raise _http_error(e)


@router.post(
    "/{tender_id}/invites/{user_id}/response",
    response_model=RespondToInviteResponse,
    responses={
        status.HTTP_409_CONFLICT: {
            "model": RespondToInviteResponse,
            "description": "Tender is full; body carries the current snapshot",
        }
    },
)
async def respond_to_invite(
    tender_id: UUID,
    user_id: UUID,
    request: RespondToInviteAPIRequest,
    respond_to_invite_use_case: FromDishka[RespondToInviteUseCase],
):
    """Accept or reject an invite.

    A refused acceptance returns 409 with the current tender snapshot so the
    client can refresh its view without a second request.
    """
    try:
        result = await respond_to_invite_use_case.execute(
            RespondToInviteRequest(
                tender_id=str(tender_id),
                user_id=str(user_id),
                response=request.response,
            )
        )
    except DomainError as e:
        raise _http_error(e)

    if result.outcome == TransitionOutcome.QUOTA_FULL:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=result.model_dump(mode="json"),
        )
    return result


@router.post("/{tender_id}/close", response_model=CloseTenderResponse)
async def close_tender(
    tender_id: UUID,
    request: CloseTenderAPIRequest,
    close_tender_use_case: FromDishka[CloseTenderUseCase],
) -> CloseTenderResponse:
    """Close a tender. Closing twice is allowed and changes nothing."""
    try:
        return await close_tender_use_case.execute(
            CloseTenderRequest(
                tender_id=str(tender_id), organizer_id=str(request.organizer_id)
            )
        )
    except DomainError as e:
        raise _http_error(e)
