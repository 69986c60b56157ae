"""Tender use cases."""

from .close_tender import CloseTenderRequest, CloseTenderResponse, CloseTenderUseCase
from .create_tender import (
    CreateTenderRequest,
    CreateTenderResponse,
    CreateTenderUseCase,
    InviteeInfo,
)
from .get_tender import GetTenderRequest, GetTenderResponse, GetTenderUseCase
from .list_tenders import ListTendersRequest, ListTendersResponse, ListTendersUseCase
from .respond_to_invite import (
    RespondToInviteRequest,
    RespondToInviteResponse,
    RespondToInviteUseCase,
)
from .snapshot import InviteItem, TenderSnapshot

__all__ = [
    "CloseTenderRequest",
    "CloseTenderResponse",
    "CloseTenderUseCase",
    "CreateTenderRequest",
    "CreateTenderResponse",
    "CreateTenderUseCase",
    "GetTenderRequest",
    "GetTenderResponse",
    "GetTenderUseCase",
    "InviteItem",
    "InviteeInfo",
    "ListTendersRequest",
    "ListTendersResponse",
    "ListTendersUseCase",
    "RespondToInviteRequest",
    "RespondToInviteResponse",
    "RespondToInviteUseCase",
    "TenderSnapshot",
]
