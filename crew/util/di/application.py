"""Application layer DI providers."""

from dishka import Scope, provide

from crew.application.usecase.tender import (
    CloseTenderUseCase,
    CreateTenderUseCase,
    GetTenderUseCase,
    ListTendersUseCase,
    RespondToInviteUseCase,
)
from crew.domain.service import TenderStore, UserService
from crew.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_create_tender_use_case(
        self, tender_store: TenderStore, user_service: UserService
    ) -> CreateTenderUseCase:
        """Provide create tender use case."""
        return CreateTenderUseCase(
            tender_store=tender_store, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_tender_use_case(self, tender_store: TenderStore) -> GetTenderUseCase:
        """Provide get tender use case."""
        return GetTenderUseCase(tender_store=tender_store)

    @provide(scope=Scope.REQUEST)
    def get_list_tenders_use_case(
        self, tender_store: TenderStore
    ) -> ListTendersUseCase:
        """Provide list tenders use case."""
        return ListTendersUseCase(tender_store=tender_store)

    @provide(scope=Scope.REQUEST)
    def get_respond_to_invite_use_case(
        self, tender_store: TenderStore
    ) -> RespondToInviteUseCase:
        """Provide respond to invite use case."""
        return RespondToInviteUseCase(tender_store=tender_store)

    @provide(scope=Scope.REQUEST)
    def get_close_tender_use_case(
        self, tender_store: TenderStore
    ) -> CloseTenderUseCase:
        """Provide close tender use case."""
        return CloseTenderUseCase(tender_store=tender_store)
