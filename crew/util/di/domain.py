"""Domain layer DI providers."""

from dishka import Scope, provide

from crew.config import StoreSettings
from crew.domain.repository import TenderRepository, UserRepository
from crew.domain.service import TenderStore, UserService
from crew.util.di.base import ProviderBase
from crew.util.locking import TenderLocks


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    The tender lock registry is APP-scoped: every request must see the same
    lock for a given tender.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_tender_locks(self) -> TenderLocks:
        """Provide the process-wide tender lock registry."""
        return TenderLocks()

    @provide
    def get_tender_store(
        self,
        tender_repository: TenderRepository,
        tender_locks: TenderLocks,
        store_settings: StoreSettings,
    ) -> TenderStore:
        """Provide tender store domain service."""
        return TenderStore(
            tender_repository=tender_repository,
            tender_locks=tender_locks,
            store_settings=store_settings,
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)
