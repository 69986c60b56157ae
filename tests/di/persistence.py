"""Mock persistence providers for testing."""

from dishka import Scope, provide

from crew.domain.repository import TenderRepository, UserRepository
from crew.persistence.repository.inmemory import (
    InMemoryTenderRepository,
    InMemoryUserRepository,
)
from crew.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state written by one request is visible to the next
    one against the same container. Each test builds its own container, so
    tests stay isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_tender_repository(self) -> TenderRepository:
        """Provide in-memory tender repository."""
        return InMemoryTenderRepository()
