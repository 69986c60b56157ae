"""In-memory user repository for testing."""

from typing import Optional

from crew.domain.model.user import User
from crew.domain.repository.user import UserRepository
from crew.domain.value import Phone, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_phone(self, phone: Phone) -> Optional[User]:
        """Find a user by their phone number."""
        for user in self._users.values():
            if user.phone == phone:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user
