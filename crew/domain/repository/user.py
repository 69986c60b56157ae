"""User repository interface."""

from abc import ABC, abstractmethod

from crew.domain.model.user import User
from crew.domain.value import Phone, UserId


class UserRepository(ABC):
    """Repository for User aggregate."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> User | None:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_phone(self, phone: Phone) -> User | None:
        """Find a user by phone number.

        Args:
            phone: Normalized phone number

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass
