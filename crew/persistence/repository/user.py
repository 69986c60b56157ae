"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from crew.domain.model import User
from crew.domain.repository import UserRepository
from crew.domain.value import Phone, UserId
from crew.persistence.mappers import row_to_user, user_to_dict
from crew.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_phone(self, phone: Phone) -> Optional[User]:
        """Find a user by normalized phone number."""
        stmt = select(users_table).where(users_table.c.phone == phone.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        user_dict = user_to_dict(user)

        existing = await self.find_by_id(user.id)
        if existing:
            stmt = (
                update(users_table)
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = insert(users_table).values(**user_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return user
