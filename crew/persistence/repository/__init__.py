"""PostgreSQL repository implementations."""

from crew.persistence.repository.tender import PostgresTenderRepository
from crew.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresTenderRepository",
    "PostgresUserRepository",
]
