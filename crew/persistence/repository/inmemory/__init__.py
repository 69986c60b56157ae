"""In-memory repository implementations for testing."""

from .tender import InMemoryTenderRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryTenderRepository",
    "InMemoryUserRepository",
]
