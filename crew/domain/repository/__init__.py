"""Repository interfaces for Crew domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from crew.domain.repository.tender import TenderRepository
from crew.domain.repository.user import UserRepository

__all__ = [
    "TenderRepository",
    "UserRepository",
]
