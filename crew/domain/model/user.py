"""User aggregate root.

Users are either organizers posting tenders or participants responding to
invites. The reconciliation core only ever reads a user's id and role.
"""

from datetime import datetime

from pydantic import Field

from crew.domain.model.common import DomainModel
from crew.domain.value import Phone, UserId, UserRole


class User(DomainModel):
    """User aggregate root.

    Credits are a balance only. Purchases, ad rewards and spending are
    handled outside this service.
    """

    id: UserId
    name: str = Field(min_length=1, max_length=255)
    phone: Phone  # Unique contact handle
    role: UserRole
    credits: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
