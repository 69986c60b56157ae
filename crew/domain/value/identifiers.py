"""Strongly typed identifiers for Crew domain entities.

Using NewType for strong typing prevents mixing up a tender ID with a user ID
at call sites such as apply_invite_transition(tender_id, user_id, ...).
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
TenderId = NewType("TenderId", UUID)
