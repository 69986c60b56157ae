"""Domain services."""

from .base import Service
from .capacity_guard import can_accept, check_capacity
from .reconciler import count_accepted, reconcile, summarize
from .tender_store import (
    ExpirySweepResult,
    TenderStore,
    TransitionOutcome,
    TransitionResult,
)
from .user_service import UserService

__all__ = [
    "ExpirySweepResult",
    "Service",
    "TenderStore",
    "TransitionOutcome",
    "TransitionResult",
    "UserService",
    "can_accept",
    "check_capacity",
    "count_accepted",
    "reconcile",
    "summarize",
]
