"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class TenderNotFoundError(NotFoundError):
    """Raised when a tender ID is unknown."""

    def __init__(self, tender_id: str):
        super().__init__("Tender", tender_id)


class InviteNotFoundError(NotFoundError):
    """Raised when a tender holds no invite for the given user.

    Usually a caller bug or a stale link; never retried automatically.
    """

    def __init__(self, tender_id: str, user_id: str):
        self.tender_id = tender_id
        self.user_id = user_id
        super().__init__("Invite", f"tender={tender_id} user={user_id}")


class UserNotFoundError(NotFoundError):
    """Raised when a user ID is unknown."""

    def __init__(self, user_id: str):
        super().__init__("User", user_id)


class PersistenceError(DomainError):
    """Raised when the durable store failed to commit a change.

    The change has not taken visible effect. Callers may retry the same
    request; invite transitions are idempotent.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)
