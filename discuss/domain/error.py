"""Domain layer errors.

Every failure the core surfaces is one of the kinds below. Messages are
stable and never carry driver error text.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when an authorization rule is violated.

    Covers locked threads and edits/deletes by someone who is neither the
    author nor a moderator.
    """

    def __init__(self, message: str):
        super().__init__(message)


class ConflictError(DomainError):
    """Raised on a uniqueness violation (slug, category name, ...)."""

    def __init__(self, resource: str, message: str = "already exists"):
        self.resource = resource
        super().__init__(f"{resource} {message}")


class StoreUnavailableError(DomainError):
    """Raised when a backing store is unreachable or times out."""

    def __init__(self, store: str):
        self.store = store
        super().__init__(f"{store} store unavailable")
