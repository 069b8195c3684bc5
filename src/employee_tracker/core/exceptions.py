class DomainError(Exception):
    """Base for every error the tracker raises on purpose."""


class ValidationError(DomainError):
    """Bad input: empty title, out-of-range rating, unknown employee and the like."""


class AuthenticationError(DomainError):
    """Login rejected."""


class AuthorizationError(DomainError):
    """The logged-in role may not perform the action."""


class StorageError(DomainError):
    """Wraps sqlite3 / mysql-connector failures so callers see one error type."""
