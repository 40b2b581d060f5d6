"""
Task Manager - Error Types

Domain exceptions raised by the credential store, session ledger and
resource layer. Route handlers map them to HTTP status codes.
"""


class TaskManagerError(Exception):
    """Base class for all service errors."""


class ConfigurationError(TaskManagerError):
    """Raised at startup when required configuration is missing."""


class ValidationError(TaskManagerError):
    """Raised when a record fails field validation."""


class DuplicateEmailError(ValidationError):
    """Raised when registering an email that is already taken."""


class BadCredentialsError(TaskManagerError):
    """Raised when an email/password pair does not authenticate."""


class PersistenceError(TaskManagerError):
    """Raised when a write to the store fails."""


class NotFoundError(TaskManagerError):
    """Raised when an owned record does not exist."""
