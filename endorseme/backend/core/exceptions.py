"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Workflow code converts these into user-visible messages; outside the
workflows they are rendered by the FastAPI exception handlers.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(ApplicationError):
    """Raised when user input is missing or invalid."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class NotAuthenticatedError(ApplicationError):
    """Raised when an action needs a logged-in user and there is none."""

    def __init__(self, message: str = "User must be logged in to perform this action") -> None:
        super().__init__(message, code="AUTH_UNAUTHORIZED")


class ConfigurationError(ApplicationError):
    """Raised when required settings are missing."""

    def __init__(self, message: str = "Configuration error", missing_vars: list[str] | None = None) -> None:
        self.missing_vars = missing_vars or []
        super().__init__(message, code="SYS_CONFIGURATION_ERROR")


class DatabaseError(ApplicationError):
    """Raised when a database operation fails."""

    def __init__(self, message: str = "Database error", code: str = "SYS_DATABASE_ERROR") -> None:
        super().__init__(message, code=code)


class CategoryLookupError(DatabaseError):
    """Raised when a category label cannot be resolved to an identifier."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            f"Failed to get category ID: {detail}",
            code="DB_CATEGORY_LOOKUP_FAILED",
        )


class EndorsementInsertError(DatabaseError):
    """Raised when the store rejects an endorsement insert."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            f"Failed to create endorsement: {detail}",
            code="DB_ENDORSEMENT_INSERT_FAILED",
        )


class QueryError(DatabaseError):
    """Raised when reading endorsements fails."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            f"Failed to get endorsements: {detail}",
            code="DB_QUERY_FAILED",
        )


class ExternalServiceError(ApplicationError):
    """Raised when an external service call fails."""

    def __init__(self, message: str = "External service error", code: str = "SYS_EXTERNAL_SERVICE_ERROR") -> None:
        super().__init__(message, code=code)


class NotificationSendError(ExternalServiceError):
    """Raised when the Telegram Bot API reports a failed send."""

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(
            f"Telegram API error: {description}",
            code="EXT_NOTIFICATION_FAILED",
        )
