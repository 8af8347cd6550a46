"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Every business-rule violation raised by the services is one of these;
the API layer maps them to HTTP responses in exception_handlers.py.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """
    Raised when a resource cannot be found.

    Also raised when the resource exists but belongs to another owner,
    so callers cannot test for other users' records.
    """

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class InvalidCategoryError(ApplicationError):
    """Raised when a category reference is absent, foreign, or self-referencing."""

    def __init__(self, message: str = "Invalid category") -> None:
        super().__init__(message, code="VAL_INVALID_CATEGORY")


class AuthenticationError(ApplicationError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, code="AUTH_UNAUTHORIZED")


class ConflictError(ApplicationError):
    """Raised when there is a state conflict."""

    def __init__(self, message: str = "Resource conflict", code: str = "RES_CONFLICT") -> None:
        super().__init__(message, code=code)


class DuplicateNameError(ConflictError):
    """Raised when a category name is already used by the same owner."""

    def __init__(self, message: str = "Category name already exists") -> None:
        super().__init__(message, code="RES_DUPLICATE_NAME")


class CategoryInUseError(ConflictError):
    """Raised when deleting a category that still has notes and no resolution."""

    def __init__(self, message: str = "Category has notes assigned") -> None:
        super().__init__(message, code="RES_CATEGORY_IN_USE")


class RevisionConflictError(ConflictError):
    """
    Raised when a revision-checked update matched no row.

    Covers both a stale expected revision and a note that is missing or not
    owned by the caller; in either case the caller must refetch.
    """

    def __init__(self, message: str = "Note was modified or no longer exists") -> None:
        super().__init__(message, code="RES_REVISION_CONFLICT")


class DatabaseError(ApplicationError):
    """Raised when a database operation fails."""

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR")
