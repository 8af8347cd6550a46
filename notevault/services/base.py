"""
Base Service.

Base class for all services. Services are the operation boundary: they
take the authenticated owner id explicitly, validate input before any
repository call, orchestrate repositories, and raise typed application
errors. The request-scoped session commits or rolls back the whole
operation.

Usage:
    from notevault.services.base import BaseService

    class CategoryService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = CategoryRepository(session)
"""

from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notevault.core.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    ValidationError,
)
from notevault.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session access
    - Owner id enforcement
    - Error wrapping for database operations
    - Common validation helpers
    - Logging context
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    def _require_owner(self, owner_id: str | None) -> str:
        """
        Ensure an authenticated owner id is present before touching the store.

        Raises:
            AuthenticationError: If owner_id is missing or blank
        """
        if not isinstance(owner_id, str) or not owner_id.strip():
            raise AuthenticationError()
        return owner_id

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Any,
        on_conflict: type[ConflictError] = ConflictError,
    ) -> T:
        """
        Execute a database operation with error handling.

        Converts SQLAlchemy exceptions to application exceptions.
        Application errors raised inside coro pass through unchanged.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute
            on_conflict: Error raised for unique constraint violations

        Raises:
            ConflictError: For unique constraint violations (or on_conflict)
            DatabaseError: For other database errors
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e)},
            )
            error_str = str(e).lower()
            if "unique" in error_str or "duplicate" in error_str:
                raise on_conflict()
            raise DatabaseError(f"Database constraint violation: {operation}")
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}")

    def _validate_string_length(
        self,
        value: str,
        field_name: str,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> None:
        """
        Validate string length constraints.

        Raises:
            ValidationError: If string length is out of bounds
        """
        if min_length is not None and len(value) < min_length:
            raise ValidationError(
                f"{field_name} too short",
                details={field_name: f"Minimum length is {min_length}"},
            )
        if max_length is not None and len(value) > max_length:
            raise ValidationError(
                f"{field_name} too long",
                details={field_name: f"Maximum length is {max_length}"},
            )

    def _normalize_text(
        self,
        value: Any,
        field_name: str,
        max_length: int,
    ) -> str:
        """
        Trim a required short text field and check its length.

        Raises:
            ValidationError: If not a string or not 1..max_length characters
        """
        if not isinstance(value, str):
            raise ValidationError(
                f"{field_name} must be text",
                details={field_name: "Expected a string"},
            )
        text = value.strip()
        self._validate_string_length(text, field_name, min_length=1, max_length=max_length)
        return text

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Log a service operation with context."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(self, message: str, **context: Any) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
