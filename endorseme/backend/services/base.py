"""
Base Service.

Base class for services that work against the relational store.
Services orchestrate repositories, own the transaction boundary and
translate SQLAlchemy failures into application exceptions.

Usage:
    from endorseme.backend.services.base import BaseService

    class EndorsementService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.endorsements = EndorsementRepository(session)
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from endorseme.backend.core.exceptions import DatabaseError
from endorseme.backend.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _database_error(detail: str) -> DatabaseError:
    return DatabaseError(f"Database operation failed: {detail}")


class BaseService:
    """
    Base class for store-backed services.

    Subclasses should call super().__init__(session) and build their
    repositories on self.session.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
        error_factory: Callable[[str], DatabaseError] = _database_error,
    ) -> T:
        """
        Execute a database operation with error handling.

        The session is rolled back on failure so the caller's transaction
        is usable again.

        Args:
            operation: Description of the operation for logging
            coro: Awaitable to execute
            error_factory: Builds the raised exception from the driver message

        Raises:
            DatabaseError: Or the subclass produced by error_factory
        """
        try:
            return await coro
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            await self._session.rollback()
            raise error_factory(str(e)) from e

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Log a service operation with context."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(self, message: str, **context: Any) -> None:
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
