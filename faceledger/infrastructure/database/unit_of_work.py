"""Unit of work pattern implementation."""
from contextlib import asynccontextmanager
from types import TracebackType
from typing import AsyncGenerator, Optional, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from faceledger.core.exceptions import StorageError
from faceledger.core.logging import get_logger
from faceledger.infrastructure.database.repositories import (
    IdentityRepository,
    RecognitionLogRepository,
)
from faceledger.infrastructure.database.session import get_db_session

logger = get_logger(__name__)


class UnitOfWork:
    """Unit of work for managing database transactions and repositories."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize unit of work.

        Args:
            session: Database session
        """
        self._session = session
        self.identities = IdentityRepository(session)
        self.recognition_logs = RecognitionLogRepository(session)

    async def __aenter__(self) -> "UnitOfWork":
        """Enter async context manager.

        Returns:
            UnitOfWork: Self
        """
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        """Commit on success, roll back if the block raised."""
        if exc_type is not None:
            await self.rollback()
        else:
            await self.commit()

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        await self._session.rollback()


@asynccontextmanager
async def unit_of_work(
    session_factory: async_sessionmaker[AsyncSession],
    operation: str,
) -> AsyncGenerator[UnitOfWork, None]:
    """Run a block in its own session and transaction.

    The transaction commits when the block exits cleanly, so every write made
    inside becomes visible all at once or not at all. Database failures,
    including the commit itself, surface as ``StorageError``.

    Example:
        ```python
        async with unit_of_work(session_factory, "enroll") as uow:
            await uow.identities.create(...)
        ```
    """
    try:
        async with get_db_session(session_factory) as session:
            async with UnitOfWork(session) as uow:
                yield uow
    except SQLAlchemyError as e:
        logger.error(
            "Storage operation failed",
            operation=operation,
            error=str(e)
        )
        raise StorageError(
            f"Storage operation failed: {operation}",
            details={"operation": operation, "error": str(e)}
        ) from e
