"""Database repositories for the face ledger service."""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from faceledger.infrastructure.database.models import Identity, RecognitionLog


class IdentityRepository:
    """Repository for enrolled identity operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            session: Database session
        """
        self._session = session

    async def create(
        self,
        name: str,
        descriptor: str,
        dimension: int,
        source_reference: Optional[str] = None
    ) -> Identity:
        """Create a new identity record.

        Args:
            name: Name the identity is enrolled under
            descriptor: Encoded descriptor vector
            dimension: Number of components in the descriptor
            source_reference: Path or key of the enrollment image

        Returns:
            Identity: Created identity with its id assigned
        """
        identity = Identity(
            name=name,
            descriptor=descriptor,
            dimension=dimension,
            source_reference=source_reference
        )
        self._session.add(identity)
        await self._session.flush()
        return identity

    async def get(self, identity_id: int) -> Optional[Identity]:
        """Get an identity by id, or None if absent."""
        return await self._session.get(Identity, identity_id)

    async def list_all(self) -> List[Identity]:
        """Get every identity in enrollment order."""
        stmt = select(Identity).order_by(Identity.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def first_dimension(self) -> Optional[int]:
        """Get the descriptor dimension of the oldest identity, if any."""
        stmt = select(Identity.dimension).order_by(Identity.id).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete(self, identity: Identity) -> None:
        """Delete an identity."""
        await self._session.delete(identity)
        await self._session.flush()


class RecognitionLogRepository:
    """Repository for recognition ledger rows. Insert and read only."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            session: Database session
        """
        self._session = session

    async def create(self, matched_name: str, confidence: float, matched: bool) -> RecognitionLog:
        """Append a recognition attempt."""
        entry = RecognitionLog(
            matched_name=matched_name,
            confidence=confidence,
            matched=matched
        )
        self._session.add(entry)
        await self._session.flush()
        return entry

    async def latest(self, limit: int) -> List[RecognitionLog]:
        """Get up to ``limit`` attempts, newest first."""
        stmt = (
            select(RecognitionLog)
            .order_by(RecognitionLog.id.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
