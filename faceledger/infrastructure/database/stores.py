"""SQL implementations of the descriptor store and the recognition ledger."""
from numbers import Integral
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from faceledger.core.exceptions import NotFoundError, ValidationError
from faceledger.core.logging import get_logger
from faceledger.core.utils.descriptor import (
    DescriptorLike,
    as_descriptor,
    decode_descriptor,
    encode_descriptor,
)
from faceledger.domain.entities.identity import IdentityRecord, MatchAttempt
from faceledger.domain.interfaces.storage import DescriptorStore, RecognitionLedger
from faceledger.infrastructure.database.models import Identity, RecognitionLog
from faceledger.infrastructure.database.unit_of_work import unit_of_work

logger = get_logger(__name__)


class SqlDescriptorStore(DescriptorStore):
    """Descriptor store backed by the ``faces`` table.

    The descriptor dimension is either configured up front or fixed by the
    first enrolled descriptor, and then kept for the lifetime of the store.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        dimension: Optional[int] = None,
    ) -> None:
        """Initialize the store.

        Args:
            session_factory: Factory for database sessions
            dimension: Required descriptor dimension, or None to take it from the first enrollment
        """
        if dimension is not None and dimension < 1:
            raise ValidationError(f"Descriptor dimension must be positive, got {dimension}")
        self._session_factory = session_factory
        self._dimension = dimension

    @property
    def dimension(self) -> Optional[int]:
        """Descriptor dimension, once established."""
        return self._dimension

    async def enroll(
        self,
        name: str,
        descriptor: DescriptorLike,
        source_reference: Optional[str] = None,
    ) -> int:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Name is required")
        name = name.strip()
        vector = as_descriptor(descriptor)

        async with unit_of_work(self._session_factory, "enroll") as uow:
            if self._dimension is None:
                self._dimension = await uow.identities.first_dimension()
            if self._dimension is not None and vector.shape[0] != self._dimension:
                raise ValidationError(
                    "Descriptor dimension does not match enrolled descriptors",
                    details={"expected": self._dimension, "actual": int(vector.shape[0])}
                )
            identity = await uow.identities.create(
                name=name,
                descriptor=encode_descriptor(vector),
                dimension=int(vector.shape[0]),
                source_reference=source_reference
            )

        self._dimension = int(vector.shape[0])
        logger.info(
            "Enrolled identity",
            identity_id=identity.id,
            name=name,
            dimension=self._dimension
        )
        return identity.id

    async def list_all(self) -> List[IdentityRecord]:
        async with unit_of_work(self._session_factory, "list_identities") as uow:
            identities = await uow.identities.list_all()
        return [self._to_record(identity) for identity in identities]

    async def delete(self, identity_id: int) -> bool:
        async with unit_of_work(self._session_factory, "delete_identity") as uow:
            identity = await uow.identities.get(identity_id)
            if identity is None:
                raise NotFoundError(
                    f"Identity not found: {identity_id}",
                    details={"identity_id": identity_id}
                )
            await uow.identities.delete(identity)

        logger.info("Deleted identity", identity_id=identity_id)
        return True

    @staticmethod
    def _to_record(identity: Identity) -> IdentityRecord:
        return IdentityRecord(
            id=identity.id,
            name=identity.name,
            descriptor=decode_descriptor(identity.descriptor),
            enrolled_at=identity.enrolled_at,
            source_reference=identity.source_reference
        )


class SqlRecognitionLedger(RecognitionLedger):
    """Recognition ledger backed by the ``recognition_logs`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def record(self, matched_name: str, confidence: float, matched: bool) -> int:
        async with unit_of_work(self._session_factory, "record_attempt") as uow:
            entry = await uow.recognition_logs.create(
                matched_name=matched_name,
                confidence=float(confidence),
                matched=bool(matched)
            )

        logger.debug(
            "Recorded recognition attempt",
            attempt_id=entry.id,
            matched_name=matched_name,
            matched=matched
        )
        return entry.id

    async def query(self, limit: int) -> List[MatchAttempt]:
        if isinstance(limit, bool) or not isinstance(limit, Integral) or limit < 1:
            raise ValidationError(f"Limit must be a positive integer, got {limit!r}")

        async with unit_of_work(self._session_factory, "query_attempts") as uow:
            entries = await uow.recognition_logs.latest(int(limit))
        return [self._to_attempt(entry) for entry in entries]

    @staticmethod
    def _to_attempt(entry: RecognitionLog) -> MatchAttempt:
        return MatchAttempt(
            id=entry.id,
            matched_name=entry.matched_name,
            confidence=entry.confidence,
            matched=entry.matched,
            occurred_at=entry.occurred_at
        )
