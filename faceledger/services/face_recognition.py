"""Enrollment and recognition orchestration."""
from pathlib import Path
from typing import List, Optional

from faceledger.core.config import settings
from faceledger.core.exceptions import (
    AmbiguousInputError,
    ExtractionError,
    FaceRecognitionError,
    NoFaceDetectedError,
    ValidationError,
)
from faceledger.core.logging import get_logger
from faceledger.domain.entities.identity import IdentityRecord, MatchAttempt
from faceledger.domain.interfaces.matching import Matcher
from faceledger.domain.interfaces.recognition import EmbeddingExtractor, ImageSource
from faceledger.domain.interfaces.storage import DescriptorStore, RecognitionLedger
from faceledger.services.matching.euclidean import validate_threshold
from faceledger.services.models import (
    EnrollmentResult,
    FaceRecognitionOutcome,
    RecognitionResult,
)

logger = get_logger(__name__)


class FaceRecognitionOrchestrator:
    """Coordinates the extractor, matcher, descriptor store and ledger.

    Enrollment requires exactly one face per image. Recognition matches every
    detected face against the enrolled set as it stands when the request
    starts, and writes one ledger entry per face whether or not it matched.

    Example:
        ```python
        orchestrator = FaceRecognitionOrchestrator(
            extractor=InsightFaceExtractor(),
            store=SqlDescriptorStore(session_factory),
            ledger=SqlRecognitionLedger(session_factory),
            matcher=EuclideanMatcher(),
        )

        await orchestrator.enroll("Alice", "photos/alice.jpg")
        result = await orchestrator.recognize("photos/door.jpg", threshold=0.5)
        ```
    """

    def __init__(
        self,
        extractor: EmbeddingExtractor,
        store: DescriptorStore,
        ledger: RecognitionLedger,
        matcher: Matcher,
        default_threshold: Optional[float] = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            extractor: Turns images into one descriptor per detected face
            store: Durable store of enrolled descriptors
            ledger: Append-only log of recognition attempts
            matcher: Nearest-identity search
            default_threshold: Threshold used when a request does not give one
        """
        self._extractor = extractor
        self._store = store
        self._ledger = ledger
        self._matcher = matcher
        self.default_threshold = validate_threshold(
            settings.DEFAULT_MATCH_THRESHOLD if default_threshold is None else default_threshold
        )

    async def _extract(self, image: ImageSource) -> List:
        try:
            descriptors = await self._extractor.extract(image)
        except FaceRecognitionError:
            raise
        except Exception as e:
            logger.error("Embedding extraction failed", error=str(e), exc_info=True)
            raise ExtractionError(f"Embedding extraction failed: {e}") from e
        return list(descriptors)

    async def enroll(self, name: str, image: ImageSource) -> EnrollmentResult:
        """Enroll the single face found in an image under ``name``.

        Raises:
            ValidationError: If the name is missing or the descriptor is rejected
            NoFaceDetectedError: If the image has no face
            AmbiguousInputError: If the image has more than one face
            ExtractionError: If the extractor fails
            StorageError: If the store write fails
        """
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Name is required")

        descriptors = await self._extract(image)
        if not descriptors:
            raise NoFaceDetectedError("No face detected in the provided image")
        if len(descriptors) > 1:
            raise AmbiguousInputError(
                "Multiple faces detected. Please provide an image with only one face",
                details={"face_count": len(descriptors)}
            )

        source_reference = _source_reference(image)
        identity_id = await self._store.enroll(name, descriptors[0], source_reference)
        return EnrollmentResult(
            identity_id=identity_id,
            name=name.strip(),
            source_reference=source_reference
        )

    async def recognize(
        self,
        image: ImageSource,
        threshold: Optional[float] = None,
    ) -> RecognitionResult:
        """Match every face in an image and record each attempt in the ledger.

        A failing ledger write stops the batch; entries already written for
        earlier faces stay in the ledger.

        Raises:
            ValidationError: If the threshold is invalid
            NoFaceDetectedError: If the image has no face
            ExtractionError: If the extractor fails
            StorageError: If reading the store or writing the ledger fails
        """
        threshold = validate_threshold(self.default_threshold if threshold is None else threshold)

        descriptors = await self._extract(image)
        if not descriptors:
            raise NoFaceDetectedError("No face detected in image")

        enrolled = await self._store.list_all()
        outcomes = []
        for descriptor in descriptors:
            match = self._matcher.match(descriptor, enrolled, threshold)
            attempt_id = await self._ledger.record(match.name, match.confidence, match.matched)
            outcomes.append(FaceRecognitionOutcome(match=match, attempt_id=attempt_id))

        logger.info(
            "Recognized faces",
            faces=len(outcomes),
            matched=sum(1 for outcome in outcomes if outcome.match.matched),
            enrolled=len(enrolled),
            threshold=threshold
        )
        return RecognitionResult(threshold=threshold, outcomes=outcomes)

    async def list_identities(self) -> List[IdentityRecord]:
        return await self._store.list_all()

    async def history(self, limit: Optional[int] = None) -> List[MatchAttempt]:
        return await self._ledger.query(settings.DEFAULT_HISTORY_LIMIT if limit is None else limit)

    async def delete_identity(self, identity_id: int) -> bool:
        return await self._store.delete(identity_id)


def _source_reference(image: ImageSource) -> Optional[str]:
    if isinstance(image, (str, Path)):
        return str(image)
    return None
