"""Service container for dependency injection."""
from typing import Any, Callable, List, Optional

import numpy as np
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from faceledger.core.config import settings
from faceledger.core.exceptions import ModelLoadError
from faceledger.core.logging import get_logger
from faceledger.domain.interfaces.matching import Matcher
from faceledger.domain.interfaces.recognition import EmbeddingExtractor, ImageSource
from faceledger.domain.interfaces.storage import DescriptorStore, RecognitionLedger
from faceledger.infrastructure.database import (
    SqlDescriptorStore,
    SqlRecognitionLedger,
    create_engine,
    create_session_factory,
    init_models,
)
from faceledger.services.face_recognition import FaceRecognitionOrchestrator
from faceledger.services.matching import EuclideanMatcher

logger = get_logger(__name__)


def create_extractor(name: str) -> EmbeddingExtractor:
    """Build the embedding extractor named in settings.

    Model libraries are imported here so that nothing else in the service
    needs them installed.

    Raises:
        ModelLoadError: If the extractor is unknown, its libraries are missing
            or its model fails to load
    """
    if name == "insightface":
        try:
            from faceledger.services.recognition.insight_face import InsightFaceExtractor
        except ImportError as e:
            raise ModelLoadError(
                f"InsightFace is not installed; install the 'insightface' extra: {e}",
                details={"extractor": name}
            ) from e
        return InsightFaceExtractor()
    raise ModelLoadError(f"Unknown embedding extractor: {name}", details={"extractor": name})


class LazyExtractor(EmbeddingExtractor):
    """Builds the real extractor on the first ``extract`` call.

    Listing, history and deletion never touch the model, so they work even
    when it is slow to load or not installed.
    """

    def __init__(self, factory: Callable[[], EmbeddingExtractor]) -> None:
        self._factory = factory
        self._extractor: Optional[EmbeddingExtractor] = None

    @property
    def loaded(self) -> bool:
        return self._extractor is not None

    async def extract(self, image: ImageSource) -> List[np.ndarray]:
        if self._extractor is None:
            self._extractor = self._factory()
            logger.info("Loaded embedding extractor", extractor=type(self._extractor).__name__)
        return await self._extractor.extract(image)

    async def __aexit__(self, exc_type: Optional[type], exc_val: Optional[BaseException],
                        exc_tb: Optional[Any]) -> None:
        if self._extractor is not None:
            await self._extractor.__aexit__(exc_type, exc_val, exc_tb)
            self._extractor = None


class ServiceContainer:
    """Container for application services.

    The container owns the database engine and hands its session factory to
    the descriptor store and ledger, so each container (and each test) works
    against its own database.

    Example:
        ```python
        container = ServiceContainer()
        await container.initialize()

        orchestrator = container.orchestrator
        ```
    """

    def __init__(self) -> None:
        """Initialize empty container."""
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

        # Core services - Use interface type hints
        self.extractor: Optional[EmbeddingExtractor] = None
        self.matcher: Optional[Matcher] = None
        self.store: Optional[DescriptorStore] = None
        self.ledger: Optional[RecognitionLedger] = None

        # Domain services (depend on interfaces)
        self.orchestrator: Optional[FaceRecognitionOrchestrator] = None

    @property
    def initialized(self) -> bool:
        return self.orchestrator is not None

    async def initialize(
        self,
        database_url: Optional[str] = None,
        extractor: Optional[EmbeddingExtractor] = None,
    ) -> None:
        """Initialize all services in the correct order.

        On failure everything created so far is released again.

        Args:
            database_url: Overrides ``settings.DATABASE_URL``
            extractor: Overrides the extractor named by ``settings.EXTRACTOR``,
                which is otherwise loaded on first use
        """
        try:
            self.engine = create_engine(
                database_url or settings.DATABASE_URL,
                echo=settings.DATABASE_ECHO
            )
            await init_models(self.engine)
            self.session_factory = create_session_factory(self.engine)

            self.store = SqlDescriptorStore(
                self.session_factory,
                dimension=settings.DESCRIPTOR_DIMENSION
            )
            self.ledger = SqlRecognitionLedger(self.session_factory)
            self.matcher = EuclideanMatcher()
            self.extractor = extractor or LazyExtractor(lambda: create_extractor(settings.EXTRACTOR))
            self.orchestrator = FaceRecognitionOrchestrator(
                extractor=self.extractor,
                store=self.store,
                ledger=self.ledger,
                matcher=self.matcher,
                default_threshold=settings.DEFAULT_MATCH_THRESHOLD
            )
        except Exception:
            logger.error("Service container initialization failed", exc_info=True)
            await self.cleanup()
            raise
        logger.info("Service container initialized", extractor=type(self.extractor).__name__)

    async def cleanup(self) -> None:
        """Cleanup all services in reverse order of initialization."""
        self.orchestrator = None

        if self.extractor is not None:
            await self.extractor.__aexit__(None, None, None)
            self.extractor = None

        self.matcher = None
        self.ledger = None
        self.store = None
        self.session_factory = None

        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            logger.info("Database connection closed")


# Global container instance
container = ServiceContainer()
