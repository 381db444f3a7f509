"""Shared fixtures: an isolated SQLite database per test and a scripted extractor."""
from pathlib import Path
from typing import Dict, List, Sequence

import numpy as np
import pytest

from faceledger.domain.interfaces.recognition import EmbeddingExtractor
from faceledger.infrastructure.database import (
    SqlDescriptorStore,
    SqlRecognitionLedger,
    create_engine,
    create_session_factory,
    init_models,
)
from faceledger.services.face_recognition import FaceRecognitionOrchestrator
from faceledger.services.matching import EuclideanMatcher


class FakeExtractor(EmbeddingExtractor):
    """Extractor that returns scripted descriptors per image reference."""

    def __init__(self) -> None:
        self.faces: Dict[str, List[Sequence[float]]] = {}
        self.errors: Dict[str, Exception] = {}
        self.calls: List[object] = []
        self.closed = False

    def add_image(self, image: str, *descriptors: Sequence[float]) -> None:
        self.faces[image] = list(descriptors)

    def fail_on(self, image: str, error: Exception) -> None:
        self.errors[image] = error

    async def extract(self, image):
        self.calls.append(image)
        key = str(image)
        if key in self.errors:
            raise self.errors[key]
        return [np.asarray(descriptor, dtype=np.float32) for descriptor in self.faces.get(key, [])]

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.closed = True


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'faces.db'}"


@pytest.fixture
async def engine(database_url):
    engine = create_engine(database_url)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def store(session_factory):
    return SqlDescriptorStore(session_factory)


@pytest.fixture
def ledger(session_factory):
    return SqlRecognitionLedger(session_factory)


@pytest.fixture
def extractor():
    return FakeExtractor()


@pytest.fixture
def orchestrator(extractor, store, ledger):
    return FaceRecognitionOrchestrator(
        extractor=extractor,
        store=store,
        ledger=ledger,
        matcher=EuclideanMatcher(),
        default_threshold=0.5
    )
