"""Tests for service wiring and resource cleanup."""
import pytest

from faceledger.core import container as container_module
from faceledger.core.container import LazyExtractor, ServiceContainer, create_extractor
from faceledger.core.exceptions import ModelLoadError, StorageError


def test_unknown_extractor_is_a_model_load_error():
    with pytest.raises(ModelLoadError) as exc_info:
        create_extractor("dlib")

    assert exc_info.value.details == {"extractor": "dlib"}


class TestLazyExtractor:

    async def test_builds_extractor_on_first_extract(self, extractor):
        extractor.add_image("a.jpg", [0.1, 0.2])
        builds = []

        def factory():
            builds.append(1)
            return extractor

        lazy = LazyExtractor(factory)
        assert not lazy.loaded

        await lazy.extract("a.jpg")
        await lazy.extract("a.jpg")

        assert builds == [1]
        assert extractor.calls == ["a.jpg", "a.jpg"]

    async def test_exit_closes_the_built_extractor(self, extractor):
        lazy = LazyExtractor(lambda: extractor)
        await lazy.extract("a.jpg")

        await lazy.__aexit__(None, None, None)

        assert extractor.closed
        assert not lazy.loaded

    async def test_exit_without_use_never_builds(self):
        def factory():
            raise AssertionError("extractor should not be built")

        async with LazyExtractor(factory):
            pass


class TestServiceContainer:

    async def test_cleanup_closes_extractor_and_engine(self, database_url, extractor):
        container = ServiceContainer()
        await container.initialize(database_url=database_url, extractor=extractor)
        assert container.initialized

        await container.cleanup()

        assert extractor.closed
        assert container.engine is None
        assert not container.initialized

    async def test_default_extractor_is_lazy(self, database_url, monkeypatch):
        def missing_model(name):
            raise ModelLoadError("InsightFace is not installed")

        monkeypatch.setattr(container_module, "create_extractor", missing_model)
        container = ServiceContainer()
        await container.initialize(database_url=database_url)

        try:
            assert await container.orchestrator.list_identities() == []
            with pytest.raises(ModelLoadError):
                await container.orchestrator.recognize("a.jpg")
        finally:
            await container.cleanup()

    async def test_failed_initialization_disposes_engine(self, database_url, monkeypatch):
        async def unavailable(engine):
            raise StorageError("Database unavailable")

        monkeypatch.setattr(container_module, "init_models", unavailable)
        container = ServiceContainer()

        with pytest.raises(StorageError):
            await container.initialize(database_url=database_url)

        assert container.engine is None
        assert not container.initialized
