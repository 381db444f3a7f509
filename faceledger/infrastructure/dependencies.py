"""FastAPI dependency providers."""
from typing import AsyncGenerator

from fastapi import Depends

from faceledger.core.container import ServiceContainer, container
from faceledger.core.exceptions import ServiceNotInitializedError
from faceledger.services.face_recognition import FaceRecognitionOrchestrator


async def get_container() -> ServiceContainer:
    """Dependency provider for the global ServiceContainer instance."""
    if not container.initialized:
        try:
            await container.initialize()
        except Exception as e:
            raise ServiceNotInitializedError(f"Service container could not be initialized: {e}")
    return container


async def get_orchestrator(
    container: ServiceContainer = Depends(get_container),
) -> AsyncGenerator[FaceRecognitionOrchestrator, None]:
    """Provide the enrollment/recognition orchestrator.

    Yields:
        FaceRecognitionOrchestrator: Orchestrator from the initialized container

    Raises:
        ServiceNotInitializedError: If the orchestrator is not initialized
    """
    if container.orchestrator is None:
        raise ServiceNotInitializedError("Orchestrator not found in initialized container")
    yield container.orchestrator
