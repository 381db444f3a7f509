"""Face recognition API endpoints."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query

from faceledger.api.models.face import (
    DeleteFaceResponse,
    FaceListResponse,
    FaceSummary,
    HealthResponse,
    HistoryEntry,
    HistoryResponse,
    RecognizeFaceRequest,
    RecognizeFaceResponse,
    RegisterFaceRequest,
    RegisterFaceResponse,
)
from faceledger.core.config import settings
from faceledger.core.exceptions import (
    AmbiguousInputError,
    ExtractionError,
    FaceRecognitionError,
    NoFaceDetectedError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from faceledger.core.logging import get_logger
from faceledger.infrastructure.dependencies import get_orchestrator
from faceledger.services.face_recognition import FaceRecognitionOrchestrator

logger = get_logger(__name__)
router = APIRouter(
    responses={
        400: {"description": "Invalid request"},
        503: {"description": "Storage unavailable"}
    }
)

# First matching entry wins
ERROR_STATUS_CODES = (
    (ValidationError, 400),
    (NoFaceDetectedError, 400),
    (AmbiguousInputError, 400),
    (NotFoundError, 404),
    (ExtractionError, 422),
    (StorageError, 503),
)


def to_http_exception(error: FaceRecognitionError) -> HTTPException:
    """Translate a service error into an HTTP error response."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            break
    else:
        status_code = 500

    if status_code >= 500 or error.retryable:
        logger.error("Request failed", error=str(error), error_type=type(error).__name__)
    else:
        logger.warning("Request rejected", error=str(error), error_type=type(error).__name__)
    return HTTPException(status_code=status_code, detail=str(error))


@router.post(
    "/register",
    response_model=RegisterFaceResponse,
    summary="Register a face",
    description="Enrolls the single face found in an image under the given name.",
)
async def register_face(
    request: RegisterFaceRequest,
    service: FaceRecognitionOrchestrator = Depends(get_orchestrator)
) -> RegisterFaceResponse:
    """Enroll the face in ``request.image_path`` under ``request.name``.

    Raises:
        HTTPException: 400 for no face or several faces, 422 for unreadable images
    """
    try:
        result = await service.enroll(request.name, request.image_path)
    except FaceRecognitionError as e:
        raise to_http_exception(e)
    return RegisterFaceResponse.from_service_response(result)


@router.post(
    "/recognize",
    response_model=RecognizeFaceResponse,
    summary="Recognize faces",
    description="Matches every face in an image against the enrolled identities.",
)
async def recognize_faces(
    request: RecognizeFaceRequest,
    service: FaceRecognitionOrchestrator = Depends(get_orchestrator)
) -> RecognizeFaceResponse:
    """Recognize the faces in ``request.image_path``; every face is logged."""
    try:
        result = await service.recognize(request.image_path, threshold=request.threshold)
    except FaceRecognitionError as e:
        raise to_http_exception(e)
    return RecognizeFaceResponse.from_service_response(result)


@router.get("/faces", response_model=FaceListResponse, summary="List enrolled faces")
async def list_faces(
    service: FaceRecognitionOrchestrator = Depends(get_orchestrator)
) -> FaceListResponse:
    try:
        records = await service.list_identities()
    except FaceRecognitionError as e:
        raise to_http_exception(e)
    return FaceListResponse(
        count=len(records),
        faces=[FaceSummary.from_record(record) for record in records]
    )


@router.get("/history", response_model=HistoryResponse, summary="Recognition history")
async def recognition_history(
    limit: int = Query(
        settings.DEFAULT_HISTORY_LIMIT,
        ge=1,
        le=settings.MAX_HISTORY_LIMIT,
        description="Maximum number of entries, newest first"
    ),
    service: FaceRecognitionOrchestrator = Depends(get_orchestrator)
) -> HistoryResponse:
    try:
        attempts = await service.history(limit)
    except FaceRecognitionError as e:
        raise to_http_exception(e)
    return HistoryResponse(
        count=len(attempts),
        history=[HistoryEntry.from_attempt(attempt) for attempt in attempts]
    )


@router.delete("/faces/{face_id}", response_model=DeleteFaceResponse, summary="Delete a face")
async def delete_face(
    face_id: int,
    service: FaceRecognitionOrchestrator = Depends(get_orchestrator)
) -> DeleteFaceResponse:
    """Delete an enrolled identity. Its ledger entries are kept."""
    try:
        await service.delete_identity(face_id)
    except FaceRecognitionError as e:
        raise to_http_exception(e)
    return DeleteFaceResponse(message=f"Face with ID {face_id} deleted successfully")


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check() -> HealthResponse:
    return HealthResponse(timestamp=datetime.now(timezone.utc))
