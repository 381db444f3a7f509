"""API router initialization."""
from fastapi import APIRouter

from .face_recognition import router as face_recognition_router

router = APIRouter()

# Include face recognition endpoints
router.include_router(
    face_recognition_router,
    tags=["face-recognition"]
)
