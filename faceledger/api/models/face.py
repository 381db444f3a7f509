"""API specific face models."""
import math
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from faceledger.domain.entities.identity import IdentityRecord, MatchAttempt
from faceledger.services.models import EnrollmentResult, RecognitionResult


class RegisterFaceRequest(BaseModel):
    """Request model for the /register endpoint."""
    name: str = Field(
        ...,
        description="Name to enroll the face under",
        min_length=1, max_length=255
    )
    image_path: str = Field(
        ...,
        description="Path of an image containing exactly one face",
        min_length=1, max_length=1024
    )


class RegisterFaceResponse(BaseModel):
    """Response model for the /register endpoint."""
    success: bool = Field(True, description="Whether the face was registered")
    message: str = Field(..., description="Human readable outcome")
    face_id: int = Field(..., description="Identifier of the enrolled identity")

    @classmethod
    def from_service_response(cls, result: EnrollmentResult) -> "RegisterFaceResponse":
        return cls(
            message=f"Face registered successfully for {result.name}",
            face_id=result.identity_id
        )


class RecognizeFaceRequest(BaseModel):
    """Request model for the /recognize endpoint."""
    image_path: str = Field(
        ...,
        description="Path of the image to recognize faces in",
        min_length=1, max_length=1024
    )
    threshold: Optional[float] = Field(
        None,
        description="Distance below which a face is a match; server default when omitted",
        ge=0.0
    )


class FaceMatch(BaseModel):
    """API model for one recognized face."""
    name: str = Field(..., description="Nearest identity name, or 'Unknown'")
    confidence: float = Field(..., description="Heuristic confidence score (0-100)")
    is_matched: bool = Field(..., description="Whether the face matched an enrolled identity")
    distance: Optional[float] = Field(
        None,
        description="Distance to the nearest identity; null when nothing is enrolled"
    )
    face_id: Optional[int] = Field(None, description="Identifier of the nearest identity")


class RecognizeFaceResponse(BaseModel):
    """Response model for the /recognize endpoint."""
    success: bool = Field(True, description="Whether recognition ran")
    results: List[FaceMatch] = Field(..., description="One entry per detected face")

    @classmethod
    def from_service_response(cls, result: RecognitionResult) -> "RecognizeFaceResponse":
        results = []
        for outcome in result.outcomes:
            match = outcome.match
            results.append(FaceMatch(
                name=match.name,
                confidence=round(match.confidence, 2),
                is_matched=match.matched,
                distance=None if math.isinf(match.distance) else match.distance,
                face_id=match.best_identity.id if match.best_identity else None
            ))
        return cls(results=results)


class FaceSummary(BaseModel):
    """API model for an enrolled identity. Descriptors are not exposed."""
    id: int = Field(..., description="Identity identifier")
    name: str = Field(..., description="Enrolled name")
    enrolled_at: Optional[datetime] = Field(None, description="Enrollment timestamp")

    @classmethod
    def from_record(cls, record: IdentityRecord) -> "FaceSummary":
        return cls(id=record.id, name=record.name, enrolled_at=record.enrolled_at)


class FaceListResponse(BaseModel):
    """Response model for the /faces endpoint."""
    success: bool = True
    count: int = Field(..., description="Number of enrolled identities")
    faces: List[FaceSummary] = Field(..., description="Enrolled identities")


class HistoryEntry(BaseModel):
    """API model for one ledger entry."""
    id: int
    matched_name: str
    confidence: float
    status: str = Field(..., description="'matched' or 'unmatched'")
    timestamp: Optional[datetime] = None

    @classmethod
    def from_attempt(cls, attempt: MatchAttempt) -> "HistoryEntry":
        return cls(
            id=attempt.id,
            matched_name=attempt.matched_name,
            confidence=attempt.confidence,
            status="matched" if attempt.matched else "unmatched",
            timestamp=attempt.occurred_at
        )


class HistoryResponse(BaseModel):
    """Response model for the /history endpoint."""
    success: bool = True
    count: int = Field(..., description="Number of entries returned")
    history: List[HistoryEntry] = Field(..., description="Recognition attempts, newest first")


class DeleteFaceResponse(BaseModel):
    """Response model for deleting an identity."""
    success: bool = True
    message: str


class HealthResponse(BaseModel):
    """Response model for the /health endpoint."""
    status: str = "OK"
    timestamp: datetime
