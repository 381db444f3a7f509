"""Service-specific models.

This module contains models used by services that are independent of the API layer.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from faceledger.domain.value_objects.recognition import MatchResult


class EnrollmentResult(BaseModel):
    """Result of enrolling a single face."""
    identity_id: int = Field(..., description="Identifier assigned by the descriptor store")
    name: str = Field(..., description="Name the face was enrolled under")
    source_reference: Optional[str] = Field(None, description="Reference to the enrollment image")


class FaceRecognitionOutcome(BaseModel):
    """Match result for one detected face and the ledger entry recording it."""
    match: MatchResult = Field(..., description="Nearest identity and confidence")
    attempt_id: int = Field(..., description="Ledger entry written for this face")


class RecognitionResult(BaseModel):
    """Result of recognizing every face in an image."""
    threshold: float = Field(..., description="Distance threshold the faces were matched with")
    outcomes: List[FaceRecognitionOutcome] = Field(..., description="One outcome per detected face")
