"""Face recognition value objects."""
from typing import Optional

from pydantic import BaseModel, Field

from faceledger.domain.entities.identity import IdentityRecord

# Name reported when there is no enrolled identity to compare against
UNKNOWN_NAME = "Unknown"


class MatchResult(BaseModel):
    """Result of matching one query descriptor against the enrolled set."""
    best_identity: Optional[IdentityRecord] = Field(None, description="Nearest enrolled identity")
    distance: float = Field(..., description="Euclidean distance to the nearest identity", ge=0.0)
    confidence: float = Field(..., description="Heuristic confidence score (0-100)", ge=0.0, le=100.0)
    matched: bool = Field(..., description="Whether the distance is below the threshold")

    @property
    def name(self) -> str:
        """Name of the nearest identity, or ``UNKNOWN_NAME`` when nothing is enrolled."""
        if self.best_identity is None:
            return UNKNOWN_NAME
        return self.best_identity.name
