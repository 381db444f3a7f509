"""Core identity domain entities."""
from datetime import datetime
from typing import Optional, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from faceledger.core.utils.descriptor import as_descriptor


class IdentityRecord(BaseModel):
    """An enrolled identity and the descriptor it is recognized by."""
    id: int = Field(..., description="Store-assigned identifier, increasing and never reused")
    name: str = Field(..., description="Name the identity was enrolled under")
    descriptor: np.ndarray = Field(..., description="Face descriptor vector")
    enrolled_at: Optional[datetime] = Field(None, description="Timestamp of the enrollment")
    source_reference: Optional[str] = Field(None, description="Reference to the enrollment image")

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @field_validator('descriptor', mode='before')
    @classmethod
    def validate_descriptor(cls, v: Union[np.ndarray, list]) -> np.ndarray:
        """Validate and convert descriptor to a float64 numpy array."""
        return as_descriptor(v)

    @property
    def dimension(self) -> int:
        return int(self.descriptor.shape[0])


class MatchAttempt(BaseModel):
    """A single recognition decision as recorded in the ledger."""
    id: int = Field(..., description="Ledger entry identifier")
    matched_name: str = Field(..., description="Nearest identity name or 'Unknown'")
    confidence: float = Field(..., description="Heuristic confidence score", ge=0.0, le=100.0)
    matched: bool = Field(..., description="Whether the distance was below the threshold")
    occurred_at: Optional[datetime] = Field(None, description="Timestamp of the attempt")

    model_config = ConfigDict(frozen=True)
