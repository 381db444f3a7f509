"""Domain entities package."""
from .identity import IdentityRecord, MatchAttempt

__all__ = ["IdentityRecord", "MatchAttempt"]
