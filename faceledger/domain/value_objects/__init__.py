"""Value objects package."""
from .recognition import UNKNOWN_NAME, MatchResult

__all__ = ["MatchResult", "UNKNOWN_NAME"]
