"""Recognition ledger interface."""
from abc import ABC, abstractmethod
from typing import List

from ...entities.identity import MatchAttempt


class RecognitionLedger(ABC):
    """Append-only audit trail of recognition attempts.

    There is deliberately no update or delete: entries outlive the identities
    they name.
    """

    @abstractmethod
    async def record(self, matched_name: str, confidence: float, matched: bool) -> int:
        """
        Append a recognition attempt.

        Returns:
            Identifier of the new ledger entry

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def query(self, limit: int) -> List[MatchAttempt]:
        """
        Return up to ``limit`` attempts, most recent first.

        Raises:
            ValidationError: If ``limit`` is not a positive integer
            StorageError: If the read fails
        """
        pass
