"""Matcher interface for nearest-identity search."""
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from ...entities.identity import IdentityRecord
from ...value_objects.recognition import MatchResult


class Matcher(ABC):
    """Interface for finding the enrolled identity nearest to a query descriptor.

    Implementations must be free of side effects: the same query, enrolled set
    and threshold always give the same result. The linear scan in
    ``EuclideanMatcher`` is the reference; an approximate nearest-neighbour index
    can replace it behind this contract.
    """

    @abstractmethod
    def match(
        self,
        query: np.ndarray,
        enrolled: Sequence[IdentityRecord],
        threshold: float,
    ) -> MatchResult:
        """
        Find the nearest enrolled identity for a query descriptor.

        Args:
            query: Query descriptor of dimension D
            enrolled: Enrolled identities, all of dimension D
            threshold: Distance below which the nearest identity is a match

        Returns:
            MatchResult for the nearest identity; ``best_identity`` is None and
            ``distance`` is infinite when ``enrolled`` is empty

        Raises:
            ValidationError: If the threshold is invalid or dimensions differ
        """
        pass
