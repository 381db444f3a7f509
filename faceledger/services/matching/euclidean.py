"""
Linear-scan Euclidean matcher.

Compares a query descriptor with every enrolled descriptor (O(N*D)), which is
plenty for the corpus sizes this service targets.

Confidence is ``max(0, 100 - distance * 100)``: a heuristic rescaling of the
raw distance, not a calibrated probability. It only promises to fall as the
distance grows and to stay within [0, 100].
"""
import math
from typing import Sequence

import numpy as np

from faceledger.core.exceptions import ValidationError
from faceledger.core.utils.descriptor import DescriptorLike, as_descriptor
from faceledger.domain.entities.identity import IdentityRecord
from faceledger.domain.interfaces.matching.matcher import Matcher
from faceledger.domain.value_objects.recognition import MatchResult

MAX_CONFIDENCE = 100.0


def pairwise_distances(query: np.ndarray, candidates: np.ndarray) -> np.ndarray:
    """Distances from ``query`` (shape ``(D,)``) to each row of ``candidates`` (shape ``(N, D)``)."""
    return np.sqrt(np.sum((candidates - query) ** 2, axis=1))


def euclidean_distance(a: DescriptorLike, b: DescriptorLike) -> float:
    """Euclidean distance between two descriptors of equal dimension."""
    a = as_descriptor(a)
    b = as_descriptor(b)
    if a.shape != b.shape:
        raise ValidationError(
            "Descriptor dimensions differ",
            details={"left": a.shape[0], "right": b.shape[0]}
        )
    return float(pairwise_distances(a, b[np.newaxis])[0])


def distance_to_confidence(distance: float) -> float:
    """Map a distance onto the 0-100 confidence scale."""
    if math.isnan(distance) or distance < 0:
        raise ValidationError(f"Distance must be a non-negative number, got {distance}")
    return min(MAX_CONFIDENCE, max(0.0, MAX_CONFIDENCE - distance * 100.0))


def validate_threshold(threshold: float) -> float:
    """Check that a match threshold is a finite, non-negative distance."""
    if isinstance(threshold, bool):
        raise ValidationError("Threshold must be a number")
    try:
        threshold = float(threshold)
    except (TypeError, ValueError):
        raise ValidationError(f"Threshold must be a number, got {threshold!r}")
    if not math.isfinite(threshold) or threshold < 0:
        raise ValidationError(f"Threshold must be a finite non-negative number, got {threshold}")
    return threshold


class EuclideanMatcher(Matcher):
    """Exhaustive nearest-neighbour search under Euclidean distance.

    Ties go to the first identity in the supplied order, since ``np.argmin``
    returns the first occurrence of the minimum.
    """

    def match(
        self,
        query: DescriptorLike,
        enrolled: Sequence[IdentityRecord],
        threshold: float,
    ) -> MatchResult:
        threshold = validate_threshold(threshold)
        query = as_descriptor(query)

        if not enrolled:
            return MatchResult(
                best_identity=None,
                distance=math.inf,
                confidence=0.0,
                matched=False,
            )

        mismatched = [record.id for record in enrolled if record.dimension != query.shape[0]]
        if mismatched:
            raise ValidationError(
                "Query descriptor dimension does not match enrolled descriptors",
                details={"query_dimension": int(query.shape[0]), "identity_ids": mismatched}
            )

        candidates = np.stack([record.descriptor for record in enrolled])
        distances = pairwise_distances(query, candidates)
        best_index = int(np.argmin(distances))
        distance = float(distances[best_index])

        return MatchResult(
            best_identity=enrolled[best_index],
            distance=distance,
            confidence=distance_to_confidence(distance),
            matched=distance < threshold,
        )
