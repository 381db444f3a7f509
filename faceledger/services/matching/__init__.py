from .euclidean import (
    EuclideanMatcher,
    distance_to_confidence,
    euclidean_distance,
    pairwise_distances,
    validate_threshold,
)

__all__ = [
    "EuclideanMatcher",
    "distance_to_confidence",
    "euclidean_distance",
    "pairwise_distances",
    "validate_threshold",
]
