"""Application services."""
from .face_recognition import FaceRecognitionOrchestrator
from .matching import EuclideanMatcher

__all__ = ["EuclideanMatcher", "FaceRecognitionOrchestrator"]
