"""Service interfaces package."""
from .matching import Matcher
from .recognition import EmbeddingExtractor
from .storage import DescriptorStore, RecognitionLedger

__all__ = ["DescriptorStore", "EmbeddingExtractor", "Matcher", "RecognitionLedger"]
