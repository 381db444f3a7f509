from .extractor import EmbeddingExtractor, ImageSource

__all__ = ["EmbeddingExtractor", "ImageSource"]
