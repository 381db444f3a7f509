"""Embedding extractor interface."""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional, Union

import numpy as np

ImageSource = Union[str, Path, bytes]


class EmbeddingExtractor(ABC):
    """Interface for turning an image into one descriptor per detected face.

    Extractors are async context managers; exiting releases model resources.
    """

    async def __aenter__(self) -> "EmbeddingExtractor":
        return self

    async def __aexit__(self, exc_type: Optional[type], exc_val: Optional[BaseException],
                        exc_tb: Optional[Any]) -> None:
        return None

    @abstractmethod
    async def extract(self, image: ImageSource) -> List[np.ndarray]:
        """
        Detect faces and extract their descriptors.

        Args:
            image: Path to an image file, or raw image bytes

        Returns:
            One descriptor per detected face; empty when no face is found

        Raises:
            InvalidImageError: If the image cannot be read or decoded
            ExtractionError: If the model fails
        """
        pass
