"""
InsightFace-based embedding extractor.

Decodes an image with OpenCV, runs InsightFace detection and recognition on it
and returns one embedding per detected face. Model inference is blocking, so
it runs in a worker thread to keep the event loop free.

Example:
    ```python
    extractor = InsightFaceExtractor()

    descriptors = await extractor.extract("photos/alice.jpg")
    ```

Note:
    This implementation uses CPU inference by default. For GPU support,
    modify the providers list in __init__ to include 'CUDAExecutionProvider'.
"""
import asyncio
import math
from pathlib import Path
from typing import Any, List, Optional

import cv2
import numpy as np
from insightface.app import FaceAnalysis

from faceledger.core.config import settings
from faceledger.core.exceptions import ExtractionError, InvalidImageError, ModelLoadError
from faceledger.core.logging import get_logger
from faceledger.domain.interfaces.recognition import EmbeddingExtractor, ImageSource

logger = get_logger(__name__)


class InsightFaceExtractor(EmbeddingExtractor):
    """
    Embedding extractor backed by an InsightFace model pack.

    Attributes:
        model: InsightFace model instance for face analysis
        max_faces: Upper bound on faces returned per image; None returns every face
    """

    def __init__(
        self,
        model_name: Optional[str] = None,
        max_faces: Optional[int] = None,
    ) -> None:
        """Load the InsightFace model pack."""
        self.max_faces = max_faces if max_faces is not None else settings.MAX_FACES_PER_IMAGE
        try:
            self.model = FaceAnalysis(
                name=model_name or settings.MODEL_PATH,
                root=settings.MODEL_CACHE_DIR,
                providers=['CPUExecutionProvider']
            )
            # Detection size affects accuracy significantly
            self.model.prepare(ctx_id=0, det_size=(640, 640))
        except Exception as e:
            logger.error("Failed to load InsightFace model", error=str(e), exc_info=True)
            raise ModelLoadError(f"Failed to load InsightFace model: {e}")

    async def __aenter__(self) -> "InsightFaceExtractor":
        logger.debug("Entering InsightFace extractor context")
        return self

    async def __aexit__(self, exc_type: Optional[type], exc_val: Optional[Exception],
                        exc_tb: Optional[Any]) -> None:
        logger.debug("Cleaning up InsightFace extractor resources")
        self.model = None

    async def _read_image_bytes(self, image: ImageSource) -> bytes:
        if isinstance(image, bytes):
            return image
        path = Path(image)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            logger.error("Image could not be read", path=str(path), error=str(e))
            raise InvalidImageError(
                f"Image could not be read: {path}",
                details={"path": str(path)}
            )

    def _load_and_validate_image(self, image_bytes: bytes) -> np.ndarray:
        """Decode image bytes and downscale oversized images."""
        nparr = np.frombuffer(image_bytes, np.uint8)
        img = cv2.imdecode(nparr, cv2.IMREAD_COLOR)

        if img is None:
            raise InvalidImageError("Failed to decode image")

        height, width = img.shape[:2]
        pixels = width * height

        if pixels > settings.MAX_IMAGE_PIXELS:
            scale = math.sqrt(settings.MAX_IMAGE_PIXELS / pixels)
            new_width = int(width * scale)
            new_height = int(height * scale)

            logger.info(
                "Resizing large image",
                original_size=(width, height),
                new_size=(new_width, new_height)
            )

            img = cv2.resize(
                img,
                (new_width, new_height),
                interpolation=cv2.INTER_AREA
            )

        return img

    def _process_image(self, image: np.ndarray) -> List[np.ndarray]:
        # max_num=0 disables the detector limit
        faces = self.model.get(image, max_num=self.max_faces or 0)
        logger.debug(
            "Face detection results",
            faces_found=len(faces) if faces else 0,
            max_faces=self.max_faces
        )
        if self.max_faces and len(faces) >= self.max_faces:
            logger.warning(
                "Face limit reached, additional faces may have been dropped",
                max_faces=self.max_faces
            )
        # Unit-length embeddings keep Euclidean distances within [0, 2]
        return [
            np.asarray(face.normed_embedding, dtype=np.float64)
            for face in faces
            if face.embedding is not None
        ]

    async def extract(self, image: ImageSource) -> List[np.ndarray]:
        if self.model is None:
            raise ExtractionError("InsightFace extractor has been closed")

        image_bytes = await self._read_image_bytes(image)
        img = await asyncio.to_thread(self._load_and_validate_image, image_bytes)
        try:
            return await asyncio.to_thread(self._process_image, img)
        except Exception as e:
            logger.error(
                "Face processing failed",
                error=str(e),
                image_shape=img.shape,
                exc_info=True
            )
            raise ExtractionError(f"Face processing failed: {e}")
