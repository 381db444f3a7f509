"""
Face descriptor utility functions.
"""
import json
from typing import Sequence, Union

import numpy as np

from faceledger.core.exceptions import ValidationError

DescriptorLike = Union[np.ndarray, Sequence[float]]


def as_descriptor(values: DescriptorLike) -> np.ndarray:
    """Convert a descriptor to a 1-D float64 numpy array.

    float32 model output widens to float64 without loss.

    Args:
        values: Descriptor as a numpy array or a sequence of numbers

    Returns:
        numpy.ndarray: Descriptor as a float64 vector

    Raises:
        ValidationError: If the descriptor is empty, not 1-D or not finite
    """
    try:
        descriptor = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Descriptor is not numeric: {e}")

    if descriptor.ndim != 1:
        raise ValidationError(
            "Descriptor must be a flat vector",
            details={"shape": list(descriptor.shape)}
        )
    if descriptor.size == 0:
        raise ValidationError("Descriptor must not be empty")
    if not np.all(np.isfinite(descriptor)):
        raise ValidationError("Descriptor contains non-finite values")

    return descriptor


def encode_descriptor(descriptor: DescriptorLike) -> str:
    """Serialize a descriptor to JSON text.

    Python writes floats with their shortest round-trip repr, so
    ``decode_descriptor(encode_descriptor(v))`` reproduces every component exactly.
    """
    return json.dumps(as_descriptor(descriptor).tolist(), allow_nan=False)


def decode_descriptor(text: str) -> np.ndarray:
    """Deserialize a descriptor previously written by :func:`encode_descriptor`."""
    return np.asarray(json.loads(text), dtype=np.float64)
