"""Tests for descriptor encoding and validation."""
import math

import numpy as np
import pytest

from faceledger.core.exceptions import ValidationError
from faceledger.core.utils.descriptor import as_descriptor, decode_descriptor, encode_descriptor


class TestDescriptorCodec:
    """Descriptors must survive storage bit for bit."""

    def test_round_trip_is_exact_for_random_vectors(self):
        rng = np.random.default_rng(1234)
        descriptor = rng.normal(scale=0.3, size=128)

        decoded = decode_descriptor(encode_descriptor(descriptor))

        assert decoded.dtype == np.float64
        assert decoded.tobytes() == descriptor.tobytes()

    def test_round_trip_preserves_awkward_values(self):
        descriptor = np.array([0.1 + 0.2, 1e-308, 5e-324, -0.0, 1.7976931348623157e308, -2.5e-17])

        decoded = decode_descriptor(encode_descriptor(descriptor))

        assert decoded.tobytes() == descriptor.tobytes()

    def test_float32_model_output_round_trips_at_full_precision(self):
        descriptor = np.array([0.1, 0.2, 0.3], dtype=np.float32)

        decoded = decode_descriptor(encode_descriptor(descriptor))

        assert np.array_equal(decoded, descriptor.astype(np.float64))
        assert np.array_equal(decoded.astype(np.float32), descriptor)

    def test_encoding_is_text(self):
        assert encode_descriptor([0.1, 0.2, 0.3]) == "[0.1, 0.2, 0.3]"


class TestAsDescriptor:

    def test_accepts_lists(self):
        descriptor = as_descriptor([1, 2, 3])
        assert descriptor.dtype == np.float64
        assert descriptor.shape == (3,)

    @pytest.mark.parametrize("values", [
        [],
        [[0.1, 0.2], [0.3, 0.4]],
        [0.1, math.nan],
        [0.1, math.inf],
        ["a", "b"],
    ])
    def test_rejects_malformed_descriptors(self, values):
        with pytest.raises(ValidationError):
            as_descriptor(values)

    def test_encode_rejects_non_finite(self):
        with pytest.raises(ValidationError):
            encode_descriptor([0.1, -math.inf])
