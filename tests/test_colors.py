# tests/test_colors.py
# 8-bit packing of quad codes

import numpy as np
import pytest

from quadwire import from_color32, to_color32


def test_default_scale_saturates_doubled_channel() -> None:
    rgba = to_color32(np.array([[2.0, 0.0, 0.0], [1.0, 0.0, 1.0]], dtype=np.float32))
    assert rgba.tolist() == [[255, 0, 0, 255], [255, 0, 255, 255]]


def test_half_scale_round_trip() -> None:
    codes = np.array([[2.0, 0.0, 0.0], [1.0, 0.0, 1.0], [0.0, 2.0, 0.0]], dtype=np.float32)
    back = from_color32(to_color32(codes, scale=0.5), scale=0.5)
    np.testing.assert_allclose(back, codes, atol=0.01)


def test_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        to_color32(np.zeros((2, 3)), scale=0.0)
    with pytest.raises(ValueError):
        to_color32(np.zeros((2, 4)))
    with pytest.raises(ValueError):
        from_color32(np.zeros((2, 4), dtype=np.float32))
