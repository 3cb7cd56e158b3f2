# python/quadwire/colors.py
# 8-bit RGBA packing for quad-coordinate codes
# Exists for hosts whose vertex color attribute is stored as bytes
# RELEVANT FILES: python/quadwire/encode.py, python/quadwire/builder.py, tests/test_colors.py

from __future__ import annotations

import numpy as np


def to_color32(colors: np.ndarray, scale: float = 1.0) -> np.ndarray:
    """Pack (N, 3) float codes into (N, 4) uint8 RGBA with opaque alpha.

    Channels are multiplied by ``scale``, clamped to [0, 1] and rounded to
    the nearest byte. With the default scale a doubled channel (value 2)
    saturates to 255 just like a value of 1; ``scale=0.5`` keeps the two
    distinct (128 and 255).
    """
    if scale <= 0.0:
        raise ValueError("scale must be positive")
    arr = np.asarray(colors, dtype=np.float32)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"colors must have shape (N, 3); got {arr.shape}")
    rgb = (np.clip(arr * np.float32(scale), 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)
    alpha = np.full((arr.shape[0], 1), 255, dtype=np.uint8)
    return np.ascontiguousarray(np.concatenate([rgb, alpha], axis=1))


def from_color32(rgba: np.ndarray, scale: float = 1.0) -> np.ndarray:
    """Inverse of :func:`to_color32` up to clamping; drops alpha."""
    if scale <= 0.0:
        raise ValueError("scale must be positive")
    arr = np.asarray(rgba)
    if arr.dtype != np.uint8:
        raise ValueError(f"rgba must have dtype uint8; got {arr.dtype}")
    if arr.ndim != 2 or arr.shape[1] not in (3, 4):
        raise ValueError(f"rgba must have shape (N, 3|4); got {arr.shape}")
    return (arr[:, :3].astype(np.float32) / 255.0) / np.float32(scale)
