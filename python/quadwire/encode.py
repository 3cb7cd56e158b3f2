# python/quadwire/encode.py
# Quad-coordinate color encoding from longest-edge classification
# Exists to tag every corner with its role in the quad so the shader can hide the diagonal seam
# RELEVANT FILES: python/quadwire/collect.py, python/quadwire/builder.py, python/quadwire/preview.py, tests/test_encode.py

"""
Quad-coordinate encoding.

Each triangle is assumed to be one half of a quad. Its longest edge is taken
to be the quad's internal diagonal, and the three corners receive

    c0 = (1, 0, 0) + offset
    c1 = (0, 0, 1) + offset
    c2 = (0, 1, 0) + offset

where ``offset`` depends on which edge was classified as longest:

    ======  =========  ===========
    edge    corners    offset
    ======  =========  ===========
    0       p0 - p1    (0, 1, 0)
    1       p1 - p2    (1, 0, 0)
    2       p2 - p0    (0, 0, 1)
    ======  =========  ===========

Edge 2 also absorbs every tie, so an equilateral or fully degenerate triangle
is always classified as edge 2.
"""

from __future__ import annotations

import logging
import warnings
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .collect import SubmeshCorners, collect_submesh_corners
from .mesh import QuadMesh

logger = logging.getLogger(__name__)

CORNER_BASES = np.array(
    [
        [1.0, 0.0, 0.0],
        [0.0, 0.0, 1.0],
        [0.0, 1.0, 0.0],
    ],
    dtype=np.float32,
)

EDGE_OFFSETS = np.array(
    [
        [0.0, 1.0, 0.0],  # edge 0: p0-p1
        [1.0, 0.0, 0.0],  # edge 1: p1-p2
        [0.0, 0.0, 1.0],  # edge 2: p2-p0, and all ties
    ],
    dtype=np.float32,
)

# offset channel -> edge index
_CHANNEL_TO_EDGE = np.array([1, 0, 2], dtype=np.int8)

DEFAULT_SHARD_SIZE = 16384


def edge_lengths(p0: np.ndarray, p1: np.ndarray, p2: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Euclidean lengths |p0-p1|, |p1-p2|, |p2-p0| for (T, 3) corner arrays.

    Differences and norms are float32; lengths that round to the same float32
    value count as a tie.
    """
    a = np.asarray(p0, dtype=np.float32)
    b = np.asarray(p1, dtype=np.float32)
    c = np.asarray(p2, dtype=np.float32)
    d1 = np.linalg.norm(a - b, axis=-1)
    d2 = np.linalg.norm(b - c, axis=-1)
    d3 = np.linalg.norm(c - a, axis=-1)
    return d1, d2, d3


def classify_longest_edge(d1: np.ndarray, d2: np.ndarray, d3: np.ndarray) -> np.ndarray:
    """Return 0, 1 or 2 per triangle.

    0 when d1 is strictly greater than both others, else 1 when d2 is strictly
    greater than both others, else 2.
    """
    d1 = np.asarray(d1)
    d2 = np.asarray(d2)
    d3 = np.asarray(d3)
    first = (d1 > d2) & (d1 > d3)
    second = (d2 > d3) & (d2 > d1)
    return np.where(first, 0, np.where(second, 1, 2)).astype(np.int8)


def triangle_codes(corners: np.ndarray) -> np.ndarray:
    """Quad codes for a (T, 3, 3) stack of triangle corner positions.

    Returns a (T, 3, 3) float32 array; ``out[t, j]`` is the code of corner j.
    """
    pts = np.asarray(corners)
    if pts.ndim != 3 or pts.shape[1:] != (3, 3):
        raise ValueError(f"corners must have shape (T, 3, 3); got {pts.shape}")
    codes, _ = _codes_for(pts)
    return codes


def _codes_for(pts: np.ndarray) -> Tuple[np.ndarray, int]:
    d1, d2, d3 = edge_lengths(pts[:, 0], pts[:, 1], pts[:, 2])
    edges = classify_longest_edge(d1, d2, d3)
    codes = CORNER_BASES[None, :, :] + EDGE_OFFSETS[edges][:, None, :]
    degenerate = int(np.count_nonzero((d1 == 0.0) & (d2 == 0.0) & (d3 == 0.0)))
    return codes, degenerate


def _plan_shards(corners: Sequence[SubmeshCorners], shard_size: int) -> List[np.ndarray]:
    shards: List[np.ndarray] = []
    for group in corners:
        tris = group.absolute[group.local.reshape(-1, 3)]
        for lo in range(0, tris.shape[0], shard_size):
            shards.append(tris[lo:lo + shard_size])
    return shards


def _encode_shard(positions: np.ndarray, tris: np.ndarray, colors: np.ndarray, written: np.ndarray) -> int:
    flat = tris.reshape(-1)
    codes, degenerate = _codes_for(positions[tris])
    colors[flat] = codes.reshape(-1, 3)
    np.add.at(written, flat, 1)
    return degenerate


def encode_quad_colors(
    mesh: QuadMesh,
    corners: Optional[Sequence[SubmeshCorners]] = None,
    *,
    workers: int = 1,
    shard_size: int = DEFAULT_SHARD_SIZE,
) -> np.ndarray:
    """Write quad-coordinate codes for every corner of an unshared mesh.

    Parameters
    ----------
    mesh : QuadMesh
        Unshared mesh; ``mesh.colors`` is replaced with the result.
    corners : sequence of SubmeshCorners, optional
        Output of :func:`quadwire.collect.collect_submesh_corners`; collected
        from ``mesh`` when omitted.
    workers : int, default 1
        Threads used for the triangle loop. Shards write disjoint ranges of a
        pre-sized buffer so no locking is needed.
    shard_size : int
        Triangles per shard.

    Returns
    -------
    np.ndarray
        (N, 3) float32 color buffer, also stored on ``mesh.colors``.

    Raises
    ------
    RuntimeError
        If any corner was left unwritten or written more than once.
    """
    if workers < 1:
        raise ValueError("workers must be >= 1")
    if shard_size < 1:
        raise ValueError("shard_size must be >= 1")
    if corners is None:
        corners = collect_submesh_corners(mesh)

    positions = mesh.positions
    n = mesh.vertex_count
    colors = np.zeros((n, 3), dtype=np.float32)
    written = np.zeros(n, dtype=np.int32)
    shards = _plan_shards(corners, int(shard_size))
    logger.debug("encoding %d triangles in %d shards with %d worker(s)", n // 3, len(shards), workers)

    if workers == 1 or len(shards) <= 1:
        degenerate = sum(_encode_shard(positions, tris, colors, written) for tris in shards)
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(_encode_shard, positions, tris, colors, written) for tris in shards]
            degenerate = sum(f.result() for f in futures)

    missing = int(np.count_nonzero(written == 0))
    repeated = int(np.count_nonzero(written > 1))
    if missing or repeated:
        raise RuntimeError(
            f"quad color coverage broken: {missing} corner(s) unwritten, {repeated} written more than once"
        )
    if degenerate:
        warnings.warn(f"Mesh contains {degenerate} degenerate triangles (zero-length edges)")

    mesh.colors = colors
    return colors


def decode_diagonal_edges(colors: np.ndarray) -> np.ndarray:
    """Recover each triangle's classified diagonal edge (0, 1 or 2) from its codes.

    Raises ValueError if ``colors`` does not hold valid quad codes.
    """
    arr = np.asarray(colors, dtype=np.float32)
    if arr.ndim != 2 or arr.shape[1] != 3 or arr.shape[0] % 3 != 0:
        raise ValueError(f"colors must have shape (3T, 3); got {arr.shape}")
    tri = arr.reshape(-1, 3, 3)
    offsets = tri[:, 0, :] - CORNER_BASES[0]
    channel = np.argmax(offsets, axis=1)
    expected = CORNER_BASES[None, :, :] + np.eye(3, dtype=np.float32)[channel][:, None, :]
    if not np.array_equal(tri, expected):
        raise ValueError("colors do not hold quad-coordinate codes")
    return _CHANNEL_TO_EDGE[channel]
