# python/quadwire/primitives.py
# Small shared-vertex meshes built from quads
# Exists to feed demos and tests with meshes whose triangles pair up into quads
# RELEVANT FILES: python/quadwire/mesh.py, examples/quad_wireframe_demo.py, tests/test_primitives.py

from __future__ import annotations

from typing import List

import numpy as np

from .mesh import QuadMesh, SubMesh


def single_triangle() -> QuadMesh:
    """Right triangle in the XY plane with corners (0,0,0), (1,0,0), (0,1,0)."""
    positions = np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
        ],
        dtype=np.float32,
    )
    return QuadMesh(positions=positions, indices=np.array([0, 1, 2], dtype=np.uint32))


def quad_grid(cols: int = 1, rows: int = 1, size: float = 1.0) -> QuadMesh:
    """Planar grid of ``cols`` x ``rows`` square cells in the XY plane.

    Vertices are shared between neighbouring cells. Each cell is split into
    two triangles along its (a, d) diagonal, which is the longest edge of both.
    """
    if cols < 1 or rows < 1:
        raise ValueError("cols and rows must be >= 1")
    if size <= 0.0:
        raise ValueError("size must be positive")
    xs = np.linspace(0.0, cols * size, cols + 1, dtype=np.float32)
    ys = np.linspace(0.0, rows * size, rows + 1, dtype=np.float32)
    gx, gy = np.meshgrid(xs, ys)
    positions = np.stack([gx.ravel(), gy.ravel(), np.zeros(gx.size, dtype=np.float32)], axis=1)
    uvs = np.stack([gx.ravel() / (cols * size), gy.ravel() / (rows * size)], axis=1)

    def idx(i: int, j: int) -> int:
        return j * (cols + 1) + i

    indices: List[int] = []
    for j in range(rows):
        for i in range(cols):
            a = idx(i, j)
            b = idx(i + 1, j)
            c = idx(i, j + 1)
            d = idx(i + 1, j + 1)
            # (a, b, d): longest edge d-a; (a, d, c): longest edge a-d
            indices.extend([a, b, d, a, d, c])
    normals = np.tile(np.array([[0.0, 0.0, 1.0]], dtype=np.float32), (positions.shape[0], 1))
    return QuadMesh(
        positions=positions,
        indices=np.asarray(indices, dtype=np.uint32),
        normals=normals,
        uvs=uvs,
    )


def cube(size: float = 1.0) -> QuadMesh:
    """Axis-aligned cube centered on the origin with 8 shared corners.

    Each face is its own submesh, named after the face direction.
    """
    if size <= 0.0:
        raise ValueError("size must be positive")
    h = 0.5 * float(size)
    positions = np.array(
        [
            [-h, -h, -h], [h, -h, -h], [h, h, -h], [-h, h, -h],
            [-h, -h, h], [h, -h, h], [h, h, h], [-h, h, h],
        ],
        dtype=np.float32,
    )
    faces = [
        ("-z", [0, 2, 1, 0, 3, 2]),
        ("+z", [4, 5, 6, 4, 6, 7]),
        ("-x", [0, 4, 7, 0, 7, 3]),
        ("+x", [1, 2, 6, 1, 6, 5]),
        ("-y", [0, 1, 5, 0, 5, 4]),
        ("+y", [3, 7, 6, 3, 6, 2]),
    ]
    indices: List[int] = []
    submeshes: List[SubMesh] = []
    for name, tris in faces:
        submeshes.append(SubMesh(len(indices), len(tris), name))
        indices.extend(tris)
    return QuadMesh(
        positions=positions,
        indices=np.asarray(indices, dtype=np.uint32),
        submeshes=submeshes,
    )
