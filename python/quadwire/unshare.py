# python/quadwire/unshare.py
# Vertex unsharing: one vertex slot per triangle corner
# Exists because quad codes vary per triangle, so corners may not alias a shared vertex
# RELEVANT FILES: python/quadwire/mesh.py, python/quadwire/collect.py, tests/test_unshare.py

from __future__ import annotations

import logging

import numpy as np

from .mesh import QuadMesh

logger = logging.getLogger(__name__)


def unshare_vertices(mesh: QuadMesh) -> QuadMesh:
    """Duplicate vertex data so every triangle corner owns a unique slot.

    After the call ``mesh.positions[i]`` equals the old
    ``positions[indices[i]]`` and ``mesh.indices`` is ``[0, 1, ..., n-1]``.
    Normals and uvs are gathered the same way. Any existing colors are
    dropped because they no longer line up with the new vertex order.
    Submesh ranges are untouched since triangle order is preserved.

    The mesh is mutated in place and returned.
    """
    indices = mesh.indices
    n = int(indices.size)
    before = mesh.vertex_count

    gather = indices.astype(np.intp, copy=False)
    mesh.positions = np.ascontiguousarray(mesh.positions[gather])
    if mesh.normals is not None:
        mesh.normals = np.ascontiguousarray(mesh.normals[gather])
    if mesh.uvs is not None:
        mesh.uvs = np.ascontiguousarray(mesh.uvs[gather])
    mesh.colors = None
    mesh.colors32 = None
    mesh.indices = np.arange(n, dtype=np.uint32)

    logger.debug("unshared %d vertices into %d corner slots", before, n)
    return mesh


def is_unshared(mesh: QuadMesh) -> bool:
    """True when the vertex buffer already holds exactly one slot per corner."""
    n = mesh.index_count
    if mesh.vertex_count != n:
        return False
    return bool(np.array_equal(mesh.indices, np.arange(n, dtype=np.uint32)))
