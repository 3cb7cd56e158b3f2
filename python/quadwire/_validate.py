# python/quadwire/_validate.py
# Buffer coercion and mesh contract checks
# Exists so malformed meshes fail fast before any buffer is replaced
# RELEVANT FILES: python/quadwire/mesh.py, python/quadwire/builder.py, tests/test_mesh.py

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    from .mesh import QuadMesh

_INDEX_LIMIT = np.iinfo(np.uint32).max


def as_float_rows(value, name: str, cols: int) -> np.ndarray:
    """Coerce ``value`` to a C-contiguous float32 array of shape (N, cols)."""
    try:
        arr = np.asarray(value, dtype=np.float32)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be numeric, got {type(value).__name__}") from e
    if arr.size == 0:
        arr = arr.reshape(0, cols)
    if arr.ndim != 2 or arr.shape[1] != cols:
        raise ValueError(f"{name} must have shape (N, {cols}); got {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} contains NaN or infinite values")
    return np.ascontiguousarray(arr)


def as_rgba8(value) -> np.ndarray:
    arr = np.asarray(value)
    if arr.dtype != np.uint8:
        raise ValueError(f"colors32 must have dtype uint8; got {arr.dtype}")
    if arr.size == 0:
        arr = arr.reshape(0, 4)
    if arr.ndim != 2 or arr.shape[1] != 4:
        raise ValueError(f"colors32 must have shape (N, 4); got {arr.shape}")
    return np.ascontiguousarray(arr)


def as_flat_indices(value) -> np.ndarray:
    """Coerce triangle indices to a flat uint32 array whose length is a multiple of three."""
    arr = np.asarray(value)
    if arr.size == 0:
        return np.zeros(0, dtype=np.uint32)
    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"indices must have integer dtype; got {arr.dtype}")
    if arr.ndim == 2 and arr.shape[1] != 3:
        raise ValueError(f"indices must have shape (M, 3) or be flat; got {arr.shape}")
    if arr.ndim not in (1, 2):
        raise ValueError(f"indices must have shape (M, 3) or be flat; got {arr.shape}")
    if arr.min() < 0:
        raise ValueError(f"indices must be non-negative; found {int(arr.min())}")
    if arr.max() > _INDEX_LIMIT:
        raise ValueError(f"indices exceed uint32 range; found {int(arr.max())}")
    flat = arr.reshape(-1)
    if flat.size % 3 != 0:
        raise ValueError(f"index count must be a multiple of 3; got {flat.size}")
    return np.ascontiguousarray(flat, dtype=np.uint32)


def check_mesh(mesh: "QuadMesh") -> None:
    """Check every precondition of the rebuild pipeline.

    Raises
    ------
    ValueError
        If the vertex buffer is empty, an index is out of range, an attribute
        row count does not match the vertex count, or the submesh ranges do not
        tile the index buffer in order.
    """
    n_vertices = mesh.vertex_count
    if n_vertices == 0:
        raise ValueError("positions must not be empty")
    if mesh.index_count % 3 != 0:
        raise ValueError(f"index count must be a multiple of 3; got {mesh.index_count}")
    if mesh.index_count:
        max_index = int(mesh.indices.max())
        if max_index >= n_vertices:
            raise ValueError(
                f"indices reference vertex {max_index} but only {n_vertices} vertices exist "
                f"(valid range: 0-{n_vertices - 1})"
            )

    for name in ("colors", "colors32", "normals", "uvs"):
        attr = getattr(mesh, name)
        if attr is not None and attr.shape[0] != n_vertices:
            raise ValueError(f"{name} has {attr.shape[0]} rows; expected one per vertex ({n_vertices})")

    check_submesh_tiling(mesh)


def check_submesh_tiling(mesh: "QuadMesh") -> None:
    """Submesh ranges must cover [0, index_count) in order with no gap or overlap."""
    cursor = 0
    for i, sm in enumerate(mesh.submeshes):
        label = f"submeshes[{i}]"
        if sm.index_count < 0:
            raise ValueError(f"{label}.index_count must be non-negative")
        if sm.index_count % 3 != 0:
            raise ValueError(f"{label}.index_count must be a multiple of 3; got {sm.index_count}")
        if sm.index_start != cursor:
            raise ValueError(
                f"{label}.index_start is {sm.index_start}; expected {cursor} "
                f"(submeshes must tile the index buffer in order)"
            )
        cursor = sm.index_stop
    if cursor != mesh.index_count:
        raise ValueError(f"submeshes cover {cursor} indices; index buffer has {mesh.index_count}")


def check_unshared(mesh: "QuadMesh") -> None:
    """Raise unless every corner owns its own vertex slot."""
    if mesh.vertex_count != mesh.index_count:
        raise ValueError(
            f"mesh is not unshared: {mesh.vertex_count} vertices for {mesh.index_count} corners"
        )
    if not np.array_equal(mesh.indices, np.arange(mesh.index_count, dtype=np.uint32)):
        raise ValueError("mesh is not unshared: index buffer is not the identity")
