# python/quadwire/mesh.py
# Mesh buffer container with submesh ranges and optional per-vertex attributes
# Exists to give the unshare/encode stages plain numpy buffers instead of an engine mesh handle
# RELEVANT FILES: python/quadwire/_validate.py, python/quadwire/unshare.py, python/quadwire/encode.py, tests/test_mesh.py

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from . import _validate


@dataclass(frozen=True)
class SubMesh:
    """Contiguous range of the flat triangle-index buffer.

    ``index_start`` and ``index_count`` are expressed in indices, so both are
    multiples of three for a well-formed mesh.
    """

    index_start: int
    index_count: int
    name: Optional[str] = None

    @property
    def index_stop(self) -> int:
        return self.index_start + self.index_count

    @property
    def triangle_count(self) -> int:
        return self.index_count // 3


@dataclass
class QuadMesh:
    """Triangle mesh buffers consumed and mutated by :func:`quadwire.rebuild`.

    positions: (N, 3) float32
    indices:   (n,) uint32, n a multiple of three
    submeshes: submesh ranges over ``indices``; empty means one submesh
    colors:    (N, 3) float32 quad-coordinate codes, optional
    normals:   (N, 3) float32, optional
    uvs:       (N, 2) float32, optional
    colors32:  (N, 4) uint8 packed copy of ``colors``, optional
    """

    positions: np.ndarray
    indices: np.ndarray
    submeshes: List[SubMesh] = field(default_factory=list)
    colors: Optional[np.ndarray] = None
    normals: Optional[np.ndarray] = None
    uvs: Optional[np.ndarray] = None
    colors32: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        self.positions = _validate.as_float_rows(self.positions, "positions", 3)
        self.indices = _validate.as_flat_indices(self.indices)
        if self.colors is not None:
            self.colors = _validate.as_float_rows(self.colors, "colors", 3)
        if self.normals is not None:
            self.normals = _validate.as_float_rows(self.normals, "normals", 3)
        if self.uvs is not None:
            self.uvs = _validate.as_float_rows(self.uvs, "uvs", 2)
        if self.colors32 is not None:
            self.colors32 = _validate.as_rgba8(self.colors32)
        submeshes = list(self.submeshes)
        for sm in submeshes:
            if not isinstance(sm, SubMesh):
                raise TypeError(f"submeshes entries must be SubMesh, got {type(sm).__name__}")
        if not submeshes:
            submeshes = [SubMesh(0, int(self.indices.size))]
        self.submeshes = submeshes

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def index_count(self) -> int:
        return int(self.indices.size)

    @property
    def triangle_count(self) -> int:
        return self.index_count // 3

    @property
    def submesh_count(self) -> int:
        return len(self.submeshes)

    def submesh_indices(self, index: int) -> np.ndarray:
        """Return a view of the index buffer owned by submesh ``index``."""
        sm = self.submeshes[index]
        return self.indices[sm.index_start:sm.index_stop]

    def triangles(self) -> np.ndarray:
        """Index buffer reshaped to (M, 3)."""
        return self.indices.reshape(-1, 3)

    def validate(self) -> None:
        """Raise if the buffers break any mesh contract."""
        _validate.check_mesh(self)

    def copy(self) -> "QuadMesh":
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return (
            f"QuadMesh(vertices={self.vertex_count}, triangles={self.triangle_count}, "
            f"submeshes={self.submesh_count}, colors={self.colors is not None})"
        )
