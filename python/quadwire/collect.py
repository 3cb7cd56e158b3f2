# python/quadwire/collect.py
# Groups unshared triangle corners by submesh
# Exists to hand the encoder absolute corner positions alongside per-submesh local indices
# RELEVANT FILES: python/quadwire/unshare.py, python/quadwire/encode.py, tests/test_collect.py

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from . import _validate
from .mesh import QuadMesh


@dataclass
class SubmeshCorners:
    """Corner positions owned by one submesh.

    ``local`` counts corners from zero inside the submesh and is only useful
    for stepping through triangles three at a time. ``absolute`` is where each
    corner lives in the unshared vertex buffer and is the write index for the
    color attribute.
    """

    submesh: int
    local: np.ndarray
    absolute: np.ndarray

    @property
    def corner_count(self) -> int:
        return int(self.absolute.size)

    @property
    def triangle_count(self) -> int:
        return self.corner_count // 3


def collect_submesh_corners(mesh: QuadMesh) -> List[SubmeshCorners]:
    """Collect each submesh's corners from an unshared mesh, in submesh order.

    Raises
    ------
    ValueError
        If the mesh is not unshared or a submesh range is not a multiple of 3.
    """
    _validate.check_unshared(mesh)
    _validate.check_submesh_tiling(mesh)

    out: List[SubmeshCorners] = []
    for i in range(mesh.submesh_count):
        absolute = mesh.submesh_indices(i).astype(np.intp)
        local = np.arange(absolute.size, dtype=np.intp)
        out.append(SubmeshCorners(submesh=i, local=local, absolute=absolute))
    return out


def corner_order(corners: List[SubmeshCorners]) -> np.ndarray:
    """Absolute corner positions of every submesh concatenated in submesh order."""
    if not corners:
        return np.zeros(0, dtype=np.intp)
    return np.concatenate([c.absolute for c in corners])
