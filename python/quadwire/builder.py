# python/quadwire/builder.py
# Explicit rebuild entry point chaining validate, unshare, collect, and encode
# Exists so hosts regenerate quad data with one idempotent call whenever geometry changes
# RELEVANT FILES: python/quadwire/unshare.py, python/quadwire/collect.py, python/quadwire/encode.py, python/quadwire/config.py, tests/test_builder.py

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np

from .collect import collect_submesh_corners
from .colors import to_color32
from .config import ConfigSource, load_build_config, split_build_overrides
from .encode import decode_diagonal_edges, encode_quad_colors
from .mesh import QuadMesh
from .unshare import unshare_vertices

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """Summary of one rebuild pass."""

    vertices_before: int
    vertices_after: int
    triangle_count: int
    submesh_count: int
    edge_histogram: Tuple[int, int, int]
    color_format: str
    elapsed_ms: float

    def to_dict(self) -> dict:
        return {
            "vertices_before": self.vertices_before,
            "vertices_after": self.vertices_after,
            "triangle_count": self.triangle_count,
            "submesh_count": self.submesh_count,
            "edge_histogram": list(self.edge_histogram),
            "color_format": self.color_format,
            "elapsed_ms": self.elapsed_ms,
        }


def rebuild_with_report(mesh: QuadMesh, config: ConfigSource = None, **kwargs: Any) -> Tuple[QuadMesh, BuildReport]:
    """Run the full pipeline on ``mesh`` in place and return it with a report.

    Keyword arguments matching :class:`~quadwire.config.BuildConfig` fields
    override ``config``.

    Raises
    ------
    TypeError
        If ``mesh`` is not a QuadMesh or an unknown keyword is passed.
    ValueError
        If the mesh or config breaks a contract. Nothing is mutated in that case.
    """
    if not isinstance(mesh, QuadMesh):
        raise TypeError(f"mesh must be a QuadMesh, got {type(mesh).__name__}")
    overrides, remaining = split_build_overrides(dict(kwargs))
    if remaining:
        raise TypeError(f"Unexpected keyword arguments: {', '.join(sorted(remaining))}")
    cfg = load_build_config(config, overrides)
    mesh.validate()
    if mesh.index_count == 0:
        raise ValueError("mesh has no triangles to rebuild")

    start = time.perf_counter()
    before = mesh.vertex_count
    unshare_vertices(mesh)
    corners = collect_submesh_corners(mesh)
    colors = encode_quad_colors(mesh, corners, workers=cfg.workers, shard_size=cfg.shard_size)
    if cfg.color_format == "color32":
        mesh.colors32 = to_color32(colors, scale=cfg.color32_scale)
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    edges = decode_diagonal_edges(colors)
    hist = np.bincount(edges, minlength=3)
    report = BuildReport(
        vertices_before=before,
        vertices_after=mesh.vertex_count,
        triangle_count=mesh.triangle_count,
        submesh_count=mesh.submesh_count,
        edge_histogram=(int(hist[0]), int(hist[1]), int(hist[2])),
        color_format=cfg.color_format,
        elapsed_ms=elapsed_ms,
    )
    logger.info(
        "rebuilt quad data: %d -> %d vertices, %d triangles in %d submesh(es), %.2f ms",
        report.vertices_before,
        report.vertices_after,
        report.triangle_count,
        report.submesh_count,
        report.elapsed_ms,
    )
    return mesh, report


def rebuild(mesh: QuadMesh, config: ConfigSource = None, **kwargs: Any) -> QuadMesh:
    """Unshare ``mesh`` and write its quad-coordinate colors, in place.

    Calling it again on the result produces identical buffers.
    """
    return rebuild_with_report(mesh, config, **kwargs)[0]


def rebuild_copy(mesh: QuadMesh, config: ConfigSource = None, **kwargs: Any) -> QuadMesh:
    """Like :func:`rebuild` but leaves ``mesh`` untouched."""
    if not isinstance(mesh, QuadMesh):
        raise TypeError(f"mesh must be a QuadMesh, got {type(mesh).__name__}")
    return rebuild(mesh.copy(), config, **kwargs)
