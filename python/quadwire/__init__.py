# python/quadwire/__init__.py
# Public API for quad-coordinate mesh preprocessing
# Exists to expose the rebuild pipeline and its stages from one import
# RELEVANT FILES: python/quadwire/builder.py, python/quadwire/mesh.py, python/quadwire/encode.py

"""
quadwire

Prepares triangle meshes for flat and wireframe quad shading:

- unshares vertices so every triangle corner owns a vertex slot
- writes a per-corner quad-coordinate color that marks each triangle's
  longest edge as the hidden quad diagonal

Typical use::

    import quadwire
    mesh = quadwire.QuadMesh(positions, indices)
    quadwire.rebuild(mesh)
    mesh.colors  # (N, 3) float32 quad codes
"""

from .builder import BuildReport, rebuild, rebuild_copy, rebuild_with_report
from .collect import SubmeshCorners, collect_submesh_corners
from .colors import from_color32, to_color32
from .config import BuildConfig, load_build_config
from .encode import (
    CORNER_BASES,
    EDGE_OFFSETS,
    classify_longest_edge,
    decode_diagonal_edges,
    edge_lengths,
    encode_quad_colors,
    triangle_codes,
)
from .mesh import QuadMesh, SubMesh
from .unshare import is_unshared, unshare_vertices

__version__ = "0.1.0"

__all__ = [
    "QuadMesh",
    "SubMesh",
    "SubmeshCorners",
    "BuildConfig",
    "BuildReport",
    "CORNER_BASES",
    "EDGE_OFFSETS",
    "rebuild",
    "rebuild_copy",
    "rebuild_with_report",
    "load_build_config",
    "unshare_vertices",
    "is_unshared",
    "collect_submesh_corners",
    "encode_quad_colors",
    "edge_lengths",
    "classify_longest_edge",
    "triangle_codes",
    "decode_diagonal_edges",
    "to_color32",
    "from_color32",
]
