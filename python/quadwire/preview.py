# python/quadwire/preview.py
# Orthographic wireframe preview that hides quad diagonals
# Exists to eyeball encoded meshes without a GPU: only quad outlines should remain
# RELEVANT FILES: python/quadwire/encode.py, examples/quad_wireframe_demo.py, tests/test_preview.py

from __future__ import annotations

import logging
import os
from typing import Sequence, Tuple, Union

import numpy as np

from .encode import decode_diagonal_edges
from .mesh import QuadMesh
from .unshare import is_unshared

logger = logging.getLogger(__name__)

RGBA = Tuple[int, int, int, int]


def _project(mesh: QuadMesh, axes: Sequence[int], width: int, height: int, margin: int) -> np.ndarray:
    pts = mesh.positions[:, list(axes)].astype(np.float64)
    lo = pts.min(axis=0)
    hi = pts.max(axis=0)
    extent = np.maximum(hi - lo, 1e-12)
    usable = np.array([width - 1 - 2 * margin, height - 1 - 2 * margin], dtype=np.float64)
    if np.any(usable <= 0):
        raise ValueError("margin leaves no drawable area")
    scale = float(np.min(usable / extent))
    xy = (pts - lo) * scale + margin
    xy[:, 1] = (height - 1) - xy[:, 1]
    return xy


def render_wireframe(
    mesh: QuadMesh,
    width: int = 512,
    height: int = 512,
    *,
    axes: Tuple[int, int] = (0, 1),
    hide_diagonals: bool = True,
    margin: int = 8,
    line_color: RGBA = (255, 255, 255, 255),
    background: RGBA = (0, 0, 0, 255),
) -> np.ndarray:
    """Rasterize the mesh edges into an (H, W, 4) uint8 RGBA array.

    When ``hide_diagonals`` is set and the mesh carries quad codes on an
    unshared vertex buffer, the edge each triangle's code marks as the quad
    diagonal is skipped. Meshes without codes are drawn with every edge.
    """
    try:
        from PIL import Image, ImageDraw
    except Exception as exc:  # pragma: no cover - optional dependency
        raise ImportError("Pillow is required for render_wireframe()") from exc

    if width < 2 or height < 2:
        raise ValueError("width and height must be >= 2")
    if len(axes) != 2 or any(a not in (0, 1, 2) for a in axes) or axes[0] == axes[1]:
        raise ValueError("axes must be two distinct values from (0, 1, 2)")
    mesh.validate()

    img = Image.new("RGBA", (int(width), int(height)), tuple(background))
    if mesh.triangle_count == 0:
        return np.asarray(img, dtype=np.uint8).copy()

    xy = _project(mesh, axes, int(width), int(height), int(margin))
    tris = mesh.triangles()
    skip = np.full(tris.shape[0], -1, dtype=np.int8)
    if hide_diagonals and mesh.colors is not None and is_unshared(mesh):
        try:
            skip = decode_diagonal_edges(mesh.colors)
        except ValueError:
            logger.debug("mesh colors are not quad codes; drawing every edge")
    elif hide_diagonals:
        logger.debug("mesh has no quad codes; drawing every edge")

    draw = ImageDraw.Draw(img)
    for tri, hidden in zip(tris.tolist(), skip.tolist()):
        for edge in range(3):
            if edge == hidden:
                continue
            a = xy[tri[edge]]
            b = xy[tri[(edge + 1) % 3]]
            draw.line([(float(a[0]), float(a[1])), (float(b[0]), float(b[1]))], fill=tuple(line_color), width=1)
    return np.asarray(img, dtype=np.uint8).copy()


def save_wireframe_png(path: Union[str, "os.PathLike[str]"], mesh: QuadMesh, **kwargs) -> None:
    """Render with :func:`render_wireframe` and write a PNG."""
    try:
        from PIL import Image
    except Exception as exc:  # pragma: no cover - optional dependency
        raise ImportError("Pillow is required for save_wireframe_png()") from exc

    rgba = render_wireframe(mesh, **kwargs)
    Image.fromarray(rgba).save(path, format="PNG", optimize=False, compress_level=6)
