# tests/test_preview.py
# Wireframe preview rasterization
# Exists to check encoded diagonals are skipped while quad outlines are kept
# RELEVANT FILES: python/quadwire/preview.py, python/quadwire/encode.py

from pathlib import Path

import numpy as np
import pytest

pytest.importorskip("PIL")

from quadwire import rebuild, unshare_vertices  # noqa: E402
from quadwire.preview import render_wireframe, save_wireframe_png  # noqa: E402
from quadwire.primitives import quad_grid  # noqa: E402

# 64x64 with margin 4 maps the unit square onto pixels 4..59; its (0,0)-(1,1)
# diagonal runs through (x=31, y=32).
DIAGONAL_PIXEL = (32, 31)
BOTTOM_EDGE_PIXEL = (59, 31)


def _render(mesh, **kwargs) -> np.ndarray:
    return render_wireframe(mesh, 64, 64, margin=4, **kwargs)


def test_encoded_diagonal_is_hidden() -> None:
    rgba = _render(rebuild(quad_grid(1, 1)))
    assert rgba.shape == (64, 64, 4)
    assert rgba.dtype == np.uint8
    assert rgba[DIAGONAL_PIXEL].tolist() == [0, 0, 0, 255]
    assert rgba[BOTTOM_EDGE_PIXEL].tolist() == [255, 255, 255, 255]


def test_diagonal_drawn_when_not_hidden() -> None:
    rgba = _render(rebuild(quad_grid(1, 1)), hide_diagonals=False)
    assert rgba[DIAGONAL_PIXEL].tolist() == [255, 255, 255, 255]


def test_mesh_without_codes_draws_every_edge() -> None:
    rgba = _render(quad_grid(1, 1))
    assert rgba[DIAGONAL_PIXEL].tolist() == [255, 255, 255, 255]


def test_plain_vertex_colors_draw_every_edge() -> None:
    mesh = unshare_vertices(quad_grid(1, 1))
    mesh.colors = np.full((mesh.vertex_count, 3), 0.5, dtype=np.float32)
    rgba = _render(mesh)
    assert rgba[DIAGONAL_PIXEL].tolist() == [255, 255, 255, 255]
    assert rgba[BOTTOM_EDGE_PIXEL].tolist() == [255, 255, 255, 255]


def test_save_png(tmp_path: Path) -> None:
    from PIL import Image

    path = tmp_path / "wire.png"
    save_wireframe_png(path, rebuild(quad_grid(2, 2)), width=32, height=24)
    with Image.open(path) as img:
        assert img.size == (32, 24)
        assert img.mode == "RGBA"


def test_invalid_arguments() -> None:
    mesh = quad_grid(1, 1)
    with pytest.raises(ValueError):
        render_wireframe(mesh, 1, 64)
    with pytest.raises(ValueError):
        render_wireframe(mesh, 64, 64, axes=(0, 0))
    with pytest.raises(ValueError):
        render_wireframe(mesh, 16, 16, margin=8)
