# Ensure `import quadwire` works from a fresh clone by putting repo/python on sys.path.
import sys
from pathlib import Path

import numpy as np
import pytest


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _ensure_python_path():
    pkg_dir = _repo_root() / "python"
    if str(pkg_dir) not in sys.path:
        sys.path.insert(0, str(pkg_dir))


_ensure_python_path()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def two_submesh_mesh():
    """Three triangles sharing vertex 0: two in submesh 0, one in submesh 1.

    Submesh 0 holds the triangles (0, 1, 2) and (2, 1, 3); submesh 1 holds
    (0, 4, 5), whose longest edge is p2-p0 so its codes differ from both
    triangles of submesh 0.
    """
    from quadwire import QuadMesh, SubMesh

    positions = np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
            [1.0, 1.0, 0.0],
            [1.0, 0.5, 0.0],
            [2.0, 0.0, 0.0],
        ],
        dtype=np.float32,
    )
    indices = np.array([0, 1, 2, 2, 1, 3, 0, 4, 5], dtype=np.uint32)
    return QuadMesh(
        positions=positions,
        indices=indices,
        submeshes=[SubMesh(0, 6, "first"), SubMesh(6, 3, "second")],
    )
