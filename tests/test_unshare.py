# tests/test_unshare.py
# Vertex unsharing properties
# Exists to verify every corner gets its own slot and nothing else about the mesh moves
# RELEVANT FILES: python/quadwire/unshare.py, python/quadwire/mesh.py, tests/test_collect.py

import numpy as np

from quadwire import QuadMesh, SubMesh, is_unshared, unshare_vertices
from quadwire.primitives import cube, quad_grid


def test_unshared_vertex_matches_original_corner(rng) -> None:
    positions = rng.normal(size=(10, 3)).astype(np.float32)
    indices = rng.integers(0, 10, size=30).astype(np.uint32)
    mesh = QuadMesh(positions=positions.copy(), indices=indices.copy())

    unshare_vertices(mesh)

    assert mesh.vertex_count == 30
    for i in range(30):
        assert np.array_equal(mesh.positions[i], positions[indices[i]])


def test_index_buffer_becomes_identity() -> None:
    mesh = quad_grid(3, 2)
    unshare_vertices(mesh)
    assert np.array_equal(mesh.indices, np.arange(mesh.index_count, dtype=np.uint32))
    assert len(np.unique(mesh.indices)) == mesh.index_count


def test_attributes_follow_positions_and_colors_are_dropped() -> None:
    mesh = quad_grid(2, 2)
    mesh.colors = np.ones((mesh.vertex_count, 3), dtype=np.float32)
    src_indices = mesh.indices.copy()
    src_uvs = mesh.uvs.copy()
    src_normals = mesh.normals.copy()

    unshare_vertices(mesh)

    assert np.array_equal(mesh.uvs, src_uvs[src_indices])
    assert np.array_equal(mesh.normals, src_normals[src_indices])
    assert mesh.colors is None
    assert mesh.colors32 is None


def test_submesh_table_is_unchanged() -> None:
    mesh = cube()
    before = list(mesh.submeshes)
    tris_before = [mesh.positions[mesh.submesh_indices(i)].copy() for i in range(mesh.submesh_count)]

    unshare_vertices(mesh)

    assert mesh.submeshes == before
    for i in range(mesh.submesh_count):
        assert np.array_equal(mesh.positions[mesh.submesh_indices(i)], tris_before[i])


def test_is_unshared() -> None:
    mesh = QuadMesh(
        positions=np.zeros((4, 3)),
        indices=[0, 1, 2, 2, 1, 3],
        submeshes=[SubMesh(0, 6)],
    )
    assert not is_unshared(mesh)
    unshare_vertices(mesh)
    assert is_unshared(mesh)


def test_unshare_twice_is_stable() -> None:
    mesh = cube()
    unshare_vertices(mesh)
    once = mesh.positions.copy()
    unshare_vertices(mesh)
    assert np.array_equal(mesh.positions, once)
