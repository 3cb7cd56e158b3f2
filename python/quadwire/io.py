# python/quadwire/io.py
# Wavefront OBJ import/export for QuadMesh
# Exists so hosts can marshal files into the rebuild pipeline and inspect the encoded colors
# RELEVANT FILES: python/quadwire/mesh.py, python/quadwire/builder.py, tests/test_io_obj.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import numpy as np

from .mesh import QuadMesh, SubMesh

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_GROUP_TAGS = {"g", "o", "usemtl"}


def _resolve(token: str, count: int, label: str, where: str) -> int:
    try:
        i = int(token)
    except ValueError as e:
        raise ValueError(f"{where}: invalid {label} index {token!r}") from e
    if i > 0:
        i -= 1
    elif i < 0:
        i += count
    else:
        raise ValueError(f"{where}: {label} index 0 is not valid in OBJ")
    if not 0 <= i < count:
        raise ValueError(f"{where}: {label} index {token} out of range ({count} defined)")
    return i


def load_obj(path: PathLike) -> QuadMesh:
    """Load a Wavefront OBJ file into a QuadMesh.

    Notes
    -----
    - Polygons are fan-triangulated, so a quad ``a b c d`` becomes
      ``a b c`` and ``a c d``.
    - Every ``g``/``o``/``usemtl`` statement that is followed by faces opens a
      new submesh named after it.
    - ``v x y z r g b`` vertex colors are read into ``colors`` when every
      vertex carries them.
    - One output vertex is created per distinct ``v/vt/vn`` token.
    """
    p = Path(path)
    positions: List[Tuple[float, float, float]] = []
    vcolors: List[Optional[Tuple[float, float, float]]] = []
    texcoords: List[Tuple[float, float]] = []
    normals: List[Tuple[float, float, float]] = []

    keys: Dict[Tuple[int, int, int], int] = {}
    key_list: List[Tuple[int, int, int]] = []
    indices: List[int] = []
    groups: List[Tuple[Optional[str], int]] = [(None, 0)]

    with p.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            where = f"{p}:{lineno}"
            tag, *rest = line.split()
            try:
                if tag == "v":
                    if len(rest) not in (3, 4, 6, 7):
                        raise ValueError(f"{where}: expected 3 or 6 values for 'v'")
                    positions.append((float(rest[0]), float(rest[1]), float(rest[2])))
                    if len(rest) >= 6:
                        rgb = rest[3:6] if len(rest) == 6 else rest[4:7]
                        vcolors.append((float(rgb[0]), float(rgb[1]), float(rgb[2])))
                    else:
                        vcolors.append(None)
                elif tag == "vt":
                    if len(rest) < 2:
                        raise ValueError(f"{where}: expected at least 2 values for 'vt'")
                    texcoords.append((float(rest[0]), float(rest[1])))
                elif tag == "vn":
                    if len(rest) != 3:
                        raise ValueError(f"{where}: expected 3 values for 'vn'")
                    normals.append((float(rest[0]), float(rest[1]), float(rest[2])))
                elif tag in _GROUP_TAGS:
                    name = " ".join(rest) if rest else None
                    if len(indices) == groups[-1][1]:
                        groups[-1] = (name, len(indices))
                    else:
                        groups.append((name, len(indices)))
                elif tag == "f":
                    if len(rest) < 3:
                        raise ValueError(f"{where}: face needs at least 3 vertices")
                    corners = []
                    for token in rest:
                        parts = token.split("/")
                        vi = _resolve(parts[0], len(positions), "vertex", where)
                        ti = -1
                        ni = -1
                        if len(parts) > 1 and parts[1]:
                            ti = _resolve(parts[1], len(texcoords), "texcoord", where)
                        if len(parts) > 2 and parts[2]:
                            ni = _resolve(parts[2], len(normals), "normal", where)
                        key = (vi, ti, ni)
                        slot = keys.get(key)
                        if slot is None:
                            slot = len(key_list)
                            keys[key] = slot
                            key_list.append(key)
                        corners.append(slot)
                    for k in range(1, len(corners) - 1):
                        indices.extend((corners[0], corners[k], corners[k + 1]))
            except ValueError as e:
                if str(e).startswith(where):
                    raise
                raise ValueError(f"{where}: {e}") from e

    if not key_list:
        raise ValueError(f"{p}: no faces found")

    submeshes: List[SubMesh] = []
    bounds = [start for _, start in groups] + [len(indices)]
    for (name, start), stop in zip(groups, bounds[1:]):
        if stop > start:
            submeshes.append(SubMesh(start, stop - start, name))

    pos = np.array([positions[k[0]] for k in key_list], dtype=np.float32)
    uvs = None
    if all(k[1] >= 0 for k in key_list):
        uvs = np.array([texcoords[k[1]] for k in key_list], dtype=np.float32)
    nrm = None
    if all(k[2] >= 0 for k in key_list):
        nrm = np.array([normals[k[2]] for k in key_list], dtype=np.float32)
    colors = None
    if vcolors and all(c is not None for c in vcolors):
        colors = np.array([vcolors[k[0]] for k in key_list], dtype=np.float32)

    mesh = QuadMesh(
        positions=pos,
        indices=np.asarray(indices, dtype=np.uint32),
        submeshes=submeshes,
        colors=colors,
        normals=nrm,
        uvs=uvs,
    )
    logger.debug("loaded %s: %d vertices, %d triangles, %d submesh(es)", p, mesh.vertex_count, mesh.triangle_count, mesh.submesh_count)
    return mesh


def save_obj(mesh: QuadMesh, path: PathLike) -> None:
    """Write ``mesh`` as a triangle-list OBJ file.

    Vertex colors are appended to ``v`` records when ``mesh.colors`` is set.
    Each submesh is emitted as a ``g`` group, named ``submesh_<i>`` when it
    has no name of its own.
    """
    mesh.validate()
    p = Path(path)
    lines: List[str] = ["# quadwire OBJ export"]
    if mesh.colors is not None:
        for v, c in zip(mesh.positions, mesh.colors):
            lines.append(f"v {v[0]:.6g} {v[1]:.6g} {v[2]:.6g} {c[0]:.6g} {c[1]:.6g} {c[2]:.6g}")
    else:
        for v in mesh.positions:
            lines.append(f"v {v[0]:.6g} {v[1]:.6g} {v[2]:.6g}")
    if mesh.uvs is not None:
        for t in mesh.uvs:
            lines.append(f"vt {t[0]:.6g} {t[1]:.6g}")
    if mesh.normals is not None:
        for n in mesh.normals:
            lines.append(f"vn {n[0]:.6g} {n[1]:.6g} {n[2]:.6g}")

    has_uv = mesh.uvs is not None
    has_n = mesh.normals is not None

    def corner(i: int) -> str:
        i += 1
        if has_uv and has_n:
            return f"{i}/{i}/{i}"
        if has_uv:
            return f"{i}/{i}"
        if has_n:
            return f"{i}//{i}"
        return str(i)

    for s, sm in enumerate(mesh.submeshes):
        lines.append(f"g {sm.name or f'submesh_{s}'}")
        for a, b, c in mesh.submesh_indices(s).reshape(-1, 3).tolist():
            lines.append(f"f {corner(a)} {corner(b)} {corner(c)}")

    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.debug("wrote %s: %d vertices, %d triangles", p, mesh.vertex_count, mesh.triangle_count)
