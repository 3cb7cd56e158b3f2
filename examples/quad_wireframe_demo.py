# examples/quad_wireframe_demo.py
# Rebuilds quad data for a mesh and writes the encoded OBJ plus a wireframe preview
# Exists to show unsharing growth, the diagonal histogram, and the hidden-diagonal wireframe
# RELEVANT FILES: python/quadwire/builder.py, python/quadwire/preview.py, python/quadwire/io.py

from __future__ import annotations

import argparse
import logging
from pathlib import Path as _Path

from _import_shim import ensure_repo_import

ensure_repo_import()

import quadwire  # noqa: E402
from quadwire.io import load_obj, save_obj  # noqa: E402
from quadwire.preview import save_wireframe_png  # noqa: E402
from quadwire.primitives import cube, quad_grid  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Encode quad-coordinate colors and preview the wireframe")
    parser.add_argument("--obj", type=_Path, default=None, help="OBJ file to load instead of a generated grid")
    parser.add_argument("--shape", choices=["grid", "cube"], default="grid", help="Generated mesh when --obj is absent")
    parser.add_argument("--cells", type=int, default=6, help="Grid cells per side")
    parser.add_argument("--config", type=_Path, default=None, help="JSON build config")
    parser.add_argument("--workers", type=int, default=None, help="Encoder threads")
    parser.add_argument("--out-dir", type=_Path, default=_Path("quadwire_out"), help="Output directory")
    parser.add_argument("--size", type=int, default=512, help="Preview size in pixels")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.obj is not None:
        mesh = load_obj(args.obj)
    elif args.shape == "cube":
        mesh = cube()
    else:
        mesh = quad_grid(args.cells, args.cells)

    overrides = {}
    if args.workers is not None:
        overrides["workers"] = args.workers
    mesh, report = quadwire.rebuild_with_report(mesh, args.config, **overrides)

    print("quadwire demo")
    print(f"vertices: {report.vertices_before} -> {report.vertices_after}")
    print(f"triangles: {report.triangle_count} in {report.submesh_count} submesh(es)")
    print(f"diagonal edge histogram (e0, e1, e2): {report.edge_histogram}")

    args.out_dir.mkdir(parents=True, exist_ok=True)
    obj_path = args.out_dir / "encoded.obj"
    png_path = args.out_dir / "wireframe.png"
    save_obj(mesh, obj_path)
    axes = (0, 2) if args.shape == "cube" and args.obj is None else (0, 1)
    save_wireframe_png(png_path, mesh, width=args.size, height=args.size, axes=axes)
    print(f"saved {obj_path.resolve()}")
    print(f"saved {png_path.resolve()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
