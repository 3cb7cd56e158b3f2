# tests/test_config.py
# Tests for rebuild configuration parsing and validation
# Exists to ensure mappings, JSON files, and keyword overrides resolve to the same BuildConfig
# RELEVANT FILES: python/quadwire/config.py, python/quadwire/builder.py, tests/test_builder.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from quadwire.config import BuildConfig, load_build_config, split_build_overrides


def test_defaults() -> None:
    cfg = load_build_config()
    assert cfg == BuildConfig()
    assert cfg.workers == 1
    assert cfg.color_format == "float"
    assert cfg.to_dict()["color32_scale"] == pytest.approx(1.0)


@pytest.mark.parametrize(
    "value, expected",
    [("float", "float"), ("F32", "float"), ("rgb", "float"), ("color32", "color32"), ("RGBA-8", "color32"), ("u8", "color32")],
)
def test_color_format_aliases(value, expected) -> None:
    assert load_build_config({"color_format": value}).color_format == expected


def test_json_path(tmp_path: Path) -> None:
    path = tmp_path / "build.json"
    path.write_text(json.dumps({"workers": 3, "shard_size": 128}), encoding="utf-8")
    cfg = load_build_config(str(path))
    assert cfg.workers == 3
    assert cfg.shard_size == 128


def test_overrides_apply_on_top_of_config() -> None:
    base = BuildConfig(workers=2)
    cfg = load_build_config(base, {"color_format": "color32"})
    assert cfg.workers == 2
    assert cfg.color_format == "color32"
    assert base.color_format == "float"


@pytest.mark.parametrize(
    "data",
    [{"workers": 0}, {"shard_size": 0}, {"color32_scale": 0.0}, {"color_format": "hsv"}, {"threads": 2}],
)
def test_invalid_values_rejected(data) -> None:
    with pytest.raises(ValueError):
        load_build_config(data)


def test_bad_sources_rejected(tmp_path: Path) -> None:
    with pytest.raises(TypeError):
        load_build_config(42)
    yaml_path = tmp_path / "build.yaml"
    yaml_path.write_text("workers: 2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported"):
        load_build_config(yaml_path)
    list_path = tmp_path / "list.json"
    list_path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(TypeError):
        load_build_config(list_path)


def test_split_build_overrides() -> None:
    kwargs = {"workers": 4, "title": "demo"}
    overrides, remaining = split_build_overrides(kwargs)
    assert overrides == {"workers": 4}
    assert remaining == {"title": "demo"}
    assert kwargs == {"title": "demo"}
