# python/quadwire/config.py
# Rebuild configuration parsing and validation
# Exists so hosts can tune threading and color output from kwargs, mappings, or JSON files
# RELEVANT FILES: python/quadwire/builder.py, python/quadwire/encode.py, tests/test_config.py
from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional, Tuple, Union

from .encode import DEFAULT_SHARD_SIZE

ConfigSource = Union["BuildConfig", Mapping[str, Any], str, Path, None]

_COLOR_FORMATS: Dict[str, str] = {
    "float": "float",
    "float32": "float",
    "f32": "float",
    "rgb": "float",
    "color32": "color32",
    "rgba8": "color32",
    "byte": "color32",
    "u8": "color32",
    "uint8": "color32",
}

_KNOWN_KEYS = {"workers", "shard_size", "color_format", "color32_scale"}


def _normalize_key(value: Any) -> str:
    return "".join(
        c
        for c in str(value).strip().lower()
        if c not in {"-", "_", " ", "."}
    )


def _normalize_choice(value: Any, mapping: Mapping[str, str], label: str) -> str:
    key = _normalize_key(value)
    if key not in mapping:
        raise ValueError(f"Unknown {label}: {value!r}")
    return mapping[key]


@dataclass
class BuildConfig:
    workers: int = 1
    shard_size: int = DEFAULT_SHARD_SIZE
    color_format: str = "float"
    color32_scale: float = 1.0

    def to_dict(self) -> dict:
        return {
            "workers": self.workers,
            "shard_size": self.shard_size,
            "color_format": self.color_format,
            "color32_scale": self.color32_scale,
        }

    def copy(self) -> "BuildConfig":
        return copy.deepcopy(self)

    def validate(self) -> None:
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        if self.shard_size < 1:
            raise ValueError("shard_size must be >= 1")
        if self.color_format not in set(_COLOR_FORMATS.values()):
            raise ValueError(f"Unknown color format: {self.color_format!r}")
        if self.color32_scale <= 0.0:
            raise ValueError("color32_scale must be positive")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["BuildConfig"] = None) -> "BuildConfig":
        base = copy.deepcopy(default) if default is not None else cls()
        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            raise ValueError(f"Unknown build config keys: {', '.join(sorted(map(str, unknown)))}")
        if "workers" in data:
            base.workers = int(data["workers"])
        if "shard_size" in data:
            base.shard_size = int(data["shard_size"])
        if "color_format" in data:
            base.color_format = _normalize_choice(data["color_format"], _COLOR_FORMATS, "color format")
        if "color32_scale" in data:
            base.color32_scale = float(data["color32_scale"])
        return base


def _load_from_path(path: Path) -> Mapping[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in {".json", ""}:
        data = json.loads(text)
        if not isinstance(data, Mapping):
            raise TypeError(f"build config file must hold a JSON object: {path}")
        return data
    raise ValueError(f"Unsupported build config file format: {path}")


def load_build_config(config: ConfigSource = None, overrides: Optional[Mapping[str, Any]] = None) -> BuildConfig:
    if isinstance(config, BuildConfig):
        cfg = config.copy()
    elif isinstance(config, Mapping):
        cfg = BuildConfig.from_mapping(config)
    elif isinstance(config, (str, Path)):
        cfg = BuildConfig.from_mapping(_load_from_path(Path(config)))
    elif config is None:
        cfg = BuildConfig()
    else:
        raise TypeError("config must be BuildConfig, mapping, path, or None")

    if overrides:
        cfg = BuildConfig.from_mapping(overrides, cfg)
    cfg.validate()
    return cfg


def split_build_overrides(kwargs: MutableMapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    overrides: Dict[str, Any] = {}
    remaining: Dict[str, Any] = {}
    for key, value in list(kwargs.items()):
        if key in _KNOWN_KEYS:
            overrides[key] = kwargs.pop(key)
        else:
            remaining[key] = value
    return overrides, remaining
