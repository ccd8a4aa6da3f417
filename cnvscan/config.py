"""Configuration loading utilities for cnvscan reports."""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any

from cnvscan.core.positions import normalize_chromosome
from cnvscan.core.types import HeatmapConfig, ScanConfig


def load_json_config(path: str | Path) -> dict[str, Any]:
    """Load and validate a report config from a JSON file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    if config_path.suffix.lower() != ".json":
        raise ValueError(
            f"Unsupported config format for '{config_path}'. Use a .json config file."
        )

    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(
            f"Invalid JSON in config '{config_path}' at line {exc.lineno}, "
            f"column {exc.colno}: {exc.msg}"
        ) from exc

    if not isinstance(data, dict):
        raise ValueError(
            f"Invalid config root in '{config_path}': expected JSON object, got {type(data).__name__}."
        )
    return data


def _chromosome_tuple(value: Any) -> tuple[str, ...]:
    if isinstance(value, (str, int)):
        value = [value]
    return tuple(normalize_chromosome(c) for c in value)


def _checked_keys(cls: type, params: dict[str, Any]) -> dict[str, Any]:
    allowed = {f.name for f in fields(cls)}
    unknown = sorted(set(params) - allowed)
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {', '.join(unknown)}")
    return dict(params)


def scan_config_from_dict(params: dict[str, Any]) -> ScanConfig:
    kw = _checked_keys(ScanConfig, params)
    if "window" in kw:
        kw["window"] = int(kw["window"])
    if "chromosomes" in kw:
        kw["chromosomes"] = _chromosome_tuple(kw["chromosomes"])
    for key in ("min_expr", "tick_offset"):
        if key in kw:
            kw[key] = float(kw[key])
    return ScanConfig(**kw)


def heatmap_config_from_dict(params: dict[str, Any]) -> HeatmapConfig:
    kw = _checked_keys(HeatmapConfig, params)
    if "window" in kw:
        kw["window"] = int(kw["window"])
    for key in ("chromosomes", "order_chromosomes"):
        if kw.get(key) is not None:
            kw[key] = _chromosome_tuple(kw[key])
    for key in ("exp_thresh", "thresh"):
        if key in kw:
            kw[key] = float(kw[key])
    if float(kw.get("thresh", 1.0)) <= 0.0:
        raise ValueError("thresh must be positive.")
    if "linear" in kw:
        kw["linear"] = bool(kw["linear"])
    return HeatmapConfig(**kw)
