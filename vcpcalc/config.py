from __future__ import annotations

import json
import os
from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml

from .categories import INFLUENCE_DESCRIPTORS, PASSIVE_DESCRIPTORS
from .html_source import DEFAULT_MONTH_HEADER_CLASS, DEFAULT_TABLE_ID_TEMPLATE
from .report import DEFAULT_SERIES_LABELS

DEFAULT_CONFIG: dict[str, Any] = {
    "paths": {
        "export_dir": "./export",
    },
    "page": {
        "month_header_class": DEFAULT_MONTH_HEADER_CLASS,
        "table_id_template": DEFAULT_TABLE_ID_TEMPLATE,
        "encoding": "utf-8",
    },
    "categories": {
        "influence": list(INFLUENCE_DESCRIPTORS),
        "passive": list(PASSIVE_DESCRIPTORS),
    },
    "reports": {
        "charts_enabled": True,
        "chart_kind": "bar",
        "chart_title": "Movimenti mensili",
        "overlay_enabled": True,
        "series_labels": dict(DEFAULT_SERIES_LABELS),
    },
}


def expand_path(value: str | Path, base_dir: str | Path | None = None) -> Path:
    expanded = os.path.expandvars(os.path.expanduser(str(value)))
    path = Path(expanded)
    if path.is_absolute():
        return path
    if base_dir is None:
        return Path.cwd() / path
    return Path(base_dir) / path


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        return deepcopy(DEFAULT_CONFIG)

    text = config_path.read_text(encoding="utf-8", errors="ignore")
    try:
        loaded = json.loads(text)
    except json.JSONDecodeError:
        loaded = yaml.safe_load(text) or {}
    if not isinstance(loaded, dict):
        raise ValueError("config file must contain an object at root")
    return deep_merge(DEFAULT_CONFIG, loaded)


def save_config(config_path: Path, config: dict[str, Any]) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(yaml.safe_dump(config, allow_unicode=True, sort_keys=False), encoding="utf-8")
