from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from deblurkit.taper.edge import TaperConfig


def _parse_csv_value(raw: str) -> Any:
    text = raw.strip()
    if text == "":
        return ""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _load_csv(path: Path) -> dict[str, Any]:
    data: dict[str, Any] = {}
    with path.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle)
        for row in reader:
            if not row:
                continue
            key = row[0].strip()
            if not key:
                continue
            if key.lower() in {"key", "name"} and len(row) > 1:
                if row[1].strip().lower() in {"value", "val"}:
                    continue
            if len(row) < 2:
                data[key] = ""
                continue
            data[key] = _parse_csv_value(row[1])
    return data


def _save_csv(path: Path, data: dict[str, Any]) -> None:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(["key", "value"])
        for key in sorted(data):
            writer.writerow([key, json.dumps(data[key], ensure_ascii=True)])


def load_settings(path: Path) -> dict[str, Any]:
    """Read a JSON object or a two-column ``key,value`` CSV file."""
    if not path.exists():
        raise SystemExit(f"Settings file not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return _load_csv(path)

    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if isinstance(data, dict):
        return data
    raise SystemExit(f"Settings file must be a JSON object: {path}")


def select_settings(data: dict[str, Any], section: str | None) -> dict[str, Any]:
    """
    Pick the settings of one section.

    A file may be flat (``{"guide_ksize": 21}``) or sectioned
    (``{"taper": {...}}``); ``default`` is used when the section is missing.
    """
    if not isinstance(data, dict):
        return {}

    if section and section in data and isinstance(data[section], dict):
        return dict(data[section])

    if "default" in data and isinstance(data["default"], dict):
        return dict(data["default"])

    if all(not isinstance(v, dict) for v in data.values()):
        return dict(data)

    return {}


def save_settings(path: Path, settings: dict[str, Any], *, section: str | None = None) -> None:
    suffix = path.suffix.lower()
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        _save_csv(path, settings)
        return

    data: dict[str, Any] = {}
    if section and path.exists():
        try:
            data = load_settings(path)
        except SystemExit:
            data = {}
        if data and all(not isinstance(v, dict) for v in data.values()):
            data = {"default": data}

    if section:
        data[section] = settings
    else:
        data = settings

    with path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2, sort_keys=True, ensure_ascii=True)
        handle.write("\n")


def load_taper_config(path: Path | None) -> TaperConfig:
    """`TaperConfig` from the ``taper`` section of a settings file, or defaults."""
    if path is None:
        return TaperConfig()
    settings = select_settings(load_settings(path), "taper")
    return TaperConfig.from_mapping(settings)
