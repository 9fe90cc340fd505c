from __future__ import annotations

import json
from pathlib import Path
from typing import List

from .models import ArchitectureTemplate, Level


class CatalogLoadError(RuntimeError):
    pass


def _read_json(path: Path) -> object:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogLoadError(f"Unable to load catalog file: {path.name}") from exc


def load_template(path: Path) -> ArchitectureTemplate:
    data = _read_json(path)
    if not isinstance(data, dict):
        raise CatalogLoadError(f"Template {path.name} must contain a JSON object.")

    if "id" not in data:
        data = dict(data)
        data["id"] = path.stem

    try:
        return ArchitectureTemplate.from_dict(data)
    except ValueError as exc:
        raise CatalogLoadError(f"Template {path.name} is invalid: {exc}") from exc


def load_levels(path: Path) -> List[Level]:
    data = _read_json(path)
    if not isinstance(data, dict) or not isinstance(data.get("levels"), list):
        raise CatalogLoadError(f"{path.name} must contain a levels list.")

    try:
        levels = [Level.from_dict(item) for item in data["levels"]]
    except (ValueError, TypeError) as exc:
        raise CatalogLoadError(f"{path.name} is invalid: {exc}") from exc

    level_ids = [level.id for level in levels]
    if len(set(level_ids)) != len(level_ids):
        raise CatalogLoadError("Level ids must be unique.")
    return sorted(levels, key=lambda level: level.id)
