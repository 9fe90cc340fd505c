from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .loader import load_levels, load_template
from .models import ArchitectureTemplate, Level

logger = logging.getLogger(__name__)

TEMPLATE_ID_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")


@dataclass
class CatalogRegistry:
    presets_dir: Path
    _templates: Dict[str, ArchitectureTemplate] = field(default_factory=dict, init=False)
    _levels: Optional[List[Level]] = field(default=None, init=False)

    @property
    def templates_dir(self) -> Path:
        return self.presets_dir / "templates"

    def list_templates(self) -> List[ArchitectureTemplate]:
        return [self._load_template(path) for path in self._template_paths()]

    def get_template(self, template_id: str) -> ArchitectureTemplate:
        if not TEMPLATE_ID_PATTERN.fullmatch(template_id or ""):
            raise FileNotFoundError(f"Template {template_id} not found.")
        path = self.templates_dir / f"{template_id}.json"
        if not path.exists():
            raise FileNotFoundError(f"Template {template_id} not found.")
        return self._load_template(path)

    def list_levels(self) -> List[Level]:
        if self._levels is None:
            self._levels = load_levels(self.presets_dir / "levels.json")
            logger.debug("Loaded %d levels", len(self._levels))
        return self._levels

    def get_level(self, level_id: int) -> Level:
        for level in self.list_levels():
            if level.id == level_id:
                return level
        raise FileNotFoundError(f"Level {level_id} not found.")

    def _template_paths(self) -> Iterable[Path]:
        if not self.templates_dir.exists():
            return []
        return sorted(self.templates_dir.glob("*.json"))

    def _load_template(self, path: Path) -> ArchitectureTemplate:
        template_id = path.stem
        if template_id not in self._templates:
            self._templates[template_id] = load_template(path)
        return self._templates[template_id]
