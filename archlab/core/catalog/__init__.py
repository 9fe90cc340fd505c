from .engine import (
    default_registry,
    evaluate_level,
    get_available_templates,
    get_levels,
    load_template,
)
from .loader import CatalogLoadError
from .models import Achievement, ArchitectureTemplate, Level, NodeRequirement
from .registry import CatalogRegistry

__all__ = [
    "Achievement",
    "ArchitectureTemplate",
    "CatalogLoadError",
    "CatalogRegistry",
    "Level",
    "NodeRequirement",
    "default_registry",
    "evaluate_level",
    "get_available_templates",
    "get_levels",
    "load_template",
]
