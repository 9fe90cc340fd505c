from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from archlab.api.schemas import parse_graph_request
from archlab.core import catalog
from archlab.core.catalog import CatalogLoadError
from archlab.core.graph.model import GraphFormatError
from archlab.core.presets import list_presets
from archlab.core.simulation_engine import simulate

logger = logging.getLogger(__name__)


class CatalogService:
    def list_server_presets(self) -> List[Dict[str, object]]:
        return list_presets()

    def list_templates(self) -> Tuple[Dict[str, object], int]:
        try:
            return {"templates": catalog.get_available_templates()}, 200
        except CatalogLoadError as exc:
            logger.error("Template catalog could not be loaded: %s", exc)
            return {"error": "Templates could not be loaded."}, 500

    def get_template(self, template_id: str) -> Tuple[Dict[str, object], int]:
        try:
            return catalog.load_template(template_id), 200
        except FileNotFoundError:
            return {"error": "Template not found."}, 404
        except CatalogLoadError as exc:
            logger.error("Template %s could not be loaded: %s", template_id, exc)
            return {"error": "Template could not be loaded."}, 500

    def list_levels(self) -> Tuple[Dict[str, object], int]:
        try:
            return {"levels": catalog.get_levels()}, 200
        except CatalogLoadError as exc:
            logger.error("Levels could not be loaded: %s", exc)
            return {"error": "Levels could not be loaded."}, 500

    def evaluate_level(self, level_id: int, payload: Dict[str, object]) -> Tuple[Dict[str, object], int]:
        try:
            level = catalog.default_registry().get_level(level_id)
        except FileNotFoundError:
            return {"error": "Level not found."}, 404
        except CatalogLoadError as exc:
            logger.error("Levels could not be loaded: %s", exc)
            return {"error": "Levels could not be loaded."}, 500

        try:
            request = parse_graph_request(payload)
        except (GraphFormatError, ValueError) as exc:
            return {"error": str(exc)}, 400

        state, metrics = simulate(request.state, request.target_throughput)
        return catalog.evaluate_level(level, state, metrics), 200
