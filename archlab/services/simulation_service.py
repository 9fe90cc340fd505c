from __future__ import annotations

import logging
from typing import Dict, Tuple

from archlab.api.schemas import parse_graph_request
from archlab.core.cost import architecture_cost
from archlab.core.graph.model import GraphFormatError
from archlab.core.graph.validator import validate
from archlab.core.recommendation_engine import generate_recommendations
from archlab.core.simulation_engine import simulate

logger = logging.getLogger(__name__)


class SimulationService:
    def validate_graph(self, payload: Dict[str, object]) -> Tuple[Dict[str, object], int]:
        try:
            request = parse_graph_request(payload)
            result = validate(request.state, request.entry_point_id, request.cycle_policy)
        except (GraphFormatError, ValueError) as exc:
            return {"error": str(exc)}, 400
        return result.to_dict(), 200

    def run_simulation(self, payload: Dict[str, object]) -> Tuple[Dict[str, object], int]:
        try:
            request = parse_graph_request(payload)
            validation = validate(request.state, request.entry_point_id, request.cycle_policy)
        except (GraphFormatError, ValueError) as exc:
            return {"error": str(exc)}, 400

        state, metrics = simulate(request.state, request.target_throughput)
        logger.info(
            "Simulated %d nodes at %s ops/sec: health %.1f, %d bottlenecks",
            len(state.nodes),
            request.target_throughput,
            metrics.system_health,
            len(metrics.bottleneck_nodes),
        )
        return {
            "validation": validation.to_dict(),
            "state": state.to_dict(),
            "metrics": metrics.to_dict(),
            "cost": architecture_cost(state),
            "recommendations": generate_recommendations(validation, metrics, state),
        }, 200
