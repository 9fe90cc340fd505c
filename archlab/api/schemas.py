from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from archlab.config import Config
from archlab.core.graph.model import ArchitectureState, GraphFormatError


@dataclass(frozen=True)
class GraphRequest:
    state: ArchitectureState
    entry_point_id: Optional[str]
    target_throughput: float
    cycle_policy: Optional[str]


def parse_graph_request(payload: Dict[str, object]) -> GraphRequest:
    if not isinstance(payload, dict):
        raise GraphFormatError("Request body must be a JSON object.")

    graph = payload.get("graph", {}) or {}
    state = ArchitectureState.from_dict(graph)

    entry_point_id = payload.get("entryPointId", payload.get("entry_point_id"))
    target = payload.get("targetThroughput", payload.get("target_throughput", Config.DEFAULT_TARGET_THROUGHPUT))
    try:
        target_throughput = float(target)
    except (TypeError, ValueError):
        raise GraphFormatError("targetThroughput must be numeric.") from None
    if target_throughput < 0:
        raise GraphFormatError("targetThroughput cannot be negative.")

    cycle_policy = payload.get("cyclePolicy", payload.get("cycle_policy"))
    return GraphRequest(
        state=state,
        entry_point_id=str(entry_point_id) if entry_point_id else None,
        target_throughput=target_throughput,
        cycle_policy=str(cycle_policy) if cycle_policy else None,
    )
