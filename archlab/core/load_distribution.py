from __future__ import annotations

from typing import Dict, Iterable

from archlab.core.graph.model import NodeType, ServerNode

# Share of end-to-end traffic each tier absorbs, relative to an app server.
LOAD_WEIGHTS: Dict[NodeType, float] = {
    NodeType.LB: 1.2,
    NodeType.GATEWAY: 1.3,
    NodeType.APP: 1.0,
    NodeType.MICRO: 0.8,
    NodeType.DB: 0.6,
    NodeType.CACHE: 0.4,
    NodeType.MQ: 0.7,
    NodeType.CDN: 0.3,
    NodeType.ASG: 1.1,
    NodeType.DR: 0.2,
}
DEFAULT_WEIGHT = 1.0


def load_weight(node_type: NodeType) -> float:
    return LOAD_WEIGHTS.get(node_type, DEFAULT_WEIGHT)


def distribute_load(nodes: Iterable[ServerNode], target_throughput: float) -> Dict[str, float]:
    nodes = list(nodes)
    total_weight = sum(load_weight(node.type) for node in nodes)
    if not nodes or total_weight <= 0:
        return {}
    return {node.id: target_throughput * load_weight(node.type) / total_weight for node in nodes}
