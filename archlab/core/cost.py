from __future__ import annotations

from typing import Dict

from archlab.core.graph.model import ArchitectureState, GraphIndex, Resources

# monthly USD per unit
RESOURCE_COSTS = {
    "cpu": 50.0,
    "cpuCores": 20.0,
    "memory": 5.0,
    "networkBandwidth": 0.1,
}


def resource_cost(resources: Resources) -> Dict[str, object]:
    breakdown = {
        "cpu": resources.cpu * RESOURCE_COSTS["cpu"],
        "cpuCores": resources.cpu_cores * RESOURCE_COSTS["cpuCores"],
        "memory": resources.memory * RESOURCE_COSTS["memory"],
        "networkBandwidth": resources.network_bandwidth * RESOURCE_COSTS["networkBandwidth"],
    }
    return {"breakdown": breakdown, "total": round(sum(breakdown.values()), 2)}


def architecture_cost(state: ArchitectureState) -> Dict[str, object]:
    index = GraphIndex(state)
    per_node = {node.id: resource_cost(node.resources)["total"] for node in index.server_nodes()}
    return {"nodes": per_node, "monthly": round(sum(per_node.values()), 2)}
