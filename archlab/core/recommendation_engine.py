from typing import List, Optional

from archlab.core.graph.model import ArchitectureState, SimulationMetrics
from archlab.core.graph.validator import ValidationResult


def generate_recommendations(
    validation: ValidationResult,
    metrics: Optional[SimulationMetrics] = None,
    state: Optional[ArchitectureState] = None,
) -> List[str]:
    recommendations: List[str] = []

    if validation.errors:
        recommendations.append("Resolve structural errors before treating the architecture as production-ready.")

    for warning in validation.warnings:
        lowered = warning.lower()
        if "cache" in lowered:
            recommendations.append("Add a cache tier in front of the database to absorb read load.")
        if "replication" in lowered or "redundancy" in lowered:
            recommendations.append("Add replicas to remove single points of failure.")
        if "cycles" in lowered:
            recommendations.append("Check that cyclic paths are intentional retry or feedback loops.")

    if metrics is not None:
        if metrics.total_throughput and metrics.max_achievable_throughput < metrics.total_throughput:
            recommendations.append(
                "Target throughput exceeds the weakest node or connection; scale the bottleneck resource."
            )
        if metrics.system_health < 100:
            recommendations.append("Reduce load on overloaded components or increase their resources.")

        nodes = {node.id: node for node in state.nodes} if state is not None else {}
        for bottleneck in metrics.bottleneck_nodes:
            node = nodes.get(bottleneck)
            if node is not None:
                recommendations.append(f"Scale {node.label}: add CPU, memory or network bandwidth.")
            else:
                recommendations.append(f"Increase bandwidth on connection {bottleneck}.")

    if not recommendations:
        recommendations.append("Architecture looks healthy for the current load profile.")

    return list(dict.fromkeys(recommendations))
