from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, List

from archlab.core.cost import architecture_cost
from archlab.core.graph.model import ArchitectureState, GraphIndex, SimulationMetrics

from .models import Achievement, Level, NodeRequirement
from .registry import CatalogRegistry


@lru_cache(maxsize=1)
def default_registry() -> CatalogRegistry:
    presets_dir = Path(__file__).resolve().parents[2] / "presets"
    return CatalogRegistry(presets_dir=presets_dir)


def get_available_templates() -> List[Dict[str, object]]:
    return [template.summary() for template in default_registry().list_templates()]


def load_template(template_id: str) -> Dict[str, object]:
    return default_registry().get_template(template_id).to_dict()


def get_levels() -> List[Dict[str, object]]:
    return [level.to_dict() for level in default_registry().list_levels()]


def _requirement_met(requirement: NodeRequirement, index: GraphIndex) -> bool:
    return index.count_by_type(requirement.type) >= requirement.min_count


def _achievement_unlocked(
    achievement: Achievement, efficiency: float, metrics: SimulationMetrics, index: GraphIndex
) -> bool:
    return (
        efficiency >= achievement.min_efficiency
        and metrics.latency <= achievement.max_latency
        and metrics.reliability >= achievement.min_reliability
        and all(index.count_by_type(node_type) for node_type in achievement.pattern)
    )


def evaluate_level(level: Level, state: ArchitectureState, metrics: SimulationMetrics) -> Dict[str, object]:
    """Score a simulated architecture against a level's goals.

    Throughput counts only up to the architecture's ceiling, so a target the
    graph cannot carry does not complete a level.
    """
    index = GraphIndex(state)
    throughput = min(metrics.total_throughput, metrics.max_achievable_throughput)
    cost = architecture_cost(state)["monthly"]
    efficiency = throughput / cost if cost > 0 else 0.0

    requirements = [
        dict(requirement.to_dict(), met=_requirement_met(requirement, index), count=index.count_by_type(requirement.type))
        for requirement in level.node_requirements
    ]
    unlocked = [
        achievement for achievement in level.achievements if _achievement_unlocked(achievement, efficiency, metrics, index)
    ]
    throughput_met = throughput >= level.min_throughput
    cost_met = cost <= level.max_cost
    complete = throughput_met and cost_met and all(item["met"] for item in requirements)

    return {
        "levelId": level.id,
        "complete": complete,
        "throughput": throughput,
        "throughputProgress": round(min(throughput / level.min_throughput * 100, 100), 2) if level.min_throughput else 100.0,
        "throughputMet": throughput_met,
        "cost": cost,
        "costProgress": round(min(cost / level.max_cost * 100, 100), 2) if level.max_cost else 100.0,
        "costMet": cost_met,
        "efficiency": round(efficiency, 4),
        "nodeRequirements": requirements,
        "unlockedAchievements": [achievement.id for achievement in unlocked],
        "achievementPoints": {achievement.id: achievement.bonus_points for achievement in unlocked},
        "levelPoints": level.points if complete else 0,
        "points": (level.points if complete else 0) + sum(achievement.bonus_points for achievement in unlocked),
    }
