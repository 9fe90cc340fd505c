from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from archlab.core.graph.model import ArchitectureState, NodeType, normalize_type

COMPLEXITIES = {"basic", "intermediate", "advanced"}
IMPACTS = {"high", "medium", "low"}


@dataclass(frozen=True)
class BestPractice:
    title: str
    description: str
    impact: str

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "BestPractice":
        title = str(data.get("title", "")).strip()
        description = str(data.get("description", "")).strip()
        impact = str(data.get("impact", "medium")).strip()
        if not title:
            raise ValueError("Best practice entries must include a title.")
        if impact not in IMPACTS:
            raise ValueError("Best practice impact must be high, medium, or low.")
        return cls(title=title, description=description, impact=impact)

    def to_dict(self) -> Dict[str, object]:
        return {"title": self.title, "description": self.description, "impact": self.impact}


@dataclass(frozen=True)
class ArchitectureTemplate:
    id: str
    name: str
    description: str
    recommended_throughput: float
    complexity: str
    category: str
    initial_state: ArchitectureState
    entry_point_id: str = ""
    best_practices: List[BestPractice] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "ArchitectureTemplate":
        required_fields = {"id", "name", "complexity", "initialState"}
        missing = sorted(required_fields - set(data))
        if missing:
            raise ValueError(f"Template is missing fields: {', '.join(missing)}.")

        complexity = str(data.get("complexity", "")).strip()
        if complexity not in COMPLEXITIES:
            raise ValueError("Template complexity must be basic, intermediate, or advanced.")
        initial_state = data.get("initialState")
        if not isinstance(initial_state, dict):
            raise ValueError("Template initialState must be an object.")

        return cls(
            id=str(data["id"]).strip(),
            name=str(data.get("name", "")).strip(),
            description=str(data.get("description", "")).strip(),
            recommended_throughput=float(data.get("recommendedThroughput", 0)),
            complexity=complexity,
            category=str(data.get("category", "")).strip(),
            initial_state=ArchitectureState.from_dict(initial_state),
            entry_point_id=str(data.get("entryPointId", "") or ""),
            best_practices=[BestPractice.from_dict(item) for item in data.get("bestPractices", []) or []],
        )

    def summary(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "complexity": self.complexity,
            "category": self.category,
            "recommendedThroughput": self.recommended_throughput,
        }

    def to_dict(self) -> Dict[str, object]:
        payload = self.summary()
        payload.update(
            {
                "entryPointId": self.entry_point_id or None,
                "bestPractices": [practice.to_dict() for practice in self.best_practices],
                "initialState": self.initial_state.to_dict(),
            }
        )
        return payload


@dataclass(frozen=True)
class NodeRequirement:
    type: NodeType
    min_count: int
    description: str

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "NodeRequirement":
        min_count = int(data.get("minCount", 1))
        if min_count < 1:
            raise ValueError("Node requirement minCount must be at least 1.")
        return cls(
            type=normalize_type(data.get("type")),
            min_count=min_count,
            description=str(data.get("description", "")).strip(),
        )

    def to_dict(self) -> Dict[str, object]:
        return {"type": self.type.value, "minCount": self.min_count, "description": self.description}


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    min_efficiency: float
    max_latency: float
    min_reliability: float
    pattern: List[NodeType]
    bonus_points: int

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Achievement":
        achievement_id = str(data.get("id", "")).strip()
        if not achievement_id:
            raise ValueError("Achievements must include an id.")
        requirements = data.get("requirements", {}) or {}
        return cls(
            id=achievement_id,
            name=str(data.get("name", "")).strip(),
            description=str(data.get("description", "")).strip(),
            min_efficiency=float(requirements.get("minEfficiency", 0)),
            max_latency=float(requirements.get("maxLatency", float("inf"))),
            min_reliability=float(requirements.get("minReliability", 0)),
            pattern=[normalize_type(item) for item in requirements.get("pattern", []) or []],
            bonus_points=int(data.get("bonusPoints", 0)),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "requirements": {
                "minEfficiency": self.min_efficiency,
                "maxLatency": self.max_latency,
                "minReliability": self.min_reliability,
                "pattern": [node_type.value for node_type in self.pattern],
            },
            "bonusPoints": self.bonus_points,
        }


@dataclass(frozen=True)
class Level:
    id: int
    name: str
    description: str
    min_throughput: float
    max_cost: float
    points: int
    rewards: List[str]
    node_requirements: List[NodeRequirement]
    achievements: List[Achievement]

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Level":
        if "id" not in data or "minThroughput" not in data or "maxCost" not in data:
            raise ValueError("Level must include id, minThroughput, and maxCost fields.")
        name = str(data.get("name", "")).strip()
        if not name:
            raise ValueError("Level name cannot be empty.")
        return cls(
            id=int(data["id"]),
            name=name,
            description=str(data.get("description", "")).strip(),
            min_throughput=float(data["minThroughput"]),
            max_cost=float(data["maxCost"]),
            points=int(data.get("points", 0)),
            rewards=[str(item) for item in data.get("rewards", []) or []],
            node_requirements=[NodeRequirement.from_dict(item) for item in data.get("nodeRequirements", []) or []],
            achievements=[Achievement.from_dict(item) for item in data.get("achievements", []) or []],
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "minThroughput": self.min_throughput,
            "maxCost": self.max_cost,
            "points": self.points,
            "rewards": self.rewards,
            "nodeRequirements": [req.to_dict() for req in self.node_requirements],
            "achievements": [achievement.to_dict() for achievement in self.achievements],
        }
