from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from archlab.core.graph.model import NodeType, Resources, ServerNode


@dataclass(frozen=True)
class ServerPreset:
    name: str
    type: NodeType
    resources: Resources
    description: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "type": self.type.value,
            "resources": self.resources.to_dict(),
            "description": self.description,
        }


SERVER_PRESETS: List[ServerPreset] = [
    ServerPreset("Load Balancer", NodeType.LB, Resources(2.4, 4, 16, 5000), "High network throughput for traffic distribution"),
    ServerPreset("API Gateway", NodeType.GATEWAY, Resources(2.8, 6, 24, 4000), "Optimized for request routing and API management"),
    ServerPreset("Application Server", NodeType.APP, Resources(3.2, 8, 32, 2000), "Balanced configuration for application workloads"),
    ServerPreset("Microservice", NodeType.MICRO, Resources(2.4, 4, 16, 2000), "Lightweight configuration for microservices"),
    ServerPreset("Cache Server", NodeType.CACHE, Resources(2.4, 4, 32, 3000), "High memory for caching operations"),
    ServerPreset("Message Queue", NodeType.MQ, Resources(2.8, 6, 24, 3000), "Optimized for message processing and queuing"),
    ServerPreset("Database Server", NodeType.DB, Resources(4.0, 8, 64, 2000), "High performance for database operations"),
    ServerPreset("CDN Edge", NodeType.CDN, Resources(2.4, 4, 16, 5000), "High bandwidth for content delivery"),
    ServerPreset("Auto Scaling Group", NodeType.ASG, Resources(2.8, 6, 24, 2000), "Scalable configuration for dynamic workloads"),
    ServerPreset("Backup Server", NodeType.DR, Resources(2.4, 4, 32, 2000), "Optimized for data backup and recovery"),
    ServerPreset("Entry Point", NodeType.ENTRY, Resources(2.4, 4, 16, 1000), "Ingress node receiving external traffic"),
]

_PRESETS_BY_TYPE = {preset.type: preset for preset in SERVER_PRESETS}

NO_RESOURCES = Resources(0, 0, 0, 0)


def preset_for(node_type: NodeType) -> Optional[ServerPreset]:
    return _PRESETS_BY_TYPE.get(node_type)


def default_resources(node_type: NodeType) -> Resources:
    preset = _PRESETS_BY_TYPE.get(node_type)
    return preset.resources if preset else NO_RESOURCES


def list_presets() -> List[Dict[str, object]]:
    return [preset.to_dict() for preset in SERVER_PRESETS]


def make_node(node_id: str, node_type: NodeType, **resource_overrides: float) -> ServerNode:
    """Build a node from its type preset, e.g. ``make_node("db1", NodeType.DB, memory=128)``."""
    preset = _PRESETS_BY_TYPE.get(node_type)
    resources = replace(default_resources(node_type), **resource_overrides)
    return ServerNode(
        id=node_id,
        type=node_type,
        resources=resources,
        name=preset.name if preset else node_type.value,
    )
