from __future__ import annotations

import enum
import logging
from collections import defaultdict
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)

USER_NODE_ID = "user"


class GraphFormatError(ValueError):
    pass


class NodeType(str, enum.Enum):
    LB = "lb"
    GATEWAY = "gateway"
    APP = "app"
    MICRO = "micro"
    DB = "db"
    CACHE = "cache"
    MQ = "mq"
    CDN = "cdn"
    ASG = "asg"
    DR = "dr"
    USER = "user"
    ENTRY = "entry"


TYPE_ALIASES = {
    "loadbalancer": NodeType.LB,
    "load_balancer": NodeType.LB,
    "apigateway": NodeType.GATEWAY,
    "api_gateway": NodeType.GATEWAY,
    "server": NodeType.APP,
    "appserver": NodeType.APP,
    "app_server": NodeType.APP,
    "application": NodeType.APP,
    "microservice": NodeType.MICRO,
    "database": NodeType.DB,
    "redis": NodeType.CACHE,
    "queue": NodeType.MQ,
    "messagequeue": NodeType.MQ,
    "message_queue": NodeType.MQ,
    "autoscaling": NodeType.ASG,
    "autoscalinggroup": NodeType.ASG,
    "auto_scaling_group": NodeType.ASG,
    "backup": NodeType.DR,
    "disaster_recovery": NodeType.DR,
    "entrypoint": NodeType.ENTRY,
    "entry_point": NodeType.ENTRY,
}


def normalize_type(node_type: object) -> NodeType:
    if isinstance(node_type, NodeType):
        return node_type
    if not node_type:
        raise GraphFormatError("Each node must include a type.")
    key = str(node_type).strip().lower().replace(" ", "").replace("-", "_")
    if key in TYPE_ALIASES:
        return TYPE_ALIASES[key]
    try:
        return NodeType(key)
    except ValueError:
        raise GraphFormatError(f"Unknown node type: {node_type}.") from None


def _number(data: Dict[str, object], *keys: str, default: float = 0.0) -> float:
    for key in keys:
        if data.get(key) is not None:
            try:
                return float(data[key])
            except (TypeError, ValueError):
                raise GraphFormatError(f"Field {key} must be numeric.") from None
    return default


@dataclass(frozen=True)
class Resources:
    cpu: float
    cpu_cores: float
    memory: float
    network_bandwidth: float

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Resources":
        return cls(
            cpu=_number(data, "cpu"),
            cpu_cores=_number(data, "cpuCores", "cpu_cores"),
            memory=_number(data, "memory"),
            network_bandwidth=_number(data, "networkBandwidth", "network_bandwidth"),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "cpu": self.cpu,
            "cpuCores": self.cpu_cores,
            "memory": self.memory,
            "networkBandwidth": self.network_bandwidth,
        }


@dataclass(frozen=True)
class ServerNode:
    id: str
    type: NodeType
    resources: Resources
    current_load: float = 0.0
    max_throughput: float = 0.0
    is_healthy: bool = True
    name: str = ""

    @property
    def label(self) -> str:
        return f"{self.name or self.type.value} ({self.id})"

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "ServerNode":
        from archlab.core.presets import default_resources, preset_for

        node_id = str(data.get("id") or "").strip()
        if not node_id:
            raise GraphFormatError("Each node must include a non-empty id.")
        # editor nodes keep their payload under "data"
        payload = data.get("data") if isinstance(data.get("data"), dict) else data
        node_type = normalize_type(payload.get("type") or data.get("type"))
        resources = payload.get("resources")
        if isinstance(resources, dict):
            parsed = Resources.from_dict(resources)
        else:
            parsed = default_resources(node_type)
        name = str(payload.get("name") or payload.get("serverType") or "").strip()
        if not name:
            preset = preset_for(node_type)
            name = preset.name if preset else node_type.value
        return cls(
            id=node_id,
            type=node_type,
            resources=parsed,
            current_load=_number(payload, "currentLoad", "current_load"),
            max_throughput=_number(payload, "maxThroughput", "max_throughput"),
            is_healthy=bool(payload.get("isHealthy", payload.get("is_healthy", True))),
            name=name,
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "resources": self.resources.to_dict(),
            "currentLoad": self.current_load,
            "maxThroughput": self.max_throughput,
            "isHealthy": self.is_healthy,
        }


@dataclass(frozen=True)
class Connection:
    id: str
    source: str
    target: str
    bandwidth: float = 1000.0
    current_load: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Connection":
        source = str(data.get("source") or "").strip()
        target = str(data.get("target") or "").strip()
        if not source or not target:
            raise GraphFormatError("Each connection must include a source and a target.")
        conn_id = str(data.get("id") or f"{source}->{target}")
        return cls(
            id=conn_id,
            source=source,
            target=target,
            bandwidth=_number(data, "bandwidth", default=1000.0),
            current_load=_number(data, "currentLoad", "current_load"),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "bandwidth": self.bandwidth,
            "currentLoad": self.current_load,
        }


@dataclass(frozen=True)
class SimulationMetrics:
    total_throughput: float = 0.0
    system_health: float = 100.0
    bottleneck_nodes: List[str] = field(default_factory=list)
    max_achievable_throughput: float = 0.0
    latency: float = 0.0
    reliability: float = 100.0

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "SimulationMetrics":
        return cls(
            total_throughput=_number(data, "totalThroughput"),
            system_health=_number(data, "systemHealth", default=100.0),
            bottleneck_nodes=[str(item) for item in data.get("bottleneckNodes", []) or []],
            max_achievable_throughput=_number(data, "maxAchievableThroughput"),
            latency=_number(data, "latency"),
            reliability=_number(data, "reliability", default=100.0),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "totalThroughput": self.total_throughput,
            "systemHealth": self.system_health,
            "bottleneckNodes": list(self.bottleneck_nodes),
            "maxAchievableThroughput": self.max_achievable_throughput,
            "latency": self.latency,
            "reliability": self.reliability,
        }


@dataclass(frozen=True)
class ArchitectureState:
    nodes: List[ServerNode] = field(default_factory=list)
    connections: List[Connection] = field(default_factory=list)
    metrics: SimulationMetrics = field(default_factory=SimulationMetrics)

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "ArchitectureState":
        if not isinstance(data, dict):
            raise GraphFormatError("Graph must be an object.")
        nodes = data.get("nodes", []) or []
        connections = data.get("connections")
        if connections is None:
            connections = data.get("edges", []) or []
        if not isinstance(nodes, list) or not isinstance(connections, list):
            raise GraphFormatError("Graph nodes and connections must be lists.")
        metrics = data.get("metrics")
        return cls(
            nodes=[ServerNode.from_dict(node) for node in nodes],
            connections=_parse_connections(connections),
            metrics=SimulationMetrics.from_dict(metrics) if isinstance(metrics, dict) else SimulationMetrics(),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "connections": [conn.to_dict() for conn in self.connections],
            "metrics": self.metrics.to_dict(),
        }


def _parse_connections(items: List[object]) -> List[Connection]:
    # generated ids ("source->target") get a "#n" suffix when already taken
    taken = {str(item["id"]) for item in items if isinstance(item, dict) and item.get("id")}
    connections = []
    for item in items:
        if not isinstance(item, dict):
            raise GraphFormatError("Each connection must be an object.")
        conn = Connection.from_dict(item)
        if not item.get("id"):
            conn_id, suffix = conn.id, 1
            while conn_id in taken:
                suffix += 1
                conn_id = f"{conn.id}#{suffix}"
            conn = replace(conn, id=conn_id)
            taken.add(conn_id)
        connections.append(conn)
    return connections


GraphLike = Union[ArchitectureState, Dict[str, object]]


def coerce_state(graph: GraphLike) -> ArchitectureState:
    if isinstance(graph, ArchitectureState):
        return graph
    return ArchitectureState.from_dict(graph or {})


class GraphIndex:
    """Read-only lookups over one graph snapshot.

    Connections pointing at unknown node ids and self-loops are dropped here,
    so every consumer sees the same connectivity. The reserved ``user`` id is
    always a valid endpoint even when the host leaves the user node out.
    """

    def __init__(self, state: ArchitectureState) -> None:
        self.state = state
        self._nodes: Dict[str, ServerNode] = {}
        for node in state.nodes:
            if node.id in self._nodes:
                logger.debug("Ignoring duplicate node id %s", node.id)
                continue
            self._nodes[node.id] = node

        user_ids = [node.id for node in self._nodes.values() if node.type == NodeType.USER]
        self.user_id = user_ids[0] if user_ids else USER_NODE_ID
        known = set(self._nodes) | {self.user_id, USER_NODE_ID}

        self._connections: List[Connection] = []
        self._outgoing: Dict[str, List[Connection]] = defaultdict(list)
        self._incoming: Dict[str, List[Connection]] = defaultdict(list)
        for conn in state.connections:
            if conn.source not in known or conn.target not in known:
                logger.debug("Dropping connection %s with unknown endpoint", conn.id)
                continue
            if conn.source == conn.target:
                logger.debug("Dropping self-loop %s", conn.id)
                continue
            self._connections.append(conn)
            self._outgoing[conn.source].append(conn)
            self._incoming[conn.target].append(conn)

    def nodes_by_id(self) -> Dict[str, ServerNode]:
        return self._nodes

    def nodes(self) -> List[ServerNode]:
        return list(self._nodes.values())

    def server_nodes(self) -> List[ServerNode]:
        return [node for node in self._nodes.values() if not self.is_user(node.id)]

    def connections(self) -> List[Connection]:
        return list(self._connections)

    def edges_from(self, node_id: str) -> List[Connection]:
        return list(self._outgoing.get(node_id, []))

    def edges_to(self, node_id: str) -> List[Connection]:
        return list(self._incoming.get(node_id, []))

    def targets_of(self, node_id: str) -> List[ServerNode]:
        return [self._nodes[conn.target] for conn in self.edges_from(node_id) if conn.target in self._nodes]

    def count_by_type(self, *node_types: NodeType) -> int:
        return sum(1 for node in self._nodes.values() if node.type in node_types)

    def is_user(self, node_id: Optional[str]) -> bool:
        if node_id is None:
            return False
        if node_id in (self.user_id, USER_NODE_ID):
            return True
        node = self._nodes.get(node_id)
        return node is not None and node.type == NodeType.USER

    def find_first(self, node_type: NodeType) -> Optional[ServerNode]:
        return next((node for node in self._nodes.values() if node.type == node_type), None)

