from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Tuple

from archlab.config import Config
from archlab.core.graph.model import (
    ArchitectureState,
    Connection,
    GraphIndex,
    GraphLike,
    Resources,
    SimulationMetrics,
    coerce_state,
)
from archlab.core.load_distribution import distribute_load

logger = logging.getLogger(__name__)


def node_capacity(resources: Resources) -> float:
    # realized throughput is bounded by the scarcest resource
    cpu_throughput = resources.cpu * resources.cpu_cores * Config.CPU_OPS_PER_GHZ_CORE
    memory_throughput = resources.memory * Config.MEMORY_OPS_PER_GB
    network_throughput = resources.network_bandwidth * Config.NETWORK_OPS_PER_MBPS
    return max(0.0, min(cpu_throughput, memory_throughput, network_throughput))


def connection_capacity(connection: Connection) -> float:
    return max(0.0, connection.bandwidth * Config.EDGE_OPS_PER_MBPS)


def load_percentage(load: float, capacity: float) -> float:
    if capacity > 0:
        return load / capacity * 100
    return float("inf") if load > 0 else 0.0


def _degenerate(state: ArchitectureState, index: GraphIndex) -> Tuple[ArchitectureState, SimulationMetrics]:
    nodes = [
        replace(node, current_load=0.0, max_throughput=node_capacity(node.resources), is_healthy=True)
        if not index.is_user(node.id)
        else node
        for node in state.nodes
    ]
    connections = [replace(conn, current_load=0.0) for conn in state.connections]
    metrics = SimulationMetrics(
        total_throughput=0.0,
        system_health=100.0,
        bottleneck_nodes=[],
        max_achievable_throughput=0.0,
        latency=0.0,
        reliability=100.0,
    )
    return replace(state, nodes=nodes, connections=connections, metrics=metrics), metrics


def simulate(graph: GraphLike, target_throughput: float) -> Tuple[ArchitectureState, SimulationMetrics]:
    """Estimate per-node and per-connection load for ``target_throughput`` ops/sec.

    Returns an annotated copy of the graph and the aggregate metrics. Nodes
    receive a type-weighted share of the load, connections an even share.
    A node or connection whose unclamped load exceeds 100% is a bottleneck and
    costs ``(load% - 100) / count`` points of system health.
    """
    state = coerce_state(graph)
    index = GraphIndex(state)
    servers = index.server_nodes()
    connections = index.connections()
    target = max(0.0, float(target_throughput or 0))

    if not servers or not connections:
        logger.debug("Nothing to simulate: %d nodes, %d connections", len(servers), len(connections))
        return _degenerate(state, index)

    distribution = distribute_load(servers, target)
    system_health = 100.0
    bottlenecks: List[str] = []
    capacities: List[float] = []

    annotated_nodes = {}
    for node in servers:
        capacity = node_capacity(node.resources)
        percentage = load_percentage(distribution.get(node.id, 0.0), capacity)
        capacities.append(capacity)
        if percentage > 100:
            bottlenecks.append(node.id)
            system_health -= (percentage - 100) / len(servers)
        annotated_nodes[node.id] = replace(
            node,
            current_load=min(percentage, 100.0),
            max_throughput=capacity,
            is_healthy=percentage <= 100,
        )

    connection_load = target / len(connections)
    # keyed by object identity, connection ids supplied by the caller may repeat
    annotated_connections: Dict[int, Connection] = {}
    for conn in connections:
        capacity = connection_capacity(conn)
        percentage = load_percentage(connection_load, capacity)
        capacities.append(capacity)
        if percentage > 100:
            bottlenecks.append(conn.id)
            system_health -= (percentage - 100) / len(connections)
        annotated_connections[id(conn)] = replace(conn, current_load=min(percentage, 100.0))

    system_health = max(0.0, system_health)
    if bottlenecks:
        logger.debug("Bottlenecks at %s ops/sec: %s", target, ", ".join(bottlenecks))

    metrics = SimulationMetrics(
        total_throughput=target,
        system_health=system_health,
        bottleneck_nodes=bottlenecks,
        max_achievable_throughput=min(capacities),
        latency=Config.DEFAULT_LATENCY_MS,
        reliability=system_health,
    )
    # duplicate nodes and dropped connections are returned untouched
    kept = index.nodes_by_id()
    nodes = [annotated_nodes.get(node.id, node) if kept.get(node.id) is node else node for node in state.nodes]
    annotated = replace(
        state,
        nodes=nodes,
        connections=[annotated_connections.get(id(conn), conn) for conn in state.connections],
        metrics=metrics,
    )
    return annotated, metrics
