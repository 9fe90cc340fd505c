from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from archlab.config import Config

from .cycles import has_cycle
from .model import GraphIndex, GraphLike, NodeType, ServerNode, coerce_state

logger = logging.getLogger(__name__)

CYCLE_POLICIES = ("warning", "error")
CYCLE_MESSAGE = "Architecture contains cycles"

COMPUTE_TYPES = (NodeType.APP, NodeType.MICRO)


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, object]:
        return {"isValid": self.is_valid, "errors": list(self.errors), "warnings": list(self.warnings)}


class _Context:
    def __init__(self, index: GraphIndex, entry_point: Optional[ServerNode], result: ValidationResult) -> None:
        self.index = index
        self.entry_point = entry_point
        self.result = result

    def error(self, message: str) -> None:
        self.result.errors.append(message)

    def warn(self, message: str) -> None:
        self.result.warnings.append(message)

    def replication(self, node_type: NodeType, message: str) -> None:
        if self.index.count_by_type(node_type) < 2:
            self.warn(message)

    def incoming(self, node: ServerNode) -> int:
        return len(self.index.edges_to(node.id))

    def outgoing(self, node: ServerNode) -> int:
        return len(self.index.edges_from(node.id))

    def count_targets(self, node: ServerNode, *node_types: NodeType) -> int:
        return len({target.id for target in self.index.targets_of(node.id) if target.type in node_types})


def _check_ingress(ctx: _Context, node: ServerNode) -> None:
    entry_id = ctx.entry_point.id if ctx.entry_point else None
    valid_sources = [
        conn for conn in ctx.index.edges_to(node.id) if ctx.index.is_user(conn.source) or conn.source == entry_id
    ]
    if not valid_sources:
        ctx.error(f"{node.label} must have incoming connection from user or entry point")
    if ctx.outgoing(node) == 0:
        ctx.error(f"{node.label} must have outgoing connections")
    if ctx.count_targets(node, *COMPUTE_TYPES) < 2:
        ctx.warn(f"{node.label} should connect to multiple application servers for redundancy")


def _check_compute(ctx: _Context, node: ServerNode) -> None:
    if ctx.incoming(node) == 0:
        ctx.error(f"{node.label} must have incoming connections")
    if not ctx.count_targets(node, NodeType.CACHE):
        ctx.warn(f"{node.label} should connect to a cache for better performance")
    if not ctx.count_targets(node, NodeType.DB):
        ctx.error(f"{node.label} must connect to a database")


def _check_database(ctx: _Context, node: ServerNode) -> None:
    if ctx.incoming(node) == 0:
        ctx.error(f"{node.label} must have incoming connections")
    if ctx.outgoing(node) > 0:
        ctx.error(f"{node.label} should not have outgoing connections")
    ctx.replication(NodeType.DB, "Consider adding database replication for high availability")


def _check_cache(ctx: _Context, node: ServerNode) -> None:
    if ctx.incoming(node) == 0:
        ctx.error(f"{node.label} must have incoming connections")
    if ctx.outgoing(node) > 0:
        ctx.warn(f"{node.label} typically should not have outgoing connections")
    ctx.replication(NodeType.CACHE, "Consider adding cache replication for high availability")


def _check_queue(ctx: _Context, node: ServerNode) -> None:
    if ctx.incoming(node) == 0:
        ctx.error(f"{node.label} must have incoming connections")
    if ctx.outgoing(node) == 0:
        ctx.warn(f"{node.label} typically should have outgoing connections")
    ctx.replication(NodeType.MQ, "Consider adding message queue replication for high availability")


def _check_relay(ctx: _Context, node: ServerNode) -> None:
    if ctx.incoming(node) == 0:
        ctx.error(f"{node.label} must have incoming connections")
    if ctx.outgoing(node) == 0:
        ctx.warn(f"{node.label} typically should have outgoing connections")


def _no_rules(ctx: _Context, node: ServerNode) -> None:
    return None


NODE_RULES: Dict[NodeType, Callable[[_Context, ServerNode], None]] = {
    NodeType.LB: _check_ingress,
    NodeType.GATEWAY: _check_ingress,
    NodeType.APP: _check_compute,
    NodeType.MICRO: _check_compute,
    NodeType.DB: _check_database,
    NodeType.CACHE: _check_cache,
    NodeType.MQ: _check_queue,
    NodeType.CDN: _check_relay,
    NodeType.ASG: _check_relay,
    NodeType.DR: _no_rules,
    NodeType.USER: _no_rules,
    NodeType.ENTRY: _no_rules,
}

_missing_rules = set(NodeType) - set(NODE_RULES)
if _missing_rules:
    raise RuntimeError(f"No validation rules registered for: {sorted(t.value for t in _missing_rules)}")


def _resolve_cycle_policy(cycle_policy: Optional[str]) -> str:
    if cycle_policy is not None:
        policy = cycle_policy.lower()
        if policy not in CYCLE_POLICIES:
            raise ValueError(f"cycle_policy must be one of {CYCLE_POLICIES}, got {cycle_policy!r}.")
        return policy
    policy = (Config.CYCLE_POLICY or "").lower()
    if policy not in CYCLE_POLICIES:
        logger.warning("Unknown ARCHLAB_CYCLE_POLICY %r, reporting cycles as warnings", Config.CYCLE_POLICY)
        return "warning"
    return policy


def _resolve_entry_point(index: GraphIndex, entry_point_id: Optional[str]) -> Optional[ServerNode]:
    if entry_point_id is not None:
        return index.nodes_by_id().get(entry_point_id)
    return index.find_first(NodeType.ENTRY)


def _check_entry_point(ctx: _Context) -> None:
    entry = ctx.entry_point
    if entry is None:
        ctx.error("No entry point defined")
        return
    if not any(ctx.index.is_user(conn.source) for conn in ctx.index.edges_to(entry.id)):
        ctx.error(f"Entry point {entry.label} must receive traffic from the user")
    if ctx.outgoing(entry) == 0:
        ctx.error(f"Entry point {entry.label} must have outgoing connections")


def _check_isolated(ctx: _Context) -> None:
    for node in ctx.index.nodes():
        if ctx.index.is_user(node.id):
            continue
        if ctx.incoming(node) == 0 and ctx.outgoing(node) == 0:
            ctx.error(f'Node "{node.label}" is isolated')


def _check_required_tiers(ctx: _Context) -> None:
    index = ctx.index
    if not index.count_by_type(NodeType.LB):
        ctx.error("Production architecture must include a load balancer for high availability")
    if not index.count_by_type(NodeType.DB):
        ctx.error("Production architecture must include a database for data persistence")
    if not index.count_by_type(NodeType.CACHE):
        ctx.warn("Consider adding a cache layer for improved performance")
    if index.count_by_type(*COMPUTE_TYPES) <= 1:
        ctx.warn("Consider adding multiple application servers for redundancy")


def validate(
    graph: GraphLike,
    entry_point_id: Optional[str] = None,
    cycle_policy: Optional[str] = None,
) -> ValidationResult:
    """Check a graph against the production-readiness rules.

    Problems are reported as data: ``errors`` make the graph invalid,
    ``warnings`` are advice only. Rules run in a fixed order (entry point,
    isolated nodes, required tiers, per-node rules in insertion order, cycle
    check) so identical graphs always produce identical lists.
    """
    policy = _resolve_cycle_policy(cycle_policy)

    index = GraphIndex(coerce_state(graph))
    result = ValidationResult()
    ctx = _Context(index, _resolve_entry_point(index, entry_point_id), result)

    _check_entry_point(ctx)
    _check_isolated(ctx)
    _check_required_tiers(ctx)

    for node in index.nodes():
        NODE_RULES[node.type](ctx, node)

    if ctx.entry_point is not None and has_cycle(index, ctx.entry_point.id):
        if policy == "error":
            ctx.error(CYCLE_MESSAGE)
        else:
            ctx.warn(CYCLE_MESSAGE)

    logger.debug(
        "Validated graph with %d nodes: %d errors, %d warnings",
        len(index.nodes()),
        len(result.errors),
        len(result.warnings),
    )
    return result
