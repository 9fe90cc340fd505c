from .cycles import has_cycle
from .model import (
    ArchitectureState,
    Connection,
    GraphFormatError,
    GraphIndex,
    NodeType,
    Resources,
    ServerNode,
    SimulationMetrics,
)
from .validator import ValidationResult, validate

__all__ = [
    "ArchitectureState",
    "Connection",
    "GraphFormatError",
    "GraphIndex",
    "NodeType",
    "Resources",
    "ServerNode",
    "SimulationMetrics",
    "ValidationResult",
    "has_cycle",
    "validate",
]
