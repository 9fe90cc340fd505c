from __future__ import annotations

from typing import Iterator, List, Set, Tuple

from .model import GraphIndex


def has_cycle(index: GraphIndex, start_id: str) -> bool:
    """Return True when a directed cycle is reachable from ``start_id``.

    Iterative depth-first search. ``on_stack`` holds the ids on the current
    path; a node leaves it only once all of its successors are explored.
    """
    visited: Set[str] = set()
    on_stack: Set[str] = set()
    stack: List[Tuple[str, Iterator[str]]] = []

    def push(node_id: str) -> None:
        visited.add(node_id)
        on_stack.add(node_id)
        stack.append((node_id, iter([conn.target for conn in index.edges_from(node_id)])))

    push(start_id)
    while stack:
        node_id, successors = stack[-1]
        for target in successors:
            if target in on_stack:
                return True
            if target not in visited:
                push(target)
                break
        else:
            stack.pop()
            on_stack.discard(node_id)
    return False
