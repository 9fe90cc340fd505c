from archlab.core.graph.cycles import has_cycle
from archlab.core.graph.model import ArchitectureState, GraphIndex


def _index(node_ids, edges):
    return GraphIndex(
        ArchitectureState.from_dict(
            {
                "nodes": [{"id": node_id, "type": "app"} for node_id in node_ids],
                "edges": [{"source": source, "target": target} for source, target in edges],
            }
        )
    )


def test_triangle_is_a_cycle():
    index = _index(["A", "B", "C"], [("A", "B"), ("B", "C"), ("C", "A")])
    assert has_cycle(index, "A") is True


def test_chain_is_not_a_cycle():
    index = _index(["A", "B", "C"], [("A", "B"), ("B", "C")])
    assert has_cycle(index, "A") is False


def test_diamond_is_not_a_cycle():
    # D is reached twice but is never an ancestor of itself
    index = _index(["A", "B", "C", "D"], [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])
    assert has_cycle(index, "A") is False


def test_cycle_outside_reachable_subgraph_is_ignored():
    index = _index(["A", "B", "C", "D"], [("A", "B"), ("C", "D"), ("D", "C")])
    assert has_cycle(index, "A") is False
    assert has_cycle(index, "C") is True


def test_unknown_start_has_no_cycle():
    index = _index(["A"], [])
    assert has_cycle(index, "missing") is False


def test_long_chain_does_not_hit_recursion_limit():
    node_ids = [f"n{i}" for i in range(5000)]
    edges = list(zip(node_ids, node_ids[1:]))
    assert has_cycle(_index(node_ids, edges), "n0") is False

    edges.append(("n4999", "n0"))
    assert has_cycle(_index(node_ids, edges), "n0") is True
