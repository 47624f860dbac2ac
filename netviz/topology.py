"""
Preset topologies.

Every builder indexes nodes by creation order (0 = oldest) and always starts
from an empty edge set, so rebuilding never leaves edges from a previous
topology behind.
"""

from enum import Enum
from typing import List, Sequence

from netviz.errors import UnknownTopologyError
from netviz.graph_model import Edge, GraphModel, Node


class TopologyKind(str, Enum):
    BUS = "bus"
    STAR = "star"
    RING = "ring"
    MESH = "mesh"
    TREE = "tree"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value):
        try:
            return cls(value)
        except ValueError:
            raise UnknownTopologyError(f"Unknown topology: {value!r}") from None


def _bus(labels):
    return [Edge(labels[i], labels[i + 1], False) for i in range(len(labels) - 1)]


def _star(labels):
    return [Edge(labels[0], labels[i], False) for i in range(1, len(labels))]


def _ring(labels):
    # N == 1 gives a self-loop on purpose
    n = len(labels)
    return [Edge(labels[i], labels[(i + 1) % n], False) for i in range(n)]


def _mesh(labels):
    # both directions are stored, each flagged undirected
    edges = []
    n = len(labels)
    for i in range(n):
        for j in range(i + 1, n):
            edges.append(Edge(labels[i], labels[j], False))
            edges.append(Edge(labels[j], labels[i], False))
    return edges


def _tree(labels):
    edges = []
    n = len(labels)
    for i in range(n):
        left, right = 2 * i + 1, 2 * i + 2
        if left < n:
            edges.append(Edge(labels[i], labels[left], True))
        if right < n:
            edges.append(Edge(labels[i], labels[right], True))
    return edges


_BUILDERS = {
    TopologyKind.BUS: _bus,
    TopologyKind.STAR: _star,
    TopologyKind.RING: _ring,
    TopologyKind.MESH: _mesh,
    TopologyKind.TREE: _tree,
    TopologyKind.CUSTOM: lambda labels: [],
}


def generate_edges(kind, nodes: Sequence[Node]) -> List[Edge]:
    """Edge set for ``kind`` over ``nodes`` (pure; the model is not touched)."""
    kind = TopologyKind.parse(kind)
    labels = [n.label for n in nodes]
    if not labels:
        return []
    return _BUILDERS[kind](labels)


def build_topology(model: GraphModel, kind) -> List[Edge]:
    """Replace every edge in ``model`` with the ``kind`` edge set."""
    edges = generate_edges(kind, model.nodes)
    model.clear_edges()
    for e in edges:
        model.add_edge(e.source, e.target, e.directed)
    return edges
