"""
Graph model: the nodes and edges drawn on the canvas.

Nodes are kept in creation order (topologies index them that way) and are
labelled N1, N2, ... from a counter that only goes back to zero on
``clear_all``; a deleted node's label is never handed out again.
Edges reference nodes by label. Duplicates and self-loops are allowed.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional

import networkx as nx

from netviz.errors import UnknownNodeError
from netviz.settings import settings


@dataclass(frozen=True)
class Node:
    label: str
    x: float
    y: float


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    directed: bool = True

    def touches(self, label):
        return self.source == label or self.target == label


class GraphModel:
    def __init__(self):
        self._nodes: List[Node] = []
        self._edges: List[Edge] = []
        self._created = 0

    # ---------- read-only views ----------

    @property
    def nodes(self):
        return tuple(self._nodes)

    @property
    def edges(self):
        return tuple(self._edges)

    def labels(self):
        return [n.label for n in self._nodes]

    def __len__(self):
        return len(self._nodes)

    def __contains__(self, label):
        return self.find_node_by_label(label) is not None

    # ---------- mutation ----------

    def add_node(self, x, y) -> Node:
        self._created += 1
        node = Node(f"N{self._created}", float(x), float(y))
        self._nodes.append(node)
        return node

    def delete_node(self, label) -> bool:
        node = self.find_node_by_label(label)
        if node is None:
            return False
        self._nodes = [n for n in self._nodes if n.label != label]
        self._edges = [e for e in self._edges if not e.touches(label)]
        return True

    def add_edge(self, source, target, directed=True) -> Edge:
        for label in (source, target):
            if label not in self:
                raise UnknownNodeError(label)
        edge = Edge(source, target, directed)
        self._edges.append(edge)
        return edge

    def clear_edges(self):
        self._edges = []

    def clear_all(self):
        self._nodes = []
        self._edges = []
        self._created = 0

    # ---------- queries ----------

    def find_node_near(self, x, y, radius=None) -> Optional[Node]:
        """First node (creation order) strictly closer than ``radius`` to (x, y)."""
        if radius is None:
            radius = settings.NODE_HIT_RADIUS
        for node in self._nodes:
            if math.hypot(node.x - x, node.y - y) < radius:
                return node
        return None

    def find_node_by_label(self, label) -> Optional[Node]:
        for node in self._nodes:
            if node.label == label:
                return node
        return None

    def adjacency(self) -> Dict[str, List[str]]:
        """
        One-hop reachability per label, in edge insertion order.
        Undirected edges count both ways, directed ones only source -> target.
        """
        adj = {n.label: [] for n in self._nodes}
        for e in self._edges:
            adj[e.source].append(e.target)
            if not e.directed:
                adj[e.target].append(e.source)
        return adj

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Export as a MultiDiGraph. Undirected edges become a pair of arcs,
        both tagged ``directed=False``.
        """
        G = nx.MultiDiGraph()
        for n in self._nodes:
            G.add_node(n.label, x=n.x, y=n.y)
        for e in self._edges:
            G.add_edge(e.source, e.target, directed=e.directed)
            if not e.directed and e.source != e.target:
                G.add_edge(e.target, e.source, directed=False)
        return G
