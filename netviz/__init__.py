"""
netviz - interactive network playground.

Build a graph by clicking, wire it up with preset topologies, then watch
BFS message delivery and Kahn's topological sort play out step by step.
"""

from netviz.graph_model import GraphModel, Node, Edge
from netviz.modes import InteractionController, Mode, ModeKind
from netviz.topology import TopologyKind, build_topology, generate_edges
from netviz.pathfinder import BfsSearch, shortest_path
from netviz.scheduler import KahnScheduler, SortResult
from netviz.engine import NetworkEngine

__version__ = "0.3.0"

__all__ = [
    "GraphModel", "Node", "Edge",
    "InteractionController", "Mode", "ModeKind",
    "TopologyKind", "build_topology", "generate_edges",
    "BfsSearch", "shortest_path",
    "KahnScheduler", "SortResult",
    "NetworkEngine",
]
