"""
Breadth-first shortest path as a resumable stepper.

Each ``advance()`` dequeues exactly one node, so an animation can pace the
search one visit per tick. The search stops when the target is *dequeued*;
the path returned is the first shortest one FIFO order surfaces.
"""

from collections import deque
from typing import Dict, List, Optional

from netviz.errors import UnknownNodeError
from netviz.events import StepEvent, StepKind
from netviz.graph_model import GraphModel


class BfsSearch:
    def __init__(self, adjacency: Dict[str, List[str]], source: str, target: str):
        for label in (source, target):
            if label not in adjacency:
                raise UnknownNodeError(label)
        # private copy: the search never sees later edits to the graph
        self._adj = {k: list(v) for k, v in adjacency.items()}
        self.source = source
        self.target = target
        self._queue = deque([source])
        self._parent: Dict[str, Optional[str]] = {source: None}
        self._reached = False
        self.started = StepEvent(StepKind.STARTED, source)

    @classmethod
    def from_model(cls, model: GraphModel, source, target):
        return cls(model.adjacency(), source, target)

    def has_more(self) -> bool:
        return bool(self._queue) and not self._reached

    @property
    def finished(self):
        return not self.has_more()

    @property
    def found(self):
        return self._reached

    def advance(self) -> List[StepEvent]:
        if not self.has_more():
            return []
        u = self._queue.popleft()
        events = [StepEvent(StepKind.VISITING, u)]
        if u == self.target:
            self._reached = True
            return events
        for v in self._adj[u]:
            if v not in self._parent:
                self._parent[v] = u
                self._queue.append(v)
                events.append(StepEvent(StepKind.DISCOVERED, v, u))
        return events

    def path(self) -> Optional[List[str]]:
        """Source-to-target labels, or None when the target was never reached."""
        if not self._reached:
            return None
        path = []
        cur = self.target
        while cur is not None:
            path.append(cur)
            cur = self._parent[cur]
        path.reverse()
        return path

    def run(self) -> Optional[List[str]]:
        while self.has_more():
            self.advance()
        return self.path()


def shortest_path(model: GraphModel, source, target):
    return BfsSearch.from_model(model, source, target).run()
