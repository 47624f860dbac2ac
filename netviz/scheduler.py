"""
Kahn's topological sort, one dequeued node per step.

Every edge counts towards its target's in-degree, whatever its ``directed``
flag says; the sort treats the graph as directed source -> target.
"""

from collections import deque
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from netviz.errors import NoEdgesError, UnknownNodeError
from netviz.events import StepEvent, StepKind
from netviz.graph_model import Edge, GraphModel


@dataclass(frozen=True)
class SortResult:
    order: Tuple[str, ...]
    cycle_detected: bool


class KahnScheduler:
    def __init__(self, labels: Sequence[str], edges: Iterable[Edge]):
        self._labels = list(labels)
        self._succ = {label: [] for label in self._labels}
        self._indeg = {label: 0 for label in self._labels}
        for e in edges:
            if e.source not in self._succ:
                raise UnknownNodeError(e.source)
            if e.target not in self._indeg:
                raise UnknownNodeError(e.target)
            self._succ[e.source].append(e.target)
            self._indeg[e.target] += 1
        self._queue = deque(n for n in self._labels if self._indeg[n] == 0)
        self.order: List[str] = []

    @classmethod
    def from_model(cls, model: GraphModel):
        if not model.edges:
            raise NoEdgesError("No edges found — cannot perform topological sort")
        return cls(model.labels(), model.edges)

    def has_more(self) -> bool:
        return bool(self._queue)

    @property
    def finished(self):
        return not self._queue

    @property
    def is_cycle(self):
        return self.finished and len(self.order) != len(self._labels)

    def advance(self) -> Optional[StepEvent]:
        """Process one queued node; None once the queue has drained."""
        if not self._queue:
            return None
        u = self._queue.popleft()
        self.order.append(u)
        for v in self._succ[u]:
            self._indeg[v] -= 1
            if self._indeg[v] == 0:
                self._queue.append(v)
        return StepEvent(StepKind.PROCESSING, u)

    def result(self) -> SortResult:
        return SortResult(tuple(self.order), self.is_cycle)

    def run(self) -> SortResult:
        while self.has_more():
            self.advance()
        return self.result()
