"""
Timed animations driven by an external clock.

The driver never sleeps or schedules anything itself. Whoever owns the timer
(a ``dcc.Interval`` in the app, a loop in tests) calls ``tick(token)`` and
the active animation advances exactly one step. Starting a new animation
stops the old one and issues a new token, so ticks from a stale timer are
dropped instead of touching the highlight state.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from netviz.actionlog import ActionLog
from netviz.events import StepKind
from netviz.pathfinder import BfsSearch
from netviz.scheduler import KahnScheduler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Highlight:
    node: Optional[str] = None
    segment: Optional[Tuple[str, str]] = None


NO_HIGHLIGHT = Highlight()


class Animation:
    name = "animation"

    def __init__(self, log: ActionLog):
        self.log = log
        self.highlight = NO_HIGHLIGHT

    def begin(self):
        pass

    def step(self) -> bool:
        """Advance once; False when there is nothing left to do."""
        raise NotImplementedError


class Phase(Enum):
    SEARCHING = "searching"
    TRAVELLING = "travelling"
    DONE = "done"


class MessageAnimation(Animation):
    """
    BFS from sender to receiver, one visit per tick, then the message hops
    along the path one edge per tick. With ``text=None`` only the path is
    walked (no message is delivered).
    """
    name = "bfs"

    def __init__(self, log, search: BfsSearch, text=None):
        super().__init__(log)
        self.search = search
        self.text = text
        self.phase = Phase.SEARCHING
        self.path = None
        self._hop = 0

    def begin(self):
        self.log.info(self.search.started.describe())

    def step(self):
        if self.phase == Phase.SEARCHING:
            return self._search_step()
        if self.phase == Phase.TRAVELLING:
            return self._travel_step()
        return False

    def _search_step(self):
        for event in self.search.advance():
            self.log.info(event.describe())
            if event.kind == StepKind.VISITING:
                self.highlight = Highlight(node=event.node)
        if not self.search.finished:
            return True

        self.path = self.search.path()
        if self.path is None:
            self.highlight = NO_HIGHLIGHT
            self.phase = Phase.DONE
            if self.text is None:
                self.log.warning(f"❌ No path found from {self.search.source} to {self.search.target}")
            else:
                self.log.warning("❌ No path found between sender and receiver")
            return False
        self.log.info(f"BFS Path: {' → '.join(self.path)}")
        self.phase = Phase.TRAVELLING
        return True

    def _travel_step(self):
        if self._hop < len(self.path) - 1:
            a, b = self.path[self._hop], self.path[self._hop + 1]
            self.highlight = Highlight(segment=(a, b))
            if self.text is None:
                self.log.info(f"Path step: {a} → {b}")
            else:
                self.log.info(f"Message moved from {a} → {b}")
            self._hop += 1
            return True

        self.highlight = NO_HIGHLIGHT
        self.phase = Phase.DONE
        if self.text is None:
            self.log.info(f"✅ BFS complete: {' → '.join(self.path)}")
        else:
            self.log.info(f'✅ Message delivered to {self.search.target}: "{self.text}"')
        return False


class SortAnimation(Animation):
    name = "topo"

    def __init__(self, log, scheduler: KahnScheduler):
        super().__init__(log)
        self.scheduler = scheduler
        self.result = None

    def begin(self):
        self.log.info("Kahn’s Algorithm started")

    def step(self):
        if self.scheduler.has_more():
            event = self.scheduler.advance()
            self.log.info(event.describe())
            self.highlight = Highlight(node=event.node)
            return True

        # queue drained on the previous tick: report
        self.highlight = NO_HIGHLIGHT
        self.result = self.scheduler.result()
        if self.result.cycle_detected:
            self.log.warning("⚠ Cycle detected — topological sort not possible")
        else:
            self.log.info("✅ Topological Order: " + " → ".join(self.result.order))
        return False


class AnimationDriver:
    def __init__(self, log: ActionLog):
        self.log = log
        self.token = 0
        self.active: Optional[Animation] = None

    @property
    def running(self):
        return self.active is not None

    @property
    def highlight(self):
        return self.active.highlight if self.active else NO_HIGHLIGHT

    def start(self, animation: Animation) -> int:
        if self.active is not None:
            self.log.info(f"Previous animation stopped ({self.active.name})")
        self.token += 1
        self.active = animation
        animation.begin()
        return self.token

    def tick(self, token=None) -> bool:
        """
        Advance the active animation by one step.

        Returns True while the animation has more to show. A ``token`` that
        does not match the current one belongs to a stopped animation and is
        ignored.
        """
        if self.active is None:
            return False
        if token is not None and token != self.token:
            logger.debug("ignoring stale tick (token %s, current %s)", token, self.token)
            return False
        more = self.active.step()
        if not more:
            self.active = None
        return more

    def cancel(self, reason=None):
        if self.active is None:
            return False
        if reason:
            self.log.info(f"Animation stopped: {reason}")
        self.active = None
        self.token += 1
        return True

    def run_to_completion(self, limit=10_000):
        """Drain the active animation without a timer; returns the tick count."""
        ticks = 0
        while self.running and ticks < limit:
            self.tick()
            ticks += 1
        return ticks
