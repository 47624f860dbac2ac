"""
NetworkEngine: the single owned state object behind the UI.

Holds the graph, the interaction controller, the animation driver and the
action log. Every public method is safe to call straight from a UI callback;
failures are reported through the log and never raised.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from netviz.actionlog import ActionLog
from netviz.animation import AnimationDriver, Highlight, MessageAnimation, SortAnimation
from netviz.errors import NetvizError, NoEdgesError
from netviz.export import export_report
from netviz.graph_data import render_png
from netviz.graph_model import Edge, GraphModel, Node
from netviz.modes import InteractionController, Mode
from netviz.pathfinder import BfsSearch
from netviz.scheduler import KahnScheduler
from netviz.topology import TopologyKind, build_topology

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSnapshot:
    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    mode: Mode
    sender: Optional[str]
    receiver: Optional[str]
    topology: Optional[str]
    algorithm: Optional[str]
    highlight: Highlight
    log_lines: Tuple[str, ...]
    animation_token: int
    animating: bool


class NetworkEngine:
    def __init__(self, log: Optional[ActionLog] = None):
        self.log = log if log is not None else ActionLog()
        self.model = GraphModel()
        self.controller = InteractionController(self.model, self.log)
        self.animations = AnimationDriver(self.log)
        self.topology: Optional[str] = None
        self.algorithm: Optional[str] = None

    # ---------- helpers ----------

    def _structure_changing(self):
        # steppers run on the graph as it was when they started
        self.animations.cancel("graph changed")

    # ---------- pointer input ----------

    def click(self, x, y):
        before = (len(self.model), len(self.model.edges))
        try:
            result = self.controller.click(x, y)
        except NetvizError as exc:
            logger.warning("click at (%s, %s) failed: %s", x, y, exc)
            return None
        if (len(self.model), len(self.model.edges)) != before:
            self._structure_changing()
        return result

    def double_click(self, x, y):
        try:
            edge = self.controller.double_click(x, y)
        except NetvizError as exc:
            logger.warning("double click at (%s, %s) failed: %s", x, y, exc)
            return None
        if edge is not None:
            self._structure_changing()
        return edge

    # ---------- buttons ----------

    def delete_node(self, label):
        if not label or not self.model.delete_node(label):
            return False
        self._structure_changing()
        self.controller.forget_node(label)
        self.log.info(f"Node {label} deleted")
        return True

    def build_topology(self, kind):
        try:
            kind = TopologyKind.parse(kind)
        except NetvizError as exc:
            self.log.warning(f"⚠ {exc}")
            return []
        self._structure_changing()
        edges = build_topology(self.model, kind)
        self.topology = kind.value
        if kind == TopologyKind.CUSTOM:
            self.controller.enter_custom_linking()
            self.log.info("Custom mode active — use 'Add Edge' to create directed connections.")
        else:
            self.controller.leave_custom_linking()
            self.log.info(f'Topology "{kind.value}" built with {len(self.model)} nodes')
        return edges

    def reset(self):
        self.animations.cancel()
        self.model.clear_all()
        self.controller.reset()
        self.topology = None
        self.log.info("Canvas reset — all nodes and edges cleared")

    def arm_add_edge(self):
        return self.controller.arm_add_edge()

    def arm_select_sender(self):
        self.controller.arm_select_sender()

    def arm_select_receiver(self):
        self.controller.arm_select_receiver()

    def clear_selection(self):
        self.controller.clear_selection()

    # ---------- algorithms ----------

    def send_message(self, text) -> Optional[int]:
        sender, receiver = self.controller.sender, self.controller.receiver
        if sender is None or receiver is None:
            self.log.warning("⚠ Select both sender & receiver before sending a message.")
            return None
        msg = (text or "").strip()
        if not msg:
            return None
        self.log.info(f'Message sent: "{msg}"')
        search = BfsSearch.from_model(self.model, sender, receiver)
        self.algorithm = "bfs"
        return self.animations.start(MessageAnimation(self.log, search, msg))

    def run_algorithm(self, name) -> Optional[int]:
        if name == "topo":
            return self._run_kahn()
        if name == "bfs":
            sender, receiver = self.controller.sender, self.controller.receiver
            if sender is None or receiver is None:
                self.log.info("Use chat to visualize BFS automatically!")
                return None
            self.algorithm = "bfs"
            search = BfsSearch.from_model(self.model, sender, receiver)
            return self.animations.start(MessageAnimation(self.log, search))
        self.log.warning(f"⚠ Unknown algorithm: {name}")
        return None

    def _run_kahn(self):
        try:
            scheduler = KahnScheduler.from_model(self.model)
        except NoEdgesError as exc:
            self.log.warning(str(exc))
            return None
        self.algorithm = "topo"
        return self.animations.start(SortAnimation(self.log, scheduler))

    def tick(self, token=None) -> bool:
        return self.animations.tick(token)

    # ---------- read-only state ----------

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            nodes=self.model.nodes,
            edges=self.model.edges,
            mode=self.controller.mode,
            sender=self.controller.sender,
            receiver=self.controller.receiver,
            topology=self.topology,
            algorithm=self.algorithm,
            highlight=self.animations.highlight,
            log_lines=tuple(self.log.lines()),
            animation_token=self.animations.token,
            animating=self.animations.running,
        )

    def export_report(self, stream, snapshot_png=None, render_snapshot=False) -> bool:
        """Write the Word report to ``stream``. Returns False on failure.

        With ``render_snapshot`` the current canvas is rendered to PNG and
        embedded, unless ``snapshot_png`` is already given.
        """
        self.log.info("Preparing Word document export...")
        try:
            if snapshot_png is None and render_snapshot:
                snapshot_png = render_png(self)
            export_report(
                stream,
                log_lines=self.log.lines(),
                topology=self.topology,
                algorithm=self.algorithm,
                nodes=self.model.nodes,
                edges=self.model.edges,
                snapshot_png=snapshot_png,
            )
        except Exception:
            logger.exception("report export failed")
            self.log.warning("❌ Failed to export Word document.")
            return False
        self.log.info("✅ Word document exported successfully!")
        return True
