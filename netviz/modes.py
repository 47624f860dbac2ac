"""
Interaction modes: what a click on the canvas means right now.

Only one mode is active at a time. Clicks are resolved in a fixed order,
adding an edge first, then sender selection, receiver selection, custom
linking, and finally node creation. Holding a single ``Mode`` value makes
that order a plain dispatch on the active kind.

Transient modes (adding an edge, picking sender or receiver) fall back to
the *resting* mode when they finish: custom linking while the custom
topology is active, idle otherwise.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from netviz.actionlog import ActionLog
from netviz.graph_model import GraphModel

logger = logging.getLogger(__name__)


class ModeKind(Enum):
    IDLE = "idle"
    ADDING_EDGE = "adding_edge"
    SELECTING_SENDER = "selecting_sender"
    SELECTING_RECEIVER = "selecting_receiver"
    CUSTOM_LINKING = "custom_linking"


TRANSIENT = (ModeKind.ADDING_EDGE, ModeKind.SELECTING_SENDER, ModeKind.SELECTING_RECEIVER)

_DESCRIPTIONS = {
    ModeKind.ADDING_EDGE: "Add Edge mode",
    ModeKind.SELECTING_SENDER: "Sender selection",
    ModeKind.SELECTING_RECEIVER: "Receiver selection",
}


@dataclass(frozen=True)
class Mode:
    kind: ModeKind = ModeKind.IDLE
    pending: Optional[str] = None  # first endpoint of a two-click link


IDLE = Mode()


class InteractionController:
    def __init__(self, model: GraphModel, log: ActionLog):
        self.model = model
        self.log = log
        self.mode = IDLE
        self.sender: Optional[str] = None
        self.receiver: Optional[str] = None
        self.quick_link: Optional[str] = None
        self._custom = False

    @property
    def custom_active(self):
        return self._custom

    def _resting(self):
        return Mode(ModeKind.CUSTOM_LINKING) if self._custom else IDLE

    def _arm(self, kind):
        if self.mode.kind in TRANSIENT and self.mode.kind != kind:
            self.log.info(f"{_DESCRIPTIONS[self.mode.kind]} cancelled")
        self.mode = Mode(kind)

    # ---------- arming ----------

    def arm_add_edge(self) -> bool:
        if len(self.model) < 2:
            self.log.warning("⚠ Need at least two nodes to add an edge.")
            return False
        self._arm(ModeKind.ADDING_EDGE)
        self.log.info("Add Edge mode ON — click Node A then Node B to create A → B.")
        return True

    def arm_select_sender(self):
        self._arm(ModeKind.SELECTING_SENDER)
        self.log.info("Click a node to select as sender")

    def arm_select_receiver(self):
        self._arm(ModeKind.SELECTING_RECEIVER)
        self.log.info("Click a node to select as receiver")

    def enter_custom_linking(self):
        self._custom = True
        self.mode = Mode(ModeKind.CUSTOM_LINKING)

    def leave_custom_linking(self):
        self._custom = False
        if self.mode.kind == ModeKind.CUSTOM_LINKING:
            self.mode = IDLE

    # ---------- pointer events ----------

    def click(self, x, y):
        """Resolve a single click at canvas position (x, y)."""
        kind = self.mode.kind
        if kind == ModeKind.ADDING_EDGE:
            return self._click_adding_edge(x, y)
        if kind == ModeKind.SELECTING_SENDER:
            return self._click_select(x, y, "sender")
        if kind == ModeKind.SELECTING_RECEIVER:
            return self._click_select(x, y, "receiver")
        if kind == ModeKind.CUSTOM_LINKING:
            return self._click_custom(x, y)
        return self._click_idle(x, y)

    def _click_adding_edge(self, x, y):
        clicked = self.model.find_node_near(x, y)
        if clicked is None:
            return None
        if self.mode.pending is None:
            self.mode = Mode(ModeKind.ADDING_EDGE, clicked.label)
            self.log.info(f"Selected {clicked.label} as first node")
            return None
        edge = self.model.add_edge(self.mode.pending, clicked.label, directed=True)
        self.log.info(f"Edge added: {edge.source} → {edge.target}")
        self.mode = self._resting()
        self.log.info("Add Edge mode OFF — click 'Add Edge' to create another connection.")
        return edge

    def _click_select(self, x, y, role):
        clicked = self.model.find_node_near(x, y)
        if clicked is None:
            return None
        setattr(self, role, clicked.label)
        self.mode = self._resting()
        self.log.info(f"{role.capitalize()} selected: {clicked.label}")
        return clicked

    def _click_custom(self, x, y):
        clicked = self.model.find_node_near(x, y)
        if clicked is None:
            return None
        if self.mode.pending is None:
            self.mode = Mode(ModeKind.CUSTOM_LINKING, clicked.label)
            self.log.info(f"Selected {clicked.label} as first node to link")
            return None
        edge = self.model.add_edge(self.mode.pending, clicked.label, directed=True)
        self.mode = Mode(ModeKind.CUSTOM_LINKING)
        self.log.info(f"Linked {edge.source} → {edge.target}")
        return edge

    def _click_idle(self, x, y):
        if self.model.find_node_near(x, y) is not None:
            return None
        node = self.model.add_node(x, y)
        self.log.info(f"Node {node.label} created at ({round(x)}, {round(y)})")
        return node

    def double_click(self, x, y):
        """Quick link: double-click node A, then node B, to create A → B."""
        if self.mode.kind != ModeKind.IDLE:
            return None
        clicked = self.model.find_node_near(x, y)
        if clicked is None:
            return None
        if self.quick_link is None:
            self.quick_link = clicked.label
            logger.debug("quick link armed at %s", clicked.label)
            return None
        if self.quick_link == clicked.label:
            self.quick_link = None
            return None
        edge = self.model.add_edge(self.quick_link, clicked.label, directed=True)
        self.quick_link = None
        self.log.info(f"Edge created: {edge.source} → {edge.target}")
        return edge

    # ---------- selections ----------

    def clear_selection(self):
        self.sender = self.receiver = None
        self.log.info("Sender/Receiver selections cleared")

    def forget_node(self, label):
        """Drop every reference to a node that no longer exists."""
        if self.sender == label:
            self.sender = None
        if self.receiver == label:
            self.receiver = None
        if self.quick_link == label:
            self.quick_link = None
        if self.mode.pending == label:
            self.mode = Mode(self.mode.kind)

    def reset(self):
        self._custom = False
        self.mode = IDLE
        self.sender = self.receiver = None
        self.quick_link = None
