from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StepKind(Enum):
    STARTED = "started"
    VISITING = "visiting"
    DISCOVERED = "discovered"
    PROCESSING = "processing"


@dataclass(frozen=True)
class StepEvent:
    """One observable thing an algorithm stepper did."""
    kind: StepKind
    node: str
    parent: Optional[str] = None

    def describe(self) -> str:
        if self.kind == StepKind.STARTED:
            return f"BFS started from {self.node}"
        if self.kind == StepKind.VISITING:
            return f"Visiting: {self.node}"
        if self.kind == StepKind.DISCOVERED:
            return f"Discovered: {self.node} from {self.parent}"
        return f"Processing node: {self.node}"
