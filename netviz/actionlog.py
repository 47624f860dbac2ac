"""
Action log: the append-only, timestamped record of everything the user did
and every algorithm step, in the order it happened.

Every entry is also forwarded to the stdlib logger ``netviz.actions`` so the
server console mirrors the panel shown in the browser.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

logger = logging.getLogger("netviz.actions")

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level="INFO"):
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO),
                        format=LOG_FORMAT)


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    text: str
    level: int = logging.INFO

    def format(self) -> str:
        return f"[{self.timestamp.strftime('%H:%M:%S')}] {self.text}"


class ActionLog:
    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or datetime.now
        self._entries: List[LogEntry] = []

    def info(self, text):
        return self._append(text, logging.INFO)

    def warning(self, text):
        return self._append(text, logging.WARNING)

    def _append(self, text, level):
        entry = LogEntry(self._clock(), text, level)
        self._entries.append(entry)
        logger.log(level, text)
        return entry

    @property
    def entries(self):
        return tuple(self._entries)

    def lines(self):
        return [e.format() for e in self._entries]

    def texts(self):
        """Entry texts without timestamps (handy for assertions)."""
        return [e.text for e in self._entries]

    def __len__(self):
        return len(self._entries)
