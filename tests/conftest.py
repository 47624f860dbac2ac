import struct
import zlib
from datetime import datetime

import pytest

from netviz.actionlog import ActionLog
from netviz.engine import NetworkEngine
from netviz.graph_model import GraphModel
from netviz.modes import InteractionController


@pytest.fixture
def log():
    return ActionLog(clock=lambda: datetime(2024, 1, 1, 12, 30, 5))


@pytest.fixture
def model():
    return GraphModel()


@pytest.fixture
def controller(model, log):
    return InteractionController(model, log)


@pytest.fixture
def engine(log):
    return NetworkEngine(log=log)


def place(model, count, spacing=100):
    """Add ``count`` nodes on a horizontal line, far enough apart to click."""
    return [model.add_node(50 + i * spacing, 50) for i in range(count)]


def tiny_png():
    """A valid 1x1 RGB PNG, enough for python-docx to embed."""
    def chunk(kind, data):
        return (struct.pack(">I", len(data)) + kind + data
                + struct.pack(">I", zlib.crc32(kind + data) & 0xFFFFFFFF))

    header = struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0)
    return (b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", header)
            + chunk(b"IDAT", zlib.compress(b"\x00\xff\x00\x00")) + chunk(b"IEND", b""))
