import io

import pytest
from docx import Document

from netviz.actionlog import ActionLog
from netviz.engine import NetworkEngine
from netviz.modes import ModeKind
from tests.conftest import tiny_png


def build_chain(engine):
    for x in (50, 150, 250):
        engine.click(x, 50)
    for a, b in ((50, 150), (150, 250)):
        engine.arm_add_edge()
        engine.click(a, 50)
        engine.click(b, 50)


def select(engine, sender_x, receiver_x):
    engine.arm_select_sender()
    engine.click(sender_x, 50)
    engine.arm_select_receiver()
    engine.click(receiver_x, 50)


class TestEditing:

    def test_clicks_build_a_graph(self, engine):
        build_chain(engine)
        snap = engine.snapshot()
        assert [n.label for n in snap.nodes] == ["N1", "N2", "N3"]
        assert [(e.source, e.target) for e in snap.edges] == [("N1", "N2"), ("N2", "N3")]
        assert snap.log_lines[0] == "[12:30:05] Node N1 created at (50, 50)"

    def test_delete_node_clears_selection(self, engine):
        build_chain(engine)
        select(engine, 50, 250)
        assert engine.delete_node("N1") is True
        snap = engine.snapshot()
        assert snap.sender is None
        assert snap.receiver == "N3"
        assert all("N1" not in (e.source, e.target) for e in snap.edges)
        assert engine.log.texts()[-1] == "Node N1 deleted"

    def test_delete_unknown_or_empty(self, engine):
        assert engine.delete_node(None) is False
        assert engine.delete_node("N4") is False
        assert engine.log.texts() == []

    def test_build_custom_then_bus(self, engine):
        build_chain(engine)
        engine.build_topology("custom")
        assert engine.controller.mode.kind == ModeKind.CUSTOM_LINKING
        assert engine.snapshot().edges == ()
        assert engine.log.texts()[-1].startswith("Custom mode active")

        engine.build_topology("bus")
        assert engine.controller.mode.kind == ModeKind.IDLE
        assert engine.topology == "bus"
        assert engine.log.texts()[-1] == 'Topology "bus" built with 3 nodes'

    def test_unknown_topology_is_reported(self, engine):
        build_chain(engine)
        assert engine.build_topology("hypercube") == []
        assert len(engine.model.edges) == 2
        assert engine.log.texts()[-1].startswith("⚠ Unknown topology")

    def test_reset(self, engine):
        build_chain(engine)
        select(engine, 50, 250)
        engine.build_topology("custom")
        engine.reset()
        snap = engine.snapshot()
        assert snap.nodes == () and snap.edges == ()
        assert snap.sender is None and snap.receiver is None
        assert snap.mode.kind == ModeKind.IDLE
        assert snap.topology is None
        engine.click(10, 10)
        assert engine.model.nodes[0].label == "N1"


class TestMessaging:

    def test_missing_selection(self, engine):
        build_chain(engine)
        assert engine.send_message("hello") is None
        assert engine.log.texts()[-1] == "⚠ Select both sender & receiver before sending a message."

    def test_blank_message_is_ignored(self, engine):
        build_chain(engine)
        select(engine, 50, 250)
        before = len(engine.log)
        assert engine.send_message("   ") is None
        assert len(engine.log) == before

    def test_message_travels_along_path(self, engine):
        build_chain(engine)
        select(engine, 50, 250)
        token = engine.send_message("  hello ")
        assert token is not None
        assert engine.snapshot().animating

        while engine.tick(token):
            pass
        texts = engine.log.texts()
        assert 'Message sent: "hello"' in texts
        assert "BFS Path: N1 → N2 → N3" in texts
        assert texts[-1] == '✅ Message delivered to N3: "hello"'
        assert not engine.snapshot().animating

    def test_no_path(self, engine):
        build_chain(engine)
        select(engine, 250, 50)
        token = engine.send_message("back")
        while engine.tick(token):
            pass
        assert engine.log.texts()[-1] == "❌ No path found between sender and receiver"

    def test_editing_cancels_running_animation(self, engine):
        build_chain(engine)
        select(engine, 50, 250)
        token = engine.send_message("hi")
        engine.tick(token)
        engine.build_topology("ring")

        assert not engine.snapshot().animating
        assert "Animation stopped: graph changed" in engine.log.texts()
        assert engine.tick(token) is False

    def test_second_send_replaces_first(self, engine):
        build_chain(engine)
        select(engine, 50, 250)
        first = engine.send_message("one")
        second = engine.send_message("two")
        assert second != first
        assert engine.tick(first) is False
        while engine.tick(second):
            pass
        assert engine.log.texts()[-1] == '✅ Message delivered to N3: "two"'


class TestAlgorithms:

    def test_topo_without_edges(self, engine):
        engine.click(50, 50)
        assert engine.run_algorithm("topo") is None
        assert engine.log.texts()[-1] == "No edges found — cannot perform topological sort"

    def test_topo_runs_stepwise(self, engine):
        build_chain(engine)
        token = engine.run_algorithm("topo")
        assert engine.algorithm == "topo"
        assert engine.tick(token) is True
        assert engine.snapshot().highlight.node == "N1"
        while engine.tick(token):
            pass
        assert engine.log.texts()[-1] == "✅ Topological Order: N1 → N2 → N3"

    def test_bfs_hint_without_selection(self, engine):
        build_chain(engine)
        assert engine.run_algorithm("bfs") is None
        assert engine.log.texts()[-1] == "Use chat to visualize BFS automatically!"

    def test_bfs_with_selection(self, engine):
        build_chain(engine)
        select(engine, 50, 250)
        token = engine.run_algorithm("bfs")
        while engine.tick(token):
            pass
        assert engine.log.texts()[-1] == "✅ BFS complete: N1 → N2 → N3"


class TestExport:

    def test_report(self, engine):
        build_chain(engine)
        engine.build_topology("tree")
        buffer = io.BytesIO()
        assert engine.export_report(buffer) is True

        doc = Document(io.BytesIO(buffer.getvalue()))
        text = [p.text for p in doc.paragraphs]
        assert "Network Log Report" in text
        assert "Topology: tree" in text
        assert "Algorithm: none" in text
        assert any("Node N1 created" in t for t in text)
        assert engine.log.texts()[-1] == "✅ Word document exported successfully!"

    def test_failure_is_reported_and_state_kept(self, engine, monkeypatch):
        build_chain(engine)

        def boom(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr("netviz.engine.export_report", boom)
        assert engine.export_report(io.BytesIO()) is False
        assert engine.log.texts()[-1] == "❌ Failed to export Word document."
        assert len(engine.model) == 3
        assert len(engine.model.edges) == 2

    def test_rendered_snapshot_is_embedded(self, engine, monkeypatch):
        build_chain(engine)
        rendered = []

        def fake_render(eng):
            rendered.append(eng)
            return tiny_png()

        monkeypatch.setattr("netviz.engine.render_png", fake_render)
        buffer = io.BytesIO()
        assert engine.export_report(buffer, render_snapshot=True) is True
        assert rendered == [engine]
        doc = Document(io.BytesIO(buffer.getvalue()))
        assert len(doc.inline_shapes) == 1

    def test_render_failure_is_reported(self, engine, monkeypatch):
        def boom(eng):
            raise RuntimeError("kaleido missing")

        monkeypatch.setattr("netviz.engine.render_png", boom)
        assert engine.export_report(io.BytesIO(), render_snapshot=True) is False
        assert engine.log.texts()[-1] == "❌ Failed to export Word document."


def test_injected_empty_log_is_kept():
    log = ActionLog()
    engine = NetworkEngine(log=log)
    assert engine.log is log
    engine.click(50, 50)
    assert len(log) == 1
