import networkx as nx
import pytest

from netviz.errors import UnknownNodeError
from netviz.events import StepEvent, StepKind
from netviz.pathfinder import BfsSearch, shortest_path
from netviz.topology import build_topology
from tests.conftest import place


@pytest.fixture
def chain(model):
    place(model, 3)
    model.add_edge("N1", "N2")
    model.add_edge("N2", "N3")
    return model


class TestShortestPath:

    def test_follows_directed_edges(self, chain):
        assert shortest_path(chain, "N1", "N3") == ["N1", "N2", "N3"]

    def test_no_path_against_direction(self, chain):
        assert shortest_path(chain, "N3", "N1") is None

    def test_ring_opposite_nodes(self, model):
        place(model, 4)
        build_topology(model, "ring")
        path = shortest_path(model, "N1", "N3")
        assert len(path) - 1 == 2
        assert path[0] == "N1" and path[-1] == "N3"
        assert len(path) - 1 == nx.shortest_path_length(model.to_networkx(), "N1", "N3")

    def test_source_is_target(self, chain):
        assert shortest_path(chain, "N2", "N2") == ["N2"]

    def test_fifo_tie_break(self, model):
        place(model, 4)
        model.add_edge("N1", "N2")
        model.add_edge("N1", "N3")
        model.add_edge("N3", "N4")
        model.add_edge("N2", "N4")
        assert shortest_path(model, "N1", "N4") == ["N1", "N2", "N4"]

    def test_unknown_node(self, chain):
        with pytest.raises(UnknownNodeError):
            shortest_path(chain, "N1", "N9")


class TestStepper:

    def test_events_in_order(self, chain):
        search = BfsSearch.from_model(chain, "N1", "N3")
        assert search.started == StepEvent(StepKind.STARTED, "N1")
        assert search.started.describe() == "BFS started from N1"

        assert search.advance() == [
            StepEvent(StepKind.VISITING, "N1"),
            StepEvent(StepKind.DISCOVERED, "N2", "N1"),
        ]
        assert search.has_more()
        assert [e.describe() for e in search.advance()] == ["Visiting: N2", "Discovered: N3 from N2"]
        assert search.advance() == [StepEvent(StepKind.VISITING, "N3")]
        assert search.finished and search.found
        assert search.advance() == []
        assert search.path() == ["N1", "N2", "N3"]

    def test_halts_when_target_dequeued(self, model):
        place(model, 4)
        model.add_edge("N1", "N2")
        model.add_edge("N1", "N3")
        model.add_edge("N1", "N4")
        search = BfsSearch.from_model(model, "N1", "N2")
        search.advance()
        search.advance()
        # N3 and N4 are still queued but the target has been reached
        assert not search.has_more()
        assert search.path() == ["N1", "N2"]

    def test_search_uses_snapshot(self, chain):
        search = BfsSearch.from_model(chain, "N1", "N3")
        chain.clear_edges()
        assert search.run() == ["N1", "N2", "N3"]

    def test_not_found(self, chain):
        search = BfsSearch.from_model(chain, "N3", "N1")
        assert search.advance() == [StepEvent(StepKind.VISITING, "N3")]
        assert search.finished
        assert not search.found
        assert search.path() is None
