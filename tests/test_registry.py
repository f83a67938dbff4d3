"""Tests for the deduplication registry."""

import pytest

from cubic_census import CanonicalLabelingWarning, DedupRegistry, PlanarMapState
from cubic_census.planarmap import ClosedFace, FaceTally
from cubic_census.types import FaceProfile

_CUBE_EDGES = [
    (1, 2), (2, 3), (3, 4), (4, 1),
    (5, 6), (6, 7), (7, 8), (8, 5),
    (1, 5), (2, 6), (3, 7), (4, 8),
]
_CUBE_FACES = [
    (0, 1, 2, 3),
    (4, 5, 6, 7),
    (0, 9, 4, 8),
    (1, 10, 5, 9),
    (2, 11, 6, 10),
    (3, 8, 7, 11),
]


def _cube_state(relabel=None) -> PlanarMapState:
    """Completed cube map, optionally with vertex ids mapped through relabel."""
    edges = _CUBE_EDGES
    if relabel is not None:
        edges = [(relabel[u], relabel[v]) for u, v in edges]
    faces = [ClosedFace(face) for face in _CUBE_FACES]
    tally = FaceTally(squares=6, profile=FaceProfile(triangles=0, squares=6, pentagons=0))
    return PlanarMapState(8, edges, faces, [], tally)


class TestInsert:
    def test_new_then_duplicate(self):
        registry = DedupRegistry()
        assert registry.insert((1, 2), hexagons=3)
        assert not registry.insert((1, 2), hexagons=3)
        assert len(registry) == 1
        assert registry.tally[3] == 1
        assert registry.total == 1

    def test_contains(self):
        registry = DedupRegistry()
        registry.insert((1, 2, 3, 4), hexagons=1)
        assert (1, 2, 3, 4) in registry
        assert (1, 2) not in registry

    def test_by_hexagons_includes_zeros(self):
        registry = DedupRegistry()
        registry.insert((1,), hexagons=2)
        registry.insert((2,), hexagons=2)
        assert registry.by_hexagons(3) == [(1, 0), (2, 2), (3, 0)]


class TestSubmit:
    def test_isomorphic_copy_is_duplicate(self):
        registry = DedupRegistry()
        assert registry.submit(_cube_state())
        relabel = {1: 8, 2: 3, 3: 5, 4: 1, 5: 2, 6: 7, 7: 4, 8: 6}
        assert not registry.submit(_cube_state(relabel))
        assert registry.tally[0] == 1

    def test_records_kept_on_request(self):
        registry = DedupRegistry(record_graphs=True)
        registry.submit(_cube_state())
        (record,) = registry.records
        assert record.automorphisms == 48
        assert record.num_vertices == 8
        assert record.hexagons == 0
        assert record.edges == tuple(_CUBE_EDGES)
        assert record.summary.endswith(" 0 hexes, 8 verts")
        assert record.encoding in registry

    def test_records_off_by_default(self):
        registry = DedupRegistry()
        registry.submit(_cube_state())
        assert registry.records == []
        assert list(registry) == []

    def test_unlabelable_map_warns_and_is_skipped(self):
        """A multigraph cannot be labelled; it is reported, not counted."""
        state = PlanarMapState(2, [(1, 2), (1, 2), (2, 1)], [], [], FaceTally())
        registry = DedupRegistry()
        with pytest.warns(CanonicalLabelingWarning, match="Skipping completed map"):
            assert not registry.submit(state)
        assert len(registry) == 0
