"""Tests for canonical labelling."""

from __future__ import annotations

import random

import pytest

from cubic_census import CanonicalLabelingError, canonical_encoding, canonical_form

# ---------------------------------------------------------------------------
# Helpers (1-based vertex ids)
# ---------------------------------------------------------------------------


def _k4() -> tuple[int, list[tuple[int, int]]]:
    return 4, [(i, j) for i in range(1, 5) for j in range(i + 1, 5)]


def _prism() -> tuple[int, list[tuple[int, int]]]:
    """Triangular prism: two triangles joined by a perfect matching."""
    return 6, [(1, 2), (2, 3), (3, 1), (4, 5), (5, 6), (6, 4), (1, 4), (2, 5), (3, 6)]


def _k33() -> tuple[int, list[tuple[int, int]]]:
    return 6, [(i, j) for i in range(1, 4) for j in range(4, 7)]


def _cube() -> tuple[int, list[tuple[int, int]]]:
    return 8, [
        (1, 2), (2, 3), (3, 4), (4, 1),
        (5, 6), (6, 7), (7, 8), (8, 5),
        (1, 5), (2, 6), (3, 7), (4, 8),
    ]


def _petersen() -> tuple[int, list[tuple[int, int]]]:
    outer = [(i, i % 5 + 1) for i in range(1, 6)]
    inner = [(6, 8), (8, 10), (10, 7), (7, 9), (9, 6)]
    spokes = [(i, i + 5) for i in range(1, 6)]
    return 10, outer + inner + spokes


def _relabel(
    n: int, edges: list[tuple[int, int]], seed: int
) -> list[tuple[int, int]]:
    """Randomly permute vertex ids, edge order and edge orientation."""
    rng = random.Random(seed)
    perm = list(range(1, n + 1))
    rng.shuffle(perm)
    out = [(perm[u - 1], perm[v - 1]) for u, v in edges]
    out = [(v, u) if rng.random() < 0.5 else (u, v) for u, v in out]
    rng.shuffle(out)
    return out


class TestAutomorphisms:
    """Automorphism group orders of well-known cubic graphs."""

    @pytest.mark.parametrize(
        "builder,order",
        [(_k4, 24), (_prism, 12), (_k33, 72), (_cube, 48), (_petersen, 120)],
    )
    def test_group_order(self, builder, order):
        n, edges = builder()
        assert canonical_form(n, edges).automorphisms == order

    def test_path(self):
        form = canonical_form(3, [(1, 2), (2, 3)])
        assert form.encoding == (1, 3, 2, 3)
        assert form.automorphisms == 2
        assert form.edges == [(1, 3), (2, 3)]

    def test_isolated_vertices(self):
        form = canonical_form(3, [])
        assert form.encoding == ()
        assert form.automorphisms == 6

    def test_empty_graph(self):
        form = canonical_form(0, [])
        assert form.encoding == ()
        assert form.automorphisms == 1


class TestCanonicity:
    """Equal encodings exactly for isomorphic graphs."""

    @pytest.mark.parametrize("builder", [_prism, _cube, _petersen])
    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_relabelled_copy_same_encoding(self, builder, seed):
        n, edges = builder()
        assert canonical_encoding(n, edges) == canonical_encoding(n, _relabel(n, edges, seed))

    def test_prism_and_k33_differ(self):
        """Both are cubic on six vertices but not isomorphic."""
        assert canonical_encoding(*_prism()) != canonical_encoding(*_k33())

    def test_labeling_is_permutation(self):
        n, edges = _petersen()
        form = canonical_form(n, edges)
        assert sorted(form.labeling) == list(range(1, n + 1))

    def test_labeling_maps_edges_to_encoding(self):
        n, edges = _prism()
        form = canonical_form(n, edges)
        lab = form.labeling
        relabelled = sorted(tuple(sorted((lab[u - 1], lab[v - 1]))) for u, v in edges)
        assert relabelled == form.edges

    def test_encoding_shape(self):
        n, edges = _cube()
        encoding = canonical_encoding(n, edges)
        assert len(encoding) == 2 * len(edges)
        assert min(encoding) == 1
        assert max(encoding) == n

    def test_labeling_not_part_of_equality(self):
        n, edges = _cube()
        assert canonical_form(n, edges) == canonical_form(n, _relabel(n, edges, 7))


class TestInvalidInput:
    """Malformed graphs raise CanonicalLabelingError."""

    def test_self_loop(self):
        with pytest.raises(CanonicalLabelingError, match="self-loop"):
            canonical_form(2, [(1, 1)])

    def test_repeated_edge(self):
        with pytest.raises(CanonicalLabelingError, match="repeated edge"):
            canonical_form(2, [(1, 2), (2, 1)])

    @pytest.mark.parametrize("edge", [(0, 1), (1, 4)])
    def test_vertex_out_of_range(self, edge):
        with pytest.raises(CanonicalLabelingError, match="outside 1..3"):
            canonical_form(3, [edge])

    def test_negative_vertex_count(self):
        with pytest.raises(CanonicalLabelingError, match="non-negative"):
            canonical_form(-1, [])

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            canonical_form(2, [(1, 1)])
