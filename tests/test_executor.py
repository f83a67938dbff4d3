"""Tests for the move executor."""

from __future__ import annotations

import pytest

from cubic_census import IllegalMoveError, Move, PlanarMapState, apply_move, legal_moves
from cubic_census.planarmap import EDGES_ADDED, VERTICES_ADDED
from cubic_census.validation import validate_boundary

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _explore(state: PlanarMapState, depth: int, seen: set[Move]) -> int:
    """Apply every legal move at every position down to depth, checking each."""
    if depth == 0:
        return 0
    applied = 0
    for position in range(len(state.open_faces)):
        for move in legal_moves(state, position):
            before = state.copy()
            record = apply_move(state, position, move)
            applied += 1
            seen.add(move)

            assert state.num_edges - before.num_edges == EDGES_ADDED[move]
            assert state.num_vertices - before.num_vertices == VERTICES_ADDED[move]
            assert validate_boundary(state, strict=False) == []
            assert all(state.degree(v) <= 3 for v in range(1, state.num_vertices + 1))
            assert state.tally.within_budget()

            if state.open_faces and state.sizecheck():
                applied += _explore(state, depth - 1, seen)
            state.undo(record)
            assert state == before
    return applied


def _played(*steps: tuple[int, Move]) -> PlanarMapState:
    """Seed state after the given (position, move) steps."""
    state = PlanarMapState.seed()
    for position, move in steps:
        apply_move(state, position, move)
    return state


class TestSeedMoves:
    """Structural edits of single moves on the seed."""

    def test_peak(self):
        state = PlanarMapState.seed()
        apply_move(state, 0, Move.PEAK)
        assert state.num_vertices == 8
        assert state.edges[8:] == [(7, 8), (8, 2)]
        assert state.open_faces == [3, 4, 5, 6]
        assert state.open_lengths() == [3, 1, 1, 2]
        assert state.face_lengths() == [3, 6, 4, 3, 1, 1, 2]
        assert state.tally.as_tuple() == (1, 1, 0, 1)
        assert state.endpoints(3) == (8, 4)
        assert state.endpoints(6) == (6, 8)

    def test_step_leaves_new_open_face(self):
        state = PlanarMapState.seed()
        apply_move(state, 0, Move.STEP)
        assert state.num_vertices == 9
        assert state.face_count == 8
        assert state.open_faces == [7, 3, 4, 5, 6]
        assert state.open_lengths() == [1, 3, 1, 1, 2]
        assert state.endpoints(7) == (8, 9)
        assert state.tally.as_tuple() == (1, 0, 1, 1)

    def test_stair_leaves_two_open_faces(self):
        state = PlanarMapState.seed()
        apply_move(state, 0, Move.STAIR)
        assert state.num_vertices == 10
        assert state.num_edges == 12
        assert state.open_faces == [7, 8, 3, 4, 5, 6]
        assert state.open_lengths() == [1, 1, 3, 1, 1, 2]
        assert state.tally.as_tuple() == (1, 0, 0, 2)


class TestMergingMoves:
    """Moves that remove face slots and renumber the boundary."""

    def test_chord_absorbs_next_face(self):
        state = PlanarMapState.seed()
        apply_move(state, 0, Move.PEAK)
        apply_move(state, 0, Move.CHORD)
        assert state.edges[-1] == (8, 4)
        assert state.face_count == 6
        assert state.open_faces == [4, 5]
        assert state.open_lengths() == [1, 4]
        assert state.endpoints(4) == (5, 6)
        assert state.endpoints(5) == (6, 5)
        assert state.tally.as_tuple() == (1, 2, 0, 1)

    def test_wrap_next_closes_two_faces(self):
        state = PlanarMapState.seed()
        apply_move(state, 0, Move.STAIR)
        apply_move(state, 1, Move.WRAP_NEXT)
        assert state.edges[12:] == [(10, 4), (9, 5)]
        assert state.num_vertices == 10
        assert state.face_count == 7
        assert state.open_faces == [5, 4]
        assert state.open_lengths() == [3, 2]
        assert state.endpoints(5) == (8, 6)
        assert state.endpoints(4) == (6, 8)
        assert state.tally.as_tuple() == (1, 2, 0, 2)

    def test_peak_on_two_faces_leaves_one(self):
        state = PlanarMapState.seed()
        apply_move(state, 0, Move.PEAK)
        apply_move(state, 0, Move.CHORD)
        apply_move(state, 1, Move.PEAK)
        assert state.open_faces == [4]
        assert state.endpoints(4) == (9, 9)
        assert state.tally.as_tuple() == (1, 2, 0, 2)


class TestBackwardMoves:
    """Moves that close the previous face and renumber around it."""

    def test_wrap_prev_closes_two_faces(self):
        state = _played((0, Move.STAIR))
        apply_move(state, 3, Move.WRAP_PREV)
        assert state.edges[12:] == [(10, 4), (9, 5)]
        assert state.face_count == 7
        assert state.open_faces == [6, 5]
        assert state.open_lengths() == [3, 2]
        assert state.endpoints(6) == (8, 6)
        assert state.endpoints(5) == (6, 8)
        assert state.faces[3].edges == (11, 1, 3, 12)
        assert state.faces[4].edges == (4, 12, 10, 13)
        assert state.tally.as_tuple() == (1, 2, 0, 2)

    def test_wrap_prev_wide_crosses_two_edges(self):
        state = _played((2, Move.STEP), (2, Move.STAIR))
        apply_move(state, 2, Move.WRAP_PREV_WIDE)
        assert state.edges[15:] == [(2, 10), (7, 11)]
        assert state.num_vertices == 12
        assert state.face_count == 8
        assert state.open_faces == [4, 5]
        assert state.open_lengths() == [3, 3]
        assert state.endpoints(4) == (12, 6)
        assert state.endpoints(5) == (6, 12)
        assert state.faces[2].edges == (1, 3, 8, 11, 15)
        assert state.faces[7].edges == (12, 15, 7, 0, 16)
        assert state.tally.as_tuple() == (1, 1, 3, 1)

    def test_wrap_prev_peak_adds_vertex(self):
        state = _played((0, Move.STAIR))
        apply_move(state, 3, Move.WRAP_PREV_PEAK)
        assert state.edges[12:] == [(10, 4), (9, 11), (11, 5)]
        assert state.num_vertices == 11
        assert state.face_count == 8
        assert state.open_faces == [7, 5, 6]
        assert state.open_lengths() == [2, 2, 2]
        assert state.endpoints(7) == (8, 11)
        assert state.endpoints(5) == (11, 6)
        assert state.faces[4].edges == (4, 12, 10, 13, 14)
        assert state.tally.as_tuple() == (1, 1, 1, 2)


class TestForwardWrapMoves:
    """Wide and peaked forward wraps, including a ring erase that wraps around."""

    def test_wrap_next_wide_erases_across_ring_end(self):
        state = _played((3, Move.STEP), (3, Move.STAIR))
        assert state.open_lengths() == [2, 2, 3, 1, 1, 3]
        apply_move(state, 4, Move.WRAP_NEXT_WIDE)
        assert state.edges[15:] == [(12, 7), (11, 2)]
        assert state.face_count == 8
        assert state.open_faces == [2, 6]
        assert state.open_lengths() == [3, 4]
        assert state.endpoints(2) == (4, 10)
        assert state.endpoints(6) == (10, 4)
        assert state.faces[4].edges == (14, 10, 6, 15)
        assert state.faces[7].edges == (13, 15, 7, 0, 16)
        assert state.tally.as_tuple() == (1, 2, 2, 1)

    def test_wrap_next_peak_adds_vertex(self):
        state = _played((0, Move.STAIR))
        apply_move(state, 1, Move.WRAP_NEXT_PEAK)
        assert state.edges[12:] == [(10, 4), (11, 5), (9, 11)]
        assert state.num_vertices == 11
        assert state.face_count == 8
        assert state.open_faces == [6, 4, 5]
        assert state.open_lengths() == [2, 2, 2]
        assert state.endpoints(6) == (8, 11)
        assert state.endpoints(4) == (11, 6)
        assert state.faces[7].edges == (10, 12, 4, 13, 14)
        assert state.tally.as_tuple() == (1, 1, 1, 2)

    def test_undo_restores_wrapped_erase(self):
        state = _played((3, Move.STEP), (3, Move.STAIR))
        before = state.copy()
        record = apply_move(state, 4, Move.WRAP_NEXT_WIDE)
        state.undo(record)
        assert state == before


class TestIllegalMoves:
    """The executor refuses moves the checker rejects."""

    def test_illegal_move_raises(self):
        state = PlanarMapState.seed()
        with pytest.raises(IllegalMoveError, match="not legal"):
            apply_move(state, 0, Move.CHORD)

    def test_illegal_move_leaves_state_untouched(self):
        state = PlanarMapState.seed()
        with pytest.raises(IllegalMoveError):
            apply_move(state, 2, Move.PEAK)
        assert state == PlanarMapState.seed()

    def test_state_usable_after_refusal(self):
        state = PlanarMapState.seed()
        with pytest.raises(IllegalMoveError):
            apply_move(state, 0, Move.WRAP_PREV)
        apply_move(state, 0, Move.PEAK)
        assert state.num_vertices == 8


class TestExploration:
    """Every legal move near the seed keeps the invariants and undoes exactly."""

    def test_moves_to_depth_three(self):
        seen: set[Move] = set()
        applied = _explore(PlanarMapState.seed(), 3, seen)
        assert applied > 0
        assert seen == set(Move)

    def test_snapshot_and_undo_agree(self):
        """A copied state and an undone state evolve identically."""
        state = PlanarMapState.seed()
        snapshot = state.copy()
        record = apply_move(state, 0, Move.STAIR)
        state.undo(record)
        apply_move(state, 1, Move.PEAK)
        apply_move(snapshot, 1, Move.PEAK)
        assert state == snapshot
