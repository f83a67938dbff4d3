"""
Face-closure moves and their legality predicates.

Each move closes the selected open face F by adding between one and four
edges outside the current map. Legality depends only on the number of open
faces, the lengths of F and of its neighbours on the boundary (up to three
steps either way), and the current square and pentagon counts. A move is
legal only if every face it closes still fits the face profile, checked
with a tentative tally that already holds the triangle.

Moves:
    CHORD             -- 1 edge joining F's endpoints; the previous face
                         absorbs the next one.
    PEAK              -- 2 edges to one new vertex.
    WRAP_NEXT         -- 3 edges: close the next face across a single-edge
                         face, then back to F's start.
    WRAP_PREV         -- mirror of WRAP_NEXT.
    STEP              -- 3 edges through two new vertices; leaves one new
                         single-edge open face.
    WRAP_NEXT_WIDE    -- like WRAP_NEXT across a two-edge face.
    WRAP_PREV_WIDE    -- mirror of WRAP_NEXT_WIDE.
    WRAP_NEXT_PEAK    -- like WRAP_NEXT, meeting F's start at a new vertex.
    WRAP_PREV_PEAK    -- mirror of WRAP_NEXT_PEAK.
    STAIR             -- 4 edges through three new vertices; leaves two new
                         single-edge open faces.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

from ._faces import FaceTally
from .state import PlanarMapState


class Move(IntEnum):
    """Face-closure move identifiers, tried in ascending order."""

    CHORD = 1
    PEAK = 2
    WRAP_NEXT = 3
    WRAP_PREV = 4
    STEP = 5
    WRAP_NEXT_WIDE = 6
    WRAP_PREV_WIDE = 7
    WRAP_NEXT_PEAK = 8
    WRAP_PREV_PEAK = 9
    STAIR = 10


# Edges added by each move.
EDGES_ADDED = {
    Move.CHORD: 1,
    Move.PEAK: 2,
    Move.WRAP_NEXT: 3,
    Move.WRAP_PREV: 3,
    Move.STEP: 3,
    Move.WRAP_NEXT_WIDE: 4,
    Move.WRAP_PREV_WIDE: 4,
    Move.WRAP_NEXT_PEAK: 4,
    Move.WRAP_PREV_PEAK: 4,
    Move.STAIR: 4,
}

# Vertices created by each move.
VERTICES_ADDED = {
    Move.CHORD: 0,
    Move.PEAK: 1,
    Move.WRAP_NEXT: 0,
    Move.WRAP_PREV: 0,
    Move.STEP: 2,
    Move.WRAP_NEXT_WIDE: 0,
    Move.WRAP_PREV_WIDE: 0,
    Move.WRAP_NEXT_PEAK: 1,
    Move.WRAP_PREV_PEAK: 1,
    Move.STAIR: 3,
}


@dataclass(frozen=True)
class Neighborhood:
    """
    Boundary lengths around the selected open face.

    Attributes:
        n: Number of open faces on the boundary
        face: Length of the selected face F
        prev, prev2, prev3: Lengths one, two and three steps before F
        next, next2, next3: Lengths one, two and three steps after F
    """

    n: int
    face: int
    prev: int
    next: int
    prev2: int
    next2: int
    prev3: int
    next3: int

    @classmethod
    def around(cls, state: PlanarMapState, position: int) -> Neighborhood:
        """Read the neighbourhood of the open face at a ring position."""
        ring = state.open_faces

        def length(k: int) -> int:
            return len(state.faces[ring.at(position, k)])

        return cls(
            n=len(ring),
            face=length(0),
            prev=length(-1),
            next=length(1),
            prev2=length(-2),
            next2=length(2),
            prev3=length(-3),
            next3=length(3),
        )


Predicate = Callable[[Neighborhood, FaceTally], bool]


def _chord(nb: Neighborhood, tally: FaceTally) -> bool:
    if nb.n > 2 and nb.prev + nb.next > 4:
        return False
    if nb.n == 2 and not tally.add(nb.next + 1):
        return False
    return tally.add(nb.face + 1)


def _peak(nb: Neighborhood, tally: FaceTally) -> bool:
    if nb.prev > 4 or nb.next > 4:
        return False
    return tally.add(nb.face + 2)


def _wrap_next(across: int, closing: int) -> Predicate:
    def check(nb: Neighborhood, tally: FaceTally) -> bool:
        if nb.n < 4 or nb.n == 5:
            return False
        if nb.next2 != across:
            return False
        if not tally.add(nb.next + 1):
            return False
        if nb.n > 4 and nb.prev + nb.next3 > 4:
            return False
        if nb.n == 4 and not tally.add(nb.prev + 1):
            return False
        return tally.add(nb.face + closing)

    return check


def _wrap_prev(across: int, closing: int) -> Predicate:
    def check(nb: Neighborhood, tally: FaceTally) -> bool:
        # With four open faces this is the same map as the forward wrap.
        if nb.n < 6:
            return False
        if nb.prev2 != across:
            return False
        if not tally.add(nb.prev + 1):
            return False
        if nb.prev3 + nb.next > 4:
            return False
        return tally.add(nb.face + closing)

    return check


def _step(nb: Neighborhood, tally: FaceTally) -> bool:
    if nb.prev > 4 or nb.next > 4:
        return False
    return tally.add(nb.face + 3)


def _wrap_next_peak(nb: Neighborhood, tally: FaceTally) -> bool:
    if nb.n < 5:
        return False
    if nb.next2 != 1:
        return False
    if nb.prev > 4 or nb.next3 > 4:
        return False
    if not tally.add(nb.next + 1):
        return False
    return tally.add(nb.face + 4)


def _wrap_prev_peak(nb: Neighborhood, tally: FaceTally) -> bool:
    if nb.n < 5:
        return False
    if nb.prev2 != 1:
        return False
    if nb.next > 4 or nb.prev3 > 4:
        return False
    if not tally.add(nb.prev + 1):
        return False
    return tally.add(nb.face + 4)


def _stair(nb: Neighborhood, tally: FaceTally) -> bool:
    if nb.prev > 4 or nb.next > 4:
        return False
    return tally.add(nb.face + 4)


_PREDICATES: dict[Move, Predicate] = {
    Move.CHORD: _chord,
    Move.PEAK: _peak,
    Move.WRAP_NEXT: _wrap_next(1, 3),
    Move.WRAP_PREV: _wrap_prev(1, 3),
    Move.STEP: _step,
    Move.WRAP_NEXT_WIDE: _wrap_next(2, 4),
    Move.WRAP_PREV_WIDE: _wrap_prev(2, 4),
    Move.WRAP_NEXT_PEAK: _wrap_next_peak,
    Move.WRAP_PREV_PEAK: _wrap_prev_peak,
    Move.STAIR: _stair,
}


def is_legal(state: PlanarMapState, position: int, move: int) -> bool:
    """
    Test whether a move may close the open face at a ring position.

    Pure: reads the state and never modifies it.

    Args:
        state: Current partial map
        position: Index into the open-boundary sequence
        move: Move id (1..10); any other value is never legal

    Returns:
        True if the move is applicable.
    """
    if move not in _PREDICATES:
        return False
    # A lone open face cannot be closed consistently.
    if len(state.open_faces) < 2:
        return False
    nb = Neighborhood.around(state, position)
    return _PREDICATES[Move(move)](nb, state.tally.tentative())


def legal_moves(state: PlanarMapState, position: int) -> list[Move]:
    """All legal moves for the face at position, in ascending order."""
    return [move for move in Move if is_legal(state, position, move)]


def next_legal_move(state: PlanarMapState, position: int, after: int = 0) -> Optional[Move]:
    """
    Find the first legal move with an id greater than after.

    Args:
        state: Current partial map
        position: Index into the open-boundary sequence
        after: Last move id already tried (0 when none)

    Returns:
        The next legal Move, or None when no untried move applies.
    """
    for move in Move:
        if move > after and is_legal(state, position, move):
            return move
    return None


__all__ = [
    "Move",
    "Neighborhood",
    "EDGES_ADDED",
    "VERTICES_ADDED",
    "is_legal",
    "legal_moves",
    "next_legal_move",
]
