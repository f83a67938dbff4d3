"""
Move executor: applies a legal face-closure move to a planar-map state.

Every move closes the selected face F. Depending on the move it also closes
a neighbouring face, lets one open face absorb another, or leaves new
single-edge open faces on the boundary in place of F. New edges are
oriented so that the start/end vertices of the open faces they extend stay
valid. Faces that disappear are removed at the end of the move, highest
index first, with the open-boundary references shifted down to match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..validation import IllegalMoveError
from .moves import Move, is_legal
from .state import PlanarMapState, UndoRecord


@dataclass(frozen=True)
class _Site:
    """Face indices and endpoints around the selected face, read before editing."""

    position: int
    n: int
    prev3: int
    prev2: int
    prev: int
    face: int
    next: int
    next2: int
    next3: int
    start: int
    end: int

    @classmethod
    def read(cls, state: PlanarMapState, position: int) -> _Site:
        ring = state.open_faces
        face = ring.at(position)
        start, end = state.endpoints(face)
        return cls(
            position=position,
            n=len(ring),
            prev3=ring.at(position, -3),
            prev2=ring.at(position, -2),
            prev=ring.at(position, -1),
            face=face,
            next=ring.at(position, 1),
            next2=ring.at(position, 2),
            next3=ring.at(position, 3),
            start=start,
            end=end,
        )


def _chord(state: PlanarMapState, site: _Site) -> None:
    e = state.add_edge(site.start, site.end)
    state.extend_end(site.prev, e)
    state.open_faces.erase_run(site.position, 2)
    if site.n == 2:
        # prev and next are the same face, now closed as well
        state.close_face(site.prev)
    else:
        state.absorb(site.prev, site.next)
    state.close_face(site.face, e)


def _peak(state: PlanarMapState, site: _Site) -> None:
    v = state.add_vertex()
    e1 = state.add_edge(site.start, v)
    state.extend_end(site.prev, e1)
    e2 = state.add_edge(v, site.end)
    state.extend_start(site.next, e2)
    state.open_faces.erase_run(site.position, 1)
    state.close_face(site.face, e2, e1)


def _wrap_next(state: PlanarMapState, site: _Site) -> None:
    _, next_end = state.endpoints(site.next)
    e1 = state.add_edge(site.end, next_end)
    state.close_face(site.next, e1)

    across = state.open_face(site.next2).edges
    _, across_end = state.endpoints(site.next2)
    e2 = state.add_edge(site.start, across_end)
    state.extend_end(site.prev, e2)

    state.open_faces.erase_run(site.position, 4)
    state.discard_face(site.next2)
    if site.n == 4:
        # prev is also next3 and closes with e2
        state.close_face(site.prev)
    else:
        state.absorb(site.prev, site.next3)
    state.close_face(site.face, e1, *across, e2)


def _wrap_prev(state: PlanarMapState, site: _Site) -> None:
    prev_start, _ = state.endpoints(site.prev)
    e1 = state.add_edge(prev_start, site.start)
    state.close_face(site.prev, e1)

    across = state.open_face(site.prev2).edges
    across_start, _ = state.endpoints(site.prev2)
    e2 = state.add_edge(across_start, site.end)
    state.extend_end(site.prev3, e2)

    state.open_faces.erase_run(state.open_faces.offset(site.position, -2), 4)
    state.discard_face(site.prev2)
    if site.n == 4:
        state.close_face(site.next)
    else:
        state.absorb(site.prev3, site.next)
    state.close_face(site.face, e1, *across, e2)


def _step(state: PlanarMapState, site: _Site) -> None:
    a = state.add_vertex()
    b = state.add_vertex()
    e1 = state.add_edge(site.start, a)
    state.extend_end(site.prev, e1)
    e2 = state.add_edge(a, b)
    state.open_faces.replace(site.position, [state.new_open_face(e2)])
    e3 = state.add_edge(b, site.end)
    state.extend_start(site.next, e3)
    state.close_face(site.face, e3, e2, e1)


def _wrap_next_peak(state: PlanarMapState, site: _Site) -> None:
    _, next_end = state.endpoints(site.next)
    e1 = state.add_edge(site.end, next_end)
    state.close_face(site.next, e1)

    across = state.open_face(site.next2).edges[0]
    _, across_end = state.endpoints(site.next2)
    v = state.add_vertex()
    e2 = state.add_edge(v, across_end)
    state.extend_start(site.next3, e2)
    e3 = state.add_edge(site.start, v)
    state.extend_end(site.prev, e3)

    state.open_faces.erase_run(site.position, 3)
    state.discard_face(site.next2)
    state.close_face(site.face, e1, across, e2, e3)


def _wrap_prev_peak(state: PlanarMapState, site: _Site) -> None:
    prev_start, _ = state.endpoints(site.prev)
    e1 = state.add_edge(prev_start, site.start)
    state.close_face(site.prev, e1)

    across = state.open_face(site.prev2).edges[0]
    across_start, _ = state.endpoints(site.prev2)
    v = state.add_vertex()
    e2 = state.add_edge(across_start, v)
    state.extend_end(site.prev3, e2)
    e3 = state.add_edge(v, site.end)
    state.extend_start(site.next, e3)

    state.open_faces.erase_run(state.open_faces.offset(site.position, -2), 3)
    state.discard_face(site.prev2)
    state.close_face(site.face, e1, across, e2, e3)


def _stair(state: PlanarMapState, site: _Site) -> None:
    a = state.add_vertex()
    e1 = state.add_edge(site.start, a)
    state.extend_end(site.prev, e1)
    b = state.add_vertex()
    e2 = state.add_edge(a, b)
    first = state.new_open_face(e2)
    c = state.add_vertex()
    e3 = state.add_edge(b, c)
    second = state.new_open_face(e3)
    e4 = state.add_edge(c, site.end)
    state.extend_start(site.next, e4)
    state.open_faces.replace(site.position, [first, second])
    state.close_face(site.face, e1, e2, e3, e4)


_EXECUTORS: dict[Move, Callable[[PlanarMapState, _Site], None]] = {
    Move.CHORD: _chord,
    Move.PEAK: _peak,
    Move.WRAP_NEXT: _wrap_next,
    Move.WRAP_PREV: _wrap_prev,
    Move.STEP: _step,
    Move.WRAP_NEXT_WIDE: _wrap_next,
    Move.WRAP_PREV_WIDE: _wrap_prev,
    Move.WRAP_NEXT_PEAK: _wrap_next_peak,
    Move.WRAP_PREV_PEAK: _wrap_prev_peak,
    Move.STAIR: _stair,
}


def apply_move(state: PlanarMapState, position: int, move: int) -> UndoRecord:
    """
    Apply a face-closure move in place.

    Args:
        state: Partial map to modify
        position: Ring position of the face to close
        move: Move id (1..10)

    Returns:
        UndoRecord that reverts the move via ``state.undo``.

    Raises:
        IllegalMoveError: If the move is not legal for this face.
    """
    if not is_legal(state, position, move):
        raise IllegalMoveError(
            f"move {move} is not legal on ring position {position} "
            f"(open lengths {state.open_lengths()})"
        )
    site = _Site.read(state, position)
    state.begin_move()
    _EXECUTORS[Move(move)](state, site)
    return state.end_move()


__all__ = ["apply_move"]
