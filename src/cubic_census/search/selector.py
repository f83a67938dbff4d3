"""Greedy choice of the next open face to close."""

from __future__ import annotations

from ..planarmap import PlanarMapState


def choose_face(state: PlanarMapState) -> int:
    """
    Pick the open face the search should close next.

    The longest open face is the most constrained one (fewest legal
    closures), so it is tried first. Ties go to the lowest ring position.

    Args:
        state: Partial map with at least one open face

    Returns:
        Ring position of the chosen face.

    Raises:
        IndexError: If the open boundary is empty.
    """
    lengths = state.open_lengths()
    if not lengths:
        raise IndexError("no open face to choose")
    best = 0
    for pos, length in enumerate(lengths):
        if length > lengths[best]:
            best = pos
    return best


__all__ = ["choose_face"]
