"""
Incremental planar-map construction.

This module provides the partial-map engine the census search drives:
- PlanarMapState: Faces, edges and open boundary, with undo-log backtracking
- Move, is_legal, next_legal_move: The ten face-closure moves and their rules
- apply_move: Structural edit performed by a legal move
"""

from ._cyclic import CyclicSequence
from ._faces import ClosedFace, Edge, Face, FaceTally, OpenFace
from .executor import apply_move
from .moves import (
    EDGES_ADDED,
    VERTICES_ADDED,
    Move,
    Neighborhood,
    is_legal,
    legal_moves,
    next_legal_move,
)
from .state import MAX_OPEN_LENGTH, PlanarMapState, UndoRecord

__all__ = [
    # State
    "PlanarMapState",
    "UndoRecord",
    "MAX_OPEN_LENGTH",
    "CyclicSequence",
    "OpenFace",
    "ClosedFace",
    "Face",
    "Edge",
    "FaceTally",
    # Moves
    "Move",
    "Neighborhood",
    "EDGES_ADDED",
    "VERTICES_ADDED",
    "is_legal",
    "legal_moves",
    "next_legal_move",
    "apply_move",
]
