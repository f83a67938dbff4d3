"""
Common types for the census engine.

This module provides the small shared vocabulary used across modules:
- FaceProfile: Target numbers of triangles, squares and pentagons
- EventType: Search lifecycle and diagnostic events
- Event: Event payload for callbacks
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TypedDict


@dataclass(frozen=True)
class FaceProfile:
    """
    Required closed-face counts of a completed map.

    Hexagons are unbounded. For a cubic planar graph Euler's formula forces
    3 * triangles + 2 * squares + pentagons == 12, which the default profile
    satisfies.

    Attributes:
        triangles: Number of triangular faces
        squares: Number of quadrilateral faces
        pentagons: Number of pentagonal faces
    """

    triangles: int = 1
    squares: int = 2
    pentagons: int = 5

    @property
    def fixed_faces(self) -> int:
        """Faces that are not hexagons."""
        return self.triangles + self.squares + self.pentagons


TARGET_PROFILE = FaceProfile()

# Shortest and longest closed face permitted in a completed map.
MIN_FACE_LENGTH = 3
MAX_FACE_LENGTH = 6


class EventType(IntEnum):
    """
    Search lifecycle events.

    - start: Search has begun
    - choose: A face was selected for closing
    - move: A move was applied to the selected face
    - accept: A completed map was registered as a new isomorphism class
    - duplicate: A completed map was isomorphic to one already registered
    - prune: A branch was abandoned (payload carries the reason)
    - end: Search stack is empty
    """

    start = 0
    choose = 1
    move = 2
    accept = 3
    duplicate = 4
    prune = 5
    end = 6


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    depth: int
    face: int
    position: int
    move: int
    reason: str
    hexagons: int
    vertices: int
    count: int
    summary: str


__all__ = [
    "FaceProfile",
    "TARGET_PROFILE",
    "MIN_FACE_LENGTH",
    "MAX_FACE_LENGTH",
    "EventType",
    "Event",
]
