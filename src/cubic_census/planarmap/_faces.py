"""Face variants and closed-face bookkeeping for planar-map states."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..types import TARGET_PROFILE, FaceProfile
from ..validation import InvariantViolationError

# Edge type: (v1, v2) as created; the orientation matters for open faces.
Edge = tuple[int, int]


@dataclass
class OpenFace:
    """A face whose boundary is still a path.

    The path runs from ``start`` to ``end`` through ``edges`` in order. Edges
    appended at the end must begin at the current end vertex; edges
    prepended must finish at the current start vertex.

    Attributes:
        edges: Edge indices along the path.
        start: First vertex of the path.
        end: Last vertex of the path.
    """

    edges: list[int]
    start: int
    end: int

    def __len__(self) -> int:
        return len(self.edges)

    def copy(self) -> OpenFace:
        return OpenFace(list(self.edges), self.start, self.end)

    def append(self, edge_id: int, edge: Edge) -> None:
        """Extend the path past its end vertex."""
        if edge[0] != self.end:
            raise InvariantViolationError(f"edge {edge} does not leave end vertex {self.end}")
        self.edges.append(edge_id)
        self.end = edge[1]

    def prepend(self, edge_id: int, edge: Edge) -> None:
        """Extend the path before its start vertex."""
        if edge[1] != self.start:
            raise InvariantViolationError(f"edge {edge} does not enter start vertex {self.start}")
        self.edges.insert(0, edge_id)
        self.start = edge[0]

    def absorb(self, other: OpenFace) -> None:
        """Concatenate a following face whose path starts where this one ends."""
        if other.start != self.end:
            raise InvariantViolationError(
                f"face starting at {other.start} does not follow end {self.end}"
            )
        self.edges.extend(other.edges)
        self.end = other.end

    def close(self, *extra: int) -> ClosedFace:
        """Return the closed face formed by this path followed by extra edges."""
        return ClosedFace((*self.edges, *extra))


@dataclass(frozen=True)
class ClosedFace:
    """A face whose boundary is a complete cycle.

    Edges are kept in the order they joined the boundary: the path of the
    open face, then the edges that closed it.
    """

    edges: tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.edges)

    def copy(self) -> ClosedFace:
        return self


Face = Union[OpenFace, ClosedFace]


class FaceTally:
    """
    Counts of closed faces by length, checked against a face profile.

    Used two ways: as the running tally of a state, and as the tentative
    counter of the legality checker, where ``add`` reports whether one more
    face of a given length still fits the budget.

    Example:
        tally = FaceTally(triangles=1, squares=2)
        tally.add(4)   # False: a third square exceeds the budget
        tally.add(6)   # True: hexagons are unbounded
    """

    __slots__ = ("triangles", "squares", "pentagons", "hexagons", "profile")

    def __init__(
        self,
        triangles: int = 0,
        squares: int = 0,
        pentagons: int = 0,
        hexagons: int = 0,
        profile: FaceProfile = TARGET_PROFILE,
    ) -> None:
        self.triangles = triangles
        self.squares = squares
        self.pentagons = pentagons
        self.hexagons = hexagons
        self.profile = profile

    def __repr__(self) -> str:
        return (
            f"FaceTally(triangles={self.triangles}, squares={self.squares}, "
            f"pentagons={self.pentagons}, hexagons={self.hexagons})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FaceTally):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.triangles, self.squares, self.pentagons, self.hexagons)

    def copy(self) -> FaceTally:
        return FaceTally(*self.as_tuple(), profile=self.profile)

    def tentative(self) -> FaceTally:
        """Counter for legality checks: one triangle already placed."""
        return FaceTally(
            triangles=self.profile.triangles,
            squares=self.squares,
            pentagons=self.pentagons,
            profile=self.profile,
        )

    def add(self, length: int) -> bool:
        """Count one more face of the given length; False if over budget."""
        if length == 3:
            self.triangles += 1
            return self.triangles <= self.profile.triangles
        if length == 4:
            self.squares += 1
            return self.squares <= self.profile.squares
        if length == 5:
            self.pentagons += 1
            return self.pentagons <= self.profile.pentagons
        if length == 6:
            self.hexagons += 1
            return True
        return False

    def within_budget(self) -> bool:
        """True while no bounded count exceeds the profile."""
        return (
            self.triangles <= self.profile.triangles
            and self.squares <= self.profile.squares
            and self.pentagons <= self.profile.pentagons
        )

    def matches_profile(self) -> bool:
        """True when the bounded counts equal the profile exactly."""
        return (
            self.triangles == self.profile.triangles
            and self.squares == self.profile.squares
            and self.pentagons == self.profile.pentagons
        )
