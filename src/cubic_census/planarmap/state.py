"""
Partial planar map grown face by face around a unique triangle.

The state holds the embedding built so far: an append-only edge list, the
faces (open paths on the outer boundary, or closed cycles), the cyclic order
of the open faces around the unbounded region, and a tally of closed faces
by length. Mutations go through the primitives below so that every move can
be journaled and reverted without copying the whole state.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..types import MAX_FACE_LENGTH, MIN_FACE_LENGTH, TARGET_PROFILE, FaceProfile
from ..validation import InvariantViolationError, validate_cubic
from ._cyclic import CyclicSequence
from ._faces import ClosedFace, Edge, Face, FaceTally, OpenFace

# Longest open face that can still close within MAX_FACE_LENGTH.
MAX_OPEN_LENGTH = MAX_FACE_LENGTH - 1


@dataclass
class UndoRecord:
    """Inverse of one move, replayed by ``PlanarMapState.undo``.

    Attributes:
        num_vertices: Vertex count before the move.
        num_edges: Edge count before the move.
        num_faces: Face count before the move (later faces were appended).
        tally: Closed-face counts before the move.
        ring: Open-boundary entries before the move.
        saved: Pre-move copy of every face the move touched, by pre-move index.
        removed: Face indices deleted by the move, in deletion order.
    """

    num_vertices: int
    num_edges: int
    num_faces: int
    tally: tuple[int, int, int, int]
    ring: list[int]
    saved: dict[int, Face] = field(default_factory=dict)
    removed: list[int] = field(default_factory=list)


class PlanarMapState:
    """
    Partial cubic planar map with an open outer boundary.

    Vertices are numbered from 1. Faces are referenced by their index in
    ``faces``; the open-boundary sequence ``open_faces`` lists the indices of
    open faces in cyclic order, consecutive entries sharing a vertex (the end
    of one path is the start of the next).

    Example:
        state = PlanarMapState.seed()
        state.num_vertices      # 7
        state.open_lengths()    # [2, 2, 1, 1, 1]
    """

    __slots__ = (
        "num_vertices",
        "edges",
        "faces",
        "open_faces",
        "tally",
        "degrees",
        "_journal",
        "_dead",
    )

    def __init__(
        self,
        num_vertices: int,
        edges: Sequence[Edge],
        faces: Sequence[Face],
        open_faces: Sequence[int],
        tally: FaceTally,
    ) -> None:
        self.num_vertices = num_vertices
        self.edges: list[Edge] = list(edges)
        self.faces: list[Face] = list(faces)
        self.open_faces = CyclicSequence(open_faces)
        self.tally = tally
        self.degrees = [0] * (num_vertices + 1)
        for u, v in self.edges:
            self.degrees[u] += 1
            self.degrees[v] += 1
        self._journal: Optional[UndoRecord] = None
        self._dead: list[int] = []

    @classmethod
    def seed(cls, profile: FaceProfile = TARGET_PROFILE) -> PlanarMapState:
        """
        Build the fixed starting fragment.

        The triangle 1-2-3 shares edge 1-3 with the hexagon 1-3-4-5-6-7. The
        remaining faces around them are open: two paths of length 2 through
        the triangle's free vertices and three single edges of the hexagon.
        """
        edges: list[Edge] = [
            (1, 2),
            (2, 3),
            (1, 3),
            (3, 4),
            (4, 5),
            (5, 6),
            (6, 7),
            (7, 1),
        ]
        faces: list[Face] = [
            ClosedFace((0, 1, 2)),
            ClosedFace((2, 3, 4, 5, 6, 7)),
        ]
        for path in ([7, 0], [1, 3], [4], [5], [6]):
            faces.append(OpenFace(path, edges[path[0]][0], edges[path[-1]][1]))
        tally = FaceTally(triangles=1, hexagons=1, profile=profile)
        return cls(7, edges, faces, [2, 3, 4, 5, 6], tally)

    def copy(self) -> PlanarMapState:
        """Full snapshot (journal state is not copied)."""
        clone = PlanarMapState.__new__(PlanarMapState)
        clone.num_vertices = self.num_vertices
        clone.edges = list(self.edges)
        clone.faces = [face.copy() for face in self.faces]
        clone.open_faces = self.open_faces.copy()
        clone.tally = self.tally.copy()
        clone.degrees = list(self.degrees)
        clone._journal = None
        clone._dead = []
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlanarMapState):
            return NotImplemented
        return (
            self.num_vertices == other.num_vertices
            and self.edges == other.edges
            and self.faces == other.faces
            and self.open_faces == other.open_faces
            and self.tally == other.tally
            and self.degrees == other.degrees
        )

    def __repr__(self) -> str:
        return (
            f"PlanarMapState(vertices={self.num_vertices}, edges={self.num_edges}, "
            f"faces={self.face_count}, open={self.open_lengths()})"
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    @property
    def face_count(self) -> int:
        """Open plus closed faces."""
        return len(self.faces)

    @property
    def profile(self) -> FaceProfile:
        return self.tally.profile

    def degree(self, vertex: int) -> int:
        return self.degrees[vertex]

    def is_closed(self, face_index: int) -> bool:
        return isinstance(self.faces[face_index], ClosedFace)

    def open_face(self, face_index: int) -> OpenFace:
        """Return an open face, raising if it has already closed."""
        face = self.faces[face_index]
        if not isinstance(face, OpenFace):
            raise InvariantViolationError(f"face {face_index} is closed")
        return face

    def endpoints(self, face_index: int) -> tuple[int, int]:
        """(start, end) vertices of an open face."""
        face = self.open_face(face_index)
        return face.start, face.end

    def face_lengths(self) -> list[int]:
        return [len(face) for face in self.faces]

    def open_lengths(self) -> list[int]:
        """Lengths of the open faces in boundary order."""
        return [len(self.faces[fi]) for fi in self.open_faces]

    def edge_list(self) -> list[Edge]:
        return list(self.edges)

    def neighbor_sizes(self, face_index: int) -> list[int]:
        """
        Lengths of the faces across each edge of a face.

        Edges are visited in boundary order: the path of the face as it
        grew, then the edges that closed it.

        Raises:
            InvariantViolationError: If an edge does not lie on exactly one
                other face.
        """
        owners: dict[int, list[int]] = {}
        for fi, face in enumerate(self.faces):
            for e in face.edges:
                owners.setdefault(e, []).append(fi)

        face = self.faces[face_index]
        sizes: list[int] = []
        for e in face.edges:
            others = [fi for fi in owners[e] if fi != face_index]
            if len(others) != 1:
                raise InvariantViolationError(
                    f"edge {e} of face {face_index} borders {len(others)} other faces"
                )
            sizes.append(len(self.faces[others[0]]))
        return sizes

    def summary(self) -> str:
        """One-line description of a completed map.

        Lists the faces around the triangle and around each square, then the
        hexagon and vertex counts, e.g. ``tri: 6, 5, 5  sqr: 5, 6, 4, 5  ...``.
        """
        parts: list[str] = []
        lengths = self.face_lengths()
        if 3 in lengths:
            tri = lengths.index(3)
            parts.append("tri: " + ", ".join(map(str, self.neighbor_sizes(tri))))
        for fi, length in enumerate(lengths):
            if length == 4:
                parts.append("sqr: " + ", ".join(map(str, self.neighbor_sizes(fi))))
        parts.append(f"{self.tally.hexagons:2d} hexes, {self.num_vertices} verts")
        return "  ".join(parts)

    # -------------------------------------------------------------------------
    # Size Budgets
    # -------------------------------------------------------------------------

    def sizecheck(self) -> bool:
        """
        Prune test for a partial map.

        False when any face is longer than a hexagon, any open face is too
        long to close, any closed face is shorter than a triangle, or the
        closed counts exceed the profile.
        """
        closed: Counter[int] = Counter()
        for face in self.faces:
            length = len(face)
            if length > MAX_FACE_LENGTH:
                return False
            if isinstance(face, ClosedFace):
                closed[length] += 1
            elif length > MAX_OPEN_LENGTH:
                return False
        if any(closed[k] for k in range(MIN_FACE_LENGTH)):
            return False
        self._check_tally(closed)
        return self.tally.within_budget()

    def sizefinal(self) -> bool:
        """
        Completion test for a fully closed map.

        True when every face is closed with length in [3, 6] and the closed
        counts equal the profile exactly.

        Raises:
            InvariantViolationError: If the tally disagrees with the faces or
                the completed map is not cubic.
        """
        if len(self.open_faces):
            return False
        closed: Counter[int] = Counter()
        for face in self.faces:
            length = len(face)
            if not isinstance(face, ClosedFace):
                return False
            if length < MIN_FACE_LENGTH or length > MAX_FACE_LENGTH:
                return False
            closed[length] += 1
        self._check_tally(closed)
        validate_cubic(self)
        return self.tally.matches_profile()

    def _check_tally(self, closed: Counter[int]) -> None:
        actual = (closed[3], closed[4], closed[5], closed[6])
        if actual != self.tally.as_tuple():
            raise InvariantViolationError(
                f"closed faces by length {actual} disagree with tally {self.tally.as_tuple()}"
            )

    # -------------------------------------------------------------------------
    # Journaled Mutation
    # -------------------------------------------------------------------------

    def begin_move(self) -> None:
        """Start recording the inverse of the next move."""
        if self._journal is not None:
            raise InvariantViolationError("move already in progress")
        self._journal = UndoRecord(
            num_vertices=self.num_vertices,
            num_edges=len(self.edges),
            num_faces=len(self.faces),
            tally=self.tally.as_tuple(),
            ring=list(self.open_faces.items),
        )
        self._dead = []

    def end_move(self) -> UndoRecord:
        """
        Finish a move: drop dead face slots and return the undo record.

        Dead faces are deleted in descending index order; after each deletion
        every open-boundary reference above it shifts down by one.
        """
        record = self._journal
        if record is None:
            raise InvariantViolationError("no move in progress")
        for fi in sorted(self._dead, reverse=True):
            self.open_faces.renumber_after(fi)
            del self.faces[fi]
            record.removed.append(fi)
        self._dead = []
        self._journal = None
        return record

    def undo(self, record: UndoRecord) -> None:
        """Revert the move described by record (must be the latest move)."""
        for fi in reversed(record.removed):
            self.faces.insert(fi, record.saved[fi])
        del self.faces[record.num_faces :]
        for fi, face in record.saved.items():
            self.faces[fi] = face

        for u, v in self.edges[record.num_edges :]:
            self.degrees[u] -= 1
            self.degrees[v] -= 1
        del self.edges[record.num_edges :]
        del self.degrees[record.num_vertices + 1 :]
        self.num_vertices = record.num_vertices

        t, s, p, h = record.tally
        self.tally = FaceTally(t, s, p, h, profile=self.tally.profile)
        self.open_faces = CyclicSequence(record.ring)

    def _touch(self, face_index: int) -> None:
        journal = self._journal
        if journal is None:
            return
        if face_index < journal.num_faces and face_index not in journal.saved:
            journal.saved[face_index] = self.faces[face_index].copy()

    def add_vertex(self) -> int:
        """Create a vertex and return its id."""
        self.num_vertices += 1
        self.degrees.append(0)
        return self.num_vertices

    def add_edge(self, u: int, v: int) -> int:
        """
        Append edge (u, v) and return its index.

        Raises:
            InvariantViolationError: If either endpoint would exceed degree 3.
        """
        for w in (u, v):
            if self.degrees[w] >= 3:
                raise InvariantViolationError(f"vertex {w} would exceed degree 3")
        self.degrees[u] += 1
        self.degrees[v] += 1
        self.edges.append((u, v))
        return len(self.edges) - 1

    def new_open_face(self, edge_id: int) -> int:
        """Append a single-edge open face and return its index."""
        u, v = self.edges[edge_id]
        self.faces.append(OpenFace([edge_id], u, v))
        return len(self.faces) - 1

    def extend_end(self, face_index: int, edge_id: int) -> None:
        self._touch(face_index)
        self.open_face(face_index).append(edge_id, self.edges[edge_id])

    def extend_start(self, face_index: int, edge_id: int) -> None:
        self._touch(face_index)
        self.open_face(face_index).prepend(edge_id, self.edges[edge_id])

    def absorb(self, face_index: int, other_index: int) -> None:
        """Concatenate the following open face into face_index; other dies."""
        self._touch(face_index)
        self.open_face(face_index).absorb(self.open_face(other_index))
        self.discard_face(other_index)

    def close_face(self, face_index: int, *extra: int) -> None:
        """
        Close an open face with optional extra edges and count it.

        Raises:
            InvariantViolationError: If the closed length is not a square,
                pentagon or hexagon.
        """
        self._touch(face_index)
        closed = self.open_face(face_index).close(*extra)
        length = len(closed)
        if length < 4 or length > MAX_FACE_LENGTH:
            raise InvariantViolationError(f"closing face {face_index} of size {length}")
        self.faces[face_index] = closed
        self.tally.add(length)

    def discard_face(self, face_index: int) -> None:
        """Mark a face slot for removal at the end of the move."""
        self._touch(face_index)
        if face_index not in self._dead:
            self._dead.append(face_index)


__all__ = [
    "PlanarMapState",
    "UndoRecord",
    "MAX_OPEN_LENGTH",
]
