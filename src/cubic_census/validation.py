"""
Validation utilities and error types for the census engine.

Provides the exception hierarchy shared by every module, configuration
validators for the search front end, and structural checks for planar-map
states. Structural checks either raise descriptive exceptions (strict mode)
or return the list of issues they found.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Sequence

from .types import TARGET_PROFILE

if TYPE_CHECKING:
    from .planarmap.state import PlanarMapState


class CensusError(Exception):
    """Base exception for the census engine."""

    pass


class ValidationError(CensusError, ValueError):
    """Base exception for invalid configuration."""

    pass


class InvalidFaceBoundError(ValidationError):
    """Raised when the total face bound is unusable."""

    pass


class InvalidBacktrackError(ValidationError):
    """Raised when an unknown backtracking strategy is requested."""

    pass


class InvalidVerbosityError(ValidationError):
    """Raised when the verbosity level is out of range."""

    pass


class InvariantViolationError(CensusError, AssertionError):
    """Raised when a planar-map state breaks an engine invariant.

    These indicate a defect in the move logic, never a recoverable runtime
    condition.
    """

    pass


class IllegalMoveError(InvariantViolationError):
    """Raised when a move is executed on a face where it is not legal."""

    pass


class CanonicalLabelingError(CensusError, ValueError):
    """Raised when a graph cannot be canonically labelled (malformed input)."""

    pass


# Smallest face count of a complete profile: 1 + 2 + 5 faces, no hexagons.
MIN_FACE_BOUND = TARGET_PROFILE.fixed_faces

BACKTRACK_STRATEGIES = ("undo", "snapshot")

MAX_VERBOSITY = 3


def validate_max_faces(max_faces: int) -> int:
    """
    Validate the total face bound.

    Args:
        max_faces: Upper bound on open plus closed faces

    Returns:
        Validated bound

    Raises:
        InvalidFaceBoundError: If the bound is not an integer >= 8
    """
    if isinstance(max_faces, bool) or not isinstance(max_faces, int):
        raise InvalidFaceBoundError(
            f"max_faces must be an integer, got {type(max_faces).__name__}"
        )
    if max_faces < MIN_FACE_BOUND:
        raise InvalidFaceBoundError(
            f"max_faces must be >= {MIN_FACE_BOUND}, got {max_faces}"
        )
    return max_faces


def validate_backtrack(strategy: str) -> str:
    """
    Validate the backtracking strategy name.

    Raises:
        InvalidBacktrackError: If strategy is not "undo" or "snapshot"
    """
    if strategy not in BACKTRACK_STRATEGIES:
        raise InvalidBacktrackError(
            f"backtrack must be one of {', '.join(BACKTRACK_STRATEGIES)}, got {strategy!r}"
        )
    return strategy


def validate_verbosity(level: int) -> int:
    """
    Validate a diagnostic verbosity level.

    Raises:
        InvalidVerbosityError: If level not in [0, 3]
    """
    if level < 0 or level > MAX_VERBOSITY:
        raise InvalidVerbosityError(f"verbosity must be in [0, {MAX_VERBOSITY}], got {level}")
    return level


# =============================================================================
# Structural Checks
# =============================================================================


def validate_cubic(state: PlanarMapState, strict: bool = True) -> list[str]:
    """
    Check that every vertex of a completed map has degree exactly 3.

    Degrees are recomputed from the edge list rather than read from the
    incrementally maintained counters, so the two are cross-checked.

    Args:
        state: Planar-map state to check
        strict: If True, raises on the first batch of issues

    Returns:
        List of issue descriptions

    Raises:
        InvariantViolationError: If strict=True and a vertex is not cubic
    """
    degree = _edge_degrees(state.num_vertices, state.edge_list())
    issues = [
        f"vertex {v} has degree {degree[v]}"
        for v in range(1, state.num_vertices + 1)
        if degree[v] != 3
    ]
    if degree[0]:
        issues.append("edge list references vertex 0")
    for v in range(1, state.num_vertices + 1):
        if degree[v] != state.degree(v):
            issues.append(
                f"vertex {v}: tracked degree {state.degree(v)} != actual {degree[v]}"
            )

    if strict and issues:
        raise InvariantViolationError("Map is not cubic:\n" + "\n".join(issues))
    return issues


def validate_euler(state: PlanarMapState, strict: bool = True) -> list[str]:
    """
    Check Euler's relation V - E + F = 2 and E = 3V/2 on a completed map.

    Raises:
        InvariantViolationError: If strict=True and either relation fails
    """
    v = state.num_vertices
    e = state.num_edges
    f = state.face_count
    issues: list[str] = []
    if v - e + f != 2:
        issues.append(f"V - E + F = {v} - {e} + {f} = {v - e + f}, expected 2")
    if 2 * e != 3 * v:
        issues.append(f"E = {e} but 3V/2 = {3 * v / 2}")

    if strict and issues:
        raise InvariantViolationError("Euler relation violated:\n" + "\n".join(issues))
    return issues


def validate_boundary(state: PlanarMapState, strict: bool = True) -> list[str]:
    """
    Check cyclic adjacency of the open-boundary sequence.

    Consecutive open faces must share a vertex: the end of each entry is the
    start of the next one (cyclically), and every referenced face is open.

    Raises:
        InvariantViolationError: If strict=True and adjacency is broken
    """
    issues: list[str] = []
    ring = state.open_faces
    closed = [fi for fi in ring if state.is_closed(fi)]
    for fi in closed:
        issues.append(f"open boundary references closed face {fi}")

    if not closed and len(ring) > 1:
        for pos in range(len(ring)):
            _, end = state.endpoints(ring.at(pos))
            start, _ = state.endpoints(ring.at(pos, 1))
            if end != start:
                issues.append(
                    f"ring position {pos}: face {ring.at(pos)} ends at {end} "
                    f"but face {ring.at(pos, 1)} starts at {start}"
                )

    if strict and issues:
        raise InvariantViolationError("Malformed open boundary:\n" + "\n".join(issues))
    return issues


def validate_embedding(state: PlanarMapState, strict: bool = True) -> list[str]:
    """
    Check that a completed map is a cellular embedding in the sphere.

    Every edge must lie on exactly two faces, every face must be a single
    cycle, the graph must be connected and V - E + F must equal 2. A closed
    connected surface with Euler characteristic 2 is the sphere, so together
    these certify planarity of the accepted graph.

    Raises:
        InvariantViolationError: If strict=True and any check fails
    """
    issues: list[str] = []
    edges = state.edge_list()

    incidence: Counter[int] = Counter()
    for fi in range(state.face_count):
        if not state.is_closed(fi):
            issues.append(f"face {fi} is still open")
            continue
        face_edges = sorted(state.faces[fi].edges)
        incidence.update(face_edges)
        if not _is_single_cycle([edges[e] for e in face_edges]):
            issues.append(f"face {fi} is not a simple cycle")

    for e in range(len(edges)):
        if incidence[e] != 2:
            issues.append(f"edge {e} lies on {incidence[e]} faces")

    if not _is_connected(state.num_vertices, edges):
        issues.append("graph is disconnected")

    issues.extend(validate_euler(state, strict=False))

    if strict and issues:
        raise InvariantViolationError("Invalid spherical embedding:\n" + "\n".join(issues))
    return issues


def _edge_degrees(num_vertices: int, edges: Sequence[tuple[int, int]]) -> list[int]:
    """Count vertex degrees from an edge list (index 0 unused)."""
    degree = [0] * (num_vertices + 1)
    for u, v in edges:
        degree[u] += 1
        degree[v] += 1
    return degree


def _is_single_cycle(edges: Sequence[tuple[int, int]]) -> bool:
    """True if the edges form exactly one cycle."""
    if len(edges) < 3:
        return False
    adj: dict[int, list[int]] = {}
    for u, v in edges:
        adj.setdefault(u, []).append(v)
        adj.setdefault(v, []).append(u)
    if any(len(nbrs) != 2 for nbrs in adj.values()):
        return False
    # Walk the cycle from an arbitrary vertex
    start = edges[0][0]
    prev, cur = start, adj[start][0]
    steps = 1
    while cur != start:
        a, b = adj[cur]
        prev, cur = cur, (b if a == prev else a)
        steps += 1
    return steps == len(adj)


def _is_connected(num_vertices: int, edges: Sequence[tuple[int, int]]) -> bool:
    """Connectivity of vertices 1..num_vertices via DFS."""
    if num_vertices <= 1:
        return True
    adj: list[list[int]] = [[] for _ in range(num_vertices + 1)]
    for u, v in edges:
        adj[u].append(v)
        adj[v].append(u)
    visited = [False] * (num_vertices + 1)
    visited[1] = True
    stack = [1]
    count = 1
    while stack:
        v = stack.pop()
        for w in adj[v]:
            if not visited[w]:
                visited[w] = True
                count += 1
                stack.append(w)
    return count == num_vertices


__all__ = [
    "CensusError",
    "ValidationError",
    "InvalidFaceBoundError",
    "InvalidBacktrackError",
    "InvalidVerbosityError",
    "InvariantViolationError",
    "IllegalMoveError",
    "CanonicalLabelingError",
    "MIN_FACE_BOUND",
    "BACKTRACK_STRATEGIES",
    "validate_max_faces",
    "validate_backtrack",
    "validate_verbosity",
    "validate_cubic",
    "validate_euler",
    "validate_boundary",
    "validate_embedding",
]
