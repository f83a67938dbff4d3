"""
Depth-first census search over partial planar maps.

The search starts from the seed fragment, repeatedly picks the longest open
face and closes it with each legal move in turn. A branch ends when the
boundary empties (the map is complete and is submitted to the registry) or
when a prune rule fires. Backtracking either replays the undo record of the
move (default) or keeps a full copy of the state below each move.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from typing_extensions import Self

from ..planarmap import PlanarMapState, UndoRecord, apply_move, next_legal_move
from ..types import TARGET_PROFILE, Event, EventType
from ..validation import (
    CensusError,
    validate_backtrack,
    validate_boundary,
    validate_embedding,
    validate_max_faces,
)
from .registry import AcceptedGraph, DedupRegistry
from .selector import choose_face

# Moves on the stack beyond max_faces - DEPTH_SLACK are pruned.
DEPTH_SLACK = 4


@dataclass(frozen=True)
class PruningPolicy:
    """
    Heuristic prune rules applied after every move.

    The size test (no face too long to close, face budget not exceeded) and
    the face bound on closed faces are always applied; the rules below can
    be switched individually.

    Attributes:
        depth_limit: Abandon branches deeper than ``max_faces - 4`` moves.
        single_open_face: Abandon maps whose boundary is a single open face.
        triangle_symmetry: Keep only maps where face 3, once closed, is at
            least as long as face 2 when face 2 is longer than a square.
    """

    depth_limit: bool = True
    single_open_face: bool = True
    triangle_symmetry: bool = False


@dataclass
class SearchStats:
    """Counters collected during a search."""

    moves: int = 0
    completions: int = 0
    accepted: int = 0
    duplicates: int = 0
    max_depth: int = 0
    prunes: Counter[str] = field(default_factory=Counter)


@dataclass
class CensusResult:
    """
    Outcome of a census search.

    Attributes:
        max_faces: Face bound the search ran with.
        total: Number of isomorphism classes found.
        by_hexagons: Class counts keyed by hexagon number.
        stats: Search counters.
        graphs: Accepted representatives (empty unless recorded).
    """

    max_faces: int
    total: int
    by_hexagons: dict[int, int]
    stats: SearchStats
    graphs: list[AcceptedGraph] = field(default_factory=list)

    def hexagon_counts(self) -> list[tuple[int, int]]:
        """(hexagons, count) for every hexagon number the bound allows."""
        top = self.max_faces - TARGET_PROFILE.fixed_faces
        return [(h, self.by_hexagons.get(h, 0)) for h in range(1, top + 1)]


@dataclass
class _Frame:
    """One level of the search stack: a face and the last move tried on it."""

    state: PlanarMapState
    position: int
    cursor: int = 0
    undo: Optional[UndoRecord] = None


class CensusSearch:
    """
    Backtracking enumeration of cubic planar maps with the target face profile.

    Example:
        search = CensusSearch(max_faces=14)
        search.run()
        print(search.result.total)
        for h, count in search.result.hexagon_counts():
            print(f"{h:2d}: {count:4d}")
    """

    def __init__(
        self,
        *,
        max_faces: int = 14,
        pruning: Optional[PruningPolicy] = None,
        backtrack: str = "undo",
        verify: bool = False,
        record_graphs: bool = False,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_choose: Optional[Callable[[Optional[Event]], None]] = None,
        on_move: Optional[Callable[[Optional[Event]], None]] = None,
        on_accept: Optional[Callable[[Optional[Event]], None]] = None,
        on_duplicate: Optional[Callable[[Optional[Event]], None]] = None,
        on_prune: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize the search.

        Args:
            max_faces: Upper bound on the total face count (at least 8)
            pruning: Prune rules (defaults to PruningPolicy())
            backtrack: "undo" to replay undo records, "snapshot" to copy states
            verify: Check boundary adjacency after every move and the
                spherical embedding of every completed map
            record_graphs: Keep an AcceptedGraph per isomorphism class
            on_start: Callback for start event
            on_choose: Callback when a face is selected
            on_move: Callback when a move is applied
            on_accept: Callback when a new isomorphism class is found
            on_duplicate: Callback when a completed map was already known
            on_prune: Callback when a branch is abandoned
            on_end: Callback for end event

        Raises:
            InvalidFaceBoundError: If max_faces is not an integer >= 8.
            InvalidBacktrackError: If backtrack is not "undo" or "snapshot".
        """
        self._max_faces = validate_max_faces(max_faces)
        self._backtrack = validate_backtrack(backtrack)
        self._pruning = pruning if pruning is not None else PruningPolicy()
        self._verify = bool(verify)
        self._record_graphs = bool(record_graphs)
        self._registry = DedupRegistry(record_graphs=self._record_graphs)
        self._stats = SearchStats()
        self._result: Optional[CensusResult] = None
        self._events: dict[EventType, Callable[[Optional[Event]], None]] = {}

        callbacks = {
            EventType.start: on_start,
            EventType.choose: on_choose,
            EventType.move: on_move,
            EventType.accept: on_accept,
            EventType.duplicate: on_duplicate,
            EventType.prune: on_prune,
            EventType.end: on_end,
        }
        for event_type, callback in callbacks.items():
            if callback:
                self._events[event_type] = callback

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def max_faces(self) -> int:
        """Get the total face bound."""
        return self._max_faces

    @max_faces.setter
    def max_faces(self, value: int) -> None:
        """Set the total face bound (integer >= 8)."""
        self._max_faces = validate_max_faces(value)

    @property
    def backtrack(self) -> str:
        """Get the backtracking strategy."""
        return self._backtrack

    @backtrack.setter
    def backtrack(self, value: str) -> None:
        self._backtrack = validate_backtrack(value)

    @property
    def pruning(self) -> PruningPolicy:
        return self._pruning

    @pruning.setter
    def pruning(self, value: PruningPolicy) -> None:
        self._pruning = value

    @property
    def registry(self) -> DedupRegistry:
        """Registry of the last run."""
        return self._registry

    @property
    def stats(self) -> SearchStats:
        """Counters of the last run."""
        return self._stats

    @property
    def result(self) -> CensusResult:
        """
        Result of the last run.

        Raises:
            CensusError: If run() has not been called.
        """
        if self._result is None:
            raise CensusError("search has not been run")
        return self._result

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: Callable[[Optional[Event]], None]) -> Self:
        """
        Subscribe to a search event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """
        Trigger an event, calling the registered callback.

        Args:
            event: Event payload with type and optional data
        """
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    def run(self) -> Self:
        """
        Run the search to exhaustion.

        Returns:
            self (for chaining)

        Raises:
            InvariantViolationError: If a move breaks an engine invariant.
        """
        self._registry = DedupRegistry(record_graphs=self._record_graphs)
        self._stats = SearchStats()
        self._result = None
        self.trigger({"type": EventType.start, "count": 0})

        seed = PlanarMapState.seed()
        frames = [self._push(seed, depth=0)]
        snapshot = self._backtrack == "snapshot"

        while frames:
            frame = frames[-1]
            if frame.undo is not None:
                frame.state.undo(frame.undo)
                frame.undo = None

            move = next_legal_move(frame.state, frame.position, frame.cursor)
            if move is None:
                frames.pop()
                continue
            frame.cursor = move

            depth = len(frames)
            if snapshot:
                child = frame.state.copy()
                apply_move(child, frame.position, move)
            else:
                child = frame.state
                frame.undo = apply_move(child, frame.position, move)
            self._stats.moves += 1
            self._stats.max_depth = max(self._stats.max_depth, depth)
            self.trigger(
                {
                    "type": EventType.move,
                    "depth": depth,
                    "position": frame.position,
                    "move": int(move),
                }
            )

            if self._evaluate(child, depth):
                frames.append(self._push(child, depth))

        self._result = CensusResult(
            max_faces=self._max_faces,
            total=self._registry.total,
            by_hexagons=dict(self._registry.tally),
            stats=self._stats,
            graphs=self._registry.records,
        )
        self.trigger({"type": EventType.end, "count": self._result.total})
        return self

    # -------------------------------------------------------------------------
    # Search Steps
    # -------------------------------------------------------------------------

    def _push(self, state: PlanarMapState, depth: int) -> _Frame:
        position = choose_face(state)
        self.trigger(
            {
                "type": EventType.choose,
                "depth": depth,
                "position": position,
                "face": state.open_faces.at(position),
            }
        )
        return _Frame(state, position)

    def _evaluate(self, state: PlanarMapState, depth: int) -> bool:
        """Apply completion and prune rules; True if the branch continues."""
        if self._verify:
            validate_boundary(state)

        pruning = self._pruning
        if pruning.triangle_symmetry and self._mirrored(state):
            return self._prune("triangle-symmetry", depth)

        if not state.open_faces:
            self._complete(state, depth)
            return False

        if sum(state.tally.as_tuple()) > self._max_faces:
            return self._prune("face-bound", depth)

        if pruning.depth_limit and depth > self._max_faces - DEPTH_SLACK:
            return self._prune("depth", depth)
        if pruning.single_open_face and len(state.open_faces) == 1:
            return self._prune("single-open-face", depth)
        if not state.sizecheck():
            return self._prune("size", depth)
        return True

    def _mirrored(self, state: PlanarMapState) -> bool:
        # Faces 2 and 3 flank the triangle; keep one of each mirror pair.
        if state.face_count < 4:
            return False
        lengths = state.face_lengths()
        return lengths[2] > 4 and state.is_closed(3) and lengths[3] < lengths[2]

    def _complete(self, state: PlanarMapState, depth: int) -> None:
        self._stats.completions += 1
        if state.face_count > self._max_faces or not state.sizefinal():
            self._prune("final-size", depth)
            return
        if self._verify:
            validate_embedding(state)

        is_new = self._registry.submit(state)
        if is_new:
            self._stats.accepted += 1
            event_type = EventType.accept
        else:
            self._stats.duplicates += 1
            event_type = EventType.duplicate
        if event_type not in self._events:
            return
        self.trigger(
            {
                "type": event_type,
                "depth": depth,
                "hexagons": state.tally.hexagons,
                "vertices": state.num_vertices,
                "count": self._registry.total,
                "summary": state.summary(),
            }
        )

    def _prune(self, reason: str, depth: int) -> bool:
        self._stats.prunes[reason] += 1
        self.trigger({"type": EventType.prune, "depth": depth, "reason": reason})
        return False


def count_graphs(max_faces: int = 14, **kwargs: Any) -> CensusResult:
    """
    Run a census search and return its result.

    Args:
        max_faces: Upper bound on the total face count
        **kwargs: Further CensusSearch keyword arguments

    Returns:
        CensusResult of the completed search.
    """
    return CensusSearch(max_faces=max_faces, **kwargs).run().result


__all__ = [
    "CensusSearch",
    "CensusResult",
    "SearchStats",
    "PruningPolicy",
    "DEPTH_SLACK",
    "count_graphs",
]
