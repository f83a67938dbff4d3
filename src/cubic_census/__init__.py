"""
cubic-census: Enumerate cubic planar graphs with a fixed face profile.

Counts, up to isomorphism, the 3-regular planar graphs with exactly one
triangle, two squares, five pentagons and any number of hexagons, under a
bound on the total number of faces. Graphs are grown face by face from a
seed fragment and deduplicated by canonical labelling.

Available modules:
- planarmap: Partial-map state, face-closure moves and their executor
- search: Backtracking driver, face selector and deduplication registry
- canon: Canonical labelling of small graphs
- validation: Error types, configuration and structural checks
"""

__version__ = "0.1.0"

# Canonical labelling
from .canon import CanonicalForm, canonical_encoding, canonical_form

# Planar-map engine
from .planarmap import (
    Move,
    PlanarMapState,
    UndoRecord,
    apply_move,
    is_legal,
    legal_moves,
    next_legal_move,
)

# Census search
from .search import (
    AcceptedGraph,
    CanonicalLabelingWarning,
    CensusResult,
    CensusSearch,
    DedupRegistry,
    PruningPolicy,
    SearchStats,
    choose_face,
    count_graphs,
)
from .types import TARGET_PROFILE, Event, EventType, FaceProfile

# Validation utilities
from .validation import (
    CanonicalLabelingError,
    CensusError,
    IllegalMoveError,
    InvalidBacktrackError,
    InvalidFaceBoundError,
    InvalidVerbosityError,
    InvariantViolationError,
    ValidationError,
    validate_boundary,
    validate_cubic,
    validate_embedding,
    validate_euler,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "FaceProfile",
    "TARGET_PROFILE",
    "EventType",
    "Event",
    # Planar-map engine
    "PlanarMapState",
    "UndoRecord",
    "Move",
    "is_legal",
    "legal_moves",
    "next_legal_move",
    "apply_move",
    # Census search
    "CensusSearch",
    "CensusResult",
    "SearchStats",
    "PruningPolicy",
    "count_graphs",
    "DedupRegistry",
    "AcceptedGraph",
    "CanonicalLabelingWarning",
    "choose_face",
    # Canonical labelling
    "CanonicalForm",
    "canonical_form",
    "canonical_encoding",
    # Validation
    "CensusError",
    "ValidationError",
    "InvalidFaceBoundError",
    "InvalidBacktrackError",
    "InvalidVerbosityError",
    "InvariantViolationError",
    "IllegalMoveError",
    "CanonicalLabelingError",
    "validate_cubic",
    "validate_euler",
    "validate_boundary",
    "validate_embedding",
]
