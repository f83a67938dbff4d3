"""
Census search over partial planar maps.

This module provides the enumeration layer:
- CensusSearch: Depth-first backtracking driver with prune policies
- DedupRegistry: Isomorphism classes found so far, by hexagon count
- choose_face: Greedy selection of the next face to close
"""

from .driver import (
    DEPTH_SLACK,
    CensusResult,
    CensusSearch,
    PruningPolicy,
    SearchStats,
    count_graphs,
)
from .registry import AcceptedGraph, CanonicalLabelingWarning, DedupRegistry
from .selector import choose_face

__all__ = [
    "CensusSearch",
    "CensusResult",
    "SearchStats",
    "PruningPolicy",
    "DEPTH_SLACK",
    "count_graphs",
    "DedupRegistry",
    "AcceptedGraph",
    "CanonicalLabelingWarning",
    "choose_face",
]
