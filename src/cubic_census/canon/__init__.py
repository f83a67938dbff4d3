"""Canonical labelling of small simple graphs.

Isomorphism oracle for the census registry: two graphs receive the same
canonical encoding exactly when they are isomorphic. Implemented as an
exhaustive individualisation-refinement search with numpy colour refinement,
which is fast enough for the few dozen vertices of the census graphs.

Public API:
    canonical_form(num_vertices, edges) -> CanonicalForm
    canonical_encoding(num_vertices, edges) -> tuple[int, ...]
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..validation import CanonicalLabelingError
from ._refine import search_tree
from ._types import CanonicalForm


def canonical_form(num_vertices: int, edges: Sequence[tuple[int, int]]) -> CanonicalForm:
    """Compute the canonical form of a simple undirected graph.

    Pure and stateless; edge orientation and order are irrelevant.

    Args:
        num_vertices: Number of vertices (labelled 1..num_vertices).
        edges: Sequence of (u, v) edge tuples (undirected).

    Returns:
        CanonicalForm with the canonical encoding and automorphism group order.

    Raises:
        CanonicalLabelingError: If the vertex count is invalid, or an edge is a
            self-loop, repeats another edge or names a vertex out of range.
    """
    if isinstance(num_vertices, bool) or not isinstance(num_vertices, int) or num_vertices < 0:
        raise CanonicalLabelingError(
            f"num_vertices must be a non-negative integer, got {num_vertices!r}"
        )

    seen: set[frozenset[int]] = set()
    for edge in edges:
        if len(edge) != 2:
            raise CanonicalLabelingError(f"edge {edge!r} must have 2 endpoints")
        u, v = edge
        if not (1 <= u <= num_vertices and 1 <= v <= num_vertices):
            raise CanonicalLabelingError(
                f"edge ({u}, {v}) references a vertex outside 1..{num_vertices}"
            )
        if u == v:
            raise CanonicalLabelingError(f"self-loop at vertex {u}")
        key = frozenset((u, v))
        if key in seen:
            raise CanonicalLabelingError(f"repeated edge ({u}, {v})")
        seen.add(key)

    if num_vertices == 0:
        return CanonicalForm(0, (), 1, ())

    arr = np.asarray(edges, dtype=np.intp).reshape(-1, 2) - 1
    code, automorphisms, colors = search_tree(num_vertices, arr)
    labeling = tuple((colors + 1).tolist())
    return CanonicalForm(num_vertices, code, automorphisms, labeling)


def canonical_encoding(num_vertices: int, edges: Sequence[tuple[int, int]]) -> tuple[int, ...]:
    """Canonical encoding only; see ``canonical_form``."""
    return canonical_form(num_vertices, edges).encoding


__all__ = [
    "CanonicalForm",
    "CanonicalLabelingError",
    "canonical_form",
    "canonical_encoding",
]
