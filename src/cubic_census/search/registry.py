"""Isomorphism-class registry for completed maps."""

from __future__ import annotations

import warnings
from collections import Counter
from dataclasses import dataclass
from typing import Iterator

from ..canon import canonical_form
from ..planarmap import PlanarMapState
from ..validation import CanonicalLabelingError


class CanonicalLabelingWarning(UserWarning):
    """Warning issued when a completed map cannot be canonically labelled."""

    pass


@dataclass(frozen=True)
class AcceptedGraph:
    """A completed map kept as the representative of its isomorphism class.

    Attributes:
        encoding: Canonical encoding of the graph.
        hexagons: Number of hexagonal faces.
        num_vertices: Number of vertices.
        edges: Edge list as built by the search (1-based vertex ids).
        automorphisms: Order of the automorphism group.
        summary: One-line face report of the map.
    """

    encoding: tuple[int, ...]
    hexagons: int
    num_vertices: int
    edges: tuple[tuple[int, int], ...]
    automorphisms: int
    summary: str


class DedupRegistry:
    """
    Set of canonical encodings seen so far, with counts by hexagon number.

    Example:
        registry = DedupRegistry()
        registry.submit(state)     # True the first time
        registry.submit(state)     # False: already registered
        registry.tally[state.tally.hexagons]   # 1
    """

    def __init__(self, *, record_graphs: bool = False) -> None:
        """
        Args:
            record_graphs: Keep an AcceptedGraph for every new class
        """
        self._seen: set[tuple[int, ...]] = set()
        self._records: list[AcceptedGraph] = []
        self.record_graphs = record_graphs
        self.tally: Counter[int] = Counter()

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, encoding: object) -> bool:
        return encoding in self._seen

    def __iter__(self) -> Iterator[AcceptedGraph]:
        return iter(self._records)

    @property
    def records(self) -> list[AcceptedGraph]:
        """Accepted representatives, in discovery order (empty unless recording)."""
        return list(self._records)

    @property
    def total(self) -> int:
        return sum(self.tally.values())

    def insert(self, encoding: tuple[int, ...], hexagons: int) -> bool:
        """
        Register an encoding directly.

        Returns:
            True if the encoding was new (and the hexagon count was bumped).
        """
        if encoding in self._seen:
            return False
        self._seen.add(encoding)
        self.tally[hexagons] += 1
        return True

    def submit(self, state: PlanarMapState) -> bool:
        """
        Register a completed map unless an isomorphic one is already present.

        A map the canonical labeller rejects is skipped with a
        CanonicalLabelingWarning and reported as not new.

        Returns:
            True if the map starts a new isomorphism class.
        """
        edges = state.edge_list()
        try:
            form = canonical_form(state.num_vertices, edges)
        except CanonicalLabelingError as exc:
            warnings.warn(
                f"Skipping completed map with {state.num_vertices} vertices: {exc}",
                CanonicalLabelingWarning,
                stacklevel=2,
            )
            return False

        hexagons = state.tally.hexagons
        if not self.insert(form.encoding, hexagons):
            return False
        if self.record_graphs:
            self._records.append(
                AcceptedGraph(
                    encoding=form.encoding,
                    hexagons=hexagons,
                    num_vertices=state.num_vertices,
                    edges=tuple(edges),
                    automorphisms=form.automorphisms,
                    summary=state.summary(),
                )
            )
        return True

    def by_hexagons(self, max_hexagons: int) -> list[tuple[int, int]]:
        """(hexagons, count) pairs for 1..max_hexagons, zeros included."""
        return [(h, self.tally[h]) for h in range(1, max_hexagons + 1)]


__all__ = ["DedupRegistry", "AcceptedGraph", "CanonicalLabelingWarning"]
