"""Result type for canonical labelling."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CanonicalForm:
    """Canonical form of a simple undirected graph.

    Two graphs are isomorphic exactly when their encodings are equal.

    Attributes:
        num_vertices: Number of vertices (labelled 1..num_vertices).
        encoding: Relabelled edge list, each edge as (low, high), sorted and
            flattened into one tuple.
        automorphisms: Order of the automorphism group.
        labeling: Canonical label of each input vertex, in input order.
            Not part of equality.
    """

    num_vertices: int
    encoding: tuple[int, ...]
    automorphisms: int = 1
    labeling: tuple[int, ...] = field(default=(), compare=False)

    @property
    def edges(self) -> list[tuple[int, int]]:
        """Canonical edge list as (low, high) pairs."""
        it = iter(self.encoding)
        return list(zip(it, it))
