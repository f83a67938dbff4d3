"""Colour refinement and individualisation on numpy neighbour tables.

Colours are ranks 0..k-1. Every step below depends only on colour values and
graph structure, never on input vertex numbering, so the partitions built
from isomorphic graphs correspond vertex for vertex.
"""

from __future__ import annotations

from typing import Optional

import numpy as np


def neighbor_matrix(num_vertices: int, edges: np.ndarray) -> np.ndarray:
    """Build an (n, max_degree) neighbour table padded with -1.

    Args:
        num_vertices: Number of vertices (0-based ids)
        edges: (m, 2) integer array of 0-based endpoints

    Returns:
        Integer array whose row v lists the neighbours of v.
    """
    degree = np.bincount(edges.ravel(), minlength=num_vertices)
    width = int(degree.max()) if num_vertices else 0
    nbrs = np.full((num_vertices, width), -1, dtype=np.intp)
    fill = np.zeros(num_vertices, dtype=np.intp)
    for u, v in edges.tolist():
        nbrs[u, fill[u]] = v
        fill[u] += 1
        nbrs[v, fill[v]] = u
        fill[v] += 1
    return nbrs


def refine(colors: np.ndarray, nbrs: np.ndarray) -> np.ndarray:
    """Refine a colouring until it is equitable.

    Each round recolours a vertex by its current colour together with the
    sorted colours of its neighbours, until the number of colours stops
    growing. New colours are ranks of the signatures in lexicographic order.

    Args:
        colors: Integer colour per vertex
        nbrs: Neighbour table from ``neighbor_matrix``

    Returns:
        Equitable colouring with colours 0..k-1.
    """
    _, colors = np.unique(colors, return_inverse=True)
    colors = colors.reshape(-1)
    count = int(colors.max()) + 1
    while True:
        # Padding entries (-1) read the appended sentinel colour
        padded = np.append(colors, -1)
        around = np.sort(padded[nbrs], axis=1)
        signature = np.column_stack([colors, around])
        _, refined = np.unique(signature, axis=0, return_inverse=True)
        refined = refined.reshape(-1)
        refined_count = int(refined.max()) + 1
        if refined_count == count:
            return refined
        colors, count = refined, refined_count


def individualize(colors: np.ndarray, vertex: int) -> np.ndarray:
    """Split vertex off into its own colour, just before the rest of its cell."""
    out = colors * 2 + 1
    out[vertex] -= 1
    return out


def leaf_code(colors: np.ndarray, edges: np.ndarray) -> tuple[int, ...]:
    """Encode the graph relabelled by a discrete colouring (labels from 1)."""
    relabelled = np.sort(colors[edges] + 1, axis=1)
    order = np.lexsort((relabelled[:, 1], relabelled[:, 0]))
    return tuple(relabelled[order].ravel().tolist())


def search_tree(
    num_vertices: int, edges: np.ndarray
) -> tuple[tuple[int, ...], int, np.ndarray]:
    """
    Walk the full individualisation-refinement tree.

    At every non-discrete node the first colour class with more than one
    vertex is split, one child per vertex in it. Each leaf is a discrete
    colouring, i.e. a relabelling of the graph. The smallest leaf code is
    the canonical form; the leaves reaching it are exactly the images of one
    leaf under the automorphism group, so their number is the group order.

    Args:
        num_vertices: Number of vertices (0-based ids, at least 1)
        edges: (m, 2) integer array of 0-based endpoints

    Returns:
        (canonical code, automorphism group order, canonical colouring)
    """
    nbrs = neighbor_matrix(num_vertices, edges)
    best: Optional[tuple[int, ...]] = None
    best_colors = np.arange(num_vertices)
    hits = 0

    stack = [refine(np.zeros(num_vertices, dtype=np.intp), nbrs)]
    while stack:
        colors = stack.pop()
        sizes = np.bincount(colors)
        if sizes.max() == 1:
            code = leaf_code(colors, edges)
            if best is None or code < best:
                best, best_colors, hits = code, colors, 1
            elif code == best:
                hits += 1
            continue

        target = int(np.flatnonzero(sizes > 1)[0])
        for vertex in np.flatnonzero(colors == target)[::-1].tolist():
            stack.append(refine(individualize(colors, vertex), nbrs))

    assert best is not None
    return best, hits, best_colors
