"""
Profiling script for cubic-census performance analysis.

Times the census search at several face bounds with both backtracking
strategies and reports search throughput (moves per second), then times
the canonical labeller on the graphs accepted at 12 faces.
"""

import argparse
import cProfile
import io
import pstats
import sys
import time
from pathlib import Path
from pstats import SortKey

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cubic_census import CensusSearch, canonical_form  # noqa: E402


# =============================================================================
# Measurements
# =============================================================================

def run_search(max_faces, backtrack, profiler=None):
    """Run one search; return (seconds, CensusResult)."""
    search = CensusSearch(max_faces=max_faces, backtrack=backtrack)
    start = time.perf_counter()
    if profiler is not None:
        profiler.enable()
    result = search.run().result
    if profiler is not None:
        profiler.disable()
    return time.perf_counter() - start, result


def run_labelling(repeats, profiler=None):
    """Label every graph accepted at 12 faces repeats times; return (seconds, count)."""
    graphs = CensusSearch(max_faces=12, record_graphs=True).run().result.graphs
    start = time.perf_counter()
    if profiler is not None:
        profiler.enable()
    for _ in range(repeats):
        for graph in graphs:
            canonical_form(graph.num_vertices, graph.edges)
    if profiler is not None:
        profiler.disable()
    return time.perf_counter() - start, repeats * len(graphs)


def print_hot_spots(profiler, limit):
    s = io.StringIO()
    pstats.Stats(profiler, stream=s).sort_stats(SortKey.CUMULATIVE).print_stats(limit)
    print(s.getvalue())


def main():
    """Time the search and the labeller."""
    parser = argparse.ArgumentParser(description="Profile the census search")
    parser.add_argument("--max-faces", type=int, nargs="+", default=[10, 12, 14],
                        help="Face bounds to time")
    parser.add_argument("--repeats", type=int, default=20,
                        help="Labelling passes over the 12-face graphs")
    parser.add_argument("--profile", action="store_true",
                        help="Print cProfile hot spots for the largest bound")
    args = parser.parse_args()

    print(f"{'Faces':>5} {'Backtrack':>10} {'Graphs':>7} {'Moves':>10} "
          f"{'Time':>9} {'Moves/s':>10}")
    print("-" * 56)

    timings = {}
    for bound in args.max_faces:
        for backtrack in ("undo", "snapshot"):
            elapsed, result = run_search(bound, backtrack)
            timings[bound, backtrack] = elapsed
            rate = result.stats.moves / elapsed if elapsed > 0 else float("inf")
            print(f"{bound:>5} {backtrack:>10} {result.total:>7} {result.stats.moves:>10} "
                  f"{elapsed:>8.3f}s {rate:>10.0f}")

    print("\nSnapshot / undo time ratio:")
    for bound in args.max_faces:
        undo = timings[bound, "undo"]
        ratio = timings[bound, "snapshot"] / undo if undo > 0 else float("inf")
        print(f"  {bound:>3} faces: {ratio:.2f}x")

    elapsed, count = run_labelling(args.repeats)
    print(f"\nCanonical labelling: {count} graphs in {elapsed:.3f}s "
          f"({1000 * elapsed / max(count, 1):.2f} ms per graph)")

    if args.profile:
        profiler = cProfile.Profile()
        run_search(max(args.max_faces), "undo", profiler)
        print(f"\nHot spots, {max(args.max_faces)} faces (undo):")
        print_hot_spots(profiler, 15)


if __name__ == "__main__":
    main()
