"""
Command-line front end for the census search.

Usage:
    cubic-census --max-faces 22 --by-hexagons
    cubic-census -vv --max-faces 12
"""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Optional, Sequence, TextIO

from .search import CensusSearch, PruningPolicy
from .types import Event, EventType
from .validation import BACKTRACK_STRATEGIES, ValidationError, validate_verbosity

# Field width of the running count on accepted-graph lines, by face bound.
_COUNT_WIDTHS = ((27, 5), (20, 4), (14, 3))

_PRUNE_MESSAGES = {
    "depth": "Curtailing max faces",
    "single-open-face": "Single open vert",
    "size": "Bad size",
    "final-size": "Completed map outside the face bound",
    "face-bound": "Too many closed faces",
    "triangle-symmetry": "Mirror image of an earlier case",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cubic-census",
        description=(
            "Count cubic planar graphs with one triangle, two squares, "
            "five pentagons and any number of hexagons."
        ),
    )
    parser.add_argument(
        "--max-faces", type=int, default=14, help="Upper bound on the number of faces"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Report accepted graphs (-v), prunes (-vv), every move (-vvv)",
    )
    parser.add_argument(
        "--by-hexagons", action="store_true", help="Print the count for each hexagon number"
    )
    parser.add_argument(
        "--backtrack",
        choices=BACKTRACK_STRATEGIES,
        default="undo",
        help="Backtracking strategy",
    )
    parser.add_argument(
        "--no-depth-limit", action="store_true", help="Disable the search depth prune"
    )
    parser.add_argument(
        "--no-single-face-prune",
        action="store_true",
        help="Keep maps whose boundary is a single open face",
    )
    parser.add_argument(
        "--triangle-symmetry",
        action="store_true",
        help="Skip mirror images across the triangle",
    )
    parser.add_argument(
        "--verify", action="store_true", help="Check every completed map's embedding"
    )
    return parser


def _count_width(max_faces: int) -> int:
    for bound, width in _COUNT_WIDTHS:
        if max_faces > bound:
            return width
    return 2


def _reporters(
    verbosity: int, max_faces: int, out: TextIO
) -> dict[str, Callable[[Optional[Event]], None]]:
    """Event callbacks printing diagnostics up to the given verbosity."""
    width = _count_width(max_faces)

    def accept(event: Optional[Event]) -> None:
        if event is not None:
            print(f"{event.get('count', 0):>{width}d}.   {event.get('summary', '')}", file=out)

    def duplicate(event: Optional[Event]) -> None:
        if event is not None:
            print(f"  !   {event.get('summary', '')} Seen before.", file=out)

    def prune(event: Optional[Event]) -> None:
        if event is not None:
            reason = event.get("reason", "")
            print(_PRUNE_MESSAGES.get(reason, reason), file=out)

    def move(event: Optional[Event]) -> None:
        if event is not None:
            print(f"Method {event.get('move')} at position {event.get('position')}", file=out)

    def choose(event: Optional[Event]) -> None:
        if event is not None:
            print(f"Chosen face {event.get('position')} ({event.get('face')})", file=out)

    callbacks: dict[str, Callable[[Optional[Event]], None]] = {}
    if verbosity >= 1:
        callbacks[EventType.accept.name] = accept
        callbacks[EventType.duplicate.name] = duplicate
    if verbosity >= 2:
        callbacks[EventType.prune.name] = prune
    if verbosity >= 3:
        callbacks[EventType.move.name] = move
        callbacks[EventType.choose.name] = choose
    return callbacks


def main(argv: Optional[Sequence[str]] = None, out: Optional[TextIO] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    out = out if out is not None else sys.stdout

    pruning = PruningPolicy(
        depth_limit=not args.no_depth_limit,
        single_open_face=not args.no_single_face_prune,
        triangle_symmetry=args.triangle_symmetry,
    )
    try:
        verbosity = validate_verbosity(args.verbose)
        search = CensusSearch(
            max_faces=args.max_faces,
            pruning=pruning,
            backtrack=args.backtrack,
            verify=args.verify,
        )
    except ValidationError as e:
        parser.error(str(e))

    for name, callback in _reporters(verbosity, search.max_faces, out).items():
        search.on(name, callback)

    result = search.run().result
    print(f"Total {result.total} solutions found, with up to {result.max_faces} faces.", file=out)
    if args.by_hexagons:
        for hexagons, count in result.hexagon_counts():
            print(f"{hexagons}:  {count}", file=out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
