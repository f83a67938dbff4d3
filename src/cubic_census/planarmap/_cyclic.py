"""Cyclic sequence used for the open boundary of a partial planar map."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence


class CyclicSequence:
    """An ordered sequence read cyclically.

    Positions are ordinary list indices; relative addressing (predecessor,
    successor, second predecessor, ...) wraps modulo the length. Removals
    keep the linear order of the surviving entries, so a run that wraps past
    the last index removes a tail and a head while the middle stays in place.

    Attributes:
        items: Underlying list of entries, in linear order.
    """

    __slots__ = ("items",)

    def __init__(self, items: Iterable[int] = ()) -> None:
        self.items: list[int] = list(items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[int]:
        return iter(self.items)

    def __contains__(self, value: object) -> bool:
        return value in self.items

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CyclicSequence):
            return self.items == other.items
        if isinstance(other, list):
            return self.items == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"CyclicSequence({self.items!r})"

    def copy(self) -> CyclicSequence:
        return CyclicSequence(self.items)

    # -------------------------------------------------------------------------
    # Relative addressing
    # -------------------------------------------------------------------------

    def offset(self, position: int, k: int) -> int:
        """Position k steps after position (k may be negative)."""
        n = len(self.items)
        if n == 0:
            raise IndexError("offset into empty cyclic sequence")
        return (position + k) % n

    def at(self, position: int, k: int = 0) -> int:
        """Entry k steps after position."""
        return self.items[self.offset(position, k)]

    def index(self, value: int) -> int:
        """Position of the first occurrence of value."""
        return self.items.index(value)

    # -------------------------------------------------------------------------
    # Splicing
    # -------------------------------------------------------------------------

    def erase_run(self, start: int, count: int) -> list[int]:
        """
        Remove count cyclically consecutive entries beginning at start.

        Args:
            start: First position to remove
            count: Number of entries to remove (at most the length)

        Returns:
            Removed entries in cyclic order starting from start.
        """
        n = len(self.items)
        if count > n:
            raise IndexError(f"cannot erase {count} entries from a sequence of {n}")
        if count <= 0:
            return []
        start %= n
        stop = start + count
        if stop <= n:
            removed = self.items[start:stop]
            del self.items[start:stop]
            return removed
        # Wraps: tail [start, n) then head [0, stop - n)
        wrap = stop - n
        removed = self.items[start:] + self.items[:wrap]
        del self.items[start:]
        del self.items[:wrap]
        return removed

    def replace(self, position: int, values: Sequence[int]) -> None:
        """Replace the entry at position by zero or more entries, in order."""
        self.items[position : position + 1] = list(values)

    def renumber_after(self, removed: int) -> None:
        """Decrement every entry greater than a removed face index."""
        self.items = [v - 1 if v > removed else v for v in self.items]
