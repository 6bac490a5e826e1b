"""
Adjacent-pair traversal, pair histogram, and merge selection.
"""

from collections import Counter
from enum import Enum
from typing import NamedTuple

from ._stream import SymbolStream
from .errors import WalkerStateError
from .types import PairHistogram, SymbolPair


class _WalkState(Enum):
    READY = "ready"
    YIELDED = "yielded"


class PairWalker:
    """
    Iterate over the live adjacent position pairs of a stream.

    The walker keeps a window of the two most recent live positions. Each
    ``next()`` yields the window and slides it one live position right.

    Contract for in-place merges: after the caller rewrites the pair that was
    just yielded (new symbol in the left slot, hole in the right slot) it must
    call ``resync()`` before asking for the next pair. ``resync()`` slides the
    window past the consumed pair and returns the two neighbour positions whose
    pairs changed because of the merge.
    """

    def __init__(self, stream: SymbolStream) -> None:
        self._stream = stream
        self._live = stream.live_positions()
        self._left: int | None = next(self._live, None)
        self._right: int | None = next(self._live, None)
        self._last_left: int | None = None
        self._state = _WalkState.READY

    def __iter__(self) -> "PairWalker":
        return self

    def __next__(self) -> tuple[int, int]:
        if self._left is None or self._right is None:
            raise StopIteration
        pair = (self._left, self._right)
        self._last_left = self._left
        self._left = self._right
        self._right = next(self._live, None)
        self._state = _WalkState.YIELDED
        return pair

    def resync(self) -> tuple[int | None, int | None]:
        """
        Skip past a pair merged in place and report its live neighbours.

        :returns: ``(prev, next)`` where ``prev`` is the live position before
            the merged pair and ``next`` the live position after it; either is
            ``None`` at a stream boundary.
        :raises WalkerStateError: If no freshly yielded pair is pending.
        """
        if self._state is not _WalkState.YIELDED or self._last_left is None:
            raise WalkerStateError("resync must follow a yielded pair")

        # the old right slot is now a hole, drop it from the window
        self._left = self._right
        self._right = next(self._live, None)
        self._state = _WalkState.READY
        return self._stream.prev_live(self._last_left), self._left


def build_histogram(stream: SymbolStream) -> PairHistogram:
    """Count every live adjacent pair with one full traversal."""
    slots = stream.slots
    histogram: PairHistogram = Counter()
    for left, right in PairWalker(stream):
        histogram[(slots[left], slots[right])] += 1
    return histogram


class PairSelection(NamedTuple):
    """Most frequent pair, its count, and the histogram total."""

    pair: SymbolPair
    frequency: int
    total: int


def most_frequent_pair(histogram: PairHistogram) -> PairSelection | None:
    """
    Pick the next pair to merge.

    Ties on frequency go to the lexicographically smallest pair, so the
    result does not depend on the histogram's iteration order. The total of
    all counts is accumulated in the same scan.

    :returns: The selection, or ``None`` when the histogram is empty.
    """
    best: SymbolPair | None = None
    best_n = 0
    total = 0
    for pair, n in histogram.items():
        total += n
        if n > best_n or (n == best_n and best is not None and pair < best):
            best = pair
            best_n = n

    if best is None:
        return None
    return PairSelection(pair=best, frequency=best_n, total=total)


__all__ = ["PairWalker", "PairSelection", "build_histogram", "most_frequent_pair"]
