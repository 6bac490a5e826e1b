"""In-place merge of one symbol pair with incremental histogram updates."""

import logging

from ._pairs import PairWalker
from ._stream import HOLE, SymbolStream
from .types import PairHistogram, Symbol, SymbolPair

log = logging.getLogger(__name__)


def _decrement(histogram: PairHistogram, pair: SymbolPair) -> None:
    histogram[pair] -= 1
    # drop exhausted pairs to keep the histogram lean
    if histogram[pair] == 0:
        del histogram[pair]


def replace_pair(
    stream: SymbolStream,
    histogram: PairHistogram,
    target: SymbolPair,
    new_sym: Symbol,
) -> int:
    """
    Replace every occurrence of ``target`` with ``new_sym`` in place.

    Occurrences are matched by value and consumed greedily from left to
    right, so ``a a a`` merged on ``(a, a)`` yields ``A a`` rather than two
    overlapping merges. For each replacement only the pairs at its two
    boundaries change:

    - left neighbour ``L``: ``(L, target[0])`` becomes ``(L, new_sym)``
    - right neighbour ``R``: ``(target[1], R)`` becomes ``(new_sym, R)``

    The entry for ``target`` itself is removed once the pass completes.

    :param stream: Stream to rewrite.
    :param histogram: Pair counts of ``stream``, updated in place.
    :param target: The pair to merge.
    :param new_sym: Symbol that replaces each occurrence.
    :returns: Number of occurrences replaced.
    """
    slots = stream.slots
    first, second = target
    walker = PairWalker(stream)
    replaced = 0

    for left, right in walker:
        if slots[left] != first or slots[right] != second:
            continue

        slots[left] = new_sym
        slots[right] = HOLE
        replaced += 1

        prev_pos, next_pos = walker.resync()
        if prev_pos is not None:
            neighbour = slots[prev_pos]
            _decrement(histogram, (neighbour, first))
            histogram[(neighbour, new_sym)] += 1
        if next_pos is not None:
            neighbour = slots[next_pos]
            _decrement(histogram, (second, neighbour))
            histogram[(new_sym, neighbour)] += 1

    histogram.pop(target, None)
    log.debug("replaced %d occurrences of %s with %d", replaced, target, new_sym)
    return replaced


__all__ = ["replace_pair"]
