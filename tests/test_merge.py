"""Unit tests for in-place pair replacement and histogram deltas."""

import random

import pytest

from bytemerge._merge import replace_pair
from bytemerge._pairs import build_histogram, most_frequent_pair
from bytemerge._stream import HOLE, SymbolStream


def _merge(data, pair, new_sym=256):
    """Merge ``pair`` in a fresh stream built from ``data``."""
    stream = SymbolStream.from_bytes(data)
    histogram = build_histogram(stream)
    replaced = replace_pair(stream, histogram, pair, new_sym)
    return stream, histogram, replaced


# Replacement
# ---------------------------------------------------------------------------


def test_replace_non_overlapping_occurrences():
    """Every occurrence is rewritten in place, right slots become holes."""
    stream, _, replaced = _merge([97, 98, 97, 98, 97, 98], (97, 98))
    assert replaced == 3
    assert stream.slots == [256, HOLE, 256, HOLE, 256, HOLE]
    assert stream.live_symbols() == [256, 256, 256]


@pytest.mark.parametrize(
    "data, expected",
    [
        ([5, 5, 5], [256, 5]),
        ([5, 5, 5, 5], [256, 256]),
        ([5, 5, 5, 5, 5], [256, 256, 5]),
        ([1, 5, 5, 5, 2], [1, 256, 5, 2]),
    ],
)
def test_runs_merge_greedily_left_to_right(data, expected):
    """Runs of one symbol are consumed from the left without overlap."""
    stream, _, _ = _merge(data, (5, 5))
    assert stream.live_symbols() == expected


def test_pair_absent_after_merge():
    """No occurrence of the merged pair survives, and its count is dropped."""
    stream, histogram, _ = _merge(b"aaabaaab", (97, 97))
    live = stream.live_symbols()
    assert (97, 97) not in list(zip(live, live[1:]))
    assert (97, 97) not in histogram


def test_missing_pair_is_noop():
    """Merging a pair that does not occur changes nothing."""
    stream, histogram, replaced = _merge([1, 2, 3], (3, 1))
    assert replaced == 0
    assert stream.slots == [1, 2, 3]
    assert histogram == build_histogram(SymbolStream([1, 2, 3]))


def test_zero_bytes_are_symbols():
    """Byte 0 takes part in pairs like any other byte."""
    stream, histogram, replaced = _merge([0, 0, 1, 0, 0], (0, 0))
    assert replaced == 2
    assert stream.live_symbols() == [256, 1, 256]
    assert histogram == build_histogram(SymbolStream([256, 1, 256]))


# Incremental histogram
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "data, pair",
    [
        (b"abababab", (97, 98)),
        (b"aaaa", (97, 97)),
        (b"aaaaab", (97, 97)),
        (b"abcabcab", (98, 99)),
        (b"baab", (97, 97)),
        (b"abba", (98, 98)),
    ],
)
def test_deltas_match_full_recount(data, pair):
    """Incremental counts equal a recount of the rewritten stream."""
    stream, histogram, _ = _merge(data, pair)
    assert histogram == build_histogram(stream)


def test_deltas_across_many_random_merges():
    """Counts stay exact over repeated merges on random input with holes."""
    rng = random.Random(1234)
    for trial in range(20):
        data = bytes(rng.randrange(3) for _ in range(200))
        stream = SymbolStream.from_bytes(data)
        histogram = build_histogram(stream)
        new_sym = 256
        while (selection := most_frequent_pair(histogram)) and selection.frequency > 1:
            replace_pair(stream, histogram, selection.pair, new_sym)
            new_sym += 1
            assert histogram == build_histogram(stream), f"trial {trial}"
            assert sum(histogram.values()) == stream.live_count() - 1
