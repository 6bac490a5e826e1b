"""
Reference Byte Pair Encoding (BPE) operations.

These rebuild the token list and recount every pair on each merge. They share
the selection and merge rules of ``BPETrainer`` and are kept to document
those rules and to check the incremental engine against.
"""

from collections import Counter
from typing_extensions import deprecated

from .types import Encoding, Symbol, SymbolPair


@deprecated(
    "Reference implementation for documentation only. Use `BPETrainer()` for production."
)
def slow_bpe_merge(
    tokens: list[Symbol], target: SymbolPair, new_tok: Symbol
) -> list[Symbol]:
    """
    Merge all occurrences of a target token pair into a single new token.

    Matches are consumed left to right, so a run of three identical tokens
    merged on their own pair leaves one merged token and one original.
    """
    newtoks: list[Symbol] = []

    i = 0
    while i < len(tokens):
        # check if we can form a pair and it matches the target
        if (
            i < len(tokens) - 1
            and tokens[i] == target[0]
            and tokens[i + 1] == target[1]
        ):
            newtoks.append(new_tok)
            i += 2
        else:
            newtoks.append(tokens[i])
            i += 1

    return newtoks


@deprecated(
    "Reference implementation for documentation only. Use `BPETrainer()` for production."
)
def slow_bpe_train(
    data: bytes, max_merges: int
) -> tuple[list[Symbol], Encoding]:
    """
    Train BPE by recounting all pairs before every merge.

    Naive algorithm: O(n × M), where n is the input length and M the number of
    merges. The most frequent pair is merged each round, ties going to the
    smallest pair, until no pair occurs twice or ``max_merges`` is reached.

    :param data: Training bytes.
    :param max_merges: Upper bound on merges.
    :return: Final tokens and the learned merges in creation order.
    """
    tokens: list[Symbol] = list(data)
    merges: Encoding = {}

    for i in range(max_merges):
        counts = Counter(zip(tokens, tokens[1:]))
        if not counts:
            break
        # highest count first, then smallest pair
        pair = min(counts, key=lambda p: (-counts[p], p))
        if counts[pair] <= 1:
            break
        new_tok = 256 + i
        tokens = slow_bpe_merge(tokens, pair, new_tok)
        merges[pair] = new_tok

    return tokens, merges
