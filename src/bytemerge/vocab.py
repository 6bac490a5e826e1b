"""
Merge vocabulary.

Each merged symbol is stored as the pair of symbols it was built from and
expanded to bytes on demand. Deep merge chains therefore cost one pair per
symbol instead of a fully materialized byte string per symbol.
"""

from collections.abc import Iterable, Iterator
from typing import Final

from ._sanitise import render_bytes, render_merge
from .types import Encoding, Symbol, SymbolPair, Vocabulary as VocabularyDict

N_BYTES: Final[int] = 256
FIRST_MERGE_SYMBOL: Final[Symbol] = N_BYTES


class Vocabulary:
    """Append-only mapping from symbol to its byte expansion."""

    def __init__(self) -> None:
        # merged symbol -> (left child, right child), in creation order
        self._children: dict[Symbol, SymbolPair] = {}

    def __len__(self) -> int:
        return N_BYTES + len(self._children)

    def __contains__(self, sym: object) -> bool:
        if not isinstance(sym, int):
            return False
        return 0 <= sym < N_BYTES or sym in self._children

    def __iter__(self) -> Iterator[Symbol]:
        yield from range(N_BYTES)
        yield from self._children

    @property
    def next_symbol(self) -> Symbol:
        """Symbol the next ``add`` must use."""
        return FIRST_MERGE_SYMBOL + len(self._children)

    def add(self, sym: Symbol, pair: SymbolPair) -> None:
        """
        Record that ``sym`` was merged from ``pair``.

        :raises KeyError: If either child is unknown.
        :raises ValueError: If ``sym`` is not the next free symbol.
        """
        if sym != self.next_symbol:
            raise ValueError(f"expected symbol {self.next_symbol}, got {sym}")
        for child in pair:
            if child not in self:
                raise KeyError(child)
        self._children[sym] = pair

    def children(self, sym: Symbol) -> SymbolPair | None:
        """Return the pair ``sym`` was merged from, or ``None`` for a byte."""
        if sym < N_BYTES:
            return None
        return self._children[sym]

    def expand(self, sym: Symbol) -> bytes:
        """
        Return the original bytes that ``sym`` stands for.

        :raises KeyError: If ``sym`` is not in the vocabulary.
        """
        if sym not in self:
            raise KeyError(sym)

        out = bytearray()
        # explicit stack, merge chains can be far deeper than the recursion limit
        stack = [sym]
        while stack:
            cur = stack.pop()
            if cur < N_BYTES:
                out.append(cur)
            else:
                left, right = self._children[cur]
                stack.append(right)
                stack.append(left)
        return bytes(out)

    def expand_all(self, symbols: Iterable[Symbol]) -> bytes:
        """Concatenate the expansions of ``symbols`` in order."""
        return b"".join(self.expand(sym) for sym in symbols)

    def render(self, sym: Symbol) -> str:
        """Printable form of a symbol for logs, with its children if merged."""
        pair = self.children(sym)
        if pair is None:
            return render_bytes(self.expand(sym))
        return render_merge(self.expand(sym), *pair)

    def merges(self) -> Encoding:
        """Return the merge rules, pair -> merged symbol, in creation order."""
        return {pair: sym for sym, pair in self._children.items()}

    def to_dict(self) -> VocabularyDict:
        """Materialize every expansion as ``{symbol: bytes}``."""
        return {sym: self.expand(sym) for sym in self}


__all__ = ["Vocabulary", "N_BYTES", "FIRST_MERGE_SYMBOL"]
