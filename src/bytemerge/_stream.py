"""
Hole-tolerant symbol stream.

Merges never shrink the slot list: the left slot of a merged pair takes the
new symbol and the right slot becomes a hole. Traversals skip holes lazily,
and ``compact`` removes them once they start to dominate the list.
"""

from collections.abc import Iterable, Iterator
from typing import Final

from .errors import InputError
from .types import Symbol

# out-of-band tombstone, disjoint from every byte and merged symbol
HOLE: Final[int] = -1


class SymbolStream:
    """Mutable slot list whose non-hole slots form the current tokenization."""

    __slots__ = ("slots",)

    def __init__(self, slots: list[int] | None = None) -> None:
        self.slots: list[int] = [] if slots is None else slots

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview | Iterable[int]) -> "SymbolStream":
        """
        Create a stream with one slot per input byte.

        :param data: Raw bytes, or integers in the byte range.
        :raises InputError: If an integer falls outside 0..255.
        """
        if isinstance(data, (bytes, bytearray, memoryview)):
            return cls(list(bytes(data)))

        slots = list(data)
        for pos, value in enumerate(slots):
            if not 0 <= value <= 255:
                raise InputError("input value is not a byte", position=pos, value=value)
        return cls(slots)

    def __len__(self) -> int:
        """Physical length, holes included."""
        return len(self.slots)

    def live_positions(self) -> Iterator[int]:
        """
        Yield the positions of live slots in order.

        Slots are read one at a time as the cursor advances, so writes made
        behind the cursor are seen by later steps of the same traversal.
        """
        slots = self.slots
        pos = 0
        while pos < len(slots):
            if slots[pos] != HOLE:
                yield pos
            pos += 1

    def prev_live(self, pos: int) -> int | None:
        """Return the nearest live position left of ``pos``, or ``None``."""
        slots = self.slots
        i = pos - 1
        while i >= 0 and slots[i] == HOLE:
            i -= 1
        return i if i >= 0 else None

    def live_symbols(self) -> list[Symbol]:
        """Return the live symbols in traversal order."""
        return [sym for sym in self.slots if sym != HOLE]

    def live_count(self) -> int:
        return len(self.slots) - self.hole_count()

    def hole_count(self) -> int:
        return self.slots.count(HOLE)

    def compact(self) -> int:
        """
        Remove every hole in place, keeping live symbols in order.

        :returns: Number of slots removed.
        """
        before = len(self.slots)
        self.slots[:] = [sym for sym in self.slots if sym != HOLE]
        return before - len(self.slots)


__all__ = ["HOLE", "SymbolStream"]
