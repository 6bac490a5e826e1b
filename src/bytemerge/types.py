"""
Core types for the merge engine.
"""

from collections import Counter
from typing import TypeAlias

Symbol: TypeAlias = int
SymbolPair: TypeAlias = tuple[Symbol, Symbol]
PairHistogram: TypeAlias = Counter[SymbolPair]
Encoding: TypeAlias = dict[SymbolPair, Symbol]
Vocabulary: TypeAlias = dict[Symbol, bytes]
