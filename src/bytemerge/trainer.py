"""Incremental BPE training loop."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
import logging
from typing import TypeAlias

from ._decorators import measure_time
from ._merge import replace_pair
from ._pairs import build_histogram, most_frequent_pair
from ._progress import should_report
from ._stream import SymbolStream
from .config import TrainerConfig
from .errors import CheckpointWriteError
from .storage import FileCheckpointer, checkpoint_path, load_bytes
from .types import Encoding, PairHistogram, Symbol, SymbolPair
from .vocab import Vocabulary

log = logging.getLogger(__name__)

Checkpointer: TypeAlias = Callable[[Sequence[Symbol]], None]


class StopReason(str, Enum):
    """Why a training run ended."""

    # fewer than two symbols, nothing to select
    EMPTY = "empty"
    # no pair occurs more than once
    EXHAUSTED = "exhausted"
    # hit the configured merge cap
    MERGE_LIMIT = "merge-limit"


@dataclass
class MergeContext:
    """Mutable state owned by one training run."""

    stream: SymbolStream
    histogram: PairHistogram
    vocab: Vocabulary = field(default_factory=Vocabulary)

    @classmethod
    def from_bytes(cls, data: bytes | Iterable[int]) -> "MergeContext":
        """Build the stream and its pair histogram from raw input."""
        stream = SymbolStream.from_bytes(data)
        return cls(stream=stream, histogram=build_histogram(stream))


@dataclass
class MergeStep:
    """Record of one executed merge."""

    step: int
    pair: SymbolPair
    frequency: int
    symbol: Symbol
    replaced: int
    compacted: int


@dataclass
class BPETrainingResult:
    """Results from one BPE training run."""

    tokens: list[Symbol]
    vocab: Vocabulary
    n_merges_completed: int
    stop_reason: StopReason

    @property
    def merges(self) -> Encoding:
        return self.vocab.merges()


def maybe_compact(stream: SymbolStream, total: int, threshold: float) -> int:
    """
    Compact ``stream`` when live pairs fall below ``threshold`` of its length.

    :param total: Live adjacent-pair count, i.e. the histogram total.
    :returns: Number of holes removed, zero when no compaction ran.
    """
    if total >= threshold * len(stream):
        return 0
    removed = stream.compact()
    log.debug(f"compacted stream: removed {removed:,} holes, {len(stream):,} slots left")
    return removed


def merge_step(ctx: MergeContext, step: int, config: TrainerConfig) -> MergeStep | StopReason:
    """
    Select and execute one merge.

    :returns: The executed merge, or why no merge was made.
    """
    selection = most_frequent_pair(ctx.histogram)
    if selection is None:
        return StopReason.EMPTY
    if selection.frequency <= 1:
        return StopReason.EXHAUSTED

    compacted = maybe_compact(ctx.stream, selection.total, config.compaction_threshold)

    # the vocabulary owns the id counter
    new_sym = ctx.vocab.next_symbol
    if should_report(step, config.report_interval):
        log.info(
            "step %d: n=%d %s -> %d", step, selection.frequency, selection.pair, new_sym
        )

    # validates the pair before the stream is touched
    ctx.vocab.add(new_sym, selection.pair)
    replaced = replace_pair(ctx.stream, ctx.histogram, selection.pair, new_sym)

    if config.verbose:
        log.info(
            "merge %d/%d: n=%d %d: %s",
            step,
            config.max_merges,
            selection.frequency,
            new_sym,
            ctx.vocab.render(new_sym),
        )

    return MergeStep(
        step=step,
        pair=selection.pair,
        frequency=selection.frequency,
        symbol=new_sym,
        replaced=replaced,
        compacted=compacted,
    )


class BPETrainer:
    """
    BPE trainer that merges the most frequent pair until none repeats.

    Example:
       >>> trainer = BPETrainer()
       >>> result = trainer.train(b"abababab")
       >>> result.tokens
       [257, 257]
       >>> result.vocab.expand(257)
       b'abab'
    """

    def __init__(
        self,
        config: TrainerConfig | None = None,
        checkpoint: Checkpointer | None = None,
    ) -> None:
        """
        :param config: Training settings, defaults when ``None``.
        :param checkpoint: Called with the live token sequence every
            ``checkpoint_interval`` merges and once at the end.
        """
        self.config = config or TrainerConfig()
        self.checkpoint = checkpoint

    @measure_time
    def train(self, data: bytes | Iterable[int]) -> BPETrainingResult:
        """
        Train on a byte sequence.

        :param data: Raw bytes, or integers in the byte range.
        :returns: Final tokens, vocabulary, merge count and stop reason.
        :raises InputError: If ``data`` holds values outside 0..255.
        :raises CheckpointWriteError: If a checkpoint fails and the config
            asks for strict checkpoints.
        """
        ctx = MergeContext.from_bytes(data)
        return self.train_context(ctx)

    def train_context(self, ctx: MergeContext) -> BPETrainingResult:
        """Run the merge loop on a prepared context."""
        config = self.config
        n_merges = 0
        stop_reason: StopReason | None = None

        for step in range(1, config.max_merges + 1):
            outcome = merge_step(ctx, step, config)
            if isinstance(outcome, StopReason):
                stop_reason = outcome
                break
            n_merges += 1
            if step % config.checkpoint_interval == 0:
                self._emit_checkpoint(ctx)

        if stop_reason is None:
            stop_reason = StopReason.MERGE_LIMIT

        match stop_reason:
            case StopReason.EMPTY:
                log.warning(f"nothing to merge: fewer than two symbols left after {n_merges} merges")
            case StopReason.EXHAUSTED:
                log.info(f"no pair occurs more than once after {n_merges} merges, stopping")
            case StopReason.MERGE_LIMIT:
                log.info(f"merge cap of {config.max_merges} reached, stopping")

        self._emit_checkpoint(ctx)

        return BPETrainingResult(
            tokens=ctx.stream.live_symbols(),
            vocab=ctx.vocab,
            n_merges_completed=n_merges,
            stop_reason=stop_reason,
        )

    def _emit_checkpoint(self, ctx: MergeContext) -> None:
        if self.checkpoint is None:
            return
        try:
            self.checkpoint(ctx.stream.live_symbols())
        except CheckpointWriteError as e:
            if self.config.strict_checkpoints:
                raise
            log.error(f"checkpoint failed, continuing: {e}")


def train_file(path: str | Path, config: TrainerConfig | None = None) -> BPETrainingResult:
    """
    Train on a file and checkpoint tokens to ``<path><suffix>``.

    :raises InputUnavailableError: If the input cannot be read; raised before
        any merge work.
    """
    config = config or TrainerConfig()
    data = load_bytes(path)
    out_path = checkpoint_path(path, config.output_suffix)
    trainer = BPETrainer(config, checkpoint=FileCheckpointer(out_path))
    return trainer.train(data)


__all__ = [
    "BPETrainer",
    "BPETrainingResult",
    "MergeContext",
    "MergeStep",
    "StopReason",
    "maybe_compact",
    "merge_step",
    "train_file",
]
