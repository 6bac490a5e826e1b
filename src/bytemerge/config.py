"""Trainer settings."""

import math
from dataclasses import dataclass
from typing import Final

from .errors import ConfigError
from .vocab import FIRST_MERGE_SYMBOL

DEFAULT_MAX_MERGES: Final[int] = 65_000
DEFAULT_CHECKPOINT_INTERVAL: Final[int] = 1_000
DEFAULT_REPORT_INTERVAL: Final[int] = 100
# live fraction below which the stream is compacted; the list roughly
# halves every two compactions
DEFAULT_COMPACTION_THRESHOLD: Final[float] = math.sqrt(0.5)
DEFAULT_SUFFIX: Final[str] = ".ptok"
# checkpoints store symbols as unsigned 16-bit integers
MAX_SYMBOL: Final[int] = 0xFFFF


@dataclass(frozen=True)
class TrainerConfig:
    """
    Settings for one training run.

    :param max_merges: Hard cap on merge steps, independent of the natural
        stop when no pair occurs twice.
    :param checkpoint_interval: Emit a checkpoint every this many merges.
    :param report_interval: Log a progress line every this many merges.
    :param compaction_threshold: Compact when live pairs fall below this
        fraction of the physical stream length.
    :param output_suffix: Appended to the input filename for checkpoints.
    :param strict_checkpoints: Abort on a failed checkpoint instead of
        logging it and carrying on.
    :param verbose: Log every merge with its rendered bytes.
    """

    max_merges: int = DEFAULT_MAX_MERGES
    checkpoint_interval: int = DEFAULT_CHECKPOINT_INTERVAL
    report_interval: int = DEFAULT_REPORT_INTERVAL
    compaction_threshold: float = DEFAULT_COMPACTION_THRESHOLD
    output_suffix: str = DEFAULT_SUFFIX
    strict_checkpoints: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.max_merges < 0:
            raise ConfigError("merge cap must be non-negative", field="max_merges", value=self.max_merges)
        if FIRST_MERGE_SYMBOL + self.max_merges - 1 > MAX_SYMBOL:
            raise ConfigError(
                "merge cap overflows 16-bit symbols",
                field="max_merges",
                value=self.max_merges,
            )
        for name in ("checkpoint_interval", "report_interval"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigError("interval must be positive", field=name, value=value)
        if not 0.0 < self.compaction_threshold <= 1.0:
            raise ConfigError(
                "threshold must be in (0, 1]",
                field="compaction_threshold",
                value=self.compaction_threshold,
            )
        if not self.output_suffix:
            raise ConfigError("suffix must not be empty", field="output_suffix", value=self.output_suffix)


__all__ = ["TrainerConfig"]
