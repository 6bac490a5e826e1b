"""Command-line entry point: train a BPE vocabulary on one file."""

import argparse
import logging
from typing import Final

from .config import (
    DEFAULT_CHECKPOINT_INTERVAL,
    DEFAULT_COMPACTION_THRESHOLD,
    DEFAULT_MAX_MERGES,
    DEFAULT_REPORT_INTERVAL,
    DEFAULT_SUFFIX,
    TrainerConfig,
)
from .errors import ByteMergeError
from .trainer import train_file

DEFAULT_INPUT: Final[str] = "enw3"

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="bytemerge",
        description="Merge the most frequent byte pairs of a file until none repeats.",
    )
    ap.add_argument("input", nargs="?", default=DEFAULT_INPUT, help="training file")
    ap.add_argument("--max-merges", type=int, default=DEFAULT_MAX_MERGES)
    ap.add_argument("--checkpoint-interval", type=int, default=DEFAULT_CHECKPOINT_INTERVAL)
    ap.add_argument("--report-interval", type=int, default=DEFAULT_REPORT_INTERVAL)
    ap.add_argument(
        "--compaction-threshold", type=float, default=DEFAULT_COMPACTION_THRESHOLD
    )
    ap.add_argument(
        "--suffix",
        default=DEFAULT_SUFFIX,
        help="appended to the input filename for the token file",
    )
    ap.add_argument(
        "--strict-checkpoints",
        action="store_true",
        help="abort when a checkpoint cannot be written",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="log every merge")
    return ap


def main(argv: list[str] | None = None) -> int:
    """Run training and return the process exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = TrainerConfig(
            max_merges=args.max_merges,
            checkpoint_interval=args.checkpoint_interval,
            report_interval=args.report_interval,
            compaction_threshold=args.compaction_threshold,
            output_suffix=args.suffix,
            strict_checkpoints=args.strict_checkpoints,
            verbose=args.verbose,
        )
        result = train_file(args.input, config)
    except ByteMergeError as e:
        log.error(str(e))
        return 1

    log.info(
        f"{result.n_merges_completed} merges, {len(result.tokens):,} tokens, "
        f"vocab size {len(result.vocab):,} ({result.stop_reason.value})"
    )
    return 0
