"""
Reading training input and writing token checkpoints.

Checkpoints hold the live symbols as unsigned 16-bit integers in the host's
native byte order with no header. Every write replaces the whole file.
"""

import logging
from array import array
from collections.abc import Sequence
from pathlib import Path

from .errors import CheckpointWriteError, InputUnavailableError
from .types import Symbol

log = logging.getLogger(__name__)


def load_bytes(path: str | Path) -> bytes:
    """
    Read a training file in full.

    :raises InputUnavailableError: If the file cannot be opened or read.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InputUnavailableError(f"cannot read input: {e.strerror or e}", path=path) from e
    log.info(f"loaded {len(data):,} bytes from {path}")
    return data


def checkpoint_path(input_path: str | Path, suffix: str) -> Path:
    """Return ``input_path`` with ``suffix`` appended to the filename."""
    input_path = Path(input_path)
    return input_path.with_name(input_path.name + suffix)


def save_tokens(path: str | Path, tokens: Sequence[Symbol]) -> None:
    """
    Overwrite ``path`` with ``tokens`` as native-endian uint16 values.

    :raises CheckpointWriteError: If the file cannot be written.
    """
    path = Path(path)
    try:
        buf = array("H", tokens)
    except OverflowError as e:
        raise CheckpointWriteError("symbol does not fit in 16 bits", path=path) from e
    try:
        with path.open("wb") as f:
            buf.tofile(f)
    except OSError as e:
        raise CheckpointWriteError(f"cannot write checkpoint: {e.strerror or e}", path=path) from e


def load_tokens(path: str | Path) -> list[Symbol]:
    """Read a checkpoint written by ``save_tokens``."""
    buf = array("H")
    buf.frombytes(Path(path).read_bytes())
    return buf.tolist()


class FileCheckpointer:
    """Checkpoint callback that writes the token stream next to the input."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def __call__(self, tokens: Sequence[Symbol]) -> None:
        save_tokens(self.path, tokens)
        log.info(
            f"checkpoint: {len(tokens):,} tokens, {len(set(tokens)):,} distinct -> {self.path}"
        )


__all__ = [
    "load_bytes",
    "checkpoint_path",
    "save_tokens",
    "load_tokens",
    "FileCheckpointer",
]
