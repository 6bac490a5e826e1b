"""bytemerge: incremental byte-pair-encoding vocabulary training."""

from importlib.metadata import PackageNotFoundError, version

from ._progress import disable_progress, enable_progress
from .config import TrainerConfig
from .errors import (
    ByteMergeError,
    CheckpointWriteError,
    ConfigError,
    InputError,
    InputUnavailableError,
    WalkerStateError,
)
from .trainer import BPETrainer, BPETrainingResult, StopReason, train_file
from .vocab import Vocabulary

try:
    __version__ = version("bytemerge")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "BPETrainer",
    "BPETrainingResult",
    "StopReason",
    "TrainerConfig",
    "Vocabulary",
    "train_file",
    "enable_progress",
    "disable_progress",
    "ByteMergeError",
    "CheckpointWriteError",
    "ConfigError",
    "InputError",
    "InputUnavailableError",
    "WalkerStateError",
]
