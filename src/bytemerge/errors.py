"""Custom exception hierarchy for bytemerge training errors."""

from pathlib import Path


class ByteMergeError(Exception):
    """Base exception for all bytemerge errors."""


class InputUnavailableError(ByteMergeError):
    """Raised when the training input cannot be opened or read."""

    def __init__(self, message: str, *, path: str | Path | None = None) -> None:
        extra = " "
        if path is not None:
            extra += f"(path: {path}) "
        super().__init__(message + extra)
        self.path = path


class InputError(ByteMergeError):
    """Raised when in-memory training input is not a byte sequence."""

    def __init__(
        self,
        message: str,
        *,
        position: int | None = None,
        value: int | None = None,
    ) -> None:
        extra = " "
        if position is not None:
            extra += f"(position: {position}) "
        if value is not None:
            extra += f"(value: {value}) "
        super().__init__(message + extra)
        self.position = position
        self.value = value


class CheckpointWriteError(ByteMergeError):
    """Raised when a token checkpoint cannot be written."""

    def __init__(self, message: str, *, path: str | Path | None = None) -> None:
        extra = " "
        if path is not None:
            extra += f"(path: {path}) "
        super().__init__(message + extra)
        self.path = path


class ConfigError(ByteMergeError):
    """Raised when a trainer setting is out of range."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: object = None,
    ) -> None:
        """Initialize with the offending field and value appended to the message."""
        extra = " "
        if field:
            extra += f"(field: {field}) (got {value!r}) "
        super().__init__(message + extra)
        self.field = field
        self.value = value


class WalkerStateError(ByteMergeError):
    """Raised when a pair walker is resynced outside its contract."""
