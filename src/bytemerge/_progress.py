"""Progress lines for the merge loop."""

import os
from typing import Final

ENV_DISABLE: Final[str] = "BYTEMERGE_DISABLE_PROGRESS"

_enabled: bool = True


def enable_progress() -> None:
    """Turn periodic merge progress lines on."""
    global _enabled
    _enabled = True


def disable_progress() -> None:
    """Turn periodic merge progress lines off."""
    global _enabled
    _enabled = False


def _is_enabled() -> bool:
    """Check the switch; ``BYTEMERGE_DISABLE_PROGRESS`` set to a true value wins."""
    if os.environ.get(ENV_DISABLE, "").strip().lower() in ("1", "true", "yes"):
        return False
    return _enabled


def should_report(step: int, interval: int) -> bool:
    """Whether merge ``step`` gets a progress line at ``interval``."""
    return step % interval == 0 and _is_enabled()
