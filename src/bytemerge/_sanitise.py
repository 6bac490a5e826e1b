"""
Printable forms of symbol bytes for log lines.

Merged symbols often cut a UTF-8 sequence in half, so bytes that do not
decode are shown as ``\\xNN`` escapes rather than replacement characters.
"""

import unicodedata


def _escape(c: str) -> str:
    # control category codes vary: Cc, Cf, Cn etc.
    if unicodedata.category(c)[0] != "C":
        return c
    if ord(c) < 0x100:
        return f"\\x{ord(c):02x}"
    return f"\\u{ord(c):04x}"


def render_bytes(b: bytes) -> str:
    """Decode ``b`` as UTF-8, escaping control characters and stray bytes."""
    text = b.decode("utf-8", errors="backslashreplace")
    return "".join(_escape(c) for c in text)


def render_merge(merged: bytes, left: int, right: int) -> str:
    """Render a merged symbol with the two symbols it was built from."""
    return f"{render_bytes(merged)} = {left} + {right}"
