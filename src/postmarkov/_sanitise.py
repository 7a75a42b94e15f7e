"""
Helpers for showing words and raw payloads inside one-line messages.
"""

import unicodedata

_ELLIPSIS = "..."


def _escape(c: str) -> str:
    # Cc, Cf, Cs, Co and Cn all start with "C"
    if unicodedata.category(c).startswith("C"):
        return f"\\u{ord(c):04x}"
    return c


def printable(value: str | bytes, limit: int | None = None) -> str:
    """
    Render ``value`` so it fits on a single log or error line.

    Bytes are decoded as UTF-8 with undecodable bytes kept visible as
    ``\\xNN``. Control characters become ``\\uXXXX`` escapes. When ``limit``
    is given, only that many source characters are shown, followed by ``...``.
    """
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="backslashreplace")
    clipped = limit is not None and len(value) > limit
    if clipped:
        value = value[:limit]
    text = "".join(map(_escape, value))
    return text + _ELLIPSIS if clipped else text
