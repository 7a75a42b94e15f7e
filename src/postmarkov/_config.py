import logging
import os

log = logging.getLogger(__name__)

TIMEOUT_ENV_VAR = "POSTMARKOV_TOKENIZE_TIMEOUT"

_tokenize_timeout: float | None = None


def set_tokenize_timeout(seconds: float | None) -> None:
    """Set the regex match timeout applied by tokenizers (``None`` disables it)."""
    global _tokenize_timeout
    if seconds is not None and seconds <= 0:
        raise ValueError(f"timeout must be positive, got {seconds}")
    _tokenize_timeout = seconds


def get_tokenize_timeout() -> float | None:
    """Return the tokenizer timeout (respects env var override)."""
    raw = os.environ.get(TIMEOUT_ENV_VAR, "").strip()
    if raw:
        try:
            seconds = float(raw)
        except ValueError:
            log.warning(f"ignoring non-numeric {TIMEOUT_ENV_VAR}={raw!r}")
        else:
            if seconds > 0:
                return seconds
            log.warning(f"ignoring non-positive {TIMEOUT_ENV_VAR}={raw!r}")
    return _tokenize_timeout
