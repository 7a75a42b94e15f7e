"""Custom exception hierarchy for postmarkov errors."""

import regex as re

from ._sanitise import printable
from .token import Token


class MarkovError(Exception):
    """Base exception for all postmarkov errors."""


class TokenizationError(MarkovError):
    """Raised when a text cannot be split into words."""

    def __init__(self, message: str, *, input_text: str | None = None) -> None:
        """Initialize with an optional input excerpt that gets appended to the message."""
        extra = " "
        if input_text is not None:
            extra += f"(text: {printable(input_text, limit=40)}) "
        super().__init__(message + extra)
        self.input_text = input_text


class UnknownSeedError(MarkovError):
    """Raised when a starting word was never observed as a source token."""

    def __init__(self, message: str, *, seed: str | None = None) -> None:
        extra = " "
        if seed is not None:
            extra += f"(seed: {seed!r}) "
        super().__init__(message + extra)
        self.seed = seed


class UninitializedModelError(MarkovError):
    """Raised when generation is attempted with no model attached."""


class EncodeError(MarkovError):
    """Raised when a transition table cannot be serialized."""

    def __init__(self, message: str, *, token: Token | None = None) -> None:
        extra = " "
        if token is not None:
            extra += f"(token: {token}) "
        super().__init__(message + extra)
        self.token = token


class DecodeError(MarkovError):
    """Raised when serialized model bytes are malformed or truncated."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        """Initialize with the byte offset at which decoding failed."""
        extra = " "
        if offset is not None:
            extra += f"(offset: {offset}) "
        super().__init__(message + extra)
        self.offset = offset


class ModelIOError(MarkovError, OSError):
    """Raised when model storage cannot be opened, read or written."""

    def __init__(self, message: str, *, model_path: str | None = None) -> None:
        extra = " "
        if model_path:
            extra += f"(path: {model_path}) "
        super().__init__(message + extra)
        self.model_path = model_path


class ArchiveError(MarkovError):
    """Raised when a corpus export bundle is malformed."""

    def __init__(self, message: str, *, member: str | None = None) -> None:
        extra = " "
        if member:
            extra += f"(member: {member}) "
        super().__init__(message + extra)
        self.member = member


class PatternError(MarkovError):
    """Raised when compiling and/or validating word patterns."""

    def __init__(
        self,
        message: str,
        *,
        pattern: str | None = None,
        regex_err: re.error | None = None,
    ) -> None:
        """
        Initialize PatternError with pattern details.

        :param message: Error message.
        :param pattern: The regex pattern that failed.
        :param regex_err: The underlying error from the regex library.
        """
        extra = " "
        if pattern:
            extra += f"(pattern: {pattern!r}) "
        if regex_err:
            extra += f"(reason: {regex_err}) "
        super().__init__(message + extra)
        self.pattern = pattern
        self.regex_err = regex_err
