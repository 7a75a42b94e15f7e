"""Word tokenizers that split raw post text for the chain builder."""

from abc import ABC, abstractmethod
import logging
from typing import override

import regex as re

from ._config import get_tokenize_timeout
from .errors import PatternError, TokenizationError
from .pattern import WordPattern

log = logging.getLogger(__name__)


class WordTokenizer(ABC):
    """Splits natural-language text into an ordered list of words."""

    @abstractmethod
    def tokenize(self, text: str) -> list[str]:
        """
        Split ``text`` into words.

        :raises TokenizationError: If the text cannot be segmented.
        """
        ...


class RegexWordTokenizer(WordTokenizer):
    """Tokenizer where every match of a regex pattern is one word."""

    def __init__(self, pattern: str | None = None) -> None:
        self.pat: str = pattern if pattern is not None else WordPattern.JAPANESE.value
        self.compiled_pat: re.Pattern[str] = _compile_pattern(self.pat)

    @override
    def tokenize(self, text: str) -> list[str]:
        """
        Return all pattern matches of ``text`` in order.

        :raises TokenizationError: If ``text`` is not a string, contains lone
            surrogates, or matching exceeds the configured timeout.
        """
        if not isinstance(text, str):
            raise TokenizationError(f"expected str, got {type(text).__name__}")
        try:
            # lone surrogates cannot be persisted as utf-8 words
            text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise TokenizationError("text is not valid unicode", input_text=text) from e

        timeout = get_tokenize_timeout()
        try:
            # whole matches, so capturing groups in custom patterns do not split words
            return [
                m.group(0) for m in self.compiled_pat.finditer(text, timeout=timeout)
            ]
        except TimeoutError as e:
            raise TokenizationError(
                f"tokenization exceeded {timeout} s", input_text=text
            ) from e


def _compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile and validate a word pattern.

    :param pattern: Regex pattern string to compile.
    :return: Compiled regex pattern.
    :raises PatternError: If pattern is invalid or can match the empty string.
    """
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise PatternError("invalid regex pattern", pattern=pattern, regex_err=e)
    if compiled.fullmatch("") is not None:
        raise PatternError("pattern must not match the empty string", pattern=pattern)
    log.debug(f"compiled word pattern {pattern!r}")
    return compiled
