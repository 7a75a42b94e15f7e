from enum import Enum

from .errors import PatternError


class WordPattern(str, Enum):
    """
    Pre-defined regex patterns for splitting posts into words.

    Every match becomes one word, so patterns must never match the empty string.
    """

    # script runs: kanji, kana, latin words, digits, then one symbol at a time
    JAPANESE = (
        r"\p{Han}+[々〆]*|"
        r"\p{Hiragana}+|"
        r"[\p{Katakana}ー]+|"
        r"\p{Latin}+(?:['’]\p{Latin}+)*|"
        r"\p{N}+|"
        r"\p{L}+|"
        r"[^\s\p{L}\p{N}]"
    )

    # unicode word characters with attached apostrophe suffixes
    WORDS = (
        r"\w+(?:['’]\w+)*|"
        r"[^\s\w]"
    )

    WHITESPACE = r"\S+"

    @classmethod
    def get(cls, name: str) -> str:
        """Get patterns by name (case-insensitive)."""
        try:
            return cls[name.upper().replace("-", "_")].value
        except KeyError:
            raise PatternError(
                f"Unknown pattern: {name!r}. "
                f"Valid patterns: {', '.join(pat.name for pat in cls)}"
            )


def get_pattern(name: str) -> str:
    return WordPattern.get(name)


def list_patterns() -> list[str]:
    """Return names of all available built-in word patterns."""
    return [pat.name for pat in WordPattern]
