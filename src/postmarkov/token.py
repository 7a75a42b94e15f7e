"""
Chain symbols: a start sentinel, an end sentinel, or a word.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Final

from ._sanitise import printable


class TokenKind(IntEnum):
    """Token variants. The integer values double as the serialized tags."""

    START = 0
    WORD = 1
    END = 2


@dataclass(frozen=True, slots=True)
class Token:
    """
    A closed sum of three variants compared by value.

    Only ``WORD`` tokens carry a payload. Use the ``START`` and ``END``
    module constants for the sentinels and ``Token.word`` for words.
    """

    kind: TokenKind
    value: str | None = None

    def __post_init__(self) -> None:
        if self.kind is TokenKind.WORD:
            if not isinstance(self.value, str) or not self.value:
                raise ValueError(f"word token needs a non-empty string, got {self.value!r}")
        elif self.value is not None:
            raise ValueError(f"{self.kind.name} token cannot carry a value")

    @classmethod
    def word(cls, value: str) -> "Token":
        """Build a word token."""
        return cls(TokenKind.WORD, value)

    @property
    def is_word(self) -> bool:
        return self.kind is TokenKind.WORD

    def sort_key(self) -> tuple[int, str]:
        """Total order over tokens: sentinels by tag, words by text."""
        return (int(self.kind), self.value or "")

    def __str__(self) -> str:
        if self.kind is TokenKind.WORD:
            return printable(self.value)
        return f"<{self.kind.name}>"

    def __repr__(self) -> str:
        if self.kind is TokenKind.WORD:
            return f"Token.word({self.value!r})"
        return self.kind.name


START: Final[Token] = Token(TokenKind.START)
END: Final[Token] = Token(TokenKind.END)
