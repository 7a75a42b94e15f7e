"""Unit tests for Token equality, validation and rendering."""

import pytest

from postmarkov import END, START, Token, TokenKind
from postmarkov._sanitise import printable


def test_structural_equality_and_hash():
    assert Token.word("a") == Token.word("a")
    assert hash(Token.word("a")) == hash(Token.word("a"))
    assert Token(TokenKind.START) == START
    assert len({START, END, Token.word("a"), Token.word("a")}) == 3


def test_sentinels_never_equal_words():
    assert START != END
    for payload in ("START", "END", "<START>", "Start"):
        assert Token.word(payload) not in (START, END)


@pytest.mark.parametrize("bad", ["", None, 3])
def test_word_requires_non_empty_string(bad):
    with pytest.raises(ValueError):
        Token(TokenKind.WORD, bad)


def test_sentinel_rejects_payload():
    with pytest.raises(ValueError):
        Token(TokenKind.END, "x")


def test_tokens_are_immutable():
    with pytest.raises(AttributeError):
        Token.word("a").value = "b"


def test_rendering():
    assert str(START) == "<START>"
    assert str(Token.word("tab\there")) == "tab\\u0009here"
    assert repr(Token.word("a")) == "Token.word('a')"
    assert repr(END) == "END"


@pytest.mark.parametrize(
    "value, limit, expected",
    [
        ("plain", None, "plain"),
        ("a\nb", None, "a\\u000ab"),
        ("\u200b", None, "\\u200b"),
        (b"ok\xff", None, "ok\\xff"),
        ("abcdef", 3, "abc..."),
        ("abc", 3, "abc"),
    ],
)
def test_printable(value, limit, expected):
    assert printable(value, limit) == expected


def test_sort_key_orders_sentinels_around_words():
    tokens = [END, Token.word("b"), START, Token.word("a")]
    assert sorted(tokens, key=Token.sort_key) == [START, Token.word("a"), Token.word("b"), END]
