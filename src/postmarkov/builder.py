"""Accumulates a bigram transition table from raw post text."""

import logging
from typing import Iterable

from ._decorators import measure_time
from .errors import TokenizationError
from .token import END, START, Token
from .tokenizer import RegexWordTokenizer, WordTokenizer
from .types import TransitionTable

log = logging.getLogger(__name__)


class MarkovBuilder:
    """
    Counts adjacent word pairs over many texts.

    Each text is framed as ``[START, w1, ..., wn, END]`` so the chain learns
    how posts begin and end as well as which word follows which.
    """

    def __init__(self, tokenizer: WordTokenizer | None = None) -> None:
        self.tokenizer: WordTokenizer = (
            tokenizer if tokenizer is not None else RegexWordTokenizer()
        )
        # source token -> next token -> times observed
        self.model: TransitionTable = {}
        self.n_learned: int = 0

    def learn(self, text: str) -> None:
        """
        Add every adjacent token pair of ``text`` to the table.

        The table is only touched after tokenization succeeds, so a failing
        text leaves no partial counts behind.

        :raises TokenizationError: If the tokenizer fails or yields an
            empty or non-string word.
        """
        tokens = self._tokenize(text)
        for src, dst in zip(tokens, tokens[1:]):
            dests = self.model.setdefault(src, {})
            dests[dst] = dests.get(dst, 0) + 1
        self.n_learned += 1

    @measure_time("learning")
    def learn_many(self, texts: Iterable[str]) -> int:
        """
        Learn each text independently and return how many failed.

        A text that fails to tokenize is skipped; the rest of the batch is
        still learned.
        """
        failures = 0
        for text in texts:
            try:
                self.learn(text)
            except TokenizationError as e:
                failures += 1
                log.debug(f"skipping text: {e}")
        if failures:
            log.warning(f"{failures} text(s) could not be tokenized and were skipped")
        log.info(f"learned {self.n_learned} texts, {len(self.model)} source tokens")
        return failures

    def build(self) -> TransitionTable:
        """Hand over the accumulated table and start again from an empty one."""
        model = self.model
        self.model = {}
        self.n_learned = 0
        log.debug(f"built model with {len(model)} source tokens")
        return model

    def _tokenize(self, text: str) -> list[Token]:
        """Frame the tokenizer output with the start and end sentinels."""
        words = self.tokenizer.tokenize(text)
        tokens = [START]
        for word in words:
            if not isinstance(word, str) or not word:
                raise TokenizationError(f"tokenizer produced invalid word {word!r}")
            tokens.append(Token.word(word))
        tokens.append(END)
        return tokens
