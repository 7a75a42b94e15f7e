"""Weighted random walk over a transition table."""

import logging
import random
from pathlib import Path

from .codec import decode_model, load_model
from .errors import UninitializedModelError, UnknownSeedError
from .sampling import RandomSource, weighted_choice
from .token import END, START, Token
from .types import TransitionTable

log = logging.getLogger(__name__)


class MarkovGenerator:
    """
    Produces word sequences by walking a transition table.

    Each ``generate`` call starts from the configured start token (``START``
    unless ``set_start`` chose a word) and samples successors in proportion
    to their counts until ``END`` is drawn or the current token has no
    recorded successors.

    Output length is not capped: a chain whose words loop back on each
    other can keep producing words for as long as the draws avoid ``END``.
    """

    def __init__(
        self,
        model: TransitionTable | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.model: TransitionTable | None = model
        self.rng: RandomSource = rng if rng is not None else random.Random()
        # token each generate() call begins from
        self.start: Token = START
        self.current: Token = START

    @classmethod
    def from_model(
        cls, model: TransitionTable, rng: RandomSource | None = None
    ) -> "MarkovGenerator":
        return cls(model, rng)

    @classmethod
    def from_bytes(cls, data: bytes, rng: RandomSource | None = None) -> "MarkovGenerator":
        """
        Build a generator from serialized model bytes.

        :raises DecodeError: If ``data`` is not a valid serialized model.
        """
        return cls(decode_model(data), rng)

    @classmethod
    def from_file(cls, path: str | Path, rng: RandomSource | None = None) -> "MarkovGenerator":
        """
        Build a generator from a model file.

        :raises ModelIOError: If the file cannot be read.
        :raises DecodeError: If the file contents are malformed.
        """
        return cls(load_model(path), rng)

    def set_model(self, model: TransitionTable) -> None:
        """Attach a new table; the start token goes back to ``START``."""
        self.model = model
        self.start = START
        self.current = START

    def get_model(self) -> TransitionTable | None:
        return self.model

    def set_start(self, seed: str | None) -> None:
        """
        Choose the word generation begins from, or ``None`` for ``START``.

        :raises UnknownSeedError: If ``seed`` never appeared as a source token
            in the attached model (or no model is attached).
        """
        if seed is None:
            self.start = START
            self.current = START
            return

        token = Token.word(seed) if isinstance(seed, str) and seed else None
        if token is None or self.model is None or token not in self.model:
            raise UnknownSeedError("the model does not have such key", seed=seed)
        self.start = token
        self.current = token

    def generate_next(self) -> Token:
        """
        Advance ``current`` by one weighted draw and return the new token.

        A token with no recorded successors is treated as leading to ``END``.

        :raises UninitializedModelError: If no model is attached.
        """
        if self.model is None:
            raise UninitializedModelError("the model is not initialized yet")

        candidates = self.model.get(self.current)
        if not candidates:
            self.current = END
            return END

        self.current = weighted_choice(list(candidates.items()), self.rng)
        return self.current

    def generate(self) -> list[str]:
        """
        Walk the chain from the start token and return the visited words.

        A word start token is included as the first element. ``current`` is
        back at the start token once the call returns.

        :raises UninitializedModelError: If no model is attached.
        """
        if self.model is None:
            raise UninitializedModelError("the model is not initialized yet")

        self.current = self.start
        text: list[str] = []
        if self.current.is_word:
            text.append(self.current.value)
        while (token := self.generate_next()).is_word:
            text.append(token.value)
        # END only finishes this call; the next one begins from the start token again
        self.current = self.start

        log.debug(f"generated {len(text)} words")
        return text
