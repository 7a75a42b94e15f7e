"""Thread-safe model holder for long-lived hosts."""

import logging
import threading

from .builder import MarkovBuilder
from .codec import decode_model, encode_model
from .corpus import extract_corpus
from .generator import MarkovGenerator
from .sampling import RandomSource

log = logging.getLogger(__name__)


class MarkovSession:
    """
    One shared generator guarded by a single lock.

    Hosts that serve several callers (bots, web handlers) create one session
    and pass it to their handlers. Every public method holds the lock, so a
    model swap never overlaps with generation or download. Building happens
    on a separate ``MarkovBuilder`` and only the finished table is installed.
    """

    def __init__(self, rng: RandomSource | None = None) -> None:
        self._lock = threading.Lock()
        self._generator = MarkovGenerator(rng=rng)

    @property
    def has_model(self) -> bool:
        with self._lock:
            return self._generator.get_model() is not None

    def learn_archive(self, builder: MarkovBuilder, data: bytes) -> int:
        """
        Extract an export bundle and feed its lines to ``builder``.

        Does not touch the session's current model.

        :returns: Number of lines that failed to tokenize.
        :raises ArchiveError: If the bundle is malformed.
        """
        return builder.learn_many(extract_corpus(data))

    def install(self, builder: MarkovBuilder) -> None:
        """Build ``builder``'s table and make it the session's model."""
        model = builder.build()
        with self._lock:
            self._generator.set_model(model)
        log.info(f"installed model with {len(model)} source tokens")

    def set_starting_word(self, word: str) -> None:
        """
        Start future generations from ``word``; an empty string means the default start.

        :raises UnknownSeedError: If ``word`` is not in the model.
        """
        with self._lock:
            self._generator.set_start(None if word == "" else word)

    def generate(self) -> list[str]:
        """
        Generate one word sequence from the installed model.

        :raises UninitializedModelError: If no model has been installed.
        """
        with self._lock:
            return self._generator.generate()

    def download(self) -> bytes:
        """Serialize the installed model; empty bytes when there is none."""
        with self._lock:
            model = self._generator.get_model()
            if model is None:
                return b""
            return encode_model(model)

    def upload(self, data: bytes) -> None:
        """
        Replace the installed model with a serialized one.

        Decoding happens before the lock is taken; on ``DecodeError`` the
        current model stays in place.
        """
        model = decode_model(data)
        with self._lock:
            self._generator.set_model(model)
        log.info(f"uploaded model with {len(model)} source tokens")
