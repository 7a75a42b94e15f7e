"""Factory and boundary functions for hosts driving the chain."""

from pathlib import Path
from typing import Iterable, Literal

from .builder import MarkovBuilder
from .generator import MarkovGenerator
from .pattern import WordPattern
from .sampling import RandomSource
from .tokenizer import RegexWordTokenizer
from .types import TransitionTable


# Builder factory
# ===================================================================================

Pattern = Literal["japanese", "words", "whitespace"]


def new_builder(
    pattern: Pattern = "japanese", *, custom_pattern: str | None = None
) -> MarkovBuilder:
    """
    Create a builder that splits posts with a built-in or custom regex pattern.

    :param pattern: Built-in pattern name. Ignored if custom_pattern is provided.
    :param custom_pattern: Custom regex pattern string. Overrides pattern parameter.
    :raises PatternError: If the pattern name is unknown or custom_pattern is invalid.

    .. code-block:: python

        builder = new_builder()
        builder = new_builder("whitespace")
        builder = new_builder(custom_pattern=r"\\w+")
    """
    if custom_pattern is not None:
        return MarkovBuilder(RegexWordTokenizer(custom_pattern))
    return MarkovBuilder(RegexWordTokenizer(WordPattern.get(pattern)))


def learn_many(builder: MarkovBuilder, texts: Iterable[str]) -> int:
    """Learn ``texts`` into ``builder`` and return the number that failed."""
    return builder.learn_many(texts)


def build(builder: MarkovBuilder) -> TransitionTable:
    """Take the finished table out of ``builder``."""
    return builder.build()


# ===================================================================================


# Generator factory
# ===================================================================================


def new_generator(
    model: TransitionTable | None = None, rng: RandomSource | None = None
) -> MarkovGenerator:
    return MarkovGenerator(model, rng)


def from_pretrained(model_path: str | Path, rng: RandomSource | None = None) -> MarkovGenerator:
    """
    Load a saved model and wrap it in a generator.

    :raises ModelIOError: If the file cannot be read.
    :raises DecodeError: If the file is not a valid model.
    """
    return MarkovGenerator.from_file(model_path, rng)


def set_start(generator: MarkovGenerator, seed: str | None = None) -> None:
    """Choose the starting word of ``generator`` (``None`` for the default start)."""
    generator.set_start(seed)


def generate(generator: MarkovGenerator) -> list[str]:
    """Generate one word sequence."""
    return generator.generate()


# ===================================================================================
