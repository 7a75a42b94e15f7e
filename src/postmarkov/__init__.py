"""postmarkov: bigram Markov chain text generation from social-media posts."""

from .builder import MarkovBuilder
from .codec import decode_model, encode_model, load_model, save_model
from .corpus import extract_corpus, extract_corpus_file
from .factory import (
    build,
    from_pretrained,
    generate,
    learn_many,
    new_builder,
    new_generator,
    set_start,
)
from .generator import MarkovGenerator
from .pattern import WordPattern, get_pattern, list_patterns
from .sampling import weighted_choice
from .session import MarkovSession
from .token import END, START, Token, TokenKind
from .tokenizer import RegexWordTokenizer, WordTokenizer
from ._config import get_tokenize_timeout, set_tokenize_timeout

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("postmarkov")
except PackageNotFoundError:
    __version__ = "dev"

encode = encode_model
decode = decode_model

__all__ = [
    "Token",
    "TokenKind",
    "START",
    "END",
    "MarkovBuilder",
    "MarkovGenerator",
    "MarkovSession",
    "WordTokenizer",
    "RegexWordTokenizer",
    "WordPattern",
    "new_builder",
    "new_generator",
    "learn_many",
    "build",
    "set_start",
    "generate",
    "encode",
    "decode",
    "encode_model",
    "decode_model",
    "save_model",
    "load_model",
    "from_pretrained",
    "extract_corpus",
    "extract_corpus_file",
    "weighted_choice",
    "get_pattern",
    "list_patterns",
    "get_tokenize_timeout",
    "set_tokenize_timeout",
]
