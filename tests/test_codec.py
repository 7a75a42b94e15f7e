"""Unit tests for the binary model format."""

import pytest

import postmarkov as pm
from postmarkov import END, START, MarkovBuilder, MarkovGenerator, Token
from postmarkov.codec import decode_model, encode_model, load_model, save_model
from postmarkov.errors import DecodeError, EncodeError, ModelIOError


def w(value: str) -> Token:
    return Token.word(value)


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def model(whitespace_tokenizer):
    """Model with repeated, cyclic and non-ascii transitions."""
    builder = MarkovBuilder(whitespace_tokenizer)
    builder.learn_many(
        ["a b a", "a b c", "", "猫 が 好き", "emoji 🎉 party", "a b a"]
    )
    return builder.build()


# Layout
# ---------------------------------------------------------------------------


def test_encode_minimal_table():
    """START -> END is: 1 source, START tag, 1 dest, END tag, count 1."""
    assert encode_model({START: {END: 1}}) == b"\x01\x00\x01\x02\x01"


def test_encode_word_payload():
    """Words carry a length-prefixed utf-8 payload."""
    assert encode_model({START: {w("é"): 3}}) == b"\x01\x00\x01\x01\x02\xc3\xa9\x03"


def test_encode_empty_table():
    assert encode_model({}) == b"\x00"
    assert decode_model(b"\x00") == {}


@pytest.mark.parametrize(
    "count, tail",
    [
        (250, b"\xfa"),
        (251, b"\xfb\xfb\x00"),
        (2**16, b"\xfc\x00\x00\x01\x00"),
        (2**32, b"\xfd\x00\x00\x00\x00\x01\x00\x00\x00"),
    ],
)
def test_count_widths(count, tail):
    """Counts switch to wider little-endian encodings past each boundary."""
    data = encode_model({START: {END: count}})
    assert data == b"\x01\x00\x01\x02" + tail
    assert decode_model(data) == {START: {END: count}}


def test_encoding_ignores_insertion_order():
    """Equal tables serialize to identical bytes."""
    one = {START: {w("a"): 1, w("b"): 2}, w("a"): {END: 1}, w("b"): {END: 2}}
    two = {w("b"): {END: 2}, w("a"): {END: 1}, START: {w("b"): 2, w("a"): 1}}
    assert encode_model(one) == encode_model(two)


# Round trip
# ---------------------------------------------------------------------------


def test_roundtrip_learned_model(model):
    """decode(encode(T)) == T for a learned table."""
    assert decode_model(encode_model(model)) == model


def test_save_load_roundtrip(model, tmp_path):
    """Files hold the same bytes as the in-memory encoding."""
    path = tmp_path / "nested" / "dir" / "chain.model"
    save_model(model, path)

    assert path.read_bytes() == encode_model(model)
    assert load_model(path) == model


# Decode failures
# ---------------------------------------------------------------------------


def test_every_truncation_is_rejected(model):
    """Any strict prefix of a valid buffer fails to decode."""
    data = encode_model(model)
    for end in range(len(data)):
        with pytest.raises(DecodeError):
            decode_model(data[:end])


@pytest.mark.parametrize(
    "data, reason",
    [
        (b"\x01\x00\x01\x02\x01\x00", "trailing"),
        (b"\x01\x03\x01\x02\x01", "unknown token tag"),
        (b"\x01\x00\x01\x02\x00", "zero count"),
        (b"\x01\x00\x00", "no transitions"),
        (b"\x01\x00\x01\x01\x00\x01", "empty word"),
        (b"\x01\x00\x01\x01\x01\xff\x01", "utf-8"),
        (b"\x01\x00\x01\x02\xfe", "invalid integer marker"),
        (b"\x02\x00\x01\x02\x01\x00\x01\x02\x01", "duplicate source"),
        (b"\x01\x00\x02\x02\x01\x02\x01", "duplicate transition"),
    ],
)
def test_malformed_input_rejected(data, reason):
    with pytest.raises(DecodeError, match=reason):
        decode_model(data)


def test_decode_error_reports_offset():
    with pytest.raises(DecodeError) as excinfo:
        decode_model(b"\x01\x00\x01\x02\x01\x00")
    assert excinfo.value.offset == 5


def test_failed_decode_keeps_loaded_model(model):
    """A corrupt upload never touches a model already held by the caller."""
    gen = MarkovGenerator(model)
    corrupt = encode_model(model)[:-2]
    with pytest.raises(DecodeError):
        gen.set_model(decode_model(corrupt))
    assert gen.get_model() is model


# Encode failures
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "bad",
    [
        {START: {}},
        {START: {END: 0}},
        {START: {END: 2**64}},
    ],
)
def test_encode_rejects_invalid_tables(bad):
    with pytest.raises(EncodeError):
        encode_model(bad)


# File errors
# ---------------------------------------------------------------------------


def test_load_missing_file_raises_io_error(tmp_path):
    """Storage failures are distinct from decode failures."""
    with pytest.raises(ModelIOError) as excinfo:
        load_model(tmp_path / "missing.model")
    assert isinstance(excinfo.value, OSError)
    assert not isinstance(excinfo.value, DecodeError)


def test_save_into_file_path_raises_io_error(model, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    with pytest.raises(ModelIOError):
        save_model(model, blocker / "chain.model")


def test_load_corrupt_file_raises_decode_error(tmp_path):
    path = tmp_path / "corrupt.model"
    path.write_bytes(b"\x05\x00")
    with pytest.raises(DecodeError):
        load_model(path)


def test_package_aliases(model):
    assert pm.decode(pm.encode(model)) == model
