"""
Binary serialization of transition tables.

Layout (all integers little-endian, unsigned integers variable-length)::

    table := varint(n_sources) entry*
    entry := token varint(n_dests) (token varint(count))*
    token := varint(tag) [varint(len) utf8]     # payload only for WORD

Variable-length integers are a single byte below 251; otherwise a marker
byte 251, 252 or 253 is followed by a u16, u32 or u64. Tags are the
``TokenKind`` values. There is no header: anything left over or missing
after the last entry is an error.
"""

import logging
import struct
from pathlib import Path
from typing import Final

from ._sanitise import printable
from .errors import DecodeError, EncodeError, ModelIOError
from .token import END, START, Token, TokenKind
from .types import TransitionTable, Transitions

log = logging.getLogger(__name__)

_SINGLE_BYTE_MAX: Final[int] = 250
_U16_MARKER: Final[int] = 251
_U32_MARKER: Final[int] = 252
_U64_MARKER: Final[int] = 253
U64_MAX: Final[int] = 2**64 - 1

# marker -> (struct format, byte width)
_WIDE_INTS: Final[dict[int, tuple[str, int]]] = {
    _U16_MARKER: ("<H", 2),
    _U32_MARKER: ("<I", 4),
    _U64_MARKER: ("<Q", 8),
}


# Encoding
# ===================================================================================


def _write_varint(buf: bytearray, n: int) -> None:
    if n <= _SINGLE_BYTE_MAX:
        buf.append(n)
    elif n < 2**16:
        buf.append(_U16_MARKER)
        buf += struct.pack("<H", n)
    elif n < 2**32:
        buf.append(_U32_MARKER)
        buf += struct.pack("<I", n)
    else:
        buf.append(_U64_MARKER)
        buf += struct.pack("<Q", n)


def _write_token(buf: bytearray, token: Token) -> None:
    _write_varint(buf, int(token.kind))
    if token.kind is TokenKind.WORD:
        payload = token.value.encode("utf-8")
        _write_varint(buf, len(payload))
        buf += payload


def encode_model(model: TransitionTable) -> bytes:
    """
    Serialize a transition table into one contiguous buffer.

    Entries are written in ``Token.sort_key`` order, so equal tables always
    produce identical bytes regardless of dict insertion order.

    :raises EncodeError: If an inner mapping is empty or a count is outside
        ``1..2**64-1``.
    """
    buf = bytearray()
    _write_varint(buf, len(model))
    for src in sorted(model, key=Token.sort_key):
        dests = model[src]
        if not dests:
            raise EncodeError("source token has no transitions", token=src)
        _write_token(buf, src)
        _write_varint(buf, len(dests))
        for dst in sorted(dests, key=Token.sort_key):
            count = dests[dst]
            if not 1 <= count <= U64_MAX:
                raise EncodeError(f"count {count} out of range", token=dst)
            _write_token(buf, dst)
            _write_varint(buf, count)
    return bytes(buf)


def save_model(model: TransitionTable, path: str | Path) -> None:
    """
    Serialize ``model`` to ``path``, creating parent directories as needed.

    The buffer is fully encoded before the file is opened, so an
    ``EncodeError`` never leaves a truncated file behind.

    :raises EncodeError: If the table cannot be serialized.
    :raises ModelIOError: If the file cannot be written.
    """
    path = Path(path)
    data = encode_model(model)
    log.info(f"saving model to {path}")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise ModelIOError("failed to write model file", model_path=str(path)) from e
    log.info(f"model saved successfully: {len(model)} source tokens, {len(data)} bytes")


# Decoding
# ===================================================================================


class _Reader:
    """Cursor over a serialized table; every read is bounds-checked."""

    def __init__(self, data: bytes) -> None:
        self.data = memoryview(data)
        self.offset = 0

    def take(self, n: int) -> memoryview:
        end = self.offset + n
        if end > len(self.data):
            raise DecodeError(
                f"unexpected end of data (need {n} bytes, have {len(self.data) - self.offset})",
                offset=self.offset,
            )
        chunk = self.data[self.offset : end]
        self.offset = end
        return chunk

    def varint(self) -> int:
        start = self.offset
        first = self.take(1)[0]
        if first <= _SINGLE_BYTE_MAX:
            return first
        if first not in _WIDE_INTS:
            raise DecodeError(f"invalid integer marker {first}", offset=start)
        fmt, width = _WIDE_INTS[first]
        (n,) = struct.unpack(fmt, self.take(width))
        return n

    def token(self) -> Token:
        start = self.offset
        tag = self.varint()
        if tag == TokenKind.START:
            return START
        if tag == TokenKind.END:
            return END
        if tag != TokenKind.WORD:
            raise DecodeError(f"unknown token tag {tag}", offset=start)

        length = self.varint()
        if length == 0:
            raise DecodeError("empty word payload", offset=start)
        raw = bytes(self.take(length))
        try:
            value = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(
                f"word payload is not valid utf-8: {printable(raw, limit=40)}", offset=start
            ) from e
        return Token.word(value)


def decode_model(data: bytes) -> TransitionTable:
    """
    Parse a buffer produced by ``encode_model``.

    The table is assembled locally and only returned once the whole buffer
    has been consumed, so callers never see a partially decoded model.

    :raises DecodeError: If the data is truncated, has trailing bytes, or
        holds unknown tags, invalid utf-8, zero counts, empty transition
        lists or duplicate tokens.
    """
    reader = _Reader(data)
    model: TransitionTable = {}

    n_sources = reader.varint()
    for _ in range(n_sources):
        src_offset = reader.offset
        src = reader.token()
        if src in model:
            raise DecodeError(f"duplicate source token {src}", offset=src_offset)

        n_dests = reader.varint()
        if n_dests == 0:
            raise DecodeError(f"source token {src} has no transitions", offset=src_offset)

        dests: Transitions = {}
        for _ in range(n_dests):
            dst_offset = reader.offset
            dst = reader.token()
            if dst in dests:
                raise DecodeError(f"duplicate transition {src} -> {dst}", offset=dst_offset)
            count = reader.varint()
            if count == 0:
                raise DecodeError(f"zero count for {src} -> {dst}", offset=dst_offset)
            dests[dst] = count
        model[src] = dests

    if reader.offset != len(reader.data):
        raise DecodeError(
            f"{len(reader.data) - reader.offset} trailing bytes after model",
            offset=reader.offset,
        )

    log.debug(f"decoded model with {len(model)} source tokens")
    return model


def load_model(path: str | Path) -> TransitionTable:
    """
    Read and decode a model file.

    :raises ModelIOError: If the file cannot be read.
    :raises DecodeError: If the file contents are malformed.
    """
    path = Path(path)
    log.info(f"loading model from {path}")
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ModelIOError("failed to read model file", model_path=str(path)) from e

    model = decode_model(data)
    log.info(f"model loaded successfully: {len(model)} source tokens")
    return model
