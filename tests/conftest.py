"""Shared fixtures: deterministic random sources, tokenizers and in-memory exports."""

import io
import json
import tarfile
import zipfile

import pytest

from postmarkov import RegexWordTokenizer, WordPattern


class FixedRandom:
    """Random source that always draws the same value."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


class ScriptedRandom:
    """Random source that replays a fixed sequence of draws."""

    def __init__(self, draws: list[float]) -> None:
        self.draws = list(draws)

    def random(self) -> float:
        return self.draws.pop(0)


def make_export(
    payload: str,
    *,
    compression: str = "gz",
    n_members: int = 1,
    chunks: int = 1,
) -> bytes:
    """Build a notestock-style zip(tar(json)) export in memory."""
    # split the payload over several tar entries like a real export
    size = -(-len(payload) // chunks) if payload else 0
    parts = [payload[i : i + size] for i in range(0, len(payload), size)] if size else [""]

    tar_buf = io.BytesIO()
    mode = f"w:{compression}" if compression else "w"
    with tarfile.open(fileobj=tar_buf, mode=mode) as tar:
        for i, part in enumerate(parts):
            data = part.encode("utf-8")
            info = tarfile.TarInfo(name=f"notestock/{i:04d}.json")
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))

    zip_buf = io.BytesIO()
    with zipfile.ZipFile(zip_buf, "w") as zf:
        for i in range(n_members):
            zf.writestr(f"export{i}.tar.gz", tar_buf.getvalue())
    return zip_buf.getvalue()


def posts_json(*contents: str) -> str:
    """Serialize post contents the way the export does: a JSON array of objects."""
    return json.dumps([{"id": i, "content": c} for i, c in enumerate(contents)], ensure_ascii=False)


@pytest.fixture
def whitespace_tokenizer():
    """Tokenizer splitting on whitespace so tests control words exactly."""
    return RegexWordTokenizer(WordPattern.WHITESPACE.value)
