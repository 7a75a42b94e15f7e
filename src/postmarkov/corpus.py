"""
Plain-text extraction from notestock export bundles.

An export is a zip holding a single tar stream (optionally compressed) whose
entries, concatenated, form a list of post objects. Each post's ``content``
is HTML; quoted, linked and code material is removed before the remaining
text is split into lines.
"""

import html
import io
import json
import logging
import tarfile
import zipfile
import zlib
from pathlib import Path
from typing import Final, Iterable, Iterator

import regex as re

from .errors import ArchiveError

log = logging.getLogger(__name__)

# posts containing any of these are generated by bots/games, not written
SPAM_MARKERS: Final[tuple[str, ...]] = (
    "#クイズMondo",
    "https://puzzlega.me/",
)

# inline quotes of other posts
REPLY_PREFIX: Final[str] = "RE:"

# elements dropped together with their content
_DROPPED_ELEMENTS: Final[list[re.Pattern]] = [
    re.compile(rf"<{tag}[ >].*?</{tag}>", re.DOTALL | re.IGNORECASE)
    for tag in ("a", "pre", "code", "blockquote")
]
_LINE_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)
_BLOCK_END = re.compile(r"</(?:p|div|li|h[1-6])\s*>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]*>")
_NEWLINES = re.compile(r"[\r\n]+")
# ascii and ideographic spaces
_SPACES = re.compile(r"[ 　]+")
_SEPARATORS: Final[str] = " \t\r\n,[]"


def extract_corpus(data: bytes, spam_markers: Iterable[str] = SPAM_MARKERS) -> list[str]:
    """
    Turn an export bundle into plain-text lines ready for learning.

    :param data: Raw bytes of the exported zip.
    :param spam_markers: Substrings marking posts to drop entirely.
    :raises ArchiveError: If the zip, tar or post list is malformed.
    """
    markers = tuple(spam_markers)
    posts = _parse_posts(_extract(data))

    texts: list[str] = []
    n_dropped = 0
    for content in posts:
        if any(marker in content for marker in markers):
            n_dropped += 1
            continue
        texts.extend(html_to_lines(content))

    log.info(
        f"extracted {len(texts)} lines from {len(posts)} posts ({n_dropped} dropped as spam)"
    )
    return texts


def extract_corpus_file(path: str | Path, spam_markers: Iterable[str] = SPAM_MARKERS) -> list[str]:
    """
    Read an export bundle from disk and extract it.

    :raises ArchiveError: If the file cannot be read or is malformed.
    """
    path = Path(path)
    log.info(f"reading export from {path}")
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ArchiveError(f"failed to read export file {path}") from e
    return extract_corpus(data, spam_markers)


def html_to_lines(content: str) -> list[str]:
    """Strip markup from one post and return its non-reply lines."""
    for pattern in _DROPPED_ELEMENTS:
        content = pattern.sub("", content)

    text = _LINE_BREAK.sub("\n", content)
    text = _BLOCK_END.sub("\n", text)
    text = html.unescape(_TAG.sub("", text))

    text = _NEWLINES.sub("\n", text)
    text = _SPACES.sub(" ", text)
    return [line for line in text.strip().splitlines() if not line.startswith(REPLY_PREFIX)]


def _extract(data: bytes) -> str:
    """Unwrap the zip and tar layers and join the tar entries into one string."""
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as outer:
            members = outer.namelist()
            if len(members) != 1:
                raise ArchiveError(
                    f"export zip should hold exactly 1 file, found {len(members)}"
                )
            inner = outer.read(members[0])
    # encrypted members raise RuntimeError, unknown methods NotImplementedError
    except (
        zipfile.BadZipFile,
        zipfile.LargeZipFile,
        OSError,
        RuntimeError,
        NotImplementedError,
    ) as e:
        raise ArchiveError("failed to read zip file") from e

    chunks: list[str] = []
    try:
        # r:* detects gzip/bz2/xz compression of the inner stream
        with tarfile.open(fileobj=io.BytesIO(inner), mode="r:*") as tar:
            for entry in tar:
                if not entry.isfile():
                    continue
                f = tar.extractfile(entry)
                if f is None:
                    continue
                try:
                    chunks.append(f.read().decode("utf-8"))
                except UnicodeDecodeError as e:
                    raise ArchiveError("tar entry is not utf-8", member=entry.name) from e
                log.debug(f"read tar entry {entry.name}")
    except (tarfile.TarError, OSError, EOFError, zlib.error) as e:
        raise ArchiveError("failed to read tar file", member=members[0]) from e

    return "".join(chunks)


def _iter_objects(text: str) -> Iterator[object]:
    """Yield JSON values separated by whitespace, commas or array brackets."""
    decoder = json.JSONDecoder()
    pos = 0
    end = len(text)
    while True:
        while pos < end and text[pos] in _SEPARATORS:
            pos += 1
        if pos >= end:
            return
        obj, pos = decoder.raw_decode(text, pos)
        yield obj


def _parse_posts(text: str) -> list[str]:
    """Return the ``content`` of every post object."""
    contents: list[str] = []
    try:
        for i, post in enumerate(_iter_objects(text)):
            if not isinstance(post, dict) or not isinstance(post.get("content"), str):
                raise ArchiveError(f"post #{i} has no string content field")
            contents.append(post["content"])
    except json.JSONDecodeError as e:
        raise ArchiveError("failed to parse json") from e
    return contents
