"""Word-list loading utilities (self-contained).

Supports two formats:
  - Plain text: one word per line, or a comma separated list of
    optionally quoted words
  - The same text gzip-compressed (``.gz`` suffix)

Words are uppercased, filtered to exactly five letters A-Z, deduplicated
and sorted.  The result is an immutable tuple handed to each session.
"""

from __future__ import annotations

import gzip
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from wordle_env import WORD_LENGTH

log = logging.getLogger(__name__)

_DIR = Path(__file__).resolve().parent
DEFAULT_WORDS = _DIR / "data" / "words.txt"

_WORD_RE = re.compile(rf"^[A-Z]{{{WORD_LENGTH}}}$")
_SPLIT_RE = re.compile(r"[\s,]+")


def is_word(text: str) -> bool:
    """True if *text* is exactly five uppercase letters A-Z."""
    return _WORD_RE.fullmatch(text) is not None


@dataclass(frozen=True)
class Lexicon:
    """The word universe and where it came from."""
    words: tuple[str, ...]
    source: Path

    def __len__(self) -> int:
        return len(self.words)


def _read_text(path: Path) -> str:
    if path.suffix == ".gz":
        with gzip.open(path, "rt", encoding="utf-8") as f:
            return f.read()
    return path.read_text(encoding="utf-8")


def parse_words(text: str) -> tuple[str, ...]:
    """Extract normalised, unique, sorted 5-letter words from *text*."""
    seen: set[str] = set()
    for raw in _SPLIT_RE.split(text):
        w = raw.strip().strip("\"'").upper()
        if is_word(w):
            seen.add(w)
    return tuple(sorted(seen))


def load_lexicon(path: str | Path | None = None) -> Lexicon:
    """Load the word universe.

    Parameters
    ----------
    path : str, Path or None
        Path to a ``.txt`` (or ``.txt.gz``) word list.  None uses the
        bundled ``data/words.txt``.

    Raises
    ------
    FileNotFoundError
        The word list does not exist.
    ValueError
        The file holds no usable 5-letter words.
    """
    src = Path(path) if path is not None else DEFAULT_WORDS
    if not src.exists():
        raise FileNotFoundError(f"Word list not found: {src}")

    words = parse_words(_read_text(src))
    if not words:
        raise ValueError(f"No {WORD_LENGTH}-letter words found in {src}")

    log.info("loaded %d words from %s", len(words), src)
    return Lexicon(words=words, source=src)
