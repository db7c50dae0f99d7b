"""Information-theoretic scoring of a guess against a candidate list.

All statistics come from one 243-bucket histogram of pattern ids. The
pattern ids for one guess against N candidates are computed in a single
vectorised pass over an ``(N, 5)`` letter matrix.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence, Union

import numpy as np

from wordle_env import ALL_GREEN, NUM_PATTERNS, WORD_LENGTH

# base-3 place values, first position most significant
_PLACES = 3 ** np.arange(WORD_LENGTH - 1, -1, -1, dtype=np.int64)

Words = Union[Sequence[str], np.ndarray]


class ScoreProfile(NamedTuple):
    entropy: float
    expected_remaining: float
    win_probability: float


def encode_words(words: Sequence[str]) -> np.ndarray:
    """Return an ``(N, 5)`` uint8 matrix of letter indices (A=0 .. Z=25)."""
    if len(words) == 0:
        return np.zeros((0, WORD_LENGTH), dtype=np.uint8)
    if any(len(w) != WORD_LENGTH for w in words):
        raise ValueError(f"all words must have {WORD_LENGTH} letters")
    raw = np.frombuffer("".join(words).encode("ascii"), dtype=np.uint8)
    return (raw.reshape(len(words), WORD_LENGTH) - ord("A")).astype(np.uint8)


def _as_matrix(words: Words) -> np.ndarray:
    if isinstance(words, np.ndarray):
        return words
    return encode_words(words)


def pattern_ids(guess: str, words: Words) -> np.ndarray:
    """Pattern id of *guess* against every word in *words*.

    Same result as ``feedback_id(guess, w)`` for each ``w``.
    """
    sol = _as_matrix(words)
    g = encode_words([guess])[0]

    green = sol == g                                    # (N, 5)
    # letter counts still available after greens, per guess position
    unmatched = ~green
    avail = np.empty_like(sol, dtype=np.int16)
    for i in range(WORD_LENGTH):
        avail[:, i] = ((sol == g[i]) & unmatched).sum(axis=1)

    yellow = np.zeros_like(green)
    for i in range(WORD_LENGTH):
        # copies of this letter already claimed by yellows to the left
        used = np.zeros(len(sol), dtype=np.int16)
        for k in range(i):
            if g[k] == g[i]:
                used += yellow[:, k]
        yellow[:, i] = unmatched[:, i] & (avail[:, i] > used)

    trits = green.astype(np.int64) * 2 + yellow
    return trits @ _PLACES


def pattern_histogram(guess: str, words: Words) -> np.ndarray:
    """Fixed-size count array indexed by pattern id."""
    return np.bincount(pattern_ids(guess, words), minlength=NUM_PATTERNS)


def profile_from_histogram(hist: np.ndarray) -> ScoreProfile:
    n = int(hist.sum())
    if n == 0:
        raise ValueError("cannot score against an empty candidate list")
    # sorted so equal partitions give bit-identical entropy
    counts = np.sort(hist[hist > 0]).astype(np.float64)
    p = counts / n
    entropy = float(-(p * np.log2(p)).sum()) + 0.0
    expected = float((counts * counts).sum()) / n
    win = float(hist[ALL_GREEN]) / n
    return ScoreProfile(entropy, expected, win)


def score(guess: str, candidates: Words) -> ScoreProfile:
    """Entropy (bits), expected remaining size and win probability of *guess*.

    Assumes the hidden solution is uniformly distributed over *candidates*.
    """
    return profile_from_histogram(pattern_histogram(guess, candidates))


def pattern_distribution(word: str, words: Words) -> list[tuple[int, int]]:
    """Non-empty ``(pattern_id, count)`` pairs, most frequent first."""
    hist = pattern_histogram(word, words)
    pairs = [(int(pid), int(hist[pid])) for pid in np.flatnonzero(hist)]
    pairs.sort(key=lambda kv: -kv[1])
    return pairs
