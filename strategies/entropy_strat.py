"""Entropy strategy: maximise expected information gain per guess.

Every remaining candidate is scored, plus an evenly strided sample of the
rest of the universe whose size shrinks as the candidate list grows.  The
pool can be split across worker processes; the merge applies the same
total order as the sequential loop, so the answer does not depend on the
number of workers.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from typing import NamedTuple, Sequence

import numpy as np

from strategy import Strategy
from wordle_scoring import encode_words, score
from wordle_session import SessionState

log = logging.getLogger(__name__)


class RankedGuess(NamedTuple):
    word: str
    entropy: float
    expected_remaining: float
    win_probability: float


def _rank_key(entropy: float, is_candidate: bool, expected: float, win: float) -> tuple:
    # larger is better
    return (entropy, is_candidate, -expected, win)


def _eval_chunk(args):
    """Worker: score a slice of the pool, return ``(key, index, ranked)``."""
    start, chunk, candidates, candidate_set = args
    matrix = encode_words(candidates)
    best = None
    for offset, g in enumerate(chunk):
        prof = score(g, matrix)
        key = _rank_key(prof.entropy, g in candidate_set,
                        prof.expected_remaining, prof.win_probability)
        if best is None or key > best[0]:
            best = (key, start + offset, RankedGuess(g, *prof))
    return best


def _score_all(pool, candidates, candidate_set) -> list[tuple[tuple, RankedGuess]]:
    matrix = encode_words(candidates)
    out = []
    for g in pool:
        prof = score(g, matrix)
        key = _rank_key(prof.entropy, g in candidate_set,
                        prof.expected_remaining, prof.win_probability)
        out.append((key, RankedGuess(g, *prof)))
    return out


def strided_sample(universe: Sequence[str], size: int, skip: set[str]) -> list[str]:
    """Up to *size* words spread evenly over *universe*, excluding *skip*."""
    pool = [w for w in universe if w not in skip]
    if size <= 0 or not pool:
        return []
    if size >= len(pool):
        return pool
    idx = np.linspace(0, len(pool), num=size, endpoint=False).astype(int)
    return [pool[i] for i in idx]


class EntropyStrategy(Strategy):
    """Select the guess that maximises Shannon entropy of the feedback partition.

    Ties are broken by preferring a word that could itself be the answer,
    then the smaller expected remaining list, then the higher immediate
    win probability, then evaluation order.
    """

    @property
    def name(self) -> str:
        return "entropy"

    def guess_pool(self, candidates: Sequence[str], universe: Sequence[str]) -> list[str]:
        """Candidates first, then strided probe words from *universe*."""
        extra = self.config.extra_probes(len(candidates))
        probes = strided_sample(universe, extra, set(candidates))
        log.debug("scoring %d candidates + %d probes", len(candidates), len(probes))
        return list(candidates) + probes

    def select(self, session: SessionState, universe: Sequence[str]) -> str:
        if session.attempt_count == 0:
            return self.config.opener

        candidates = session.candidates
        if not candidates:
            raise RuntimeError("no candidates left; reset the session")
        if len(candidates) <= 2:
            return candidates[0]

        pool = self.guess_pool(candidates, universe)
        candidate_set = set(candidates)

        if self.config.workers > 1 and len(pool) > self.config.workers:
            return self._select_parallel(pool, candidates, candidate_set)

        _, _, best = _eval_chunk((0, pool, candidates, candidate_set))
        log.debug("best guess %s (H=%.4f)", best.word, best.entropy)
        return best.word

    def _select_parallel(self, pool, candidates, candidate_set) -> str:
        workers = self.config.workers
        chunk_size = -(-len(pool) // workers)
        jobs = [
            (i, pool[i:i + chunk_size], candidates, candidate_set)
            for i in range(0, len(pool), chunk_size)
        ]
        with ProcessPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(_eval_chunk, jobs))

        # highest key wins; on equal keys the earliest evaluated word
        key, _, ranked = max(results, key=lambda r: (r[0], -r[1]))
        log.debug("best guess %s (H=%.4f) from %d chunks", ranked.word, key[0], len(jobs))
        return ranked.word

    def rank(
        self,
        session: SessionState,
        universe: Sequence[str],
        top_n: int | None = None,
    ) -> list[RankedGuess]:
        """Every pool word with its profile, best first."""
        candidates = session.candidates
        if not candidates:
            raise RuntimeError("no candidates left; reset the session")
        return rank_words(self.guess_pool(candidates, universe), candidates, top_n)


def rank_words(
    pool: Sequence[str],
    candidates: Sequence[str],
    top_n: int | None = None,
) -> list[RankedGuess]:
    """Rank *pool* against *candidates* with the selector's ordering."""
    scored = _score_all(pool, candidates, set(candidates))
    # stable sort keeps evaluation order among equal keys
    scored.sort(key=lambda kv: kv[0], reverse=True)
    ranked = [r for _, r in scored]
    return ranked[:top_n] if top_n is not None else ranked
