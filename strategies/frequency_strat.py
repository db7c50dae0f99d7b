"""Letter-frequency strategy: cover the most common letters among candidates."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from strategy import Strategy
from wordle_session import SessionState

# Above this many candidates the whole universe is scanned for probe words.
_CAND_POOL_LIMIT = 200


def distinct_letter_score(word: str, counts: Counter) -> int:
    """Sum letter frequencies, counting each letter once per word."""
    return sum(counts[ch] for ch in set(word))


class FrequencyStrategy(Strategy):
    """Pick the word whose distinct letters are most frequent in the candidates.

    Letter counts come from the current candidate list, so once the list is
    small the best-scoring word tends to be a candidate itself.  Ties go to
    candidates, then to the earlier word.
    """

    @property
    def name(self) -> str:
        return "frequency"

    def select(self, session: SessionState, universe: Sequence[str]) -> str:
        if session.attempt_count == 0:
            return self.config.opener

        candidates = session.candidates
        if not candidates:
            raise RuntimeError("no candidates left; reset the session")
        if len(candidates) <= 2:
            return candidates[0]

        pool = universe if len(candidates) > _CAND_POOL_LIMIT else candidates
        candidate_set = set(candidates)
        counts = Counter("".join(candidates))

        best_word, best_key = candidates[0], None
        for w in pool:
            key = (distinct_letter_score(w, counts), w in candidate_set)
            if best_key is None or key > best_key:
                best_word, best_key = w, key
        return best_word
