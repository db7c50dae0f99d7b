"""Simple strategy: fixed elimination words early, then the first candidate."""

from __future__ import annotations

from typing import Sequence

from strategy import Strategy
from wordle_session import SessionState

# Follow-up probes used while the candidate list is still large.
_ELIMINATION_WORDS = {1: "SLATE", 2: "MOIST"}
_FEW_CANDIDATES = 20


class SimpleStrategy(Strategy):
    """Cheap baseline that never scores anything."""

    @property
    def name(self) -> str:
        return "simple"

    def select(self, session: SessionState, universe: Sequence[str]) -> str:
        if session.attempt_count == 0:
            return self.config.opener

        candidates = session.candidates
        if not candidates:
            raise RuntimeError("no candidates left; reset the session")
        if len(candidates) <= _FEW_CANDIDATES:
            return candidates[0]
        return _ELIMINATION_WORDS.get(session.attempt_count, candidates[0])
