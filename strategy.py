"""Abstract base class for guess-selection strategies and solver settings."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from lexicon import is_word
from wordle_session import SessionState


@dataclass(frozen=True)
class SamplingTier:
    """Extra probe words to score when more than *min_candidates* remain."""

    min_candidates: int
    extra_probes: int


# Bigger candidate sets get fewer extra probes; tiers are checked top-down.
DEFAULT_SAMPLING = (
    SamplingTier(1000, 64),
    SamplingTier(250, 192),
    SamplingTier(50, 384),
    SamplingTier(0, 768),
)


@dataclass(frozen=True)
class SolverConfig:
    """Tuning knobs shared by every strategy.

    Attributes
    ----------
    opener : str
        Fixed first guess, used before any feedback is known.
    sampling : tuple[SamplingTier, ...]
        Candidate-count breakpoints controlling how many words outside the
        candidate list are scored as probes.  Ordered by descending
        ``min_candidates``.
    workers : int
        Processes used to score the guess pool.  1 keeps everything in
        the calling process.
    max_guesses : int
        Attempts allowed per game (typically 6).
    """

    opener: str = "CRANE"
    sampling: tuple[SamplingTier, ...] = DEFAULT_SAMPLING
    workers: int = 1
    max_guesses: int = 6

    def __post_init__(self) -> None:
        object.__setattr__(self, "opener", self.opener.upper())
        if not is_word(self.opener):
            raise ValueError(f"opener must be 5 letters A-Z, got {self.opener!r}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")

    def extra_probes(self, num_candidates: int) -> int:
        for tier in self.sampling:
            if num_candidates > tier.min_candidates:
                return tier.extra_probes
        return self.sampling[-1].extra_probes if self.sampling else 0


class Strategy(ABC):
    """Interface that every guess-selection strategy implements.

    Strategies hold no per-game state: everything they need comes from
    the session and the universe, so ``select`` can be called any number
    of times without side effects.
    """

    def __init__(self, config: SolverConfig | None = None) -> None:
        self.config = config or SolverConfig()

    @property
    @abstractmethod
    def name(self) -> str:
        """Short strategy name (used on the command line and in reports)."""
        ...

    @abstractmethod
    def select(self, session: SessionState, universe: Sequence[str]) -> str:
        """Return the next word to guess."""
        ...
