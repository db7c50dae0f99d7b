"""Solving-session state: recorded guesses and the shrinking candidate list."""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from typing import Iterable

from wordle_env import WORD_LENGTH, Mark, absent_letters, apply_guess, parse_feedback

log = logging.getLogger(__name__)

ALPHABET = frozenset(string.ascii_uppercase)


class MalformedGuessError(ValueError):
    """User-entered ``WORD FEEDBACK`` text does not follow the format."""


@dataclass(frozen=True)
class Guess:
    """One completed attempt: a word and the feedback it received."""

    word: str
    feedback: tuple[Mark, ...]

    def __post_init__(self) -> None:
        if len(self.word) != WORD_LENGTH or not set(self.word) <= ALPHABET:
            raise ValueError(f"guess word must be {WORD_LENGTH} letters A-Z, got {self.word!r}")
        if len(self.feedback) != WORD_LENGTH:
            raise ValueError(
                f"feedback must have {WORD_LENGTH} marks, got {len(self.feedback)}"
            )
        object.__setattr__(self, "feedback", tuple(Mark(m) for m in self.feedback))

    @property
    def is_win(self) -> bool:
        return all(m == Mark.GREEN for m in self.feedback)


def parse_guess(text: str) -> Guess:
    """Parse ``"CRANE BYYGG"`` (case-insensitive) into a :class:`Guess`.

    Raises
    ------
    MalformedGuessError
        Wrong token count, word not 5 letters, feedback not 5 characters
        or a feedback character outside G/Y/B.
    """
    parts = text.split()
    if len(parts) != 2:
        raise MalformedGuessError("Input must be WORD FEEDBACK")
    word, fb = parts[0].upper(), parts[1].upper()
    if len(word) != WORD_LENGTH or not set(word) <= ALPHABET:
        raise MalformedGuessError(f"Word must be {WORD_LENGTH} letters")
    if len(fb) != WORD_LENGTH or not set(fb) <= {"G", "Y", "B"}:
        raise MalformedGuessError(
            f"Feedback must be {WORD_LENGTH} characters of G, Y, or B"
        )
    return Guess(word, parse_feedback(fb))


class SessionState:
    """Live state of one solving session.

    Sessions are append-only: :meth:`record` is the only mutator and
    :meth:`reset` returns a brand-new session over the same universe.
    Not safe for concurrent ``record`` calls.

    Parameters
    ----------
    universe : iterable of str
        Every known word, uppercase and 5 letters long.
    exact : bool
        Filter with exact Wordle letter counts instead of the
        presence-only black rule.
    """

    def __init__(self, universe: Iterable[str], exact: bool = False) -> None:
        self._universe = tuple(dict.fromkeys(universe))
        if not self._universe:
            raise ValueError("cannot start a session with an empty word universe")
        self._exact = exact
        self._candidates: list[str] = list(self._universe)
        self._history: list[Guess] = []
        self._letters: set[str] = set(ALPHABET)

    def record(self, guess: Guess) -> int:
        """Apply *guess* and return the number of candidates left."""
        if not isinstance(guess, Guess):
            raise TypeError(f"expected Guess, got {type(guess).__name__}")

        # Compute everything first so a failure leaves the session untouched.
        candidates = apply_guess(self._candidates, guess, exact=self._exact)
        letters = self._letters - absent_letters(guess)

        self._history.append(guess)
        self._candidates = candidates
        self._letters = letters

        if not candidates:
            log.warning(
                "no candidates left after %s; feedback is inconsistent "
                "or the solution is not in the word list", guess.word,
            )
        else:
            log.debug("attempt %d: %d candidates left", self.attempt_count, len(candidates))
        return len(candidates)

    def reset(self) -> "SessionState":
        return SessionState(self._universe, exact=self._exact)

    @property
    def candidates(self) -> list[str]:
        return list(self._candidates)

    @property
    def history(self) -> list[Guess]:
        return list(self._history)

    @property
    def attempt_count(self) -> int:
        return len(self._history)

    @property
    def universe(self) -> tuple[str, ...]:
        return self._universe

    @property
    def exact(self) -> bool:
        return self._exact

    @property
    def possible_letters(self) -> frozenset[str]:
        return frozenset(self._letters)

    def available_letters(self) -> list[str]:
        return sorted(self._letters)

    @property
    def exhausted(self) -> bool:
        return not self._candidates

    @property
    def solved(self) -> bool:
        return bool(self._history) and self._history[-1].is_win

    def reduction(self) -> float:
        """Fraction of the universe eliminated so far."""
        return 1.0 - len(self._candidates) / len(self._universe)
