"""Wordle environment: feedback codec, constraint filter and game logic.

Words are 5 uppercase letters. Feedback is a tuple of :class:`Mark` values,
one per position, and can be packed into a single base-3 pattern id.
"""

from __future__ import annotations

import logging
from collections import Counter
from enum import IntEnum
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from wordle_session import Guess

log = logging.getLogger(__name__)

WORD_LENGTH = 5
NUM_PATTERNS = 3 ** WORD_LENGTH   # 243
ALL_GREEN = NUM_PATTERNS - 1      # 242


class Mark(IntEnum):
    """Per-letter feedback.

    2 = green (correct letter, correct position)
    1 = yellow (correct letter, wrong position)
    0 = black (letter not present, or already consumed by greens/yellows)
    """

    BLACK = 0
    YELLOW = 1
    GREEN = 2

    @property
    def char(self) -> str:
        return self.name[0]

    @classmethod
    def from_char(cls, ch: str) -> "Mark":
        try:
            return _CHAR_TO_MARK[ch.upper()]
        except KeyError:
            raise ValueError(f"feedback character must be G, Y or B, got {ch!r}") from None


_CHAR_TO_MARK = {"B": Mark.BLACK, "Y": Mark.YELLOW, "G": Mark.GREEN}
_EMOJI = {Mark.BLACK: "⬜", Mark.YELLOW: "\U0001f7e8", Mark.GREEN: "\U0001f7e9"}


# ------------------------------------------------------------------
# Pattern codec
# ------------------------------------------------------------------

def compute_feedback(guess: str, solution: str) -> tuple[Mark, ...]:
    """Return feedback for *guess* against *solution*.

    Greens consume their solution letter first; remaining letters are
    then marked yellow left to right while the solution still has an
    unconsumed copy.
    """
    if len(guess) != WORD_LENGTH or len(solution) != WORD_LENGTH:
        raise ValueError(
            f"words must have {WORD_LENGTH} letters: {guess!r}, {solution!r}"
        )

    pat = [Mark.BLACK] * WORD_LENGTH
    remaining = Counter(solution)

    # Pass 1 – greens
    for i, (g, s) in enumerate(zip(guess, solution)):
        if g == s:
            pat[i] = Mark.GREEN
            remaining[g] -= 1

    # Pass 2 – yellows
    for i, g in enumerate(guess):
        if pat[i] == Mark.GREEN:
            continue
        if remaining[g] > 0:
            pat[i] = Mark.YELLOW
            remaining[g] -= 1

    return tuple(pat)


def encode(feedback: Iterable[int]) -> int:
    """Pack feedback into a pattern id, first position most significant."""
    marks = list(feedback)
    if len(marks) != WORD_LENGTH:
        raise ValueError(f"feedback must have {WORD_LENGTH} marks, got {len(marks)}")
    pid = 0
    for m in marks:
        pid = pid * 3 + int(m)
    return pid


def decode(pid: int) -> tuple[Mark, ...]:
    """Inverse of :func:`encode`."""
    if not 0 <= pid < NUM_PATTERNS:
        raise ValueError(f"pattern id must be in [0, {NUM_PATTERNS - 1}], got {pid}")
    marks = []
    for _ in range(WORD_LENGTH):
        pid, trit = divmod(pid, 3)
        marks.append(Mark(trit))
    return tuple(reversed(marks))


def feedback_id(guess: str, solution: str) -> int:
    return encode(compute_feedback(guess, solution))


def parse_feedback(text: str) -> tuple[Mark, ...]:
    """Turn ``"gybbb"`` into a feedback tuple (case-insensitive)."""
    return tuple(Mark.from_char(ch) for ch in text)


def format_feedback(feedback: Iterable[int]) -> str:
    return "".join(Mark(m).char for m in feedback)


def feedback_emoji(feedback: Iterable[int]) -> str:
    return "".join(_EMOJI[Mark(m)] for m in feedback)


# ------------------------------------------------------------------
# Constraint filter
# ------------------------------------------------------------------

def _positions(guess: Guess, mark: Mark) -> list[tuple[int, str]]:
    return [(i, guess.word[i]) for i, m in enumerate(guess.feedback) if m == mark]


def _present_letters(guess: Guess) -> set[str]:
    """Letters marked green or yellow anywhere in *guess*."""
    return {guess.word[i] for i, m in enumerate(guess.feedback) if m != Mark.BLACK}


def absent_letters(guess: Guess) -> set[str]:
    """Black letters that are not also green/yellow elsewhere in *guess*."""
    present = _present_letters(guess)
    return {c for _, c in _positions(guess, Mark.BLACK) if c not in present}


def filter_by_green(candidates: Iterable[str], guess: Guess) -> list[str]:
    greens = _positions(guess, Mark.GREEN)
    return [w for w in candidates if all(w[i] == c for i, c in greens)]


def filter_by_yellow(candidates: Iterable[str], guess: Guess) -> list[str]:
    yellows = _positions(guess, Mark.YELLOW)
    return [
        w for w in candidates
        if all(c in w and w[i] != c for i, c in yellows)
    ]


def filter_by_black(candidates: Iterable[str], guess: Guess) -> list[str]:
    # A black letter that is also green/yellow in the same guess means
    # "no further copies"; only presence is checked, not exact counts.
    absent = absent_letters(guess)
    return [w for w in candidates if not any(c in w for c in absent)]


def apply_guess(
    candidates: Iterable[str],
    guess: Guess,
    exact: bool = False,
) -> list[str]:
    """Keep only candidates consistent with *guess*, preserving order.

    With ``exact=True`` a candidate survives only if it would produce the
    very same feedback, which also enforces exact letter counts.
    """
    if exact:
        fb = tuple(guess.feedback)
        kept = [w for w in candidates if compute_feedback(guess.word, w) == fb]
    else:
        kept = filter_by_black(
            filter_by_yellow(filter_by_green(candidates, guess), guess), guess
        )
    log.debug("%s %s keeps %d candidates", guess.word, format_feedback(guess.feedback), len(kept))
    return kept


# ------------------------------------------------------------------
# Game against a known solution
# ------------------------------------------------------------------

class WordleEnv:
    """A single Wordle game.

    Parameters
    ----------
    vocabulary : list[str]
        Valid uppercase 5-letter words.
    max_guesses : int
        Maximum allowed guesses before the game is lost.
    allow_non_words : bool
        If True, any 5-letter string is accepted as a guess.
    """

    def __init__(
        self,
        vocabulary: Iterable[str],
        max_guesses: int = 6,
        allow_non_words: bool = True,
    ) -> None:
        vocab = list(vocabulary)
        bad = [w for w in vocab if len(w) != WORD_LENGTH]
        if bad:
            raise ValueError(
                f"Words with wrong length (expected {WORD_LENGTH}): {bad[:5]}"
            )
        self._vocab = vocab
        self._vocab_set = set(vocab)
        self._max_guesses = max_guesses
        self._allow_non_words = allow_non_words

        # Game state (set by reset)
        self._secret: str | None = None
        self._history: list[tuple[str, tuple[Mark, ...]]] = []
        self._solved = False

    def reset(self, secret: str) -> None:
        """Start a new game against *secret*."""
        secret = secret.upper()
        if len(secret) != WORD_LENGTH:
            raise ValueError(f"secret must have {WORD_LENGTH} letters, got {secret!r}")
        if not self._allow_non_words and secret not in self._vocab_set:
            raise ValueError(f"secret {secret!r} is not in vocabulary")
        self._secret = secret
        self._history = []
        self._solved = False

    def guess(self, word: str) -> tuple[Mark, ...]:
        """Submit a guess and receive feedback.

        Raises
        ------
        RuntimeError
            If the game is over (solved or out of guesses) or not started.
        ValueError
            If *word* has the wrong length or is not in the vocabulary
            (when ``allow_non_words`` is False).
        """
        if self._secret is None:
            raise RuntimeError("Call reset() before guessing")
        if self.game_over():
            raise RuntimeError("Game is already over")
        word = word.upper()
        if len(word) != WORD_LENGTH:
            raise ValueError(
                f"Guess length ({len(word)}) != word length ({WORD_LENGTH})"
            )
        if not self._allow_non_words and word not in self._vocab_set:
            raise ValueError(f"{word!r} is not in the vocabulary")

        pat = compute_feedback(word, self._secret)
        self._history.append((word, pat))
        if word == self._secret:
            self._solved = True
        return pat

    def is_solved(self) -> bool:
        return self._solved

    def remaining_guesses(self) -> int:
        return self._max_guesses - len(self._history)

    def game_over(self) -> bool:
        return self._solved or len(self._history) >= self._max_guesses

    @property
    def history(self) -> list[tuple[str, tuple[Mark, ...]]]:
        return list(self._history)

    @property
    def secret(self) -> str:
        """Reveal the secret word (only after game over)."""
        if self._secret is None:
            raise RuntimeError("No game in progress")
        if not self.game_over():
            raise RuntimeError("Game is still in progress")
        return self._secret

    @property
    def max_guesses(self) -> int:
        return self._max_guesses
