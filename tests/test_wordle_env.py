import itertools

import pytest

from wordle_env import (
    ALL_GREEN,
    Mark,
    WordleEnv,
    absent_letters,
    apply_guess,
    compute_feedback,
    decode,
    encode,
    feedback_emoji,
    feedback_id,
    filter_by_black,
    filter_by_green,
    filter_by_yellow,
    format_feedback,
    parse_feedback,
)
from wordle_session import Guess

B, Y, G = Mark.BLACK, Mark.YELLOW, Mark.GREEN

SCENARIO = ["CRANE", "BRAIN", "GRAIN", "TRAIN", "STAIN", "PLAIN", "CHAIN"]


# ------------------------------------------------------------------
# Feedback
# ------------------------------------------------------------------

def test_feedback_all_green():
    for w in SCENARIO + ["LLAMA", "LEVEL", "EERIE"]:
        assert compute_feedback(w, w) == (G,) * 5
        assert feedback_id(w, w) == ALL_GREEN


def test_feedback_mixed():
    assert compute_feedback("TRACE", "CRANE") == (B, G, G, Y, G)


def test_feedback_duplicate_letters():
    # first L is exact; LEVEL has one more L for the second; nothing left after
    assert compute_feedback("LLAMA", "LEVEL") == (G, Y, B, B, B)


def test_feedback_all_yellow():
    assert compute_feedback("EABCD", "ABCDE") == (Y, Y, Y, Y, Y)


def test_feedback_green_consumes_before_yellow():
    # the E at position 4 is green, so the leading E has no copy left
    assert compute_feedback("EXXXE", "ABCDE") == (B, B, B, B, G)


def test_feedback_rejects_wrong_length():
    with pytest.raises(ValueError):
        compute_feedback("CRAN", "CRANE")


# ------------------------------------------------------------------
# Codec
# ------------------------------------------------------------------

def test_encode_decode_round_trip():
    for marks in itertools.product(Mark, repeat=5):
        pid = encode(marks)
        assert 0 <= pid <= 242
        assert decode(pid) == marks


def test_encode_is_most_significant_first():
    assert encode((B, B, B, B, Y)) == 1
    assert encode((Y, B, B, B, B)) == 81
    assert encode((B, G, G, Y, G)) == 77
    assert encode((G,) * 5) == ALL_GREEN == 242


def test_decode_rejects_out_of_range():
    with pytest.raises(ValueError):
        decode(243)
    with pytest.raises(ValueError):
        decode(-1)


def test_feedback_text_helpers():
    fb = parse_feedback("gYbBy")
    assert fb == (G, Y, B, B, Y)
    assert format_feedback(fb) == "GYBBY"
    assert feedback_emoji((G, Y, B)) == "\U0001f7e9\U0001f7e8⬜"
    with pytest.raises(ValueError):
        parse_feedback("GYX")


# ------------------------------------------------------------------
# Individual filters
# ------------------------------------------------------------------

def test_filter_by_green_only():
    words = ["CRANE", "CRATE", "BRAKE", "DRAKE"]
    guess = Guess("CRANE", (G, B, B, B, B))
    assert filter_by_green(words, guess) == ["CRANE", "CRATE"]


def test_filter_by_yellow_only():
    words = ["CRANE", "BRAKE", "RAVEN", "SOBER", "THINK"]
    # R somewhere, but not in position 1
    guess = Guess("CRANE", (B, Y, B, B, B))
    assert filter_by_yellow(words, guess) == ["RAVEN", "SOBER"]


def test_filter_by_black_only():
    words = ["CRANE", "STAIR", "POUND", "LIGHT", "DUMPS", "GLYPH"]
    guess = Guess("CRANE", (B, B, B, B, B))
    assert filter_by_black(words, guess) == ["LIGHT", "DUMPS", "GLYPH"]


def test_black_letter_also_marked_elsewhere_is_ignored():
    # solution TOTAL: the second L of ALLOT is black, but L is yellow too
    guess = Guess("ALLOT", (Y, Y, B, Y, Y))
    assert absent_letters(guess) == set()
    assert filter_by_black(["TOTAL", "STOAL", "LLAMA"], guess) == ["TOTAL", "STOAL", "LLAMA"]


def test_apply_guess_integration():
    words = ["FROST", "SPORT", "TRUCK", "GROUT", "BROTH", "DRUMS", "SHIRT", "QUIRK"]
    guess = Guess("CRANE", (B, Y, B, B, B))
    assert apply_guess(words, guess) == ["SPORT", "SHIRT", "QUIRK"]


def test_apply_guess_scenario():
    guess = Guess("CRANE", (B, G, G, Y, B))
    assert apply_guess(SCENARIO, guess) == ["BRAIN", "GRAIN", "TRAIN"]


def test_apply_guess_single_wrong_letter():
    words = ["LIGHT", "SIGHT", "MIGHT", "NIGHT", "FIGHT", "TIGHT"]
    guess = Guess("LIGHT", (B, G, G, G, G))
    assert apply_guess(words, guess) == ["SIGHT", "MIGHT", "NIGHT", "FIGHT", "TIGHT"]


def test_apply_guess_is_idempotent_subsequence():
    words = ["FROST", "SPORT", "TRUCK", "GROUT", "BROTH", "DRUMS", "SHIRT", "QUIRK"]
    for guess in [Guess("CRANE", (B, Y, B, B, B)), Guess("SPORT", (B, B, Y, G, B))]:
        once = apply_guess(words, guess)
        assert apply_guess(once, guess) == once
        it = iter(words)
        assert all(w in it for w in once)  # ordered subsequence


@pytest.mark.parametrize("exact", [False, True])
def test_filter_never_drops_true_solution(exact):
    words = SCENARIO + ["LLAMA", "LEVEL", "TOTAL", "STOAL", "ALLOT", "EERIE", "GEESE"]
    for guess_word in words:
        for solution in words:
            guess = Guess(guess_word, compute_feedback(guess_word, solution))
            assert solution in apply_guess(words, guess, exact=exact)


def test_presence_rule_is_looser_than_exact_counts():
    # TOLAL has a second L, which the black L rules out under exact counting
    guess = Guess("ALLOT", compute_feedback("ALLOT", "TOTAL"))
    assert guess.feedback == (Y, Y, B, Y, Y)
    words = ["TOTAL", "TOLAL"]
    assert apply_guess(words, guess) == ["TOTAL", "TOLAL"]
    assert apply_guess(words, guess, exact=True) == ["TOTAL"]


# ------------------------------------------------------------------
# WordleEnv
# ------------------------------------------------------------------

def test_env_plays_a_game():
    env = WordleEnv(SCENARIO, max_guesses=3)
    env.reset("train")
    assert env.guess("crane") == (B, G, G, Y, B)
    assert not env.is_solved()
    assert env.remaining_guesses() == 2
    with pytest.raises(RuntimeError):
        env.secret  # still in progress
    assert env.guess("TRAIN") == (G,) * 5
    assert env.is_solved() and env.game_over()
    assert env.secret == "TRAIN"
    assert [w for w, _ in env.history] == ["CRANE", "TRAIN"]
    with pytest.raises(RuntimeError):
        env.guess("BRAIN")


def test_env_runs_out_of_guesses():
    env = WordleEnv(SCENARIO, max_guesses=1)
    env.reset("CHAIN")
    env.guess("PLAIN")
    assert env.game_over() and not env.is_solved()


def test_env_validation():
    with pytest.raises(ValueError):
        WordleEnv(["CRANE", "TOOLONG"])
    env = WordleEnv(SCENARIO, allow_non_words=False)
    with pytest.raises(RuntimeError):
        env.guess("CRANE")
    with pytest.raises(ValueError):
        env.reset("ZZZZZ")
    env.reset("CRANE")
    with pytest.raises(ValueError):
        env.guess("CRAN")
    with pytest.raises(ValueError):
        env.guess("ZZZZZ")
