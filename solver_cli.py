#!/usr/bin/env python3
"""Interactive Wordle helper.

Two modes:
  - solver: you play Wordle elsewhere and type each ``GUESS FEEDBACK``
    line (e.g. ``CRANE BYYBB``); the remaining words and a suggested next
    guess are shown after each one.
  - game:   enter a known solution, then guess it here with feedback
    computed for you.

Usage:
    python3 solver_cli.py                          # choose mode interactively
    python3 solver_cli.py solver --strategy entropy
    python3 solver_cli.py game --words my_words.txt
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Callable, Sequence

from lexicon import load_lexicon
from strategies import DEFAULT_STRATEGY, create_strategy, discover_strategies
from strategy import SolverConfig, Strategy
from wordle_env import WORD_LENGTH, compute_feedback, feedback_emoji, format_feedback
from wordle_session import ALPHABET, Guess, MalformedGuessError, SessionState, parse_guess

InputFn = Callable[[str], str]

HELP_TEXT = """
📚 Available commands:
  /h, /help   - Show this help message
  /s, /stats  - Show current game statistics
  /r, /reset  - Start over with a fresh word list
  /q, /quit   - Exit the solver

📝 Input format: WORD FEEDBACK
  Example: CRANE BYYGG
  G=Green(🟩), Y=Yellow(🟨), B=Black(⬜)
"""


def _print_words(words: Sequence[str], per_row: int = 10, indent: str = "   ") -> None:
    for i in range(0, len(words), per_row):
        print(indent + ", ".join(words[i:i + per_row]))


def print_stats(session: SessionState) -> None:
    print("\n📊 Current Statistics:")
    print(f"  Attempt:     #{session.attempt_count + 1}")
    print(f"  Candidates:  {len(session.candidates)} words remaining")
    print(f"  Reduction:   {session.reduction() * 100:.1f}% eliminated")

    available = session.available_letters()
    if available:
        print(f"\n🔤 Available Letters ({len(available)}):")
        for i in range(0, len(available), 13):
            print("  " + " ".join(available[i:i + 13]))

    if session.history:
        print("\n📝 Previous guesses:")
        for i, g in enumerate(session.history, 1):
            print(f"  {i}. {g.word} → {feedback_emoji(g.feedback)}")

    candidates = session.candidates
    if 0 < len(candidates) <= 20:
        print("\n💡 Current candidates:")
        _print_words(candidates, per_row=5, indent="  ")
    print()


def _suggest(strategy: Strategy, session: SessionState) -> str:
    return strategy.select(session, session.universe)


def _show_candidates(strategy: Strategy, session: SessionState) -> None:
    candidates = session.candidates
    n = len(candidates)
    print(f"\n📝 Candidates remaining: {n}")
    if n == 1:
        print(f"🎯 Only one possibility left: {candidates[0]}")
        print("💡 Try this word next!")
        return
    if n <= 20:
        print("💡 Possible words:")
        _print_words(candidates)
    elif n <= 200:
        print("💡 Top candidates:")
        _print_words(candidates[:20])
        print(f"   ... and {n - 20} more")
    else:
        print(f"💡 Too many candidates to display ({n} words)")
    print(f"\n💡 Suggested next guess: {_suggest(strategy, session)}")


# ------------------------------------------------------------------
# Solver mode
# ------------------------------------------------------------------

def run_solver_mode(
    strategy: Strategy,
    universe: Sequence[str],
    input_fn: InputFn = input,
    exact: bool = False,
) -> SessionState:
    """Run the interactive solver loop; return the final session."""
    print("🔍 Wordle Solver Mode")
    print("====================")
    print("I'll help you solve today's Wordle!")
    print("Enter your guesses and feedback (e.g., 'CRANE BYYBB')\n")

    session = SessionState(universe, exact=exact)
    max_guesses = strategy.config.max_guesses
    print(f"📝 Starting candidates: {len(session.candidates)}")
    print(f"\n💡 Suggested first guess: {_suggest(strategy, session)}\n")

    while True:
        try:
            text = input_fn(
                f"🎲 Attempt #{session.attempt_count + 1} - "
                "Enter 'GUESS FEEDBACK' (or /h for help): "
            ).strip()
        except EOFError:
            print()
            break

        command = text.lower()
        if command in ("/q", "/quit"):
            print("👋 Thanks for playing!")
            break
        if command in ("/r", "/reset"):
            print("🔄 Restarting solver...")
            session = session.reset()
            print(f"📝 Candidates reset to: {len(session.candidates)}")
            print(f"\n💡 Suggested first guess: {_suggest(strategy, session)}\n")
            continue
        if command in ("/h", "/help"):
            print(HELP_TEXT)
            continue
        if command in ("/s", "/stats"):
            print_stats(session)
            continue

        try:
            guess = parse_guess(text)
        except MalformedGuessError as exc:
            print(f"❌ {exc}")
            print("Format: WORD FEEDBACK (e.g., 'CRANE BYYGG')")
            print("Feedback: G=Green(🟩), Y=Yellow(🟨), B=Black(⬜)\n")
            continue

        print(f"📊 Your feedback: {feedback_emoji(guess.feedback)}")
        if guess.is_win:
            print(f"\n🎉 Congratulations! You solved it in "
                  f"{session.attempt_count + 1} attempts!")
            print(f"✨ The word was: {guess.word}")
            session.record(guess)
            break

        session.record(guess)
        if session.exhausted:
            print("\n❌ No candidates left! Check your input or the word "
                  "might not be in our list.")
            print("Use /r to start over.\n")
        else:
            _show_candidates(strategy, session)

        if session.attempt_count >= max_guesses:
            print("\n😔 Reached maximum attempts!")
            if 0 < len(session.candidates) <= 10:
                print(f"The word was likely one of: {', '.join(session.candidates)}")
            break
        print()

    return session


# ------------------------------------------------------------------
# Game mode
# ------------------------------------------------------------------

def _valid_word(word: str) -> bool:
    return len(word) == WORD_LENGTH and set(word) <= ALPHABET


def run_game_mode(
    universe: Sequence[str],
    input_fn: InputFn = input,
    max_guesses: int = 6,
) -> bool:
    """Play against a solution typed in by the user; return True if solved."""
    print("🎮 Wordle Game Mode")
    print("==================")

    try:
        solution = input_fn(f"Enter the solution word ({WORD_LENGTH} letters): ").strip().upper()
    except EOFError:
        return False
    if not _valid_word(solution):
        print(f"❌ Solution must be exactly {WORD_LENGTH} letters!")
        return False

    session = SessionState(universe)
    print("\n🎯 Solution set! Let's start guessing.\n")
    print(f"📝 Candidates remaining: {len(session.candidates)}")

    while session.attempt_count < max_guesses:
        try:
            word = input_fn(f"\n🎲 Attempt #{session.attempt_count + 1}: "
                            "Enter your guess: ").strip().upper()
        except EOFError:
            return False
        if not _valid_word(word):
            print(f"❌ Guess must be exactly {WORD_LENGTH} letters!")
            continue

        fb = compute_feedback(word, solution)
        print(f"📊 Feedback: {feedback_emoji(fb)} ({format_feedback(fb)})")

        guess = Guess(word, fb)
        if guess.is_win:
            print(f"\n🎉 Congratulations! You found the word: {solution}")
            print(f"✨ Solved in {session.attempt_count + 1} attempts!")
            return True

        session.record(guess)
        candidates = session.candidates
        print(f"\n📝 Candidates remaining: {len(candidates)}")
        if not candidates:
            print("❌ No candidates left! The solution is not in the word list.")
        elif len(candidates) <= 200:
            print("💡 Possible words:")
            _print_words(candidates)
        else:
            print("💡 First 100 candidates:")
            _print_words(candidates[:100])

    print(f"\n😔 Game over! The word was: {solution}")
    return False


# ------------------------------------------------------------------
# CLI
# ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Interactive Wordle solver")
    parser.add_argument("mode", nargs="?", choices=["solver", "game"], default=None,
                        help="Mode (default: ask)")
    parser.add_argument("--words", type=str, default=None,
                        help="Path to word list (default: bundled list)")
    parser.add_argument("--strategy", type=str, default="entropy",
                        help=f"Suggestion strategy: {', '.join(sorted(discover_strategies()))} "
                             f"(default: entropy; unknown names use {DEFAULT_STRATEGY})")
    parser.add_argument("--opener", type=str, default=None, help="Fixed first guess")
    parser.add_argument("--workers", type=int, default=1,
                        help="Processes used to score guesses (default: 1)")
    parser.add_argument("--exact", action="store_true",
                        help="Filter with exact letter counts")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        lex = load_lexicon(args.words)
    except (FileNotFoundError, ValueError) as exc:
        print(f"❌ Error loading word list: {exc}", file=sys.stderr)
        return 1
    try:
        config = SolverConfig(workers=args.workers)
        if args.opener:
            config = replace(config, opener=args.opener)
    except ValueError as exc:
        print(f"❌ Invalid settings: {exc}", file=sys.stderr)
        return 1

    print("🎮 Wordle CLI")
    print("=============\n")
    print(f"✅ Loaded {len(lex)} words\n")

    mode = args.mode
    if mode is None:
        print("Choose mode:")
        print("1. Solver Mode - I'll help you solve a Wordle")
        print("2. Game Mode - Play Wordle with a known solution\n")
        try:
            choice = input("Enter choice (1 or 2): ").strip()
        except EOFError:
            return 0
        if choice not in ("1", "2"):
            print("Invalid choice. Defaulting to Solver Mode.")
        mode = "game" if choice == "2" else "solver"

    if mode == "game":
        run_game_mode(lex.words, max_guesses=config.max_guesses)
    else:
        strategy = create_strategy(args.strategy, config)
        run_solver_mode(strategy, lex.words, exact=args.exact)
    return 0


if __name__ == "__main__":
    sys.exit(main())
