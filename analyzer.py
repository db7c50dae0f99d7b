#!/usr/bin/env python3
"""Offline analysis of opening words.

Scores every word of the universe as a first guess (entropy, expected
remaining list size, immediate win probability), ranks "diverse" words by
letter coverage, and shows the feedback-pattern spread of a single word.
Uses all requested CPU cores for the full ranking.

Usage:
    python3 analyzer.py best                 # top 10 openers
    python3 analyzer.py best --top 25 --workers 8
    python3 analyzer.py diverse              # most letter-diverse words
    python3 analyzer.py word CRANE           # one word's pattern spread
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections import Counter
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import NamedTuple, Sequence

from lexicon import is_word, load_lexicon
from strategies.entropy_strat import RankedGuess
from wordle_env import WORD_LENGTH, decode, feedback_emoji, format_feedback
from wordle_scoring import ScoreProfile, encode_words, pattern_distribution, score

log = logging.getLogger(__name__)


class DiverseWord(NamedTuple):
    word: str
    unique_letters: int
    position_score: float


class WordAnalysis(NamedTuple):
    word: str
    profile: ScoreProfile
    distribution: list[tuple[int, int]]   # (pattern id, count), most common first


def _opener_key(r: RankedGuess) -> tuple:
    return (-r.entropy, r.expected_remaining, -r.win_probability)


# ── Worker functions (module-level for pickling) ───────────

def _eval_chunk(args) -> list[RankedGuess]:
    """Worker: score a chunk of guesses against the whole universe."""
    chunk, words = args
    matrix = encode_words(words)
    return [RankedGuess(g, *score(g, matrix)) for g in chunk]


def _progress(done: int, total: int) -> None:
    print(f"\rAnalyzing... {done}/{total} ({100 * done / total:.1f}%)   ",
          end="", file=sys.stderr, flush=True)


# ── Analyses ───────────────────────────────────────────────

def find_best_starters(
    words: Sequence[str],
    top_n: int = 10,
    workers: int = 1,
    progress: bool = False,
) -> list[RankedGuess]:
    """Rank every word as an opener.

    Order: entropy (desc), expected remaining (asc), win probability
    (desc), then word order.
    """
    words = list(words)
    total = len(words)
    t0 = time.time()
    scores: list[RankedGuess] = []

    if workers > 1:
        chunk_size = max(50, total // (workers * 4))
        chunks = [words[i:i + chunk_size] for i in range(0, total, chunk_size)]
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futs = {executor.submit(_eval_chunk, (ch, words)): i
                    for i, ch in enumerate(chunks)}
            by_chunk: dict[int, list[RankedGuess]] = {}
            for fut in as_completed(futs):
                by_chunk[futs[fut]] = fut.result()
                if progress:
                    _progress(sum(len(v) for v in by_chunk.values()), total)
        for i in range(len(chunks)):
            scores.extend(by_chunk[i])
    else:
        matrix = encode_words(words)
        for i, g in enumerate(words, 1):
            scores.append(RankedGuess(g, *score(g, matrix)))
            if progress and i % 100 == 0:
                _progress(i, total)

    if progress:
        _progress(total, total)
        print(file=sys.stderr)
    log.info("scored %d openers in %.1fs", total, time.time() - t0)

    scores.sort(key=_opener_key)
    return scores[:top_n]


def letter_position_frequencies(words: Sequence[str]) -> dict[tuple[str, int], float]:
    """Fraction of *words* having each letter at each position."""
    counts: Counter = Counter()
    for w in words:
        for i, ch in enumerate(w):
            counts[(ch, i)] += 1
    total = len(words)
    return {key: c / total for key, c in counts.items()}


def find_diverse_starters(words: Sequence[str], top_n: int = 10) -> list[DiverseWord]:
    """Words with the most distinct letters, then the most common placements."""
    freqs = letter_position_frequencies(words)
    scored = [
        DiverseWord(
            w,
            len(set(w)),
            sum(freqs.get((ch, i), 0.0) for i, ch in enumerate(w)),
        )
        for w in words
    ]
    scored.sort(key=lambda d: (-d.unique_letters, -d.position_score))
    return scored[:top_n]


def analyze_word(word: str, words: Sequence[str]) -> WordAnalysis | None:
    """Profile and pattern spread of *word* as an opener against *words*."""
    word = word.upper()
    if not is_word(word):
        return None
    if word not in set(words):
        log.warning("%r is not in the word list", word)
    matrix = encode_words(words)
    return WordAnalysis(word, score(word, matrix), pattern_distribution(word, matrix))


# ── CLI ────────────────────────────────────────────────────

def _print_ranked(rows: list[RankedGuess]) -> None:
    print(f"\n{'#':>3} {'Word':<7} {'Entropy':>8} {'E[left]':>9} {'P(win)':>8}")
    print("-" * 40)
    for i, r in enumerate(rows, 1):
        print(f"{i:>3} {r.word:<7} {r.entropy:>8.4f} "
              f"{r.expected_remaining:>9.2f} {r.win_probability:>8.4f}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Analyze Wordle opening words",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  python3 analyzer.py best --top 20          # best openers by entropy
  python3 analyzer.py diverse                # letter-diverse openers
  python3 analyzer.py word SLATE             # pattern distribution
""")
    parser.add_argument("--words", type=str, default=None,
                        help="Path to word list (default: bundled list)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_best = sub.add_parser("best", help="Rank every word as an opener")
    p_best.add_argument("--top", type=int, default=10, help="Rows to show (default: 10)")
    p_best.add_argument("--workers", type=int, default=1,
                        help="Parallel workers (default: 1)")

    p_div = sub.add_parser("diverse", help="Rank words by letter diversity")
    p_div.add_argument("--top", type=int, default=10, help="Rows to show (default: 10)")

    p_word = sub.add_parser("word", help="Analyze one word")
    p_word.add_argument("word", type=str)
    p_word.add_argument("--top", type=int, default=15,
                        help="Patterns to show (default: 15)")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        lex = load_lexicon(args.words)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error loading word list: {exc}", file=sys.stderr)
        return 1
    words = lex.words
    print(f"Vocabulary: {len(words)} words")

    if args.command == "best":
        _print_ranked(find_best_starters(words, args.top, args.workers, progress=True))
    elif args.command == "diverse":
        print(f"\n{'#':>3} {'Word':<7} {'Unique':>7} {'Position':>9}")
        print("-" * 30)
        for i, d in enumerate(find_diverse_starters(words, args.top), 1):
            print(f"{i:>3} {d.word:<7} {d.unique_letters:>7} {d.position_score:>9.4f}")
    else:
        res = analyze_word(args.word, words)
        if res is None:
            print(f"Word must be {WORD_LENGTH} letters A-Z", file=sys.stderr)
            return 1
        prof = res.profile
        print(f"\n{res.word}: entropy {prof.entropy:.4f} bits, "
              f"expected remaining {prof.expected_remaining:.2f}, "
              f"win probability {prof.win_probability:.4f}")
        print(f"{len(res.distribution)} distinct patterns\n")
        for pid, count in res.distribution[:args.top]:
            marks = decode(pid)
            print(f"  {feedback_emoji(marks)} {format_feedback(marks)}  {count:>5}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
