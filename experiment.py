#!/usr/bin/env python3
"""Benchmark one strategy by letting it play against known solutions."""

from __future__ import annotations

import argparse
import json
import logging
import math
import random
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from lexicon import load_lexicon
from strategies import DEFAULT_STRATEGY, create_strategy, discover_strategies
from strategy import SolverConfig, Strategy
from wordle_env import WordleEnv, feedback_emoji, format_feedback
from wordle_session import Guess, SessionState

RESULTS_DIR = Path(__file__).resolve().parent / "results"

log = logging.getLogger(__name__)


def _entropy_bits(n: int) -> float:
    return math.log2(n) if n > 1 else 0.0


def play_game(
    strat: Strategy,
    vocabulary: Sequence[str],
    secret: str,
    exact: bool = False,
    verbose: bool = False,
) -> dict:
    """Play one game of *strat* against *secret* and return its log."""
    env = WordleEnv(vocabulary, max_guesses=strat.config.max_guesses)
    env.reset(secret)
    session = SessionState(vocabulary, exact=exact)
    steps: list[dict] = []

    while not env.game_over():
        if session.exhausted:
            log.warning("%s: no candidates left after %d guesses", strat.name, len(steps))
            break
        word = strat.select(session, session.universe)
        pat = env.guess(word)
        remaining = session.record(Guess(word, pat))

        steps.append({
            "guess": word,
            "feedback": format_feedback(pat),
            "remaining": remaining,
            "entropy_bits": round(_entropy_bits(remaining), 3),
        })
        if verbose:
            print(f"  Guess {len(steps)}: {word}  {feedback_emoji(pat)}  "
                  f"remaining={remaining}  H={_entropy_bits(remaining):.2f} bits")

    return {
        "secret": secret,
        "solved": env.is_solved(),
        "num_guesses": len(steps),
        "steps": steps,
    }


def run_experiment(
    strat: Strategy,
    vocabulary: Sequence[str],
    num_games: int = 10,
    seed: int = 42,
    exact: bool = False,
    verbose: bool = False,
) -> list[dict]:
    rng = random.Random(seed)
    secrets = rng.sample(list(vocabulary), min(num_games, len(vocabulary)))

    logs: list[dict] = []
    for i, secret in enumerate(secrets, 1):
        if verbose:
            print(f"\n--- Game {i}/{len(secrets)} | Secret: {secret} ---")
        result = play_game(strat, vocabulary, secret, exact=exact, verbose=verbose)
        result["game"] = i
        logs.append(result)
        if verbose:
            status = "SOLVED" if result["solved"] else "FAILED"
            print(f"  -> {status} in {result['num_guesses']} guesses")
    return logs


def summarize(logs: list[dict]) -> dict:
    n = len(logs)
    if not n:
        return {"games": 0, "solved": 0, "solve_rate": 0, "mean_guesses": 0,
                "median_guesses": 0, "max_guesses": 0}
    solved = sum(1 for g in logs if g["solved"])
    guesses = sorted(g["num_guesses"] for g in logs)
    median = (
        guesses[n // 2]
        if n % 2 == 1
        else (guesses[n // 2 - 1] + guesses[n // 2]) / 2
    )
    return {
        "games": n,
        "solved": solved,
        "solve_rate": round(solved / n, 4),
        "mean_guesses": round(sum(guesses) / n, 3),
        "median_guesses": median,
        "max_guesses": guesses[-1],
    }


def print_experiment_summary(logs: list[dict], strategy_name: str) -> None:
    s = summarize(logs)
    n = s["games"]
    print(f"\n=== {strategy_name} — {n} games ===")
    if not n:
        return
    print(f"  Solved: {s['solved']}/{n} ({100 * s['solve_rate']:.1f}%)")
    print(f"  Guesses — mean: {s['mean_guesses']:.2f}, "
          f"median: {s['median_guesses']:.1f}, max: {s['max_guesses']}")


def plot_distribution(logs: list[dict], strategy_name: str, path: Path | None = None) -> None:
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        print("matplotlib not installed — skipping plot", file=sys.stderr)
        return

    guesses = [g["num_guesses"] for g in logs]
    mx = max(guesses) if guesses else 6
    bins = list(range(1, mx + 2))

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.hist(guesses, bins=bins, edgecolor="black", align="left")
    ax.set_title(f"{strategy_name} — guess distribution")
    ax.set_xlabel("Guesses")
    ax.set_ylabel("Count")
    fig.tight_layout()

    dest = path or RESULTS_DIR / f"experiment_{strategy_name.lower()}.png"
    dest.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(dest, dpi=150)
    plt.close(fig)
    print(f"Plot saved to {dest}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Single-strategy Wordle benchmark")
    parser.add_argument("--strategy", type=str, default="entropy",
                        help=f"Strategy name: {', '.join(sorted(discover_strategies()))}")
    parser.add_argument("--words", type=str, default=None, help="Path to word list")
    parser.add_argument("--num-games", type=int, default=10, help="Number of games")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--opener", type=str, default=None, help="Fixed first guess")
    parser.add_argument("--workers", type=int, default=1, help="Scoring processes")
    parser.add_argument("--exact", action="store_true",
                        help="Filter with exact letter counts")
    parser.add_argument("--verbose", action="store_true", help="Print per-game details")
    parser.add_argument("--plot", type=str, default=None, help="Save plot to this path")
    parser.add_argument("--json", type=str, default=None, help="Save results as JSON")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        lex = load_lexicon(args.words)
        config = SolverConfig(workers=args.workers)
        if args.opener:
            config = replace(config, opener=args.opener)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Vocabulary: {len(lex)} words")

    strat = create_strategy(args.strategy or DEFAULT_STRATEGY, config)
    print(f"Strategy: {strat.name}")

    logs = run_experiment(
        strat,
        lex.words,
        num_games=args.num_games,
        seed=args.seed,
        exact=args.exact,
        verbose=args.verbose,
    )
    print_experiment_summary(logs, strat.name)

    if args.plot:
        plot_distribution(logs, strat.name, Path(args.plot))

    if args.json:
        json_path = Path(args.json)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        output = {
            "strategy": strat.name,
            "config": {
                "opener": config.opener,
                "exact": args.exact,
                "max_guesses": config.max_guesses,
                "num_games": args.num_games,
                "seed": args.seed,
            },
            "summary": summarize(logs),
            "games": logs,
        }
        json_path.write_text(json.dumps(output, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"JSON saved to {json_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
