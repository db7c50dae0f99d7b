from collections import Counter

import pytest

from lexicon import load_lexicon
from strategies import create_strategy, discover_strategies
from strategies.entropy_strat import EntropyStrategy, _rank_key, rank_words, strided_sample
from strategies.frequency_strat import FrequencyStrategy, distinct_letter_score
from strategies.simple_strat import SimpleStrategy
from strategy import SamplingTier, SolverConfig
from wordle_env import Mark
from wordle_session import Guess, SessionState, parse_guess

SCENARIO = ["CRANE", "BRAIN", "GRAIN", "TRAIN", "STAIN", "PLAIN", "CHAIN"]
ATCH = ["BATCH", "HATCH", "LATCH", "MATCH", "PATCH", "WATCH"]


def _scenario_session():
    s = SessionState(SCENARIO)
    s.record(parse_guess("CRANE BGGYB"))
    return s


# ------------------------------------------------------------------
# Config
# ------------------------------------------------------------------

def test_sampling_tiers_shrink_with_candidates():
    cfg = SolverConfig()
    assert cfg.extra_probes(5000) == 64
    assert cfg.extra_probes(500) == 192
    assert cfg.extra_probes(100) == 384
    assert cfg.extra_probes(10) == 768
    assert cfg.extra_probes(5000) < cfg.extra_probes(10)


def test_config_normalises_and_validates():
    assert SolverConfig(opener="slate").opener == "SLATE"
    with pytest.raises(ValueError):
        SolverConfig(workers=0)


@pytest.mark.parametrize("opener", ["xyz!", "CRAN", "CRANES", "CR4NE", ""])
def test_config_rejects_non_word_opener(opener):
    with pytest.raises(ValueError, match="opener"):
        SolverConfig(opener=opener)


# ------------------------------------------------------------------
# Entropy selector
# ------------------------------------------------------------------

def test_entropy_opener_ignores_universe():
    s = SessionState(["BRAIN", "GRAIN"])
    strat = EntropyStrategy(SolverConfig(opener="SLATE"))
    assert strat.select(s, ["BRAIN", "GRAIN"]) == "SLATE"


def test_entropy_single_and_pair():
    s = _scenario_session()
    s.record(parse_guess("BRAIN BGGGG"))
    assert s.candidates == ["GRAIN", "TRAIN"]
    assert EntropyStrategy().select(s, SCENARIO) == "GRAIN"
    s.record(parse_guess("GRAIN BGGGG"))
    assert EntropyStrategy().select(s, SCENARIO) == "TRAIN"


def test_entropy_prefers_candidate_on_tie():
    # BRAIN, GRAIN, TRAIN and the probe STAIN all split the list 1 + 2
    s = _scenario_session()
    assert EntropyStrategy().select(s, SCENARIO) == "BRAIN"


def test_entropy_picks_probe_when_it_splits_better():
    universe = ATCH + ["BLIMP"]
    s = SessionState(universe)
    s.record(Guess("XATCH", (Mark.BLACK,) + (Mark.GREEN,) * 4))
    assert s.candidates == ATCH
    assert EntropyStrategy().select(s, universe) == "BLIMP"


def test_entropy_select_has_no_side_effects():
    s = _scenario_session()
    before = (s.candidates, s.history, s.attempt_count)
    EntropyStrategy().select(s, SCENARIO)
    EntropyStrategy().rank(s, SCENARIO)
    assert (s.candidates, s.history, s.attempt_count) == before


def test_entropy_exhausted_session_raises():
    s = SessionState(SCENARIO)
    s.record(parse_guess("PLAIN BBBBB"))
    with pytest.raises(RuntimeError):
        EntropyStrategy().select(s, SCENARIO)


def test_guess_pool_includes_candidates_and_probes():
    cfg = SolverConfig(sampling=(SamplingTier(0, 2),))
    s = _scenario_session()
    pool = EntropyStrategy(cfg).guess_pool(s.candidates, SCENARIO)
    assert pool[:3] == ["BRAIN", "GRAIN", "TRAIN"]
    assert len(pool) == 5
    assert not set(pool[3:]) & set(s.candidates)


def test_strided_sample():
    universe = [f"W{i:04d}" for i in range(100)]
    sample = strided_sample(universe, 10, skip=set())
    assert sample == universe[::10]
    assert strided_sample(universe, 500, skip={"W0000"}) == universe[1:]
    assert strided_sample(universe, 0, skip=set()) == []
    assert "W0000" not in strided_sample(universe, 10, skip={"W0000"})


def test_rank_orders_by_entropy():
    s = _scenario_session()
    ranked = EntropyStrategy().rank(s, SCENARIO)
    assert [r.word for r in ranked[:4]] == ["BRAIN", "GRAIN", "TRAIN", "STAIN"]
    entropies = [r.entropy for r in ranked]
    assert entropies == sorted(entropies, reverse=True)
    assert len(EntropyStrategy().rank(s, SCENARIO, top_n=2)) == 2


def test_rank_key_tie_break_order():
    # entropy, then candidate membership, then fewer expected, then more wins
    keys = {
        "low_entropy": _rank_key(1.0, True, 1.0, 0.5),
        "probe": _rank_key(2.0, False, 1.0, 0.5),
        "many_left": _rank_key(2.0, True, 3.0, 0.5),
        "few_left": _rank_key(2.0, True, 2.0, 0.0),
        "few_left_win": _rank_key(2.0, True, 2.0, 0.25),
    }
    order = sorted(keys, key=keys.get, reverse=True)
    assert order == ["few_left_win", "few_left", "many_left", "probe", "low_entropy"]


def test_rank_words_tuple_fields():
    top = rank_words(["CRANE"], ["CRANE", "BRAIN", "GRAIN", "TRAIN"])[0]
    assert top.word == "CRANE"
    assert top.expected_remaining == pytest.approx(2.5)
    assert top.win_probability == pytest.approx(0.25)


def test_parallel_selection_matches_sequential():
    words = load_lexicon().words
    s = SessionState(words)
    s.record(parse_guess("CRANE BBBBB"))
    assert len(s.candidates) > 2
    seq = EntropyStrategy(SolverConfig(workers=1)).select(s, words)
    par = EntropyStrategy(SolverConfig(workers=2)).select(s, words)
    assert seq == par


# ------------------------------------------------------------------
# Simple and frequency strategies
# ------------------------------------------------------------------

def test_simple_strategy_sequence():
    words = load_lexicon().words
    strat = SimpleStrategy()
    s = SessionState(words)
    assert strat.select(s, words) == "CRANE"
    s.record(parse_guess("QQQQQ BBBBB"))
    assert len(s.candidates) > 20
    assert strat.select(s, words) == "SLATE"
    s.record(parse_guess("JJJJJ BBBBB"))
    assert strat.select(s, words) == "MOIST"
    s.record(parse_guess("XXXXX BBBBB"))
    assert strat.select(s, words) == s.candidates[0]


def test_simple_strategy_few_candidates():
    s = _scenario_session()
    assert SimpleStrategy().select(s, SCENARIO) == "BRAIN"


def test_distinct_letter_score():
    assert distinct_letter_score("LLAMA", Counter("LLAMA")) == 5


def test_frequency_strategy():
    s = SessionState(SCENARIO)
    assert FrequencyStrategy().select(s, SCENARIO) == "CRANE"
    s.record(parse_guess("CRANE BGGYB"))
    assert FrequencyStrategy().select(s, SCENARIO) in s.candidates


# ------------------------------------------------------------------
# Discovery
# ------------------------------------------------------------------

def test_discover_strategies():
    found = discover_strategies()
    assert set(found) == {"simple", "entropy", "frequency"}
    assert found["entropy"] is EntropyStrategy


def test_create_strategy_passes_config_and_falls_back():
    cfg = SolverConfig(opener="SLATE")
    strat = create_strategy("ENTROPY", cfg)
    assert isinstance(strat, EntropyStrategy)
    assert strat.config is cfg
    assert isinstance(create_strategy("nonsense"), SimpleStrategy)
