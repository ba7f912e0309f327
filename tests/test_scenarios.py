"""Whole-game scenarios: the real solution must survive every step."""

import pytest

from wordle_cz.constraints import ConstraintState, filter_candidates, first_violation
from wordle_cz.feedback import parse_feedback
from wordle_cz.vocab import WordVocab

DICTIONARY = WordVocab([
    "srnka", "motor", "vichr", "cetar", "povyk",
    "pisek", "skara", "slova", "sport", "stara", "sarka",
    "klaun", "stroj", "parek", "rozum", "brich", "afera",
    "denar", "metar", "posuk", "potok", "kolos", "zamek",
])

SCENARIOS = [
    ("SRNKA", [("PISEK", "XXOXO"), ("SKARA", "GOXOG")]),
    ("MOTOR", [("KLAUN", "XXXXX"), ("STROJ", "XOOBX")]),
    ("VICHR", [("PAREK", "XXOXX"), ("ROZUM", "OXXXX"), ("BRICH", "XOOOO")]),
    ("CETAR", [("PAREK", "XOOOX"), ("AFERA", "OXOOX"), ("DENAR", "XGXGG"), ("METAR", "XGGGG")]),
    ("POVYK", [("PAREK", "GXXXG"), ("POSUK", "GGXXG")]),
]


@pytest.mark.parametrize("solution,attempts", SCENARIOS, ids=[s for s, _ in SCENARIOS])
def test_solution_survives_every_step(solution, attempts):
    state = ConstraintState()
    for step, (word, feedback) in enumerate(attempts, 1):
        state.apply_feedback(word, parse_feedback(feedback))
        constraints = state.freeze()
        remaining = filter_candidates(DICTIONARY, constraints)
        assert solution.lower() in remaining, (
            f"step {step}: {word} -> {feedback} dropped {solution}: "
            f"{first_violation(solution, constraints)}"
        )


def test_srnka_excludes_words_with_two_a():
    state = ConstraintState()
    state.apply_feedback("PISEK", parse_feedback("XXOXO"))
    assert "skara" in filter_candidates(DICTIONARY, state.freeze())

    state.apply_feedback("SKARA", parse_feedback("GOXOG"))
    constraints = state.freeze()
    remaining = filter_candidates(DICTIONARY, constraints)
    assert remaining == ["srnka"]
    assert "stara" not in remaining
    # 'sarka' fits every position rule, only the count of a rules it out
    assert first_violation("sarka", constraints) == "green count: 'a' occurs 2 times, expected 1"


def test_all_gray_guess_removes_its_letters():
    state = ConstraintState().apply_feedback("KLAUN", parse_feedback("XXXXX"))
    for w in filter_candidates(DICTIONARY, state.freeze()):
        assert not set(w) & set("klaun")
