"""
validation.py

Checks a caller runs before feeding guesses to the constraint builder.
The builder itself accepts anything well-formed and lets the last green
mark for a position win; these helpers let a front end refuse instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from wordle_cz.config import CONFIG
from wordle_cz.feedback import Feedback, as_pattern
from wordle_cz.normalize import normalize_text
from wordle_cz.vocab import WordVocab

WORD_LEN = CONFIG["word_length"]
_CZECH_WORD = re.compile(r"^[A-ZÁČĎÉĚÍŇÓŘŠŤÚŮÝŽ]+$")


class InvalidGuessError(ValueError):
    """A guessed word is malformed or not in the dictionary."""


class ConstraintConflictError(ValueError):
    """Two guesses claim different green letters for the same position."""

    def __init__(self, conflict: "ExactConflict") -> None:
        self.conflict = conflict
        super().__init__(
            f"position {conflict.position + 1} is green as both "
            f"'{conflict.existing_letter}' and '{conflict.new_letter}'"
        )


@dataclass(frozen=True)
class ExactConflict:
    position: int
    existing_letter: str
    new_letter: str
    guess_index: int


def validate_guess_word(word: str, vocab: Optional[WordVocab] = None) -> str:
    """
    Return the normalized form of `word` if it is a usable guess.

    A guess is 5 Czech letters (accents allowed, any case). When `vocab` is
    given the word must also be in the dictionary.
    """
    if not isinstance(word, str):
        raise InvalidGuessError("guess must be a string")
    trimmed = word.strip().upper()
    if len(trimmed) != WORD_LEN:
        raise InvalidGuessError(f"guess must have exactly {WORD_LEN} letters")
    if not _CZECH_WORD.match(trimmed):
        raise InvalidGuessError("guess may contain only Czech letters")
    normalized = normalize_text(trimmed)
    if vocab is not None and not vocab.contains(normalized):
        raise InvalidGuessError(f"'{normalized}' is not in the dictionary")
    return normalized


def find_exact_conflicts(history: Iterable[Tuple[str, Sequence[int]]]) -> List[ExactConflict]:
    """Every later guess that marks a different green letter at an already green position."""
    seen: Dict[int, str] = {}
    conflicts: List[ExactConflict] = []
    for idx, (guess, pattern) in enumerate(history):
        word = normalize_text(guess)
        if len(word) != WORD_LEN:
            raise InvalidGuessError(f"guess must have exactly {WORD_LEN} letters")
        for pos, p in enumerate(as_pattern(pattern)):
            if p is not Feedback.EXACT:
                continue
            letter = word[pos]
            existing = seen.get(pos)
            if existing is not None and existing != letter:
                conflicts.append(ExactConflict(pos, existing, letter, idx))
                continue
            seen[pos] = letter
    return conflicts


def validate_history(history: Iterable[Tuple[str, Sequence[int]]]) -> None:
    """Raise ConstraintConflictError for the first conflicting green mark."""
    conflicts = find_exact_conflicts(history)
    if conflicts:
        raise ConstraintConflictError(conflicts[0])
