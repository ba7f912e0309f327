"""
solver.py

Long-lived helper object: owns the dictionary for the whole session and the
guesses entered so far.

API
---
filter_words(constraints) -> list[str]
    Every dictionary word consistent with `constraints`, dictionary order.
get_suggestions(constraints, limit) -> list[str]
    Up to `limit` matches, best letter-frequency score first.
add_guess(word, pattern) / undo() / reset()
    Maintain the guess history; `constraints` is rebuilt from it on demand.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from wordle_cz.config import CONFIG
from wordle_cz.constraints import Constraints, ConstraintsLike, constraints_from_history, filter_candidates, first_violation
from wordle_cz.data_utils import load_word_vocab
from wordle_cz.feedback import Pattern, as_pattern, build_share_query
from wordle_cz.normalize import normalize_text
from wordle_cz.ranking import get_suggestions, letter_frequencies, rank_candidates
from wordle_cz.vocab import WordVocab

logger = logging.getLogger(__name__)


class WordleSolver:
    def __init__(self, vocab: WordVocab) -> None:
        if not isinstance(vocab, WordVocab):
            raise TypeError("vocab must be a WordVocab")

        self.vocab = vocab
        # Frequencies are over the whole dictionary and never change
        self._freqs: Dict[str, int] = letter_frequencies(vocab)

        # Session state
        self._history: List[Tuple[str, Pattern]] = []

    @classmethod
    def from_path(cls, path: str = CONFIG["words_path"]) -> "WordleSolver":
        return cls(load_word_vocab(path))

    # -------------------------
    # Queries
    # -------------------------
    def filter_words(self, constraints: ConstraintsLike = None) -> List[str]:
        return filter_candidates(self.vocab, constraints)

    def get_suggestions(self, constraints: ConstraintsLike = None, limit: int = CONFIG["default_limit"]) -> List[str]:
        return get_suggestions(self.vocab, constraints, limit, freqs=self._freqs)

    def rank(self, constraints: ConstraintsLike = None) -> List[Dict[str, object]]:
        return rank_candidates(self.vocab, constraints, freqs=self._freqs)

    def word_exists(self, word: str) -> bool:
        return self.vocab.contains(word)

    def explain(self, word: str, constraints: ConstraintsLike = None) -> Optional[str]:
        """Why `word` is ruled out, or None if it is still a candidate."""
        reason = first_violation(word, self.constraints if constraints is None else constraints)
        logger.debug("explain %s -> %s", normalize_text(word), reason or "consistent")
        return reason

    # -------------------------
    # Session history
    # -------------------------
    def add_guess(self, word: str, pattern: Sequence[int]) -> Constraints:
        """Record one guess and return the constraints including it."""
        guess = normalize_text(word)
        patt = as_pattern(pattern)
        # Build first so a malformed guess never enters the history
        constraints = constraints_from_history(self._history + [(guess, patt)])
        self._history.append((guess, patt))
        return constraints

    def undo(self) -> Optional[Tuple[str, Pattern]]:
        return self._history.pop() if self._history else None

    def reset(self) -> None:
        self._history = []

    def candidates(self) -> List[str]:
        return self.filter_words(self.constraints)

    def suggestions(self, limit: int = CONFIG["default_limit"]) -> List[str]:
        return self.get_suggestions(self.constraints, limit)

    def share_query(self) -> str:
        return build_share_query(self._history)

    # -------------------------
    # Introspection helpers
    # -------------------------
    @property
    def history(self) -> List[Tuple[str, Pattern]]:
        return list(self._history)

    @property
    def constraints(self) -> Constraints:
        return constraints_from_history(self._history)
