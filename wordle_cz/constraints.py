"""
constraints.py

Keeps track of feedback constraints and filters candidate words.

ConstraintState is the mutable builder fed with (guess, pattern) observations;
freeze() turns it into an immutable Constraints value which the matcher reads.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

from wordle_cz.config import CONFIG
from wordle_cz.feedback import Feedback, as_pattern
from wordle_cz.normalize import normalize_letter, normalize_text
from wordle_cz.vocab import CandidateWord

WORD_LEN = CONFIG["word_length"]

# Loose input keys accepted by Constraints.from_mapping, first match wins.
_FIELD_KEYS = {
    "exact": ("exact", "green"),
    "elsewhere": ("elsewhere", "blue"),
    "misplaced": ("misplaced", "orange"),
    "absent": ("absent", "gray", "grey"),
}


def _position(pos: Any) -> int:
    try:
        p = int(pos)
    except (TypeError, ValueError):
        raise ValueError(f"invalid position: {pos!r}") from None
    if p < 0 or p >= WORD_LEN:
        raise ValueError(f"position out of range: {pos!r}")
    return p


@dataclass(frozen=True)
class Constraints:
    """
    Accumulated feedback, immutable once built.

    exact      position -> letter (green)
    elsewhere  position -> letter (blue)
    misplaced  letter -> positions the letter is not at (orange)
    absent     letters marked gray at least once

    Letters are normalized and positions coerced to int on construction,
    so Constraints(exact={"0": "Č"}) equals Constraints(exact={0: "c"}).
    """

    exact: Mapping[int, str] = field(default_factory=dict)
    elsewhere: Mapping[int, str] = field(default_factory=dict)
    misplaced: Mapping[str, FrozenSet[int]] = field(default_factory=dict)
    absent: FrozenSet[str] = frozenset()

    _exact_counts: Mapping[str, int] = field(init=False, repr=False, compare=False)
    _elsewhere_counts: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        exact = {_position(p): normalize_letter(l) for p, l in dict(self.exact).items()}
        elsewhere = {_position(p): normalize_letter(l) for p, l in dict(self.elsewhere).items()}
        misplaced: Dict[str, Set[int]] = {}
        for letter, positions in dict(self.misplaced).items():
            if isinstance(positions, (int, str)):
                positions = [positions]
            misplaced.setdefault(normalize_letter(letter), set()).update(_position(p) for p in positions)
        absent = frozenset(normalize_letter(l) for l in self.absent)

        object.__setattr__(self, "exact", MappingProxyType(exact))
        object.__setattr__(self, "elsewhere", MappingProxyType(elsewhere))
        object.__setattr__(self, "misplaced", MappingProxyType({l: frozenset(ps) for l, ps in misplaced.items()}))
        object.__setattr__(self, "absent", absent)
        object.__setattr__(self, "_exact_counts", MappingProxyType(dict(Counter(exact.values()))))
        object.__setattr__(self, "_elsewhere_counts", MappingProxyType(dict(Counter(elsewhere.values()))))

    def __hash__(self) -> int:
        return hash((
            frozenset(self.exact.items()),
            frozenset(self.elsewhere.items()),
            frozenset(self.misplaced.items()),
            self.absent,
        ))

    # ---------- Construction helpers ----------

    @classmethod
    def from_mapping(cls, obj: Any) -> "Constraints":
        """
        Build from a loose four-field bag, e.g. the JSON-ish dict a UI produces:

            {"green": {"0": "s"}, "orange": {"k": [1, 4]}, "gray": ["p", "i"]}

        Missing or None fields mean no constraint of that kind. Attribute
        access is used when `obj` is not a mapping.
        """
        if obj is None:
            return cls()
        if isinstance(obj, Constraints):
            return obj
        values = {}
        for name, keys in _FIELD_KEYS.items():
            for key in keys:
                val = obj.get(key) if isinstance(obj, Mapping) else getattr(obj, key, None)
                if val is not None:
                    values[name] = val
                    break
        return cls(
            exact=values.get("exact", {}),
            elsewhere=values.get("elsewhere", {}),
            misplaced=values.get("misplaced", {}),
            absent=frozenset(values.get("absent", ())),
        )

    # ---------- Derived counts ----------

    def is_empty(self) -> bool:
        return not (self.exact or self.elsewhere or self.misplaced or self.absent)

    def exact_count(self, letter: str) -> int:
        """Number of positions where `letter` is green."""
        return self._exact_counts.get(letter, 0)

    def elsewhere_count(self, letter: str) -> int:
        """Number of positions where `letter` is blue."""
        return self._elsewhere_counts.get(letter, 0)

    def is_positional(self, letter: str) -> bool:
        """True if any non-gray category mentions `letter`."""
        return letter in self._exact_counts or letter in self._elsewhere_counts or letter in self.misplaced

    def required_count(self, letter: str) -> int:
        """
        Fewest occurrences of `letter` the non-gray feedback allows.

        Green and blue positions each hold one occurrence; blue also demands
        one more than its own positions; orange alone demands one.
        """
        fixed = {p for p, l in self.exact.items() if l == letter}
        fixed.update(p for p, l in self.elsewhere.items() if l == letter)
        required = len(fixed)
        n_blue = self.elsewhere_count(letter)
        if n_blue:
            required = max(required, n_blue + 1)
        if letter in self.misplaced:
            required = max(required, 1)
        return required


ConstraintsLike = Union[Constraints, Mapping[str, Any], None]


def as_constraints(obj: ConstraintsLike) -> Constraints:
    return obj if isinstance(obj, Constraints) else Constraints.from_mapping(obj)


class ConstraintState:
    def __init__(self, word_length: int = WORD_LEN):
        self.word_length = word_length
        self.reset()

    def reset(self):
        self.exact: Dict[int, str] = {}
        self.elsewhere: Dict[int, str] = {}
        self.misplaced: Dict[str, Set[int]] = {}
        self.absent: Set[str] = set()

    def add(self, position: int, letter: str, category: Feedback) -> None:
        """Record a single observation; exact/elsewhere positions are last-write-wins."""
        if not 0 <= position < self.word_length:
            raise ValueError(f"position out of range: {position}")
        letter = normalize_letter(letter)
        category = Feedback(category)
        if category is Feedback.EXACT:
            self.exact[position] = letter
        elif category is Feedback.ELSEWHERE:
            self.elsewhere[position] = letter
        elif category is Feedback.MISPLACED:
            self.misplaced.setdefault(letter, set()).add(position)
        else:
            self.absent.add(letter)

    def apply_feedback(self, guess: str, pattern: Sequence[int]) -> "ConstraintState":
        """
        Update constraints with one guess and its per-position feedback.
        - Green  = letter fixed at that slot
        - Blue   = letter fixed at that slot and present again elsewhere
        - Orange = letter present but not in that slot
        - Gray   = letter absent, or capped at what the other colours require
        """
        if not isinstance(guess, str):
            raise ValueError(f"guess must be a string of length {self.word_length}")
        word = normalize_text(guess)
        if len(word) != self.word_length:
            raise ValueError(f"guess must be a string of length {self.word_length}")
        patt = as_pattern(pattern)

        for pos, (ch, p) in enumerate(zip(word, patt)):
            self.add(pos, ch, p)
        return self

    def freeze(self) -> Constraints:
        return Constraints(
            exact=dict(self.exact),
            elsewhere=dict(self.elsewhere),
            misplaced={l: frozenset(ps) for l, ps in self.misplaced.items()},
            absent=frozenset(self.absent),
        )


def constraints_from_history(history: Iterable[Tuple[str, Sequence[int]]]) -> Constraints:
    """Fold (guess, pattern) pairs, oldest first, into one Constraints value."""
    state = ConstraintState()
    for guess, patt in history:
        state.apply_feedback(guess, patt)
    return state.freeze()


# -------------------------
# Matcher
# -------------------------
# Each check returns None when the word passes, otherwise the reason it fails.

def _letter_at(word: CandidateWord, pos: int) -> Optional[str]:
    return word.text[pos] if pos < len(word.text) else None


def _check_exact_positions(word: CandidateWord, c: Constraints) -> Optional[str]:
    for pos, letter in c.exact.items():
        if _letter_at(word, pos) != letter:
            return f"green: '{letter}' not at position {pos}"
    return None


def _check_elsewhere_positions(word: CandidateWord, c: Constraints) -> Optional[str]:
    for pos, letter in c.elsewhere.items():
        if _letter_at(word, pos) != letter:
            return f"blue: '{letter}' not at position {pos}"
    return None


def _check_misplaced(word: CandidateWord, c: Constraints) -> Optional[str]:
    for letter, positions in c.misplaced.items():
        if not word.count(letter):
            return f"orange: '{letter}' not in word"
        for pos in sorted(positions):
            if _letter_at(word, pos) == letter:
                return f"orange: '{letter}' at forbidden position {pos}"
    return None


def _check_exact_counts(word: CandidateWord, c: Constraints) -> Optional[str]:
    # Orange marks on a green letter do not loosen the count.
    for letter in c._exact_counts:
        if c.elsewhere_count(letter):
            continue
        expected = c.exact_count(letter)
        actual = word.count(letter)
        if actual != expected:
            return f"green count: '{letter}' occurs {actual} times, expected {expected}"
    return None


def _check_elsewhere_counts(word: CandidateWord, c: Constraints) -> Optional[str]:
    for letter, n_blue in c._elsewhere_counts.items():
        actual = word.count(letter)
        if actual <= n_blue:
            return f"blue count: '{letter}' occurs {actual} times, expected more than {n_blue}"
    return None


def _check_absent(word: CandidateWord, c: Constraints) -> Optional[str]:
    for letter in sorted(c.absent):
        actual = word.count(letter)
        if not c.is_positional(letter):
            if actual:
                return f"gray: '{letter}' occurs but should not"
            continue
        expected = c.required_count(letter)
        if actual != expected:
            return f"gray count: '{letter}' occurs {actual} times, expected exactly {expected}"
    return None


_CHECKS: Tuple[Callable[[CandidateWord, Constraints], Optional[str]], ...] = (
    _check_exact_positions,
    _check_elsewhere_positions,
    _check_misplaced,
    _check_exact_counts,
    _check_elsewhere_counts,
    _check_absent,
)

WordLike = Union[CandidateWord, str]


def as_candidate(word: WordLike) -> CandidateWord:
    return word if isinstance(word, CandidateWord) else CandidateWord.from_text(word)


def first_violation(word: WordLike, constraints: ConstraintsLike) -> Optional[str]:
    """Return why `word` is inconsistent with `constraints`, or None if it is consistent."""
    cand = as_candidate(word)
    c = as_constraints(constraints)
    for check in _CHECKS:
        reason = check(cand, c)
        if reason is not None:
            return reason
    return None


def matches(word: WordLike, constraints: ConstraintsLike) -> bool:
    return first_violation(word, constraints) is None


def filter_candidates(words: Iterable[WordLike], constraints: ConstraintsLike = None) -> List[str]:
    """
    Keep only candidates consistent with *all* accumulated feedback.
    Dictionary order is preserved; nothing is capped.
    """
    c = as_constraints(constraints)
    candidates = []
    for w in words:
        cand = as_candidate(w)
        if all(check(cand, c) is None for check in _CHECKS):
            candidates.append(cand.text)
    return candidates
