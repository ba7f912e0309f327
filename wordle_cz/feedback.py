"""
Feedback categories and the text formats they travel in.

A guess gets one category per position:
    ABSENT    (0, gray)   - letter not in the word beyond what other marks require
    MISPLACED (1, orange) - letter in the word, not at this position
    ELSEWHERE (2, blue)   - letter at this position and at least once more
    EXACT     (3, green)  - letter at this position

The integer values are the digits used in share links, e.g. "PISEK00101".
"""

from __future__ import annotations

import logging
import re
from enum import IntEnum
from typing import Iterable, List, Sequence, Tuple
from urllib.parse import parse_qs, urlencode

from wordle_cz.config import CONFIG
from wordle_cz.normalize import normalize_text

logger = logging.getLogger(__name__)

WORD_LEN = CONFIG["word_length"]


class Feedback(IntEnum):
    ABSENT = 0
    MISPLACED = 1
    ELSEWHERE = 2
    EXACT = 3

    @property
    def color(self) -> str:
        return _COLORS[self]

    @property
    def letter(self) -> str:
        return _LETTERS[self]


_COLORS = {
    Feedback.ABSENT: "gray",
    Feedback.MISPLACED: "orange",
    Feedback.ELSEWHERE: "blue",
    Feedback.EXACT: "green",
}
_LETTERS = {
    Feedback.ABSENT: "X",
    Feedback.MISPLACED: "O",
    Feedback.ELSEWHERE: "B",
    Feedback.EXACT: "G",
}

# Accepted spellings for one position, lowercase keys.
_SYMBOLS = {
    "x": Feedback.ABSENT, ".": Feedback.ABSENT, "-": Feedback.ABSENT, "0": Feedback.ABSENT, "⬜": Feedback.ABSENT, "⬛": Feedback.ABSENT,
    "o": Feedback.MISPLACED, "1": Feedback.MISPLACED, "🟨": Feedback.MISPLACED, "🟧": Feedback.MISPLACED,
    "b": Feedback.ELSEWHERE, "2": Feedback.ELSEWHERE, "🟦": Feedback.ELSEWHERE,
    "g": Feedback.EXACT, "3": Feedback.EXACT, "🟩": Feedback.EXACT,
}

Pattern = List[Feedback]
Observation = Tuple[str, Pattern]


def as_pattern(pattern: Sequence[int]) -> Pattern:
    """
    Validate a sequence of category codes and return it as Feedback values.

    Raises
    ------
    TypeError  if `pattern` is not a list or tuple
    ValueError if it is not 5 integers in {0,1,2,3}
    """
    if not isinstance(pattern, (list, tuple)):
        raise TypeError("pattern must be a list or tuple of 5 integers in {0,1,2,3}")
    if len(pattern) != WORD_LEN:
        raise ValueError(f"pattern must have length {WORD_LEN}")
    out: Pattern = []
    for p in pattern:
        if isinstance(p, bool) or not isinstance(p, int) or p not in (0, 1, 2, 3):
            raise ValueError("pattern elements must be integers in {0,1,2,3}")
        out.append(Feedback(p))
    return out


def parse_feedback(s: str) -> Pattern:
    """Parse a 5-position feedback into Feedback values.
    Accepted forms:
      - letters: x/o/b/g  (gray/orange/blue/green), '.' or '-' also mean gray
      - digits:  0/1/2/3
      - squares: ⬜/🟨/🟦/🟩
      - list:   [0, 1, 2, 3, 0]
    Raises ValueError on invalid input.
    """
    s = s.strip().lower()
    # List-like form: [0,1,2,3,0]
    if s.startswith("[") and s.endswith("]"):
        nums = re.findall(r"\d+", s)
        if len(nums) != WORD_LEN:
            raise ValueError("list form must contain exactly five 0/1/2/3 values")
        return as_pattern([int(x) for x in nums])

    # Emoji squares may carry variation selectors
    s = s.replace("\ufe0f", "")
    if len(s) != WORD_LEN:
        raise ValueError("feedback must be length 5 (xobgx / 01230 / [0,1,2,3,0])")
    try:
        return [_SYMBOLS[ch] for ch in s]
    except KeyError as e:
        raise ValueError("feedback must use only x/o/b/g or 0/1/2/3") from e


def format_feedback(pattern: Sequence[int]) -> str:
    """Render a pattern with the X/O/B/G letters."""
    return "".join(p.letter for p in as_pattern(pattern))


# -------------------------
# Share tokens
# -------------------------

def format_share_token(word: str, pattern: Sequence[int]) -> str:
    """Encode one guess as `<WORD><5 digits>`, e.g. ('pisek', [0,0,1,0,1]) -> 'PISEK00101'."""
    if not isinstance(word, str) or len(word) != WORD_LEN:
        raise ValueError(f"word must be a {WORD_LEN}-letter string")
    codes = "".join(str(int(p)) for p in as_pattern(pattern))
    return f"{word.upper()}{codes}"


def parse_share_token(token: str) -> Observation:
    """
    Decode `<WORD><5 digits>` into (normalized word, pattern).
    Raises ValueError on any other shape.
    """
    if not isinstance(token, str) or len(token) != 2 * WORD_LEN:
        raise ValueError(f"invalid share token: {token!r}")
    word, codes = token[:WORD_LEN], token[WORD_LEN:]
    if not codes.isdigit():
        raise ValueError(f"invalid states for word: {word}")
    return normalize_text(word), as_pattern([int(c) for c in codes])


def parse_share_query(query: str, key: str = CONFIG["share_query_key"]) -> List[Observation]:
    """
    Read every `key=<token>` pair from a URL query string.
    Malformed tokens are skipped with a warning; order is preserved.
    """
    query = query.split("?", 1)[1] if "?" in query else query
    out: List[Observation] = []
    for token in parse_qs(query, keep_blank_values=True).get(key, []):
        try:
            out.append(parse_share_token(token))
        except ValueError as e:
            logger.warning("Skipping share token %r: %s", token, e)
    return out


def build_share_query(history: Iterable[Tuple[str, Sequence[int]]], key: str = CONFIG["share_query_key"]) -> str:
    """Inverse of parse_share_query: one repeated `key` parameter per guess."""
    return urlencode([(key, format_share_token(word, patt)) for word, patt in history])
