"""
normalize.py

Canonical comparison form for Czech words: lowercase, diacritics stripped.
"""

from typing import Dict

# Every accented Czech letter (both cases) mapped to its base Latin letter.
DIACRITIC_MAP: Dict[str, str] = {
    "á": "a", "Á": "a", "č": "c", "Č": "c", "ď": "d", "Ď": "d",
    "é": "e", "É": "e", "ě": "e", "Ě": "e", "í": "i", "Í": "i",
    "ň": "n", "Ň": "n", "ó": "o", "Ó": "o", "ř": "r", "Ř": "r",
    "š": "s", "Š": "s", "ť": "t", "Ť": "t", "ú": "u", "Ú": "u",
    "ů": "u", "Ů": "u", "ý": "y", "Ý": "y", "ž": "z", "Ž": "z",
}

# str.translate table; lookups happen after lowercasing, but the uppercase
# keys stay in so the table can be used on raw text too.
_TRANSLATION = str.maketrans(DIACRITIC_MAP)


def normalize_text(text: str) -> str:
    """
    Lowercase `text` and replace accented Czech letters with their base letter.

    The result always has the same length as the input. Characters not in
    DIACRITIC_MAP pass through unchanged after lowercasing, so the function
    is total over str and idempotent.
    """
    if not isinstance(text, str):
        raise TypeError("text must be a string")
    # Per-character lower() keeps the length stable ('İ'.lower() is two chars).
    return "".join(_lower_char(ch) for ch in text).translate(_TRANSLATION)


def _lower_char(ch: str) -> str:
    low = ch.lower()
    return low if len(low) == 1 else ch


def normalize_letter(letter: str) -> str:
    """Normalize a single letter; raise ValueError if it is not one character."""
    if not isinstance(letter, str) or len(letter) != 1:
        raise ValueError(f"expected a single letter, got {letter!r}")
    return normalize_text(letter)
