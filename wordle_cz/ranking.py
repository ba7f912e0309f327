"""
ranking.py

Suggestion ranking: filter the dictionary, then prefer words made of common letters.

Score of a word = sum of the dictionary-wide frequency of each *distinct*
letter it contains. Frequencies count raw occurrences, so a double letter in
a dictionary word adds two to that letter's frequency, while a double letter
in a candidate is scored once.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional

import numpy as np

from wordle_cz.config import CONFIG
from wordle_cz.constraints import ConstraintsLike, WordLike, as_candidate, as_constraints, matches
from wordle_cz.vocab import CandidateWord


def letter_frequencies(words: Iterable[WordLike]) -> Dict[str, int]:
    """Occurrences of every letter summed over the whole word list."""
    freqs: Counter = Counter()
    for w in words:
        cand = as_candidate(w)
        freqs.update(cand.letter_counts)
    return dict(freqs)


def score_word(word: WordLike, freqs: Mapping[str, int]) -> int:
    cand = as_candidate(word)
    return sum(freqs.get(letter, 0) for letter in cand.letter_counts)


def rank_candidates(
    words: Iterable[WordLike],
    constraints: ConstraintsLike = None,
    *,
    freqs: Optional[Mapping[str, int]] = None,
    max_scan: Optional[int] = None,
) -> List[Dict[str, object]]:
    """
    Score every word consistent with `constraints` and sort by score, highest first.

    Parameters
    ----------
    words : iterable of str or CandidateWord
        The dictionary, in its canonical order. Ties keep this order.
    constraints : Constraints, mapping or None
        Accumulated feedback; None means no constraints.
    freqs : mapping, optional
        Precomputed letter_frequencies(words). Computed here if omitted.
    max_scan : int, optional
        Stop scanning once this many matches were found. None scans everything.

    Returns
    -------
    list[dict]
        Rows {"word": str, "score": int}.
    """
    entries: List[CandidateWord] = [as_candidate(w) for w in words]
    if freqs is None:
        freqs = letter_frequencies(entries)
    c = as_constraints(constraints)

    found: List[CandidateWord] = []
    for cand in entries:
        if matches(cand, c):
            found.append(cand)
            if max_scan is not None and len(found) >= max_scan:
                break
    if not found:
        return []

    scores = np.fromiter((score_word(cand, freqs) for cand in found), dtype=np.int64, count=len(found))
    # Stable sort on the negated scores keeps dictionary order for ties
    order = np.argsort(-scores, kind="stable")
    return [{"word": found[i].text, "score": int(scores[i])} for i in order]


def get_suggestions(
    words: Iterable[WordLike],
    constraints: ConstraintsLike = None,
    limit: int = CONFIG["default_limit"],
    *,
    freqs: Optional[Mapping[str, int]] = None,
    max_scan: Optional[int] = None,
    early_exit: bool = False,
) -> List[str]:
    """
    Return up to `limit` matching words, best score first.

    A `limit` above the number of matches returns all of them. Passing
    `max_scan` trades completeness for speed;
    `early_exit` sets it to `limit * CONFIG["scan_multiple"]`. The default
    scans the whole list.
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise TypeError("limit must be an integer")
    if limit < 0:
        raise ValueError("limit must be non-negative")
    if early_exit and max_scan is None:
        max_scan = limit * CONFIG["scan_multiple"]
    if max_scan is not None and max_scan < limit:
        raise ValueError("max_scan must be at least limit")
    if limit == 0:
        return []
    rows = rank_candidates(words, constraints, freqs=freqs, max_scan=max_scan)
    return [r["word"] for r in rows[:limit]]
