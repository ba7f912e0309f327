from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

import pandas as pd

from wordle_cz.config import CONFIG
from wordle_cz.normalize import normalize_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateWord:
    """A dictionary word in canonical form with its letter counts precomputed."""

    text: str
    letter_counts: Mapping[str, int] = field(compare=False, hash=False, repr=False)

    @classmethod
    def from_text(cls, text: str) -> "CandidateWord":
        """Normalize `text` and count its letters once."""
        word = normalize_text(text)
        return cls(word, MappingProxyType(dict(Counter(word))))

    def count(self, letter: str) -> int:
        return self.letter_counts.get(letter, 0)

    def __len__(self) -> int:
        return len(self.text)

    def __getitem__(self, position: int) -> str:
        return self.text[position]

    def __str__(self) -> str:
        return self.text


class WordVocab:
    def __init__(self, words: List[str], *, word_len: int = CONFIG["word_length"]) -> None:
        if not isinstance(words, list):
            raise TypeError("`words` must be a list of strings")
        if not words:
            raise ValueError("no words provided")
        if not all(isinstance(w, str) for w in words):
            raise TypeError("all items in `words` must be str")

        entries = [CandidateWord.from_text(w) for w in words]
        for entry in entries:
            if len(entry) != word_len:
                raise ValueError(f"word {entry.text!r} does not have {word_len} letters")

        # Enforce uniqueness after normalization (loaders dedupe before calling us)
        texts = [e.text for e in entries]
        if len(set(texts)) != len(texts):
            raise ValueError("duplicate words detected; input to WordVocab must be deduplicated")

        self.word_len = word_len
        self._entries: List[CandidateWord] = entries
        self._index = {w: i for i, w in enumerate(texts)}

    # ---------- Construction helpers ----------

    @classmethod
    def from_flat(
        cls,
        content: str,
        *,
        word_len: int = CONFIG["word_length"],
        exclude: Optional[Iterable[str]] = None,
        dedupe: bool = True,
    ) -> "WordVocab":
        """
        Build a vocabulary from undelimited fixed-width content ("ahojeautob...").

        Parameters
        ----------
        content : str
            Concatenated words, `word_len` characters each. Surrounding
            whitespace is stripped; a short trailing chunk is dropped.
        word_len : int, default=5
            Width of one entry.
        exclude : iterable of str, optional
            Normalized entries to drop. Defaults to CONFIG["invalid_words"].
        dedupe : bool, default=True
            If True, keep the first occurrence and drop later duplicates.

        Raises
        ------
        TypeError, ValueError
        """
        if not isinstance(content, str):
            raise TypeError("content must be a string")
        content = content.strip()
        chunks = [content[i:i + word_len] for i in range(0, len(content), word_len)]
        return cls._from_raw(chunks, word_len=word_len, exclude=exclude, dedupe=dedupe, source="flat content")

    @classmethod
    def from_csv(
        cls,
        path: str,
        column: str = CONFIG["csv_column"],
        *,
        word_len: int = CONFIG["word_length"],
        exclude: Optional[Iterable[str]] = None,
        dedupe: bool = True,
    ) -> "WordVocab":
        """
        Load words from a CSV and build a WordVocab.

        Parameters
        ----------
        path : str
            Path to CSV file.
        column : str
            Column name containing words.
        word_len : int, default=5
            Required word length after normalization.
        exclude : iterable of str, optional
            Normalized entries to drop. Defaults to CONFIG["invalid_words"].
        dedupe : bool, default=True
            If True, keep the first occurrence and drop later duplicates.

        Raises
        ------
        FileNotFoundError, KeyError, ValueError
        """
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
        if column not in df.columns:
            raise KeyError(f"column '{column}' not found in {path}")
        raw = [val.strip() for val in df[column].tolist()]
        return cls._from_raw(raw, word_len=word_len, exclude=exclude, dedupe=dedupe, source=str(path))

    @classmethod
    def _from_raw(
        cls,
        raw_iter: Iterable[str],
        *,
        word_len: int,
        exclude: Optional[Iterable[str]],
        dedupe: bool,
        source: str,
    ) -> "WordVocab":
        invalid = frozenset(CONFIG["invalid_words"] if exclude is None else (normalize_text(w) for w in exclude))

        clean: List[str] = []
        seen = set()
        dropped = 0
        duplicates = 0

        for val in raw_iter:
            w = normalize_text(val)
            if len(w) != word_len or w in invalid:
                dropped += 1
                continue
            if dedupe:
                if w in seen:
                    duplicates += 1
                    continue
                seen.add(w)
            clean.append(w)

        logger.info(
            "Loaded %d valid %d-letter words from %s (dropped %d, duplicates %d)",
            len(clean), word_len, source, dropped, duplicates,
        )
        if not clean:
            raise ValueError("no valid words after filtering")

        return cls(clean, word_len=word_len)

    # ---------- Basic protocol ----------

    def __len__(self) -> int:
        """Number of words in the vocabulary."""
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def words(self) -> List[str]:
        """Return a copy of the word list (to avoid external mutation)."""
        return [e.text for e in self._entries]

    def entries(self) -> List[CandidateWord]:
        """Return the candidate words in dictionary order."""
        return list(self._entries)

    def contains(self, word: str) -> bool:
        """Return True iff `word` exists in the vocabulary (after normalization)."""
        return normalize_text(word) in self._index

    def index_of(self, word: str) -> int:
        """Return the index for `word`; raise KeyError if unknown."""
        try:
            return self._index[normalize_text(word)]
        except KeyError:
            raise KeyError(f"unknown word: {word}") from None

    def word_at(self, idx: int) -> str:
        """Return the word at position `idx`; raise IndexError if out of bounds."""
        return self.entry_at(idx).text

    def entry_at(self, idx: int) -> CandidateWord:
        if idx < 0 or idx >= len(self._entries):
            raise IndexError(f"index out of range: {idx}")
        return self._entries[idx]
