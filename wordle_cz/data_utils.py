from pathlib import Path

from wordle_cz.config import CONFIG
from wordle_cz.vocab import WordVocab


def load_word_vocab(path: str = CONFIG["words_path"]) -> WordVocab:
    """
    Load the dictionary once at start-up.
    A .csv file goes through pandas (column 'word'); anything else is read
    as the flat fixed-width format the puzzle site publishes.
    """
    p = Path(path)
    if p.suffix.lower() == ".csv":
        return WordVocab.from_csv(str(p))
    content = p.read_text(encoding="utf-8")
    return WordVocab.from_flat(content)
