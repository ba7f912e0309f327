"""
config.py

Central settings for the helper. CLI flags override these; the two
environment variables below override the defaults.
"""

import os

CONFIG = {
    # Dictionary
    "word_length": 5,
    "words_path": os.environ.get("WORDLE_CZ_WORDS", "words.txt"),
    "csv_column": "word",
    # Known bad entries in the published word list
    "invalid_words": frozenset({"wnd22"}),

    # Suggestions
    "default_limit": 10,
    # get_suggestions(early_exit=True) stops after limit * scan_multiple matches
    "scan_multiple": 3,

    # Share links
    "share_query_key": "slovo",

    # Logging
    "log_level": os.environ.get("WORDLE_CZ_LOG_LEVEL"),
}
