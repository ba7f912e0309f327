"""
solver/solver_cli.py

Interactive Czech Wordle helper (human-in-the-loop):
- YOU type the word you guessed and the colours the game showed.
- Feedback accepted as: 'xxobg', '00123', '⬜⬜🟨🟦🟩' or a list '[0, 0, 1, 2, 3]'.
  x/0 gray, o/1 orange, b/2 blue (right place, occurs again), g/3 green.
- The helper prunes the dictionary and shows the best-scoring candidates.

Run:
  python -m solver.solver_cli --words words.txt
  python -m solver.solver_cli --share "slovo=PISEK00101&slovo=SKARA31013"

Commands at the guess prompt:
  quit / q / exit  -> exit
  undo             -> drop the last guess
  share            -> print the query string for the current guesses
  why WORD         -> explain why WORD is no longer a candidate
"""
from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

from wordle_cz.config import CONFIG
from wordle_cz.feedback import Feedback, Pattern, format_feedback, parse_feedback, parse_share_query
from wordle_cz.logging_config import configure_logging
from wordle_cz.solver import WordleSolver
from wordle_cz.validation import InvalidGuessError, find_exact_conflicts, validate_guess_word


QUIT = {"q", "quit", "exit"}
SHOW_ALL_BELOW = 10


def non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError("must be 0 or more")
    return n


def green_conflict(solver: WordleSolver, guess: str, patt: Pattern) -> Optional[Tuple[int, str]]:
    """First position this guess marks green with a letter other than the current green one."""
    exact = solver.constraints.exact
    for pos, p in enumerate(patt):
        if p == Feedback.EXACT and exact.get(pos, guess[pos]) != guess[pos]:
            return pos, exact[pos]
    return None


def print_status(solver: WordleSolver, limit: int) -> int:
    """Print remaining count, the full list when short, and the top suggestions."""
    rows = solver.rank(solver.constraints)
    print(f"Remaining candidates: {len(rows)}")
    if not rows:
        print("No candidates remain. Check your feedback inputs (or type 'undo').")
        return 0
    if len(rows) <= SHOW_ALL_BELOW:
        print("Candidates:", ", ".join(r["word"] for r in rows))
    print("Top suggestions:")
    for i, r in enumerate(rows[:limit], 1):
        print(f"  {i}. {r['word']}  (score={r['score']})")
    return len(rows)


def ask_feedback(guess: str) -> Optional[Pattern]:
    """Prompt until the feedback parses; None means the user quit."""
    while True:
        fb = input(f"Feedback for {guess.upper()} (x/o/b/g, 0-3 or [..]): ").strip()
        if fb.lower() in QUIT:
            return None
        try:
            return parse_feedback(fb)
        except ValueError as e:
            print("Invalid feedback:", e)


def handle_command(solver: WordleSolver, line: str) -> bool:
    """Run a non-guess command. Returns True if `line` was one."""
    cmd, _, arg = line.partition(" ")
    if cmd == "undo":
        dropped = solver.undo()
        print(f"Removed {dropped[0].upper()} {format_feedback(dropped[1])}" if dropped else "Nothing to undo.")
        return True
    if cmd == "share":
        print(solver.share_query() or "(no guesses yet)")
        return True
    if cmd == "why" and arg.strip():
        reason = solver.explain(arg.strip())
        print(reason or f"{arg.strip()} is still a candidate.")
        return True
    return False


def run(solver: WordleSolver, limit: int) -> None:
    while True:
        line = input("Enter your guess word (or undo/share/why WORD/quit): ").strip().lower()
        if line in QUIT:
            print("bye!")
            return
        if handle_command(solver, line):
            print_status(solver, limit)
            continue
        try:
            guess = validate_guess_word(line)
        except InvalidGuessError as e:
            print(e)
            continue
        if not solver.word_exists(guess):
            print(f"Note: {guess} is not in the dictionary, using it anyway.")

        patt = ask_feedback(guess)
        if patt is None:
            print("bye!")
            return

        conflict = green_conflict(solver, guess, patt)
        if conflict is not None:
            pos, existing = conflict
            print(
                f"Conflict: position {pos + 1} is already green as "
                f"'{existing}', not '{guess[pos]}'. Guess not added."
            )
            continue

        solver.add_guess(guess, patt)
        if all(p == 3 for p in patt):
            print("Solved!")
            return
        print_status(solver, limit)


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Interactive Czech Wordle helper (manual feedback)")
    ap.add_argument("--words", default=CONFIG["words_path"], help="Path to the word list (flat .txt or .csv)")
    ap.add_argument("--limit", type=non_negative_int, default=CONFIG["default_limit"], help="Number of suggestions to show")
    ap.add_argument("--share", default=None, help="Query string or URL with slovo=WORD01230 guesses to restore")
    ap.add_argument("--log-level", default=None, help="Logging level (default: WORDLE_CZ_LOG_LEVEL or INFO)")
    args = ap.parse_args(argv)

    configure_logging(args.log_level)
    solver = WordleSolver.from_path(args.words)
    print(f"Loaded {len(solver.vocab)} words.")

    if args.share:
        for word, patt in parse_share_query(args.share):
            solver.add_guess(word, patt)
            print(f"Restored {word.upper()} {format_feedback(patt)}")
        for c in find_exact_conflicts(solver.history):
            print(
                f"Note: restored guesses disagree at position {c.position + 1} "
                f"('{c.existing_letter}' vs '{c.new_letter}'), the later one wins."
            )

    print("\nCzech Wordle helper - after EACH guess you make in the game, enter the colours here.")
    print("Accepted: x/o/b/g, 0/1/2/3, coloured squares, or [0,1,2,3,0]. Type 'quit' to exit.\n")
    print_status(solver, args.limit)
    run(solver, args.limit)


if __name__ == "__main__":
    main()
