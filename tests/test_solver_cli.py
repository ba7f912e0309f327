import pytest

from solver import solver_cli


@pytest.fixture
def words_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("srnkapisekskaraslovasportstarasarka", encoding="utf-8")
    return str(path)


def _feed(monkeypatch, lines):
    it = iter(lines)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(it))


def test_two_guesses_leave_one_candidate(monkeypatch, capsys, words_file):
    _feed(monkeypatch, ["pisek", "xxoxo", "skara", "goxog", "quit"])
    solver_cli.main(["--words", words_file, "--limit", "3"])
    out = capsys.readouterr().out
    assert "Loaded 7 words." in out
    assert "Remaining candidates: 3" in out
    assert "Remaining candidates: 1" in out
    assert "1. srnka" in out
    assert out.rstrip().endswith("bye!")


def test_invalid_feedback_reprompts(monkeypatch, capsys, words_file):
    _feed(monkeypatch, ["pisek", "xxoxz", "xxoxo", "q"])
    solver_cli.main(["--words", words_file])
    out = capsys.readouterr().out
    assert "Invalid feedback:" in out
    assert "Remaining candidates: 3" in out


def test_conflicting_green_is_refused(monkeypatch, capsys, words_file):
    _feed(monkeypatch, ["skara", "gxxxx", "pisek", "gxxxx", "share", "quit"])
    solver_cli.main(["--words", words_file])
    out = capsys.readouterr().out
    assert "Conflict: position 1 is already green as 's', not 'p'" in out
    assert "slovo=SKARA30000" in out
    assert "PISEK3" not in out


def test_restored_conflict_does_not_block_new_guesses(monkeypatch, capsys, words_file):
    _feed(monkeypatch, ["srnka", "xxxxx", "pisek", "gxxxx", "skara", "gxxxx", "share", "quit"])
    solver_cli.main(["--words", words_file, "--share", "slovo=SKARA30000&slovo=PISEK30000"])
    out = capsys.readouterr().out
    assert "restored guesses disagree at position 1 ('s' vs 'p')" in out
    assert "slovo=SRNKA00000&slovo=PISEK30000" in out
    # the green letter in force is the later 'p', so a green 's' is refused
    assert "Conflict: position 1 is already green as 'p', not 's'" in out
    assert out.count("Conflict:") == 1


def test_negative_limit_rejected(capsys, words_file):
    with pytest.raises(SystemExit):
        solver_cli.main(["--words", words_file, "--limit", "-1"])
    assert "must be 0 or more" in capsys.readouterr().err


def test_share_restores_guesses_and_commands(monkeypatch, capsys, words_file):
    _feed(monkeypatch, ["why sarka", "undo", "exit"])
    solver_cli.main(["--words", words_file, "--share", "?slovo=PISEK00101&slovo=SKARA31013"])
    out = capsys.readouterr().out
    assert "Restored SKARA GOXOG" in out
    assert "green count: 'a' occurs 2 times, expected 1" in out
    assert "Removed SKARA GOXOG" in out
    assert "Remaining candidates: 3" in out


def test_solved(monkeypatch, capsys, words_file):
    _feed(monkeypatch, ["srnka", "ggggg"])
    solver_cli.main(["--words", words_file])
    assert "Solved!" in capsys.readouterr().out


def test_bad_guess_word(monkeypatch, capsys, words_file):
    _feed(monkeypatch, ["ab", "quit"])
    solver_cli.main(["--words", words_file])
    assert "exactly 5 letters" in capsys.readouterr().out
