import logging

import pytest

from wordle_cz.feedback import (
    Feedback,
    as_pattern,
    build_share_query,
    format_feedback,
    format_share_token,
    parse_feedback,
    parse_share_query,
    parse_share_token,
)


@pytest.mark.parametrize("raw", ["xxobg", "XXOBG", "..obg", "00123", "[0, 0, 1, 2, 3]", "⬜⬜🟨🟦🟩", " xxobg \n"])
def test_parse_feedback_forms(raw):
    assert parse_feedback(raw) == [0, 0, 1, 2, 3]


def test_parse_feedback_returns_categories():
    assert parse_feedback("xobg0") == [Feedback.ABSENT, Feedback.MISPLACED, Feedback.ELSEWHERE, Feedback.EXACT, Feedback.ABSENT]


@pytest.mark.parametrize("raw", ["xxob", "xxobgx", "xxobz", "[0, 1, 2, 3]", "[0, 1, 2, 3, 4]", ""])
def test_parse_feedback_rejects(raw):
    with pytest.raises(ValueError):
        parse_feedback(raw)


def test_category_codes_and_colors():
    assert [int(f) for f in Feedback] == [0, 1, 2, 3]
    assert [f.color for f in Feedback] == ["gray", "orange", "blue", "green"]
    assert format_feedback([0, 1, 2, 3, 0]) == "XOBGX"


def test_as_pattern_validation():
    with pytest.raises(TypeError):
        as_pattern("01230")  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        as_pattern([0, 1, 2])
    with pytest.raises(ValueError):
        as_pattern([0, 1, 2, 3, True])


def test_share_token():
    assert format_share_token("pisek", [0, 0, 1, 0, 1]) == "PISEK00101"
    assert parse_share_token("PISEK00101") == ("pisek", [0, 0, 1, 0, 1])
    assert parse_share_token("PÍSEK00101")[0] == "pisek"


@pytest.mark.parametrize("token", ["PISEK0010", "PISEK0010x", "PISEK00104", "", "PISEKXXOXO"])
def test_share_token_rejects(token):
    with pytest.raises(ValueError):
        parse_share_token(token)


def test_parse_share_query_skips_bad_tokens(caplog):
    url = "https://wordle.example/?slovo=PISEK00101&slovo=bad&x=1&slovo=SKARA31013"
    with caplog.at_level(logging.WARNING, logger="wordle_cz.feedback"):
        parsed = parse_share_query(url)
    assert parsed == [("pisek", [0, 0, 1, 0, 1]), ("skara", [3, 1, 0, 1, 3])]
    assert "bad" in caplog.text


def test_build_share_query():
    history = [("pisek", [0, 0, 1, 0, 1]), ("skara", [3, 1, 0, 1, 3])]
    query = build_share_query(history)
    assert query == "slovo=PISEK00101&slovo=SKARA31013"
    assert parse_share_query(query) == history
    assert parse_share_query("") == []
