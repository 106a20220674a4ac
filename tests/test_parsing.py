from datetime import datetime

import pytest

from trailcam_timefix.parsing import find_timestamp_tokens, parse_timestamp


def test_finds_pair_among_garbage():
    tokens = find_timestamp_tokens("Garbage 2024/11/15 noise 08:32:10 end")
    assert tokens.date == "2024/11/15"
    assert tokens.time == "08:32:10"
    assert tokens.complete


def test_tesseract_trailing_newline_is_ignored():
    tokens = find_timestamp_tokens("12°C 2024/03/12 06:00:00\n\x0c")
    assert tokens == ("2024/03/12", "06:00:00")


def test_last_match_wins():
    tokens = find_timestamp_tokens("2023/01/01 01:01:01 2024/02/02 02:02:02")
    assert tokens == ("2024/02/02", "02:02:02")


@pytest.mark.parametrize(
    "text",
    [
        "",
        "no timestamp here",
        "2024/11/15 only a date",
        "only a time 08:32:10",
        "24/11/15 08:32",
    ],
)
def test_incomplete_text(text):
    assert not find_timestamp_tokens(text).complete


def test_missing_fields_are_none():
    tokens = find_timestamp_tokens("only a time 08:32:10")
    assert tokens.date is None
    assert tokens.time == "08:32:10"


def test_parse_timestamp():
    assert parse_timestamp("2024/11/15", "08:32:10") == datetime(2024, 11, 15, 8, 32, 10)


@pytest.mark.parametrize(
    "date_token, time_token",
    [
        ("2024/13/01", "08:32:10"),
        ("2023/02/29", "08:32:10"),
        ("2024/11/15", "25:00:00"),
        ("2024/11/15", "08:61:00"),
    ],
)
def test_parse_timestamp_rejects_impossible_values(date_token, time_token):
    with pytest.raises(ValueError):
        parse_timestamp(date_token, time_token)


def test_last_match_wins_in_newline_separated_output():
    tokens = find_timestamp_tokens("2023/01/01\n\n01:01:01\n\n2024/02/02\n\n02:02:02\n\x0c")
    assert tokens == ("2024/02/02", "02:02:02")
