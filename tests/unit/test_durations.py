"""Unit tests for duration and label flag parsing"""
from datetime import timedelta

import pytest

from alert_trigger.utils.durations import MAX_DURATION, format_duration, parse_duration, parse_labels


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1m", timedelta(minutes=1)),
        ("90s", timedelta(seconds=90)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("1.5h", timedelta(minutes=90)),
        (".5s", timedelta(milliseconds=500)),
        ("250ms", timedelta(milliseconds=250)),
        ("10us", timedelta(microseconds=10)),
        ("10µs", timedelta(microseconds=10)),
        ("2000ns", timedelta(microseconds=2)),
        ("0", timedelta(0)),
        ("-30s", timedelta(seconds=-30)),
        ("+2m", timedelta(minutes=2)),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "1", "m", "1d", "1 m", "abc", "1m30", "--1s"])
def test_parse_duration_rejects_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)


@pytest.mark.parametrize("text", ["99999999999999h", "70000000h", "2562048h", "9223372036855ms"])
def test_parse_duration_rejects_out_of_range(text):
    with pytest.raises(ValueError, match="out of range"):
        parse_duration(text)


def test_parse_duration_accepts_largest_hour_count():
    assert parse_duration("2562047h") == timedelta(hours=2562047)
    assert parse_duration("2562047h") <= MAX_DURATION


@pytest.mark.parametrize(
    "value, expected",
    [
        (timedelta(minutes=1), "1m"),
        (timedelta(seconds=90), "1m30s"),
        (timedelta(hours=2, seconds=5), "2h0m5s"),
        (timedelta(seconds=45), "45s"),
        (timedelta(seconds=-30), "-30s"),
    ],
)
def test_format_duration(value, expected):
    assert format_duration(value) == expected


def test_parse_single_label():
    assert parse_labels("severity=critical") == {"severity": "critical"}


def test_parse_comma_separated_labels():
    assert parse_labels("alertname=Test,severity=warning") == {
        "alertname": "Test",
        "severity": "warning",
    }


def test_label_value_may_contain_equals():
    assert parse_labels("expr=up==0") == {"expr": "up==0"}


def test_label_value_may_be_empty():
    assert parse_labels("team=") == {"team": ""}


def test_later_label_wins():
    assert parse_labels("severity=info,severity=critical") == {"severity": "critical"}


@pytest.mark.parametrize("text", ["severity", "=critical", "a=b,,c=d", ""])
def test_parse_labels_rejects_invalid(text):
    with pytest.raises(ValueError):
        parse_labels(text)
