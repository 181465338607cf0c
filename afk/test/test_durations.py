"""Tests for parsing and formatting durations."""

import datetime

import pytest

from afk import durations


@pytest.mark.parametrize('input_,expected', [
    # minutes
    ('0s', '0 minutes'),
    ('59s', '0 minutes'),
    ('1m', '1 minute'),
    ('2m', '2 minutes'),
    ('59m59s', '59 minutes'),
    # hours
    ('60m', '1 hour'),
    ('1h0m1s', '1 hour'),
    ('2h', '2 hours'),
    ('23h59m59s', '23 hours'),
    # days
    ('24h', '1 day'),
    ('47h59m', '1 day'),
    ('48h', '2 days'),
    ('72h', '3 days'),
])
def test_duration_in_words(input_, expected):
    duration = durations.parse_duration(input_)
    assert durations.duration_in_words(duration) == expected


def test_duration_in_words_negative():
    assert durations.duration_in_words(
        datetime.timedelta(minutes=-5)
    ) == '0 minutes'


@pytest.mark.parametrize('input_,expected', [
    ('24h', 1),
    ('25h', 1.0416666666666667),
    ('48h', 2),
])
def test_duration_in_days(input_, expected):
    duration = durations.parse_duration(input_)
    assert durations.duration_in_days(duration) == expected


@pytest.mark.parametrize('input_,expected', [
    ('0', datetime.timedelta(0)),
    ('1h', datetime.timedelta(hours=1)),
    ('90m', datetime.timedelta(minutes=90)),
    ('1h30m', datetime.timedelta(hours=1, minutes=30)),
    ('1.5h', datetime.timedelta(hours=1, minutes=30)),
    ('-5m', datetime.timedelta(minutes=-5)),
    ('+10s', datetime.timedelta(seconds=10)),
    ('500ms', datetime.timedelta(milliseconds=500)),
    (' 2h ', datetime.timedelta(hours=2)),
    ('2562047h', datetime.timedelta(hours=2562047)),
])
def test_parse_duration(input_, expected):
    assert durations.parse_duration(input_) == expected


@pytest.mark.parametrize('input_', [
    '', '-', '1', '1h30', 'h', '.h', '1d', 'an hour', '1h 30m',
    # longer than Go's time.Duration can hold
    '2562048h', '80000000h', '-80000000h', '99999999999h', '9' * 400 + 's',
])
def test_parse_duration_invalid(input_):
    with pytest.raises(ValueError):
        durations.parse_duration(input_)
