"""Parsing and formatting of time spans.

Durations are accepted in the same syntax as Go's ``time.ParseDuration``
(eg. ``1h30m``), since that is what the original afk command line accepted.
"""

import datetime
import re

# Unit suffixes and their length in seconds:
UNITS = {
    'ns': 1e-9,
    'us': 1e-6,
    'µs': 1e-6,
    'ms': 1e-3,
    's': 1,
    'm': 60,
    'h': 60 * 60,
}
DURATION_RE = re.compile(r'([0-9]*(?:\.[0-9]*)?)(ns|us|µs|ms|s|m|h)')
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * 60
SECONDS_PER_DAY = 24 * 60 * 60
# Longest duration Go's time.Duration can hold (2**63 - 1 nanoseconds):
MAX_DURATION_SECONDS = (2 ** 63 - 1) / 1e9


def parse_duration(duration_str):
    """Parse a duration string such as ``90m`` or ``1h30m``.

    A duration string is an optionally signed sequence of decimal numbers,
    each with an optional fraction and a unit suffix. Valid units are ``ns``,
    ``us`` (or ``µs``), ``ms``, ``s``, ``m`` and ``h``. The string ``0`` is
    also accepted. Durations longer than about 2562047 hours are rejected.

    Args:
        duration_str (str): Duration to parse.

    Returns:
        datetime.timedelta: The parsed duration.

    Raises:
        ValueError: If the string is not a valid duration.
    """
    text = duration_str.strip()
    sign = 1
    if text and text[0] in '+-':
        if text[0] == '-':
            sign = -1
        text = text[1:]
    if text == '0':
        return datetime.timedelta(0)

    seconds = 0.0
    pos = 0
    for match in DURATION_RE.finditer(text):
        number, unit = match.groups()
        if match.start() != pos or number in ('', '.'):
            break
        seconds += float(number) * UNITS[unit]
        pos = match.end()
    if pos == 0 or pos != len(text) or seconds > MAX_DURATION_SECONDS:
        raise ValueError('invalid duration {!r}'.format(duration_str))
    try:
        return datetime.timedelta(seconds=sign * seconds)
    except OverflowError:
        raise ValueError('invalid duration {!r}'.format(duration_str))


def duration_in_days(duration):
    """Return the duration as a fractional number of days."""
    return duration.total_seconds() / SECONDS_PER_DAY


def duration_in_words(duration):
    """Return a readable phrase such as "2 hours" for a duration.

    The duration is expressed in the coarsest unit that fits (minutes below
    one hour, hours below one day, days otherwise) and truncated rather than
    rounded, so 59 minutes and 59 seconds is "59 minutes".

    Negative durations are treated as zero.
    """
    seconds = max(duration.total_seconds(), 0)
    if seconds < SECONDS_PER_HOUR:
        return _pluralize(int(seconds // SECONDS_PER_MINUTE), 'minute')
    elif seconds < SECONDS_PER_DAY:
        return _pluralize(int(seconds // SECONDS_PER_HOUR), 'hour')
    else:
        return _pluralize(int(duration_in_days(duration)), 'day')


def _pluralize(count, unit):
    if count == 1:
        return '1 {}'.format(unit)
    return '{} {}s'.format(count, unit)
