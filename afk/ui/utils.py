"""Shared UI utility functions."""

import datetime

from afk.durations import duration_in_words

DEFAULT_TIME_FORMAT = '%Y-%m-%d %I:%M:%S %p'
NONE_TEXT = '<none>'


def format_status(status, time_format=DEFAULT_TIME_FORMAT, now=None):
    """Return a readable, multi-line description of a status.

    Missing emoji, text or expiration are shown as "<none>". The expiration is
    shown in local time, followed by how long from now that is.

    If now is given, it is used as the current UTC time.
    """
    if status.expiration is None:
        expires = NONE_TEXT
    else:
        if now is None:
            now = datetime.datetime.now(tz=datetime.timezone.utc)
        expires = '{} ({} from now)'.format(
            status.expiration.astimezone(tz=None).strftime(time_format),
            duration_in_words(status.expiration - now)
        )
    return 'Emoji: {}\nText: {}\nExpires: {}'.format(
        status.emoji or NONE_TEXT, status.text or NONE_TEXT, expires
    )


def format_heading(title):
    """Return a section heading such as ``=== New Status ===``."""
    return '=== {} ==='.format(title)
