"""Slack status and conversion to and from API profile fields."""

import collections
import datetime
import logging

logger = logging.getLogger(__name__)
# Slack refuses status text longer than this:
MAX_TEXT_LENGTH = 100


Status = collections.namedtuple('Status', ['emoji', 'text', 'expiration'])
"""A Slack status.

Args:
    emoji (str): Emoji code such as ``:salad:``, or empty string for none.
    text (str): Status text, or empty string for none.
    expiration (datetime.datetime): UTC time when the status is cleared, or
        ``None`` if it never expires.
"""


def new_status(emoji, text, expiration=None):
    """Return a Status, truncating text that Slack would refuse."""
    if len(text) > MAX_TEXT_LENGTH:
        logger.warning('Truncating status text to %d characters',
                       MAX_TEXT_LENGTH)
        text = text[:MAX_TEXT_LENGTH]
    return Status(emoji, text, expiration)


def from_timestamp(epoch_seconds):
    """Convert a Slack expiration timestamp to a UTC datetime.

    Slack uses 0 to mean the status never expires, which becomes ``None``.
    """
    if not epoch_seconds:
        return None
    return datetime.datetime.fromtimestamp(epoch_seconds,
                                           datetime.timezone.utc)


def to_timestamp(expiration):
    """Convert a UTC datetime (or ``None``) to a Slack expiration timestamp."""
    if expiration is None:
        return 0
    return int(expiration.timestamp())


def from_profile(profile):
    """Build a Status from the ``profile`` object of an API response.

    Raises:
        ValueError: If the profile fields have unexpected types.
    """
    if not isinstance(profile, dict):
        raise ValueError('expected profile object, got {!r}'.format(profile))
    try:
        expiration = from_timestamp(int(profile.get('status_expiration') or 0))
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise ValueError('invalid status_expiration: {}'.format(e))
    return Status(
        emoji=profile.get('status_emoji') or '',
        text=profile.get('status_text') or '',
        expiration=expiration,
    )


def to_profile(status):
    """Return the ``profile`` object used to set a Status."""
    return {
        'status_text': status.text,
        'status_emoji': status.emoji,
        'status_expiration': to_timestamp(status.expiration),
    }
