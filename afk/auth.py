"""Slack API token lookup.

The token is read from the ``SLACK_API_TOKEN`` environment variable, or
failing that, from a ``token:`` line in ``~/.afk-slack.yml``.

This module should avoid logging the token.
"""

import logging
import os

from afk import exceptions

logger = logging.getLogger(__name__)
TOKEN_ENV_VAR = 'SLACK_API_TOKEN'
TOKEN_KEY = 'token'
DEFAULT_TOKEN_FILENAME = '.afk-slack.yml'


def default_token_path():
    """Return the default path of the token file in the home directory."""
    return os.path.join(os.path.expanduser('~'), DEFAULT_TOKEN_FILENAME)


class TokenFile:
    """File containing ``key: value`` lines, one of which holds the token.

    Args:
        filename (str): Path to the file.
    """

    def __init__(self, filename):
        self._filename = filename

    def get(self):
        """Get the token from the file.

        Returns:
            Token string, or ``None`` if the file or key is missing.
        """
        logger.info('Loading token from %s', repr(self._filename))
        try:
            with open(self._filename) as f:
                for line in f:
                    key, sep, value = line.partition(':')
                    if sep and key.strip() == TOKEN_KEY:
                        return value.strip() or None
        except FileNotFoundError:
            logger.info('Token file does not exist')
            return None
        except OSError as e:
            raise exceptions.ConfigError(
                'Failed to read {}: {}'.format(self._filename, e)
            )
        logger.info('Token file has no %r key', TOKEN_KEY)
        return None


def get_token(environ=None, token_path=None):
    """Find the Slack API token.

    Args:
        environ (dict): (optional) Environment variables. Defaults to
            ``os.environ``.
        token_path (str): (optional) Path of the token file. Defaults to
            ``~/.afk-slack.yml``.

    Returns:
        str: Slack API token.

    Raises:
        ConfigError: If no token could be found.
    """
    if environ is None:
        environ = os.environ
    if token_path is None:
        token_path = default_token_path()

    token = environ.get(TOKEN_ENV_VAR, '').strip()
    if token:
        logger.info('Using token from $%s', TOKEN_ENV_VAR)
        return token
    token = TokenFile(token_path).get()
    if token is None:
        raise exceptions.ConfigError(
            'Could not find a Slack API token. Checked ENV var: ${} and '
            'file: {}'.format(TOKEN_ENV_VAR, token_path)
        )
    return token
