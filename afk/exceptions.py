"""Exceptions used by afk."""


class AfkError(Exception):
    """An ambiguous error occurred."""


class ConfigError(AfkError):
    """No usable configuration (such as an API token) was found."""


class RemoteError(AfkError):
    """A request to the Slack API failed."""


class NetworkError(RemoteError):
    """A network error occurred."""


class ApiError(RemoteError):
    """The Slack API rejected a request.

    Args:
        error (str): Error code returned by the API, eg. ``invalid_auth``.
    """

    def __init__(self, error):
        super().__init__('Slack API error: {}'.format(error))
        self.error = error


class UserInputError(AfkError):
    """Interactive input was not recognized."""
