# Import the objects here that form the public API of afk so they may be
# conveniently imported.

# Keep version in a separate file so setup.py can import it separately.
from .version import __version__
from .client import Client
from .auth import get_token, TokenFile
from .status import Status
from .session import Session, SessionConfig, State
from .producers import Outcome, CountdownTimer, TerminalInputListener
from .durations import duration_in_words, parse_duration
from .exceptions import (
    AfkError, ConfigError, RemoteError, NetworkError, ApiError, UserInputError
)
