"""Session that sets a temporary status and later restores the original."""

import asyncio
import collections
import datetime
import enum
import logging
import math
import time

from afk import exceptions, producers, status
from afk.producers import Outcome

logger = logging.getLogger(__name__)


SessionConfig = collections.namedtuple(
    'SessionConfig', ['emoji', 'text', 'duration', 'dnd']
)
"""Settings for a :class:`Session`.

Args:
    emoji (str): Emoji to display while away.
    text (str): Status text to display while away.
    duration (datetime.timedelta): How long to be away for.
    dnd (bool): Whether to turn on Do Not Disturb while away.
"""


class State(enum.Enum):
    """Step of a :class:`Session`."""

    CREATED = 'created'
    FETCHING = 'fetching'
    APPLYING = 'applying'
    WAITING = 'waiting'
    RESOLVING = 'resolving'
    TERMINAL = 'terminal'


def snooze_minutes(duration):
    """Return the whole number of minutes to snooze for a duration.

    Slack snoozes in whole minutes, so round up to cover the duration, and
    always snooze for at least one minute.
    """
    return max(1, math.ceil(duration.total_seconds() / 60))


class Session:
    """Temporarily replaces the user's status.

    The session fetches the current status, applies the new one (and
    optionally Do Not Disturb), then waits for either the deadline or terminal
    input, whichever comes first. If the outcome is to resume, the original
    status is applied again and Do Not Disturb is turned off.

    Each step must be called once, in order: :func:`start`, :func:`wait`,
    :func:`resolve`. :func:`run` does all three.

    Args:
        client (Client): Client used to make API requests.
        config (SessionConfig): Settings for the session.
        input_listener: (optional) Producer of the user's decision. Defaults
            to a :class:`.TerminalInputListener` reading standard input.
        clock: (optional) Function returning the current time in seconds since
            the epoch. Defaults to ``time.time``.
        poll_interval (float): (optional) Maximum seconds between checks of
            the clock while waiting.
    """

    def __init__(self, client, config, input_listener=None, clock=time.time,
                 poll_interval=producers.POLL_INTERVAL):
        self._client = client
        self._config = config
        if input_listener is None:
            input_listener = producers.TerminalInputListener()
        self._input_listener = input_listener
        self._clock = clock
        self._poll_interval = poll_interval

        self.state = State.CREATED
        # Status before the session started (populated by start):
        self.original_status = None
        # Status applied by the session (populated by start):
        self.new_status = None
        self.snooze_enabled = False
        # UTC datetime when the new status expires (populated by start):
        self.deadline = None
        self.dnd_minutes = snooze_minutes(config.duration)

    async def run(self):
        """Run the whole session.

        Returns:
            :class:`.Outcome` that ended the session.

        Raises:
            RemoteError: If an API request fails.
            UserInputError: If the terminal input was not recognized.
        """
        await self.start()
        outcome = await self.wait()
        await self.resolve(outcome)
        return outcome

    async def start(self):
        """Save the current status and apply the new one.

        Raises:
            RemoteError: If an API request fails.

        Returns:
            :class:`.Status` that was applied, as echoed back by Slack.
        """
        self._check_state(State.CREATED)
        self._set_state(State.FETCHING)
        self.original_status = await self._client.get_status()

        self._set_state(State.APPLYING)
        now = datetime.datetime.fromtimestamp(self._clock(),
                                              datetime.timezone.utc)
        self.deadline = now + self._config.duration
        self.new_status = await self._client.set_status(status.new_status(
            self._config.emoji, self._config.text, self.deadline
        ))
        if self._config.dnd:
            await self._client.set_snooze(self.dnd_minutes)
            self.snooze_enabled = True

        self._set_state(State.WAITING)
        return self.new_status

    async def wait(self):
        """Wait for the deadline or the user's decision.

        Returns:
            :class:`.Outcome` from whichever producer delivered first.
        """
        self._check_state(State.WAITING)
        outcome_future = asyncio.get_event_loop().create_future()

        def deliver(outcome):
            if outcome_future.done():
                logger.info('Ignoring %s, session already decided', outcome)
            else:
                outcome_future.set_result(outcome)

        timer = producers.CountdownTimer(
            self.deadline, clock=self._clock, poll_interval=self._poll_interval
        )
        timer.start(deliver)
        self._input_listener.start(deliver)
        try:
            outcome = await outcome_future
        finally:
            await timer.stop()

        logger.info('Session decided: %s', outcome)
        self._set_state(State.RESOLVING)
        return outcome

    async def resolve(self, outcome):
        """Act on the outcome of the session.

        Args:
            outcome (Outcome): Outcome returned by :func:`wait`.

        Raises:
            RemoteError: If an API request fails.
            UserInputError: If the outcome is :attr:`.Outcome.USER_ERROR`.

        Returns:
            :class:`.Status` that was restored, or ``None`` if the new status
            was kept.
        """
        self._check_state(State.RESOLVING)
        try:
            if outcome is Outcome.USER_ERROR:
                raise exceptions.UserInputError(
                    'Unrecognized input {!r}: press <enter> to restore your '
                    'status or "{}" to keep it'.format(
                        getattr(self._input_listener, 'line', None),
                        producers.KEEP_INPUT,
                    )
                )
            elif outcome is Outcome.KEEP_NEW_STATUS:
                logger.info('Keeping new status')
                return None
            restored = await self._client.set_status(self.original_status)
            if self.snooze_enabled:
                await self._client.end_snooze()
                self.snooze_enabled = False
            return restored
        finally:
            self._set_state(State.TERMINAL)

    def _check_state(self, expected):
        if self.state is not expected:
            raise RuntimeError('Session is {}, expected {}'.format(
                self.state.value, expected.value
            ))

    def _set_state(self, state):
        logger.debug('Session state %s -> %s', self.state.value, state.value)
        self.state = state
