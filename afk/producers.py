"""Event sources that race to decide how an afk session ends.

Each producer is started with a ``deliver`` callback, which it calls with an
:class:`Outcome` from the event loop's thread. Only the first delivery made
for a session is acted upon.
"""

import asyncio
import contextlib
import enum
import logging
import sys
import threading
import time

logger = logging.getLogger(__name__)
# Longest time to sleep before checking the wall clock again. Sleeps may not
# count time spent suspended, so the deadline is re-checked regularly.
POLL_INTERVAL = 1.0
KEEP_INPUT = 'e'


class Outcome(enum.Enum):
    """How an afk session ends."""

    KEEP_NEW_STATUS = 'keep'
    RESUME_ORIGINAL_STATUS = 'resume'
    USER_ERROR = 'error'


def parse_input(line):
    """Return the Outcome requested by a line of terminal input."""
    text = line.rstrip('\r\n')
    if text == '':
        return Outcome.RESUME_ORIGINAL_STATUS
    elif text == KEEP_INPUT:
        return Outcome.KEEP_NEW_STATUS
    else:
        return Outcome.USER_ERROR


class CountdownTimer:
    """Resumes the original status once a deadline passes.

    The deadline is absolute, so the timer stays correct when the computer
    sleeps.

    Args:
        deadline (datetime.datetime): Aware time to fire at.
        clock: (optional) Function returning the current time in seconds since
            the epoch. Defaults to ``time.time``.
        poll_interval (float): (optional) Maximum seconds between checks of
            the clock.
    """

    def __init__(self, deadline, clock=time.time, poll_interval=POLL_INTERVAL):
        self._deadline = deadline.timestamp()
        self._clock = clock
        self._poll_interval = poll_interval
        self._task = None

    async def wait(self):
        """Return :attr:`Outcome.RESUME_ORIGINAL_STATUS` at the deadline.

        Returns immediately if the deadline has already passed.
        """
        while True:
            remaining = self._deadline - self._clock()
            if remaining <= 0:
                logger.info('Deadline reached')
                return Outcome.RESUME_ORIGINAL_STATUS
            await asyncio.sleep(min(remaining, self._poll_interval))

    def start(self, deliver):
        """Start counting down in a new task."""
        self._task = asyncio.ensure_future(self._run(deliver))

    async def stop(self):
        """Cancel the countdown and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task

    async def _run(self, deliver):
        deliver(await self.wait())


class TerminalInputListener:
    """Reads one line of terminal input to decide the outcome.

    An empty line resumes the original status, ``e`` keeps the new status,
    and anything else is a user error. If the input ends without a line,
    nothing is delivered.

    Reading happens in a daemon thread. A blocked read can't be interrupted,
    so the thread is never joined and is torn down when the process exits.

    Args:
        stream: (optional) File-like object to read from. Defaults to
            ``sys.stdin``.
    """

    def __init__(self, stream=None):
        self._stream = stream
        self.line = None
        """The line that was read, without its line ending."""

    def start(self, deliver):
        """Start reading in a new daemon thread."""
        loop = asyncio.get_event_loop()
        thread = threading.Thread(
            target=self._read, args=(loop, deliver),
            name='TerminalInputListener', daemon=True,
        )
        thread.start()

    def _read(self, loop, deliver):
        stream = self._stream if self._stream is not None else sys.stdin
        try:
            line = stream.readline()
        except (OSError, ValueError) as e:
            logger.warning('Failed to read terminal input: %s', e)
            return
        if not line:
            logger.info('Terminal input closed')
            return
        self.line = line.rstrip('\r\n')
        outcome = parse_input(line)
        try:
            loop.call_soon_threadsafe(deliver, outcome)
        except RuntimeError:
            # The event loop has been closed.
            logger.info('Ignoring %s, session already closed', outcome)
