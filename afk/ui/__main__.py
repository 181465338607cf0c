"""Command line interface for afk.

    $ afk --message "Lunch!" --emoji ":salad:" --duration 1h
"""

import appdirs
import argparse
import asyncio
import configargparse
import contextlib
import datetime
import logging
import os
import platform
import sys

import afk
from afk.ui.utils import DEFAULT_TIME_FORMAT, format_heading, format_status


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_MESSAGE = 'Away from keyboard'
DEFAULT_EMOJI = ':speech-bubble:'
DEFAULT_DURATION = '1h'
PROMPT = ('Press <enter> to restore your previous status, or "{}" then '
          '<enter> to quit and keep this one.'
          .format(afk.producers.KEEP_INPUT))


async def run_session(client, config, time_format=DEFAULT_TIME_FORMAT,
                      input_listener=None):
    """Run an afk session, printing its progress.

    The client is closed when the session ends.

    Args:
        client (afk.Client): Client used to make API requests.
        config (afk.SessionConfig): Settings for the session.
        time_format (str): (optional) strftime format for expiration times.
        input_listener: (optional) Producer of the user's decision. Defaults
            to reading standard input.

    Returns:
        :class:`afk.Outcome` that ended the session.
    """
    session = afk.Session(client, config, input_listener=input_listener)
    try:
        new_status = await session.start()
        print(format_heading('Current Status'))
        print(format_status(session.original_status, time_format))
        print(format_heading('New Status'))
        print(format_status(new_status, time_format))
        if session.snooze_enabled:
            print('Do Not Disturb is on for {}'.format(afk.duration_in_words(
                datetime.timedelta(minutes=session.dnd_minutes)
            )))
        print(PROMPT)

        outcome = await session.wait()
        restored_status = await session.resolve(outcome)
        if restored_status is None:
            print('Keeping new status')
        else:
            print(format_heading('Restored Status'))
            print(format_status(restored_status, time_format))
        return outcome
    finally:
        await client.close()


def dir_maker(path):
    """Create a directory if it does not exist."""
    directory = os.path.dirname(path)
    if directory != '' and not os.path.isdir(directory):
        try:
            os.makedirs(directory)
        except OSError as e:
            sys.exit('Failed to create directory: {}'.format(e))


def duration_type(value):
    """Argument type for Go-style durations such as ``1h30m``."""
    try:
        return afk.parse_duration(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def get_parser():
    """Return the command line argument parser."""
    # Build default paths for files.
    dirs = appdirs.AppDirs('afk', 'afk')
    default_log_path = os.path.join(dirs.user_log_dir, 'afk.log')
    default_config_path = 'afk.conf'
    user_config_path = os.path.join(dirs.user_config_dir, 'afk.conf')

    parser = configargparse.ArgumentParser(
        prog='afk', default_config_files=[default_config_path,
                                          user_config_path],
        formatter_class=configargparse.ArgumentDefaultsHelpFormatter,
        add_help=False,  # Disable help so we can add it to the correct group.
    )
    general_group = parser.add_argument_group('General')
    general_group.add('-h', '--help', action='help',
                      help='show this help message and exit')
    general_group.add('-c', '--config', help='configuration file path',
                      is_config_file=True)
    general_group.add('-v', '--version', action='version',
                      version='afk {} (Python {} on {})'.format(
                          afk.__version__, platform.python_version(),
                          platform.system() or 'unknown'
                      ))
    general_group.add('-d', '--debug', action='store_true',
                      help='log detailed debugging messages')
    general_group.add('--log', default=default_log_path, help='log file path')
    general_group.add('--token-path', default=afk.auth.default_token_path(),
                      help='file containing a "token: <Slack API token>" '
                      'line, used when ${} is not set'
                      .format(afk.auth.TOKEN_ENV_VAR))
    general_group.add('--api-url', default=afk.client.BASE_URL,
                      help='Slack Web API base URL')
    general_group.add('--time-format', default=DEFAULT_TIME_FORMAT,
                      help='expiration time format string')
    status_group = parser.add_argument_group('Status')
    status_group.add('-m', '--message', default=DEFAULT_MESSAGE,
                     help='the message to display while AFK')
    status_group.add('-e', '--emoji', default=DEFAULT_EMOJI,
                     help='emoji to display while AFK')
    status_group.add('-t', '--duration', default=DEFAULT_DURATION,
                     type=duration_type,
                     help='how long the AFK status should last, eg. 1h30m')
    status_group.add('--dnd', action='store_true',
                     help='enable Do Not Disturb while AFK')
    return parser


def main(argv=None):
    """Main entry point."""
    args = get_parser().parse_args(argv)

    dir_maker(args.log)
    logging.basicConfig(filename=args.log,
                        level=logging.DEBUG if args.debug else logging.WARNING,
                        format=LOG_FORMAT)

    config = afk.SessionConfig(
        emoji=args.emoji, text=args.message, duration=args.duration,
        dnd=args.dnd,
    )

    loop = asyncio.new_event_loop()
    try:
        token = afk.get_token(token_path=args.token_path)
        client = afk.Client(token, base_url=args.api_url)
        task = loop.create_task(
            run_session(client, config, time_format=args.time_format)
        )
        try:
            loop.run_until_complete(task)
        except KeyboardInterrupt:
            # Cancelling the session closes the client.
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                loop.run_until_complete(task)
            raise
    except afk.AfkError as e:
        sys.exit('afk: error: {}'.format(e))
    except KeyboardInterrupt:
        sys.exit('Caught KeyboardInterrupt, exiting abnormally')
    finally:
        loop.close()


if __name__ == '__main__':
    main()
