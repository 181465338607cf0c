"""Common framework used to run afk examples."""

import argparse
import asyncio
import logging

import afk


def run_example(example_coroutine, *extra_args):
    """Run an afk example coroutine.

    Args:
        example_coroutine (coroutine): Coroutine to run with an afk client and
            arguments namespace as arguments.
        extra_args (str): Any extra command line arguments required by the
            example.
    """
    args = _get_parser(extra_args).parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    # Find the Slack API token in the environment or the token file.
    token = afk.get_token(token_path=args.token_path)
    client = afk.Client(token)
    loop = asyncio.new_event_loop()
    task = loop.create_task(_async_main(example_coroutine, client, args))

    try:
        loop.run_until_complete(task)
    except KeyboardInterrupt:
        task.cancel()
        loop.run_until_complete(task)
    finally:
        loop.close()


def _get_parser(extra_args):
    """Return ArgumentParser with any extra arguments."""
    parser = argparse.ArgumentParser(
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        '--token-path', default=afk.auth.default_token_path(),
        help='path of file containing the Slack API token'
    )
    parser.add_argument(
        '-d', '--debug', action='store_true',
        help='log detailed debugging messages'
    )
    for extra_arg in extra_args:
        parser.add_argument(extra_arg, required=True)
    return parser


async def _async_main(example_coroutine, client, args):
    """Run the example coroutine."""
    # Afterwards, close the client's HTTP session.
    try:
        await example_coroutine(client, args)
    except asyncio.CancelledError:
        pass
    finally:
        await client.close()
