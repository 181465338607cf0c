"""Example of using afk to set a status that expires after a duration."""

import datetime

import afk

from common import run_example


async def set_status(client, args):
    expiration = (datetime.datetime.now(tz=datetime.timezone.utc) +
                  afk.parse_duration(args.duration))
    status = await client.set_status(
        afk.Status(args.emoji, args.text, expiration)
    )
    print(status)


if __name__ == '__main__':
    run_example(set_status, '--emoji', '--text', '--duration')
