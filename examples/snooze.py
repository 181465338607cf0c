"""Example of using afk to turn Do Not Disturb on or off."""

from common import run_example


async def snooze(client, args):
    minutes = int(args.minutes)
    if minutes > 0:
        await client.set_snooze(minutes)
    else:
        await client.end_snooze()


if __name__ == '__main__':
    run_example(snooze, '--minutes')
