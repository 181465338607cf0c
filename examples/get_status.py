"""Example of using afk to get the current status."""

from common import run_example


async def get_status(client, _):
    status = await client.get_status()
    print(status)


if __name__ == '__main__':
    run_example(get_status)
