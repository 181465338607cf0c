"""Helpers shared by the afk tests."""

import asyncio


def coroutine_test(coro):
    """Decorator to create a coroutine that starts and stops its own loop."""
    def wrapper(*args, **kwargs):
        future = coro(*args, **kwargs)
        loop = asyncio.new_event_loop()
        try:
            loop.run_until_complete(future)
        finally:
            loop.close()
    return wrapper
