"""HTTP request session."""

import asyncio
import collections
import logging
import urllib.parse

import aiohttp
import async_timeout

from afk import exceptions

logger = logging.getLogger(__name__)
CONNECT_TIMEOUT = 30
REQUEST_TIMEOUT = 30

FetchResponse = collections.namedtuple('FetchResponse', ['code', 'body'])


class Session:
    """Session for making authenticated HTTP requests to Slack.

    Must be created while an event loop is running.

    Args:
        token (str): API token sent as a bearer credential.
        base_url (str): Base URL of the API. The authorization header is only
            sent to this host.
        proxy (str): (optional) HTTP proxy URL to use for requests.
    """

    def __init__(self, token, base_url, proxy=None):
        self._proxy = proxy
        self._hostname = urllib.parse.urlparse(base_url).hostname
        timeout = aiohttp.ClientTimeout(connect=CONNECT_TIMEOUT)
        self._session = aiohttp.ClientSession(timeout=timeout)
        self._authorization_headers = {
            'authorization': 'Bearer {}'.format(token),
        }

    async def fetch(self, method, url, params=None, headers=None, data=None):
        """Make an HTTP request.

        Automatically uses configured HTTP proxy, and adds the authorization
        header.

        Failures are not retried.

        Args:
            method (str): Request method.
            url (str): Request URL.
            params (dict): (optional) Request query string parameters.
            headers (dict): (optional) Request headers.
            data: (str): (optional) Request body data.

        Returns:
            FetchResponse: Response data.

        Raises:
            NetworkError: If the request fails.
        """
        logger.debug('Sending request %s %s:\n%r', method, url, data)
        try:
            async with self.fetch_raw(method, url, params=params,
                                      headers=headers, data=data) as res:
                async with async_timeout.timeout(REQUEST_TIMEOUT):
                    body = await res.read()
            logger.debug('Received response %d %s:\n%r',
                         res.status, res.reason, body)
        except asyncio.TimeoutError:
            raise exceptions.NetworkError('Request timed out')
        except aiohttp.ServerDisconnectedError as err:
            raise exceptions.NetworkError(
                'Server disconnected error: {}'.format(err)
            )
        except (aiohttp.ClientError, ValueError) as err:
            raise exceptions.NetworkError(
                'Request connection error: {}'.format(err)
            )

        if res.status != 200:
            logger.info('Request returned unexpected status: %d %s',
                        res.status, res.reason)
            raise exceptions.NetworkError(
                'Request return unexpected status: {}: {}'
                .format(res.status, res.reason)
            )

        return FetchResponse(res.status, body)

    def fetch_raw(self, method, url, params=None, headers=None, data=None):
        """Make an HTTP request using aiohttp directly.

        Automatically uses configured HTTP proxy, and adds the authorization
        header.

        Args:
            method (str): Request method.
            url (str): Request URL.
            params (dict): (optional) Request query string parameters.
            headers (dict): (optional) Request headers.
            data: (str): (optional) Request body data.

        Returns:
            aiohttp._RequestContextManager: ContextManager for a HTTP response.

        Raises:
            See ``aiohttp.ClientSession.request``.
        """
        # Ensure we don't accidentally send the token to another host:
        if urllib.parse.urlparse(url).hostname != self._hostname:
            raise ValueError('expected {} host'.format(self._hostname))

        headers = headers or {}
        headers.update(self._authorization_headers)
        return self._session.request(
            method, url, params=params, headers=headers, data=data,
            proxy=self._proxy
        )

    async def close(self):
        """Close the underlying aiohttp.ClientSession."""
        await self._session.close()
