"""Client for the parts of the Slack Web API used to go away from keyboard."""

import json
import logging
import os

from afk import exceptions, http_utils, status

logger = logging.getLogger(__name__)
# Base URL for API requests:
BASE_URL = 'https://slack.com/api/'
# Error returned by dnd.endSnooze when there is no snooze to end:
SNOOZE_NOT_ACTIVE = 'snooze_not_active'


class Client:
    """Slack client for reading and changing the user's status.

    Every request is authenticated with the token as a bearer credential.
    The HTTP session is created by the first request, and must be released by
    calling :func:`close`.

    Args:
        token (str): Slack API token. Get this using :func:`afk.get_token`.
        base_url (str): (optional) Base URL of the Slack Web API. Defaults to
            ``https://slack.com/api/``.
        session: (optional) :class:`.http_utils.Session`-like object to use
            instead of creating one.
    """

    def __init__(self, token, base_url=BASE_URL, session=None):
        self._token = token
        if not base_url.endswith('/'):
            base_url += '/'
        self._base_url = base_url

        # http_utils.Session instance (populated by the first request):
        self._session = session

    ##########################################################################
    # Public methods
    ##########################################################################

    async def close(self):
        """Close the HTTP session, if one was created."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def get_status(self):
        """Return the user's current status.

        Raises:
            RemoteError: If the request fails.

        Returns:
            :class:`.Status` of the user.
        """
        res = await self._api_request('users.profile.get', method='get')
        return self._parse_status(res)

    async def set_status(self, new_status):
        """Set the user's status.

        Args:
            new_status (Status): Status to set.

        Raises:
            RemoteError: If the request fails.

        Returns:
            :class:`.Status` as echoed back by Slack.
        """
        logger.info('Setting status to %s %r', new_status.emoji,
                    new_status.text)
        res = await self._api_request(
            'users.profile.set',
            data=json.dumps({'profile': status.to_profile(new_status)}),
        )
        return self._parse_status(res)

    async def set_snooze(self, minutes):
        """Turn on Do Not Disturb for a number of minutes.

        Raises:
            RemoteError: If the request fails.
        """
        logger.info('Snoozing notifications for %d minutes', minutes)
        await self._api_request('dnd.setSnooze',
                                params={'num_minutes': str(minutes)})

    async def end_snooze(self):
        """Turn off Do Not Disturb.

        Ending a snooze that is not active is not an error.

        Raises:
            RemoteError: If the request fails.
        """
        logger.info('Ending notification snooze')
        try:
            await self._api_request('dnd.endSnooze')
        except exceptions.ApiError as e:
            if e.error != SNOOZE_NOT_ACTIVE:
                raise
            logger.info('Snooze was not active')

    ##########################################################################
    # Private methods
    ##########################################################################

    def _get_session(self):
        if self._session is None:
            proxy = os.environ.get('HTTP_PROXY')
            self._session = http_utils.Session(
                self._token, self._base_url, proxy=proxy
            )
        return self._session

    @staticmethod
    def _parse_status(res):
        try:
            return status.from_profile(res.get('profile'))
        except ValueError as e:
            raise exceptions.RemoteError(
                'Failed to parse status from response: {}'.format(e)
            )

    async def _api_request(self, api_method, method='post', params=None,
                           data=None):
        """Send an authenticated Slack Web API request.

        Args:
            api_method (str): API method name, eg. ``users.profile.get``.
            method (str): (optional) HTTP request method. Defaults to POST.
            params (dict): (optional) Request query string parameters.
            data (str): (optional) JSON request body.

        Returns:
            dict: The decoded response object.

        Raises:
            NetworkError: If the request fails.
            RemoteError: If the response is not a JSON object.
            ApiError: If Slack reports that the request failed.
        """
        headers = {}
        if data is not None:
            headers['content-type'] = 'application/json; charset=utf-8'
        res = await self._get_session().fetch(
            method, self._base_url + api_method, params=params,
            headers=headers, data=data,
        )
        try:
            response = json.loads(res.body.decode())
        except ValueError as e:
            raise exceptions.RemoteError(
                'Failed to decode JSON response: {}'.format(e)
            )
        if not isinstance(response, dict):
            raise exceptions.RemoteError(
                'Unexpected response: {!r}'.format(response)
            )
        if response.get('ok') is not True:
            raise exceptions.ApiError(response.get('error') or 'unknown_error')
        logger.debug('Received %s response:\n%s', api_method, response)
        return response
