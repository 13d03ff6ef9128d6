import logging
from typing import Union

import requests

from .exceptions import (MalformedResponseError, ResponseError,
                         VatusaConnectionError)
from .utils import get_header


class VatusaSession(requests.Session):

    """
    Extends the regular :class:`requests.Session` class to prefix every
    request with the VATUSA API URL and key, since VATUSA authenticates
    by putting the key in the path: `{url}/{key}/{resource}`.

    :ivar logging.Logger logger: module-wide logger, accessed by
        __name__
    :ivar str base_url: the URL and key joined together
    """

    def __init__(self, url: str, key: str, timeout: float = None):
        """
        :param url: URL of the API, e.g. 'https://api.vatusa.net'
        :param key: the facility's API key
        :param timeout: passed to every request when given
        """
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.url = url.rstrip('/')
        self.key = key
        self.base_url = f'{self.url}/{self.key}'
        self.timeout = timeout
        self.headers.update(get_header())
        self.logger.debug('Session opened.')

    def resource_url(self, *resource: Union[str, int]) -> str:
        """Builds `{url}/{key}/{resource...}`."""
        return '/'.join([self.base_url] + [str(r).strip('/')
                                           for r in resource])

    def call(self, method: str, *resource: Union[str, int],
             **kwargs) -> requests.Response:
        """
        Issues a request against a VATUSA resource and checks that it
        came back with a 200.

        :param method: HTTP method
        :param resource: path components following the API key
        :raises ResponseError: on any status code other than 200
        :raises VatusaConnectionError: when the server cannot be reached
        :return: the response
        """
        url = self.resource_url(*resource)
        if self.timeout is not None:
            kwargs.setdefault('timeout', self.timeout)
        # Never log `url`, it contains the key
        self.logger.debug(f'{method} /{"/".join(map(str, resource))}')
        try:
            r = self.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            self.logger.exception('VATUSA server could not be reached.')
            raise VatusaConnectionError(e)
        return check_response(r, '/'.join(map(str, resource)))

    def get_json(self, *resource: Union[str, int], **kwargs) -> dict:
        """GETs a resource and returns the decoded JSON body."""
        r = self.call('GET', *resource, **kwargs)
        try:
            return r.json()
        except ValueError:
            raise MalformedResponseError('body is not valid JSON', r.text)


def check_response(r: requests.Response,
                   resource: str = None) -> requests.Response:
    """
    Checks for a 200 OK response and returns the response object.
    Otherwise raises a :class:`ResponseError`.
    """
    if r.status_code != 200:
        raise ResponseError(r.status_code, resource)
    return r
