from typing import Union


class VatusaError(Exception):

    def __init__(self, e=None):
        self.error = e

    def __str__(self):
        out = 'There was an error when interfacing with the VATUSA API'
        if self.error is None:
            return out + '.'
        else:
            return f'{out}:\n{self.error}'


class TransportError(VatusaError):
    """The VATUSA API could not deliver a usable HTTP response."""


class ResponseError(TransportError):

    """
    Raised for any response whose status code is not 200. The status
    code is kept on the exception so that the scheduler can decide
    whether to try again later.
    """

    def __init__(self, status_code: int, resource: str = None):
        self.status_code = int(status_code)
        self.resource = resource

    def __str__(self):
        out = f'Response returned status code {self.status_code}'
        if self.resource is None:
            return out + '.'
        return f'{out} for resource "{self.resource}".'


class VatusaConnectionError(TransportError):

    def __str__(self):
        out = 'The VATUSA API endpoint could not be reached'
        if self.error is None:
            return out + '.'
        return f'{out}: {self.error}'


class MalformedResponseError(VatusaError):

    """
    Raised when a 200 response cannot be turned into the expected
    record, e.g. a missing key or a numeric field that does not parse.
    """

    def __init__(self, msg: str, json_obj=None):
        self.msg = msg
        self.json_obj = json_obj

    def __str__(self):
        if self.json_obj is None:
            return 'Received malformed response: ' + self.msg
        return (f'Received malformed response: {self.msg}\n'
                f'{self.json_obj}')


class FacilityMismatchError(VatusaError):

    def __init__(self, expected: str, received: Union[str, None]):
        self.expected = expected
        self.received = received

    def __str__(self):
        return (f'Roster ICAO ({self.received}) did not match ARTCC ICAO '
                f'({self.expected}).')


class UserStoreError(VatusaError):

    def __init__(self, msg: str = None):
        self.msg = msg

    def __str__(self):
        if self.msg is None:
            return 'There was a problem with the local user store.'
        else:
            return self.msg
