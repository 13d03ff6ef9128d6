from datetime import date, datetime
import re
from typing import Optional, Union

from ..exceptions import MalformedResponseError

DEFAULT_URL = 'https://api.vatusa.net'
VATUSA_DATETIME_FORMAT = '%Y-%m-%d %H:%M:%S'  # VATUSA timestamps, no zone
VATUSA_DATE_FORMAT = '%Y-%m-%d'
UTC_MARKER = ' +0000'
# Unassigned staff positions come back as this value
UNASSIGNED = 0
INT_PATTERN = re.compile(r'\s*-?[0-9]+\s*')


def require(json_obj: dict, key: str):
    """Returns `json_obj[key]`, raising if the key is not there."""
    try:
        return json_obj[key]
    except (KeyError, TypeError):
        raise MalformedResponseError(f'missing field "{key}"', json_obj)


def require_list(json_obj: dict, key: str) -> list:
    value = require(json_obj, key)
    if not isinstance(value, list):
        raise MalformedResponseError(f'field "{key}" is not a list',
                                     json_obj)
    return value


def require_dict(json_obj: dict, key: str) -> dict:
    value = require(json_obj, key)
    if not isinstance(value, dict):
        raise MalformedResponseError(f'field "{key}" is not an object',
                                     json_obj)
    return value


def require_str(json_obj: dict, key: str, optional: bool = False):
    """
    Returns `json_obj[key]` if it is a string. With `optional`, a null
    value is passed through as `None`.
    """
    value = require(json_obj, key)
    if optional and value is None:
        return None
    if not isinstance(value, str):
        raise MalformedResponseError(f'field "{key}" is not a string',
                                     json_obj)
    return value


def parse_int(value: Union[str, int], field: str) -> int:
    """
    Coerces a string-encoded integer, as VATUSA sends most of its
    numeric fields, into an `int`. Only JSON integers and strings of
    ASCII digits (with an optional minus sign) are accepted.

    :param value: the raw value from the JSON object
    :param field: name of the field, for the error message
    :raises MalformedResponseError: when the value cannot be parsed
    """
    if isinstance(value, bool):
        raise MalformedResponseError(f'field "{field}" is not an integer: '
                                     f'{value!r}')
    if isinstance(value, int):
        return value
    if isinstance(value, str) and INT_PATTERN.fullmatch(value):
        return int(value.strip())
    raise MalformedResponseError(f'field "{field}" is not an integer: '
                                 f'{value!r}')


def parse_optional_cid(value: Union[str, int, None],
                       field: str) -> Optional[int]:
    """
    Staff positions are reported as a CID, with `0` meaning nobody
    holds the position. An absent or empty value means the same.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    cid = parse_int(value, field)
    return None if cid == UNASSIGNED else cid


def parse_bool(value: Union[str, int, bool], field: str) -> bool:
    """Accepts real booleans as well as the 0/1 flavors."""
    if isinstance(value, bool):
        return value
    flag = parse_int(value, field)
    if flag not in (0, 1):
        raise MalformedResponseError(f'field "{field}" is not a boolean: '
                                     f'{value!r}')
    return bool(flag)


def parse_datetime(value: str, field: str) -> datetime:
    """
    VATUSA does not mark its timestamps with a zone, but they are all
    UTC. The marker is appended before parsing so that the result is
    always timezone-aware.
    """
    if not isinstance(value, str):
        raise MalformedResponseError(f'field "{field}" is not a date: '
                                     f'{value!r}')
    try:
        return datetime.strptime(value.strip() + UTC_MARKER,
                                 VATUSA_DATETIME_FORMAT + ' %z')
    except ValueError:
        raise MalformedResponseError(f'field "{field}" is not a date: '
                                     f'{value!r}')


def parse_date(value: str, field: str) -> date:
    if not isinstance(value, str):
        raise MalformedResponseError(f'field "{field}" is not a date: '
                                     f'{value!r}')
    # Transfers sometimes carry a time component as well
    try:
        return datetime.strptime(value.strip()[:10], VATUSA_DATE_FORMAT).date()
    except ValueError:
        raise MalformedResponseError(f'field "{field}" is not a date: '
                                     f'{value!r}')
