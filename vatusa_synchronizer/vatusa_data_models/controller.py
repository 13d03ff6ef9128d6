from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .utils import parse_datetime, parse_int, require, require_str
from ..exceptions import MalformedResponseError


@dataclass
class Controller(object):

    """
    Information VATUSA holds on a single controller.

    :param str facility: ICAO of the member's facility
    :param int rating: rating expressed as an integer
    :param datetime join_date: when the member joined VATUSA, in UTC
    :param datetime last_activity: last activity on VATUSA, in UTC
    """

    fname: str
    lname: str
    facility: str
    rating: int
    join_date: datetime
    last_activity: datetime
    cid: Optional[int] = None

    @classmethod
    def from_json(cls, json_obj: dict) -> 'Controller':
        if not isinstance(json_obj, dict):
            raise MalformedResponseError('controller response is not an '
                                         'object', json_obj)
        cid = json_obj.get('cid')
        return cls(
            fname=require_str(json_obj, 'fname'),
            lname=require_str(json_obj, 'lname'),
            facility=require_str(json_obj, 'facility'),
            rating=parse_int(require(json_obj, 'rating'), 'rating'),
            join_date=parse_datetime(require(json_obj, 'join_date'),
                                     'join_date'),
            last_activity=parse_datetime(require(json_obj, 'last_activity'),
                                         'last_activity'),
            cid=parse_int(cid, 'cid') if cid is not None else None
        )
