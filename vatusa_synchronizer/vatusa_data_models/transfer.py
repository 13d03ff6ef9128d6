from dataclasses import dataclass
from datetime import date
from typing import Optional

from .utils import parse_date, parse_int, require, require_str
from ..exceptions import MalformedResponseError

TRANSFER_ACTIONS = ('accept', 'reject')


@dataclass
class TransferRequest(object):

    """
    A pending inbound transfer.

    :param int id: transfer request ID, used to accept or reject it
    :param str from_facility: ICAO of the origin ARTCC
    :param date submitted: date of the request
    """

    id: int
    cid: int
    fname: str
    lname: str
    rating: int
    email: Optional[str]
    from_facility: str
    reason: Optional[str]
    submitted: date

    @classmethod
    def from_json(cls, json_obj: dict) -> 'TransferRequest':
        if not isinstance(json_obj, dict):
            raise MalformedResponseError('transfer entry is not an object',
                                         json_obj)
        return cls(
            id=parse_int(require(json_obj, 'id'), 'id'),
            cid=parse_int(require(json_obj, 'cid'), 'cid'),
            fname=require_str(json_obj, 'fname'),
            lname=require_str(json_obj, 'lname'),
            rating=parse_int(require(json_obj, 'rating'), 'rating'),
            email=json_obj.get('email'),
            from_facility=require_str(json_obj, 'from_facility'),
            reason=json_obj.get('reason'),
            submitted=parse_date(require(json_obj, 'submitted'), 'submitted')
        )
