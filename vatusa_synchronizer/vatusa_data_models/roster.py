from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .utils import (parse_int, parse_optional_cid, require, require_dict,
                    require_list, require_str)
from ..exceptions import MalformedResponseError

STAFF_POSITIONS = ('atm', 'datm', 'ta', 'ec', 'wm', 'fe')
"""
atm = air traffic manager
datm = deputy air traffic manager
ta = training administrator
ec = events coordinator
wm = webmaster
fe = facility engineer
"""


@dataclass
class RosterMember(object):

    """
    A single entry of the facility roster.

    :param int cid: VATSIM CID
    :param str fname: first name
    :param str lname: last name
    :param str email: email address, may be withheld
    :param int rating: integer representation of the member's rating
    """

    cid: int
    fname: str
    lname: str
    email: Optional[str]
    rating: int

    @classmethod
    def from_json(cls, json_obj: dict) -> 'RosterMember':
        if not isinstance(json_obj, dict):
            raise MalformedResponseError('roster entry is not an object',
                                         json_obj)
        return cls(
            cid=parse_int(require(json_obj, 'cid'), 'cid'),
            fname=require_str(json_obj, 'fname'),
            lname=require_str(json_obj, 'lname'),
            email=require_str(json_obj, 'email', optional=True),
            rating=parse_int(require(json_obj, 'rating'), 'rating')
        )


@dataclass
class FacilityRoster(object):

    """
    The roster of the facility associated with the API key, as returned
    by `GET /roster`. Each staff position holds the CID of the member
    filling it or `None` if the position is not assigned.
    """

    id: str
    url: Optional[str] = None
    name: Optional[str] = None
    atm: Optional[int] = None
    datm: Optional[int] = None
    ta: Optional[int] = None
    ec: Optional[int] = None
    wm: Optional[int] = None
    fe: Optional[int] = None
    members: List[RosterMember] = field(default_factory=list)

    @property
    def staff(self) -> Dict[str, Optional[int]]:
        """Staff positions in their fixed order."""
        return {position: getattr(self, position)
                for position in STAFF_POSITIONS}

    @classmethod
    def from_json(cls, json_obj: dict) -> 'FacilityRoster':
        """
        Builds the roster from the full response body. The outer
        `status` field is only used by the transport and is dropped.

        :param dict json_obj: the decoded response body
        :raises MalformedResponseError: when the body does not have the
            shape of a roster
        """
        if not isinstance(json_obj, dict):
            raise MalformedResponseError('roster response is not an object',
                                         json_obj)
        facility = require_dict(json_obj, 'facility')

        kwargs = {
            'id': require_str(facility, 'id'),
            'url': facility.get('url'),
            'name': facility.get('name'),
            'members': [RosterMember.from_json(m)
                        for m in require_list(facility, 'roster')]
        }
        for position in STAFF_POSITIONS:
            kwargs[position] = parse_optional_cid(facility.get(position),
                                                  position)

        return cls(**kwargs)
