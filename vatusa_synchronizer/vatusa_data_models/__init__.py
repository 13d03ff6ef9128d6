"""
The :mod:`vatusa_data_models` package defines the typed records that
the VATUSA API client returns. VATUSA encodes most numbers as strings,
uses `0` to mean "nobody" for staff positions and reports its dates
without a timezone. Each record has a `from_json` class method that
performs all of those coercions in one place and raises
:class:`MalformedResponseError` rather than guessing when a field does
not parse.

    - :class:`FacilityRoster` and :class:`RosterMember`
    - :class:`Controller`
    - :class:`ExamResult` and :class:`ExamQuestion`
    - :class:`CbtBlock` and :class:`CbtChapter`
    - :class:`TransferRequest`
"""

from .cbt import CbtBlock, CbtChapter
from .controller import Controller
from .exam import ExamQuestion, ExamResult
from .roster import FacilityRoster, RosterMember, STAFF_POSITIONS
from .transfer import TransferRequest, TRANSFER_ACTIONS
from .utils import DEFAULT_URL
