"""
A thin client for the VATUSA facility API. Each method issues one
request through a :class:`VatusaSession`, fails with a
:class:`ResponseError` on any status other than 200 and hands the body
to the matching record in :mod:`vatusa_data_models`, which does the
normalization. Only the endpoints a facility website needs are
covered; the roster sync only uses :meth:`VatusaAPI.roster`.

Example::

    api = VatusaAPI('https://api.vatusa.net', 'KEY')
    roster = api.roster()
"""

import logging
from typing import List, Union

from . import vatusa_data_models as vdm
from .exceptions import MalformedResponseError
from .utils import get_header
from .vatusa_data_models.utils import require_dict, require_list
from .vatusa_session import VatusaSession

CidType = Union[int, str]
JSON_HEADER = {'Content-Type': 'application/json'}


class VatusaAPI(object):

    def __init__(self, url: str = vdm.DEFAULT_URL, key: str = None,
                 session: VatusaSession = None, timeout: float = None):
        """
        :param url: the API URL, e.g. 'https://api.vatusa.net'
        :param key: the API key
        :param session: an existing session; `url` and `key` are
            ignored when one is given
        :param timeout: per-request timeout handed to the session
        """
        self.logger = logging.getLogger(__name__)
        if session is None:
            if key is None:
                raise ValueError('Must supply one of either `key` or '
                                 '`session`.')
            session = VatusaSession(url, key, timeout=timeout)
        self.session = session

    @property
    def base_url(self) -> str:
        return self.session.base_url

    def cbt_blocks(self) -> List[vdm.CbtBlock]:
        """Retrieves all CBT blocks associated with the API key."""
        json_obj = self.session.get_json('cbt', 'block')
        return [vdm.CbtBlock.from_json(b)
                for b in require_list(json_obj, 'blocks')]

    def cbt_block(self, block_id: int) -> vdm.CbtBlock:
        """Retrieves a CBT block along with its chapters."""
        json_obj = self.session.get_json('cbt', 'block', block_id)
        return vdm.CbtBlock.from_block_response(json_obj)

    def cbt_chapter(self, chapter_id: int) -> vdm.CbtChapter:
        json_obj = self.session.get_json('cbt', 'chapter', chapter_id)
        return vdm.CbtChapter.from_json(require_dict(json_obj, 'chapter'))

    def cbt_progress(self, cid: CidType, chapter_id: int) -> bool:
        """
        Marks a CBT chapter as completed by a student.

        :param cid: VATSIM CID of the student
        :param chapter_id: the completed chapter
        :return: True if successful, otherwise raises
        """
        self.session.call('PUT', 'cbt', 'progress', cid,
                          params={'chapterId': str(chapter_id)},
                          headers=get_header(JSON_HEADER))
        return True

    def controller(self, cid: CidType) -> vdm.Controller:
        """Retrieves VATUSA's information on a controller."""
        json_obj = self.session.get_json('controller', cid)
        return vdm.Controller.from_json(json_obj)

    def exam_results(self, cid: CidType) -> List[vdm.ExamResult]:
        """
        Retrieves all exams completed by a member.

        :raises MalformedResponseError: when VATUSA returns the result
            set of a different member
        """
        json_obj = self.session.get_json('exam', 'results', cid)
        if not isinstance(json_obj, dict) or \
                str(json_obj.get('cid')) != str(cid):
            raise MalformedResponseError('VATUSA API returned incorrect exam '
                                         f'result set for: {cid}')

        return [vdm.ExamResult.from_json(e)
                for e in require_list(json_obj, 'exams')]

    def exam_result(self, result_id: int) -> vdm.ExamResult:
        """Retrieves a single exam result, including its questions."""
        json_obj = self.session.get_json('exam', 'result', result_id)
        return vdm.ExamResult.from_json(json_obj)

    def roster(self) -> vdm.FacilityRoster:
        """Retrieves the roster of the facility the API key belongs to."""
        json_obj = self.session.get_json('roster')
        roster = vdm.FacilityRoster.from_json(json_obj)
        self.logger.debug(f'Retrieved roster for {roster.id} with '
                          f'{len(roster.members)} members.')
        return roster

    fetch_roster = roster

    def roster_delete(self, cid: CidType, staff_cid: CidType,
                      message: str) -> bool:
        """
        Removes a member from the facility.

        :param cid: VATSIM CID of the member to remove
        :param staff_cid: VATSIM CID of the staff member removing them
        :param message: reason for the removal
        :return: True if successful, otherwise raises
        """
        self.session.call('DELETE', 'roster', cid,
                          params={'by': str(staff_cid), 'msg': str(message)},
                          headers=get_header(JSON_HEADER))
        return True

    def transfers(self) -> List[vdm.TransferRequest]:
        """Retrieves pending inbound transfers."""
        json_obj = self.session.get_json('transfer')
        return [vdm.TransferRequest.from_json(t)
                for t in require_list(json_obj, 'transfers')]

    def transfer(self, transfer_request_id: int, staff_cid: CidType,
                 action: str, reason: str = None) -> bool:
        """
        Accepts or rejects a transfer request.

        :param transfer_request_id: ID from :meth:`transfers`
        :param staff_cid: VATSIM CID of the staff member processing it
        :param action: either 'accept' or 'reject'
        :param reason: required when rejecting
        :return: True if successful, otherwise raises
        """
        action = str(action)
        if action not in vdm.TRANSFER_ACTIONS:
            raise ValueError(f"Unknown action: '{action}'")
        if action == 'reject' and not (reason and str(reason).strip()):
            raise ValueError('Reason required')

        body = {'action': action, 'by': str(staff_cid)}
        if action == 'reject':
            body['reason'] = str(reason)

        self.session.call('POST', 'transfer',
                          transfer_request_id,
                          params=body, headers=get_header(JSON_HEADER))
        return True
