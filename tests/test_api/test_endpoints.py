from datetime import date, datetime, timezone
from urllib.parse import parse_qs, urlparse
import json
import unittest

import responses

from vatusa_synchronizer import VatusaAPI, exceptions
from ..constants import API_KEY, API_URL, BASE_URL, DATA_DIR


class TestVatusaEndpoints(unittest.TestCase):

    def setUp(self):
        self.api = VatusaAPI(API_URL, API_KEY)
        self.responses = responses.RequestsMock(
            assert_all_requests_are_fired=False
        )
        self.responses.start()
        with open(DATA_DIR/'vatusa_endpoints.json', 'r') as f:
            self.fixtures = json.load(f)

        self.addCleanup(self.responses.stop)
        self.addCleanup(self.responses.reset)

    def add_fixture(self, method, resource: str, fixture: str = None,
                    status: int = 200, body: dict = None):
        if body is None:
            body = self.fixtures[fixture] if fixture else {'status': 'OK'}
        self.responses.add(
            responses.Response(
                method, f'{BASE_URL}/{resource}',
                status=status,
                content_type='application/json',
                body=json.dumps(body)
            )
        )

    def last_query(self) -> dict:
        url = self.responses.calls[-1].request.url
        return {k: v[0] for k, v in parse_qs(urlparse(url).query).items()}

    def test_cbt_blocks(self):
        self.add_fixture(responses.GET, 'cbt/block', 'cbt_blocks')
        blocks = self.api.cbt_blocks()
        self.assertEqual([b.id for b in blocks], [195, 196])
        self.assertEqual(blocks[0].order, 1)
        self.assertTrue(blocks[0].visible)
        self.assertFalse(blocks[1].visible)

    def test_cbt_block(self):
        self.add_fixture(responses.GET, 'cbt/block/195', 'cbt_block')
        block = self.api.cbt_block(195)
        self.assertEqual(block.id, 195)
        self.assertEqual(block.name, 'Test CBT Block')
        self.assertEqual([c.id for c in block.chapters], [12, 13])
        self.assertEqual(block.chapters[1].order, 2)

    def test_cbt_chapter(self):
        self.add_fixture(responses.GET, 'cbt/chapter/12', 'cbt_chapter')
        chapter = self.api.cbt_chapter(12)
        self.assertEqual(chapter.id, 12)
        self.assertEqual(chapter.block_id, 195)
        self.assertEqual(chapter.url, 'http://example.com/12')

    def test_cbt_progress(self):
        self.add_fixture(responses.PUT, 'cbt/progress/1300001')
        self.assertTrue(self.api.cbt_progress(1300001, 12))
        self.assertEqual(self.last_query(), {'chapterId': '12'})

    def test_cbt_progress_failure(self):
        self.add_fixture(responses.PUT, 'cbt/progress/1300001', status=403)
        with self.assertRaises(exceptions.ResponseError) as cm:
            self.api.cbt_progress(1300001, 12)
        self.assertEqual(cm.exception.status_code, 403)

    def test_controller(self):
        self.add_fixture(responses.GET, 'controller/1300001', 'controller')
        controller = self.api.controller(1300001)
        self.assertEqual(controller.cid, 1300001)
        self.assertEqual(controller.rating, 5)
        self.assertEqual(controller.facility, 'ZSE')
        self.assertEqual(controller.join_date,
                         datetime(2015, 3, 1, 18, 30, tzinfo=timezone.utc))
        self.assertEqual(controller.last_activity,
                         datetime(2017, 9, 8, 21, 22, 51,
                                  tzinfo=timezone.utc))

    def test_controller_bad_date(self):
        body = dict(self.fixtures['controller'], join_date='sometime')
        self.add_fixture(responses.GET, 'controller/1300001', body=body)
        with self.assertRaises(exceptions.MalformedResponseError):
            self.api.controller(1300001)

    def test_exam_results(self):
        self.add_fixture(responses.GET, 'exam/results/1300001',
                         'exam_results')
        results = self.api.exam_results(1300001)
        self.assertEqual([r.id for r in results], [18307, 18310])
        self.assertTrue(results[0].passed)
        self.assertFalse(results[1].passed)
        self.assertEqual(results[1].score, 64)
        self.assertEqual(results[0].date.tzinfo, timezone.utc)
        self.assertIsNone(results[0].questions)

    def test_exam_results_wrong_member(self):
        self.add_fixture(responses.GET, 'exam/results/1300002',
                         'exam_results')
        with self.assertRaises(exceptions.MalformedResponseError):
            self.api.exam_results(1300002)

    def test_exam_result(self):
        self.add_fixture(responses.GET, 'exam/result/18307', 'exam_result')
        result = self.api.exam_result(18307)
        self.assertEqual(result.cid, 1300006)
        self.assertIs(result.passed, True)
        self.assertEqual(result.date,
                         datetime(2017, 1, 15, 12, tzinfo=timezone.utc))
        self.assertEqual(len(result.questions), 2)
        self.assertFalse(result.questions[1].is_correct)

    def test_exam_result_without_questions(self):
        body = dict(self.fixtures['exam_result'], passed='0')
        del body['questions']
        self.add_fixture(responses.GET, 'exam/result/18307', body=body)
        result = self.api.exam_result(18307)
        self.assertIs(result.passed, False)
        self.assertIsNone(result.questions)

    def test_roster_delete(self):
        self.add_fixture(responses.DELETE, 'roster/1300001')
        self.assertTrue(self.api.roster_delete(1300001, 1300099,
                                               'Inactivity'))
        self.assertEqual(self.last_query(),
                         {'by': '1300099', 'msg': 'Inactivity'})

    def test_transfers(self):
        self.add_fixture(responses.GET, 'transfer', 'transfers')
        transfers = self.api.transfers()
        self.assertEqual(len(transfers), 1)
        transfer = transfers[0]
        self.assertEqual(transfer.id, 14)
        self.assertEqual(transfer.cid, 1300001)
        self.assertEqual(transfer.rating, 1)
        self.assertEqual(transfer.from_facility, 'ZOA')
        self.assertEqual(transfer.submitted, date(2017, 9, 1))

    def test_transfer_accept(self):
        self.add_fixture(responses.POST, 'transfer/14')
        self.assertTrue(self.api.transfer(14, 1300099, 'accept'))
        self.assertEqual(self.last_query(),
                         {'action': 'accept', 'by': '1300099'})

    def test_transfer_reject(self):
        self.add_fixture(responses.POST, 'transfer/14')
        self.assertTrue(self.api.transfer(14, 1300099, 'reject',
                                          'Not eligible'))
        self.assertEqual(self.last_query(),
                         {'action': 'reject', 'by': '1300099',
                          'reason': 'Not eligible'})

    def test_transfer_invalid_arguments(self):
        with self.assertRaises(ValueError):
            self.api.transfer(14, 1300099, 'reject')
        with self.assertRaises(ValueError):
            self.api.transfer(14, 1300099, 'reject', '   ')
        with self.assertRaises(ValueError):
            self.api.transfer(14, 1300099, 'approve')
        self.assertEqual(len(self.responses.calls), 0)


if __name__ == '__main__':
    unittest.main()
