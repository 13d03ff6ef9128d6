from copy import deepcopy
from pathlib import Path
import json
import sqlite3
import tempfile
import unittest

import responses

from vatusa_synchronizer import Group, LocalUser, exceptions
from .utils import EARLIER, NOW, RecordingUserStore, make_synchronizer
from ..constants import BASE_URL, DATA_DIR


class FailingUserStore(RecordingUserStore):
    """Fails on the n-th save."""

    def __init__(self, fail_on: int, **kwargs):
        super().__init__(**kwargs)
        self.fail_on = fail_on

    def save(self, user):
        if self.n_saves + 1 == self.fail_on:
            raise exceptions.UserStoreError('disk full')
        super().save(user)


class LockedUserStore(RecordingUserStore):
    """A store whose backing database is unavailable."""

    def save(self, user):
        raise sqlite3.OperationalError('database is locked')


class TestVatusaSynchronizer(unittest.TestCase):

    url = BASE_URL + '/roster'

    def setUp(self):
        self.responses = responses.RequestsMock(
            assert_all_requests_are_fired=False
        )
        self.responses.start()
        with open(DATA_DIR/'vatusa_roster.json', 'r') as f:
            self.fixture = json.load(f)['test_base']

        self.addCleanup(self.responses.stop)
        self.addCleanup(self.responses.reset)

    def add_roster(self, body: dict = None, status: int = 200):
        if body is None:
            body = self.fixture
        self.responses.add(
            responses.Response(
                responses.GET, self.url,
                status=status,
                content_type='application/json',
                body=json.dumps(body)
            )
        )

    def test_full_run(self):
        self.add_roster()
        store = RecordingUserStore()
        summary = make_synchronizer(store).run(NOW)

        self.assertTrue(summary.succeeded)
        self.assertIsNone(summary.error)
        self.assertEqual(summary.members_created, 4)
        self.assertEqual(summary.staff_updated, 2)
        self.assertEqual(store.find_by_cid(900001).group,
                         Group('Air Traffic Manager'))
        self.assertEqual(store.find_by_cid(900002).group,
                         Group('Training Administrator'))
        self.assertEqual(store.find_by_cid(900003).group,
                         Group('Controller'))
        self.assertEqual(store.find_by_cid(123456).group,
                         Group('Controller'))
        self.assertEqual(store.find_by_cid(123456).reg_date, NOW)
        self.assertEqual(store.n_saves, 6)

    def test_second_run_no_writes(self):
        self.add_roster()
        store = RecordingUserStore()
        make_synchronizer(store).run(NOW)
        n_saves = store.n_saves

        summary = make_synchronizer(store).run(NOW)
        self.assertTrue(summary.succeeded)
        self.assertEqual(store.n_saves, n_saves)
        self.assertEqual(summary.members_unchanged, 4)
        self.assertEqual(summary.members_created, 0)
        self.assertEqual(summary.members_updated, 0)
        self.assertEqual(summary.staff_updated, 0)

    def test_bad_status(self):
        self.add_roster(status=500)
        store = RecordingUserStore(users=[LocalUser(cid=123456,
                                                    group=Group('Guest'))])
        summary = make_synchronizer(store).run(NOW)

        self.assertEqual(summary.status, 'failed')
        self.assertIsInstance(summary.error, exceptions.ResponseError)
        self.assertEqual(summary.error.status_code, 500)
        self.assertEqual(store.n_saves, 0)
        self.assertEqual(store.find_by_cid(123456).group, Group('Guest'))

    def test_facility_mismatch(self):
        body = deepcopy(self.fixture)
        body['facility']['id'] = 'ZOA'
        self.add_roster(body)
        store = RecordingUserStore()
        summary = make_synchronizer(store).run(NOW)

        self.assertEqual(summary.status, 'failed')
        self.assertIsInstance(summary.error,
                              exceptions.FacilityMismatchError)
        self.assertNotIsInstance(summary.error, exceptions.TransportError)
        self.assertEqual(summary.error.received, 'ZOA')
        self.assertEqual(store.n_saves, 0)
        self.assertEqual(store.lookups, [])

    def test_malformed_roster(self):
        body = deepcopy(self.fixture)
        body['facility']['roster'][3]['rating'] = 'S1'
        self.add_roster(body)
        store = RecordingUserStore()
        summary = make_synchronizer(store).run(NOW)

        self.assertIsInstance(summary.error,
                              exceptions.MalformedResponseError)
        self.assertEqual(store.n_saves, 0)

    def test_sync_raises(self):
        self.add_roster(status=404)
        with self.assertRaises(exceptions.ResponseError):
            make_synchronizer(RecordingUserStore()).sync(NOW)

    def test_partial_failure_keeps_earlier_saves(self):
        self.add_roster()
        store = FailingUserStore(fail_on=3)
        summary = make_synchronizer(store).run(NOW)

        self.assertIsInstance(summary.error, exceptions.UserStoreError)
        self.assertEqual(store.n_saves, 2)
        self.assertIsNotNone(store.find_by_cid(900001))
        self.assertIsNotNone(store.find_by_cid(900002))
        self.assertIsNone(store.find_by_cid(123456))

    def test_store_failure_reported(self):
        self.add_roster()
        store = LockedUserStore()
        summary = make_synchronizer(store).run(NOW)

        self.assertEqual(summary.status, 'failed')
        self.assertFalse(summary.succeeded)
        self.assertIsInstance(summary.error, sqlite3.OperationalError)
        self.assertEqual(store.n_saves, 0)
        as_dict = summary.to_dict()
        self.assertEqual(as_dict['error'], {'type': 'OperationalError',
                                            'message': 'database is locked'})

    def test_store_failure_raised_by_sync(self):
        self.add_roster()
        with self.assertRaises(sqlite3.OperationalError):
            make_synchronizer(LockedUserStore()).sync(NOW)

    def test_existing_members(self):
        self.add_roster()
        store = RecordingUserStore(users=[
            LocalUser(cid=900003, group=Group('Guest'), reg_date=EARLIER),
            LocalUser(cid=123456, group=Group('Webmaster'), reg_date=EARLIER)
        ])
        summary = make_synchronizer(store).run(NOW)

        self.assertEqual(summary.members_created, 2)
        self.assertEqual(summary.members_updated, 2)
        self.assertEqual(store.find_by_cid(900003).group,
                         Group('Controller'))
        self.assertEqual(store.find_by_cid(123456).group,
                         Group('Webmaster'))
        self.assertEqual(store.find_by_cid(123456).reg_date, EARLIER)

    def test_dry_run_save(self):
        self.add_roster()
        store = RecordingUserStore()
        sync = make_synchronizer(store, dry_run=True)
        summary = sync.run(NOW)
        self.assertTrue(summary.succeeded)
        self.assertEqual(store.n_saves, 0)

        tmp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(tmp_dir.cleanup)
        path = Path(tmp_dir.name)/'dry_run_info.json'
        sync.save(str(path))
        with open(path, 'r') as f:
            info = json.load(f)
        self.assertTrue(info['dry_run'])
        self.assertEqual(sorted(info['sync_members']['created']),
                         [123456, 900001, 900002, 900003])

    def test_summary_to_dict(self):
        body = deepcopy(self.fixture)
        body['facility']['id'] = 'ZOA'
        self.add_roster(body)
        summary = make_synchronizer(RecordingUserStore()).run(NOW)
        as_dict = summary.to_dict()
        self.assertEqual(as_dict['status'], 'failed')
        self.assertEqual(as_dict['error']['type'], 'FacilityMismatchError')
        self.assertEqual(as_dict['time'], '2024-05-01 12:00:00 UTC')
        json.dumps(as_dict)


if __name__ == '__main__':
    unittest.main()
