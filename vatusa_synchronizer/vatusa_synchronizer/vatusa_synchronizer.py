from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
import json
import logging

from . import delegates
from .. import exceptions
from ..config import VatusaConfig
from ..user_store import UserStore
from ..vatusa_api import VatusaAPI
from ..vatusa_data_models import FacilityRoster

SYNC_TIME_FORMAT = '%Y-%m-%d %H:%M:%S %Z'


@dataclass
class SyncSummary(object):

    """The outcome of a single run of :class:`VatusaSynchronizer`."""

    time: datetime
    status: str = 'started'
    members_created: int = 0
    members_updated: int = 0
    members_unchanged: int = 0
    staff_updated: int = 0
    staff_skipped: int = 0
    error: Optional[Exception] = field(default=None)

    @property
    def succeeded(self) -> bool:
        return self.status == 'success'

    def to_dict(self) -> dict:
        out = {
            'time': self.time.strftime(SYNC_TIME_FORMAT),
            'status': self.status,
            'members_created': self.members_created,
            'members_updated': self.members_updated,
            'members_unchanged': self.members_unchanged,
            'staff_updated': self.staff_updated,
            'staff_skipped': self.staff_skipped
        }
        if self.error is not None:
            out['error'] = {'type': type(self.error).__name__,
                            'message': str(self.error)}
        return out


class VatusaSynchronizer(object):

    """
    A driver class that synchronizes the local users of an ARTCC with
    its VATUSA roster. VATUSA is treated as the "master" copy for
    member details; local group assignments are only changed for new
    users, guests and the holders of staff positions.
    """

    def __init__(self, store: UserStore, config: VatusaConfig = None,
                 api: VatusaAPI = None):
        """
        :param store: the local user store to reconcile against
        :param config: defaults to :meth:`VatusaConfig.from_environ`
        :param api: defaults to a client built from `config`
        """
        self.logger = logging.getLogger(__name__)
        if config is None:
            config = VatusaConfig.from_environ()
        self.config = config
        if api is None:
            api = VatusaAPI(config.api_url, config.api_key)
        self.api = api
        self.store = store
        self.dry_run = config.dry_run
        """True indicates changes should only be logged, not saved."""
        self.operations = {}
        """A log of all the operations that were/should be executed."""

        self.sync_members = delegates.MemberDelegate(self)
        self.sync_staff = delegates.StaffDelegate(self)

    def run(self, now: datetime = None) -> SyncSummary:
        """
        Runs a full sync and reports the outcome instead of raising, so
        that a failed sync never takes down whatever scheduled it.

        :param now: the instant of the run, defaults to the current time
            in UTC
        :return: a summary whose `error` is set when the run failed
        """
        if now is None:
            now = datetime.now(timezone.utc)
        summary = SyncSummary(time=now)
        try:
            self.sync(now, summary=summary)
        except exceptions.FacilityMismatchError as e:
            self.logger.error(f'VatusaSynchronizer: {e}')
            summary.status = 'failed'
            summary.error = e
        except exceptions.VatusaError as e:
            self.logger.exception('Could not finish sync.')
            summary.status = 'failed'
            summary.error = e
        except Exception as e:
            self.logger.exception('Unexpected error during sync.')
            summary.status = 'failed'
            summary.error = e
        return summary

    def sync(self, now: datetime = None,
             summary: SyncSummary = None) -> SyncSummary:
        """
        Fetches the roster and reconciles members, then staff. Users
        saved before an error stay saved.

        :raises FacilityMismatchError: when the roster belongs to a
            different facility, before any user is touched
        :raises TransportError: when the roster cannot be fetched
        :raises MalformedResponseError: when the roster cannot be parsed
        """
        if now is None:
            now = datetime.now(timezone.utc)
        if summary is None:
            summary = SyncSummary(time=now)
        self.operations = {}
        if self.dry_run:
            self.logger.info('Dry run. No users will be saved.')

        roster = self.fetch_roster()

        self.logger.info('Executing routine: "sync_members"')
        self.sync_members(roster, now)
        summary.members_created = self.sync_members.created
        summary.members_updated = self.sync_members.updated
        summary.members_unchanged = self.sync_members.unchanged

        self.logger.info('Executing routine: "sync_staff"')
        self.sync_staff(roster, now)
        summary.staff_updated = self.sync_staff.updated
        summary.staff_skipped = self.sync_staff.skipped

        summary.status = 'success'
        self.logger.info('Roster sync complete.')
        return summary

    def fetch_roster(self) -> FacilityRoster:
        """
        Fetches the roster and checks that it belongs to this
        facility.
        """
        roster = self.api.roster()
        if roster.id != self.config.artcc_icao:
            raise exceptions.FacilityMismatchError(self.config.artcc_icao,
                                                   roster.id)
        self.logger.info(f'Retrieved roster for {roster.id} with '
                         f'{len(roster.members)} members.')
        return roster

    def save(self, path: str = 'dry_run_info.json'):
        """
        Writes the operations that were executed, or in a dry run
        would have been, to a JSON file.
        """
        with open(path, 'w+') as f:
            self.operations['dry_run'] = self.dry_run
            self.operations['runtime'] = (datetime.now(timezone.utc)
                                          .strftime(SYNC_TIME_FORMAT))
            json.dump(self.operations, f)
