from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING

from . import SyncDelegate
from ...vatusa_data_models import FacilityRoster

if TYPE_CHECKING:
    from ..vatusa_synchronizer import VatusaSynchronizer

STAFF_ROLES = {
    'atm': 'Air Traffic Manager',
    'datm': 'Deputy Air Traffic Manager',
    'ta': 'Training Administrator',
    'ec': None,
    'wm': 'Webmaster',
    'fe': 'Facility Engineer'
}
"""
Staff positions, in the order they are synced, mapped to the name of
their group. The events coordinator has no group of their own.
"""


class StaffDelegate(SyncDelegate):

    """
    Moves the holders of the VATUSA staff positions into the matching
    staff group. Users are expected to exist already from the member
    sync; a position whose holder is not found locally is skipped.
    """

    def __init__(self, synchronizer: VatusaSynchronizer):
        super().__init__(synchronizer)
        self.updated = self.skipped = 0
        self.ops = {}

    def execute(self, roster: FacilityRoster, now: datetime):
        self.logger.info('Syncing staff positions.')
        self.updated = self.skipped = 0
        self.ops = {}

        for position, role in STAFF_ROLES.items():
            cid = getattr(roster, position)
            if cid is None:
                self.logger.debug(f'{position}: unassigned.')
                continue
            if role is None:
                self.logger.debug(f'{position}: no staff group. Skipping.')
                continue
            self.assign(position, cid, role)

        if self.ops:
            self.sync.operations['sync_staff'] = self.ops
        self.logger.info(f'Updated {self.updated} staff members.')

    def assign(self, position: str, cid: int, role: str):
        user = self.store.find_by_cid(cid)
        if user is None:
            self.logger.info(f'{position}: user {cid} not found. Skipping.')
            self.ops[position] = {'cid': cid, 'skipped': True}
            self.skipped += 1
            return

        group = self.store.find_group(role)
        if group is None:
            self.logger.warning(f'{position}: group "{role}" not found. '
                                'Skipping.')
            self.ops[position] = {'cid': cid, 'group': role, 'skipped': True}
            self.skipped += 1
            return

        user.group = group
        if user.changed():
            self.logger.debug(f'{position}: moving user {cid} to "{role}".')
            self.ops[position] = {'cid': cid, 'group': role}
            self.updated += 1
            self.save_user(user)
