from __future__ import annotations
from datetime import datetime
from typing import Dict, Optional, TYPE_CHECKING

from . import SyncDelegate
from .base_delegate import describe_changes
from ...user_store import CONTROLLER, GUEST, Group, LocalUser, Rating
from ...vatusa_data_models import FacilityRoster, RosterMember

if TYPE_CHECKING:
    from ..vatusa_synchronizer import VatusaSynchronizer


class MemberDelegate(SyncDelegate):

    """
    Creates or updates a local user for every member of the VATUSA
    roster. VATUSA is the master copy for names, email and rating.
    Groups are only touched for new users and for users still in the
    "Guest" group, so that nobody already placed somewhere gets moved.
    Does not remove users.
    """

    def __init__(self, synchronizer: VatusaSynchronizer):
        super().__init__(synchronizer)
        self.created = self.updated = self.unchanged = 0
        self.ops = {}
        """Attributes are reset every time the sync is executed."""
        self._ratings: Dict[int, Optional[Rating]] = {}

    def execute(self, roster: FacilityRoster, now: datetime):
        self.logger.info(f'Reconciling {len(roster.members)} roster '
                         'members.')
        self.created = self.updated = self.unchanged = 0
        self.ops = {'created': [], 'updated': {}}
        self._ratings = {}

        controller = self.store.find_group(CONTROLLER)
        if controller is None:
            self.logger.warning(f'Group "{CONTROLLER}" not found. New and '
                                'guest users will keep their group.')

        for i, member in enumerate(roster.members):
            self.logger.debug(f'{i + 1}/{len(roster.members)}:Member '
                              f'{member.cid}')
            self.reconcile(member, now, controller)

        ops = {k: v for k, v in self.ops.items() if v}
        if ops:
            self.sync.operations['sync_members'] = ops
        self.logger.info(f'Created {self.created}, updated {self.updated} '
                         f'and left {self.unchanged} users unchanged.')

    def reconcile(self, member: RosterMember, now: datetime,
                  controller: Optional[Group]) -> LocalUser:
        """
        Applies a single roster entry to its local user and saves the
        user if anything changed.

        :param member: the roster entry
        :param now: stored as the registration date of new users
        :param controller: the "Controller" group
        :return: the reconciled user
        """
        user = self.store.find_or_initialize_by_cid(member.cid)

        user.name_first = member.fname
        user.name_last = member.lname
        user.email = member.email
        user.rating = self.find_rating(member.rating)
        if user.reg_date is None:
            user.reg_date = now

        if user.persisted:
            if user.group is not None and user.group.name == GUEST \
                    and controller is not None:
                self.logger.debug(f'Promoting guest {user.cid} to '
                                  f'{CONTROLLER}.')
                user.group = controller
        elif controller is not None:
            user.group = controller

        if not user.changed():
            self.unchanged += 1
            return user

        if user.persisted:
            self.logger.debug(f'Updating user {user.cid}.')
            self.ops['updated'][user.cid] = describe_changes(user)
            self.updated += 1
        else:
            self.logger.debug(f'Creating user {user.cid}.')
            self.ops['created'].append(user.cid)
            self.created += 1
        self.save_user(user)
        return user

    def find_rating(self, number: int) -> Optional[Rating]:
        """
        Looks up a rating by its number, leaving it unset when the
        store does not know it.
        """
        if number not in self._ratings:
            rating = self.store.find_rating(number)
            if rating is None:
                self.logger.info(f'Rating {number} not found. Leaving '
                                 'rating unset.')
            self._ratings[number] = rating
        return self._ratings[number]
