from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING

from ...user_store import Group, LocalUser, Rating
from ...vatusa_data_models import FacilityRoster
if TYPE_CHECKING:
    from ..vatusa_synchronizer import VatusaSynchronizer


class SyncDelegate(ABC):

    def __init__(self, synchronizer: VatusaSynchronizer):
        """
        Abstract base class that outlines behavior common to all the
        delegate classes.

        Stores reference to the parent synchronizer and sets the class's
        logger to that of said synchronizer. Requires definition of an
        `execute` method to be called with the `__call__` magic method
        such that each delegate behaves more or less as if it were a
        function defined on the `VatusaSynchronizer` class.

        :param VatusaSynchronizer synchronizer: the parent synchronizer
        """
        self.sync = synchronizer
        self.logger = self.sync.logger  # For convenience

    @property
    def store(self):
        return self.sync.store

    @abstractmethod
    def execute(self, roster: FacilityRoster, now: datetime):
        """
        The main logic for reconciling this delegate's part of the
        roster against the user store.

        :param roster: the roster fetched for this run
        :param now: the instant the run started, in UTC
        """
        pass

    def __call__(self, roster: FacilityRoster, now: datetime):
        """Calls the main sync function."""
        self.execute(roster, now)

    def save_user(self, user: LocalUser):
        """Saves the user unless this is a dry run."""
        if self.sync.dry_run:
            self.logger.debug(f'Dry run, not saving user {user.cid}.')
            return
        self.store.save(user)


def describe(value):
    """Renders a tracked field value for the operations log."""
    if isinstance(value, Group):
        return value.name
    if isinstance(value, Rating):
        return value.number
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def describe_changes(user: LocalUser) -> dict:
    return {k: {'old': describe(v['old']), 'new': describe(v['new'])}
            for k, v in user.changes.items()}
