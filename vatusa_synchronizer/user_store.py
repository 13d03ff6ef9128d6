"""
The local side of the sync. The host application owns its users,
groups and ratings; the synchronizer only needs the handful of
operations defined by :class:`UserStore`. Two implementations ship
with the package:

    - :class:`InMemoryUserStore` keeps everything in dictionaries.
    - :class:`PickleUserStore` does the same but serializes itself to
        disk after every save, which is what `main.py` uses.

Stores hand out copies of their records, the way a database hands out
freshly loaded rows, so nothing changes until :meth:`UserStore.save`
is called.
"""

from abc import ABC, abstractmethod
from copy import deepcopy
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, Optional, Union
import logging
import os
import pickle

from .exceptions import UserStoreError

GUEST = 'Guest'
CONTROLLER = 'Controller'


@dataclass(frozen=True)
class Group(object):
    name: str


@dataclass(frozen=True)
class Rating(object):
    number: int
    short_name: str = None
    long_name: str = None


VATSIM_RATINGS = (
    Rating(-1, 'INA', 'Inactive'),
    Rating(0, 'SUS', 'Suspended'),
    Rating(1, 'OBS', 'Observer'),
    Rating(2, 'S1', 'Tower Trainee'),
    Rating(3, 'S2', 'Tower Controller'),
    Rating(4, 'S3', 'Senior Student'),
    Rating(5, 'C1', 'Enroute Controller'),
    Rating(6, 'C2', 'Controller 2'),
    Rating(7, 'C3', 'Senior Controller'),
    Rating(8, 'I1', 'Instructor'),
    Rating(9, 'I2', 'Instructor 2'),
    Rating(10, 'I3', 'Senior Instructor'),
    Rating(11, 'SUP', 'Supervisor'),
    Rating(12, 'ADM', 'Administrator')
)
"""Controller ratings as numbered by VATSIM, used to seed a new store."""


class LocalUser(object):

    """
    A member of the facility as the host application knows them, keyed
    by VATSIM CID. Tracks which of its fields changed since it was
    loaded so that callers can skip saving records that did not change.

    :ivar bool persisted: whether the record exists in the store
    """

    tracked_fields = ('name_first', 'name_last', 'email', 'rating',
                      'reg_date', 'group')

    def __init__(self, cid: int, name_first: str = None,
                 name_last: str = None, email: str = None,
                 rating: Rating = None, reg_date: datetime = None,
                 group: Group = None, persisted: bool = False):
        self.cid = int(cid)
        self.name_first = name_first
        self.name_last = name_last
        self.email = email
        self.rating = rating
        self.reg_date = reg_date
        self.group = group
        self.persisted = persisted
        self._original = self._snapshot()

    def __eq__(self, other):
        return (isinstance(other, LocalUser)
                and self.cid == other.cid
                and self._snapshot() == other._snapshot())

    def __repr__(self):
        group = self.group.name if self.group else None
        return f'LocalUser(cid={self.cid}, group={group!r})'

    @property
    def changes(self) -> Dict[str, Dict]:
        """
        The fields that differ from when the record was loaded, in the
        form `{field: {'old': ..., 'new': ...}}`.
        """
        current = self._snapshot()
        return {k: {'old': self._original[k], 'new': current[k]}
                for k in self.tracked_fields
                if current[k] != self._original[k]}

    def changed(self) -> bool:
        """New records always count as changed."""
        return not self.persisted or len(self.changes) > 0

    def mark_saved(self):
        self.persisted = True
        self._original = self._snapshot()

    def _snapshot(self) -> dict:
        return {k: getattr(self, k) for k in self.tracked_fields}


class UserStore(ABC):

    """
    Defines the operations the synchronizer needs from the host
    application's persistence layer.
    """

    def __init__(self):
        logger_name = '.'.join([__name__, self.__class__.__name__])
        self.logger = logging.getLogger(logger_name)

    @abstractmethod
    def find_by_cid(self, cid: int) -> Optional[LocalUser]:
        """Returns the user with the given CID or None."""
        pass

    def find_or_initialize_by_cid(self, cid: int) -> LocalUser:
        """
        Returns the user with the given CID, or a new, unsaved user
        with only the CID set.
        """
        user = self.find_by_cid(cid)
        if user is None:
            return LocalUser(cid=cid)
        return user

    @abstractmethod
    def find_group(self, name: str) -> Optional[Group]:
        pass

    @abstractmethod
    def find_rating(self, number: int) -> Optional[Rating]:
        pass

    @abstractmethod
    def save(self, user: LocalUser):
        """Persists the user and marks it as saved."""
        pass


class InMemoryUserStore(UserStore):

    """
    A :class:`UserStore` kept entirely in memory. Useful for tests and
    dry runs, and as the base for :class:`PickleUserStore`.

    :ivar int n_saves: how many times `save` has been called
    """

    def __init__(self, groups: Iterable[Union[Group, str]] = (),
                 ratings: Iterable[Rating] = (),
                 users: Iterable[LocalUser] = ()):
        super().__init__()
        self.groups = {}
        for group in groups:
            if isinstance(group, str):
                group = Group(group)
            self.groups[group.name] = group
        self.ratings = {r.number: r for r in ratings}
        self.users = {}
        for user in users:
            user = deepcopy(user)
            user.mark_saved()
            self.users[user.cid] = user
        self.n_saves = 0

    def find_by_cid(self, cid: int) -> Optional[LocalUser]:
        try:
            return deepcopy(self.users[int(cid)])
        except KeyError:
            return None

    def find_group(self, name: str) -> Optional[Group]:
        return self.groups.get(name)

    def find_rating(self, number: int) -> Optional[Rating]:
        return self.ratings.get(int(number))

    def save(self, user: LocalUser):
        user.mark_saved()
        self.users[user.cid] = deepcopy(user)
        self.n_saves += 1


class PickleUserStore(InMemoryUserStore):

    """
    An :class:`InMemoryUserStore` that is read from and written back to
    a pickle file.
    """

    def __init__(self, path: Union[str, Path], **kwargs):
        super().__init__(**kwargs)
        self.path = Path(path)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'PickleUserStore':
        """
        Reads a store previously written with :meth:`dump`.

        :raises UserStoreError: when the file cannot be read or does not
            hold a user store
        """
        logger = logging.getLogger(__name__)
        logger.debug('Reading serialized user store from ' + str(path))
        try:
            with open(path, 'rb') as f:
                state = pickle.load(f)
            store = cls(path, groups=state['groups'].values(),
                        ratings=state['ratings'].values())
            users = state['users']
        except (OSError, pickle.UnpicklingError, EOFError, AttributeError,
                ImportError, KeyError, TypeError) as e:
            raise UserStoreError(f'Could not read user store "{path}": '
                                 f'{e!r}')
        if not isinstance(users, dict):
            raise UserStoreError(f'Could not read user store "{path}": '
                                 'users are not a mapping')

        store.users = users
        return store

    @classmethod
    def load_or_create(cls, path: Union[str, Path],
                       groups: Iterable[Union[Group, str]] = (),
                       ratings: Iterable[Rating] = VATSIM_RATINGS
                       ) -> 'PickleUserStore':
        """
        Loads the store at `path`. If there is no file yet, a store
        with no users and the given groups and ratings is written there
        instead.
        """
        if os.path.exists(path):
            return cls.load(path)
        logger = logging.getLogger(__name__)
        logger.warning(f'No user store found at "{path}". Creating one.')
        store = cls(path, groups=groups, ratings=ratings)
        store.dump()
        return store

    def dump(self):
        state = {
            'groups': self.groups,
            'ratings': self.ratings,
            'users': self.users
        }
        if self.path.parent and not os.path.exists(self.path.parent):
            os.makedirs(self.path.parent, exist_ok=True)
        try:
            with open(self.path, 'wb+') as f:
                pickle.dump(state, f)
        except OSError as e:
            raise UserStoreError(f'Could not write user store '
                                 f'"{self.path}": {e}')

    def save(self, user: LocalUser):
        super().save(user)
        self.dump()
