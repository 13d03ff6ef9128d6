from . import exceptions
from . import vatusa_data_models as vdm
from .config import VatusaConfig
from .user_store import (Group, InMemoryUserStore, LocalUser,
                         PickleUserStore, Rating, UserStore)
from .vatusa_api import VatusaAPI
from .vatusa_session import VatusaSession
from .vatusa_synchronizer import SyncSummary, VatusaSynchronizer
