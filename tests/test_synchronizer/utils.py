from datetime import datetime, timezone

from vatusa_synchronizer import (InMemoryUserStore, VatusaConfig,
                                 VatusaSynchronizer)
from ..constants import API_KEY, API_URL, ARTCC_ICAO, GROUPS, RATINGS

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
EARLIER = datetime(2019, 2, 3, 4, 5, 6, tzinfo=timezone.utc)


class RecordingUserStore(InMemoryUserStore):
    """Remembers every CID it was asked for."""

    def __init__(self, **kwargs):
        kwargs.setdefault('groups', GROUPS)
        kwargs.setdefault('ratings', RATINGS)
        super().__init__(**kwargs)
        self.lookups = []

    def find_by_cid(self, cid):
        self.lookups.append(cid)
        return super().find_by_cid(cid)


def make_synchronizer(store, dry_run: bool = False,
                      artcc_icao: str = ARTCC_ICAO) -> VatusaSynchronizer:
    config = VatusaConfig(api_key=API_KEY, artcc_icao=artcc_icao,
                          api_url=API_URL, dry_run=dry_run)
    return VatusaSynchronizer(store=store, config=config)
