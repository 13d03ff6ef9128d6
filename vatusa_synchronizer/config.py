from dataclasses import dataclass
from typing import Mapping
import os

from .utils import env_flag
from .vatusa_data_models import DEFAULT_URL


@dataclass
class VatusaConfig(object):

    """
    Settings consumed by the synchronizer. Use :meth:`from_environ` to
    build one from the following environment variables:

    - VATUSA_API_URL (optional)
    - VATUSA_API_KEY
    - ARTCC_ICAO
    - VATUSA_DRY_RUN (optional, 0 or 1)
    """

    api_key: str
    artcc_icao: str
    api_url: str = DEFAULT_URL
    dry_run: bool = False

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] = None) -> 'VatusaConfig':
        if environ is None:
            environ = os.environ
        try:
            api_key = environ['VATUSA_API_KEY']
            artcc_icao = environ['ARTCC_ICAO']
        except KeyError:
            raise EnvironmentError('VATUSA API key or ARTCC ICAO are not in '
                                   'the environment.')

        return cls(
            api_key=api_key,
            artcc_icao=artcc_icao,
            api_url=environ.get('VATUSA_API_URL') or DEFAULT_URL,
            dry_run=env_flag(environ.get('VATUSA_DRY_RUN'))
        )
