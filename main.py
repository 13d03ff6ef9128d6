#!/usr/bin/env python3
from logging.config import dictConfig
from typing import Union
import json
import logging
import os

from vatusa_synchronizer import (PickleUserStore, VatusaConfig,
                                 VatusaSynchronizer, exceptions)
from vatusa_synchronizer.user_store import CONTROLLER, GUEST
from vatusa_synchronizer.vatusa_synchronizer.delegates import STAFF_ROLES

# Groups a new user store is seeded with
DEFAULT_GROUPS = [GUEST, CONTROLLER] + [role for role in STAFF_ROLES.values()
                                        if role is not None]


def setup_logging(config_file: str = None, log_dir: str = None,
                  log_level: Union[str, int] = None) -> dict:
    if config_file is None:
        config_file = os.path.join(os.getcwd(), 'logging_config.json')

    if log_level is None:
        log_level = os.environ.get('LOGLEVEL', logging.INFO)

    with open(config_file, 'r') as f:
        config = json.load(f)

    for obj_type in 'loggers', 'handlers':
        obj: dict
        for obj in config[obj_type].values():
            if obj['level'] in ('NOTSET', logging.NOTSET):
                # Use environment variable if level is not set
                obj['level'] = log_level
            if (obj_type == 'handlers'
                    and log_dir is not None
                    and 'filename' in obj.keys()):
                obj['filename'] = os.path.join(log_dir, obj['filename'])

    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)

    return config


def main():
    logging_config = setup_logging(config_file=os.environ.get('LOG_CONFIG'),
                                   log_dir=os.environ.get('LOGDIR'))
    dictConfig(logging_config)

    logger = logging.getLogger(__name__)
    store_path = os.environ.get('USER_STORE_PATH', 'user_store.pickle')
    try:
        config = VatusaConfig.from_environ()
        store = PickleUserStore.load_or_create(store_path,
                                               groups=DEFAULT_GROUPS)
    except (EnvironmentError, exceptions.UserStoreError):
        logger.exception('Could not start sync.')
        return

    sync_agent = VatusaSynchronizer(store=store, config=config)
    summary = sync_agent.run()
    if sync_agent.dry_run:
        sync_agent.save()

    with open('last_sync_info.json', 'w+') as f:
        json.dump(summary.to_dict(), f)


if __name__ == '__main__':
    main()
