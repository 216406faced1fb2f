# encoding: utf-8
'''Turn a loaded configuration into a usable environment: the global
:py:data:`bbdata.common.config` object and a database engine bound to the
model.'''
from __future__ import annotations

import os
import logging
import warnings
from typing import Any, Union

import sqlalchemy
import sqlalchemy.exc
from sqlalchemy import event

import bbdata.model as model
from bbdata.common import BBDataConfig, config, config_declaration
from bbdata.exceptions import BBDataConfigurationException
from bbdata.types import Config

log = logging.getLogger(__name__)


def load_environment(conf: Union[Config, BBDataConfig]) -> None:
    """
    Configure the global ``config`` object and the database engine. This
    code should only need to be run once.
    """
    if conf.get('__file__'):
        os.environ['BBDATA_CONFIG'] = str(conf['__file__'])

    # Initialize main config object
    config.update(conf)

    # Suppress a benign warning about mapped types on reflection
    warnings.filterwarnings(
        'ignore', '^Did not recognize type', sqlalchemy.exc.SAWarning)

    update_config()


# A mapping of config settings that can be overridden by env vars.
CONFIG_FROM_ENV_VARS: dict[str, str] = {
    'sqlalchemy.url': 'BBDATA_SQLALCHEMY_URL',
}


def update_config() -> None:
    ''' This code needs to be run when the config is changed to take those
    changes into account. '''

    for option in CONFIG_FROM_ENV_VARS:
        from_env = os.environ.get(CONFIG_FROM_ENV_VARS[option], None)
        if from_env:
            config[option] = from_env

    config_declaration.setup()
    config_declaration.normalize(config)

    errors = config_declaration.validate(config)
    if errors:
        for error in errors:
            log.error(error)
        raise BBDataConfigurationException(u'\n'.join(errors))

    # Initialize SQLAlchemy
    engine = sqlalchemy.engine_from_config(config)
    if engine.dialect.name == u'sqlite':
        event.listen(engine, u'connect', _enable_sqlite_foreign_keys)
    model.init_model(engine)
    log.debug(u'Database engine initialised for %s', engine.url)


def _enable_sqlite_foreign_keys(dbapi_connection: Any,
                                connection_record: Any) -> None:
    # sqlite ignores foreign keys unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute(u'PRAGMA foreign_keys=ON')
    cursor.close()
