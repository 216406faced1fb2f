# encoding: utf-8

"""The table metadata, the mapper registry and the sessions of bbdata."""
from typing import Optional
from sqlalchemy import MetaData
import sqlalchemy.orm as orm
from sqlalchemy.engine import Engine

from bbdata.types import AlchemySession


__all__ = ['Session']


# Bound by model.init_model()
engine: Optional[Engine] = None

# Library functions flush explicitly, and objects stay readable after the
# caller commits.
_session_options = dict(autoflush=False, expire_on_commit=False)

Session: AlchemySession = orm.scoped_session(
    orm.sessionmaker(**_session_options))

# For callers that manage a transaction of their own
create_local_session = orm.sessionmaker(**_session_options)

metadata = MetaData()

registry = orm.registry(metadata=metadata)

mapper = registry.map_imperatively
