# encoding: utf-8
from __future__ import annotations

from typing import Any, Dict, Mapping, Union

from typing_extensions import TypeAlias
from sqlalchemy.orm.scoping import ScopedSession
from sqlalchemy.orm.query import Query
from sqlalchemy.orm import Session

__all__ = [
    "AlchemySession", "Query", "Config", "SessionLike", "SetItem",
]

AlchemySession = ScopedSession[Any]

# Anything that can be handed to library functions as the active
# transaction: the scoped session itself or a plain session.
SessionLike: TypeAlias = Union[AlchemySession, Session]

Config: TypeAlias = Dict[str, Union[str, Mapping[str, str]]]

# Set items are either mapped model instances or plain dicts with
# snake_case keys matching the item table columns.
SetItem: TypeAlias = Union[Mapping[str, Any], Any]
