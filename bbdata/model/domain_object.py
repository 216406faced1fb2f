# encoding: utf-8
from __future__ import annotations

import datetime
from typing import Any

from sqlalchemy import orm

from .meta import Session

__all__ = ['DomainObject']


class DomainObject(object):
    '''Base class of the mapped classes.

    Rows are written through the session of the caller's transaction;
    nothing here adds, commits or deletes.
    '''

    Session = Session

    def __init__(self, **kwargs: Any) -> None:
        for k, v in kwargs.items():
            setattr(self, k, v)

    @classmethod
    def count(cls) -> int:
        return cls.Session.query(cls).count()

    @classmethod
    def _column_names(cls) -> list[str]:
        table: Any = orm.class_mapper(cls).persist_selectable
        return [col.name for col in table.c]

    def as_dict(self) -> dict[str, Any]:
        '''The column values of the row in table order, datetimes as ISO
        8601 strings.'''
        result = {}
        for name in self._column_names():
            value = getattr(self, name)
            if isinstance(value, datetime.datetime):
                value = value.isoformat()
            result[name] = value
        return result

    def __repr__(self) -> str:
        columns = u' '.join(
            u'{}={}'.format(name, getattr(self, name))
            for name in self._column_names())
        return u'<{} {}>'.format(self.__class__.__name__, columns)
