# encoding: utf-8

import copy
import uuid
from typing import Any

import simplejson as json

from sqlalchemy import types


__all__ = ['make_uuid', 'UuidType', 'JsonDictType']


def make_uuid() -> str:
    return str(uuid.uuid4())


class UuidType(types.TypeDecorator):  # type: ignore
    '''bbids are stored as text; accept ``uuid.UUID`` values too.'''
    impl = types.Unicode
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any):
        if value is None:
            return None
        return str(value)

    def process_result_value(self, value: Any, dialect: Any):
        return value

    def copy(self, **kw: Any):
        return UuidType(self.impl.length)

    @classmethod
    def default(cls):
        return str(uuid.uuid4())


class JsonDictType(types.TypeDecorator):  # type: ignore
    '''Store a dict as JSON serializing on save and unserializing on use.

    Note that default values don\'t appear to work correctly with this
    type, a workaround is to instead override ``__init__()`` to explicitly
    set any default values you expect.
    '''
    impl = types.UnicodeText
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any):
        # ensure we stores nulls in db not json "null"
        if value is None or value == {}:
            return None

        if isinstance(value, str):
            return value

        # ensure_ascii=False => allow unicode but still need to convert
        return str(json.dumps(value, ensure_ascii=False))

    def process_result_value(self, value: Any, dialect: Any) -> Any:
        if value is None:
            return {}

        return json.loads(value)

    def copy(self, **kw: Any):
        return JsonDictType(self.impl.length)

    def copy_value(self, value: Any) -> Any:
        return copy.copy(value)
