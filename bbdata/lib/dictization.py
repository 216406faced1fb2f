# encoding: utf-8
from __future__ import annotations

import datetime
import re
from typing import Any, Mapping

from sqlalchemy.orm import class_mapper


# NOTE The functions in this file contain very generic methods for dictizing
# model objects. If a specialised use is needed please do NOT extend these
# functions.  Copy code from here as needed.

# a capital after a lowercase letter or digit, or a digit after a letter
_camel_boundary = re.compile(r'(?<=[a-z0-9])(?=[A-Z])|(?<=[a-zA-Z])(?=\d)')


def snake_to_camel(name: str) -> str:
    '''``sort_name`` -> ``sortName``'''
    first, *rest = name.split('_')
    return first + ''.join(part[:1].upper() + part[1:] for part in rest)


def camel_to_snake(name: str) -> str:
    '''``sortName`` -> ``sort_name``, ``isoCode3`` -> ``iso_code_3``'''
    return _camel_boundary.sub('_', name).lower()


def keys_to_camel(data: Mapping[str, Any]) -> dict[str, Any]:
    return {snake_to_camel(key): value for key, value in data.items()}


def keys_to_snake(data: Mapping[str, Any]) -> dict[str, Any]:
    '''Convert the keys of ``data`` to snake_case, walking into nested
    mappings.'''
    return {
        camel_to_snake(key):
            keys_to_snake(value) if isinstance(value, Mapping) else value
        for key, value in data.items()
    }


def table_dictize(obj: Any, camel: bool = False, **kw: Any) -> dict[str, Any]:
    '''Get any model object and represent it as a dict.

    With ``camel`` the column names are converted to camelCase keys, the
    form consumed by JSON clients.
    '''

    result_dict: dict[str, Any] = {}

    ModelClass = obj.__class__
    table = class_mapper(ModelClass).persist_selectable
    fields = [field.name for field in table.c]

    for field in fields:
        name = snake_to_camel(field) if camel else field
        value = getattr(obj, field)
        if value is None:
            result_dict[name] = value
        elif isinstance(value, (bool, int, float, dict, list)):
            result_dict[name] = value
        elif isinstance(value, datetime.datetime):
            result_dict[name] = value.isoformat()
        else:
            result_dict[name] = str(value)

    result_dict.update(kw)

    return result_dict
