# encoding: utf-8
"""Declared configuration options and their defaults.

Every option read through :py:data:`bbdata.common.config` should be listed
here. Undeclared options still work, but in ``config.mode = strict`` a
warning is logged each time one of them is read without an explicit
default.

"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, NamedTuple, Optional

log = logging.getLogger(__name__)

__all__ = ["Option", "Declaration", "declaration"]


def _as_str(value: Any) -> str:
    return str(value)


class Option(NamedTuple):
    key: str
    default: Any
    normalize: Callable[[Any], Any] = _as_str
    required: bool = False
    description: str = ''


class Declaration(object):
    _options: dict[str, Option]
    _core_loaded: bool

    def __init__(self) -> None:
        self._options = {}
        self._core_loaded = False

    def setup(self) -> None:
        '''Load the core option declarations. Safe to call repeatedly.'''
        if self._core_loaded:
            return
        _setup(self)
        self._core_loaded = True

    def __contains__(self, key: str) -> bool:
        return key in self._options

    def __iter__(self):
        return iter(self._options)

    def declare(self, key: str, default: Any = None, **kwargs: Any) -> Option:
        option = Option(key, default, **kwargs)
        self._options[key] = option
        return option

    def get(self, key: str) -> Optional[Option]:
        return self._options.get(key)

    def default(self, key: str) -> Any:
        option = self._options.get(key)
        return option.default if option else None

    def normalize(self, config: Any) -> None:
        '''Fill in declared defaults and convert values to their declared
        types, in place.'''
        for key, option in self._options.items():
            value = config.get(key, option.default)
            if value is None:
                continue
            config[key] = option.normalize(value)

    def validate(self, config: Any) -> list[str]:
        errors = []
        for key, option in self._options.items():
            if option.required and not config.get(key):
                errors.append(u'Missing required option: {}'.format(key))
        return errors


def _setup(decl: Declaration) -> Declaration:
    from bbdata.common import asbool, asint

    decl.declare(
        'sqlalchemy.url', required=True,
        description='Database connection URL')
    decl.declare(
        'sqlalchemy.echo', False, normalize=asbool,
        description='Log every SQL statement')
    decl.declare(
        'config.mode', 'default',
        description='Set to "strict" to warn about undeclared options')
    decl.declare(
        'bbdata.redirect.max_depth', 50, normalize=asint,
        description='Maximum number of entity redirects to follow')
    decl.declare(
        'bbdata.editor.deleted_name_template', 'Deleted Editor #{id}',
        description='Name given to an editor after their account is deleted')
    return decl


declaration = Declaration()
