# encoding: utf-8
"""The global configuration object and the converters used to read its
string values.

Import the pieces you need: ``from bbdata.common import config, asint``.
"""
from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any, Iterator, TYPE_CHECKING

from bbdata.config.declaration import declaration as config_declaration

if TYPE_CHECKING:
    MutableMapping = MutableMapping[str, Any]

log = logging.getLogger(__name__)

# ``get`` without a default falls back to the declared one
_DECLARED_DEFAULT = object()


class BBDataConfig(MutableMapping):
    u'''Options of the library, keyed by their dotted ini names.

    :py:func:`~bbdata.config.environment.load_environment` fills the
    module level ``config`` instance from the ini file and the environment.
    Reading an option that was never set gives its declared default.
    '''
    _options: dict[str, Any]

    def __init__(self, *args: Any, **kwargs: Any):
        self._options = dict(*args, **kwargs)

    def __getitem__(self, key: str) -> Any:
        return self._options[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._options[key] = value

    def __delitem__(self, key: str) -> None:
        del self._options[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        return u'<BBDataConfig {!r}>'.format(self._options)

    def copy(self) -> dict[str, Any]:
        return dict(self._options)

    def clear(self) -> None:
        self._options.clear()

    def get(self, key: str, default: Any = _DECLARED_DEFAULT) -> Any:
        if default is not _DECLARED_DEFAULT:
            return self._options.get(key, default)

        if (key not in config_declaration
                and self._options.get(u'config.mode') == u'strict'):
            log.warning(u'Option %s is not declared', key)
        return self._options.get(key, config_declaration.default(key))


_truthy = frozenset([u'true', u'yes', u'on', u'y', u't', u'1'])
_falsy = frozenset([u'false', u'no', u'off', u'n', u'f', u'0'])


def asbool(obj: Any) -> bool:
    """Read a boolean option: ``yes``, ``on``, ``1`` and the like are true.

    :raises ValueError: for a string that is neither true nor false
    """
    if not isinstance(obj, str):
        return bool(obj)
    value = obj.strip().lower()
    if value in _truthy:
        return True
    if value in _falsy:
        return False
    raise ValueError(u'String is not true/false: {}'.format(obj))


def asint(obj: Any) -> int:
    """Read an integer option.

    :raises ValueError: if ``obj`` is not an integer
    """
    try:
        return int(obj)
    except (TypeError, ValueError):
        raise ValueError(u'Bad integer value: {}'.format(obj))


config_declaration.setup()

config = BBDataConfig()
