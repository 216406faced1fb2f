# encoding: utf-8
"""Locating and reading the ini file that configures bbdata.

Only the ``[app:main]`` section is read. A file may extend another one with
``use = config:<path>``, the path being relative to the extending file;
options of the extending file win. ``%(here)s`` expands to the directory of
the file that sets the option.

"""
from __future__ import annotations

import os
import logging
from logging.config import fileConfig as loggingFileConfig
from configparser import ConfigParser, RawConfigParser
from typing import Any, Optional

import click

from bbdata.exceptions import BBDataConfigurationException
from bbdata.types import Config

log = logging.getLogger(__name__)

APP_SECTION = u'app:main'
USE_PREFIX = u'config:'
DEFAULT_FILENAMES = (u'bbdata.ini', u'development.ini')


def _extended_file(filename: str) -> Optional[str]:
    parser = RawConfigParser()
    parser.read(filename)
    use = parser.get(APP_SECTION, u'use', fallback=u'').strip()
    if not use.startswith(USE_PREFIX):
        return None
    return os.path.join(
        os.path.dirname(filename), use[len(USE_PREFIX):].strip())


def config_chain(filename: str) -> list[str]:
    '''Return the absolute path of ``filename`` followed by the paths of
    the files it extends, nearest first.'''
    chain: list[str] = []
    next_file: Optional[str] = filename
    while next_file:
        path = os.path.abspath(next_file)
        if path in chain:
            raise BBDataConfigurationException(
                u'Circular dependency located in the configuration '
                u'chain: {}'.format(u' -> '.join(chain + [path])))
        if not os.path.exists(path):
            raise BBDataConfigurationException(
                u'Config file not found: {}'.format(path))
        chain.append(path)
        next_file = _extended_file(path)
    return chain


def read_config(filename: str) -> Config:
    '''Read the ``[app:main]`` options of ``filename`` and of every file it
    extends. ``__file__`` is set to the absolute path of ``filename``.'''
    chain = config_chain(filename)
    options: Config = {}
    for path in reversed(chain):
        parser = ConfigParser()
        # option names are case sensitive
        parser.optionxform = str  # type: ignore
        parser.read_dict({
            parser.default_section: {u'here': os.path.dirname(path)}})
        parser.read(path)
        if not parser.has_section(APP_SECTION):
            continue
        for option in parser.options(APP_SECTION):
            if option not in (u'here', u'use'):
                options[option] = parser.get(APP_SECTION, option)
    options[u'__file__'] = chain[0]
    log.debug(u'Loaded configuration from %s', u', '.join(chain))
    return options


def error_shout(exception: Any) -> None:
    """Report CLI error with a styled message.
    """
    click.secho(str(exception), fg=u'red', err=True)


def _has_logging_sections(filename: str) -> bool:
    parser = RawConfigParser()
    parser.read(filename)
    return all(parser.has_section(section)
               for section in (u'loggers', u'handlers', u'formatters'))


def _find_config_file(ini_path: Optional[str]) -> str:
    if ini_path:
        filename = os.path.abspath(os.path.expanduser(ini_path))
        source = u'-c parameter'
    elif os.environ.get(u'BBDATA_INI'):
        filename = os.environ[u'BBDATA_INI']
        source = u'$BBDATA_INI'
    else:
        for default_filename in DEFAULT_FILENAMES:
            filename = os.path.join(os.getcwd(), default_filename)
            if os.path.exists(filename):
                return filename
        raise BBDataConfigurationException(
            u'You need to specify the config (.ini) file path. Use the '
            u'--config parameter or set environment variable BBDATA_INI '
            u'or have one of {} in the current directory.'.format(
                u', '.join(DEFAULT_FILENAMES)))

    if not os.path.exists(filename):
        raise BBDataConfigurationException(
            u'Config file not found: {} (given by {})'.format(
                filename, source))
    return filename


def load_config(ini_path: Optional[str] = None) -> Config:
    '''Find the ini file, set up logging from it when it has logging
    sections, and return its options.

    The file is ``ini_path`` if given, else ``$BBDATA_INI``, else the first
    of ``bbdata.ini`` and ``development.ini`` in the current directory.
    '''
    filename = _find_config_file(ini_path)
    options = read_config(filename)
    if _has_logging_sections(filename):
        loggingFileConfig(filename, disable_existing_loggers=False)
    log.info(u'Using configuration file %s', filename)
    return options
