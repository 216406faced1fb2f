# encoding: utf-8
from __future__ import annotations

import logging
from typing import Optional

import click

import bbdata.cli as bbdata_cli
from bbdata.exceptions import BBDataConfigurationException
from . import db, editor, error_shout

log = logging.getLogger(__name__)


class CtxObject(object):

    def __init__(self, conf: Optional[str] = None):
        # Don't import `load_config` by itself, rather call it using
        # module so that it can be patched during tests
        raw_config = bbdata_cli.load_config(conf)

        from bbdata.config.environment import load_environment
        load_environment(raw_config)

        # Attach the actual config object to the context
        from bbdata.common import config
        self.config = config


class BBDataGroup(click.Group):

    def parse_args(self, ctx: click.Context, args: list[str]):
        """Print the help message when no command is given, even if
        options such as ``-c`` were passed.
        """
        result = super().parse_args(ctx, args)
        if not ctx.protected_args and not ctx.args:
            click.echo(ctx.get_help(), color=ctx.color)
            ctx.exit()
        return result


def _init_bbdata_config(ctx: click.Context, param: str, value: str):
    if ctx.resilient_parsing:
        return
    _add_ctx_object(ctx, value)


def _add_ctx_object(ctx: click.Context, path: Optional[str] = None):
    """Load the config file under provided path and set up the database
    engine.
    """
    try:
        ctx.obj = CtxObject(path)
    except BBDataConfigurationException as e:
        error_shout(e)
        ctx.abort()


@click.group(cls=BBDataGroup)
@click.option(
    u'-c', u'--config', metavar=u'CONFIG',
    is_eager=True, callback=_init_bbdata_config, expose_value=False,
    help=u'Config file to use (default: bbdata.ini)')
@click.help_option(u'-h', u'--help')
def bbdata():
    pass


bbdata.add_command(db.db)
bbdata.add_command(editor.editor)
