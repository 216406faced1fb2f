# encoding: utf-8
from __future__ import annotations

import logging

import click

import bbdata.model as model
from . import error_shout

log = logging.getLogger(__name__)


@click.group(short_help=u"Create or drop the bbdata tables.")
def db():
    """Create or drop the tables of the bbdata schema.
    """
    pass


@db.command()
def init():
    """Create the tables of the data model.
    """
    log.info(u"Creating the bbdata tables")
    try:
        model.repo.init_db()
    except Exception as e:
        error_shout(e)
    else:
        click.secho(u'Tables created', fg=u'green', bold=True)


@db.command()
@click.confirmation_option(
    prompt=u'This drops every table with all its rows. Continue?')
def clean():
    """Drop every table in the database.
    """
    try:
        model.repo.clean_db()
    except Exception as e:
        error_shout(e)
    else:
        click.secho(u'Tables dropped', fg=u'green', bold=True)
