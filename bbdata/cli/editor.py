# encoding: utf-8
from __future__ import annotations

import logging

import click

import bbdata.model as model
from bbdata.lib.editor import delete_editor_by_metabrainz_id
from . import error_shout

log = logging.getLogger(__name__)


@click.group(short_help=u"Manage editors.")
def editor():
    """Manage editors.
    """
    pass


@editor.command(u'delete', short_help=u'Anonymise an editor.')
@click.argument(u'metabrainz_user_id', type=int)
@click.confirmation_option(
    prompt=u'The editor will be anonymised. Do you want to continue?')
def delete(metabrainz_user_id: int):
    """Anonymise the editor linked to METABRAINZ_USER_ID.
    """
    try:
        deleted = delete_editor_by_metabrainz_id(
            model.Session, metabrainz_user_id)
        model.repo.commit_and_remove()
    except Exception as e:
        model.Session.rollback()
        error_shout(e)
        raise click.Abort()

    if not deleted:
        error_shout(u'No editor linked to MetaBrainz user {}'.format(
            metabrainz_user_id))
        raise click.Abort()
    click.secho(u'Editor deleted', fg=u'green', bold=True)
