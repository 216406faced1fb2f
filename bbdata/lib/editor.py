# encoding: utf-8
from __future__ import annotations

import logging
from typing import Optional

import bbdata.model as model
from bbdata.common import config
from bbdata.types import SessionLike

log = logging.getLogger(__name__)

DELETED_METABRAINZ_NAME = u'<deleted>'


def get_editor_id_by_metabrainz_id(
        session: SessionLike, metabrainz_user_id: int) -> Optional[int]:
    row = session.query(model.Editor.id).filter(
        model.Editor.metabrainz_user_id == metabrainz_user_id).first()
    return row[0] if row else None


def delete_editor_by_metabrainz_id(
        session: SessionLike, metabrainz_user_id: int) -> bool:
    '''Anonymise the editor linked to a MetaBrainz account.

    The editor row is kept so that their revisions stay attributed, but
    their name is replaced, their bio, gender and area are cleared and
    their languages are removed. Nothing is committed.

    :returns: False if no editor is linked to ``metabrainz_user_id``
    '''
    editor_id = get_editor_id_by_metabrainz_id(session, metabrainz_user_id)
    if editor_id is None:
        return False

    editor = session.get(model.Editor, editor_id)
    template = config.get('bbdata.editor.deleted_name_template')
    editor.name = template.format(id=editor_id)
    editor.cached_metabrainz_name = DELETED_METABRAINZ_NAME
    editor.bio = u''
    editor.gender_id = None
    editor.area_id = None
    editor.languages[:] = []
    session.flush()

    log.info(u'Deleted editor %s (MetaBrainz user %s)',
             editor_id, metabrainz_user_id)
    return True
