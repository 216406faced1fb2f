# encoding: utf-8

import pytest

import bbdata.model as model
import bbdata.lib.editor as editor_lib
import bbdata.tests.factories as factories


@pytest.mark.usefixtures(u"clean_db")
class TestEditor(object):
    def test_id_by_metabrainz_id(self, session):
        editor = factories.Editor(metabrainz_user_id=1234)
        assert editor_lib.get_editor_id_by_metabrainz_id(
            session, 1234) == editor.id

    def test_id_by_unknown_metabrainz_id(self, session):
        factories.Editor(metabrainz_user_id=1234)
        assert editor_lib.get_editor_id_by_metabrainz_id(
            session, 4321) is None

    def test_delete(self, session):
        gender = factories.Gender()
        language = factories.Language()
        editor = factories.Editor(
            metabrainz_user_id=1234, bio=u'Reads a lot', gender=gender,
            area_id=12)
        editor.languages.append(model.EditorLanguage(language=language))
        session.flush()
        revision = factories.Revision(author=editor)

        assert editor_lib.delete_editor_by_metabrainz_id(session, 1234)

        session.expire_all()
        deleted = session.get(model.Editor, editor.id)
        assert deleted.name == u'Deleted Editor #{}'.format(editor.id)
        assert deleted.cached_metabrainz_name == u'<deleted>'
        assert deleted.bio == u''
        assert deleted.gender_id is None
        assert deleted.area_id is None
        assert deleted.languages == []
        assert model.EditorLanguage.count() == 0
        assert deleted.metabrainz_user_id == 1234
        assert session.get(model.Revision, revision.id).author_id == \
            editor.id

    def test_delete_keeps_other_editors(self, session):
        factories.Editor(metabrainz_user_id=1234)
        other = factories.Editor(metabrainz_user_id=5678)
        name = other.name

        editor_lib.delete_editor_by_metabrainz_id(session, 1234)
        assert session.get(model.Editor, other.id).name == name

    @pytest.mark.bbdata_config(
        u'bbdata.editor.deleted_name_template', u'Gone {id}')
    def test_name_template(self, session):
        editor = factories.Editor(metabrainz_user_id=1234)
        editor_lib.delete_editor_by_metabrainz_id(session, 1234)
        assert editor.name == u'Gone {}'.format(editor.id)

    def test_delete_unknown(self, session):
        assert editor_lib.delete_editor_by_metabrainz_id(
            session, 4321) is False
