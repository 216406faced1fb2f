# encoding: utf-8

import pytest

import bbdata.model as model
import bbdata.tests.factories as factories


@pytest.mark.usefixtures(u"clean_db")
class TestIdentifierSet(object):
    def test_identifiers(self):
        identifier_type = factories.IdentifierType(
            validation_regex=r"^\d{9}[\dX]$")
        first = factories.Identifier(type=identifier_type, value=u'0140449175')
        second = factories.Identifier(type=identifier_type)
        identifier_set = model.IdentifierSet()
        identifier_set.identifiers.extend([second, first])
        model.Session.add(identifier_set)
        model.Session.flush()
        model.Session.expire(identifier_set)

        assert [item.id for item in identifier_set.identifiers] == sorted(
            [first.id, second.id])
        assert identifier_type.validate(u'0140449175')
        assert not identifier_type.validate(u'ISBN 0140449175')


@pytest.mark.usefixtures(u"clean_db")
class TestRelationshipSet(object):
    def test_relationship_shared_by_both_sets(self):
        author = factories.Author()
        work = factories.Work()
        relationship = model.Relationship(
            type=factories.RelationshipType(),
            source_bbid=author.bbid, target_bbid=work.bbid)
        author_set = model.RelationshipSet(relationships=[relationship])
        work_set = model.RelationshipSet(relationships=[relationship])
        model.Session.add_all([author_set, work_set])
        model.Session.flush()

        assert author_set.relationships[0] is work_set.relationships[0]
        assert relationship.other_bbid(work.bbid) == author.bbid
        with pytest.raises(ValueError):
            relationship.other_bbid(model.types.make_uuid())


@pytest.mark.usefixtures(u"clean_db")
class TestAliasSet(object):
    def test_default_alias(self):
        first = factories.Alias(name=u'b')
        second = factories.Alias(name=u'a')
        alias_set = model.AliasSet(aliases=[first, second],
                                   default_alias=second)
        model.Session.add(alias_set)
        model.Session.flush()

        assert alias_set.default_alias_id == second.id
        data = model.EntityData(alias_set=alias_set)
        assert data.default_alias is second
        assert model.EntityData().default_alias is None
