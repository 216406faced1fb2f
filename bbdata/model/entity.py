# encoding: utf-8
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import orm, types, Column, Table, ForeignKey
from typing_extensions import Self

import bbdata.model.meta as meta
import bbdata.model.types as _types
import bbdata.model.domain_object as domain_object
from bbdata.model.alias import Alias, AliasSet
from bbdata.model.annotation import Annotation, Disambiguation
from bbdata.model.identifier import IdentifierSet
from bbdata.model.relationship import RelationshipSet
from bbdata.model.revision import Revision

__all__ = ['Entity', 'entity_table', 'EntityRedirect',
           'entity_redirect_table', 'EntityData', 'entity_data_table',
           'EntityRevision', 'entity_revision_table', 'SeriesOrderingType',
           'series_ordering_type_table', 'ENTITY_TYPES', 'Author', 'Edition',
           'EditionGroup', 'Publisher', 'Series', 'Work']

ENTITY_TYPES = (
    u'Author', u'Edition', u'EditionGroup', u'Publisher', u'Series', u'Work',
)


entity_table = Table(
    'entity', meta.metadata,
    Column('bbid', _types.UuidType, primary_key=True,
           default=_types.make_uuid),
    Column('type', types.Unicode(16), nullable=False),
    Column('master_revision_id', types.Integer, ForeignKey('revision.id')),
)

entity_redirect_table = Table(
    'entity_redirect', meta.metadata,
    Column('source_bbid', _types.UuidType, ForeignKey('entity.bbid'),
           primary_key=True),
    Column('target_bbid', _types.UuidType, ForeignKey('entity.bbid'),
           nullable=False),
)

entity_data_table = Table(
    'entity_data', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('alias_set_id', types.Integer, ForeignKey('alias_set.id')),
    Column('identifier_set_id', types.Integer,
           ForeignKey('identifier_set.id')),
    Column('relationship_set_id', types.Integer,
           ForeignKey('relationship_set.id')),
    Column('annotation_id', types.Integer, ForeignKey('annotation.id')),
    Column('disambiguation_id', types.Integer,
           ForeignKey('disambiguation.id')),
    # type specific properties, see bbdata.lib.entity
    Column('extra', _types.JsonDictType),
)

entity_revision_table = Table(
    'entity_revision', meta.metadata,
    Column('id', types.Integer, ForeignKey('revision.id'), primary_key=True),
    Column('bbid', _types.UuidType, ForeignKey('entity.bbid'),
           primary_key=True),
    # null for the revision that deleted the entity
    Column('data_id', types.Integer, ForeignKey('entity_data.id')),
)

series_ordering_type_table = Table(
    'series_ordering_type', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('label', types.UnicodeText, nullable=False),
)


class SeriesOrderingType(domain_object.DomainObject):
    id: int
    label: str


class EntityData(domain_object.DomainObject):
    '''The state of an entity at one revision. Rows are shared between
    revisions that did not change the entity.'''
    id: int
    alias_set_id: Optional[int]
    identifier_set_id: Optional[int]
    relationship_set_id: Optional[int]
    annotation_id: Optional[int]
    disambiguation_id: Optional[int]
    extra: dict[str, Any]

    alias_set: Optional[AliasSet]
    identifier_set: Optional[IdentifierSet]
    relationship_set: Optional[RelationshipSet]
    annotation: Optional[Annotation]
    disambiguation: Optional[Disambiguation]

    def __init__(self, **kwargs: Any) -> None:
        self.extra = {}
        super(EntityData, self).__init__(**kwargs)

    @property
    def default_alias(self) -> Optional[Alias]:
        if self.alias_set is None:
            return None
        return self.alias_set.default_alias


class EntityRevision(domain_object.DomainObject):
    id: int
    bbid: str
    data_id: Optional[int]

    revision: Revision
    data: Optional[EntityData]
    entity: 'Entity'

    def parent(self) -> Optional[Self]:
        '''Return the revision of the same entity that this revision was
        based on, or None for the first revision.'''
        parent_ids = self.revision.parent_ids
        if not parent_ids:
            return None

        session = orm.object_session(self) or meta.Session
        return session.query(EntityRevision).filter(
            EntityRevision.bbid == self.bbid,
            EntityRevision.id.in_(parent_ids),
        ).order_by(EntityRevision.id.desc()).first()


class Entity(domain_object.DomainObject):
    bbid: str
    type: str
    master_revision_id: Optional[int]

    revisions: list[EntityRevision]

    @property
    def master_revision(self) -> Optional[EntityRevision]:
        if self.master_revision_id is None:
            return None
        session = orm.object_session(self) or meta.Session
        return session.get(
            EntityRevision, (self.master_revision_id, self.bbid))

    @property
    def data(self) -> Optional[EntityData]:
        '''Data of the master revision. None for deleted entities.'''
        revision = self.master_revision
        return revision.data if revision else None

    @property
    def is_deleted(self) -> bool:
        return self.master_revision_id is not None and self.data is None


class EntityRedirect(domain_object.DomainObject):
    source_bbid: str
    target_bbid: str


class Author(Entity):
    pass


class Edition(Entity):
    pass


class EditionGroup(Entity):
    pass


class Publisher(Entity):
    pass


class Series(Entity):
    pass


class Work(Entity):
    pass


meta.mapper(SeriesOrderingType, series_ordering_type_table)

meta.mapper(EntityData, entity_data_table, properties={
    'alias_set': orm.relationship(AliasSet),
    'identifier_set': orm.relationship(IdentifierSet),
    'relationship_set': orm.relationship(RelationshipSet),
    'annotation': orm.relationship(Annotation),
    'disambiguation': orm.relationship(Disambiguation),
})

meta.mapper(EntityRevision, entity_revision_table, properties={
    'revision': orm.relationship(Revision),
    'data': orm.relationship(EntityData),
})

meta.mapper(Entity, entity_table,
            polymorphic_on=entity_table.c.type,
            properties={
    'revisions': orm.relationship(
        EntityRevision, backref='entity',
        order_by=entity_revision_table.c.id),
})

for _entity_class in (Author, Edition, EditionGroup, Publisher, Series, Work):
    meta.mapper(_entity_class, inherits=Entity,
                polymorphic_identity=_entity_class.__name__)

meta.mapper(EntityRedirect, entity_redirect_table, properties={
    'source': orm.relationship(
        Entity, foreign_keys=[entity_redirect_table.c.source_bbid]),
    'target': orm.relationship(
        Entity, foreign_keys=[entity_redirect_table.c.target_bbid]),
})
