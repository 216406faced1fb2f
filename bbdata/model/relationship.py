# encoding: utf-8
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from sqlalchemy import orm, types, Column, Table, ForeignKey

import bbdata.model.meta as meta
import bbdata.model.domain_object as domain_object
import bbdata.model.types as _types
from bbdata.model.relationship_attribute import RelationshipAttributeSet

if TYPE_CHECKING:
    from bbdata.model.entity import Entity

__all__ = ['Relationship', 'relationship_table', 'RelationshipType',
           'relationship_type_table', 'RelationshipSet',
           'relationship_set_table', 'relationship_set__relationship_table']


relationship_type_table = Table(
    'relationship_type', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('label', types.UnicodeText, nullable=False),
    Column('description', types.UnicodeText, nullable=False),
    Column('link_phrase', types.UnicodeText, nullable=False),
    Column('reverse_link_phrase', types.UnicodeText, nullable=False),
    Column('source_entity_type', types.Unicode(16), nullable=False),
    Column('target_entity_type', types.Unicode(16), nullable=False),
    Column('deprecated', types.Boolean, nullable=False, default=False),
)

relationship_table = Table(
    'relationship', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('type_id', types.Integer, ForeignKey('relationship_type.id'),
           nullable=False),
    Column('source_bbid', _types.UuidType, ForeignKey('entity.bbid'),
           nullable=False),
    Column('target_bbid', _types.UuidType, ForeignKey('entity.bbid'),
           nullable=False),
    Column('attribute_set_id', types.Integer,
           ForeignKey('relationship_attribute_set.id')),
)

relationship_set_table = Table(
    'relationship_set', meta.metadata,
    Column('id', types.Integer, primary_key=True),
)

relationship_set__relationship_table = Table(
    'relationship_set__relationship', meta.metadata,
    Column('set_id', types.Integer, ForeignKey('relationship_set.id'),
           primary_key=True),
    Column('relationship_id', types.Integer, ForeignKey('relationship.id'),
           primary_key=True),
)


class RelationshipType(domain_object.DomainObject):
    id: int
    label: str
    description: str
    link_phrase: str
    reverse_link_phrase: str
    source_entity_type: str
    target_entity_type: str
    deprecated: bool


class Relationship(domain_object.DomainObject):
    '''A typed, directed edge between two entities. Relationships are
    shared by the relationship sets of both endpoints.'''
    id: int
    type_id: int
    source_bbid: str
    target_bbid: str
    attribute_set_id: Optional[int]

    type: RelationshipType
    source: 'Entity'
    target: 'Entity'
    attribute_set: Optional[RelationshipAttributeSet]

    def __repr__(self):
        return '<Relationship %s %s %s>' % (
            self.source_bbid, self.type_id, self.target_bbid)

    def other_bbid(self, bbid: str) -> str:
        '''Return the bbid at the other end of the relationship.'''
        if bbid == self.source_bbid:
            return self.target_bbid
        elif bbid == self.target_bbid:
            return self.source_bbid
        raise ValueError(
            'Entity %s is not in this relationship: %r' % (bbid, self))


class RelationshipSet(domain_object.DomainObject):
    id: int

    relationships: list[Relationship]


meta.mapper(RelationshipType, relationship_type_table)

meta.mapper(Relationship, relationship_table, properties={
    'type': orm.relationship(RelationshipType),
    'source': orm.relationship(
        'Entity', foreign_keys=[relationship_table.c.source_bbid]),
    'target': orm.relationship(
        'Entity', foreign_keys=[relationship_table.c.target_bbid]),
    'attribute_set': orm.relationship(RelationshipAttributeSet),
})

meta.mapper(RelationshipSet, relationship_set_table, properties={
    'relationships': orm.relationship(
        Relationship, secondary=relationship_set__relationship_table,
        order_by=relationship_table.c.id),
})
