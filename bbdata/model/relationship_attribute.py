# encoding: utf-8
from __future__ import annotations

from typing import Optional

from sqlalchemy import orm, types, Column, Table, ForeignKey

import bbdata.model.meta as meta
import bbdata.model.domain_object as domain_object

__all__ = ['RelationshipAttribute', 'relationship_attribute_table',
           'RelationshipAttributeType', 'relationship_attribute_type_table',
           'RelationshipAttributeTextValue',
           'relationship_attribute_text_value_table',
           'RelationshipAttributeSet', 'relationship_attribute_set_table',
           'relationship_attribute_set__relationship_attribute_table']


relationship_attribute_type_table = Table(
    'relationship_attribute_type', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('name', types.UnicodeText, nullable=False),
    Column('description', types.UnicodeText),
)

relationship_attribute_table = Table(
    'relationship_attribute', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('attribute_type', types.Integer,
           ForeignKey('relationship_attribute_type.id'), nullable=False),
)

relationship_attribute_text_value_table = Table(
    'relationship_attribute_text_value', meta.metadata,
    Column('attribute_id', types.Integer,
           ForeignKey('relationship_attribute.id'), primary_key=True),
    Column('text_value', types.UnicodeText),
)

relationship_attribute_set_table = Table(
    'relationship_attribute_set', meta.metadata,
    Column('id', types.Integer, primary_key=True),
)

relationship_attribute_set__relationship_attribute_table = Table(
    'relationship_attribute_set__relationship_attribute', meta.metadata,
    Column('set_id', types.Integer,
           ForeignKey('relationship_attribute_set.id'), primary_key=True),
    Column('attribute_id', types.Integer,
           ForeignKey('relationship_attribute.id'), primary_key=True),
)


class RelationshipAttributeType(domain_object.DomainObject):
    id: int
    name: str
    description: Optional[str]


class RelationshipAttributeTextValue(domain_object.DomainObject):
    attribute_id: int
    text_value: Optional[str]


class RelationshipAttribute(domain_object.DomainObject):
    '''One typed attribute of a relationship, e.g. the position of a work
    within a series. The value lives in a satellite row.'''
    id: int
    attribute_type: int

    type: RelationshipAttributeType
    value: Optional[RelationshipAttributeTextValue]

    def as_dict(self):
        _dict = super(RelationshipAttribute, self).as_dict()
        _dict['value'] = self.value.as_dict() if self.value else None
        return _dict


class RelationshipAttributeSet(domain_object.DomainObject):
    id: int

    relationship_attributes: list[RelationshipAttribute]


meta.mapper(RelationshipAttributeType, relationship_attribute_type_table)

meta.mapper(RelationshipAttributeTextValue,
            relationship_attribute_text_value_table)

meta.mapper(RelationshipAttribute, relationship_attribute_table, properties={
    'type': orm.relationship(RelationshipAttributeType),
    'value': orm.relationship(
        RelationshipAttributeTextValue, uselist=False,
        backref='attribute'),
})

meta.mapper(RelationshipAttributeSet, relationship_attribute_set_table,
            properties={
    'relationship_attributes': orm.relationship(
        RelationshipAttribute,
        secondary=relationship_attribute_set__relationship_attribute_table,
        order_by=relationship_attribute_table.c.id),
})
