# encoding: utf-8
from __future__ import annotations

import re
from typing import Optional

from sqlalchemy import orm, types, Column, Table, ForeignKey

import bbdata.model.meta as meta
import bbdata.model.domain_object as domain_object

__all__ = ['Identifier', 'identifier_table', 'IdentifierType',
           'identifier_type_table', 'IdentifierSet', 'identifier_set_table',
           'identifier_set__identifier_table']


identifier_type_table = Table(
    'identifier_type', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('label', types.UnicodeText, nullable=False),
    Column('description', types.UnicodeText, nullable=False),
    Column('detection_regex', types.UnicodeText),
    Column('validation_regex', types.UnicodeText, nullable=False),
    Column('display_template', types.UnicodeText, nullable=False),
    Column('entity_type', types.Unicode(16), nullable=False),
    Column('deprecated', types.Boolean, nullable=False, default=False),
)

identifier_table = Table(
    'identifier', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('type_id', types.Integer, ForeignKey('identifier_type.id'),
           nullable=False),
    Column('value', types.UnicodeText, nullable=False),
)

identifier_set_table = Table(
    'identifier_set', meta.metadata,
    Column('id', types.Integer, primary_key=True),
)

identifier_set__identifier_table = Table(
    'identifier_set__identifier', meta.metadata,
    Column('set_id', types.Integer, ForeignKey('identifier_set.id'),
           primary_key=True),
    Column('identifier_id', types.Integer, ForeignKey('identifier.id'),
           primary_key=True),
)


class IdentifierType(domain_object.DomainObject):
    id: int
    label: str
    description: str
    detection_regex: Optional[str]
    validation_regex: str
    display_template: str
    entity_type: str
    deprecated: bool

    def validate(self, value: str) -> bool:
        return re.match(self.validation_regex, value) is not None


class Identifier(domain_object.DomainObject):
    id: int
    type_id: int
    value: str

    type: IdentifierType


class IdentifierSet(domain_object.DomainObject):
    id: int

    identifiers: list[Identifier]


meta.mapper(IdentifierType, identifier_type_table)

meta.mapper(Identifier, identifier_table, properties={
    'type': orm.relationship(IdentifierType),
})

meta.mapper(IdentifierSet, identifier_set_table, properties={
    'identifiers': orm.relationship(
        Identifier, secondary=identifier_set__identifier_table,
        order_by=identifier_table.c.id),
})
