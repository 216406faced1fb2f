# encoding: utf-8
from __future__ import annotations

from typing import Optional

from sqlalchemy import orm, types, Column, Table, ForeignKey

import bbdata.model.meta as meta
import bbdata.model.domain_object as domain_object
from bbdata.model.language import Language

__all__ = ['Alias', 'alias_table', 'AliasSet', 'alias_set_table',
           'alias_set__alias_table']


alias_table = Table(
    'alias', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('name', types.UnicodeText, nullable=False),
    Column('sort_name', types.UnicodeText, nullable=False),
    Column('language_id', types.Integer, ForeignKey('language.id')),
    Column('primary', types.Boolean, nullable=False, default=False),
)

alias_set_table = Table(
    'alias_set', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('default_alias_id', types.Integer, ForeignKey('alias.id')),
)

alias_set__alias_table = Table(
    'alias_set__alias', meta.metadata,
    Column('set_id', types.Integer, ForeignKey('alias_set.id'),
           primary_key=True),
    Column('alias_id', types.Integer, ForeignKey('alias.id'),
           primary_key=True),
)


class Alias(domain_object.DomainObject):
    id: int
    name: str
    sort_name: str
    language_id: Optional[int]
    primary: bool

    language: Optional[Language]


class AliasSet(domain_object.DomainObject):
    id: int
    default_alias_id: Optional[int]

    aliases: list[Alias]
    default_alias: Optional[Alias]


meta.mapper(Alias, alias_table, properties={
    'language': orm.relationship(Language),
})

meta.mapper(AliasSet, alias_set_table, properties={
    'aliases': orm.relationship(
        Alias, secondary=alias_set__alias_table,
        order_by=alias_table.c.id),
    'default_alias': orm.relationship(
        Alias, foreign_keys=[alias_set_table.c.default_alias_id]),
})
