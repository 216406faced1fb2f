# encoding: utf-8
from __future__ import annotations

import datetime
from typing import Optional

from sqlalchemy import orm, types, Column, Table, ForeignKey

import bbdata.model.meta as meta
import bbdata.model.domain_object as domain_object
from bbdata.model.revision import Revision

__all__ = ['Annotation', 'annotation_table', 'Disambiguation',
           'disambiguation_table']


annotation_table = Table(
    'annotation', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('content', types.UnicodeText, nullable=False),
    Column('created_at', types.DateTime, nullable=False,
           default=datetime.datetime.utcnow),
    Column('last_revision_id', types.Integer, ForeignKey('revision.id'),
           nullable=False),
)

disambiguation_table = Table(
    'disambiguation', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('comment', types.UnicodeText, nullable=False),
)


class Annotation(domain_object.DomainObject):
    id: int
    content: str
    created_at: datetime.datetime
    last_revision_id: int

    last_revision: Optional[Revision]


class Disambiguation(domain_object.DomainObject):
    id: int
    comment: str


meta.mapper(Annotation, annotation_table, properties={
    'last_revision': orm.relationship(Revision),
})
meta.mapper(Disambiguation, disambiguation_table)
