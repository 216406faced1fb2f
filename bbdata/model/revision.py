# encoding: utf-8
from __future__ import annotations

import datetime
from typing import Optional

from sqlalchemy import orm, types, Column, Table, ForeignKey

import bbdata.model.meta as meta
import bbdata.model.domain_object as domain_object
from bbdata.model.editor import Editor

__all__ = ['Revision', 'revision_table', 'revision_parent_table']


revision_table = Table(
    'revision', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('author_id', types.Integer, ForeignKey('editor.id'),
           nullable=False),
    Column('created_at', types.DateTime, nullable=False,
           default=datetime.datetime.utcnow),
    Column('is_merge', types.Boolean, nullable=False, default=False),
)

revision_parent_table = Table(
    'revision_parent', meta.metadata,
    Column('parent_id', types.Integer, ForeignKey('revision.id'),
           primary_key=True),
    Column('child_id', types.Integer, ForeignKey('revision.id'),
           primary_key=True),
)


class Revision(domain_object.DomainObject):
    '''A single edit made by an editor. A revision may touch several
    entities; the per-entity snapshots are
    :py:class:`~bbdata.model.entity.EntityRevision` rows sharing its id.'''
    id: int
    author_id: int
    created_at: datetime.datetime
    is_merge: bool

    author: Editor
    parents: list['Revision']
    children: list['Revision']

    @property
    def parent_ids(self) -> list[int]:
        return [parent.id for parent in self.parents]

    def latest_parent(self) -> Optional['Revision']:
        if not self.parents:
            return None
        return max(self.parents, key=lambda parent: parent.id)


meta.mapper(Revision, revision_table, properties={
    'author': orm.relationship(Editor, backref='revisions'),
    'parents': orm.relationship(
        Revision, secondary=revision_parent_table,
        primaryjoin=revision_table.c.id == revision_parent_table.c.child_id,
        secondaryjoin=revision_table.c.id ==
        revision_parent_table.c.parent_id,
        backref='children'),
})
