# encoding: utf-8
from __future__ import annotations

import datetime
from typing import Optional

from sqlalchemy import orm, types, Column, Table, ForeignKey
from typing_extensions import Self

import bbdata.model.meta as meta
import bbdata.model.domain_object as domain_object
from bbdata.model.language import Language, Gender

__all__ = ['Editor', 'editor_table', 'EditorType', 'editor_type_table',
           'EditorLanguage', 'editor_language_table']


editor_type_table = Table(
    'editor_type', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('label', types.UnicodeText, nullable=False),
)

editor_table = Table(
    'editor', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('name', types.UnicodeText, nullable=False, unique=True),
    Column('bio', types.UnicodeText, nullable=False, default=u''),
    Column('created_at', types.DateTime, nullable=False,
           default=datetime.datetime.utcnow),
    Column('active_at', types.DateTime, nullable=False,
           default=datetime.datetime.utcnow),
    Column('type_id', types.Integer, ForeignKey('editor_type.id'),
           nullable=False),
    Column('gender_id', types.Integer, ForeignKey('gender.id')),
    # areas live in the MusicBrainz schema, which is not mapped here
    Column('area_id', types.Integer),
    Column('revisions_applied', types.Integer, nullable=False, default=0),
    Column('revisions_reverted', types.Integer, nullable=False, default=0),
    Column('total_revisions', types.Integer, nullable=False, default=0),
    Column('metabrainz_user_id', types.Integer, unique=True),
    Column('cached_metabrainz_name', types.UnicodeText),
)

editor_language_table = Table(
    'editor__language', meta.metadata,
    Column('editor_id', types.Integer, ForeignKey('editor.id'),
           primary_key=True),
    Column('language_id', types.Integer, ForeignKey('language.id'),
           primary_key=True),
    Column('proficiency', types.Unicode(16), nullable=False,
           default=u'basic'),
)


class EditorType(domain_object.DomainObject):
    id: int
    label: str


class EditorLanguage(domain_object.DomainObject):
    editor_id: int
    language_id: int
    proficiency: str

    language: Language


class Editor(domain_object.DomainObject):
    id: int
    name: str
    bio: str
    created_at: datetime.datetime
    active_at: datetime.datetime
    type_id: int
    gender_id: Optional[int]
    area_id: Optional[int]
    revisions_applied: int
    revisions_reverted: int
    total_revisions: int
    metabrainz_user_id: Optional[int]
    cached_metabrainz_name: Optional[str]

    type: EditorType
    gender: Optional[Gender]
    languages: list[EditorLanguage]

    @classmethod
    def by_metabrainz_id(cls, metabrainz_user_id: int) -> Optional[Self]:
        return meta.Session.query(cls).filter(
            cls.metabrainz_user_id == metabrainz_user_id).first()


meta.mapper(EditorType, editor_type_table)

meta.mapper(EditorLanguage, editor_language_table, properties={
    'language': orm.relationship(Language),
})

meta.mapper(Editor, editor_table, properties={
    'type': orm.relationship(EditorType),
    'gender': orm.relationship(Gender),
    'languages': orm.relationship(
        EditorLanguage, backref='editor', cascade='all, delete-orphan'),
})
