# encoding: utf-8
from __future__ import annotations

from typing import Optional

from sqlalchemy import types, Column, Table
from typing_extensions import Self

import bbdata.model.meta as meta
import bbdata.model.domain_object as domain_object

__all__ = ['Language', 'language_table', 'Gender', 'gender_table']


language_table = Table(
    'language', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('name', types.UnicodeText, nullable=False),
    Column('iso_code_3', types.Unicode(3)),
)

gender_table = Table(
    'gender', meta.metadata,
    Column('id', types.Integer, primary_key=True),
    Column('name', types.UnicodeText, nullable=False),
)


class Language(domain_object.DomainObject):
    id: int
    name: str
    iso_code_3: Optional[str]

    @classmethod
    def by_iso_code(cls, code: str) -> Optional[Self]:
        return meta.Session.query(cls).filter(cls.iso_code_3 == code).first()


class Gender(domain_object.DomainObject):
    id: int
    name: str


meta.mapper(Language, language_table)
meta.mapper(Gender, gender_table)
