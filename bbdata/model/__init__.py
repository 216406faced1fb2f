# encoding: utf-8
from __future__ import annotations

import warnings
import logging
import re
from typing import Any

import sqlalchemy as sa
from sqlalchemy import MetaData, orm

import bbdata.model.meta as meta

from bbdata.model.meta import Session, registry
from bbdata.exceptions import BBDataConfigurationException
from bbdata.model.language import (
    Language,
    Gender,
    language_table,
    gender_table,
)
from bbdata.model.editor import (
    Editor,
    EditorType,
    EditorLanguage,
    editor_table,
    editor_type_table,
    editor_language_table,
)
from bbdata.model.revision import (
    Revision,
    revision_table,
    revision_parent_table,
)
from bbdata.model.alias import (
    Alias,
    AliasSet,
    alias_table,
    alias_set_table,
    alias_set__alias_table,
)
from bbdata.model.identifier import (
    Identifier,
    IdentifierType,
    IdentifierSet,
    identifier_table,
    identifier_type_table,
    identifier_set_table,
    identifier_set__identifier_table,
)
from bbdata.model.relationship_attribute import (
    RelationshipAttribute,
    RelationshipAttributeType,
    RelationshipAttributeTextValue,
    RelationshipAttributeSet,
    relationship_attribute_table,
    relationship_attribute_type_table,
    relationship_attribute_text_value_table,
    relationship_attribute_set_table,
    relationship_attribute_set__relationship_attribute_table,
)
from bbdata.model.relationship import (
    Relationship,
    RelationshipType,
    RelationshipSet,
    relationship_table,
    relationship_type_table,
    relationship_set_table,
    relationship_set__relationship_table,
)
from bbdata.model.annotation import (
    Annotation,
    Disambiguation,
    annotation_table,
    disambiguation_table,
)
from bbdata.model.entity import (
    ENTITY_TYPES,
    Entity,
    EntityData,
    EntityRedirect,
    EntityRevision,
    SeriesOrderingType,
    Author,
    Edition,
    EditionGroup,
    Publisher,
    Series,
    Work,
    entity_table,
    entity_data_table,
    entity_redirect_table,
    entity_revision_table,
    series_ordering_type_table,
)
from bbdata.model.domain_object import (
    DomainObject,
)

from sqlalchemy.engine import Engine
from bbdata.types import AlchemySession

__all__ = [
    "registry", "Session", "Language", "Gender", "language_table",
    "gender_table", "Editor", "EditorType", "EditorLanguage", "editor_table",
    "editor_type_table", "editor_language_table", "Revision",
    "revision_table", "revision_parent_table", "Alias", "AliasSet",
    "alias_table", "alias_set_table", "alias_set__alias_table",
    "Identifier", "IdentifierType", "IdentifierSet", "identifier_table",
    "identifier_type_table", "identifier_set_table",
    "identifier_set__identifier_table", "RelationshipAttribute",
    "RelationshipAttributeType", "RelationshipAttributeTextValue",
    "RelationshipAttributeSet", "relationship_attribute_table",
    "relationship_attribute_type_table",
    "relationship_attribute_text_value_table",
    "relationship_attribute_set_table",
    "relationship_attribute_set__relationship_attribute_table",
    "Relationship", "RelationshipType", "RelationshipSet",
    "relationship_table", "relationship_type_table",
    "relationship_set_table", "relationship_set__relationship_table",
    "Annotation", "Disambiguation", "annotation_table",
    "disambiguation_table", "ENTITY_TYPES", "Entity", "EntityData",
    "EntityRedirect", "EntityRevision", "SeriesOrderingType", "Author",
    "Edition", "EditionGroup", "Publisher", "Series", "Work",
    "entity_table", "entity_data_table", "entity_redirect_table",
    "entity_revision_table", "series_ordering_type_table", "DomainObject",
    "init_model", "ensure_engine", "Repository", "repo",
    "close_all_sessions", "is_bbid",
]

log = logging.getLogger(__name__)


def init_model(engine: Engine) -> None:
    '''Call me before using any of the tables or classes in the model'''
    meta.Session.remove()
    meta.Session.configure(bind=engine)
    meta.create_local_session.configure(bind=engine)
    meta.engine = engine


def ensure_engine() -> Engine:
    """Return initialized SQLAlchemy engine or raise an error.

    This function guarantees that engine is initialized and provides a hint
    when someone attempts to use the database before model is properly
    initialized.

    Prefer using this function instead of direct access to engine via
    `meta.engine`.

    """
    if not meta.engine:
        log.error(
            "%s:%s must be called before any interaction with the database",
            init_model.__module__, init_model.__name__

        )
        raise BBDataConfigurationException("Model is not initialized")
    return meta.engine


class Repository():
    metadata: MetaData
    session: AlchemySession
    commit: Any

    # note: tables_created value is not sustained between instantiations
    #       so only useful for tests. The alternative is to use
    #       are_tables_created().
    tables_created_and_initialised: bool = False

    def __init__(self, metadata: MetaData, session: AlchemySession) -> None:
        self.metadata = metadata
        self.session = session
        self.commit = session.commit

    def commit_and_remove(self) -> None:
        self.session.commit()
        self.session.remove()

    def init_db(self) -> None:
        '''Ensures tables are created. Safe to run against a database that
        already has them.
        '''
        self.session.rollback()
        self.session.remove()

        if not self.tables_created_and_initialised:
            self.create_db()
            self.tables_created_and_initialised = True
        log.info('Database initialised')

    def clean_db(self) -> None:
        '''Drop every table found in the database, including ones this
        model does not know about.'''
        self.commit_and_remove()

        engine = ensure_engine()
        reflected = MetaData()
        with warnings.catch_warnings():
            warnings.filterwarnings('ignore', '.*(reflection).*')
            reflected.reflect(engine)

        with engine.begin() as conn:
            reflected.drop_all(conn)

        self.tables_created_and_initialised = False
        log.info('Database tables dropped')

    def create_db(self) -> None:
        with ensure_engine().begin() as conn:
            self.metadata.create_all(conn)

        log.info('Database tables created')

    def rebuild_db(self) -> None:
        '''Clean and init the db'''
        if self.tables_created_and_initialised:
            # just delete data, leaving tables - this is faster
            self.delete_all()
        else:
            # delete tables and data
            self.clean_db()
        self.session.remove()
        self.init_db()
        self.session.flush()
        log.info('Database rebuilt')

    def delete_all(self) -> None:
        '''Delete all data from all tables.'''
        self.session.remove()
        ## use raw connection for performance
        connection: Any = self.session.connection()
        inspector = sa.inspect(connection)
        for table in reversed(self.metadata.sorted_tables):
            # if the model was imported without create_db being run,
            # corresponding table can be missing from DB
            if not inspector.has_table(table.name):
                continue

            connection.execute(sa.delete(table))
        self.session.commit()
        log.info('Database table data deleted')

    def are_tables_created(self) -> bool:
        if not meta.engine:
            return False

        return bool(sa.inspect(meta.engine).get_table_names())


repo = Repository(meta.metadata, meta.Session)


def close_all_sessions() -> None:
    '''Close every session, releasing their connections.'''
    orm.close_all_sessions()


def is_bbid(id_string: str) -> bool:
    '''Tells the client if the string looks like a bbid or not'''
    reg_ex = '^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$'
    return bool(re.match(reg_ex, id_string))
