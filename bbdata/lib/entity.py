# encoding: utf-8
from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Mapping, Optional

import bbdata.model as model
from bbdata.common import asint, config
from bbdata.exceptions import (
    InvalidArgument,
    NotFound,
    RedirectCycleError,
    UnrecognizedEntityType,
)
from bbdata.lib.dictization import (
    camel_to_snake,
    keys_to_camel,
    snake_to_camel,
    table_dictize,
)
from bbdata.types import SessionLike

__all__ = [
    'parse_date', 'get_additional_entity_props', 'get_entity_models',
    'get_entity_model_by_type', 'get_redirect_bbid',
    'recursively_get_redirect_bbid', 'get_entity', 'entity_dictize',
    'get_entity_parent_alias',
]

log = logging.getLogger(__name__)

_date_re = re.compile(r'^([+-]?\d+)(?:-(\d{1,2})(?:-(\d{1,2}))?)?$')

_DATED_PROPS = ('begin', 'end')

_PICKED_PROPS: dict[str, tuple[str, ...]] = {
    u'Edition': ('edition_group_bbid', 'width', 'height', 'depth',
                 'weight', 'pages', 'format_id', 'status_id'),
    u'EditionGroup': ('type_id',),
    u'Work': ('type_id',),
    u'Series': ('entity_type', 'ordering_type_id'),
}


def parse_date(date: Optional[str]) -> tuple[
        Optional[int], Optional[int], Optional[int]]:
    '''Split a partial ISO 8601 date into ``(year, month, day)``.

    ``'1867'``, ``'1867-03'`` and ``'-0044-03-15'`` are accepted; missing
    parts are None, as is everything for an empty date.
    '''
    if not date:
        return (None, None, None)

    match = _date_re.match(str(date).strip())
    if not match:
        raise InvalidArgument(u'Invalid date: {!r}'.format(date))

    year, month, day = match.groups()
    return (
        int(year),
        int(month) if month else None,
        int(day) if day else None,
    )


def _dated_props(entity_data: Mapping[str, Any]) -> dict[str, Any]:
    props: dict[str, Any] = {}
    for prefix in _DATED_PROPS:
        date = entity_data.get(prefix + '_date')
        year, month, day = parse_date(date)
        props.update({
            prefix + '_date': date,
            prefix + '_year': year,
            prefix + '_month': month,
            prefix + '_day': day,
        })
    props['ended'] = entity_data.get('ended')
    return props


def get_additional_entity_props(
        entity_data: Mapping[str, Any],
        entity_type: str) -> Optional[dict[str, Any]]:
    '''Return the properties specific to ``entity_type`` found in
    ``entity_data``, with begin and end dates split into their parts.

    Returns None for an unknown entity type.
    '''
    if entity_type == u'Author':
        props = _dated_props(entity_data)
        for key in ('type_id', 'gender_id', 'begin_area_id', 'end_area_id'):
            props[key] = entity_data.get(key)
        return props

    if entity_type == u'Publisher':
        props = _dated_props(entity_data)
        for key in ('type_id', 'area_id'):
            props[key] = entity_data.get(key)
        return props

    if entity_type in _PICKED_PROPS:
        return {
            key: entity_data[key] for key in _PICKED_PROPS[entity_type]
            if key in entity_data
        }

    return None


def get_entity_models() -> dict[str, type[model.Entity]]:
    '''Return the entity models, keyed by their type name.'''
    return {
        u'Author': model.Author,
        u'Edition': model.Edition,
        u'EditionGroup': model.EditionGroup,
        u'Publisher': model.Publisher,
        u'Series': model.Series,
        u'Work': model.Work,
    }


def get_entity_model_by_type(entity_type: str) -> type[model.Entity]:
    '''Return the entity model for ``entity_type``.

    :raises UnrecognizedEntityType: if no model has that name
    '''
    entity_models = get_entity_models()
    if entity_type not in entity_models:
        raise UnrecognizedEntityType(
            u'Unrecognized entity type: {!r}'.format(entity_type))
    return entity_models[entity_type]


def get_redirect_bbid(session: SessionLike, bbid: str,
                      max_depth: Optional[int] = None) -> str:
    '''Return the bbid that ``bbid`` finally redirects to, following
    redirect chains. Returns ``bbid`` itself when it is not redirected.

    :raises RedirectCycleError: if the chain loops back on itself or is
        longer than ``max_depth`` (``bbdata.redirect.max_depth`` by default)
    '''
    if max_depth is None:
        max_depth = asint(config.get('bbdata.redirect.max_depth'))

    chain = [bbid]
    current = bbid
    while True:
        row = session.query(model.EntityRedirect.target_bbid).filter(
            model.EntityRedirect.source_bbid == current).first()
        if row is None:
            return current

        current = row[0]
        looped = current in chain
        chain.append(current)
        if looped:
            log.error(u'Entity redirect cycle: %s', u' -> '.join(chain))
            raise RedirectCycleError(
                u'Entity redirect cycle: {}'.format(u' -> '.join(chain)),
                chain)
        if len(chain) - 1 > max_depth:
            raise RedirectCycleError(
                u'More than {} redirects starting at {}'.format(
                    max_depth, bbid),
                chain)


recursively_get_redirect_bbid = get_redirect_bbid


def _set_dictize(item_set: Any, items_relation: str) -> Optional[dict[str, Any]]:
    if item_set is None:
        return None
    result = table_dictize(item_set, camel=True)
    result[snake_to_camel(items_relation)] = [
        table_dictize(item, camel=True)
        for item in getattr(item_set, items_relation)
    ]
    return result


def _obj_dictize(obj: Any) -> Optional[dict[str, Any]]:
    if obj is None:
        return None
    return table_dictize(obj, camel=True)


_RELATIONS = {
    'alias_set': lambda data: _set_dictize(data.alias_set, 'aliases'),
    'identifier_set': lambda data: _set_dictize(
        data.identifier_set, 'identifiers'),
    'relationship_set': lambda data: _set_dictize(
        data.relationship_set, 'relationships'),
    'annotation': lambda data: _obj_dictize(data.annotation),
    'disambiguation': lambda data: _obj_dictize(data.disambiguation),
    'default_alias': lambda data: _obj_dictize(data.default_alias),
}


def entity_dictize(entity: model.Entity,
                   relations: Iterable[str] = ()) -> dict[str, Any]:
    '''Represent an entity and the data of its master revision as a single
    dict with camelCase keys.

    ``relations`` names related objects to include, e.g. ``aliasSet``.
    '''
    relation_names = [camel_to_snake(relation) for relation in relations]
    for name in relation_names:
        if name not in _RELATIONS:
            raise InvalidArgument(u'Unknown entity relation: {!r}'.format(
                snake_to_camel(name)))

    result = table_dictize(entity, camel=True)
    result['revisionId'] = entity.master_revision_id

    data = entity.data
    result['dataId'] = data.id if data else None
    if data is not None:
        for key, value in table_dictize(data, camel=True).items():
            if key not in ('id', 'extra'):
                result[key] = value
        result.update(keys_to_camel(data.extra or {}))
        alias_set = data.alias_set
        result['defaultAliasId'] = (
            alias_set.default_alias_id if alias_set else None)

    for name in relation_names:
        result[snake_to_camel(name)] = (
            _RELATIONS[name](data) if data is not None else None)

    return result


def get_entity(session: SessionLike, entity_type: str, bbid: str,
               relations: Iterable[str] = ()) -> dict[str, Any]:
    '''Fetch an entity, following redirects, and return it as a dict.

    :raises UnrecognizedEntityType: for an unknown ``entity_type``
    :raises NotFound: if there is no such entity of that type
    '''
    final_bbid = get_redirect_bbid(session, bbid)
    Model = get_entity_model_by_type(entity_type)
    entity = session.query(Model).filter(Model.bbid == final_bbid).first()
    if entity is None:
        raise NotFound(u'{} {} not found'.format(entity_type, final_bbid))
    return entity_dictize(entity, relations)


def get_entity_parent_alias(session: SessionLike, entity_type: str,
                            bbid: str) -> Optional[dict[str, Any]]:
    '''Return the default alias of the latest non-master revision of an
    entity. Used to name entities whose master revision deleted them.

    Returns None if there is no such revision or it has no default alias.
    '''
    Model = get_entity_model_by_type(entity_type)
    entity = session.query(Model).filter(Model.bbid == bbid).first()
    if entity is None:
        return None

    query = session.query(model.EntityRevision).filter(
        model.EntityRevision.bbid == bbid)
    if entity.master_revision_id is not None:
        query = query.filter(
            model.EntityRevision.id != entity.master_revision_id)
    revision = query.order_by(model.EntityRevision.id.desc()).first()

    if revision is None or revision.data is None:
        return None
    alias = revision.data.default_alias
    if alias is None:
        return None
    return {
        'name': alias.name,
        'sortName': alias.sort_name,
        'id': alias.id,
        'languageId': alias.language_id,
        'primary': alias.primary,
    }
