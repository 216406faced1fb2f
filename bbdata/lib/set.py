# encoding: utf-8
"""Change tracking for the sets hanging off an entity revision.

Aliases, identifiers, relationships and relationship attributes are stored
in append-only sets. A set row is never updated: an edit that changes the
membership of a set creates a new set, links the items that did not change
and creates rows only for the items that are genuinely new.

The differ functions (``get_unchanged_items``, ``get_added_items`` and
``get_removed_items``) are pure and work on any sequences of mappings or
objects. The materializer functions write through the session they are
given and never commit; the caller owns the transaction.

"""
from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional, Sequence, Union

from sqlalchemy import Table
from sqlalchemy.orm import class_mapper

import bbdata.model as model
from bbdata.exceptions import InvalidArgument, NotFound
from bbdata.lib.dictization import camel_to_snake, keys_to_snake
from bbdata.types import SessionLike, SetItem

__all__ = [
    'SetKind', 'SetStrategy', 'get_field', 'get_comparison_func',
    'get_unchanged_items', 'get_added_items', 'get_removed_items',
    'remove_items_from_set', 'create_new_set_with_items',
    'create_new_relationship_attribute_set_with_items', 'get_set_items',
    'update_set_with_items',
]

log = logging.getLogger(__name__)

ComparisonFunc = Callable[[Any, Any], bool]

# Stands in for a field the item does not have. It is only equal to itself.
_MISSING = object()


def get_field(item: SetItem, field: str) -> Any:
    '''Read ``field`` from a mapping or an object. Dotted names walk into
    nested values, e.g. ``value.text_value``.'''
    value = item
    for name in field.split('.'):
        if isinstance(value, Mapping):
            value = value.get(name, _MISSING)
        else:
            value = getattr(value, name, _MISSING)
        if value is _MISSING:
            break
    return value


def get_comparison_func(compare_fields: Iterable[str]) -> ComparisonFunc:
    '''Return a function which compares two items on the given fields.

    Items are equal when every field compares equal. A field missing from
    one item only is never equal to a value on the other.
    '''
    fields = list(compare_fields)

    def cmp(obj: Any, other: Any) -> bool:
        for field in fields:
            if get_field(obj, field) != get_field(other, field):
                return False
        return True

    return cmp


def _uniq_with(items: Iterable[SetItem],
               comparison_func: ComparisonFunc) -> list[SetItem]:
    result: list[SetItem] = []
    for item in items:
        if not any(comparison_func(item, seen) for seen in result):
            result.append(item)
    return result


def _difference_with(items: Sequence[SetItem], others: Sequence[SetItem],
                     comparison_func: ComparisonFunc) -> list[SetItem]:
    return [
        item for item in items
        if not any(comparison_func(item, other) for other in others)
    ]


def get_unchanged_items(
        old_set: Sequence[SetItem], new_set: Sequence[SetItem],
        comparison_func: ComparisonFunc) -> list[SetItem]:
    '''Get the intersection of two versions of a set.

    The items come from ``old_set`` so that they carry the ids of the rows
    already stored, whatever ids the new version gives them.
    '''
    return _uniq_with(
        (item for item in old_set
         if any(comparison_func(item, other) for other in new_set)),
        comparison_func)


def get_added_items(
        old_set: Sequence[SetItem], new_set: Sequence[SetItem],
        comparison_func: ComparisonFunc) -> list[SetItem]:
    '''Get the items of ``new_set`` that are not in ``old_set``.'''
    return _uniq_with(
        _difference_with(new_set, old_set, comparison_func), comparison_func)


def get_removed_items(
        old_set: Sequence[SetItem], new_set: Sequence[SetItem],
        comparison_func: ComparisonFunc) -> list[SetItem]:
    '''Get the items of ``old_set`` that are not in ``new_set``.'''
    return _uniq_with(
        _difference_with(old_set, new_set, comparison_func), comparison_func)


remove_items_from_set = get_removed_items


class SetStrategy(object):
    '''How one kind of set is stored: the set and item models, the link
    table joining them and the fields that identify an item for change
    tracking.'''

    set_model: type[model.DomainObject]
    item_model: type[model.DomainObject]
    link_table: Table
    item_column: str
    compare_fields: tuple[str, ...]
    # column of the set row naming one of its items as the default
    default_column: Optional[str]

    def __init__(self, set_model: type[model.DomainObject],
                 item_model: type[model.DomainObject], link_table: Table,
                 item_column: str, compare_fields: Sequence[str],
                 default_column: Optional[str] = None) -> None:
        self.set_model = set_model
        self.item_model = item_model
        self.link_table = link_table
        self.item_column = item_column
        self.compare_fields = tuple(compare_fields)
        self.default_column = default_column

    def check_item(self, item: SetItem) -> None:
        '''Reject an added item that cannot be stored.'''
        pass

    def attach(self, session: SessionLike, set_id: int,
               item_ids: Sequence[Any]) -> None:
        '''Link existing item rows to a set.'''
        if not item_ids:
            return
        session.execute(
            self.link_table.insert(),
            [{'set_id': set_id, self.item_column: item_id}
             for item_id in item_ids])

    def item_values(self, item: SetItem, id_attribute: str) -> dict[str, Any]:
        table: Any = class_mapper(self.item_model).persist_selectable
        values = {}
        for col in table.c:
            if col.name == id_attribute:
                continue
            value = get_field(item, col.name)
            if value is not _MISSING:
                values[col.name] = value
        return values

    def create_item(self, session: SessionLike, item: SetItem,
                    id_attribute: str) -> model.DomainObject:
        '''Insert a fresh row for an added item and return it.'''
        row = self.item_model(**self.item_values(item, id_attribute))
        session.add(row)
        session.flush()
        return row


class RelationshipAttributeSetStrategy(SetStrategy):
    '''Attribute rows only hold their type, the value goes to a
    RelationshipAttributeTextValue row keyed by the new attribute id.'''

    def check_item(self, item: SetItem) -> None:
        attribute_type = get_field(item, 'attribute_type')
        if attribute_type is _MISSING or attribute_type is None:
            raise InvalidArgument(
                u'Relationship attributes need an attribute_type')

    def item_values(self, item: SetItem, id_attribute: str) -> dict[str, Any]:
        return {'attribute_type': get_field(item, 'attribute_type')}

    def create_item(self, session: SessionLike, item: SetItem,
                    id_attribute: str) -> model.DomainObject:
        row = super(RelationshipAttributeSetStrategy, self).create_item(
            session, item, id_attribute)
        text_value = get_field(item, 'value.text_value')
        session.add(model.RelationshipAttributeTextValue(
            attribute_id=row.id,
            text_value=None if text_value is _MISSING else text_value,
        ))
        return row


class SetKind(enum.Enum):
    '''The kinds of set an entity revision refers to. The value of each
    member is the name of the relation from the set to its items.'''
    ALIAS = 'aliases'
    IDENTIFIER = 'identifiers'
    RELATIONSHIP = 'relationships'
    RELATIONSHIP_ATTRIBUTE = 'relationship_attributes'

    @property
    def strategy(self) -> SetStrategy:
        return _strategies[self]

    @property
    def compare_fields(self) -> tuple[str, ...]:
        return self.strategy.compare_fields

    @classmethod
    def resolve(cls, kind: Union['SetKind', str, None]) -> 'SetKind':
        '''Return the member for ``kind``, which may already be a member or
        the name of the items relation in either snake or camel case.'''
        if isinstance(kind, cls):
            return kind
        if not isinstance(kind, str) or not kind.strip():
            raise InvalidArgument(u'itemsAttribute must be set')
        try:
            return cls(camel_to_snake(kind.strip()))
        except ValueError:
            raise InvalidArgument(
                u'Unknown set items relation: {!r}'.format(kind))


_strategies: dict[SetKind, SetStrategy] = {
    SetKind.ALIAS: SetStrategy(
        model.AliasSet, model.Alias, model.alias_set__alias_table,
        'alias_id', ('name', 'sort_name', 'language_id', 'primary'),
        default_column='default_alias_id'),
    SetKind.IDENTIFIER: SetStrategy(
        model.IdentifierSet, model.Identifier,
        model.identifier_set__identifier_table,
        'identifier_id', ('value', 'type_id')),
    SetKind.RELATIONSHIP: SetStrategy(
        model.RelationshipSet, model.Relationship,
        model.relationship_set__relationship_table, 'relationship_id',
        ('type_id', 'source_bbid', 'target_bbid', 'attribute_set_id')),
    SetKind.RELATIONSHIP_ATTRIBUTE: RelationshipAttributeSetStrategy(
        model.RelationshipAttributeSet, model.RelationshipAttribute,
        model.relationship_attribute_set__relationship_attribute_table,
        'attribute_id', ('attribute_type', 'value.text_value')),
}


def _as_snake(item: SetItem) -> SetItem:
    # dict items may come straight from JSON, with camelCase keys
    if isinstance(item, Mapping):
        return keys_to_snake(item)
    return item


def _find(item: SetItem, items: Sequence[SetItem],
          comparison_func: ComparisonFunc) -> Optional[int]:
    for index, other in enumerate(items):
        if comparison_func(item, other):
            return index
    return None


def create_new_set_with_items(
        session: SessionLike,
        kind: Union[SetKind, str, None],
        unchanged_items: Sequence[SetItem],
        added_items: Sequence[SetItem],
        id_attribute: str = 'id',
        default_item: Optional[SetItem] = None
) -> Optional[model.DomainObject]:
    '''Create a new set holding ``unchanged_items`` and ``added_items``.

    Unchanged items are linked by their stored id, added items get new rows
    (any ``id_attribute`` they carry is ignored). Nothing is written and
    None is returned when both sequences are empty: an empty set is stored
    as the absence of a set.

    Dict items may use snake_case or camelCase keys.

    :param session: the session of the caller's transaction
    :param kind: a :py:class:`SetKind` or the name of its items relation
    :param unchanged_items: items already stored, carrying their ids
    :param added_items: items to create
    :param id_attribute: the field holding the stored id of an item
    :param default_item: for alias sets, the item to make the default
        alias; it must compare equal to one of the items of the set

    :raises InvalidArgument: ``kind`` is blank or unknown, an unchanged
        item has no id, an added item cannot be stored or ``default_item``
        is not in the set
    :returns: the new set object, or None
    '''
    set_kind = SetKind.resolve(kind)

    if not unchanged_items and not added_items:
        return None

    strategy = set_kind.strategy
    unchanged_items = [_as_snake(item) for item in unchanged_items]
    added_items = [_as_snake(item) for item in added_items]

    unchanged_ids = [get_field(item, id_attribute) for item in unchanged_items]
    if any(item_id is _MISSING or item_id is None
           for item_id in unchanged_ids):
        raise InvalidArgument(
            u'Unchanged items must carry their stored {}'.format(
                id_attribute))
    for item in added_items:
        strategy.check_item(item)

    default_unchanged = default_added = None
    if default_item is not None:
        if strategy.default_column is None:
            raise InvalidArgument(
                u'{} sets have no default item'.format(set_kind.value))
        comparison_func = get_comparison_func(strategy.compare_fields)
        default_item = _as_snake(default_item)
        default_unchanged = _find(
            default_item, unchanged_items, comparison_func)
        if default_unchanged is None:
            default_added = _find(default_item, added_items, comparison_func)
            if default_added is None:
                raise InvalidArgument(
                    u'The default item is not one of the items of the set')

    new_set = strategy.set_model()
    session.add(new_set)
    session.flush()

    strategy.attach(session, new_set.id, list(dict.fromkeys(unchanged_ids)))

    added_ids = []
    for item in added_items:
        row = strategy.create_item(session, item, id_attribute)
        added_ids.append(getattr(row, 'id'))
        strategy.attach(session, new_set.id, [added_ids[-1]])

    if default_unchanged is not None:
        setattr(new_set, strategy.default_column,
                unchanged_ids[default_unchanged])
    elif default_added is not None:
        setattr(new_set, strategy.default_column, added_ids[default_added])

    session.flush()
    # the link rows were written behind the ORM's back
    session.expire(new_set)

    log.debug(
        u'Created %s set %s with %d unchanged and %d added items',
        set_kind.name, new_set.id, len(unchanged_ids), len(added_items))
    return new_set


def create_new_relationship_attribute_set_with_items(
        session: SessionLike,
        unchanged_items: Sequence[SetItem],
        added_items: Sequence[SetItem],
        kind: Union[SetKind, str, None] = SetKind.RELATIONSHIP_ATTRIBUTE,
        id_attribute: str = 'id') -> Optional[model.DomainObject]:
    '''Create a new relationship attribute set. Every added attribute gets
    a text value row holding ``item['value']['text_value']``.

    See :py:func:`create_new_set_with_items`.
    '''
    set_kind = SetKind.resolve(kind)
    if set_kind is not SetKind.RELATIONSHIP_ATTRIBUTE:
        raise InvalidArgument(
            u'{} is not a relationship attribute relation'.format(
                set_kind.value))
    return create_new_set_with_items(
        session, set_kind, unchanged_items, added_items, id_attribute)


def get_set_items(session: SessionLike, kind: Union[SetKind, str, None],
                  set_id: Optional[int]) -> list[model.DomainObject]:
    '''Return the items of a stored set. A missing set (``set_id`` of None)
    has no items.'''
    set_kind = SetKind.resolve(kind)
    if set_id is None:
        return []

    item_set = session.get(set_kind.strategy.set_model, set_id)
    if item_set is None:
        raise NotFound(u'{} {} not found'.format(
            set_kind.strategy.set_model.__name__, set_id))
    return list(getattr(item_set, set_kind.value))


def _stored_default(session: SessionLike, strategy: SetStrategy,
                    old_set_id: Optional[int]) -> Optional[SetItem]:
    if strategy.default_column is None or old_set_id is None:
        return None
    old_set = session.get(strategy.set_model, old_set_id)
    default_id = getattr(old_set, strategy.default_column)
    if default_id is None:
        return None
    return session.get(strategy.item_model, default_id)


def update_set_with_items(
        session: SessionLike,
        kind: Union[SetKind, str, None],
        old_set_id: Optional[int],
        new_items: Sequence[SetItem],
        default_item: Optional[SetItem] = None
) -> Optional[model.DomainObject]:
    '''Compute the set that should replace ``old_set_id`` once its items
    become ``new_items``.

    Returns the old set untouched when no item was added or removed and the
    default item did not change, None when the new version is empty, and a
    freshly created set otherwise.

    An alias set keeps the default alias of the old set when that alias is
    still among ``new_items``, unless ``default_item`` names another one.
    '''
    set_kind = SetKind.resolve(kind)
    strategy = set_kind.strategy
    new_items = [_as_snake(item) for item in new_items]
    old_items = get_set_items(session, set_kind, old_set_id)

    comparison_func = get_comparison_func(set_kind.compare_fields)
    unchanged = get_unchanged_items(old_items, new_items, comparison_func)
    added = get_added_items(old_items, new_items, comparison_func)
    removed = get_removed_items(old_items, new_items, comparison_func)

    old_default = _stored_default(session, strategy, old_set_id)
    if default_item is not None:
        default_item = _as_snake(default_item)
    elif old_default is not None:
        if _find(old_default, new_items, comparison_func) is not None:
            default_item = old_default
    default_changed = default_item is not None and (
        old_default is None or not comparison_func(default_item, old_default))

    if (old_set_id is not None and not added and not removed
            and not default_changed):
        return session.get(strategy.set_model, old_set_id)

    log.debug(
        u'%s set %s: %d unchanged, %d added, %d removed', set_kind.name,
        old_set_id, len(unchanged), len(added), len(removed))
    return create_new_set_with_items(
        session, set_kind, unchanged, added, default_item=default_item)
