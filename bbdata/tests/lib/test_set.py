# encoding: utf-8

from types import SimpleNamespace

import pytest

import bbdata.lib.set as set_lib
from bbdata.exceptions import InvalidArgument

cmp_name = set_lib.get_comparison_func([u'name'])
cmp_alias = set_lib.get_comparison_func(set_lib.SetKind.ALIAS.compare_fields)


def _alias(id, name, sort_name=None, language_id=1, primary=True):
    return {
        u'id': id,
        u'name': name,
        u'sort_name': sort_name or name,
        u'language_id': language_id,
        u'primary': primary,
    }


class TestGetField(object):
    def test_mapping(self):
        assert set_lib.get_field({u'name': u'a'}, u'name') == u'a'

    def test_object(self):
        assert set_lib.get_field(SimpleNamespace(name=u'a'), u'name') == u'a'

    def test_dotted_path(self):
        item = {u'value': SimpleNamespace(text_value=u'3')}
        assert set_lib.get_field(item, u'value.text_value') == u'3'

    def test_missing_is_not_none(self):
        assert set_lib.get_field({}, u'name') is not None
        assert set_lib.get_field({u'value': None},
                                 u'value.text_value') is not None


class TestComparisonFunc(object):
    def test_equal_on_listed_fields_only(self):
        assert cmp_name({u'id': 1, u'name': u'a'}, {u'id': 2, u'name': u'a'})

    def test_different_values(self):
        assert not cmp_name({u'name': u'a'}, {u'name': u'b'})

    def test_no_type_coercion(self):
        cmp = set_lib.get_comparison_func([u'type_id'])
        assert not cmp({u'type_id': 1}, {u'type_id': u'1'})

    def test_missing_field_differs_from_none(self):
        assert not cmp_name({}, {u'name': None})
        assert cmp_name({}, {})

    def test_mapping_and_object_mix(self):
        assert cmp_name({u'name': u'a'}, SimpleNamespace(name=u'a'))

    def test_no_fields_means_everything_is_equal(self):
        cmp = set_lib.get_comparison_func([])
        assert cmp({u'name': u'a'}, {u'name': u'b'})


class TestDiffer(object):
    old = [
        _alias(1, u'Leo Tolstoy'),
        _alias(2, u'Лев Толстой', language_id=2, primary=False),
    ]

    def test_unchanged_items_come_from_old_set(self):
        new = [_alias(None, u'Leo Tolstoy'), _alias(None, u'Tolstoi')]
        unchanged = set_lib.get_unchanged_items(self.old, new, cmp_alias)
        assert unchanged == [self.old[0]]
        assert unchanged[0][u'id'] == 1

    def test_added_items(self):
        new = [_alias(None, u'Leo Tolstoy'), _alias(None, u'Tolstoi')]
        added = set_lib.get_added_items(self.old, new, cmp_alias)
        assert [item[u'name'] for item in added] == [u'Tolstoi']

    def test_removed_items(self):
        new = [_alias(None, u'Leo Tolstoy')]
        removed = set_lib.get_removed_items(self.old, new, cmp_alias)
        assert removed == [self.old[1]]
        assert set_lib.remove_items_from_set is set_lib.get_removed_items

    def test_partition_of_old_set(self):
        new = [_alias(None, u'Leo Tolstoy'), _alias(None, u'Tolstoi')]
        unchanged = set_lib.get_unchanged_items(self.old, new, cmp_alias)
        removed = set_lib.get_removed_items(self.old, new, cmp_alias)
        assert len(unchanged) + len(removed) == len(self.old)
        assert not [item for item in unchanged if item in removed]

    def test_change_of_one_field_is_remove_and_add(self):
        new = [self.old[0], _alias(None, u'Лев Толстой', language_id=3,
                                   primary=False)]
        assert set_lib.get_removed_items(self.old, new, cmp_alias) == [
            self.old[1]]
        assert set_lib.get_added_items(self.old, new, cmp_alias) == [new[1]]

    def test_identical_sets(self):
        assert set_lib.get_added_items(self.old, self.old, cmp_alias) == []
        assert set_lib.get_removed_items(self.old, self.old, cmp_alias) == []
        assert set_lib.get_unchanged_items(
            self.old, self.old, cmp_alias) == self.old

    def test_empty_old_set(self):
        new = [_alias(None, u'a')]
        assert set_lib.get_unchanged_items([], new, cmp_alias) == []
        assert set_lib.get_added_items([], new, cmp_alias) == new
        assert set_lib.get_removed_items([], new, cmp_alias) == []

    def test_empty_new_set(self):
        assert set_lib.get_unchanged_items(self.old, [], cmp_alias) == []
        assert set_lib.get_added_items(self.old, [], cmp_alias) == []
        assert set_lib.get_removed_items(self.old, [], cmp_alias) == self.old

    def test_symmetry(self):
        new = [_alias(None, u'Leo Tolstoy'), _alias(None, u'Tolstoi')]
        assert set_lib.get_added_items(self.old, new, cmp_alias) == \
            set_lib.get_removed_items(new, self.old, cmp_alias)

    def test_duplicates_are_reported_once(self):
        new = [{u'name': u'x'}, {u'name': u'x'}]
        assert set_lib.get_added_items([], new, cmp_name) == [new[0]]

        old = [{u'id': 1, u'name': u'y'}, {u'id': 2, u'name': u'y'}]
        assert set_lib.get_removed_items(old, [], cmp_name) == [old[0]]
        assert set_lib.get_unchanged_items(
            old, [{u'name': u'y'}], cmp_name) == [old[0]]

    def test_order_follows_input(self):
        new = [{u'name': u'c'}, {u'name': u'a'}, {u'name': u'b'}]
        assert set_lib.get_added_items([], new, cmp_name) == new

    def test_inputs_are_not_modified(self):
        old = list(self.old)
        new = [_alias(None, u'Tolstoi')]
        set_lib.get_added_items(old, new, cmp_alias)
        set_lib.get_removed_items(old, new, cmp_alias)
        assert old == self.old
        assert new == [_alias(None, u'Tolstoi')]

    def test_attribute_values_compared_through_nested_field(self):
        cmp = set_lib.get_comparison_func(
            set_lib.SetKind.RELATIONSHIP_ATTRIBUTE.compare_fields)
        old = [{u'id': 4, u'attribute_type': 1,
                u'value': {u'text_value': u'1'}}]
        new = [{u'attribute_type': 1, u'value': {u'text_value': u'2'}}]
        assert set_lib.get_removed_items(old, new, cmp) == old
        assert set_lib.get_added_items(old, new, cmp) == new


class TestSetKind(object):
    @pytest.mark.parametrize(u'name, kind', [
        (u'aliases', set_lib.SetKind.ALIAS),
        (u'identifiers', set_lib.SetKind.IDENTIFIER),
        (u'relationships', set_lib.SetKind.RELATIONSHIP),
        (u'relationship_attributes',
         set_lib.SetKind.RELATIONSHIP_ATTRIBUTE),
        (u'relationshipAttributes',
         set_lib.SetKind.RELATIONSHIP_ATTRIBUTE),
        (u' aliases ', set_lib.SetKind.ALIAS),
    ])
    def test_resolve_name(self, name, kind):
        assert set_lib.SetKind.resolve(name) is kind

    def test_resolve_member(self):
        kind = set_lib.SetKind.IDENTIFIER
        assert set_lib.SetKind.resolve(kind) is kind

    @pytest.mark.parametrize(u'name', [None, u'', u'   ', 3])
    def test_blank(self, name):
        with pytest.raises(InvalidArgument, match=u'itemsAttribute'):
            set_lib.SetKind.resolve(name)

    def test_unknown(self):
        with pytest.raises(InvalidArgument):
            set_lib.SetKind.resolve(u'tags')

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            set_lib.SetKind.resolve(u'')
