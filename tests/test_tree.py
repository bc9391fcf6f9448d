# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for paths, Group, Control and PathTree."""

import pytest

from genro_formregistry import (
    Control,
    Group,
    InvalidPathError,
    NodeKind,
    PathTree,
    is_prefix,
    join_path,
    parse_path,
    validate_name,
)


class TestPaths:
    """Tests for path helpers."""

    def test_parse_simple_path(self):
        """Test splitting a dotted path."""
        assert parse_path('form1.address.zip') == ('form1', 'address', 'zip')

    def test_parse_empty_path_is_root(self):
        """Test empty path parses to no segments."""
        assert parse_path('') == ()

    @pytest.mark.parametrize('path', ['a..b', '.a', 'a.', '.'])
    def test_parse_empty_segment_raises(self, path):
        """Test empty segments are rejected."""
        with pytest.raises(InvalidPathError, match="Empty segment"):
            parse_path(path)

    def test_parse_non_string_raises(self):
        """Test non-string paths are rejected."""
        with pytest.raises(InvalidPathError):
            parse_path(None)

    def test_validate_name(self):
        """Test valid and invalid child names."""
        assert validate_name('zip') == 'zip'
        with pytest.raises(InvalidPathError, match="empty"):
            validate_name('')
        with pytest.raises(InvalidPathError, match="must not contain"):
            validate_name('a.b')

    def test_invalid_path_error_is_value_error(self):
        """Test InvalidPathError can be caught as ValueError."""
        with pytest.raises(ValueError):
            validate_name('')

    def test_join_path(self):
        """Test joining parent and child names."""
        assert join_path('form1', 'name') == 'form1.name'
        assert join_path('', 'name') == 'name'

    def test_is_prefix(self):
        """Test segment-wise prefix check."""
        assert is_prefix('a', 'a.b.c')
        assert is_prefix('a.b', 'a.b.c')
        assert is_prefix('a.b.c', 'a.b.c')
        assert is_prefix('', 'a')
        assert not is_prefix('a.b', 'a.bc')
        assert not is_prefix('a.b.c', 'a.b')


class TestControl:
    """Tests for Control."""

    def test_wraps_handle(self):
        """Test the handle is kept as is."""
        handle = object()
        ctrl = Control(handle)
        assert ctrl.handle is handle
        assert ctrl.kind is NodeKind.CONTROL
        assert ctrl.is_control is True
        assert ctrl.is_group is False

    def test_identity_equality(self):
        """Test Controls wrapping the same handle are distinct."""
        handle = object()
        assert Control(handle) != Control(handle)

    def test_repr(self):
        """Test string representation."""
        assert repr(Control('x')) == "Control('x')"


class TestGroup:
    """Tests for Group."""

    def test_empty_group(self):
        """Test an empty group."""
        group = Group()
        assert len(group) == 0
        assert group.kind is NodeKind.GROUP
        assert group.is_group is True
        assert group.is_control is False

    def test_source_dict(self):
        """Test building a group from a nested dict."""
        name_ctrl = Control('name-input')
        group = Group({
            'name': name_ctrl,
            'address': {'zip': 'zip-input'},
        })
        assert group['name'] is name_ctrl
        assert group['address'].kind is NodeKind.GROUP
        assert group['address']['zip'].kind is NodeKind.CONTROL
        assert group['address']['zip'].handle == 'zip-input'

    def test_source_keeps_group_instances(self):
        """Test Group values in source are not copied."""
        inner = Group()
        group = Group({'inner': inner})
        assert group['inner'] is inner

    def test_source_invalid_type_raises(self):
        """Test non-dict source raises TypeError."""
        with pytest.raises(TypeError, match="source must be dict"):
            Group([('a', 1)])

    def test_source_invalid_name_raises(self):
        """Test dotted names in source are rejected."""
        with pytest.raises(InvalidPathError):
            Group({'a.b': 1})

    def test_mapping_access(self):
        """Test iteration, membership and get."""
        group = Group({'a': 1, 'b': 2})
        assert list(group) == ['a', 'b']
        assert 'a' in group
        assert 'c' not in group
        assert group.get('c') is None
        assert group.get('c', 'default') == 'default'
        assert group.keys() == ['a', 'b']
        assert [n.handle for n in group.values()] == [1, 2]
        assert [(k, n.handle) for k, n in group.items()] == [('a', 1), ('b', 2)]

    def test_walk(self):
        """Test depth-first walk yields full paths."""
        group = Group({'name': 1, 'address': {'street': 2, 'zip': 3}, 'notes': 4})
        paths = [path for path, node in group.walk()]
        assert paths == ['name', 'address', 'address.street', 'address.zip', 'notes']

    def test_as_dict(self):
        """Test conversion to nested dict of handles."""
        group = Group({'name': 'n', 'address': {'zip': 'z'}})
        assert group.as_dict() == {'name': 'n', 'address': {'zip': 'z'}}

    def test_repr(self):
        """Test string representation lists children."""
        assert repr(Group({'a': 1})) == "Group(['a'])"


class TestPathTree:
    """Tests for PathTree."""

    def test_empty_path_resolves_root(self):
        """Test the empty path resolves to the root group."""
        tree = PathTree()
        assert tree.resolve('') is tree.root
        assert tree.resolve_group('') is tree.root

    def test_set_root_child_and_resolve(self):
        """Test resolving a registered subtree."""
        tree = PathTree()
        form = Group({'name': 'n'})
        tree.set_root_child('form1', form)
        assert tree.resolve('form1') is form
        assert tree.resolve('form1.name').handle == 'n'

    def test_set_root_child_overwrites(self):
        """Test setting the same root name replaces the group."""
        tree = PathTree()
        g1, g2 = Group(), Group()
        tree.set_root_child('form1', g1)
        tree.set_root_child('form1', g2)
        assert tree.resolve('form1') is g2
        assert len(tree.root) == 1

    def test_resolve_missing_raises_keyerror(self):
        """Test a missing segment raises KeyError."""
        tree = PathTree()
        tree.set_root_child('form1', Group())
        with pytest.raises(KeyError, match="not found"):
            tree.resolve('form1.missing')

    def test_resolve_through_control_raises_keyerror(self):
        """Test descending through a control raises KeyError."""
        tree = PathTree()
        tree.set_root_child('form1', Group({'name': 'n'}))
        with pytest.raises(KeyError, match="is a control"):
            tree.resolve('form1.name.first')

    def test_resolve_malformed_raises(self):
        """Test malformed paths raise InvalidPathError."""
        tree = PathTree()
        with pytest.raises(InvalidPathError):
            tree.resolve('a..b')

    def test_resolve_group_rejects_control(self):
        """Test resolve_group fails on a control."""
        tree = PathTree()
        tree.set_root_child('form1', Group({'name': 'n'}))
        assert tree.resolve_group('form1') is tree.root['form1']
        with pytest.raises(KeyError):
            tree.resolve_group('form1.name')

    def test_add_child_inserts_once(self):
        """Test add_child only inserts free names."""
        tree = PathTree()
        form = Group()
        tree.set_root_child('form1', form)
        first, second = Control('a'), Control('b')
        assert tree.add_child(form, 'name', first) is True
        assert tree.add_child(form, 'name', second) is False
        assert tree.resolve('form1.name') is first

    def test_walk(self):
        """Test walking the whole tree."""
        tree = PathTree()
        tree.set_root_child('form1', Group({'name': 'n'}))
        tree.set_root_child('form2', Group())
        assert [p for p, n in tree.walk()] == ['form1', 'form1.name', 'form2']
