# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Option lists for select-like fields."""

from collections.abc import Mapping

from crudpanel.utils import listify


__all__ = ['Option', 'OptionSet']


class Option(object):
    def __init__(self, key, label, selected=False, properties=None):
        self.key = key
        self.label = label
        self.selected = selected
        self.properties = properties or {}

    def to_dict(self):
        return {
            'value': self.key,
            'label': self.label,
            'selected': self.selected,
            'properties': dict(self.properties)}

    def __eq__(self, other):
        return isinstance(other, Option) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return '<Option key={!r} label={!r} selected={!r}>'.format(self.key, self.label, self.selected)


class OptionSet(object):
    """
    An ordered mapping of option key to display label, plus the selected
    key(s) and per-option properties.

    Keys are unique: a repeated key replaces the earlier label but keeps its
    original position. Selection is compared as strings, so a selected value
    of ``'5'`` selects the option with key ``5``.

    >>> options = OptionSet([(1, 'One'), (2, 'Two')], selected='2')
    >>> [option.key for option in options if option.selected]
    [2]
    """

    def __init__(self, values=None, selected=None, properties=None):
        """
        Args:
            values: A mapping or an iterable of (key, label) pairs.
            selected: The selected key, a list of selected keys, or None.
            properties (dict): Option key to a dict of extra option metadata.
        """
        if isinstance(values, Mapping):
            values = values.items()
        self.values = dict(values or [])
        self.selected = selected
        self.properties = {key: props for key, props in (properties or {}).items() if key in self.values}

    @property
    def selected_keys(self):
        return [str(key) for key in listify(self.selected) if key is not None and str(key) != '']

    def is_selected(self, key):
        return str(key) in self.selected_keys

    def keys(self):
        return list(self.values.keys())

    def labels(self):
        return list(self.values.values())

    def items(self):
        return list(self.values.items())

    def get(self, key, default=None):
        return self.values.get(key, default)

    def selected_labels(self):
        return [label for key, label in self.values.items() if self.is_selected(key)]

    def to_list(self):
        return [option.to_dict() for option in self]

    def __iter__(self):
        for key, label in self.values.items():
            yield Option(key, label, self.is_selected(key), self.properties.get(key))

    def __len__(self):
        return len(self.values)

    def __contains__(self, key):
        return key in self.values

    def __eq__(self, other):
        if not isinstance(other, OptionSet):
            return NotImplemented
        return self.items() == other.items() \
            and self.selected_keys == other.selected_keys \
            and self.properties == other.properties

    def __repr__(self):
        return '<OptionSet values={!r} selected={!r}>'.format(self.values, self.selected)
