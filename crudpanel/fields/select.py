# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Fields choosing from a static list of options."""

from crudpanel.fields.base import Field
from crudpanel.options import OptionSet
from crudpanel.utils import listify


__all__ = ['Select']


class Select(Field):
    """A field choosing one (or, with `multiple`, several) static options."""

    input_type = 'select'

    def __init__(self, label=None, column=None, formatted=None):
        Field.__init__(self, label, column, formatted)
        self._options = {}
        self._properties = {}
        self._searchable = False

    def options(self, values, properties=None):
        """
        Args:
            values: A mapping or an iterable of (key, label) pairs.
            properties (dict): Option key to extra option metadata.
        """
        self._options = values
        self._properties = properties or {}
        return self

    def multiple(self):
        self._multiple = True
        self.attributes['multiple'] = True
        return self

    def is_multiple(self):
        return self._multiple

    def searchable(self):
        self._searchable = True
        return self

    def is_searchable(self):
        return self._searchable

    def resolve_fill(self, raw, casted=None, index=0):
        Field.resolve_fill(self, raw, casted, index)
        if self._multiple and self._value is not None:
            self._value = listify(self._value)
        return self

    def get_values(self, context=None):
        return OptionSet(self._options, self.to_value(), self._properties)

    def resolve_preview(self):
        value = self.to_value(with_default=False)
        if self.is_blank_value(value):
            return ''
        options = OptionSet(self._options, value)
        labels = options.selected_labels()
        return ', '.join(str(label) for label in labels) if labels else ', '.join(str(v) for v in listify(value))
