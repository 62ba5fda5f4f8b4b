# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""A pair of date inputs describing a from/to range."""

from datetime import date, datetime

import pytz

from crudpanel.fields.base import Field
from crudpanel.query import constrain_query_by_date
from crudpanel.utils import get_attr_path


__all__ = ['DateRange']


class DateRange(Field):
    """
    Two date (or datetime) inputs filled from a pair of columns::

        DateRange('Range').from_to('starts_on', 'ends_on').format('%d.%m.%Y')

    The value is a dict keyed by the two column names. Strings in ISO 8601
    format, `date` and `datetime` values are all accepted.
    """

    input_type = 'date'
    is_group = True

    input_format = '%Y-%m-%d'
    input_format_with_time = '%Y-%m-%dT%H:%M'
    preview_format = '%Y-%m-%d'
    preview_format_with_time = '%Y-%m-%d %H:%M:%S'

    def __init__(self, label=None, column=None, formatted=None):
        Field.__init__(self, label, column, formatted)
        self.from_field = 'from'
        self.to_field = 'to'
        self.from_attrs = {}
        self.to_attrs = {}
        self._format = None
        self._with_time = False
        self._timezone = None

    def from_to(self, from_field, to_field):
        self.from_field = from_field
        self.to_field = to_field
        return self

    def format(self, format):
        """Sets the `strftime` format used by `preview`."""
        self._format = format
        return self

    def with_time(self):
        self._with_time = True
        self.attributes['type'] = 'datetime-local'
        return self

    def step(self, step):
        self.attributes['step'] = str(step)
        return self

    def timezone(self, name):
        """Converts timezone aware values to the `name` timezone for display."""
        self._timezone = pytz.timezone(name)
        return self

    def from_attributes(self, attributes):
        self.from_attrs.update(attributes)
        return self

    def to_attributes(self, attributes):
        self.to_attrs.update(attributes)
        return self

    def clone(self):
        clone = Field.clone(self)
        clone.from_attrs = dict(self.from_attrs)
        clone.to_attrs = dict(self.to_attrs)
        return clone

    def get_from_attributes(self):
        return self._merge_attributes(self.from_attrs, self.from_field)

    def get_to_attributes(self):
        return self._merge_attributes(self.to_attrs, self.to_field)

    def _merge_attributes(self, attributes, key):
        merged = dict(self.attributes)
        merged.update(attributes)
        merged['name'] = self.get_name_attribute(key)
        return merged

    def resolve_fill(self, raw, casted=None, index=0):
        source = casted if casted is not None else raw
        start = get_attr_path(source, self.from_field)
        end = get_attr_path(source, self.to_field)
        if start is None and end is None:
            self._value = None
        else:
            self._value = {
                self.from_field: '' if start is None else start,
                self.to_field: '' if end is None else end}
        return self

    def _parse(self, value):
        if self.is_blank_value(value):
            return None
        elif isinstance(value, datetime):
            if self._timezone is not None and value.tzinfo is not None:
                return self._timezone.normalize(value.astimezone(self._timezone))
            return value
        elif isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        try:
            return self._parse(datetime.fromisoformat(str(value)))
        except ValueError:
            return None

    def _format_value(self, value, format):
        parsed = self._parse(value)
        if parsed is None:
            return '' if self.is_blank_value(value) else str(value)
        return parsed.strftime(format)

    def _pair(self, value):
        if isinstance(value, dict):
            return value.get(self.from_field), value.get(self.to_field)
        value = list(value) + [None, None]
        return value[0], value[1]

    def get_value(self):
        """Returns the from/to values formatted for the date inputs."""
        value = self.to_value()
        if self.is_blank_value(value):
            return None
        format = self.input_format_with_time if self._with_time else self.input_format
        start, end = self._pair(value)
        return {
            self.from_field: self._format_value(start, format),
            self.to_field: self._format_value(end, format)}

    def resolve_preview(self):
        value = self.to_value(with_default=False)
        if self.is_blank_value(value):
            return ''
        if self.formatted_value_callback is not None:
            return str(self.to_formatted_value())
        format = self._format or (self.preview_format_with_time if self._with_time else self.preview_format)
        parts = [self._format_value(v, format) for v in self._pair(value) if not self.is_blank_value(v)]
        return ' - '.join(parts)

    def apply_filter(self, query, column):
        """Constrains `query` to rows whose `column` falls within this range."""
        value = self.to_value()
        if self.is_blank_value(value):
            return query
        start, end = (self._parse(v) for v in self._pair(value))
        return constrain_query_by_date(query, column, start, end)
