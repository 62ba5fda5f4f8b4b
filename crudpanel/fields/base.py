# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Base field and the simple field types."""

import re
from copy import copy, deepcopy

from crudpanel.utils import get_attr_path, slugify


__all__ = [
    'Field', 'Hidden', 'Text', 'TextBlock', 'rule', 'regex_rule', 'required_rule', 'text_length_rule']


class rule(object):
    """
    Base class for field validation rules.

    Rules are callables that accept a value and return True if the value is
    valid. Any `spec_kwargs` are added to the client facing field spec (see
    `Field.to_spec`), so the same validation can be repeated client side.
    """

    def __init__(self, validator, message, **spec_kwargs):
        """
        Args:
            validator (callable): Accepts the value and returns False or None
                if invalid, or True if the value is valid.
            message (str): Failure message if the validation fails.
            **spec_kwargs: The key/value pairs that should be added to the
                field spec.
        """
        self.validator = validator
        self.message = message
        self.spec_kwargs = spec_kwargs

    def __call__(self, value):
        return bool(self.validator(value))


class required_rule(rule):
    def __init__(self, message='This field is required.'):
        def validator(value):
            return value is not None and value != '' and value != [] and value != {}
        rule.__init__(self, validator, message, required=True)


class text_length_rule(rule):
    def __init__(self, min_length=None, max_length=None,
                 min_text='The minimum length of this field is {0}.',
                 max_text='The maximum length of this field is {0}.',
                 allow_none=True):

        def validator(text):
            if text is None:
                return allow_none
            text_length = len(str(text))
            return all([min_length is None or text_length >= min_length,
                        max_length is None or text_length <= max_length])

        kwargs = {}
        if min_length is not None:
            kwargs['minLength'] = min_length
            if min_text is not None:
                kwargs['minLengthText'] = min_text.format(min_length)
        if max_length is not None:
            kwargs['maxLength'] = max_length
            if max_text is not None:
                kwargs['maxLengthText'] = max_text.format(max_length)

        message = 'Length of value should be between {} and {} (inclusive; None means no min/max).'.format(
            min_length, max_length)
        rule.__init__(self, validator, message, **kwargs)


class regex_rule(rule):
    def __init__(self, regex, message):

        def validator(text):
            # None is left to the required rule
            if text is None:
                return True
            return re.search(regex, str(text)) is not None

        rule.__init__(self, validator, message, regexText=message, regexString=regex)


class Field(object):
    """
    Declarative description of one editable/displayable attribute.

    A field is filled from either raw request data (a mapping) or a model
    instance, and then previewed or turned into a form input::

        field = Text('Title').default('Untitled')
        field.fill(casted=post).preview()

    Attributes:
        input_type (str): The HTML input type rendered for this field.
        is_group (bool): Whether the field submits more than one value.
    """

    input_type = 'text'
    is_group = False
    is_decoration = False

    def __init__(self, label=None, column=None, formatted=None):
        """
        Args:
            label (str): Human readable label.
            column (str): Attribute or key the value is read from. Defaults
                to a snake case slug of the label.
            formatted (callable): Called with the filled data and the field
                to produce the formatted value.
        """
        self.label = label or ''
        self.column = column or slugify(self.label, '_')
        self.formatted_value_callback = formatted
        self.attributes = {'type': self.input_type}
        self.rule_list = []
        self._value = None
        self._default = None
        self._data = None
        self._fill_callback = None
        self._preview_callback = None
        self._raw_mode = False
        self._multiple = False

    # Filling

    def fill(self, raw=None, casted=None, index=0):
        """
        Fills the field from `raw` data or a `casted` model instance.

        Returns:
            Field: This field.
        """
        self._data = casted if casted is not None else raw
        if self._fill_callback is not None:
            self._value = self._fill_callback(self._data, self)
            return self
        return self.resolve_fill(raw or {}, casted, index)

    def resolve_fill(self, raw, casted=None, index=0):
        self._value = get_attr_path(casted if casted is not None else raw, self.column)
        return self

    def change_fill(self, callback):
        self._fill_callback = callback
        return self

    # Values

    def set_value(self, value):
        self._value = value
        return self

    def default(self, value):
        self._default = value
        return self

    def get_default(self):
        return deepcopy(self._default)

    def is_blank_value(self, value):
        return value is None or value == '' or value == [] or value == {}

    def to_value(self, with_default=True):
        if with_default and self.is_blank_value(self._value):
            return self.get_default()
        return self._value

    def value(self):
        return self.resolve_value()

    def resolve_value(self):
        return self.to_value()

    def to_formatted_value(self):
        if self.formatted_value_callback is not None:
            return self.formatted_value_callback(self._data, self)
        return self.to_value()

    # Previews

    def preview(self):
        if self._preview_callback is not None:
            return self._preview_callback(self.to_value(with_default=False), self)
        return self.resolve_preview()

    def resolve_preview(self):
        if self.formatted_value_callback is not None:
            value = self.to_formatted_value()
        else:
            value = self.to_value(with_default=False)
        return '' if self.is_blank_value(value) else str(value)

    def change_preview(self, callback):
        self._preview_callback = callback
        return self

    def raw_mode(self):
        self._raw_mode = True
        return self

    def is_raw_mode(self):
        return self._raw_mode

    # Attributes

    def get_name_attribute(self, key=None):
        if key is not None:
            return '{}[{}]'.format(self.column, key)
        elif self.is_group or self._multiple:
            return '{}[]'.format(self.column)
        return self.column

    def custom_attributes(self, attributes):
        self.attributes.update(attributes)
        return self

    def set_attribute(self, name, value):
        self.attributes[name] = value
        return self

    def get_attribute(self, name, default=None):
        return self.attributes.get(name, default)

    def get_attributes(self):
        return dict(self.attributes)

    # Validation

    def rules(self, *rules):
        self.rule_list.extend(rules)
        return self

    def validate(self, value=None):
        """
        Returns the failure messages of every rule `value` does not satisfy.

        If `value` is None the field's own value is validated.
        """
        if value is None:
            value = self.to_value()
        return [r.message for r in self.rule_list if not r(value)]

    def to_spec(self):
        """Returns a description of this field suitable for client side use."""
        validators = {}
        for r in self.rule_list:
            validators.update(r.spec_kwargs)
        spec = {
            'name': self.get_name_attribute(),
            'label': self.label,
            'type': self.attributes.get('type'),
            'validators': validators}
        default = self.get_default()
        if default is not None:
            spec['defaultValue'] = default
        return spec

    def clone(self):
        """Returns a copy of this field that can be filled independently."""
        clone = copy(self)
        clone.attributes = dict(self.attributes)
        clone.rule_list = list(self.rule_list)
        return clone

    def __repr__(self):
        return '<{} column={!r}>'.format(self.__class__.__name__, self.column)


class Text(Field):
    pass


class Hidden(Field):
    input_type = 'hidden'

    def __init__(self, column, label=None):
        Field.__init__(self, label or column, column)


class TextBlock(Field):
    """A decoration that shows a static block of text inside a form."""

    is_decoration = True

    def __init__(self, label, text):
        Field.__init__(self, label, column='_text_block')
        self.text = text

    def resolve_fill(self, raw, casted=None, index=0):
        return self

    def resolve_preview(self):
        return self.text
