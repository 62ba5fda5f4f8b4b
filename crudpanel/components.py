# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""
Form, table and button descriptors.

These are plain descriptions of UI components. Turning them into HTML is
left to whatever view layer the application uses; `TableBuilder.render`
only produces a plain text rendition for previews and logs.
"""

from crudpanel.utils import is_model


__all__ = ['ActionButton', 'FormBuilder', 'Modal', 'TableBuilder']


def _fill_field(field, item):
    field = field.clone()
    if is_model(item):
        return field.fill(casted=item)
    return field.fill(raw=item)


class Modal(object):
    def __init__(self, title, content):
        self.title = title
        self.content = content

    def __repr__(self):
        return '<Modal title={!r}>'.format(self.title)


class ActionButton(object):
    """
    A button that links to, or submits to, a URL.

    The URL may be a callable receiving the item the button acts on, so one
    button definition can be reused for every row of a table.
    """

    def __init__(self, label, url=''):
        self.label = label
        self.url = url
        self.attributes = {}
        self._modal_title = None
        self._modal_content = None
        self._in_line = False

    def get_url(self, item=None):
        return self.url(item) if callable(self.url) else self.url

    def custom_attributes(self, attributes):
        self.attributes.update(attributes)
        return self

    def in_modal(self, title, content):
        """
        Opens a modal instead of following the URL.

        Args:
            title (str or callable): The modal title, or a callable without
                arguments returning it.
            content (callable): Receives this button and the item, and
                returns the modal content (usually a `FormBuilder`).
        """
        self._modal_title = title
        self._modal_content = content
        return self

    def is_in_modal(self):
        return self._modal_content is not None

    def get_modal(self, item=None):
        if not self.is_in_modal():
            return None
        title = self._modal_title() if callable(self._modal_title) else self._modal_title
        return Modal(title, self._modal_content(self, item))

    def show_in_line(self):
        self._in_line = True
        return self

    def is_in_line(self):
        return self._in_line

    def __repr__(self):
        return '<ActionButton label={!r}>'.format(self.label)


class FormBuilder(object):
    """
    Describes a form: where it submits, its fields, values and buttons.

    The HTTP method actually intended is taken from a hidden ``_method``
    field when one is present, as browsers can only submit GET and POST.
    """

    def __init__(self, action='', fields=(), method='POST', name=None):
        self.action = action
        self.method = method
        self.name = name
        self.fields = list(fields)
        self.values = {}
        self.buttons = []
        self.submit_label = None
        self.submit_attributes = {}
        self.redirect_url = None
        self.is_precognitive = False
        self.is_async = False

    def fill(self, values):
        self.values = dict(values or {})
        return self

    def set_buttons(self, buttons):
        self.buttons = list(buttons)
        return self

    def submit(self, label, attributes=None):
        self.submit_label = label
        self.submit_attributes = dict(attributes or {})
        return self

    def redirect(self, url):
        self.redirect_url = url
        return self

    def precognitive(self):
        self.is_precognitive = True
        return self

    def asynchronous(self):
        self.is_async = True
        return self

    def get_field(self, column):
        for field in self.fields:
            if field.column == column:
                return field
        return None

    def get_method(self):
        method_field = self.get_field('_method')
        if method_field is not None and method_field.to_value():
            return str(method_field.to_value()).upper()
        return self.method

    def get_filled_fields(self):
        """Returns copies of the fields filled with the form values."""
        filled = []
        for field in self.fields:
            if field.column in self.values:
                field = _fill_field(field, self.values)
            filled.append(field)
        return filled

    def __repr__(self):
        return '<FormBuilder {} {}>'.format(self.get_method(), self.action)


class TableBuilder(object):
    """Describes a table of `items`, one column (or row, if vertical) per field."""

    def __init__(self, items=(), fields=()):
        self.items = list(items)
        self.fields = [field for field in fields if not field.is_decoration]
        self.is_vertical = False
        self.is_simple = False
        self.is_preview = False

    def vertical(self):
        self.is_vertical = True
        return self

    def simple(self):
        self.is_simple = True
        return self

    def preview(self):
        self.is_preview = True
        return self

    def rows(self):
        """Returns one list of (label, preview) pairs per item."""
        return [[(field.label, _fill_field(field, item).preview()) for field in self.fields] for item in self.items]

    def render(self):
        rows = self.rows()
        if self.is_vertical:
            return '\n\n'.join('\n'.join('{}: {}'.format(label, value) for label, value in row) for row in rows)

        lines = [' | '.join(field.label for field in self.fields)]
        lines.extend(' | '.join(str(value) for label, value in row) for row in rows)
        return '\n'.join(lines)
