# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Fields bound to relationships of SQLAlchemy models."""

from collections import namedtuple

from sqlalchemy import inspect

from crudpanel.components import TableBuilder
from crudpanel.exceptions import ConfigurationError
from crudpanel.fields.base import Field
from crudpanel.fields.related_values import HasQueryCustomization, HasRelatedValues, RelatedValueResolver
from crudpanel.forms import FormAssembler
from crudpanel.utils import get_attr_path, get_primary_key, is_model, listify, uncamel


__all__ = [
    'BelongsTo', 'BelongsToMany', 'HasOne', 'ModelRelationField', 'RelatedValuesField', 'RelationDescriptor']


class RelationDescriptor(namedtuple('RelationDescriptor', ['name', 'related_model', 'to_many'])):
    """The name, related model class and cardinality of a relationship."""

    __slots__ = ()

    @property
    def to_one(self):
        return not self.to_many


class ModelRelationField(Field):
    """
    Base class for fields bound to a relationship of the model being edited.

    The relationship name defaults to the snake case form of the label, so
    ``BelongsTo('Main Category')`` is bound to ``main_category``.

    Attributes:
        to_one (bool): Whether the relationship refers to a single record.
        requires_parent (bool): Whether the field can only be used inside a
            parent resource context.
    """

    to_one = True
    requires_parent = False

    def __init__(self, label, relation_name=None, resource=None, formatted=None):
        """
        Args:
            label (str): Human readable label.
            relation_name (str): Name of the relationship attribute.
            resource (crudpanel.resources.ModelResource): Resource of the
                related model.
            formatted (callable): Called with a related record and the field
                to produce the record's display label.
        """
        relation_name = relation_name or uncamel(label.replace(' ', ''))
        Field.__init__(self, label, relation_name, formatted)
        self.relation_name = relation_name
        self.resource = resource
        self.parent_item = None
        self.parent_model = None
        self._display_column = None

    def bind(self, model):
        """Binds the field to the mapped class owning the relationship."""
        self.parent_model = model
        return self

    def get_relation(self, context=None):
        """
        Returns the `RelationDescriptor` of this field's relationship.

        The owning model is, in order of preference, the class of the filled
        instance, the bound model, or the model of the context's resource.

        Raises:
            ConfigurationError: If the relationship cannot be resolved, or if
                the field requires a parent resource the context lacks.
        """
        if self.requires_parent and (context is None or context.resource is None):
            raise ConfigurationError('Parent resource is required for {}'.format(self.relation_name))

        model = self.parent_model
        if model is None and context is not None and context.resource is not None:
            model = context.resource.model
        if model is None:
            raise ConfigurationError('Relation is required: no model owns {}'.format(self.relation_name))

        relationships = inspect(model).relationships
        if self.relation_name not in relationships:
            raise ConfigurationError('Relation is required: {}.{} is not a relationship'.format(
                model.__name__, self.relation_name))

        prop = relationships[self.relation_name]
        return RelationDescriptor(self.relation_name, prop.mapper.class_, bool(prop.uselist))

    def get_resource(self):
        if self.resource is None:
            raise ConfigurationError('Resource is required for {}'.format(self.relation_name))
        return self.resource

    def display_column(self, column):
        self._display_column = column
        return self

    def get_resource_column(self):
        if self._display_column:
            return self._display_column
        elif self.resource is not None and self.resource.column:
            return self.resource.column
        return 'id'

    def option_label(self, record):
        if self.formatted_value_callback is not None:
            return self.formatted_value_callback(record, self)
        return get_attr_path(record, self.get_resource_column())

    def resolve_fill(self, raw, casted=None, index=0):
        if is_model(casted):
            self.parent_item = casted
            self.parent_model = type(casted)
            self._value = getattr(casted, self.relation_name, None)
        else:
            self._value = get_attr_path(raw, self.relation_name)
        return self


class RelatedValuesField(ModelRelationField, HasRelatedValues, HasQueryCustomization):
    """
    A relation field whose candidate records are offered as options.

    Candidate resolution is delegated to a `RelatedValueResolver`.
    """

    input_type = 'select'

    def __init__(self, label, relation_name=None, resource=None, formatted=None):
        ModelRelationField.__init__(self, label, relation_name, resource, formatted)
        self.related_values = RelatedValueResolver(self)

    def values_query(self, callback):
        """
        Customizes the candidate query.

        Args:
            callback (callable): Receives the query and this field, and
                returns the query to run.
        """
        self.related_values.query_callback = callback
        self.related_values.invalidate()
        return self

    def related_columns(self, columns):
        """Only loads `columns` (and the primary key) of the candidates."""
        self.related_values.related_columns = tuple(columns)
        self.related_values.invalidate()
        return self

    def option_properties(self, callback):
        """Adds `callback(record, field)` as metadata of each option."""
        self.related_values.properties_callback = callback
        return self

    def get_values(self, context):
        return self.related_values.get_values(context)

    def clone(self):
        clone = ModelRelationField.clone(self)
        clone.related_values = self.related_values.copy_for(clone)
        return clone

    def selected_records(self):
        return [value for value in listify(self.to_value()) if is_model(value)]

    def _key_string(self, value):
        key = get_primary_key(value) if is_model(value) else value
        return '' if key is None else str(key)


class BelongsTo(RelatedValuesField):
    """Picks the single record a many-to-one relationship refers to."""

    def resolve_selected_value(self):
        return self._key_string(self.to_value())

    def resolve_preview(self):
        value = self.to_value(with_default=False)
        if value is None:
            return ''
        elif is_model(value):
            return str(self.option_label(value))
        return str(value)


class BelongsToMany(RelatedValuesField):
    """Picks the records of a many-to-many (or one-to-many) relationship."""

    to_one = False

    def __init__(self, label, relation_name=None, resource=None, formatted=None):
        RelatedValuesField.__init__(self, label, relation_name, resource, formatted)
        self._multiple = True
        self.attributes['multiple'] = True

    def resolve_fill(self, raw, casted=None, index=0):
        RelatedValuesField.resolve_fill(self, raw, casted, index)
        if self._value is not None:
            self._value = listify(self._value)
        return self

    def resolve_selected_value(self):
        return [self._key_string(value) for value in listify(self.to_value())]

    def resolve_preview(self):
        values = listify(self.to_value(with_default=False))
        return ', '.join(str(self.option_label(v)) if is_model(v) else str(v) for v in values)


class HasOne(ModelRelationField):
    """
    Edits the single record a one-to-one relationship refers to, in a
    sub-form of the parent record's form.
    """

    requires_parent = True
    is_group = True

    def __init__(self, label, relation_name=None, resource=None, formatted=None):
        ModelRelationField.__init__(self, label, relation_name, resource, formatted)
        self._fields = None

    def fields(self, fields):
        self._fields = list(fields)
        return self

    def has_fields(self):
        return self._fields is not None

    def prepared_fields(self):
        """
        Returns copies of the sub-form fields: the explicitly given ones, or
        else the form fields of the related resource.
        """
        if self.has_fields():
            fields = self._fields
        else:
            fields = self.get_resource().form_fields()
        return [field.clone() for field in fields]

    def resolve_preview(self):
        items = [item for item in listify(self.to_value(with_default=False)) if item is not None]
        if not items:
            return ''
        elif self.is_raw_mode():
            return ';'.join(str(get_attr_path(item, self.get_resource_column())) for item in items)
        return TableBuilder(items, self.prepared_fields()).preview().simple().vertical().render()

    def get_form(self, context):
        """Returns the sub-form, see `crudpanel.forms.FormAssembler`."""
        return FormAssembler(self).assemble(context)
