# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Sub-forms for editing the record behind a to-one relation."""

import structlog

from crudpanel.components import ActionButton, FormBuilder
from crudpanel.exceptions import ConfigurationError
from crudpanel.fields.base import Hidden, TextBlock
from crudpanel.utils import get_primary_key, model_to_dict


__all__ = ['FormAssembler']


log = structlog.get_logger(__name__)


class FormAssembler(object):
    """
    Builds the form shown by a `HasOne` field.

    If the relation is empty the form creates the related record; otherwise
    it updates it, and a delete button (confirmed in an inline modal) is
    added. Both submit to nested relation routes of the parent resource.

    Attributes:
        messages (dict): Labels of the submit and delete buttons, and the
            delete confirmation text.
        submit_attributes (dict): Attributes of the submit button.
        delete_attributes (dict): Attributes of the delete button.
    """

    messages = {
        'save': 'Save',
        'delete': 'Delete',
        'confirm': 'Are you sure?'}

    submit_attributes = {'class': 'btn-primary btn-lg'}
    delete_attributes = {'class': 'btn-secondary btn-lg'}
    delete_submit_attributes = {'class': 'btn-secondary'}

    def __init__(self, field):
        self.field = field

    def assemble(self, context):
        """
        Returns the sub-form for the field's related record.

        Args:
            context (crudpanel.context.ExecutionContext): The request context;
                its resource is the parent resource.

        Returns:
            crudpanel.components.FormBuilder: The sub-form.

        Raises:
            ConfigurationError: If the context has no parent resource, or the
                field has no resource.
        """
        parent_resource = context.resource
        if parent_resource is None:
            raise ConfigurationError('Parent resource is required')

        resource = self.field.get_resource()
        relation_name = self.field.relation_name
        item = self.field.to_value()

        parent_item = self.field.parent_item
        if parent_item is None:
            parent_item = parent_resource.get_item_or_instance(context)
        parent_key = get_primary_key(parent_item)

        if item is None:
            action = parent_resource.route('relation.store', parent_key, relation=relation_name)
        else:
            action = parent_resource.route(
                'relation.update', parent_key, relation=relation_name, relation_item=get_primary_key(item))

        fields = self.field.prepared_fields()
        if item is not None:
            fields.append(Hidden('_method').set_value('PUT'))
        fields.append(Hidden('_relation').set_value(relation_name))

        log.debug('relation_form_assembled', relation=relation_name, update=item is not None, action=action)

        form = FormBuilder(action, fields, name=relation_name) \
            .precognitive() \
            .asynchronous() \
            .fill(model_to_dict(item)) \
            .submit(self.messages['save'], self.submit_attributes)

        if item is not None:
            form.set_buttons([self.delete_button(resource, parent_resource, parent_key)])
        return form

    def delete_button(self, resource, parent_resource, parent_key):
        redirect_url = parent_resource.page_url('form-page', parent_key)

        def confirmation_form(button, item):
            return FormBuilder(button.get_url(item), [
                Hidden('_method').set_value('DELETE'),
                TextBlock('', self.messages['confirm'])
            ]).submit(self.messages['delete'], self.delete_submit_attributes).redirect(redirect_url)

        return ActionButton(
            self.messages['delete'],
            url=lambda item: resource.route('crud.destroy', get_primary_key(item))
        ).custom_attributes(self.delete_attributes) \
            .in_modal(lambda: self.messages['delete'], confirmation_form) \
            .show_in_line()
