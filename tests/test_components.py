# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Tests for :mod:`crudpanel.components` module."""

from crudpanel import ActionButton, FormBuilder, Hidden, TableBuilder, Text, TextBlock
from tests import Category


def test_form_method_from_hidden_field():
    assert FormBuilder('/x').get_method() == 'POST'
    assert FormBuilder('/x', [Hidden('_method').set_value('patch')]).get_method() == 'PATCH'
    assert FormBuilder('/x', method='GET').get_method() == 'GET'


def test_form_filled_fields_are_copies():
    name = Text('Name')
    form = FormBuilder('/x', [name, Hidden('_relation').set_value('category')]).fill({'name': 'News'})
    assert [field.value() for field in form.get_filled_fields()] == ['News', 'category']
    assert name.value() is None


def test_action_button_url():
    button = ActionButton('Edit', lambda item: '/edit/{}'.format(item.id))
    assert button.get_url(Category(id=7)) == '/edit/7'
    assert ActionButton('Home', '/').get_url() == '/'
    assert ActionButton('Home', '/').get_modal() is None


def test_table_horizontal():
    table = TableBuilder(
        [{'id': 1, 'name': 'News'}, Category(id=2, name='Sports')],
        [Text('Id'), Text('Name'), TextBlock('', 'ignored')])
    assert table.render() == 'Id | Name\n1 | News\n2 | Sports'


def test_table_vertical():
    table = TableBuilder([Category(id=1, name='News')], [Text('Id'), Text('Name')]).vertical()
    assert table.rows() == [[('Id', '1'), ('Name', 'News')]]
    assert table.render() == 'Id: 1\nName: News'
