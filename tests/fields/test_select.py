# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Tests for :mod:`crudpanel.fields.select` module."""

from crudpanel.fields import Select
from crudpanel.options import OptionSet


STATUSES = [('draft', 'Draft'), ('live', 'Live'), ('gone', 'Gone')]


def test_get_values():
    field = Select('Status').options(STATUSES).fill(raw={'status': 'live'})
    assert field.get_values() == OptionSet(STATUSES, 'live')


def test_preview_shows_label():
    assert Select('Status').options(STATUSES).fill(raw={'status': 'live'}).preview() == 'Live'


def test_preview_unknown_key():
    assert Select('Status').options(STATUSES).fill(raw={'status': 'other'}).preview() == 'other'


def test_multiple():
    field = Select('Status').options(STATUSES).multiple().fill(raw={'status': 'draft'})
    assert field.is_multiple()
    assert field.value() == ['draft']
    assert field.get_name_attribute() == 'status[]'
    assert field.get_attribute('multiple') is True

    field.fill(raw={'status': ['draft', 'gone']})
    assert field.preview() == 'Draft, Gone'
    assert field.get_values().selected_keys == ['draft', 'gone']


def test_option_properties():
    field = Select('Status').options(STATUSES, {'live': {'color': 'green'}})
    assert field.get_values().properties == {'live': {'color': 'green'}}


def test_searchable():
    assert Select('Status').searchable().is_searchable()
    assert not Select('Status').is_searchable()
