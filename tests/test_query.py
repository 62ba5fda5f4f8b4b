# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Tests for :mod:`crudpanel.query` module."""

import datetime

import pytest

import crudpanel.query
from crudpanel.query import constrain_query_by_date
from tests import Post


UTCNOW = datetime.datetime(2020, 3, 1, 12, 0, 0)
UTC20DAYSAGO = UTCNOW - datetime.timedelta(days=20)
UTC40DAYSAGO = UTCNOW - datetime.timedelta(days=40)
UTC60DAYSAGO = UTCNOW - datetime.timedelta(days=60)


@pytest.fixture(autouse=True)
def datetime_utcnow(monkeypatch):

    class _datetime(object):
        @classmethod
        def utcnow(cls):
            return UTCNOW

    monkeypatch.setattr(crudpanel.query, 'datetime', _datetime)
    return UTCNOW


@pytest.fixture
def posts(session):
    posts = [
        Post(id=1, title='now', created_at=UTCNOW),
        Post(id=2, title='20 days ago', created_at=UTC20DAYSAGO),
        Post(id=3, title='40 days ago', created_at=UTC40DAYSAGO),
        Post(id=4, title='60 days ago', created_at=UTC60DAYSAGO)]
    session.add_all(posts)
    session.flush()
    return posts


def _titles(query):
    return sorted(post.title for post in query.all())


@pytest.mark.parametrize('start_date,end_date,interval,expected', [
    (UTC40DAYSAGO, UTC20DAYSAGO, None, ['20 days ago', '40 days ago']),
    (UTC40DAYSAGO, None, datetime.timedelta(days=30), ['20 days ago', '40 days ago']),
    (UTC40DAYSAGO, None, None, ['20 days ago', '40 days ago', 'now']),
    (None, UTC40DAYSAGO, datetime.timedelta(days=30), ['40 days ago', '60 days ago']),
    (None, UTC40DAYSAGO, None, ['40 days ago', '60 days ago']),
    (None, None, datetime.timedelta(days=30), ['20 days ago', 'now']),
    (None, None, None, ['20 days ago', '40 days ago', '60 days ago', 'now']),
])
def test_constrain_query_by_date(session, posts, start_date, end_date, interval, expected):
    query = constrain_query_by_date(session.query(Post), Post.created_at, start_date, end_date, interval)
    assert _titles(query) == expected


def test_constrain_query_by_date_unmodified(session):
    query = session.query(Post)
    assert constrain_query_by_date(query, Post.created_at) is query
