# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Tests for :mod:`crudpanel.routing` and :mod:`crudpanel.resources` URLs."""

import pytest

from crudpanel import ConfigurationError, ModelResource, Router
from tests import PostResource


def test_url():
    router = Router()
    assert router.url('crud.index', resource='post-resource') == '/resource/post-resource/crud'
    assert router.url('crud.destroy', resource='post-resource', resource_item=5) == \
        '/resource/post-resource/crud/5'
    assert router.url('relation.update', resource='a', resource_item=1, relation='profile', relation_item=2) == \
        '/resource/a/1/relation/profile/2'


def test_url_quotes_parameters():
    assert Router().url('crud.show', resource='post', resource_item='a/b c') == '/resource/post/crud/a%2Fb%20c'


def test_url_query_string():
    assert Router().url('crud.index', query={'query-tag': 'archived'}, resource='post') == \
        '/resource/post/crud?query-tag=archived'


def test_prefix():
    class AdminRouter(Router):
        prefix = '/admin'

    assert AdminRouter().url('crud.index', resource='post') == '/admin/resource/post/crud'


def test_unknown_route():
    with pytest.raises(ConfigurationError):
        Router().url('nope')


def test_missing_parameter():
    with pytest.raises(ConfigurationError):
        Router().url('crud.update', resource='post')


def test_resource_urls():
    resource = PostResource()
    assert resource.get_uri_key() == 'post-resource'
    assert resource.route('crud.update', 9) == '/resource/post-resource/crud/9'
    assert resource.page_url('index-page') == '/resource/post-resource/index-page'
    assert resource.page_url('form-page', 9) == '/resource/post-resource/form-page/9'


def test_resource_uri_key_override():
    class Articles(ModelResource):
        uri_key = 'articles'

    assert Articles().get_uri_key() == 'articles'
