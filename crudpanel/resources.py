# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Resources: the admin panel definition of one SQLAlchemy model."""

import structlog

from crudpanel.exceptions import ConfigurationError
from crudpanel.query_tags import QueryTagSet
from crudpanel.routing import Router
from crudpanel.utils import uncamel


__all__ = ['ModelResource']


log = structlog.get_logger(__name__)


class ModelResource(object):
    """
    Describes how one model is listed and edited.

    Subclass and set the class attributes, overriding `form_fields` and
    `query_tags` as needed::

        class PostResource(ModelResource):
            model = Post
            column = 'title'

            def form_fields(self):
                return [Text('Title'), BelongsTo('Author', resource=UserResource())]

            def query_tags(self):
                return [QueryTag('Drafts', lambda query: query.filter(Post.draft.is_(True)))]

    Attributes:
        model (class): The mapped class.
        column (str): Attribute used to label records of this resource.
        uri_key (str): URI segment of the resource. Defaults to the kebab
            case form of the class name, e.g. "post-resource".
        router_class (class): The `crudpanel.routing.Router` subclass used
            to build URLs.
    """

    model = None
    column = 'id'
    uri_key = None
    router_class = Router

    def __init__(self, router=None):
        self.router = router or self.router_class()

    def get_uri_key(self):
        return self.uri_key or uncamel(self.__class__.__name__, '-')

    def form_fields(self):
        return []

    def index_fields(self):
        return self.form_fields()

    def query_tags(self):
        return []

    def get_query_tags(self):
        return QueryTagSet(self.query_tags())

    def _model(self):
        if self.model is None:
            raise ConfigurationError('{} has no model'.format(self.__class__.__name__))
        return self.model

    def query(self, context):
        return context.session.query(self._model())

    def listing_query(self, context):
        """Returns the listing query, filtered by the active query tag."""
        return self.get_query_tags().apply(self.query(context), context)

    def get_item(self, context):
        """Returns the record addressed by the context's item key, if any."""
        if context.item_key is None:
            return None
        return context.session.get(self._model(), context.item_key)

    def get_item_or_instance(self, context):
        item = self.get_item(context)
        if item is None:
            log.debug('resource_item_missing', resource=self.get_uri_key(), item_key=context.item_key)
            return self._model()()
        return item

    def route(self, name, key=None, query=None, **params):
        """
        Returns the URL of one of this resource's routes.

        Args:
            name (str): Route name, e.g. 'crud.update'.
            key: Primary key of the resource item the route addresses.
            query (dict): Optional query string parameters.
            **params: Any further route parameters.
        """
        return self.router.url(name, query=query, resource=self.get_uri_key(), resource_item=key, **params)

    def page_url(self, page, key=None, query=None):
        if key is None:
            return self.router.url('page', query=query, resource=self.get_uri_key(), page=page)
        return self.router.url('page.item', query=query, resource=self.get_uri_key(), page=page, resource_item=key)

    def __repr__(self):
        return '<{} uri_key={!r}>'.format(self.__class__.__name__, self.get_uri_key())
