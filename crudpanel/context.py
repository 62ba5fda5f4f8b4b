# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""The per-request execution context handed to fields, tags and forms."""

from crudpanel.cache import default_cache


__all__ = ['ExecutionContext']


class ExecutionContext(object):
    """
    Everything a field, query tag or form needs from the current request.

    Subclass to change the configuration attributes::

        class AppContext(ExecutionContext):
            query_tag_param = 'tag'
            related_values_cache_timeout = 10

    Attributes:
        query_tag_param (str): Name of the request parameter which selects a
            query tag on listing pages.
        related_values_cache_timeout (int): Number of seconds related values
            stay in the shared result cache.
    """

    query_tag_param = 'query-tag'
    related_values_cache_timeout = 4

    def __init__(self, session, params=None, cache=None, resource=None, item_key=None):
        """
        Args:
            session (sqlalchemy.orm.Session): Session used to build and run
                queries.
            params (collections.abc.Mapping): Request parameters.
            cache (crudpanel.cache.ResultCache): Shared result cache. Defaults
                to the process-wide `crudpanel.cache.default_cache`.
            resource (crudpanel.resources.ModelResource): The resource the
                request is addressed to, if any.
            item_key: Primary key of the resource item being shown or edited.
        """
        self.session = session
        self.params = params if params is not None else {}
        self.cache = cache if cache is not None else default_cache
        self.resource = resource
        self.item_key = item_key

    def get_scalar(self, name, default=None):
        """Returns the named request parameter, unless it is not a scalar."""
        value = self.params.get(name, default)
        if isinstance(value, (list, tuple, set, dict)):
            return default
        return value

    def filled(self, name):
        value = self.get_scalar(name)
        return value is not None and str(value).strip() != ''

    def with_resource(self, resource, item_key=None):
        """Returns a copy of this context addressed to another resource."""
        return self.__class__(self.session, self.params, self.cache, resource, item_key)

    def __repr__(self):
        return '<{} resource={!r} item_key={!r}>'.format(self.__class__.__name__, self.resource, self.item_key)
