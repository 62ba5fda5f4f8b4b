# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""URL building for resource CRUD, relation and page routes."""

import re
from urllib.parse import quote, urlencode

from crudpanel.exceptions import ConfigurationError


__all__ = ['Router']


_placeholder = re.compile(r'{(\w+)}')


class Router(object):
    """
    Builds URLs from named route templates.

    Templates use ``{name}`` placeholders, which are filled with URL quoted
    keyword arguments. Subclass and override `prefix` or `routes` to mount
    the panel somewhere else::

        class AdminRouter(Router):
            prefix = '/admin'

    Attributes:
        prefix (str): Prepended to every generated path.
        routes (dict): Route name to path template.
    """

    prefix = ''
    routes = {
        'crud.index': '/resource/{resource}/crud',
        'crud.store': '/resource/{resource}/crud',
        'crud.show': '/resource/{resource}/crud/{resource_item}',
        'crud.update': '/resource/{resource}/crud/{resource_item}',
        'crud.destroy': '/resource/{resource}/crud/{resource_item}',
        'relation.store': '/resource/{resource}/{resource_item}/relation/{relation}',
        'relation.update': '/resource/{resource}/{resource_item}/relation/{relation}/{relation_item}',
        'page': '/resource/{resource}/{page}',
        'page.item': '/resource/{resource}/{page}/{resource_item}',
    }

    def url(self, name, query=None, **params):
        """
        Returns the path for the route called `name`.

        Args:
            name (str): Route name, e.g. 'crud.destroy'.
            query (dict): Optional query string parameters.
            **params: Values for the route template placeholders.

        Returns:
            str: The generated path.

        Raises:
            ConfigurationError: If the route is unknown, or a placeholder has
                no value.
        """
        try:
            template = self.routes[name]
        except KeyError:
            raise ConfigurationError('Unknown route: {}'.format(name))

        def _replace(match):
            value = params.get(match.group(1))
            if value is None:
                raise ConfigurationError('Route {} requires the {} parameter'.format(name, match.group(1)))
            return quote(str(value), safe='')

        path = self.prefix + _placeholder.sub(_replace, template)
        if query:
            path = '{}?{}'.format(path, urlencode(query))
        return path
