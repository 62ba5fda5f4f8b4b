# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Named, request selectable filters for listing queries."""

import structlog

from crudpanel.utils import slugify


__all__ = ['QueryTag', 'QueryTagSet']


log = structlog.get_logger(__name__)


class QueryTag(object):
    """
    A labelled filter which listing pages offer as a "tag" above the table.

    The filter is any callable that accepts a query and returns a query; it
    is free to compose whatever predicates it likes::

        QueryTag('Archived', lambda query: query.filter(Post.archived.is_(True)))

    A tag is selected by passing its URI in the ``query-tag`` request
    parameter. The URI is the explicit alias if one was given, otherwise a
    slug of the label.
    """

    def __init__(self, label, builder):
        """
        Args:
            label (str or callable): The tag label, or a callable without
                arguments returning it.
            builder (callable): Receives the query and returns the filtered
                query.
        """
        self._label = label
        self.builder = builder
        self._is_default = False
        self._alias = None
        self._icon = None
        self._can_see = None

    def get_label(self):
        return self._label() if callable(self._label) else self._label

    def alias(self, alias):
        self._alias = alias
        return self

    def get_uri(self):
        if self._alias is not None:
            return self._alias
        return slugify(self.get_label())

    def default(self, condition=None):
        """
        Marks this tag as active when no tag is named in the request.

        Args:
            condition (bool or callable): Whether the tag is a default; a
                callable receives this tag. None means True.
        """
        value = condition(self) if callable(condition) else condition
        self._is_default = True if value is None else bool(value)
        return self

    def is_default(self):
        return self._is_default

    def icon(self, icon):
        self._icon = icon
        return self

    def get_icon(self):
        return self._icon

    def can_see(self, callback):
        """Only show this tag when `callback(context)` returns True."""
        self._can_see = callback
        return self

    def is_see(self, context):
        return self._can_see is None or bool(self._can_see(context))

    def is_active(self, context):
        param = context.query_tag_param
        if self.is_default() and not context.filled(param):
            return True
        return context.get_scalar(param) == self.get_uri()

    def apply(self, query):
        return self.builder(query)

    def __repr__(self):
        return '<QueryTag uri={!r} default={!r}>'.format(self.get_uri(), self._is_default)


class QueryTagSet(object):
    """
    The query tags of a listing page.

    At most one tag is selected per listing. A tag named in the request wins;
    otherwise the first default tag, in declaration order, is selected. Tags
    the current context may not see are never selected.
    """

    def __init__(self, tags=()):
        self.tags = list(tags)

    def __iter__(self):
        return iter(self.tags)

    def __len__(self):
        return len(self.tags)

    def visible(self, context):
        return [tag for tag in self.tags if tag.is_see(context)]

    def active_tag(self, context):
        """
        Returns the selected tag, or None if no tag applies.

        Args:
            context (crudpanel.context.ExecutionContext): The request context.
        """
        tags = self.visible(context)
        param = context.query_tag_param
        if context.filled(param):
            uri = context.get_scalar(param)
            for tag in tags:
                if tag.get_uri() == uri:
                    return tag
            log.debug('query_tag_unknown', uri=uri)
            return None

        for tag in tags:
            if tag.is_default():
                return tag
        return None

    def is_active(self, tag, context):
        return self.active_tag(context) is tag

    def apply(self, query, context):
        tag = self.active_tag(context)
        if tag is None:
            return query
        log.debug('query_tag_applied', uri=tag.get_uri())
        return tag.apply(query)
