# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""SQL and SQLAlchemy related utilities."""

import re
import unicodedata
import uuid
from collections.abc import Mapping

from sqlalchemy import inspect
from sqlalchemy.orm import Query
from sqlalchemy.orm.state import InstanceState


__all__ = [
    'fingerprint_sql', 'fingerprint_query', 'supports_fingerprint', 'get_attr_path', 'get_primary_key',
    'is_model', 'is_persisted', 'listify', 'model_to_dict', 'slugify', 'uncamel', 'NAMESPACE_SQL']


NAMESPACE_SQL = uuid.UUID('75c7e3be-a5c7-414d-bc66-d64ae5d03f3d')
_single_quote_whitespace = re.compile(r"\s+(?=([^']*'[^']*')*[^']*$)")
_camel_boundary = re.compile(r'((?<=[a-z0-9])[A-Z]|(?!^)[A-Z](?=[a-z]))')
_non_slug_chars = re.compile(r'[^a-z0-9]+')


def fingerprint_sql(sqltext):
    """
    Returns the uuid5 hexdigest of a normalized version of `sqltext`.

    Normalization involves replacing all substrings of non-single quoted
    whitespace with a single space. The namespace used to create the uuid5
    is `NAMESPACE_SQL`::

        uuid.UUID('75c7e3be-a5c7-414d-bc66-d64ae5d03f3d')

    >>> fingerprint_sql("select * from user where name = 'Foo    Bar'")
    'b23bfc4cc7ad535ba6463473669f6597'

    >>> fingerprint_sql('''
    ... select *
    ... from user
    ... where name = 'Foo    Bar'
    ... ''')
    'b23bfc4cc7ad535ba6463473669f6597'

    Args:
        sqltext (str): Some raw SQL string.

    Returns:
        str: A 32 character hex uuid5 of a normalized version of `sqltext`.
    """
    sqltext = _single_quote_whitespace.sub(' ', sqltext).strip()
    return uuid.uuid5(NAMESPACE_SQL, sqltext).hex


def supports_fingerprint(query):
    """
    Returns True if `query` can be compiled to SQL text for fingerprinting.

    Query classes declare the capability with a `supports_fingerprint` class
    attribute. SQLAlchemy `Query` objects are assumed to support it unless
    they say otherwise; any other query-like object is assumed not to.
    """
    return bool(getattr(query, 'supports_fingerprint', isinstance(query, Query)))


def fingerprint_query(query):
    """
    Returns a stable fingerprint of the compiled `query`, including its bound
    parameter values.

    Args:
        query (sqlalchemy.orm.query.Query): The query to fingerprint.

    Returns:
        str: A 32 character hex uuid5, or None if the query does not support
            fingerprinting (see `supports_fingerprint`).
    """
    if not supports_fingerprint(query):
        return None

    session = query.session
    dialect = session.get_bind().dialect if session is not None else None
    compiled = query.statement.compile(dialect=dialect)
    params = sorted(compiled.params.items(), key=lambda item: item[0])
    return fingerprint_sql('{} -- {!r}'.format(compiled, params))


def uncamel(s, sep='_'):
    """
    Converts CamelCase to snake_case.

    >>> uncamel('BlogPostResource')
    'blog_post_resource'
    >>> uncamel('HTTPRequest', '-')
    'http-request'
    """
    return _camel_boundary.sub(sep + r'\1', s).lower()


def slugify(s, sep='-'):
    """
    Converts `s` into an ASCII, lowercase, URL friendly slug.

    >>> slugify('Active users')
    'active-users'
    >>> slugify('  Ünïcode & Friends!  ')
    'unicode-friends'
    """
    s = unicodedata.normalize('NFKD', str(s)).encode('ascii', 'ignore').decode('ascii')
    return _non_slug_chars.sub(sep, s.lower()).strip(sep)


def listify(x):
    """Wraps `x` in a list unless it is already a list, tuple or set."""
    if x is None:
        return []
    elif isinstance(x, (list, tuple, set, frozenset)):
        return list(x)
    return [x]


def get_attr_path(obj, path, default=None):
    """
    Follows a dotted `path` of attributes or mapping keys starting at `obj`.

    >>> get_attr_path({'user': {'name': 'Bob'}}, 'user.name')
    'Bob'
    """
    for name in path.split('.'):
        if obj is None:
            return default
        if isinstance(obj, Mapping):
            obj = obj.get(name, default)
        else:
            obj = getattr(obj, name, default)
    return obj


def is_model(obj):
    """Returns True if `obj` is an instance of a mapped class."""
    return isinstance(inspect(obj, raiseerr=False), InstanceState)


def is_persisted(obj):
    """Returns True if `obj` is a mapped instance with a database identity."""
    state = inspect(obj, raiseerr=False)
    return isinstance(state, InstanceState) and state.has_identity


def get_primary_key(obj):
    """
    Returns the primary key of the mapped instance `obj`.

    Single column primary keys are returned as a scalar, composite primary
    keys as a tuple. Returns None if `obj` is None.
    """
    if obj is None:
        return None
    state = inspect(obj)
    identity = state.identity
    if identity is None:
        identity = state.mapper.primary_key_from_instance(obj)
    return identity[0] if len(identity) == 1 else tuple(identity)


def model_to_dict(obj):
    """Returns the column attribute values of the mapped instance `obj`."""
    if obj is None:
        return {}
    return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}
