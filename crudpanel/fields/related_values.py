# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""
Resolution of the candidate records offered by relation fields.

Relation fields that let the user pick related records do not resolve the
candidates themselves; they hold a `RelatedValueResolver` and delegate to it.
The resolver builds the base query for the related model, lets the field's
`values_query` callback customize it, runs it (at most once per field and
fingerprint, and at most once every few seconds per process), and turns the
records into an `OptionSet`.
"""

from abc import ABCMeta, abstractmethod
from collections import namedtuple

import structlog
from sqlalchemy import inspect
from sqlalchemy.orm import load_only, make_transient_to_detached

from crudpanel.options import OptionSet
from crudpanel.utils import fingerprint_query, get_primary_key, is_persisted


__all__ = [
    'HasQueryCustomization', 'HasRelatedValues', 'MemoizedResults', 'RecordSnapshot', 'RelatedValueResolver',
    'restore_record', 'snapshot_record']


log = structlog.get_logger(__name__)


RecordSnapshot = namedtuple('RecordSnapshot', ['model', 'identity_key', 'values'])


def snapshot_record(record):
    """
    Returns the persisted column values of `record` as a `RecordSnapshot`.

    Pending changes are left out: a modified attribute contributes its
    committed value, and unloaded attributes are skipped.
    """
    state = inspect(record)
    values = {}
    for attr in state.mapper.column_attrs:
        if attr.key in state.unloaded:
            continue
        history = state.attrs[attr.key].history
        committed = list(history.unchanged) + list(history.deleted)
        if committed:
            values[attr.key] = committed[0]
    return RecordSnapshot(state.mapper.class_, state.identity_key, values)


def restore_record(snapshot, session):
    """
    Returns the record described by `snapshot` as a persistent instance of
    `session`, without issuing SQL.

    The session's own instance wins if it already holds that identity.
    Attributes missing from the snapshot are loaded on first access.
    """
    record = session.identity_map.get(snapshot.identity_key)
    if record is not None:
        return record
    record = inspect(snapshot.model).class_manager.new_instance()
    for key, value in snapshot.values.items():
        setattr(record, key, value)
    make_transient_to_detached(record)
    session.add(record)
    return record


class HasRelatedValues(metaclass=ABCMeta):
    """Capability of fields which offer related records as options."""

    @abstractmethod
    def get_values(self, context):
        pass


class HasQueryCustomization(metaclass=ABCMeta):
    """Capability of fields whose candidate query can be customized."""

    @abstractmethod
    def values_query(self, callback):
        pass


class MemoizedResults(object):
    """The records last fetched for one field, keyed by query fingerprint."""

    def __init__(self):
        self.invalidate()

    def get(self, fingerprint):
        if self._present and self._fingerprint == fingerprint:
            return self._records
        return None

    def put(self, fingerprint, records):
        self._fingerprint = fingerprint
        self._records = records
        self._present = True

    def invalidate(self):
        self._fingerprint = None
        self._records = None
        self._present = False


class RelatedValueResolver(object):
    """
    Resolves the options of a relation field.

    The field is expected to provide `get_relation(context)`,
    `option_label(record)`, `resolve_selected_value()` and
    `selected_records()`.
    """

    def __init__(self, field):
        self.field = field
        self.memo = MemoizedResults()
        self.query_callback = None
        self.related_columns = ()
        self.properties_callback = None

    def base_query(self, context):
        """
        Returns the query for the candidate related records.

        Raises:
            ConfigurationError: If the field's relation cannot be resolved.
        """
        relation = self.field.get_relation(context)
        model = relation.related_model
        query = context.session.query(model)
        if self.related_columns:
            query = query.options(load_only(*[getattr(model, name) for name in self.related_columns]))
        if self.query_callback is not None:
            query = self.query_callback(query, self.field)
        return query

    def fetch(self, query, context):
        """
        Returns the records of `query`, from the field memo or the shared
        result cache when possible.
        """
        fingerprint = fingerprint_query(query)
        records = self.memo.get(fingerprint)
        if records is not None:
            return records

        if fingerprint is None:
            log.warning('related_values_uncached', field=self.field.column, query=type(query).__name__)
            records = list(query.all())
        else:
            # Only detached snapshots are shared, never another session's instances
            snapshots = context.cache.remember(
                fingerprint, context.related_values_cache_timeout,
                lambda: [snapshot_record(record) for record in query.all()])
            records = [restore_record(snapshot, context.session) for snapshot in snapshots]

        self.memo.put(fingerprint, records)
        return records

    def copy_for(self, field):
        """Returns a resolver for `field` with this resolver's customizations and an empty memo."""
        resolver = self.__class__(field)
        resolver.query_callback = self.query_callback
        resolver.related_columns = self.related_columns
        resolver.properties_callback = self.properties_callback
        return resolver

    def _properties(self, records):
        if self.properties_callback is None:
            return {}
        return {get_primary_key(record): self.properties_callback(record, self.field) for record in records}

    def get_values(self, context):
        """
        Returns the candidate related records as an `OptionSet`.

        If there are no candidates, the field's persisted selected record(s)
        become the only options, so a selection never silently disappears.

        Args:
            context (crudpanel.context.ExecutionContext): The request context.

        Returns:
            crudpanel.options.OptionSet: The options, in query order.
        """
        query = self.base_query(context)
        records = self.fetch(query, context)
        selected = self.field.resolve_selected_value()

        if not records:
            records = [record for record in self.field.selected_records() if is_persisted(record)]
            if records:
                log.debug('related_values_selected_injected', field=self.field.column, count=len(records))

        values = [(get_primary_key(record), self.field.option_label(record)) for record in records]
        return OptionSet(values, selected, self._properties(records))

    def invalidate(self):
        self.memo.invalidate()
