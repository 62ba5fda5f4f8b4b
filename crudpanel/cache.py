# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Short-lived, process-wide caching of query results."""

import threading

import structlog
from cachetools import TTLCache


__all__ = ['ResultCache', 'default_cache']


log = structlog.get_logger(__name__)


class ResultCache(object):
    """
    A thread-safe key/value cache whose entries expire after a number of
    seconds.

    Entries are grouped into one `cachetools.TTLCache` bucket per timeout, so
    each call to `remember` can choose its own expiry. Producers run outside
    the lock: two callers missing the same key at the same time will both
    produce a value and the last one written wins.

    Attributes:
        maxsize (int): Maximum number of entries held in each bucket.
    """

    maxsize = 256

    def __init__(self, maxsize=None):
        self.maxsize = maxsize or self.maxsize
        self._buckets = {}
        self._lock = threading.RLock()

    def _bucket(self, timeout):
        with self._lock:
            bucket = self._buckets.get(timeout)
            if bucket is None:
                bucket = self._buckets[timeout] = TTLCache(maxsize=self.maxsize, ttl=timeout)
            return bucket

    def get(self, key, timeout, default=None):
        bucket = self._bucket(timeout)
        with self._lock:
            return bucket.get(key, default)

    def set(self, key, value, timeout):
        bucket = self._bucket(timeout)
        with self._lock:
            bucket[key] = value

    def remember(self, key, timeout, producer):
        """
        Returns the value cached under `key`, or calls `producer` and caches
        its result for `timeout` seconds.

        Args:
            key (str): The cache key.
            timeout (int): Number of seconds the produced value stays cached.
            producer (callable): Called without arguments on a cache miss.

        Returns:
            The cached or freshly produced value.
        """
        bucket = self._bucket(timeout)
        with self._lock:
            if key in bucket:
                log.debug('cache_hit', key=key)
                return bucket[key]

        log.debug('cache_miss', key=key, timeout=timeout)
        value = producer()
        with self._lock:
            bucket[key] = value
        return value

    def forget(self, key):
        with self._lock:
            for bucket in self._buckets.values():
                bucket.pop(key, None)

    def clear(self):
        with self._lock:
            self._buckets.clear()


default_cache = ResultCache()
