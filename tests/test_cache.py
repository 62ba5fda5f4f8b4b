# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Tests for :mod:`crudpanel.cache` module."""

from crudpanel.cache import ResultCache


class Producer(object):
    def __init__(self, value):
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.value


def test_remember_produces_once():
    cache = ResultCache()
    producer = Producer(['a', 'b'])
    assert cache.remember('key', 4, producer) == ['a', 'b']
    assert cache.remember('key', 4, producer) == ['a', 'b']
    assert producer.calls == 1


def test_remember_caches_empty_results():
    cache = ResultCache()
    producer = Producer([])
    cache.remember('key', 4, producer)
    cache.remember('key', 4, producer)
    assert producer.calls == 1


def test_timeouts_are_separate_buckets():
    cache = ResultCache()
    cache.set('key', 'short', 1)
    cache.set('key', 'long', 60)
    assert cache.get('key', 1) == 'short'
    assert cache.get('key', 60) == 'long'
    assert cache.get('missing', 60, 'default') == 'default'


def test_forget_and_clear():
    cache = ResultCache()
    producer = Producer('value')
    cache.remember('key', 4, producer)
    cache.forget('key')
    cache.remember('key', 4, producer)
    assert producer.calls == 2

    cache.clear()
    cache.remember('key', 4, producer)
    assert producer.calls == 3


def test_maxsize():
    assert ResultCache().maxsize == 256
    cache = ResultCache(maxsize=2)
    for key in ['a', 'b', 'c']:
        cache.set(key, key, 60)
    assert len([key for key in ['a', 'b', 'c'] if cache.get(key, 60) is not None]) == 2
