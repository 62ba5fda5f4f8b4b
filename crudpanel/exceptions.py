# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Exceptions raised by crudpanel."""


__all__ = ['PanelException', 'ConfigurationError']


class PanelException(Exception):
    pass


class ConfigurationError(PanelException):
    """
    Raised when a field, resource or route is used without the configuration
    it needs, e.g. a relation field rendered outside of a parent resource.
    """
    pass
