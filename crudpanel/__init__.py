# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""Admin panel building blocks for SQLAlchemy models"""

from crudpanel._version import __version__  # noqa: F401

from crudpanel.cache import *  # noqa: F401,F403
from crudpanel.components import *  # noqa: F401,F403
from crudpanel.context import *  # noqa: F401,F403
from crudpanel.exceptions import *  # noqa: F401,F403
from crudpanel.fields import *  # noqa: F401,F403
from crudpanel.forms import *  # noqa: F401,F403
from crudpanel.options import *  # noqa: F401,F403
from crudpanel.query import *  # noqa: F401,F403
from crudpanel.query_tags import *  # noqa: F401,F403
from crudpanel.resources import *  # noqa: F401,F403
from crudpanel.routing import *  # noqa: F401,F403
from crudpanel.utils import *  # noqa: F401,F403
