"""
Field types.

Fields describe one attribute of a resource: how its value is filled from
request data or a model instance, previewed, validated and offered for
editing. Relation fields additionally resolve the related records they offer
as options, see :mod:`crudpanel.fields.related_values`.
"""

from crudpanel.fields.base import *  # noqa: F401,F403
from crudpanel.fields.date_range import *  # noqa: F401,F403
from crudpanel.fields.related_values import *  # noqa: F401,F403
from crudpanel.fields.relationships import *  # noqa: F401,F403
from crudpanel.fields.select import *  # noqa: F401,F403
