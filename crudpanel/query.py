# -*- coding: utf-8 -*-
# Copyright (c) 2017 the Residue team, see AUTHORS.
# Licensed under the BSD License, see LICENSE for details.

"""SQLAlchemy query functions."""

from datetime import datetime

from sqlalchemy.sql import and_


__all__ = ['constrain_query_by_date']


def constrain_query_by_date(query, column, start_date=None, end_date=None, interval=None):
    """
    Applies a WHERE clause which constrains a query within start and end dates.

    For example, if column is "user.birthdate" and query looks like::

        select name from user;

    The result would look something like this::

        select name from user
        where birthdate >= '2017-01-01' and birthdate <= '2017-01-02';

    Args:
        query (sqlalchemy.orm.query.Query): The query to which the date
            constraining WHERE clause should be applied.
        column (sqlalchemy.sql.schema.Column): The date column which should be
            used in the constraining WHERE clause.
        start_date (datetime): The earliest date in the constraint.
        end_date (datetime): The most recent date in the constraint.
        interval (timedelta): Alternately, the length of time from either
            `start_date` or `end_date`. If only the interval is given, it is
            measured back from the current time.

    Returns:
        sqlalchemy.orm.query.Query: The constrained query.
    """
    if start_date:
        if end_date:
            # If the start_date and the end_date are defined then we use those
            return query.where(and_(column >= start_date, column <= end_date))
        elif interval:
            # If the start_date and the interval are defined then we use the
            # start_date plus the interval as the end_date
            return query.where(and_(column >= start_date, column <= start_date + interval))
        else:
            # If ONLY the start_date is defined then we just use that
            return query.where(column >= start_date)
    elif end_date:
        if interval:
            # If the end_date and the interval are defined then we use the
            # end_date minus the interval as the start_date
            return query.where(and_(column <= end_date, column >= end_date - interval))
        else:
            # If ONLY the end_date is defined then we just use that
            return query.where(column <= end_date)
    elif interval:
        # If ONLY the interval is defined then we use the current date minus
        # the interval as the start_date
        return query.where(column >= datetime.utcnow() - interval)

    # If NOTHING was defined then the query is returned unmodified
    return query
