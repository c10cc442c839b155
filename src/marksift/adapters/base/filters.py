"""Filter expression parsing — Extracts the owner constraint from search filters.

Only one expression shape is recognized: equality of ``userId`` against a
quoted literal, e.g. ``userId = 'u1'``. Typed ``FilterConstraint`` objects
are accepted alongside strings and need no parsing.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from marksift.models.query import OWNER_FIELD, FilterConstraint

_EQUALITY_RE = re.compile(r"""^\s*(?P<field>\w+)\s*=\s*(?P<quote>['"])(?P<value>[^'"]+)(?P=quote)\s*$""")


def parse_filter_expression(expression: str) -> FilterConstraint | None:
    """Parse a ``field = 'value'`` expression.

    Returns:
        The constraint, or ``None`` if the expression has another shape.
    """
    match = _EQUALITY_RE.match(expression)
    if match is None:
        return None
    return FilterConstraint(field=match["field"], operator="=", value=match["value"])


def extract_owner(filters: Iterable[str | FilterConstraint]) -> str | None:
    """Return the owner id from the first owner equality clause.

    Scanning stops at the first match, so earlier clauses win over later ones.
    ``None`` means the search is unscoped and must not reach the store.
    """
    for item in filters:
        constraint = parse_filter_expression(item) if isinstance(item, str) else item
        if constraint is None:
            continue
        if constraint.field == OWNER_FIELD and constraint.operator == "=":
            return constraint.value
    return None
