"""
SQL assembly helpers shared by the company and job data-access modules.

Queries are written with PostgreSQL-style positional placeholders ($1, $2, ...)
and executed through a SQLAlchemy session by run_query().
"""

import re
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError

_PLACEHOLDER = re.compile(r"\$(\d+)")

# Sentinel for FilterClause.add() predicates that bind no value
NO_VALUE = object()


class PartialUpdate(NamedTuple):
    set_cols: str
    values: List[Any]


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None
) -> PartialUpdate:
    """
    Build the SET clause of an UPDATE from the fields being changed.

    {"numEmployees": 5, "name": "X"} with {"numEmployees": "num_employees"}
    gives '"num_employees"=$1, "name"=$2' and [5, "X"].

    Args:
        data_to_update: Field name -> new value, in the order to assign
        js_to_sql: Field name -> column name; unlisted fields keep their name

    Returns:
        PartialUpdate(set_cols, values)

    Raises:
        BadRequestError: If data_to_update is empty
    """
    keys = list(data_to_update.keys())
    if not keys:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    cols = [f'"{js_to_sql.get(key, key)}"=${idx + 1}' for idx, key in enumerate(keys)]

    return PartialUpdate(
        set_cols=", ".join(cols),
        values=[data_to_update[key] for key in keys],
    )


class FilterClause:
    """
    Conjunction of optional WHERE predicates.

    Each predicate is a template whose "{}" is replaced by the positional
    placeholder of its value:

        where = FilterClause()
        where.add("num_employees >= {}", 10)
        where.add("equity > 0")
        where.sql     # ' WHERE num_employees >= $1 AND equity > 0'
        where.values  # [10]
    """

    def __init__(self):
        self._predicates: List[str] = []
        self.values: List[Any] = []

    def add(self, template: str, value: Any = NO_VALUE) -> "FilterClause":
        if value is NO_VALUE:
            self._predicates.append(template)
        else:
            self.values.append(value)
            placeholder = f"${len(self.values)}"
            self._predicates.append(template.format(placeholder))
        return self

    @property
    def sql(self) -> str:
        if not self._predicates:
            return ""
        return " WHERE " + " AND ".join(self._predicates)


def to_bind_params(sql: str, values: Sequence[Any]) -> tuple:
    """
    Rewrite $n placeholders as SQLAlchemy bind parameters.

    Returns (sql, params) where "$2" became ":p2" and params["p2"] == values[1].
    """
    params: Dict[str, Any] = {f"p{idx + 1}": value for idx, value in enumerate(values)}
    return _PLACEHOLDER.sub(r":p\1", sql), params


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """
    Execute a $n-parameterized statement on the session.

    Store errors roll the session back and propagate unchanged; the
    SQLAlchemyError handler in main.py logs them.
    """
    statement, params = to_bind_params(sql, values)
    try:
        return db.execute(text(statement), params)
    except SQLAlchemyError:
        db.rollback()
        raise
