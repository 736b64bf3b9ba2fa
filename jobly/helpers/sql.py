"""Dynamic SQL fragments shared by the repositories.

Placeholders are `$1, $2, ...` and always line up with the value list that
travels next to the text; `jobly.db.query` binds them.
"""
from __future__ import annotations

from typing import Any, Mapping, NamedTuple

from ..errors import BadRequestError


class SqlFragment(NamedTuple):
    text: str
    values: list


def sql_for_partial_update(data: Mapping[str, Any], js_to_sql: Mapping[str, str]) -> SqlFragment:
    """Build the SET part of an UPDATE for only the fields present in `data`.

    Field names found in `js_to_sql` are swapped for their column name, the
    rest are used as-is.

        {"firstName": "Aliya", "age": 32} => '"first_name"=$1, "age"=$2'

    Raises BadRequestError when `data` is empty.
    """
    keys = list(data.keys())
    if not keys:
        raise BadRequestError("No data")

    cols = [f'"{js_to_sql.get(name, name)}"=${idx}' for idx, name in enumerate(keys, start=1)]
    return SqlFragment(", ".join(cols), list(data.values()))


class WhereClause:
    """AND-joined predicates with numbered placeholders.

    `add("salary >= {}", 40000)` fills each `{}` with the next `$n`.
    """

    def __init__(self, start: int = 1):
        self.start = start
        self.predicates: list[str] = []
        self.values: list = []

    def add(self, template: str, *values: Any) -> "WhereClause":
        first = self.start + len(self.values)
        slots = [f"${first + i}" for i in range(len(values))]
        self.predicates.append(template.format(*slots))
        self.values.extend(values)
        return self

    def __len__(self) -> int:
        return len(self.predicates)

    def render(self) -> str:
        if not self.predicates:
            return ""
        return " WHERE " + " AND ".join(self.predicates)


def sql_for_filters(base_select: str, where: WhereClause, order_by: str | None = None) -> SqlFragment:
    sql = base_select.rstrip() + where.render()
    if order_by:
        sql += f" ORDER BY {order_by}"
    return SqlFragment(sql, list(where.values))
