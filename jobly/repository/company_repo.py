from __future__ import annotations

from sqlite3 import Connection
from typing import Any, Mapping, Optional

from ..db import query
from ..errors import BadRequestError, ConflictError, NotFoundError
from ..helpers.sql import SqlFragment, WhereClause, sql_for_filters, sql_for_partial_update
from . import job_repo

JS_TO_SQL = {"numEmployees": "num_employees", "logoUrl": "logo_url"}
UPDATABLE = ("name", "description", "numEmployees", "logoUrl")
FILTERS = ("name", "minEmployees", "maxEmployees")

COMPANY_COLUMNS = (
    'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'
)
BASE_SELECT = f"SELECT {COMPANY_COLUMNS} FROM companies"


def filter_sql(criteria: Mapping[str, Any]) -> SqlFragment:
    unknown = sorted(set(criteria) - set(FILTERS))
    if unknown:
        raise BadRequestError(f"Unknown company filter: {', '.join(unknown)}")

    name = criteria.get("name")
    min_employees = criteria.get("minEmployees")
    max_employees = criteria.get("maxEmployees")
    if min_employees is not None and max_employees is not None and int(min_employees) > int(max_employees):
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    where = WhereClause()
    if name:
        # SQLite LIKE folds case for ASCII letters only
        where.add("name LIKE {}", f"%{name}%")
    if min_employees is not None:
        where.add("num_employees >= {}", min_employees)
    if max_employees is not None:
        where.add("num_employees <= {}", max_employees)
    return sql_for_filters(BASE_SELECT, where, "name")


def create(
    conn: Connection,
    handle: str,
    name: str,
    description: str,
    num_employees: Optional[int] = None,
    logo_url: Optional[str] = None,
) -> dict:
    duplicate = query(
        conn,
        "SELECT handle, name FROM companies WHERE handle = $1 OR name = $2",
        [handle, name],
    )
    if duplicate:
        raise ConflictError(f"Duplicate company: {handle}, {name}")

    rows = query(
        conn,
        "INSERT INTO companies (handle, name, description, num_employees, logo_url) "
        f"VALUES ($1, $2, $3, $4, $5) RETURNING {COMPANY_COLUMNS}",
        [handle, name, description, num_employees, logo_url],
    )
    return dict(rows[0])


def find_all(conn: Connection) -> list[dict]:
    return [dict(r) for r in query(conn, f"{BASE_SELECT} ORDER BY name")]


def filter_by(conn: Connection, criteria: Mapping[str, Any]) -> list[dict]:
    sql, values = filter_sql(criteria)
    return [dict(r) for r in query(conn, sql, values)]


def get(conn: Connection, handle: str) -> dict:
    """Company by handle, with its jobs attached under `jobs`."""
    rows = query(conn, f"{BASE_SELECT} WHERE handle = $1", [handle])
    if not rows:
        raise NotFoundError(f"No company: {handle}")
    company = dict(rows[0])
    company["jobs"] = job_repo.list_for_company(conn, handle)
    return company


def update_sql(handle: str, data: Mapping[str, Any]) -> SqlFragment:
    unknown = sorted(set(data) - set(UPDATABLE))
    if unknown:
        raise BadRequestError(f"Field(s) not updatable: {', '.join(unknown)}")

    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    handle_idx = f"${len(values) + 1}"
    sql = f"UPDATE companies SET {set_cols} WHERE handle = {handle_idx} RETURNING {COMPANY_COLUMNS}"
    return SqlFragment(sql, [*values, handle])


def update(conn: Connection, handle: str, data: Mapping[str, Any]) -> dict:
    sql, values = update_sql(handle, data)
    rows = query(conn, sql, values)
    if not rows:
        raise NotFoundError(f"No company: {handle}")
    return dict(rows[0])


def remove(conn: Connection, handle: str) -> None:
    rows = query(conn, "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
    if not rows:
        raise NotFoundError(f"No company: {handle}")
