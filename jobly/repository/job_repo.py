from __future__ import annotations

from sqlite3 import Connection
from typing import Any, Mapping, Optional

from ..db import query
from ..errors import BadRequestError, ConflictError, NotFoundError
from ..helpers.sql import SqlFragment, WhereClause, sql_for_filters, sql_for_partial_update

JS_TO_SQL = {"companyHandle": "company_handle"}
UPDATABLE = ("title", "salary", "equity")
FILTERS = ("title", "minSalary", "hasEquity")

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'
BASE_SELECT = f"SELECT {JOB_COLUMNS} FROM jobs"


def filter_sql(criteria: Mapping[str, Any]) -> SqlFragment:
    """Compose the job search query from title / minSalary / hasEquity.

    title matches case-insensitive substrings, minSalary is an inclusive
    lower bound and hasEquity only narrows the result when it reads "true".
    """
    unknown = sorted(set(criteria) - set(FILTERS))
    if unknown:
        raise BadRequestError(f"Unknown job filter: {', '.join(unknown)}")

    title = criteria.get("title")
    min_salary = criteria.get("minSalary")
    has_equity = criteria.get("hasEquity")

    where = WhereClause()
    if title:
        # SQLite LIKE folds case for ASCII letters only
        where.add("title LIKE {}", f"%{title}%")
    if min_salary:
        where.add("salary >= {}", min_salary)
    if has_equity is not None and str(has_equity).lower() == "true":
        where.add("equity > 0")
    return sql_for_filters(BASE_SELECT, where, "id")


def create(conn: Connection, title: str, salary: Optional[int], equity: Optional[float], company_handle: str) -> dict:
    duplicate = query(
        conn,
        "SELECT title FROM jobs WHERE title = $1 AND company_handle = $2",
        [title, company_handle],
    )
    if duplicate:
        raise ConflictError(f"Duplicate job: {title}, {company_handle}")

    company = query(conn, "SELECT handle FROM companies WHERE handle = $1", [company_handle])
    if not company:
        raise BadRequestError(f"No company: {company_handle}")

    rows = query(
        conn,
        "INSERT INTO jobs (title, salary, equity, company_handle) "
        f"VALUES ($1, $2, $3, $4) RETURNING {JOB_COLUMNS}",
        [title, salary, equity, company_handle],
    )
    return dict(rows[0])


def find_all(conn: Connection) -> list[dict]:
    return [dict(r) for r in query(conn, f"{BASE_SELECT} ORDER BY id")]


def filter_by(conn: Connection, criteria: Mapping[str, Any]) -> list[dict]:
    sql, values = filter_sql(criteria)
    return [dict(r) for r in query(conn, sql, values)]


def list_for_company(conn: Connection, company_handle: str) -> list[dict]:
    rows = query(
        conn,
        "SELECT id, title, salary, equity FROM jobs WHERE company_handle = $1 ORDER BY id",
        [company_handle],
    )
    return [dict(r) for r in rows]


def get(conn: Connection, job_id: int) -> dict:
    rows = query(conn, f"{BASE_SELECT} WHERE id = $1", [job_id])
    if not rows:
        raise NotFoundError(f"No job: {job_id}")
    return dict(rows[0])


def update_sql(job_id: int, data: Mapping[str, Any]) -> SqlFragment:
    unknown = sorted(set(data) - set(UPDATABLE))
    if unknown:
        raise BadRequestError(f"Field(s) not updatable: {', '.join(unknown)}")

    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    id_idx = f"${len(values) + 1}"
    sql = f"UPDATE jobs SET {set_cols} WHERE id = {id_idx} RETURNING {JOB_COLUMNS}"
    return SqlFragment(sql, [*values, job_id])


def update(conn: Connection, job_id: int, data: Mapping[str, Any]) -> dict:
    """Partial update: only the provided fields among title/salary/equity change."""
    sql, values = update_sql(job_id, data)
    rows = query(conn, sql, values)
    if not rows:
        raise NotFoundError(f"No job: {job_id}")
    return dict(rows[0])


def remove(conn: Connection, job_id: int) -> None:
    rows = query(conn, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
    if not rows:
        raise NotFoundError(f"No job: {job_id}")
