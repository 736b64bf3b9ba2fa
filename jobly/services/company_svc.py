from __future__ import annotations

from typing import Any, Mapping

from ..db import get_conn
from ..logs import LogContext
from ..repository import company_repo


def create_company(data: Mapping[str, Any], log: LogContext) -> dict:
    with get_conn() as conn:
        company = company_repo.create(
            conn,
            data["handle"],
            data["name"],
            data["description"],
            data.get("numEmployees"),
            data.get("logoUrl"),
        )
        conn.commit()
    log.set_entity("COMPANY", company["handle"])
    log.set_after(company)
    return company


def list_companies(criteria: Mapping[str, Any] | None = None) -> list[dict]:
    active = {k: v for k, v in (criteria or {}).items() if v is not None}
    with get_conn() as conn:
        if active:
            return company_repo.filter_by(conn, active)
        return company_repo.find_all(conn)


def get_company(handle: str) -> dict:
    with get_conn() as conn:
        return company_repo.get(conn, handle)


def update_company(handle: str, data: Mapping[str, Any], log: LogContext) -> dict:
    """Partial update of name/description/numEmployees/logoUrl; the handle is immutable."""
    log.set_entity("COMPANY", handle)
    with get_conn() as conn:
        company = company_repo.update(conn, handle, data)
        conn.commit()
    log.set_after(company)
    return company


def remove_company(handle: str, log: LogContext) -> None:
    log.set_entity("COMPANY", handle)
    with get_conn() as conn:
        company_repo.remove(conn, handle)
        conn.commit()
