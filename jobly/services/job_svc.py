# jobly/services/job_svc.py
from __future__ import annotations

from typing import Any, Mapping

from ..db import get_conn
from ..logs import LogContext
from ..repository import job_repo


def create_job(data: Mapping[str, Any], log: LogContext) -> dict:
    with get_conn() as conn:
        job = job_repo.create(
            conn,
            data["title"],
            data.get("salary"),
            data.get("equity"),
            data["companyHandle"],
        )
        conn.commit()
    log.set_entity("JOB", job["id"])
    log.set_after(job)
    return job


def list_jobs(criteria: Mapping[str, Any] | None = None) -> list[dict]:
    """All jobs, or only those matching the supplied search criteria."""
    active = {k: v for k, v in (criteria or {}).items() if v is not None}
    with get_conn() as conn:
        if active:
            return job_repo.filter_by(conn, active)
        return job_repo.find_all(conn)


def get_job(job_id: int) -> dict:
    with get_conn() as conn:
        return job_repo.get(conn, job_id)


def update_job(job_id: int, data: Mapping[str, Any], log: LogContext) -> dict:
    log.set_entity("JOB", job_id)
    with get_conn() as conn:
        job = job_repo.update(conn, job_id, data)
        conn.commit()
    log.set_after(job)
    return job


def remove_job(job_id: int, log: LogContext) -> None:
    log.set_entity("JOB", job_id)
    with get_conn() as conn:
        log.set_before(job_repo.get(conn, job_id))
        job_repo.remove(conn, job_id)
        conn.commit()
