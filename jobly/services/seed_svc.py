# jobly/services/seed_svc.py
from __future__ import annotations

import logging

import pandas as pd

from ..db import get_conn
from ..logs import LogContext
from ..repository import company_repo, job_repo
from ..errors import ConflictError

logger = logging.getLogger(__name__)


def _opt(value, cast):
    if pd.isna(value) or str(value).strip() == "":
        return None
    return cast(value)


def seed_load(companies_csv: str, jobs_csv: str, log: LogContext) -> dict:
    """Import companies and jobs from CSV. Rows whose natural key already exists are skipped.

    companies.csv: handle, name, description, num_employees, logo_url
    jobs.csv: title, salary, equity, company_handle
    """
    comp_df = pd.read_csv(companies_csv)
    job_df = pd.read_csv(jobs_csv)

    created_company = 0
    created_job = 0
    skipped = 0

    with get_conn() as conn:
        for _, r in comp_df.iterrows():
            try:
                company_repo.create(
                    conn,
                    str(r["handle"]).strip(),
                    str(r["name"]).strip(),
                    (_opt(r.get("description"), str) or "").strip(),
                    _opt(r.get("num_employees"), int),
                    _opt(r.get("logo_url"), str),
                )
            except ConflictError:
                skipped += 1
                continue
            created_company += 1
        conn.commit()

        for _, r in job_df.iterrows():
            try:
                job_repo.create(
                    conn,
                    str(r["title"]).strip(),
                    _opt(r.get("salary"), int),
                    _opt(r.get("equity"), float),
                    str(r["company_handle"]).strip(),
                )
            except ConflictError:
                skipped += 1
                continue
            created_job += 1
        conn.commit()

    logger.info("seed load: %d companies, %d jobs, %d skipped", created_company, created_job, skipped)
    res = {"created_company": created_company, "created_job": created_job, "skipped": skipped}
    log.set_after(res)
    return res
