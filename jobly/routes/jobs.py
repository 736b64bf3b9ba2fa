from __future__ import annotations

from typing import Optional
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import JoblyError
from ..logs import LogContext
from ..services.job_svc import create_job, list_jobs, get_job, update_job, remove_job

router = APIRouter()


class JobNew(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1.0)
    companyHandle: str = Field(..., min_length=1, max_length=25)


class JobUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1.0)

    @field_validator("title")
    @classmethod
    def _title_not_null(cls, v):
        if v is None:
            raise ValueError("title may not be null")
        return v


@router.post("/jobs", status_code=201)
def api_job_create(body: JobNew):
    log = LogContext("CREATE_JOB")
    payload = body.model_dump()
    log.set_payload(payload)
    try:
        job = create_job(payload, log)
        log.write("OK")
        return {"job": job}
    except JoblyError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        raise HTTPException(status_code=500, detail="internal error")


@router.get("/jobs")
def api_job_list(
    title: Optional[str] = None,
    minSalary: Optional[int] = Query(None, ge=0),
    hasEquity: Optional[str] = Query(None, description="true: only jobs with equity > 0"),
):
    """
    Lists jobs, narrowed by any supplied filter:
    - title: case-insensitive partial match
    - minSalary: salary >= minSalary
    - hasEquity: when "true" only jobs with equity > 0; otherwise no equity filter
    """
    try:
        jobs = list_jobs({"title": title, "minSalary": minSalary, "hasEquity": hasEquity})
        return {"jobs": jobs}
    except JoblyError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/jobs/{job_id}")
def api_job_get(job_id: int):
    try:
        return {"job": get_job(job_id)}
    except JoblyError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.patch("/jobs/{job_id}")
def api_job_update(job_id: int, body: JobUpdate):
    log = LogContext("UPDATE_JOB")
    payload = body.model_dump(exclude_unset=True)
    log.set_payload(payload)
    try:
        job = update_job(job_id, payload, log)
        log.write("OK")
        return {"job": job}
    except JoblyError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        raise HTTPException(status_code=500, detail="internal error")


@router.delete("/jobs/{job_id}")
def api_job_delete(job_id: int):
    log = LogContext("DELETE_JOB")
    try:
        remove_job(job_id, log)
        log.write("OK")
        return {"deleted": job_id}
    except JoblyError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        raise HTTPException(status_code=500, detail="internal error")
