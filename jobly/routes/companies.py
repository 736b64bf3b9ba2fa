from __future__ import annotations

from typing import Optional
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import JoblyError
from ..logs import LogContext
from ..services.company_svc import (
    create_company,
    list_companies,
    get_company,
    update_company,
    remove_company,
)

router = APIRouter()


class CompanyNew(BaseModel):
    model_config = ConfigDict(extra="forbid")

    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(..., min_length=1)
    description: str
    numEmployees: Optional[int] = Field(None, ge=0)
    logoUrl: Optional[str] = None


class CompanyUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    numEmployees: Optional[int] = Field(None, ge=0)
    logoUrl: Optional[str] = None

    @field_validator("name", "description")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


@router.post("/companies", status_code=201)
def api_company_create(body: CompanyNew):
    log = LogContext("CREATE_COMPANY")
    payload = body.model_dump()
    log.set_payload(payload)
    try:
        company = create_company(payload, log)
        log.write("OK")
        return {"company": company}
    except JoblyError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        raise HTTPException(status_code=500, detail="internal error")


@router.get("/companies")
def api_company_list(
    name: Optional[str] = None,
    minEmployees: Optional[int] = Query(None, ge=0),
    maxEmployees: Optional[int] = Query(None, ge=0),
):
    try:
        companies = list_companies({"name": name, "minEmployees": minEmployees, "maxEmployees": maxEmployees})
        return {"companies": companies}
    except JoblyError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/companies/{handle}")
def api_company_get(handle: str):
    try:
        return {"company": get_company(handle)}
    except JoblyError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.patch("/companies/{handle}")
def api_company_update(handle: str, body: CompanyUpdate):
    log = LogContext("UPDATE_COMPANY")
    payload = body.model_dump(exclude_unset=True)
    log.set_payload(payload)
    try:
        company = update_company(handle, payload, log)
        log.write("OK")
        return {"company": company}
    except JoblyError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        raise HTTPException(status_code=500, detail="internal error")


@router.delete("/companies/{handle}")
def api_company_delete(handle: str):
    log = LogContext("DELETE_COMPANY")
    try:
        remove_company(handle, log)
        log.write("OK")
        return {"deleted": handle}
    except JoblyError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        log.write("ERROR", "internal error")
        raise HTTPException(status_code=500, detail="internal error")
