from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import require_admin
from app.crud import job as job_crud
from app.schemas.common import DeletedResponse
from app.schemas.job import (
    JobCreateRequest,
    JobDetailEnvelope,
    JobEnvelope,
    JobFilters,
    JobListResponse,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", status_code=201, response_model=JobEnvelope, dependencies=[Depends(require_admin)])
def create_job(request: JobCreateRequest, db: Session = Depends(get_db)):
    """
    Create a job.

    Body: { title, salary?, equity?, company_handle }

    Authorization required: admin
    """
    job = job_crud.create(db, request)
    return {"job": job}


@router.get("", response_model=JobListResponse)
def list_jobs(
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[str] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """
    List jobs ordered by title.

    Query filters:
        title: case-insensitive substring of the title
        minSalary: lowest salary to include
        hasEquity: "true" keeps only jobs offering equity; any other value is ignored
    """
    filters = JobFilters(title=title, min_salary=min_salary, has_equity=has_equity == "true")
    return {"jobs": job_crud.find_all(db, filters)}


@router.get("/{job_id}", response_model=JobDetailEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID, with its company nested under "company".
    """
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(require_admin)])
def update_job(job_id: int, request: JobUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a job.

    Body: any of { title, salary, equity }; an empty body is rejected.

    Authorization required: admin
    """
    job = job_crud.update(db, job_id, request.model_dump(exclude_unset=True))
    return {"job": job}


@router.delete("/{job_id}", response_model=DeletedResponse, dependencies=[Depends(require_admin)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    return {"deleted": str(job_id)}
