"""
CRUD operations for jobs.

Jobs are keyed by their generated integer id and always belong to a
company through company_handle.
"""

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, NotFoundError
from app.crud import company as company_crud
from app.crud.sql import FilterClause, run_query, sql_for_partial_update
from app.schemas.job import JobCreateRequest, JobDetailResponse, JobFilters, JobResponse

logger = logging.getLogger(__name__)

# Updatable fields -> column names
COLUMNS = {
    "title": "title",
    "salary": "salary",
    "equity": "equity",
}

_FIELDS = "id, title, salary, equity, company_handle"


def create(db: Session, job_data: JobCreateRequest) -> JobResponse:
    """
    Create a new job.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created job with its generated id
    """
    row = run_query(
        db,
        f"""INSERT INTO jobs
            (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {_FIELDS}""",
        [job_data.title, job_data.salary, job_data.equity, job_data.company_handle],
    ).mappings().first()
    db.commit()

    logger.info(f"Created job {row['id']}: {job_data.title} ({job_data.company_handle})")
    return JobResponse.model_validate(dict(row))


def find_all(db: Session, filters: Optional[JobFilters] = None) -> List[JobResponse]:
    """
    List jobs ordered by title.

    Args:
        db: Database session
        filters: title (case-insensitive substring), min_salary (inclusive)
            and has_equity (only equity > 0 when True); unset filters are ignored

    Returns:
        List of jobs
    """
    filters = filters or JobFilters()

    where = FilterClause()
    if filters.title is not None:
        where.add("LOWER(title) LIKE {}", f"%{filters.title.lower()}%")
    if filters.min_salary is not None:
        where.add("salary >= {}", filters.min_salary)
    if filters.has_equity:
        where.add("equity > 0")

    rows = run_query(
        db,
        f"SELECT {_FIELDS} FROM jobs{where.sql} ORDER BY title",
        where.values,
    ).mappings().all()

    return [JobResponse.model_validate(dict(row)) for row in rows]


def get(db: Session, job_id: int) -> JobDetailResponse:
    """
    Retrieve a job and its company.

    The company comes from a second lookup on company_handle; if that finds
    nothing the job is returned with company set to None.

    Raises:
        NotFoundError: If no job has this id
    """
    row = run_query(db, f"SELECT {_FIELDS} FROM jobs WHERE id = $1", [job_id]).mappings().first()
    if not row:
        raise NotFoundError(f"No job with id {job_id}")

    job = JobDetailResponse.model_validate(dict(row))
    job.company = company_crud.find_by_handle(db, job.company_handle)

    return job


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> JobResponse:
    """
    Partially update a job's title, salary and/or equity.

    Raises:
        BadRequestError: If data is empty or names another field
        NotFoundError: If no job has this id
    """
    unknown = [key for key in data if key not in COLUMNS]
    if unknown:
        raise BadRequestError(f"Cannot update field(s): {', '.join(unknown)}")

    set_cols, values = sql_for_partial_update(data, COLUMNS)
    id_idx = len(values) + 1

    row = run_query(
        db,
        f"""UPDATE jobs
            SET {set_cols}
            WHERE id = ${id_idx}
            RETURNING {_FIELDS}""",
        [*values, job_id],
    ).mappings().first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No job with id {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return JobResponse.model_validate(dict(row))


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by id.

    Raises:
        NotFoundError: If no job has this id
    """
    row = run_query(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id]).first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No job matching id {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
