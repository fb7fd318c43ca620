"""
Data access for companies.

Every function takes the request's Session first and returns response
schemas; lookups by a missing handle raise NotFoundError.
"""

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, NotFoundError
from app.crud.sql import FilterClause, run_query, sql_for_partial_update
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailResponse,
    CompanyFilters,
    CompanyJob,
    CompanyResponse,
)

logger = logging.getLogger(__name__)

# Updatable fields -> column names
COLUMNS = {
    "name": "name",
    "description": "description",
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

_SELECT = """SELECT handle,
                    name,
                    description,
                    num_employees,
                    logo_url
             FROM companies"""

_RETURNING = "RETURNING handle, name, description, num_employees, logo_url"


def create(db: Session, company_data: CompanyCreateRequest) -> CompanyResponse:
    """
    Create a company.

    Raises:
        BadRequestError: If the handle is already taken
    """
    duplicate_check = run_query(
        db,
        "SELECT handle FROM companies WHERE handle = $1",
        [company_data.handle],
    ).first()

    if duplicate_check:
        raise BadRequestError(f"Duplicate company: {company_data.handle}")

    row = run_query(
        db,
        f"""INSERT INTO companies
            (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            {_RETURNING}""",
        [
            company_data.handle,
            company_data.name,
            company_data.description,
            company_data.num_employees,
            company_data.logo_url,
        ],
    ).mappings().first()
    db.commit()

    logger.info(f"Created company {company_data.handle}")
    return CompanyResponse.model_validate(dict(row))


def find_all(db: Session, filters: Optional[CompanyFilters] = None) -> List[CompanyResponse]:
    """
    List companies ordered by name.

    Only the filters that are set constrain the result; name matches any
    case-insensitive substring.

    Raises:
        BadRequestError: If min_employees > max_employees
    """
    filters = filters or CompanyFilters()

    if (
        filters.min_employees is not None
        and filters.max_employees is not None
        and filters.min_employees > filters.max_employees
    ):
        raise BadRequestError("Minimum employee number must be less than maximum")

    where = FilterClause()
    if filters.min_employees is not None:
        where.add("num_employees >= {}", filters.min_employees)
    if filters.max_employees is not None:
        where.add("num_employees <= {}", filters.max_employees)
    if filters.name:
        where.add("LOWER(name) LIKE {}", f"%{filters.name.lower()}%")

    rows = run_query(db, f"{_SELECT}{where.sql} ORDER BY name", where.values).mappings().all()
    return [CompanyResponse.model_validate(dict(row)) for row in rows]


def find_by_handle(db: Session, handle: str) -> Optional[CompanyResponse]:
    """Return the company with this handle, or None."""
    row = run_query(db, f"{_SELECT} WHERE handle = $1", [handle]).mappings().first()
    return CompanyResponse.model_validate(dict(row)) if row else None


def get(db: Session, handle: str) -> CompanyDetailResponse:
    """
    Retrieve a company together with its jobs.

    Raises:
        NotFoundError: If no company has this handle
    """
    company = find_by_handle(db, handle)
    if not company:
        raise NotFoundError(f"No company: {handle}")

    job_rows = run_query(
        db,
        "SELECT id, title, salary, equity FROM jobs WHERE company_handle = $1 ORDER BY id",
        [handle],
    ).mappings().all()

    return CompanyDetailResponse(
        **company.model_dump(),
        jobs=[CompanyJob.model_validate(dict(row)) for row in job_rows],
    )


def update(db: Session, handle: str, data: Mapping[str, Any]) -> CompanyResponse:
    """
    Partially update a company.

    Args:
        data: Any of name, description, numEmployees, logoUrl; only the
            fields present are written

    Raises:
        BadRequestError: If data is empty or names a field outside COLUMNS
        NotFoundError: If no company has this handle
    """
    unknown = [key for key in data if key not in COLUMNS]
    if unknown:
        raise BadRequestError(f"Cannot update field(s): {', '.join(unknown)}")

    set_cols, values = sql_for_partial_update(data, COLUMNS)
    handle_idx = len(values) + 1

    row = run_query(
        db,
        f"""UPDATE companies
            SET {set_cols}
            WHERE handle = ${handle_idx}
            {_RETURNING}""",
        [*values, handle],
    ).mappings().first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return CompanyResponse.model_validate(dict(row))


def remove(db: Session, handle: str) -> None:
    """
    Delete a company; its jobs go with it (ON DELETE CASCADE).

    Raises:
        NotFoundError: If no company has this handle
    """
    row = run_query(
        db,
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        [handle],
    ).first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
