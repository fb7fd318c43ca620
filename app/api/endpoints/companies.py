from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import require_admin
from app.crud import company as company_crud
from app.schemas.common import DeletedResponse
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyFilters,
    CompanyListResponse,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", status_code=201, response_model=CompanyEnvelope, dependencies=[Depends(require_admin)])
def create_company(request: CompanyCreateRequest, db: Session = Depends(get_db)):
    """
    Create a company.

    Body: { handle, name, description, numEmployees?, logoUrl? }

    Authorization required: admin
    """
    company = company_crud.create(db, request)
    return {"company": company}


@router.get("", response_model=CompanyListResponse)
def list_companies(
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    name: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    List companies ordered by name.

    Query filters:
        minEmployees / maxEmployees: inclusive bounds on company size
        name: case-insensitive substring of the name
    """
    filters = CompanyFilters(min_employees=min_employees, max_employees=max_employees, name=name)
    return {"companies": company_crud.find_all(db, filters)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company with its jobs: [{ id, title, salary, equity }, ...]
    """
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope, dependencies=[Depends(require_admin)])
def update_company(handle: str, request: CompanyUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a company.

    Body: any of { name, description, numEmployees, logoUrl }

    Authorization required: admin
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    return {"company": company_crud.update(db, handle, data)}


@router.delete("/{handle}", response_model=DeletedResponse, dependencies=[Depends(require_admin)])
def delete_company(handle: str, db: Session = Depends(get_db)):
    """
    Delete a company and, through the foreign key, its jobs.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    return {"deleted": handle}
