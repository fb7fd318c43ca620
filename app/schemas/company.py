from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import equity_to_str


class CompanyCreateRequest(BaseModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        populate_by_name = True
        extra = "forbid"


class CompanyUpdateRequest(BaseModel):
    """
    Schema for a partial company update.

    Only fields present in the request body are written; the handle can't change.
    """
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    @field_validator("name", "description")
    @classmethod
    def not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("may not be null")
        return v

    class Config:
        populate_by_name = True
        extra = "forbid"


class CompanyFilters(BaseModel):
    """Optional search filters for listing companies"""
    min_employees: Optional[int] = None
    max_employees: Optional[int] = None
    name: Optional[str] = None


class CompanyResponse(BaseModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        populate_by_name = True


class CompanyJob(BaseModel):
    """A job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None

    @field_validator("equity", mode="before")
    @classmethod
    def equity_as_str(cls, v):
        return equity_to_str(v)


class CompanyDetailResponse(CompanyResponse):
    """Company plus its jobs"""
    jobs: List[CompanyJob] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetailResponse


class CompanyListResponse(BaseModel):
    companies: List[CompanyResponse]
