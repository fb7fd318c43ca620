from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import EQUITY_PATTERN, equity_to_str
from app.schemas.company import CompanyResponse


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)
    company_handle: str = Field(..., min_length=1, max_length=25)

    class Config:
        extra = "forbid"


class JobUpdateRequest(BaseModel):
    """
    Schema for a partial job update.

    The owning company and the id are fixed; only title, salary and
    equity can change.
    """
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("may not be null")
        return v

    class Config:
        extra = "forbid"


class JobFilters(BaseModel):
    """Optional search filters for listing jobs"""
    title: Optional[str] = None
    min_salary: Optional[int] = None
    has_equity: bool = False


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str

    @field_validator("equity", mode="before")
    @classmethod
    def equity_as_str(cls, v):
        return equity_to_str(v)


class JobDetailResponse(JobResponse):
    """Job plus its owning company; company is None if the second lookup found nothing"""
    company: Optional[CompanyResponse] = None


class JobEnvelope(BaseModel):
    job: JobResponse


class JobDetailEnvelope(BaseModel):
    job: JobDetailResponse


class JobListResponse(BaseModel):
    jobs: List[JobResponse]
