"""
Response models for the company search API
"""
import math

from pydantic import BaseModel, Field
from typing import List

from company_search.models.records import CompanyRecord


class CompanyResponse(BaseModel):
    """One page of matching companies plus the count across all pages"""

    data: List[CompanyRecord] = Field(default_factory=list)
    total: int = Field(0, ge=0, description="Matching rows across all pages")
    page: int
    limit: int
    total_pages: int = Field(0, alias="totalPages")

    @classmethod
    def build(cls, rows: List[dict], total: int, page: int, limit: int) -> "CompanyResponse":
        return cls(
            data=[CompanyRecord(**row) for row in rows],
            total=total,
            page=page,
            limit=limit,
            totalPages=math.ceil(total / limit) if limit else 0,
        )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "data": [],
                "total": 25,
                "page": 1,
                "limit": 10,
                "totalPages": 3
            }
        }


class FilterOptions(BaseModel):
    """Distinct values available to the filter dropdowns"""

    states: List[str] = Field(default_factory=list)
    statuses: List[str] = Field(default_factory=list)
    entity_types: List[str] = Field(default_factory=list, alias="entityTypes")

    class Config:
        populate_by_name = True


class CompanyStats(BaseModel):
    """Whole-table summary counts"""

    total: int = 0
    active: int = 0
    inactive: int = 0
    unique_states: int = Field(0, alias="uniqueStates")
    unique_entity_types: int = Field(0, alias="uniqueEntityTypes")

    class Config:
        populate_by_name = True


class ErrorResponse(BaseModel):
    """Fixed-message failure body"""

    error: str
