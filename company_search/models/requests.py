"""
Request models for the company search API
"""
from pydantic import BaseModel, Field, field_validator
from typing import Iterable, List, Optional
from enum import Enum

from company_search.models.records import RECORD_FIELDS


class SortDirection(str, Enum):
    """Sort direction for the listing"""
    ASC = "asc"
    DESC = "desc"


def split_multi_value(values: Optional[Iterable[str]]) -> Optional[List[str]]:
    """
    Normalise a multi-valued query parameter.

    Accepts repeated keys (``states=NSW&states=VIC``) and comma-separated
    values (``states=NSW,VIC``). Blank entries are dropped; an empty result
    means "unconstrained" and is returned as None.
    """
    if not values:
        return None

    result = []
    for value in values:
        if value is None:
            continue
        for part in str(value).split(","):
            part = part.strip()
            if part and part not in result:
                result.append(part)

    return result or None


class CompanyFilters(BaseModel):
    """Filter half of a company search. Every field is independently optional."""

    search: Optional[str] = None
    states: Optional[List[str]] = None
    postcode: Optional[str] = None
    status: Optional[str] = None
    entity_types: Optional[List[str]] = Field(default=None, alias="entityTypes")
    effective_from_start: Optional[str] = Field(default=None, alias="effectiveFromStart")
    effective_from_end: Optional[str] = Field(default=None, alias="effectiveFromEnd")
    record_updated_start: Optional[str] = Field(default=None, alias="recordUpdatedStart")
    record_updated_end: Optional[str] = Field(default=None, alias="recordUpdatedEnd")

    @field_validator(
        "search",
        "postcode",
        "status",
        "effective_from_start",
        "effective_from_end",
        "record_updated_start",
        "record_updated_end",
    )
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("states", "entity_types", mode="before")
    @classmethod
    def normalise_sets(cls, v):
        if isinstance(v, str):
            v = [v]
        return split_multi_value(v)

    def is_empty(self) -> bool:
        return not any(self.model_dump().values())

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "states": ["NSW", "VIC"],
                "status": "ACT",
                "effectiveFromStart": "20200101",
                "effectiveFromEnd": "20201231"
            }
        }


class PaginationParams(BaseModel):
    """Page, page size and ordering of a company search"""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    sort_field: Optional[str] = Field(default=None, alias="sortField")
    sort_direction: SortDirection = Field(default=SortDirection.DESC, alias="sortDirection")

    @field_validator("sort_field")
    @classmethod
    def validate_sort_field(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        v = v.strip()
        if v not in RECORD_FIELDS:
            raise ValueError(
                f"sortField must be one of: {', '.join(RECORD_FIELDS)}"
            )
        return v

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    class Config:
        populate_by_name = True
