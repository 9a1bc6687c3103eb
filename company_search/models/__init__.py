"""
Data models for the company search service
"""
from .records import CompanyRecord, RECORD_FIELDS
from .requests import CompanyFilters, PaginationParams, SortDirection, split_multi_value
from .responses import CompanyResponse, FilterOptions, CompanyStats, ErrorResponse

__all__ = [
    # Records
    "CompanyRecord",
    "RECORD_FIELDS",
    # Request
    "CompanyFilters",
    "PaginationParams",
    "SortDirection",
    "split_multi_value",
    # Response
    "CompanyResponse",
    "FilterOptions",
    "CompanyStats",
    "ErrorResponse",
]
