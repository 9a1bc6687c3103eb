"""
Core service modules for the company search service
"""
from .errors import CompanySearchError, QueryFailedError
from .query_builder import get_companies, apply_filters, quote_filter_value, escape_like
from .aggregates import get_filter_options, get_company_stats, distinct_values

__all__ = [
    "CompanySearchError",
    "QueryFailedError",
    "get_companies",
    "apply_filters",
    "quote_filter_value",
    "escape_like",
    "get_filter_options",
    "get_company_stats",
    "distinct_values",
]
