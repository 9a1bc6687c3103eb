"""
Python client for the company search API, including the browser-style
search state holder
"""
from .api_client import CompanyAPIClient, build_query_params, build_query_string
from .debounce import Debouncer
from .search_state import CompanySearchState, FetchStatus

__all__ = [
    "CompanyAPIClient",
    "build_query_params",
    "build_query_string",
    "Debouncer",
    "CompanySearchState",
    "FetchStatus",
]
