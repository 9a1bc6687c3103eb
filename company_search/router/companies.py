"""
Companies API Router
Handles the company listing, filter options and statistics endpoints

Failures are reported as {"error": <fixed message>} with a 500 status; store
details are logged, never returned.

Handlers are plain functions: the supabase client is synchronous, so FastAPI
runs them in its threadpool instead of on the event loop.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from supabase import Client
from typing import List, Optional
import uuid
import time
import logging

from company_search.models import (
    CompanyFilters,
    CompanyResponse,
    CompanyStats,
    ErrorResponse,
    FilterOptions,
    PaginationParams,
    SortDirection,
)
from company_search.services import (
    QueryFailedError,
    get_companies,
    get_filter_options,
    get_company_stats,
)
from company_search.utils.supabase_client import get_db
from company_search.utils.validators import validate_jwt
from company_search.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/companies",
    tags=["companies"],
    dependencies=[Depends(validate_jwt)],
)

_ERROR_RESPONSES = {500: {"model": ErrorResponse}}


def _error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message},
    )


@router.get("", response_model=CompanyResponse, responses=_ERROR_RESPONSES)
def list_companies(
    search: Optional[str] = None,
    states: Optional[List[str]] = Query(None),
    postcode: Optional[str] = None,
    status_code: Optional[str] = Query(None, alias="status"),
    entity_types: Optional[List[str]] = Query(None, alias="entityTypes"),
    effective_from_start: Optional[str] = Query(None, alias="effectiveFromStart"),
    effective_from_end: Optional[str] = Query(None, alias="effectiveFromEnd"),
    record_updated_start: Optional[str] = Query(None, alias="recordUpdatedStart"),
    record_updated_end: Optional[str] = Query(None, alias="recordUpdatedEnd"),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    sort_field: Optional[str] = Query(None, alias="sortField"),
    sort_direction: SortDirection = Query(SortDirection.DESC, alias="sortDirection"),
    db: Client = Depends(get_db),
):
    """
    Filtered, sorted, paginated company listing

    Multi-valued filters (states, entityTypes) accept repeated keys or
    comma-separated values. Without sortField, rows are ordered newest first.
    """
    if limit is None:
        limit = settings.default_page_size
    if limit > settings.max_page_size:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"limit must be at most {settings.max_page_size}"
        )

    try:
        filters = CompanyFilters(
            search=search,
            states=states,
            postcode=postcode,
            status=status_code,
            entity_types=entity_types,
            effective_from_start=effective_from_start,
            effective_from_end=effective_from_end,
            record_updated_start=record_updated_start,
            record_updated_end=record_updated_end,
        )
        pagination = PaginationParams(
            page=page,
            limit=limit,
            sort_field=sort_field,
            sort_direction=sort_direction,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=[err["msg"] for err in e.errors()]
        )

    query_id = str(uuid.uuid4())
    start_time = time.time()

    try:
        result = get_companies(db, filters, pagination)
    except QueryFailedError as e:
        logger.error(f"[{query_id}] Company listing failed: {e}")
        return _error("Failed to fetch companies")

    latency_ms = int((time.time() - start_time) * 1000)
    logger.info(
        f"[{query_id}] Company listing in {latency_ms}ms: "
        f"page={pagination.page} limit={pagination.limit} "
        f"rows={len(result.data)} total={result.total}"
    )

    return result


@router.get("/filter-options", response_model=FilterOptions, responses=_ERROR_RESPONSES)
def filter_options(db: Client = Depends(get_db)):
    """Distinct states, statuses and entity types for the filter dropdowns"""
    try:
        return get_filter_options(db)
    except QueryFailedError as e:
        logger.error(f"Filter options failed: {e}")
        return _error("Failed to fetch filter options")


@router.get("/stats", response_model=CompanyStats, responses=_ERROR_RESPONSES)
def company_stats(db: Client = Depends(get_db)):
    """Whole-table counts for the dashboard"""
    try:
        return get_company_stats(db)
    except QueryFailedError as e:
        logger.error(f"Company stats failed: {e}")
        return _error("Failed to fetch company statistics")
