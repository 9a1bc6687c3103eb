"""
Company listing query

Translates CompanyFilters + PaginationParams into a PostgREST query against
the business register table and returns one page plus the exact match count.

Predicates (all ANDed):
- search: entity_name ILIKE %term% OR entity_type ILIKE %term%
- states / entity_types: IN (...)
- postcode: ILIKE %value%
- status: equality
- effective_from / record_updated ranges: gte / lte on the YYYYMMDD string

User text is matched literally: % and _ are backslash-escaped before being
wrapped in wildcards. PostgREST rewrites * to % in like patterns and offers
no escape for it, so * in a search term still acts as a wildcard.
"""
import logging
from typing import Any, Optional

from supabase import Client

from company_search.config import settings
from company_search.models import CompanyFilters, CompanyResponse, PaginationParams, SortDirection
from company_search.services.errors import QueryFailedError

logger = logging.getLogger(__name__)

DEFAULT_SORT_FIELD = "created_at"

# Characters with meaning inside a PostgREST or=(...) expression
_RESERVED_OR_CHARS = set(',.:()"\\')


def quote_filter_value(value: str) -> str:
    """Double-quote a value for use inside or=(...) when it holds reserved characters"""
    if not any(ch in _RESERVED_OR_CHARS for ch in value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def escape_like(value: str) -> str:
    """Escape LIKE metacharacters so the value matches literally"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains_pattern(value: str) -> str:
    return f"%{escape_like(value)}%"


def apply_filters(query: Any, filters: CompanyFilters) -> Any:
    """Apply every present filter to a PostgREST select builder"""
    if filters.search:
        pattern = quote_filter_value(contains_pattern(filters.search))
        query = query.or_(f"entity_name.ilike.{pattern},entity_type.ilike.{pattern}")

    if filters.states:
        query = query.in_("state", filters.states)

    if filters.postcode:
        query = query.ilike("postcode", contains_pattern(filters.postcode))

    if filters.status:
        query = query.eq("status", filters.status)

    if filters.entity_types:
        query = query.in_("entity_type", filters.entity_types)

    # YYYYMMDD compares chronologically as a plain string
    if filters.effective_from_start:
        query = query.gte("effective_from", filters.effective_from_start)
    if filters.effective_from_end:
        query = query.lte("effective_from", filters.effective_from_end)

    if filters.record_updated_start:
        query = query.gte("record_updated", filters.record_updated_start)
    if filters.record_updated_end:
        query = query.lte("record_updated", filters.record_updated_end)

    return query


def apply_ordering(query: Any, pagination: PaginationParams) -> Any:
    if pagination.sort_field:
        return query.order(
            pagination.sort_field,
            desc=pagination.sort_direction == SortDirection.DESC,
        )
    # Newest rows first
    return query.order(DEFAULT_SORT_FIELD, desc=True)


def apply_page(query: Any, pagination: PaginationParams) -> Any:
    offset = pagination.offset
    return query.range(offset, offset + pagination.limit - 1)


def get_companies(
    client: Client,
    filters: Optional[CompanyFilters] = None,
    pagination: Optional[PaginationParams] = None,
    table: Optional[str] = None,
) -> CompanyResponse:
    """
    Fetch one page of companies matching the filters

    Args:
        client: Supabase client
        filters: Filter request (None = unfiltered)
        pagination: Page, limit and ordering
        table: Table name override (defaults to settings.companies_table)

    Returns:
        CompanyResponse envelope with the exact total across all pages

    Raises:
        QueryFailedError: If the store rejects or fails the query, or returns
            a row that does not fit CompanyRecord
    """
    filters = filters or CompanyFilters()
    pagination = pagination or PaginationParams()

    try:
        query = client.table(table or settings.companies_table).select("*", count="exact")
        query = apply_filters(query, filters)
        query = apply_ordering(query, pagination)
        query = apply_page(query, pagination)

        result = query.execute()

        rows = result.data or []
        total = result.count or 0

        # Rows that do not fit CompanyRecord fail here, same as a store error
        response = CompanyResponse.build(
            rows, total=total, page=pagination.page, limit=pagination.limit
        )

    except Exception as e:
        logger.error(f"Company query failed: {e}", exc_info=True)
        raise QueryFailedError("company query", e) from e

    logger.debug(
        f"Company query: {len(rows)} rows on page {pagination.page}, total={total}"
    )

    return response
