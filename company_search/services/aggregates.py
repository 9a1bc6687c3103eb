"""
Whole-table aggregates: filter dropdown options and summary statistics

Both read every row (no filter, no pagination). Rows are fetched in
consecutive range() batches so a PostgREST max-rows cap cannot truncate the
scan.
"""
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Set

from supabase import Client

from company_search.config import settings
from company_search.models import CompanyStats, FilterOptions
from company_search.services.errors import QueryFailedError

logger = logging.getLogger(__name__)


def scan_columns(
    client: Client,
    columns: str,
    table: Optional[str] = None,
    batch_size: Optional[int] = None,
) -> Iterator[Dict]:
    """
    Yield every row of the table projected to ``columns``

    Args:
        client: Supabase client
        columns: PostgREST select list, e.g. "state, entity_type"
        table: Table name override
        batch_size: Rows per request (defaults to settings.scan_batch_size)
    """
    table = table or settings.companies_table
    batch_size = batch_size or settings.scan_batch_size
    start = 0

    while True:
        result = client.table(table) \
            .select(columns) \
            .order("id") \
            .range(start, start + batch_size - 1) \
            .execute()

        rows = result.data or []
        yield from rows

        if len(rows) < batch_size:
            return
        start += batch_size


def distinct_values(rows: Iterable[Dict], column: str) -> List[str]:
    """Distinct, trimmed, non-blank values of a column, sorted ascending"""
    values: Set[str] = set()
    for row in rows:
        value = row.get(column)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            values.add(value)
    return sorted(values)


def count_rows(client: Client, status: Optional[str] = None, table: Optional[str] = None) -> int:
    """Exact row count, optionally restricted to one status code"""
    query = client.table(table or settings.companies_table).select("*", count="exact", head=True)
    if status is not None:
        query = query.eq("status", status)
    return query.execute().count or 0


def get_filter_options(client: Client, table: Optional[str] = None) -> FilterOptions:
    """
    Distinct states, statuses and entity types across the whole table

    Raises:
        QueryFailedError: If any scan request fails
    """
    try:
        rows = list(scan_columns(client, "state, status, entity_type", table=table))
    except Exception as e:
        logger.error(f"Filter options scan failed: {e}", exc_info=True)
        raise QueryFailedError("filter options", e) from e

    options = FilterOptions(
        states=distinct_values(rows, "state"),
        statuses=distinct_values(rows, "status"),
        entityTypes=distinct_values(rows, "entity_type"),
    )

    logger.debug(
        f"Filter options from {len(rows)} rows: {len(options.states)} states, "
        f"{len(options.statuses)} statuses, {len(options.entity_types)} entity types"
    )

    return options


def get_company_stats(client: Client, table: Optional[str] = None) -> CompanyStats:
    """
    Summary counts over the whole table. Recomputed on every call.

    Raises:
        QueryFailedError: If any count or scan request fails
    """
    try:
        total = count_rows(client, table=table)
        active = count_rows(client, status=settings.active_status, table=table)
        inactive = count_rows(client, status=settings.cancelled_status, table=table)
        rows = list(scan_columns(client, "state, entity_type", table=table))
    except Exception as e:
        logger.error(f"Company stats failed: {e}", exc_info=True)
        raise QueryFailedError("company stats", e) from e

    return CompanyStats(
        total=total,
        active=active,
        inactive=inactive,
        uniqueStates=len(distinct_values(rows, "state")),
        uniqueEntityTypes=len(distinct_values(rows, "entity_type")),
    )
