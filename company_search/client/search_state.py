"""
Client-side company search state.

Holds filters, pagination and the last fetched page. Every change re-issues
the listing request; a request still in flight is cancelled first so only the
most recent request can update the state (last request wins).

States: idle -> fetching -> idle with data | idle with error.
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional

import httpx

from company_search.client.api_client import CompanyAPIClient, build_query_string
from company_search.client.debounce import Debouncer
from company_search.models import (
    CompanyFilters,
    CompanyRecord,
    CompanyStats,
    FilterOptions,
    PaginationParams,
    RECORD_FIELDS,
    SortDirection,
)

logger = logging.getLogger(__name__)

SEARCH_DEBOUNCE_SECONDS = 0.3
POSTCODE_DEBOUNCE_SECONDS = 0.5

Listener = Callable[["CompanySearchState"], None]


class FetchStatus(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"


class CompanySearchState:
    """Single-writer search state with an explicit change callback API."""

    def __init__(
        self,
        api: CompanyAPIClient,
        limit: int = 10,
        sort_field: str = "entity_name",
        sort_direction: SortDirection = SortDirection.ASC,
    ):
        self.api = api

        self.filters = CompanyFilters()
        self.pagination = PaginationParams(
            page=1, limit=limit, sort_field=sort_field, sort_direction=sort_direction
        )

        self.data: List[CompanyRecord] = []
        self.total = 0
        self.total_pages = 0
        self.status = FetchStatus.IDLE
        self.error: Optional[str] = None

        self.filter_options = FilterOptions()
        self.stats = CompanyStats()
        self.options_error: Optional[str] = None
        self.stats_error: Optional[str] = None

        self._task: Optional[asyncio.Task] = None
        self._generation = 0
        self._listeners: List[Listener] = []
        self._search_debouncer = Debouncer(SEARCH_DEBOUNCE_SECONDS)
        self._postcode_debouncer = Debouncer(POSTCODE_DEBOUNCE_SECONDS)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def loading(self) -> bool:
        return self.status == FetchStatus.FETCHING

    @property
    def query_string(self) -> str:
        return build_query_string(self.filters, self.pagination)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every state transition.

        Returns a function that removes the callback.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # Mutations (each one triggers a fetch)
    # ------------------------------------------------------------------

    def update_filters(self, **changes) -> asyncio.Task:
        """Merge filter changes and go back to page 1"""
        merged = {**self.filters.model_dump(), **changes}
        self.filters = CompanyFilters(**merged)
        self.pagination = self.pagination.model_copy(update={"page": 1})
        return self._schedule()

    def clear_filters(self) -> asyncio.Task:
        self._search_debouncer.cancel()
        self._postcode_debouncer.cancel()
        self.filters = CompanyFilters()
        self.pagination = self.pagination.model_copy(update={"page": 1})
        return self._schedule()

    def update_pagination(self, **changes) -> asyncio.Task:
        merged = {**self.pagination.model_dump(), **changes}
        self.pagination = PaginationParams(**merged)
        return self._schedule()

    def go_to_page(self, page: int) -> asyncio.Task:
        return self.update_pagination(page=page)

    def change_page_size(self, limit: int) -> asyncio.Task:
        return self.update_pagination(limit=limit, page=1)

    def sort_by(self, field: str) -> asyncio.Task:
        """Sort by ``field``: ascending, or descending if already ascending on it"""
        if field not in RECORD_FIELDS:
            raise ValueError(f"Unknown sort field: {field}")

        current = self.pagination
        if current.sort_field == field and current.sort_direction == SortDirection.ASC:
            direction = SortDirection.DESC
        else:
            direction = SortDirection.ASC

        return self.update_pagination(sort_field=field, sort_direction=direction, page=1)

    def refetch(self) -> asyncio.Task:
        return self._schedule()

    def set_search_text(self, text: str) -> asyncio.Task:
        """Debounced search-box input"""
        return self._search_debouncer(self.update_filters, search=text)

    def set_postcode_text(self, text: str) -> asyncio.Task:
        """Debounced postcode input"""
        return self._postcode_debouncer(self.update_filters, postcode=text)

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _schedule(self) -> asyncio.Task:
        if self._task is not None and not self._task.done():
            logger.debug("Cancelling superseded company request")
            self._task.cancel()

        self._generation += 1
        self.status = FetchStatus.FETCHING
        self.error = None
        self._notify()

        self._task = asyncio.ensure_future(
            self._fetch(self._generation, self.filters, self.pagination)
        )
        return self._task

    async def _fetch(self, generation: int, filters: CompanyFilters, pagination: PaginationParams):
        try:
            result = await self.api.get_companies(filters, pagination)
        except asyncio.CancelledError:
            # Superseded by a newer request
            return
        except httpx.HTTPStatusError as e:
            if generation == self._generation:
                self._fail(f"HTTP {e.response.status_code}")
            return
        except Exception as e:
            if generation == self._generation:
                logger.error(f"Error fetching companies: {e}")
                self._fail(str(e) or "Failed to fetch companies")
            return

        if generation != self._generation:
            return

        self.data = result.data
        self.total = result.total
        self.total_pages = result.total_pages
        self.status = FetchStatus.IDLE
        self._notify()

    def _fail(self, message: str):
        self.error = message
        self.status = FetchStatus.IDLE
        self._notify()

    async def wait(self):
        """Wait for the current request (if any) to settle"""
        while self._task is not None and not self._task.done():
            task = self._task
            await asyncio.wait([task])

    async def close(self):
        self._search_debouncer.cancel()
        self._postcode_debouncer.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()
            await asyncio.wait([self._task])
            # Nothing will complete the cancelled request
            self.status = FetchStatus.IDLE
            self._notify()

    # ------------------------------------------------------------------
    # Dropdown options and dashboard stats
    # ------------------------------------------------------------------

    async def fetch_filter_options(self) -> FilterOptions:
        try:
            self.filter_options = await self.api.get_filter_options()
            self.options_error = None
        except Exception as e:
            logger.error(f"Error fetching filter options: {e}")
            self.options_error = "Failed to fetch filter options"
        self._notify()
        return self.filter_options

    async def fetch_stats(self) -> CompanyStats:
        try:
            self.stats = await self.api.get_stats()
            self.stats_error = None
        except Exception as e:
            logger.error(f"Error fetching company stats: {e}")
            self.stats_error = "Failed to fetch company statistics"
        self._notify()
        return self.stats
