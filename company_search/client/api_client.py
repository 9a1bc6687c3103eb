"""
Company Search API client.
Async wrapper around the /companies endpoints.
"""

import httpx
import logging
from typing import List, Optional, Sequence, Tuple

from company_search.models import (
    CompanyFilters,
    CompanyResponse,
    CompanyStats,
    FilterOptions,
    PaginationParams,
)

logger = logging.getLogger(__name__)

QueryParams = List[Tuple[str, str]]


def build_query_params(filters: CompanyFilters, pagination: PaginationParams) -> QueryParams:
    """Serialize search state to query parameters.

    Pagination keys are always present; filters only when set. Set-valued
    filters become repeated keys.
    """
    params: QueryParams = [
        ("page", str(pagination.page)),
        ("limit", str(pagination.limit)),
    ]
    if pagination.sort_field:
        params.append(("sortField", pagination.sort_field))
    params.append(("sortDirection", pagination.sort_direction.value))

    if filters.search:
        params.append(("search", filters.search))
    for state in filters.states or []:
        params.append(("states", state))
    if filters.postcode:
        params.append(("postcode", filters.postcode))
    if filters.status:
        params.append(("status", filters.status))
    for entity_type in filters.entity_types or []:
        params.append(("entityTypes", entity_type))
    if filters.effective_from_start:
        params.append(("effectiveFromStart", filters.effective_from_start))
    if filters.effective_from_end:
        params.append(("effectiveFromEnd", filters.effective_from_end))
    if filters.record_updated_start:
        params.append(("recordUpdatedStart", filters.record_updated_start))
    if filters.record_updated_end:
        params.append(("recordUpdatedEnd", filters.record_updated_end))

    return params


def build_query_string(filters: CompanyFilters, pagination: PaginationParams) -> str:
    return str(httpx.QueryParams(build_query_params(filters, pagination)))


class CompanyAPIClient:
    """Client for the company search HTTP API."""

    def __init__(
        self,
        base_url: str = "",
        client: Optional[httpx.AsyncClient] = None,
        access_token: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize API client.

        Args:
            base_url: Service URL including any API prefix (e.g. http://host/api)
            client: Existing AsyncClient to use instead of creating one
            access_token: Supabase access token sent as a Bearer header
            timeout: Request timeout in seconds (None keeps httpx's default)
        """
        headers = {"User-Agent": "company-search-client/1.0"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        if client is None:
            kwargs = {"base_url": base_url.rstrip("/"), "headers": headers}
            if timeout is not None:
                kwargs["timeout"] = timeout
            client = httpx.AsyncClient(**kwargs)
        else:
            client.headers.update(headers)

        self._client = client

    async def _get(self, path: str, params: Optional[Sequence[Tuple[str, str]]] = None) -> dict:
        """GET a JSON document.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
            httpx.RequestError: On transport failure
        """
        logger.debug(f"GET {path}")
        response = await self._client.get(path, params=params)
        if response.is_error:
            logger.error(f"HTTP error {response.status_code}: {path}")
        response.raise_for_status()
        return response.json()

    async def get_companies(
        self,
        filters: Optional[CompanyFilters] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> CompanyResponse:
        params = build_query_params(filters or CompanyFilters(), pagination or PaginationParams())
        return CompanyResponse.model_validate(await self._get("/companies", params))

    async def get_filter_options(self) -> FilterOptions:
        return FilterOptions.model_validate(await self._get("/companies/filter-options"))

    async def get_stats(self) -> CompanyStats:
        return CompanyStats.model_validate(await self._get("/companies/stats"))

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
