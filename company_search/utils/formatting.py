"""
Date formatting and active-filter helpers for presenting search state

Dates travel as YYYYMMDD strings. Display uses DD/MM/YYYY and date pickers
use YYYY-MM-DD.
"""
from typing import List, NamedTuple, Optional

from company_search.models import CompanyFilters


def format_display_date(value: Optional[str]) -> str:
    """YYYYMMDD -> DD/MM/YYYY. Anything not 8 characters long is returned as is."""
    if not value:
        return ""
    if len(value) == 8:
        return f"{value[6:8]}/{value[4:6]}/{value[0:4]}"
    return value


def format_date_for_input(value: Optional[str]) -> str:
    """YYYYMMDD -> YYYY-MM-DD"""
    if not value:
        return ""
    if len(value) == 8:
        return f"{value[0:4]}-{value[4:6]}-{value[6:8]}"
    return value


def format_date_for_storage(value: Optional[str]) -> str:
    """YYYY-MM-DD -> YYYYMMDD"""
    if not value:
        return ""
    return value.replace("-", "")


class FilterChip(NamedTuple):
    key: str
    value: str
    label: str


# Scalar filters shown as chips, in display order
_SCALAR_CHIPS = (
    ("postcode", "Postcode: {}"),
    ("status", "Status: {}"),
)
_DATE_CHIPS = (
    ("effective_from_start", "From: {}"),
    ("effective_from_end", "To: {}"),
    ("record_updated_start", "Updated From: {}"),
    ("record_updated_end", "Updated To: {}"),
)


def active_filter_chips(filters: CompanyFilters) -> List[FilterChip]:
    """
    One chip per active filter value, in display order.

    The free-text search term lives in the search box and has no chip.
    """
    chips: List[FilterChip] = []

    for state in filters.states or []:
        chips.append(FilterChip("states", state, state))

    for key, template in _SCALAR_CHIPS:
        value = getattr(filters, key)
        if value:
            chips.append(FilterChip(key, value, template.format(value)))

    for entity_type in filters.entity_types or []:
        chips.append(FilterChip("entity_types", entity_type, entity_type))

    for key, template in _DATE_CHIPS:
        value = getattr(filters, key)
        if value:
            chips.append(FilterChip(key, value, template.format(format_display_date(value))))

    return chips


def remove_filter_value(filters: CompanyFilters, key: str, value: Optional[str] = None) -> CompanyFilters:
    """Return a copy of ``filters`` with one chip removed"""
    current = getattr(filters, key)
    if isinstance(current, list):
        remaining = [v for v in current if v != value]
        return filters.model_copy(update={key: remaining or None})
    return filters.model_copy(update={key: None})
