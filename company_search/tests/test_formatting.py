"""
Tests for date formatting and filter chip helpers
"""
from company_search.models import CompanyFilters
from company_search.utils import (
    active_filter_chips,
    format_date_for_input,
    format_date_for_storage,
    format_display_date,
    remove_filter_value,
)


def test_display_date():
    assert format_display_date("20200131") == "31/01/2020"
    assert format_display_date("") == ""
    assert format_display_date(None) == ""
    assert format_display_date("2020-01-31") == "2020-01-31"


def test_picker_conversions():
    assert format_date_for_input("20200131") == "2020-01-31"
    assert format_date_for_storage("2020-01-31") == "20200131"
    assert format_date_for_storage("") == ""


def test_no_chips_without_active_filters():
    assert active_filter_chips(CompanyFilters()) == []
    # The search term is not shown as a chip
    assert active_filter_chips(CompanyFilters(search="acme")) == []


def test_chips_in_display_order():
    filters = CompanyFilters(
        states=["NSW", "VIC"],
        postcode="2000",
        status="ACT",
        entity_types=["Sole Trader"],
        effective_from_start="20200101",
        record_updated_end="20241231",
    )

    labels = [chip.label for chip in active_filter_chips(filters)]

    assert labels == [
        "NSW",
        "VIC",
        "Postcode: 2000",
        "Status: ACT",
        "Sole Trader",
        "From: 01/01/2020",
        "Updated To: 31/12/2024",
    ]


def test_remove_chip_values():
    filters = CompanyFilters(states=["NSW", "VIC"], status="ACT")

    without_nsw = remove_filter_value(filters, "states", "NSW")
    without_status = remove_filter_value(filters, "status")
    without_states = remove_filter_value(without_nsw, "states", "VIC")

    assert without_nsw.states == ["VIC"]
    assert without_status.status is None
    assert without_status.states == ["NSW", "VIC"]
    assert without_states.states is None
    assert filters.states == ["NSW", "VIC"]
