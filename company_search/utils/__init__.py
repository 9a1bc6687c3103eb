"""
Utility modules for the company search service
"""
from .supabase_client import get_supabase_client, get_db
from .validators import validate_jwt
from .formatting import (
    format_display_date,
    format_date_for_input,
    format_date_for_storage,
    active_filter_chips,
    remove_filter_value,
)

__all__ = [
    "get_supabase_client",
    "get_db",
    "validate_jwt",
    "format_display_date",
    "format_date_for_input",
    "format_date_for_storage",
    "active_filter_chips",
    "remove_filter_value",
]
