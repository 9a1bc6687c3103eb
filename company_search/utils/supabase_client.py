"""
Supabase client wrapper for the company search service
"""
from supabase import create_client, Client
from functools import lru_cache
from company_search.config import settings
import logging

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client() -> Client:
    """
    Get Supabase client instance (cached)

    The register is read-only and public, so the anon key is all the
    service needs.
    """
    try:
        client = create_client(settings.supabase_url, settings.supabase_anon_key)
        logger.info(f"Supabase client created for {settings.supabase_url}")
        return client
    except Exception as e:
        logger.error(f"Failed to create Supabase client: {e}")
        raise


def get_db() -> Client:
    """FastAPI dependency returning the shared client."""
    return get_supabase_client()
