"""
Company Search Service Configuration
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Supabase
    supabase_url: str = "http://localhost:54321"
    supabase_anon_key: str = ""
    companies_table: str = "abn_data"

    # Status codes counted by the stats endpoint
    active_status: str = "ACT"
    cancelled_status: str = "CAN"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"
    api_prefix: str = ""
    cors_origins: List[str] = ["*"]

    # Security (Supabase auth JWT)
    auth_required: bool = False
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_audience: str = "authenticated"

    # Search
    default_page_size: int = 10
    max_page_size: int = 100
    scan_batch_size: int = 1000

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
