"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Remote endpoints default to the production URLs the tools were built against
    - optimizely_account_id defaults to DEFAULT_ACCOUNT_ID (core/experiment_defaults.py)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: the service starts with no environment at all
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from opal_tools.core.experiment_defaults import DEFAULT_ACCOUNT_ID


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Optimizely REST API
    optimizely_api_base_url: str = "https://api.optimizely.com/v2"
    optimizely_account_id: int = DEFAULT_ACCOUNT_ID

    # Report generation function
    report_function_url: str = (
        "https://mjjlumqjnsqkgforfhdw.supabase.co/functions/v1/generate-report"
    )
    report_page_base_url: str = (
        "https://id-preview--7eb40827-8f66-4c20-a834-b5cfbf929d7e.lovable.app"
    )

    @field_validator("optimizely_api_base_url", "report_page_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """URLs are joined with '/' by the handlers."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    # Outbound HTTP
    http_timeout_seconds: float = 30.0

    # Service
    service_name: str = "opal-optimizely-tools"
    service_version: str = "1.0.0"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
