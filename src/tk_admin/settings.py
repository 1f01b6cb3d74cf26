"""
tk_admin.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide backend keys from repr/logging (anon key, service-role key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration:
    - `TK_*` variables take precedence
    - The hosting platform's `SUPABASE_*` variables are accepted as well
    """

    model_config = SettingsConfigDict(
        env_prefix="TK_", case_sensitive=False, populate_by_name=True
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "tk-admin-functions"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Backend-as-a-service project
    supabase_url: str = Field(
        default="http://localhost:54321",
        validation_alias=AliasChoices("TK_SUPABASE_URL", "SUPABASE_URL"),
    )
    supabase_anon_key: str = Field(
        default="",
        repr=False,
        validation_alias=AliasChoices("TK_SUPABASE_ANON_KEY", "SUPABASE_ANON_KEY"),
    )
    supabase_service_role_key: str = Field(
        default="",
        repr=False,
        validation_alias=AliasChoices(
            "TK_SUPABASE_SERVICE_ROLE_KEY", "SUPABASE_SERVICE_ROLE_KEY"
        ),
    )

    # Invited users land here to choose their password.
    password_reset_path: str = "/update-password"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Keys are only read by `identity.supabase`; nothing else should touch them.
