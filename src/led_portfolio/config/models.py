"""Pydantic models for site configuration."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator


# ============================================================================
# Configuration Models
# ============================================================================


class StoreProfile(BaseModel):
    """Keyed store profile from site.toml."""

    provider: Literal["memory", "json", "sql", "supabase"] = "json"
    url: str | None = None           # sql / supabase
    path: str | None = None          # json
    key: str | None = None           # supabase API key
    table: str = "kv_store"          # sql / supabase
    db_password: str | None = None   # For [YOUR-PASSWORD] placeholder substitution
    description: str = ""

    @model_validator(mode="after")
    def _check_provider_fields(self) -> "StoreProfile":
        if self.provider == "json" and not self.path:
            raise ValueError("json profiles require 'path'")
        if self.provider in ("sql", "supabase") and not self.url:
            raise ValueError(f"{self.provider} profiles require 'url'")
        if self.provider == "supabase" and not self.key:
            raise ValueError("supabase profiles require 'key'")
        return self


class SiteSettings(BaseModel):
    """Site-wide display settings from the ``[site]`` table."""

    items_per_page: int = Field(default=10, ge=1, le=100)
    portfolio_fallback: bool = True  # serve built-in examples when nothing is stored


class SiteConfig(BaseModel):
    """Complete configuration from site.toml."""

    profiles: dict[str, StoreProfile]
    site: SiteSettings = Field(default_factory=SiteSettings)
