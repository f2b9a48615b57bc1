"""TOML configuration loader for store profiles and site settings."""

import tomllib
from pathlib import Path

from led_portfolio.config.models import SiteConfig, SiteSettings, StoreProfile


def load_site_config(config_path: Path | None = None) -> SiteConfig:
    """Load site configuration from TOML file.

    Args:
        config_path: Path to site.toml (default: ``site.toml`` in the
            current working directory)

    Returns:
        SiteConfig with all profiles

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config format is invalid
    """
    if config_path is None:
        config_path = Path.cwd() / "site.toml"

    if not config_path.exists():
        raise FileNotFoundError(
            f"Site config not found: {config_path}\n"
            f"Copy site.toml.example to site.toml and configure your profiles."
        )

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse profiles
    profiles = {}
    for name, profile_data in data.get("profiles", {}).items():
        profiles[name] = StoreProfile(**profile_data)

    if not profiles:
        raise ValueError(f"No [profiles.*] tables found in {config_path.name}")

    return SiteConfig(
        profiles=profiles,
        site=SiteSettings(**data.get("site", {})),
    )
