"""Configuration management: store profiles, site settings, TOML loading.

Usage:
    >>> from led_portfolio.config import load_site_config, StoreProfile, SiteConfig
"""

from led_portfolio.config.loader import load_site_config
from led_portfolio.config.models import SiteConfig, SiteSettings, StoreProfile

__all__ = ["load_site_config", "SiteConfig", "SiteSettings", "StoreProfile"]
