"""Keyed store factory.

Resolves the active store profile and builds the matching adapter.

Profile resolution priority:
1. Explicit ``profile_name`` argument (CLI ``--profile``)
2. ``{env_prefix}STORE_PROFILE`` environment variable
3. The only profile in site.toml, when exactly one is defined
4. Raise ``ProfileNotFoundError``
"""

import logging
import os
from urllib.parse import quote

from led_portfolio.adapters.base import KeyValueStore
from led_portfolio.adapters.json_file import JsonFileStore
from led_portfolio.adapters.memory import InMemoryStore
from led_portfolio.adapters.sql import AsyncSqlStore
from led_portfolio.config.models import SiteConfig, StoreProfile
from led_portfolio.errors import ProfileNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "LED_"


def get_active_profile_name(
    config: SiteConfig,
    profile_name: str | None = None,
    env_prefix: str = DEFAULT_ENV_PREFIX,
) -> str:
    """Pick the profile to use.

    Args:
        config: Loaded site configuration.
        profile_name: Explicit choice; wins over everything else.
        env_prefix: Prefix for the environment variable lookup
            (``LED_`` reads ``LED_STORE_PROFILE``).

    Returns:
        Profile name present in ``config.profiles``.

    Raises:
        ProfileNotFoundError: If nothing selects a profile, or the selected
            name is not defined.
    """
    name = profile_name or os.environ.get(f"{env_prefix}STORE_PROFILE")

    if name is None and len(config.profiles) == 1:
        name = next(iter(config.profiles))

    available = ", ".join(config.profiles.keys())
    if name is None:
        raise ProfileNotFoundError(
            "No store profile selected.\n"
            f"Pass --profile or set {env_prefix}STORE_PROFILE.\n"
            f"Available profiles: {available}"
        )
    if name not in config.profiles:
        raise ProfileNotFoundError(
            f"Profile '{name}' not found in site.toml. Available: {available}"
        )
    return name


def resolve_url(profile: StoreProfile) -> str:
    """Resolve profile URL with password substitution.

    Args:
        profile: Store profile from config

    Returns:
        Connection URL with ``[YOUR-PASSWORD]`` replaced by the URL-quoted
        ``db_password``
    """
    url = profile.url or ""
    if profile.db_password and "[YOUR-PASSWORD]" in url:
        url = url.replace("[YOUR-PASSWORD]", quote(profile.db_password, safe=""))
    return url


def create_store(profile: StoreProfile) -> KeyValueStore:
    """Build the adapter described by ``profile``.

    Raises:
        ImportError: For ``supabase`` profiles when the extra is missing.
    """
    if profile.provider == "memory":
        return InMemoryStore()
    if profile.provider == "json":
        return JsonFileStore(profile.path)
    if profile.provider == "sql":
        return AsyncSqlStore(resolve_url(profile), table=profile.table)

    from led_portfolio.adapters.supabase import AsyncSupabaseStore

    return AsyncSupabaseStore(url=resolve_url(profile), key=profile.key, table=profile.table)


def get_store(
    config: SiteConfig,
    profile_name: str | None = None,
    env_prefix: str = DEFAULT_ENV_PREFIX,
) -> KeyValueStore:
    """Resolve the active profile and return its store.

    Example:
        >>> store = get_store(load_site_config(), "local")
    """
    name = get_active_profile_name(config, profile_name, env_prefix)
    profile = config.profiles[name]
    logger.debug(f"Using store profile '{name}' ({profile.provider})")
    return create_store(profile)
