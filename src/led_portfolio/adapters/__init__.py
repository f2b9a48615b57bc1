"""Keyed store adapters package.

Provides the ``KeyValueStore`` Protocol and concrete async adapters:
in-memory, JSON file, SQL (PostgreSQL/SQLite via SQLAlchemy) and
(optionally) Supabase.

``AsyncSupabaseStore`` is only available when the ``supabase`` extra
is installed.  A missing ``supabase`` dependency does not prevent
importing the rest of the package.

Usage:
    from led_portfolio.adapters import KeyValueStore, InMemoryStore, AsyncSqlStore

    # With supabase extra installed:
    from led_portfolio.adapters import AsyncSupabaseStore
"""

from led_portfolio.adapters.base import KeyValueStore
from led_portfolio.adapters.json_file import JsonFileStore
from led_portfolio.adapters.memory import InMemoryStore
from led_portfolio.adapters.sql import AsyncSqlStore

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "AsyncSqlStore",
]

try:
    from led_portfolio.adapters.supabase import AsyncSupabaseStore

    __all__.append("AsyncSupabaseStore")
except ImportError:
    # supabase extra not installed -- AsyncSupabaseStore unavailable
    pass
