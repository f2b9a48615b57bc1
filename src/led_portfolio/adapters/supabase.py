"""Async Supabase keyed store.

Provides ``AsyncSupabaseStore``, an async implementation of the
``KeyValueStore`` protocol using the supabase-py async client against a
``kv_store(key text primary key, value text)`` table.

The client is initialized lazily on first use with an ``asyncio.Lock``
to ensure it is created once.

Usage:
    from led_portfolio.adapters.supabase import AsyncSupabaseStore

    store = AsyncSupabaseStore(
        url="https://xyzproject.supabase.co",
        key="eyJ...",
    )

    projects = await store.get("projects", [])
    await store.close()
"""

import asyncio
from typing import Any

from supabase import AsyncClient, acreate_client

from led_portfolio.adapters.base import decode_value, encode_value


class AsyncSupabaseStore:
    """Async Supabase implementation of the ``KeyValueStore`` protocol.

    Args:
        url: Supabase project URL.
        key: Supabase API key (anon or service key).
        table: Name of the key/value table.
    """

    def __init__(self, url: str, key: str, table: str = "kv_store") -> None:
        self._url: str = url
        self._key: str = key
        self._table: str = table
        self._client: AsyncClient | None = None
        self._lock: asyncio.Lock = asyncio.Lock()

    async def _get_client(self) -> AsyncClient:
        """Get or create the async Supabase client."""
        if self._client is None:
            async with self._lock:
                # Double-check after acquiring lock
                if self._client is None:
                    self._client = await acreate_client(self._url, self._key)
        return self._client

    async def get(self, key: str, default: Any = None) -> Any:
        client = await self._get_client()
        result = await (
            client.table(self._table).select("value").eq("key", key).execute()
        )
        raw = result.data[0]["value"] if result.data else None
        return decode_value(key, raw, default)

    async def set(self, key: str, value: Any) -> None:
        client = await self._get_client()
        await (
            client.table(self._table)
            .upsert({"key": key, "value": encode_value(value)})
            .execute()
        )

    async def delete(self, key: str) -> None:
        client = await self._get_client()
        await client.table(self._table).delete().eq("key", key).execute()

    async def keys(self) -> list[str]:
        client = await self._get_client()
        result = await client.table(self._table).select("key").order("key").execute()
        return [row["key"] for row in result.data]

    async def close(self) -> None:
        """Close the Supabase async client.

        If the client was never initialized this is a no-op.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
