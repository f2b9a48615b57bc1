"""In-memory keyed store.

``InMemoryStore`` keeps JSON text per key, the same way a browser's
localStorage does, so values round-trip through encoding exactly as they
would in a persistent adapter.

Usage:
    from led_portfolio.adapters.memory import InMemoryStore

    store = InMemoryStore()
    await store.set("portfolio", [])
"""

from typing import Any

from led_portfolio.adapters.base import decode_value, encode_value


class InMemoryStore:
    """Process-local implementation of the ``KeyValueStore`` protocol.

    Args:
        initial: Optional mapping of key to raw JSON text, used to preload
            the store (including deliberately malformed text in tests).
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    async def get(self, key: str, default: Any = None) -> Any:
        return decode_value(key, self._items.get(key), default)

    async def set(self, key: str, value: Any) -> None:
        self._items[key] = encode_value(value)

    async def delete(self, key: str) -> None:
        self._items.pop(key, None)

    async def keys(self) -> list[str]:
        return sorted(self._items)

    async def close(self) -> None:
        """No-op; nothing to release."""
        pass

    def raw(self, key: str) -> str | None:
        """Return the stored JSON text for ``key`` (``None`` if missing)."""
        return self._items.get(key)
