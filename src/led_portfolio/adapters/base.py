"""Keyed store protocol definition.

Defines the ``KeyValueStore`` Protocol that all storage adapters implement.
All methods are ``async def`` -- the library is async-first.

Values are JSON documents.  Adapters encode on ``set`` and decode on
``get``; a missing key or a value that no longer decodes falls back to the
caller-supplied default instead of raising.

Usage:
    from led_portfolio.adapters.base import KeyValueStore

    async def do_work(store: KeyValueStore) -> None:
        projects = await store.get("projects", [])
        await store.set("projects", projects)
        await store.close()
"""

import json
import logging
from datetime import date, datetime
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Keyed store interface that all adapters must implement.

    All methods are async -- callers must ``await`` every operation.
    """

    async def get(self, key: str, default: Any = None) -> Any:
        """Read the value stored under ``key``.

        Args:
            key: Storage key.
            default: Value returned when the key is missing or the stored
                text cannot be decoded.

        Returns:
            Decoded JSON value, or ``default``.

        Example:
            projects = await store.get("projects", [])
        """
        ...

    async def set(self, key: str, value: Any) -> None:
        """Replace the value stored under ``key``.

        Args:
            key: Storage key.
            value: JSON-serializable value.  ``datetime``/``date`` values
                are written as ISO-8601 strings.

        Raises:
            Exception: If the backend rejects the write.
        """
        ...

    async def delete(self, key: str) -> None:
        """Remove ``key`` from the store.  Missing keys are ignored."""
        ...

    async def keys(self) -> list[str]:
        """Return all stored keys, sorted."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...


# ------------------------------------------------------------------
# Serialization Helpers
# ------------------------------------------------------------------


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_value(value: Any) -> str:
    """Encode a value to the JSON text adapters persist."""
    return json.dumps(value, default=_json_default)


def decode_value(key: str, raw: str | None, default: Any) -> Any:
    """Decode stored JSON text, falling back to ``default``.

    ``None`` (missing key) and malformed text both return ``default``;
    the latter is logged since it means the stored document is corrupt.
    """
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        logger.warning(f"Malformed value for key '{key}', using default")
        return default
