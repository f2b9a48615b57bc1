"""Typed repositories over the keyed store.

Each entity lives under one storage key as a JSON list.  The key is an
implementation detail of its repository; nothing else in the package
touches the store by key.

Reads never raise: a store error or an item that fails validation is
logged and the read degrades (the whole collection to ``[]`` on a store
error, a single bad item is skipped).  Writes propagate store errors so
the caller can decide what to do.

Usage:
    from led_portfolio.repositories import ProjectRepository

    projects = ProjectRepository(store)
    for project in await projects.list_all():
        print(project.title)
"""

import logging
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from led_portfolio.adapters.base import KeyValueStore
from led_portfolio.models import Inquiry, PortfolioProject, Project, Testimonial

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

SETTINGS_SECTIONS = ("general", "email", "social")


def dump_records(records: list[BaseModel]) -> list[dict[str, Any]]:
    """Serialize models to the stored (camelCase, JSON-safe) layout."""
    return [r.model_dump(mode="json", by_alias=True) for r in records]


class CollectionRepository(Generic[RecordT]):
    """List-of-records repository stored under a single key.

    Subclasses set ``storage_key`` and ``model``; ``key_field`` names the
    attribute that identifies a record.
    """

    storage_key: ClassVar[str]
    model: ClassVar[type[BaseModel]]
    key_field: ClassVar[str] = "id"

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def _read_raw(self) -> list[Any]:
        try:
            data = await self._store.get(self.storage_key, [])
        except Exception:
            logger.exception(f"Error reading '{self.storage_key}' from store")
            return []
        if not isinstance(data, list):
            logger.warning(f"Stored '{self.storage_key}' is not a list, treating as empty")
            return []
        return data

    async def list_all(self) -> list[RecordT]:
        """Return every stored record in stored order."""
        records: list[RecordT] = []
        for index, item in enumerate(await self._read_raw()):
            try:
                records.append(self.model.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    f"Skipping invalid record {index} in '{self.storage_key}': "
                    f"{e.error_count()} error(s)"
                )
        return records

    async def get(self, record_id: str) -> RecordT | None:
        """Return the record whose key equals ``record_id``, if any."""
        for record in await self.list_all():
            if str(getattr(record, self.key_field)) == str(record_id):
                return record
        return None

    async def save_all(self, records: list[RecordT]) -> None:
        """Replace the whole collection."""
        await self._store.set(self.storage_key, dump_records(records))

    async def add(self, record: RecordT) -> RecordT:
        """Append ``record`` and persist the collection."""
        records = await self.list_all()
        records.append(record)
        await self.save_all(records)
        return record

    async def replace(self, record: RecordT) -> bool:
        """Swap in ``record`` for the stored one with the same key.

        Returns:
            ``True`` if a record was replaced, ``False`` if none matched.
        """
        record_id = str(getattr(record, self.key_field))
        records = await self.list_all()
        for index, existing in enumerate(records):
            if str(getattr(existing, self.key_field)) == record_id:
                records[index] = record
                await self.save_all(records)
                return True
        return False

    async def remove(self, record_id: str) -> bool:
        """Delete the record with key ``record_id``.

        Returns:
            ``True`` if a record was removed, ``False`` if none matched.
        """
        records = await self.list_all()
        kept = [r for r in records if str(getattr(r, self.key_field)) != str(record_id)]
        if len(kept) == len(records):
            return False
        await self.save_all(kept)
        return True


class ProjectRepository(CollectionRepository[Project]):
    """Canonical admin-owned projects."""

    storage_key = "led_website_projects"
    model = Project


class TestimonialRepository(CollectionRepository[Testimonial]):
    """Client testimonials."""

    storage_key = "led_website_testimonials"
    model = Testimonial


class InquiryRepository(CollectionRepository[Inquiry]):
    """Contact-form inquiries."""

    storage_key = "led_website_inquiries"
    model = Inquiry


class PortfolioCacheRepository:
    """Denormalized portfolio cache read by the public pages.

    Written only by the sync bridge, always in full.
    """

    storage_key: ClassVar[str] = "portfolio_projects"

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def read(self) -> list[PortfolioProject]:
        """Return the cached projects; ``[]`` if missing or unreadable."""
        try:
            data = await self._store.get(self.storage_key, [])
        except Exception:
            logger.exception(f"Error reading '{self.storage_key}' from store")
            return []
        if not isinstance(data, list):
            return []
        try:
            return [PortfolioProject.model_validate(item) for item in data]
        except ValidationError:
            logger.warning(f"Cached '{self.storage_key}' is malformed, treating as empty")
            return []

    async def overwrite(self, projects: list[PortfolioProject]) -> None:
        """Replace the entire cache with ``projects``."""
        await self._store.set(self.storage_key, dump_records(projects))


class SettingsRepository:
    """Admin settings documents (general, email, social).

    Each section is a flat JSON object under its own key.
    """

    storage_keys: ClassVar[dict[str, str]] = {
        "general": "led_website_settings_general",
        "email": "led_website_settings_email",
        "social": "led_website_settings_social",
    }

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def _key(self, section: str) -> str:
        if section not in self.storage_keys:
            raise KeyError(
                f"Unknown settings section '{section}'. "
                f"Available: {', '.join(SETTINGS_SECTIONS)}"
            )
        return self.storage_keys[section]

    async def get(self, section: str) -> dict[str, Any]:
        key = self._key(section)
        try:
            data = await self._store.get(key, {})
        except Exception:
            logger.exception(f"Error reading '{key}' from store")
            return {}
        return data if isinstance(data, dict) else {}

    async def update(self, section: str, values: dict[str, Any]) -> dict[str, Any]:
        """Merge ``values`` into the section and persist it."""
        merged = {**await self.get(section), **values}
        await self._store.set(self._key(section), merged)
        return merged
