"""Admin mutation handlers for projects, testimonials and inquiries.

Every mutation validates its payload, persists the whole collection through
the entity's repository, and (for projects) re-syncs the public portfolio
cache afterwards.

Usage:
    from led_portfolio.admin import ProjectAdmin

    admin = ProjectAdmin(store)
    project = await admin.create({
        "title": "Warehouse High-Bay Upgrade",
        "category": "Industrial",
        "description": "Replaced 200 metal-halide fixtures with LED high-bays.",
    })
    await admin.delete(project.id)
"""

import logging
import re
import secrets
import string
import uuid
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from led_portfolio.adapters.base import KeyValueStore
from led_portfolio.errors import RecordNotFoundError, ValidationFailed
from led_portfolio.models import (
    Inquiry,
    InquiryInput,
    InquiryStatus,
    InquiryUpdate,
    Project,
    ProjectInput,
    ProjectUpdate,
    Testimonial,
    TestimonialInput,
    TestimonialUpdate,
    utcnow,
)
from led_portfolio.repositories import (
    CollectionRepository,
    InquiryRepository,
    ProjectRepository,
    TestimonialRepository,
)
from led_portfolio.sync import PortfolioSync

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

_BASE36 = string.digits + string.ascii_lowercase


def slugify(text: str) -> str:
    """Lowercase, strip punctuation, and hyphenate ``text``.

    Example:
        >>> slugify("Office Retrofit: Phase 2!")
        'office-retrofit-phase-2'
    """
    text = text.strip().lower()
    text = re.sub(r"[^a-z0-9\s_-]", "", text)
    text = re.sub(r"[\s_]+", "-", text)
    return re.sub(r"-+", "-", text).strip("-") or "project"


def random_suffix(length: int = 6) -> str:
    """Random base36 string used to de-duplicate slugs."""
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def new_id() -> str:
    return uuid.uuid4().hex


def validate_payload(model: type[BaseModel], kind: str, data: Any) -> BaseModel:
    """Validate ``data`` against ``model``.

    Raises:
        ValidationFailed: With per-field messages when validation fails.
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ValidationFailed.from_pydantic(kind, e) from e


class RecordAdmin(Generic[RecordT]):
    """CRUD handlers shared by every admin list page.

    Subclasses bind the repository, the input/update models, and the fields
    searched by ``search()``.
    """

    kind: ClassVar[str]
    repository_class: ClassVar[type[CollectionRepository]]
    input_model: ClassVar[type[BaseModel]]
    update_model: ClassVar[type[BaseModel]]
    search_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, store: KeyValueStore) -> None:
        self._repo = self.repository_class(store)

    @property
    def repository(self) -> CollectionRepository:
        return self._repo

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_all(self) -> list[RecordT]:
        return await self._repo.list_all()

    async def get(self, record_id: str) -> RecordT:
        """Return one record.

        Raises:
            RecordNotFoundError: If no record has ``record_id``.
        """
        record = await self._repo.get(record_id)
        if record is None:
            raise RecordNotFoundError(self.kind, record_id)
        return record

    async def search(self, term: str) -> list[RecordT]:
        """Case-insensitive substring filter over ``search_fields``.

        An empty term returns every record.
        """
        records = await self._repo.list_all()
        needle = term.strip().lower()
        if not needle:
            return records
        return [
            r for r in records
            if any(needle in str(getattr(r, f) or "").lower() for f in self.search_fields)
        ]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(self, data: Any) -> RecordT:
        """Validate ``data``, assign id and timestamp, and persist it."""
        payload = validate_payload(self.input_model, self.kind, data)
        record = await self._build(payload)
        await self._repo.add(record)
        logger.info(f"Created {self.kind} {record.id}")
        await self._after_change()
        return record

    async def update(self, record_id: str, data: Any) -> RecordT:
        """Apply the fields present in ``data`` to an existing record.

        Raises:
            RecordNotFoundError: If no record has ``record_id``.
            ValidationFailed: If ``data`` is invalid.
        """
        existing = await self.get(record_id)
        payload = validate_payload(self.update_model, self.kind, data)
        changes = payload.model_dump(exclude_unset=True)
        record = await self._apply(existing, changes)
        await self._repo.replace(record)
        logger.info(f"Updated {self.kind} {record_id}")
        await self._after_change()
        return record

    async def delete(self, record_id: str) -> None:
        """Remove a record.

        Raises:
            RecordNotFoundError: If no record has ``record_id``.
        """
        if not await self._repo.remove(record_id):
            raise RecordNotFoundError(self.kind, record_id)
        logger.info(f"Deleted {self.kind} {record_id}")
        await self._after_change()

    async def _toggle(self, record_id: str, field: str) -> RecordT:
        existing = await self.get(record_id)
        record = existing.model_copy(update={field: not getattr(existing, field)})
        await self._repo.replace(record)
        await self._after_change()
        return record

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    async def _build(self, payload: BaseModel) -> RecordT:
        model = self.repository_class.model
        return validate_payload(
            model, self.kind, {**payload.model_dump(), "id": new_id(), "created_at": utcnow()}
        )

    async def _apply(self, existing: RecordT, changes: dict[str, Any]) -> RecordT:
        model = self.repository_class.model
        return validate_payload(model, self.kind, {**existing.model_dump(), **changes})

    async def _after_change(self) -> None:
        pass


class ProjectAdmin(RecordAdmin[Project]):
    """Project handlers; every mutation re-syncs the portfolio cache.

    Args:
        store: Keyed store.
        bridge: Sync bridge to notify; a new one on ``store`` by default.
    """

    kind = "project"
    repository_class = ProjectRepository
    input_model = ProjectInput
    update_model = ProjectUpdate
    search_fields = ("title", "description", "category")

    def __init__(self, store: KeyValueStore, bridge: PortfolioSync | None = None) -> None:
        super().__init__(store)
        self._bridge = bridge or PortfolioSync(store)

    async def toggle_featured(self, project_id: str) -> Project:
        return await self._toggle(project_id, "featured")

    async def _unique_slug(self, title: str, exclude_id: str | None = None) -> str:
        slug = slugify(title)
        taken = {
            p.slug for p in await self._repo.list_all()
            if p.id != exclude_id
        }
        if slug in taken:
            slug = f"{slug}-{random_suffix()}"
        return slug

    async def _build(self, payload: BaseModel) -> Project:
        record = await super()._build(payload)
        return record.model_copy(update={"slug": await self._unique_slug(record.title)})

    async def _apply(self, existing: Project, changes: dict[str, Any]) -> Project:
        if changes.get("title"):
            changes["slug"] = await self._unique_slug(changes["title"], exclude_id=existing.id)
        return await super()._apply(existing, changes)

    async def _after_change(self) -> None:
        await self._bridge.sync()


class TestimonialAdmin(RecordAdmin[Testimonial]):
    """Testimonial handlers."""

    kind = "testimonial"
    repository_class = TestimonialRepository
    input_model = TestimonialInput
    update_model = TestimonialUpdate
    search_fields = ("name", "company", "content")

    async def toggle_featured(self, testimonial_id: str) -> Testimonial:
        return await self._toggle(testimonial_id, "featured")


class InquiryAdmin(RecordAdmin[Inquiry]):
    """Inquiry inbox handlers; ``create`` doubles as the contact-form submit."""

    kind = "inquiry"
    repository_class = InquiryRepository
    input_model = InquiryInput
    update_model = InquiryUpdate
    search_fields = ("name", "email", "company", "service", "message")

    async def set_status(self, inquiry_id: str, status: InquiryStatus) -> Inquiry:
        return await self.update(inquiry_id, {"status": status})


async def submit_inquiry(store: KeyValueStore, data: Any) -> Inquiry:
    """Record a public contact-form submission with status ``new``.

    Raises:
        ValidationFailed: If the form data is invalid.
    """
    return await InquiryAdmin(store).create(data)
