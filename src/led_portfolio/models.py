"""Pydantic models for site records.

This module contains the domain models:
- Canonical records (admin-owned): Project, GalleryImage, Testimonial, Inquiry
- Projected record (public portfolio): PortfolioProject
- Admin input models: ProjectInput, ProjectUpdate, TestimonialInput,
  TestimonialUpdate, InquiryInput, InquiryUpdate

Stored JSON uses camelCase keys (``mainImage``, ``galleryImages``,
``createdAt``); Python code uses snake_case attributes.  Dump with
``model_dump(mode="json", by_alias=True)`` to get the stored layout.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

InquiryStatus = Literal["new", "in-progress", "completed", "archived"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Make ``value`` timezone-aware UTC; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def normalize_gallery(value: Any) -> list[dict[str, Any]]:
    """Normalize stored gallery entries to image objects.

    Older records keep the gallery as a list of bare URL strings; newer ones
    keep ``{id, url, alt, isFeatured}`` objects.  Strings become objects with
    ``order`` set to their position.  Entries that are neither a string nor
    an object with a ``url`` are dropped.

    Example:
        >>> normalize_gallery(["/img/a.jpg"])
        [{'url': '/img/a.jpg', 'order': 0}]
    """
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning(f"Gallery is not a list ({type(value).__name__}), ignoring it")
        return []

    images: list[dict[str, Any]] = []
    for index, item in enumerate(value):
        if isinstance(item, str):
            images.append({"url": item, "order": index})
        elif isinstance(item, GalleryImage):
            images.append(item.model_dump(by_alias=True))
        elif isinstance(item, dict) and item.get("url"):
            images.append({"order": index, **item})
        else:
            logger.warning(f"Dropping malformed gallery entry at position {index}")
    return images


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# Canonical Records
# ============================================================================


class GalleryImage(_Record):
    """One image in a project's gallery."""

    id: str | None = None
    url: str
    alt: str = ""
    is_featured: bool = Field(default=False, alias="isFeatured")
    order: int = Field(default=0, ge=0)


class Project(_Record):
    """Canonical project, owned by the admin mutation handlers.

    Example:
        >>> p = Project(id="p1", title="Office Retrofit", galleryImages=["/img/b.jpg"])
        >>> p.gallery_images[0].url
        '/img/b.jpg'
    """

    id: str
    title: str
    slug: str = ""
    description: str = ""
    category: str = ""
    location: str | None = None
    challenge: str | None = None
    solution: str | None = None
    results: str | None = None
    featured: bool = False
    main_image: str = Field(default="", alias="mainImage")
    gallery_images: list[GalleryImage] = Field(default_factory=list, alias="galleryImages")
    completion_date: datetime | None = Field(default=None, alias="completionDate")
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("gallery_images", mode="before")
    @classmethod
    def _normalize_gallery(cls, value: Any) -> list[dict[str, Any]]:
        return normalize_gallery(value)

    @field_validator("description", "category", mode="before")
    @classmethod
    def _blank_if_missing(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("completion_date", "created_at")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)


class Testimonial(_Record):
    """Client testimonial shown on the home and portfolio pages."""

    id: str
    name: str
    position: str = ""
    company: str = ""
    content: str
    rating: int = Field(default=5, ge=1, le=5)
    image_url: str | None = Field(default=None, alias="imageUrl")
    project_id: str | None = Field(default=None, alias="projectId")
    featured: bool = False
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)


class Inquiry(_Record):
    """Contact-form submission tracked in the admin inbox."""

    id: str
    name: str
    email: str
    phone: str | None = None
    company: str | None = None
    service: str | None = None
    message: str
    status: InquiryStatus = "new"
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)


# ============================================================================
# Projected Record
# ============================================================================


class PortfolioProject(_Record):
    """Denormalized project read by the public portfolio pages."""

    id: str
    title: str
    category: str
    location: str
    description: str
    challenge: str
    solution: str
    results: str
    image_src: str = Field(alias="imageSrc")
    gallery_images: list[str] = Field(default_factory=list, alias="galleryImages")


# ============================================================================
# Admin Input Models
# ============================================================================


class ProjectInput(_Record):
    """Validated payload for creating a project."""

    title: str = Field(min_length=3)
    category: str = Field(min_length=2)
    description: str = Field(min_length=10)
    location: str | None = Field(default=None, min_length=2)
    challenge: str | None = Field(default=None, min_length=10)
    solution: str | None = Field(default=None, min_length=10)
    results: str | None = Field(default=None, min_length=10)
    featured: bool = False
    main_image: str = Field(default="", alias="mainImage")
    gallery_images: list[GalleryImage] = Field(default_factory=list, alias="galleryImages")
    completion_date: datetime | None = Field(default=None, alias="completionDate")

    @field_validator("gallery_images", mode="before")
    @classmethod
    def _normalize_gallery(cls, value: Any) -> list[dict[str, Any]]:
        return normalize_gallery(value)


class ProjectUpdate(_Record):
    """Validated partial payload for updating a project.

    Only fields present in the payload are applied; ``gallery_images``
    replaces the whole gallery when given.
    """

    title: str | None = Field(default=None, min_length=3)
    category: str | None = Field(default=None, min_length=2)
    description: str | None = Field(default=None, min_length=10)
    location: str | None = Field(default=None, min_length=2)
    challenge: str | None = Field(default=None, min_length=10)
    solution: str | None = Field(default=None, min_length=10)
    results: str | None = Field(default=None, min_length=10)
    featured: bool | None = None
    main_image: str | None = Field(default=None, alias="mainImage")
    gallery_images: list[GalleryImage] | None = Field(default=None, alias="galleryImages")
    completion_date: datetime | None = Field(default=None, alias="completionDate")

    @field_validator("gallery_images", mode="before")
    @classmethod
    def _normalize_gallery(cls, value: Any) -> list[dict[str, Any]] | None:
        if value is None:
            return None
        return normalize_gallery(value)

    @field_validator("title", "category", "description", mode="before")
    @classmethod
    def _required_when_given(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field cannot be cleared")
        return value


class TestimonialInput(_Record):
    """Validated payload for creating a testimonial."""

    name: str = Field(min_length=2)
    position: str = ""
    company: str = ""
    content: str = Field(min_length=10)
    rating: int = Field(default=5, ge=1, le=5)
    image_url: str | None = Field(default=None, alias="imageUrl")
    project_id: str | None = Field(default=None, alias="projectId")
    featured: bool = False


class TestimonialUpdate(_Record):
    """Validated partial payload for updating a testimonial."""

    name: str | None = Field(default=None, min_length=2)
    position: str | None = None
    company: str | None = None
    content: str | None = Field(default=None, min_length=10)
    rating: int | None = Field(default=None, ge=1, le=5)
    image_url: str | None = Field(default=None, alias="imageUrl")
    project_id: str | None = Field(default=None, alias="projectId")
    featured: bool | None = None


class InquiryInput(_Record):
    """Validated contact-form submission."""

    name: str = Field(min_length=2)
    email: str = Field(pattern=EMAIL_PATTERN)
    phone: str | None = None
    company: str | None = None
    service: str | None = None
    message: str = Field(min_length=10)


class InquiryUpdate(_Record):
    """Validated partial payload for updating an inquiry."""

    name: str | None = Field(default=None, min_length=2)
    email: str | None = Field(default=None, pattern=EMAIL_PATTERN)
    phone: str | None = None
    company: str | None = None
    service: str | None = None
    message: str | None = Field(default=None, min_length=10)
    status: InquiryStatus | None = None
