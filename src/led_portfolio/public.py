"""Read-only project queries for the public site.

``list_public_projects`` filters, sorts and paginates the canonical project
collection and returns the response body the public projects endpoint
serves.  The portfolio pages themselves read the synced cache through
``PortfolioSync.get_projected()``.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from led_portfolio.adapters.base import KeyValueStore
from led_portfolio.errors import ValidationFailed
from led_portfolio.models import Project
from led_portfolio.repositories import ProjectRepository, dump_records

SORT_FIELDS = {"createdAt": "created_at", "title": "title", "category": "category"}


class ProjectQuery(BaseModel):
    """Query parameters accepted by ``list_public_projects``."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    category: str | None = None
    featured: bool | None = None
    search: str | None = None
    sort_by: Literal["createdAt", "title", "category"] = "createdAt"
    sort_order: Literal["asc", "desc"] = "desc"


def _matches(project: Project, query: ProjectQuery) -> bool:
    if query.category and project.category != query.category:
        return False
    if query.featured is not None and project.featured != query.featured:
        return False
    if query.search:
        needle = query.search.lower()
        haystacks = (project.title, project.description, project.location or "")
        if not any(needle in h.lower() for h in haystacks):
            return False
    return True


async def list_public_projects(store: KeyValueStore, **params: Any) -> dict[str, Any]:
    """Return one page of projects plus pagination metadata.

    Args:
        store: Keyed store.
        **params: Fields of ``ProjectQuery``.

    Returns:
        ``{"projects": [...], "pagination": {page, limit, totalCount,
        totalPages, hasNextPage, hasPrevPage}}`` with projects in the stored
        camelCase layout.

    Raises:
        ValidationFailed: If the query parameters are invalid.

    Example:
        body = await list_public_projects(store, category="Commercial", page=2)
    """
    try:
        query = ProjectQuery(**params)
    except ValidationError as e:
        raise ValidationFailed.from_pydantic("query", e) from e

    projects = [p for p in await ProjectRepository(store).list_all() if _matches(p, query)]

    field = SORT_FIELDS[query.sort_by]
    # Records missing the sort value go last in either direction
    present = [p for p in projects if getattr(p, field) is not None]
    missing = [p for p in projects if getattr(p, field) is None]
    present.sort(key=lambda p: getattr(p, field), reverse=query.sort_order == "desc")
    ordered = present + missing

    total_count = len(ordered)
    total_pages = -(-total_count // query.limit)
    start = (query.page - 1) * query.limit

    return {
        "projects": dump_records(ordered[start:start + query.limit]),
        "pagination": {
            "page": query.page,
            "limit": query.limit,
            "totalCount": total_count,
            "totalPages": total_pages,
            "hasNextPage": query.page < total_pages,
            "hasPrevPage": query.page > 1,
        },
    }


async def get_public_project(store: KeyValueStore, slug: str) -> dict[str, Any] | None:
    """Return one canonical project by slug in the stored layout, if any."""
    for project in await ProjectRepository(store).list_all():
        if project.slug == slug:
            return project.model_dump(mode="json", by_alias=True)
    return None
