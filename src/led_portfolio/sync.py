"""One-way sync from admin projects to the public portfolio cache.

The admin's canonical projects are projected into the denormalized shape the
public portfolio pages read, and the cache is replaced in full on every
sync.  There is no partial update path and no merge with earlier cache
contents: the cache is a pure function of the canonical collection at sync
time.

Usage:
    from led_portfolio.sync import PortfolioSync

    bridge = PortfolioSync(store)
    result = await bridge.sync()
    projects = await bridge.get_projected()
"""

import asyncio
import logging

from pydantic import BaseModel, Field

from led_portfolio.adapters.base import KeyValueStore
from led_portfolio.models import PortfolioProject, Project
from led_portfolio.repositories import PortfolioCacheRepository, ProjectRepository

logger = logging.getLogger(__name__)

DEFAULT_LOCATION = "Location not specified"
DEFAULT_CHALLENGE = "Challenge details not available"
DEFAULT_SOLUTION = "Solution details not available"
DEFAULT_RESULTS = "Results details not available"


DEFAULT_PORTFOLIO_PROJECTS: tuple[PortfolioProject, ...] = (
    PortfolioProject(
        id="corporate-office",
        title="Corporate Office Complex",
        category="Commercial",
        location="New York, NY",
        description=(
            "Complete LED retrofit for a 10-story office building, reducing energy "
            "costs by 65% while improving lighting quality and employee satisfaction."
        ),
        challenge=(
            "The client needed to modernize their outdated lighting system to reduce "
            "operational costs and improve the work environment for employees."
        ),
        solution=(
            "We designed and installed a comprehensive LED lighting solution with smart "
            "controls, occupancy sensors, and daylight harvesting to maximize energy savings."
        ),
        results=(
            "The new lighting system reduced energy consumption by 65%, improved employee "
            "satisfaction, and created a more modern and professional atmosphere."
        ),
        imageSrc="/images/project1.jpg",
        galleryImages=[
            "/images/projects/office-1.jpg",
            "/images/projects/office-2.jpg",
            "/images/projects/office-3.jpg",
        ],
    ),
    PortfolioProject(
        id="luxury-retail",
        title="Luxury Retail Store",
        category="Commercial",
        location="Los Angeles, CA",
        description=(
            "Custom accent lighting to highlight products and create an upscale "
            "shopping experience for a high-end fashion retailer."
        ),
        challenge=(
            "The retailer needed lighting that would showcase their luxury products "
            "while creating an inviting atmosphere for customers."
        ),
        solution=(
            "We implemented precision accent lighting, color-tuned LEDs, and custom "
            "fixtures that complemented the store's design aesthetic."
        ),
        results=(
            "The lighting design increased product visibility, enhanced the shopping "
            "experience, and contributed to a 30% increase in sales."
        ),
        imageSrc="/images/project2.jpg",
        galleryImages=[
            "/images/project2-gallery1.jpg",
            "/images/project2-gallery2.jpg",
            "/images/project2-gallery3.jpg",
        ],
    ),
)


class SyncResult(BaseModel):
    """Outcome of a ``PortfolioSync.sync()`` call.

    Attributes:
        success: ``False`` only when an exception interrupted the sync.
        skipped: ``True`` when there were no canonical projects and the
            cache was left untouched.
        synced_count: Number of projects written to the cache.
        errors: Messages of exceptions caught during the sync.
    """

    success: bool = False
    skipped: bool = False
    synced_count: int = 0
    errors: list[str] = Field(default_factory=list)


def project_to_portfolio(project: Project) -> PortfolioProject:
    """Project one canonical record into the portfolio shape.

    Pure: the same project always yields the same output.

    Example:
        >>> p = Project(id="p1", title="Office Retrofit", slug="office-retrofit")
        >>> project_to_portfolio(p).id
        'office-retrofit'
    """
    return PortfolioProject(
        id=project.slug or project.id,
        title=project.title,
        category=project.category,
        location=project.location or DEFAULT_LOCATION,
        description=project.description,
        challenge=project.challenge or DEFAULT_CHALLENGE,
        solution=project.solution or DEFAULT_SOLUTION,
        results=project.results or DEFAULT_RESULTS,
        imageSrc=project.main_image,
        galleryImages=[image.url for image in project.gallery_images],
    )


class PortfolioSync:
    """Projects canonical projects into the portfolio cache.

    One ``asyncio.Lock`` per bridge serializes the read-transform-write
    sequence, so coroutines sharing a bridge only ever see the cache before
    or after a whole sync.

    Args:
        store: Keyed store holding both collections.
        fallback: Serve ``DEFAULT_PORTFOLIO_PROJECTS`` from
            ``get_projected()`` when nothing is stored at all.
    """

    def __init__(self, store: KeyValueStore, fallback: bool = True) -> None:
        self._projects = ProjectRepository(store)
        self._cache = PortfolioCacheRepository(store)
        self._fallback = fallback
        self._lock = asyncio.Lock()

    async def sync(self) -> SyncResult:
        """Rebuild the portfolio cache from every canonical project.

        An empty canonical collection leaves the cache untouched.  Never
        raises: failures are logged and returned in ``SyncResult.errors``,
        with the previous cache intact.
        """
        async with self._lock:
            try:
                projects = await self._projects.list_all()
                if not projects:
                    logger.debug("No admin projects to sync")
                    return SyncResult(success=True, skipped=True)

                portfolio = [project_to_portfolio(p) for p in projects]
                await self._cache.overwrite(portfolio)
            except Exception as e:
                logger.exception("Error syncing projects")
                return SyncResult(success=False, errors=[str(e)])

        logger.info(f"Projects synced successfully: {len(portfolio)}")
        return SyncResult(success=True, synced_count=len(portfolio))

    async def get_projected(self) -> list[PortfolioProject]:
        """Return the portfolio projects the public pages should show.

        Order of preference: the cache; the cache after one sync; the
        built-in examples (when ``fallback`` is enabled).
        """
        projects = await self._cache.read()
        if projects:
            return projects

        await self.sync()

        projects = await self._cache.read()
        if projects:
            return projects

        if not self._fallback:
            return []
        return [p.model_copy(deep=True) for p in DEFAULT_PORTFOLIO_PROJECTS]

    async def get_project(self, project_id: str) -> PortfolioProject | None:
        """Look up one portfolio project by its public id (the slug)."""
        for project in await self.get_projected():
            if project.id == project_id:
                return project
        return None
