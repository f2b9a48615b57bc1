"""Sample records for a fresh store.

``seed_store`` fills empty collections with the sample projects,
testimonials and inquiries below and then syncs the portfolio cache.
Collections that already hold records are left alone unless
``overwrite=True``.
"""

import logging
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from led_portfolio.adapters.base import KeyValueStore
from led_portfolio.models import Inquiry, Project, Testimonial
from led_portfolio.repositories import (
    CollectionRepository,
    InquiryRepository,
    ProjectRepository,
    TestimonialRepository,
)
from led_portfolio.sync import PortfolioSync

logger = logging.getLogger(__name__)


def _at(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


SAMPLE_PROJECTS = [
    Project(
        id="1",
        title="Commercial Office LED Retrofit",
        slug="commercial-office-led-retrofit",
        description="Complete LED lighting upgrade for a 10,000 sq ft office space, reducing energy costs by 40%.",
        category="Commercial",
        featured=True,
        mainImage="/images/projects/office-main.jpg",
        galleryImages=[
            "/images/projects/office-1.jpg",
            "/images/projects/office-2.jpg",
            "/images/projects/office-3.jpg",
        ],
        completionDate=_at(2023, 5, 15),
        createdAt=_at(2023, 4, 10),
    ),
    Project(
        id="2",
        title="Retail Store Lighting Installation",
        slug="retail-store-lighting-installation",
        description="Custom lighting design for a high-end retail store, enhancing product displays and customer experience.",
        category="Retail",
        featured=True,
        mainImage="/images/projects/retail-main.jpg",
        galleryImages=[
            "/images/projects/retail-1.jpg",
            "/images/projects/retail-2.jpg",
        ],
        completionDate=_at(2023, 6, 2),
        createdAt=_at(2023, 5, 1),
    ),
    Project(
        id="3",
        title="Restaurant Ambient Lighting",
        slug="restaurant-ambient-lighting",
        description="Mood lighting installation for a fine dining restaurant, creating the perfect atmosphere for guests.",
        category="Hospitality",
        featured=False,
        mainImage="/images/projects/restaurant-main.jpg",
        galleryImages=[
            "/images/projects/restaurant-1.jpg",
            "/images/projects/restaurant-2.jpg",
            "/images/projects/restaurant-3.jpg",
            "/images/projects/restaurant-4.jpg",
        ],
        completionDate=_at(2023, 6, 20),
        createdAt=_at(2023, 5, 15),
    ),
    Project(
        id="4",
        title="Residential Smart Lighting System",
        slug="residential-smart-lighting-system",
        description="Integrated smart home lighting system for a luxury residence, with voice and app control.",
        category="Residential",
        featured=False,
        mainImage="/images/projects/residential-main.jpg",
        galleryImages=[
            "/images/projects/residential-1.jpg",
            "/images/projects/residential-2.jpg",
        ],
        completionDate=_at(2023, 7, 5),
        createdAt=_at(2023, 6, 1),
    ),
]

SAMPLE_TESTIMONIALS = [
    Testimonial(
        id="1",
        name="John Smith",
        position="CEO",
        company="TechCorp",
        content="The LED installation transformed our office space. Energy costs are down and employee satisfaction is up!",
        featured=True,
        createdAt=_at(2023, 5, 10),
    ),
    Testimonial(
        id="2",
        name="Sarah Johnson",
        position="Store Manager",
        company="Retail Solutions",
        content="LuminaTech LED provided exceptional service from consultation to installation. Our products look amazing under the new lighting.",
        featured=True,
        createdAt=_at(2023, 5, 15),
    ),
    Testimonial(
        id="3",
        name="Michael Brown",
        position="Facilities Director",
        company="Corporate Offices Inc.",
        content="The energy savings from our LED retrofit has exceeded our expectations. The project paid for itself in just 14 months.",
        featured=False,
        createdAt=_at(2023, 5, 20),
    ),
    Testimonial(
        id="4",
        name="Emily Davis",
        position="Restaurant Owner",
        company="Fine Dining Experience",
        content="The ambient lighting created the perfect atmosphere for our restaurant. Our customers love it!",
        featured=False,
        createdAt=_at(2023, 5, 25),
    ),
]

SAMPLE_INQUIRIES = [
    Inquiry(
        id="inq-1",
        name="John Smith",
        email="john.smith@example.com",
        phone="555-123-4567",
        message="I need LED lighting for my new office building. Can you provide a quote?",
        status="new",
        createdAt=_at(2023, 7, 1),
    ),
    Inquiry(
        id="inq-2",
        name="Sarah Johnson",
        email="sarah.j@example.com",
        phone="555-987-6543",
        message="Looking for outdoor LED solutions for a residential project.",
        status="in-progress",
        createdAt=_at(2023, 6, 28),
    ),
    Inquiry(
        id="inq-3",
        name="Michael Brown",
        email="mbrown@example.com",
        message="Need information about your smart lighting systems for a hotel renovation.",
        status="completed",
        createdAt=_at(2023, 6, 23),
    ),
    Inquiry(
        id="inq-4",
        name="Emily Davis",
        email="emily.davis@example.com",
        phone="555-555-5555",
        message="Interested in energy-efficient lighting for a retail store. Please contact me with options.",
        status="new",
        createdAt=_at(2023, 7, 2),
    ),
    Inquiry(
        id="inq-5",
        name="Robert Wilson",
        email="rwilson@example.com",
        message="Looking for custom LED solutions for an art installation.",
        status="in-progress",
        createdAt=_at(2023, 6, 26),
    ),
]


class SeedResult(BaseModel):
    """Records written per collection by ``seed_store``."""

    written: dict[str, int] = Field(default_factory=dict)
    skipped: list[str] = Field(default_factory=list)


async def seed_store(store: KeyValueStore, overwrite: bool = False) -> SeedResult:
    """Write the sample records and sync the portfolio cache.

    Args:
        store: Keyed store to fill.
        overwrite: Replace collections that already hold records.

    Returns:
        ``SeedResult`` naming what was written and what was skipped.
    """
    result = SeedResult()
    plan: list[tuple[str, CollectionRepository, list]] = [
        ("projects", ProjectRepository(store), SAMPLE_PROJECTS),
        ("testimonials", TestimonialRepository(store), SAMPLE_TESTIMONIALS),
        ("inquiries", InquiryRepository(store), SAMPLE_INQUIRIES),
    ]
    for name, repo, records in plan:
        if not overwrite and await repo.list_all():
            logger.info(f"Skipping {name}: collection is not empty")
            result.skipped.append(name)
            continue
        await repo.save_all([r.model_copy(deep=True) for r in records])
        result.written[name] = len(records)

    await PortfolioSync(store).sync()
    return result
