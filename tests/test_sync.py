"""Tests for the admin-projects to portfolio-cache sync bridge."""

import asyncio
import logging
from unittest.mock import AsyncMock, patch

from conftest import stored_project
from led_portfolio.adapters.memory import InMemoryStore
from led_portfolio.models import Project
from led_portfolio.repositories import PortfolioCacheRepository, ProjectRepository
from led_portfolio.sync import (
    DEFAULT_PORTFOLIO_PROJECTS,
    PortfolioSync,
    SyncResult,
    project_to_portfolio,
)

CACHE_KEY = PortfolioCacheRepository.storage_key
PROJECTS_KEY = ProjectRepository.storage_key


# ============================================================================
# Test: project_to_portfolio
# ============================================================================


class TestProjectToPortfolio:
    """Verify the pure projection."""

    def test_defaults_fill_missing_narrative(self) -> None:
        project = Project(id="p1", title="T", slug="t", location=None, challenge="")
        portfolio = project_to_portfolio(project)
        assert portfolio.location == "Location not specified"
        assert portfolio.challenge == "Challenge details not available"
        assert portfolio.solution == "Solution details not available"
        assert portfolio.results == "Results details not available"

    def test_id_falls_back_to_project_id(self) -> None:
        """Projects without a slug keep their canonical id."""
        assert project_to_portfolio(Project(id="p9", title="T")).id == "p9"

    def test_gallery_flattened_to_urls(self) -> None:
        project = Project(
            id="p1",
            title="T",
            galleryImages=[{"url": "/1.jpg", "alt": "one"}, "/2.jpg"],
        )
        assert project_to_portfolio(project).gallery_images == ["/1.jpg", "/2.jpg"]

    def test_deterministic(self) -> None:
        project = Project.model_validate(stored_project())
        assert project_to_portfolio(project) == project_to_portfolio(project)


# ============================================================================
# Test: sync()
# ============================================================================


class TestSync:
    """Verify full-replace sync semantics."""

    async def test_example_scenario(self, store: InMemoryStore) -> None:
        """One canonical project projects to the documented cache record."""
        await store.set(PROJECTS_KEY, [stored_project(description="...")])

        result = await PortfolioSync(store).sync()

        assert result == SyncResult(success=True, synced_count=1)
        assert await store.get(CACHE_KEY) == [
            {
                "id": "office-retrofit",
                "title": "Office Retrofit",
                "category": "Commercial",
                "location": "Location not specified",
                "description": "...",
                "challenge": "Challenge details not available",
                "solution": "Solution details not available",
                "results": "Results details not available",
                "imageSrc": "/img/a.jpg",
                "galleryImages": ["/img/b.jpg"],
            }
        ]

    async def test_idempotent(self, store: InMemoryStore) -> None:
        """Two syncs without changes write identical cache contents."""
        await store.set(PROJECTS_KEY, [stored_project(), stored_project(id="p2", slug="second")])
        bridge = PortfolioSync(store)

        await bridge.sync()
        first = store.raw(CACHE_KEY)
        await bridge.sync()
        assert store.raw(CACHE_KEY) == first

    async def test_full_replace_drops_stale_entries(self, store: InMemoryStore) -> None:
        """Cache entries for projects no longer canonical disappear."""
        await store.set(CACHE_KEY, [{"id": "old"}])
        await store.set(PROJECTS_KEY, [stored_project()])
        await PortfolioSync(store).sync()
        assert [p["id"] for p in await store.get(CACHE_KEY)] == ["office-retrofit"]

    async def test_project_with_null_display_fields_is_kept(self, store: InMemoryStore) -> None:
        await store.set(
            PROJECTS_KEY,
            [
                stored_project(),
                stored_project(id="p2", slug="second", description=None, category=None),
            ],
        )

        result = await PortfolioSync(store).sync()

        cached = await store.get(CACHE_KEY)
        assert result.synced_count == 2
        assert [p["id"] for p in cached] == ["office-retrofit", "second"]
        assert cached[1]["description"] == ""
        assert cached[1]["category"] == ""

    async def test_empty_canonical_is_noop(self, store: InMemoryStore) -> None:
        """With no canonical projects the existing cache is untouched."""
        await store.set(CACHE_KEY, [{"id": "kept", "note": "anything"}])
        before = store.raw(CACHE_KEY)

        result = await PortfolioSync(store).sync()

        assert result.success is True
        assert result.skipped is True
        assert store.raw(CACHE_KEY) == before

    async def test_failure_leaves_cache_intact(self, store: InMemoryStore) -> None:
        """A store write failure is reported, not raised, and the old cache survives."""
        await store.set(CACHE_KEY, [{"id": "previous"}])
        await store.set(PROJECTS_KEY, [stored_project()])
        before = store.raw(CACHE_KEY)

        with patch.object(store, "set", AsyncMock(side_effect=RuntimeError("disk full"))):
            result = await PortfolioSync(store).sync()

        assert result.success is False
        assert result.errors == ["disk full"]
        assert store.raw(CACHE_KEY) == before

    async def test_logs_success(self, store: InMemoryStore, caplog) -> None:
        await store.set(PROJECTS_KEY, [stored_project()])
        with caplog.at_level(logging.INFO, logger="led_portfolio.sync"):
            await PortfolioSync(store).sync()
        assert "Projects synced successfully: 1" in caplog.text

    async def test_logs_failure(self, store: InMemoryStore, caplog) -> None:
        await store.set(PROJECTS_KEY, [stored_project()])
        with patch.object(store, "set", AsyncMock(side_effect=RuntimeError("boom"))):
            with caplog.at_level(logging.ERROR, logger="led_portfolio.sync"):
                await PortfolioSync(store).sync()
        assert "Error syncing projects" in caplog.text

    async def test_concurrent_syncs_serialize(self, store: InMemoryStore) -> None:
        """Overlapping syncs on one bridge each see a whole cache."""
        await store.set(PROJECTS_KEY, [stored_project()])
        bridge = PortfolioSync(store)

        results = await asyncio.gather(bridge.sync(), bridge.sync(), bridge.sync())

        assert all(r.success and r.synced_count == 1 for r in results)
        assert len(await store.get(CACHE_KEY)) == 1


# ============================================================================
# Test: get_projected()
# ============================================================================


class TestGetProjected:
    """Verify cache-first reads with sync and built-in fallback."""

    async def test_fallback_defaults(self, store: InMemoryStore) -> None:
        """Nothing stored at all: the built-in examples are served."""
        projects = await PortfolioSync(store).get_projected()
        assert projects == list(DEFAULT_PORTFOLIO_PROJECTS)
        assert [p.id for p in projects] == ["corporate-office", "luxury-retail"]

    async def test_fallback_returns_copies(self, store: InMemoryStore) -> None:
        projects = await PortfolioSync(store).get_projected()
        projects[0].gallery_images.append("/mutated.jpg")
        assert "/mutated.jpg" not in DEFAULT_PORTFOLIO_PROJECTS[0].gallery_images

    async def test_fallback_disabled(self, store: InMemoryStore) -> None:
        assert await PortfolioSync(store, fallback=False).get_projected() == []

    async def test_syncs_when_cache_empty(self, store: InMemoryStore) -> None:
        """An empty cache with canonical data triggers one sync."""
        await store.set(PROJECTS_KEY, [stored_project()])
        projects = await PortfolioSync(store).get_projected()
        assert [p.id for p in projects] == ["office-retrofit"]
        assert await store.get(CACHE_KEY) is not None

    async def test_reads_cache_without_syncing(self, store: InMemoryStore) -> None:
        """A populated cache is returned as is, even if canonical data differs."""
        await PortfolioCacheRepository(store).overwrite(
            [DEFAULT_PORTFOLIO_PROJECTS[1]]
        )
        await store.set(PROJECTS_KEY, [stored_project()])
        bridge = PortfolioSync(store)

        with patch.object(bridge, "sync", AsyncMock()) as mock_sync:
            projects = await bridge.get_projected()

        mock_sync.assert_not_awaited()
        assert [p.id for p in projects] == ["luxury-retail"]

    async def test_get_project_by_public_id(self, store: InMemoryStore) -> None:
        await store.set(PROJECTS_KEY, [stored_project()])
        bridge = PortfolioSync(store)
        assert (await bridge.get_project("office-retrofit")).title == "Office Retrofit"
        assert await bridge.get_project("p1") is None
