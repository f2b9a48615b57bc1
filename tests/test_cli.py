"""Tests for the led-portfolio command line."""

import asyncio
import logging
import pathlib
import textwrap
from unittest.mock import patch

import pytest
from rich.logging import RichHandler

from led_portfolio.adapters.json_file import JsonFileStore
from led_portfolio.cli import build_parser, configure_logging, main
from led_portfolio.repositories import PortfolioCacheRepository, ProjectRepository, SettingsRepository


@pytest.fixture
def site(tmp_path: pathlib.Path) -> pathlib.Path:
    """site.toml with a single JSON-file profile."""
    config = tmp_path / "site.toml"
    config.write_text(
        textwrap.dedent(
            f"""
            [profiles.local]
            provider = "json"
            path = "{(tmp_path / 'store.json').as_posix()}"
            description = "Test store"

            [site]
            items_per_page = 2
            """
        )
    )
    return config


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    """Ignore any ambient profile selection and leave root logging alone."""
    monkeypatch.delenv("LED_STORE_PROFILE", raising=False)
    with patch("led_portfolio.cli.configure_logging"):
        yield


def _run(site: pathlib.Path, *argv: str) -> int:
    return main(["--config", str(site), *argv])


def _store(site: pathlib.Path) -> JsonFileStore:
    return JsonFileStore(site.parent / "store.json")


# ============================================================================
# Test: Parser
# ============================================================================


class TestParser:
    """Verify the argument parser."""

    def test_globals_and_defaults(self) -> None:
        args = build_parser().parse_args(["projects"])
        assert args.profile is None
        assert args.env_prefix == "LED_"
        assert args.page == 1
        assert args.per_page is None

    def test_sort_choices(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["projects", "--sort", "price"])

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


# ============================================================================
# Test: Commands
# ============================================================================


class TestCommands:
    """Drive each command against a JSON file store."""

    def test_missing_config(self, tmp_path: pathlib.Path, capsys) -> None:
        assert main(["--config", str(tmp_path / "absent.toml"), "sync"]) == 1
        assert "Site config not found" in capsys.readouterr().out

    def test_unknown_profile(self, site: pathlib.Path, capsys) -> None:
        assert main(["--config", str(site), "--profile", "nope", "projects"]) == 1
        assert "not found" in capsys.readouterr().out

    def test_profiles(self, site: pathlib.Path, capsys) -> None:
        assert _run(site, "profiles") == 0
        assert "active profile" in capsys.readouterr().out

    def test_seed_then_list(self, site: pathlib.Path) -> None:
        assert _run(site, "seed") == 0
        projects = asyncio.run(ProjectRepository(_store(site)).list_all())
        assert len(projects) == 4

        assert _run(site, "projects") == 0
        assert _run(site, "projects", "--search", "retail", "--sort", "title", "--desc", "--page", "2") == 0
        assert _run(site, "testimonials") == 0
        assert _run(site, "inquiries", "--status", "new") == 0

    def test_seed_twice_skips(self, site: pathlib.Path, capsys) -> None:
        _run(site, "seed")
        capsys.readouterr()
        assert _run(site, "seed") == 0
        assert "already has records" in capsys.readouterr().out

    def test_sync(self, site: pathlib.Path, capsys) -> None:
        _run(site, "seed")
        capsys.readouterr()
        assert _run(site, "sync") == 0
        assert "Synced 4 projects" in capsys.readouterr().out

    def test_sync_with_nothing_to_do(self, site: pathlib.Path, capsys) -> None:
        assert _run(site, "sync") == 0
        assert "No admin projects to sync" in capsys.readouterr().out

    def test_delete_project_yes(self, site: pathlib.Path) -> None:
        _run(site, "seed")
        assert _run(site, "delete-project", "3", "--yes") == 0

        store = _store(site)
        assert [p.id for p in asyncio.run(ProjectRepository(store).list_all())] == ["1", "2", "4"]
        cached = asyncio.run(PortfolioCacheRepository(store).read())
        assert "restaurant-ambient-lighting" not in [p.id for p in cached]

    def test_delete_project_declined(self, site: pathlib.Path) -> None:
        _run(site, "seed")
        with patch("led_portfolio.cli.Confirm.ask", return_value=False):
            assert _run(site, "delete-project", "3") == 1
        assert len(asyncio.run(ProjectRepository(_store(site)).list_all())) == 4

    def test_delete_unknown_project(self, site: pathlib.Path, capsys) -> None:
        assert _run(site, "delete-project", "999", "--yes") == 1
        assert "Project not found: 999" in capsys.readouterr().out

    def test_portfolio_fallback_and_detail(self, site: pathlib.Path, capsys) -> None:
        assert _run(site, "portfolio") == 0
        assert _run(site, "portfolio", "corporate-office") == 0
        assert "Challenge" in capsys.readouterr().out
        assert _run(site, "portfolio", "unknown-id") == 1

    def test_settings_set_and_show(self, site: pathlib.Path, capsys) -> None:
        assert _run(site, "settings", "general", "--set", "siteName=Bright LED", "--set", "phone=555-0100") == 0
        assert "Updated 2 general setting(s)" in capsys.readouterr().out

        saved = asyncio.run(SettingsRepository(_store(site)).get("general"))
        assert saved == {"siteName": "Bright LED", "phone": "555-0100"}

        assert _run(site, "settings", "email") == 0
        assert "No settings saved" in capsys.readouterr().out

    def test_settings_rejects_malformed_pair(self, site: pathlib.Path, capsys) -> None:
        assert _run(site, "settings", "social", "--set", "twitter") == 1
        assert "Expected KEY=VALUE" in capsys.readouterr().out


class TestConfigureLogging:
    """Verify logging goes through rich."""

    def test_verbose_sets_debug(self) -> None:
        root = logging.getLogger()
        saved_level, saved_handlers = root.level, root.handlers[:]
        try:
            configure_logging(True)
            assert root.level == logging.DEBUG
            assert any(isinstance(h, RichHandler) for h in root.handlers)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
