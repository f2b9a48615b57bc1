"""Command-line back office for the LED portfolio store.

Provides list views for projects, testimonials and inquiries, project
deletion, seeding, and a manual portfolio sync.

Usage:
    led-portfolio profiles
    led-portfolio --profile local seed
    led-portfolio projects --search office --sort title --desc --page 2
    led-portfolio delete-project 3 --yes
    LED_STORE_PROFILE=prod led-portfolio sync
    led-portfolio portfolio corporate-office
    led-portfolio settings general --set siteName="Bright LED Co"

Commands:
    profiles        - List the store profiles defined in site.toml
    seed            - Write sample records into empty collections
    projects        - List admin projects
    testimonials    - List testimonials
    inquiries       - List contact-form inquiries
    delete-project  - Delete one project and re-sync the portfolio
    sync            - Rebuild the portfolio cache from the admin projects
    portfolio       - Show the projects the public portfolio serves
    settings        - Show or update the general, email or social settings
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Confirm
from rich.table import Table

from led_portfolio.adapters.base import KeyValueStore
from led_portfolio.admin import InquiryAdmin, ProjectAdmin, TestimonialAdmin
from led_portfolio.config.loader import load_site_config
from led_portfolio.config.models import SiteConfig
from led_portfolio.errors import ProfileNotFoundError, RecordNotFoundError
from led_portfolio.factory import DEFAULT_ENV_PREFIX, get_active_profile_name, get_store
from led_portfolio.repositories import SETTINGS_SECTIONS, SettingsRepository
from led_portfolio.seed import seed_store
from led_portfolio.sync import PortfolioSync
from led_portfolio.table import (
    ComputedColumn,
    DataTable,
    FieldColumn,
    render_pagination,
    render_table,
)

console = Console()

PROJECT_SORT_FIELDS = ("title", "category", "completion_date", "created_at")


# ============================================================================
# Helpers
# ============================================================================


def _load_config(args: argparse.Namespace) -> SiteConfig | None:
    config_path = Path(args.config) if getattr(args, "config", None) else None
    try:
        return load_site_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return None


def _open_store(args: argparse.Namespace) -> tuple[SiteConfig, KeyValueStore] | None:
    """Load site.toml and build the store for the selected profile.

    Prints the problem and returns ``None`` when either step fails.
    """
    config = _load_config(args)
    if config is None:
        return None
    try:
        store = get_store(
            config,
            profile_name=getattr(args, "profile", None),
            env_prefix=getattr(args, "env_prefix", DEFAULT_ENV_PREFIX),
        )
    except ProfileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        return None
    except ImportError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("[dim]Install the extra:[/dim] [cyan]pip install led-portfolio[supabase][/cyan]")
        return None
    return config, store


def _print_table(table: DataTable, title: str) -> None:
    view = table.render()
    console.print(render_table(view, title=title))
    if view.pagination is not None:
        console.print(render_pagination(view.pagination))


def _featured_mark(record) -> str:
    return "[yellow]★[/yellow]" if record.featured else ""


# ============================================================================
# Async command implementations
# ============================================================================


async def _async_seed(args: argparse.Namespace) -> int:
    """Async implementation for seed command.

    Returns:
        0 on success, 1 if the store could not be opened.
    """
    opened = _open_store(args)
    if opened is None:
        return 1
    _, store = opened
    try:
        result = await seed_store(store, overwrite=args.overwrite)
    finally:
        await store.close()

    for name, count in result.written.items():
        console.print(f"[bold green]v[/bold green] {name}: wrote {count} records")
    for name in result.skipped:
        console.print(
            f"[yellow]-[/yellow] {name}: already has records "
            f"[dim](use --overwrite to replace)[/dim]"
        )
    return 0


async def _async_projects(args: argparse.Namespace) -> int:
    """Async implementation for projects command.

    Returns:
        0 on success, 1 if the store could not be opened.
    """
    opened = _open_store(args)
    if opened is None:
        return 1
    config, store = opened
    try:
        records = await ProjectAdmin(store).search(args.search or "")
    finally:
        await store.close()

    table = DataTable(
        data=records,
        columns=[
            FieldColumn(header="Title", field="title", sortable=True),
            FieldColumn(header="Category", field="category", sortable=True),
            ComputedColumn(header="Featured", render=_featured_mark),
            FieldColumn(header="Completed", field="completion_date", sortable=True),
            FieldColumn(header="Created", field="created_at", sortable=True),
        ],
        key_field="id",
        search_term=args.search or "",
        items_per_page=args.per_page or config.site.items_per_page,
        empty_message="No projects found",
        view_path="/admin/projects",
        edit_path="/admin/projects",
    )
    if args.sort:
        table.sort_by(args.sort)
        if args.desc:
            table.sort_by(args.sort)
    table.go_to_page(args.page)
    _print_table(table, "Projects")
    return 0


async def _async_testimonials(args: argparse.Namespace) -> int:
    """Async implementation for testimonials command."""
    opened = _open_store(args)
    if opened is None:
        return 1
    config, store = opened
    try:
        records = await TestimonialAdmin(store).list_all()
    finally:
        await store.close()

    table = DataTable(
        data=records,
        columns=[
            FieldColumn(header="Name", field="name", sortable=True),
            FieldColumn(header="Company", field="company", sortable=True),
            FieldColumn(header="Rating", field="rating", sortable=True),
            ComputedColumn(header="Featured", render=_featured_mark),
            FieldColumn(header="Created", field="created_at", sortable=True),
        ],
        key_field="id",
        items_per_page=config.site.items_per_page,
        empty_message="No testimonials found",
        edit_path="/admin/testimonials",
    )
    table.sort_by("created_at")
    table.sort_by("created_at")
    _print_table(table, "Testimonials")
    return 0


async def _async_inquiries(args: argparse.Namespace) -> int:
    """Async implementation for inquiries command."""
    opened = _open_store(args)
    if opened is None:
        return 1
    config, store = opened
    try:
        records = await InquiryAdmin(store).list_all()
    finally:
        await store.close()
    if args.status:
        records = [r for r in records if r.status == args.status]

    table = DataTable(
        data=records,
        columns=[
            FieldColumn(header="Name", field="name", sortable=True),
            FieldColumn(header="Email", field="email"),
            FieldColumn(header="Status", field="status", sortable=True),
            FieldColumn(header="Received", field="created_at", sortable=True),
        ],
        key_field="id",
        items_per_page=config.site.items_per_page,
        empty_message="No inquiries found",
        view_path="/admin/inquiries",
    )
    table.sort_by("created_at")
    table.sort_by("created_at")
    _print_table(table, "Inquiries")
    return 0


async def _async_delete_project(args: argparse.Namespace) -> int:
    """Async implementation for delete-project command.

    Runs the list view's delete flow, so the confirmation prompt and the
    failure alert match the admin pages.

    Returns:
        0 if the project was deleted, 1 otherwise.
    """
    opened = _open_store(args)
    if opened is None:
        return 1
    _, store = opened
    admin = ProjectAdmin(store)
    try:
        try:
            project = await admin.get(args.project_id)
        except RecordNotFoundError as e:
            console.print(f"[red]Error: {e}[/red]")
            return 1

        table = DataTable(
            data=[project],
            columns=[FieldColumn(header="Title", field="title")],
            key_field="id",
            on_delete=lambda p: admin.delete(p.id),
            confirm=(lambda message: True) if args.yes else (lambda message: Confirm.ask(message, console=console)),
        )
        console.print(render_table(table.render(), title="Delete project"))
        deleted = await table.delete(project)
    finally:
        await store.close()

    if deleted:
        console.print(f"[bold green]v[/bold green] Deleted project: {project.title}")
        return 0
    return 1


async def _async_sync(args: argparse.Namespace) -> int:
    """Async implementation for sync command.

    Returns:
        0 if the sync succeeded or had nothing to do, 1 on failure.
    """
    opened = _open_store(args)
    if opened is None:
        return 1
    _, store = opened
    try:
        result = await PortfolioSync(store).sync()
    finally:
        await store.close()

    if not result.success:
        console.print("[bold red]x[/bold red] Portfolio sync failed")
        for error in result.errors:
            console.print(f"  [red]{error}[/red]")
        return 1
    if result.skipped:
        console.print("[yellow]No admin projects to sync; portfolio cache left unchanged.[/yellow]")
        return 0
    console.print(f"[bold green]v[/bold green] Synced {result.synced_count} projects to the portfolio")
    return 0


async def _async_portfolio(args: argparse.Namespace) -> int:
    """Async implementation for portfolio command.

    Returns:
        0 on success, 1 if the store could not be opened or the id is unknown.
    """
    opened = _open_store(args)
    if opened is None:
        return 1
    config, store = opened
    bridge = PortfolioSync(store, fallback=config.site.portfolio_fallback)
    try:
        if args.project_id:
            project = await bridge.get_project(args.project_id)
            projects = []
        else:
            project = None
            projects = await bridge.get_projected()
    finally:
        await store.close()

    if args.project_id:
        if project is None:
            console.print(f"[red]Error: Portfolio project not found: {args.project_id}[/red]")
            return 1
        console.print(f"[bold cyan]{project.title}[/bold cyan]  [dim]{project.category} | {project.location}[/dim]")
        console.print(f"\n{project.description}")
        for heading, body in (
            ("Challenge", project.challenge),
            ("Solution", project.solution),
            ("Results", project.results),
        ):
            console.print(f"\n[bold]{heading}[/bold]\n{body}")
        if project.gallery_images:
            console.print("\n[bold]Gallery[/bold]")
            for url in project.gallery_images:
                console.print(f"  {url}")
        return 0

    table = DataTable(
        data=projects,
        columns=[
            FieldColumn(header="Id", field="id"),
            FieldColumn(header="Title", field="title"),
            FieldColumn(header="Category", field="category"),
            FieldColumn(header="Location", field="location"),
            ComputedColumn(header="Images", render=lambda p: str(len(p.gallery_images))),
        ],
        key_field="id",
        pagination=False,
        empty_message="No portfolio projects",
    )
    _print_table(table, "Portfolio")
    return 0


async def _async_settings(args: argparse.Namespace) -> int:
    """Async implementation for settings command.

    Returns:
        0 on success, 1 if the store could not be opened or a --set value
        is malformed.
    """
    updates: dict[str, str] = {}
    for item in args.set or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            console.print(f"[red]Error: Expected KEY=VALUE, got '{item}'[/red]")
            return 1
        updates[key] = value

    opened = _open_store(args)
    if opened is None:
        return 1
    _, store = opened
    repo = SettingsRepository(store)
    try:
        if updates:
            values = await repo.update(args.section, updates)
        else:
            values = await repo.get(args.section)
    finally:
        await store.close()

    if updates:
        console.print(f"[bold green]v[/bold green] Updated {len(updates)} {args.section} setting(s)")

    table = Table(title=f"{args.section.capitalize()} Settings", show_header=True, header_style="bold")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in sorted(values.items()):
        table.add_row(key, str(value))
    console.print(table)
    if not values:
        console.print("[dim]No settings saved for this section.[/dim]")
    return 0


# ============================================================================
# Sync command wrappers
# ============================================================================


def cmd_profiles(args: argparse.Namespace) -> int:
    """List store profiles from site.toml.

    Returns:
        0 on success, 1 if site.toml cannot be loaded.
    """
    config = _load_config(args)
    if config is None:
        return 1

    try:
        current = get_active_profile_name(
            config,
            getattr(args, "profile", None),
            getattr(args, "env_prefix", DEFAULT_ENV_PREFIX),
        )
    except ProfileNotFoundError:
        current = None

    table = Table(title="Store Profiles", show_header=True, header_style="bold")
    table.add_column("", width=2)
    table.add_column("Profile")
    table.add_column("Provider")
    table.add_column("Description")

    for name, profile in config.profiles.items():
        marker = "[bold green]*[/bold green]" if name == current else " "
        name_style = "bold cyan" if name == current else ""
        table.add_row(
            marker,
            f"[{name_style}]{name}[/{name_style}]" if name_style else name,
            profile.provider,
            profile.description or "",
        )

    console.print(table)

    if current:
        console.print("\n[bold green]*[/bold green] = active profile")

    return 0


def cmd_seed(args: argparse.Namespace) -> int:
    """Write sample records. Wraps the async implementation with ``asyncio.run()``."""
    return asyncio.run(_async_seed(args))


def cmd_projects(args: argparse.Namespace) -> int:
    """List admin projects. Wraps the async implementation with ``asyncio.run()``."""
    return asyncio.run(_async_projects(args))


def cmd_testimonials(args: argparse.Namespace) -> int:
    return asyncio.run(_async_testimonials(args))


def cmd_inquiries(args: argparse.Namespace) -> int:
    return asyncio.run(_async_inquiries(args))


def cmd_delete_project(args: argparse.Namespace) -> int:
    """Delete one project. Wraps the async implementation with ``asyncio.run()``."""
    return asyncio.run(_async_delete_project(args))


def cmd_sync(args: argparse.Namespace) -> int:
    """Rebuild the portfolio cache. Wraps the async implementation with ``asyncio.run()``."""
    return asyncio.run(_async_sync(args))


def cmd_portfolio(args: argparse.Namespace) -> int:
    return asyncio.run(_async_portfolio(args))


def cmd_settings(args: argparse.Namespace) -> int:
    """Show or update one settings section. Wraps the async implementation with ``asyncio.run()``."""
    return asyncio.run(_async_settings(args))


# ============================================================================
# Main entry point
# ============================================================================


def configure_logging(verbose: bool = False) -> None:
    """Route ``logging`` through rich on stderr; DEBUG when ``verbose``."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the ``led-portfolio`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="led-portfolio",
        description="LED contractor portfolio back office",
    )

    # Global options
    parser.add_argument(
        "--profile",
        "-p",
        default=None,
        help="Store profile from site.toml (overrides LED_STORE_PROFILE)",
    )
    parser.add_argument(
        "--env-prefix",
        default=DEFAULT_ENV_PREFIX,
        help=(
            "Prefix for environment variable lookup "
            "(e.g., --env-prefix APP_ reads APP_STORE_PROFILE)"
        ),
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Path to site.toml (default: ./site.toml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # profiles command
    p_profiles = subparsers.add_parser("profiles", help="List available profiles")
    p_profiles.set_defaults(func=cmd_profiles)

    # seed command
    p_seed = subparsers.add_parser("seed", help="Write sample records into empty collections")
    p_seed.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace collections that already hold records",
    )
    p_seed.set_defaults(func=cmd_seed)

    # projects command
    p_projects = subparsers.add_parser("projects", help="List admin projects")
    p_projects.add_argument("--search", "-s", default="", help="Filter by title, description or category")
    p_projects.add_argument("--sort", choices=PROJECT_SORT_FIELDS, help="Sort column")
    p_projects.add_argument("--desc", action="store_true", help="Sort descending")
    p_projects.add_argument("--page", type=int, default=1, help="Page number (1-based)")
    p_projects.add_argument("--per-page", type=int, default=None, help="Rows per page (default: site.items_per_page)")
    p_projects.set_defaults(func=cmd_projects)

    # testimonials command
    p_testimonials = subparsers.add_parser("testimonials", help="List testimonials")
    p_testimonials.set_defaults(func=cmd_testimonials)

    # inquiries command
    p_inquiries = subparsers.add_parser("inquiries", help="List contact-form inquiries")
    p_inquiries.add_argument(
        "--status",
        choices=("new", "in-progress", "completed", "archived"),
        help="Only show inquiries with this status",
    )
    p_inquiries.set_defaults(func=cmd_inquiries)

    # delete-project command
    p_delete = subparsers.add_parser("delete-project", help="Delete a project and re-sync the portfolio")
    p_delete.add_argument("project_id", help="Id of the project to delete")
    p_delete.add_argument("--yes", "-y", action="store_true", help="Skip the confirmation prompt")
    p_delete.set_defaults(func=cmd_delete_project)

    # sync command
    p_sync = subparsers.add_parser("sync", help="Rebuild the portfolio cache from admin projects")
    p_sync.set_defaults(func=cmd_sync)

    # portfolio command
    p_portfolio = subparsers.add_parser("portfolio", help="Show the public portfolio")
    p_portfolio.add_argument("project_id", nargs="?", default=None, help="Show one portfolio project")
    p_portfolio.set_defaults(func=cmd_portfolio)

    # settings command
    p_settings = subparsers.add_parser("settings", help="Show or update site settings")
    p_settings.add_argument("section", choices=SETTINGS_SECTIONS, help="Settings section")
    p_settings.add_argument(
        "--set",
        action="append",
        metavar="KEY=VALUE",
        help="Store a value (repeatable)",
    )
    p_settings.set_defaults(func=cmd_settings)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Parses command line arguments and dispatches to appropriate handler.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
