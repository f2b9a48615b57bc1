"""led-portfolio: Data layer for an LED contractor's portfolio site and back office.

Provides async keyed-store adapters, record models and repositories, admin
mutation handlers, the one-way sync from admin projects to the public
portfolio cache, and a generic sortable/paginated list view.

Usage:
    from led_portfolio import get_store, load_site_config, ProjectAdmin
    from led_portfolio import PortfolioSync, DataTable, FieldColumn
    from led_portfolio import Project, PortfolioProject
"""

__version__ = "0.1.0"

# Adapters
from led_portfolio.adapters.base import KeyValueStore
from led_portfolio.adapters.json_file import JsonFileStore
from led_portfolio.adapters.memory import InMemoryStore
from led_portfolio.adapters.sql import AsyncSqlStore

# Config
from led_portfolio.config.loader import load_site_config
from led_portfolio.config.models import SiteConfig, SiteSettings, StoreProfile

# Errors
from led_portfolio.errors import (
    LedPortfolioError,
    ProfileNotFoundError,
    RecordNotFoundError,
    ValidationFailed,
)

# Factory
from led_portfolio.factory import create_store, get_store, resolve_url

# Models
from led_portfolio.models import GalleryImage, Inquiry, PortfolioProject, Project, Testimonial

# Admin, sync and public queries
from led_portfolio.admin import InquiryAdmin, ProjectAdmin, TestimonialAdmin, submit_inquiry
from led_portfolio.public import get_public_project, list_public_projects
from led_portfolio.sync import PortfolioSync, SyncResult

# List view
from led_portfolio.table import Action, ComputedColumn, DataTable, FieldColumn

__all__ = [
    # Adapters
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "AsyncSqlStore",
    # Config
    "load_site_config",
    "SiteConfig",
    "SiteSettings",
    "StoreProfile",
    # Errors
    "LedPortfolioError",
    "ProfileNotFoundError",
    "RecordNotFoundError",
    "ValidationFailed",
    # Factory
    "create_store",
    "get_store",
    "resolve_url",
    # Models
    "GalleryImage",
    "Project",
    "Testimonial",
    "Inquiry",
    "PortfolioProject",
    # Admin, sync and public queries
    "ProjectAdmin",
    "TestimonialAdmin",
    "InquiryAdmin",
    "submit_inquiry",
    "PortfolioSync",
    "SyncResult",
    "list_public_projects",
    "get_public_project",
    # List view
    "DataTable",
    "FieldColumn",
    "ComputedColumn",
    "Action",
]

# Optional: AsyncSupabaseStore (only available with supabase extra)
try:
    from led_portfolio.adapters.supabase import AsyncSupabaseStore

    __all__.append("AsyncSupabaseStore")
except ImportError:
    # supabase extra not installed -- AsyncSupabaseStore unavailable
    pass
