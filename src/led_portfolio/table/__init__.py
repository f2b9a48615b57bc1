"""Generic list view: column/action descriptors, state, and rendering.

Usage:
    from led_portfolio.table import DataTable, FieldColumn, ComputedColumn, Action
    from led_portfolio.table import render_table
"""

from led_portfolio.table.console import render_pagination, render_table
from led_portfolio.table.models import (
    Action,
    Column,
    ComputedColumn,
    FieldColumn,
    HeaderCell,
    PaginationView,
    RowAction,
    TableRow,
    TableView,
)
from led_portfolio.table.pagination import ELLIPSIS, page_numbers
from led_portfolio.table.view import DataTable

__all__ = [
    "DataTable",
    "FieldColumn",
    "ComputedColumn",
    "Column",
    "Action",
    "HeaderCell",
    "RowAction",
    "TableRow",
    "TableView",
    "PaginationView",
    "ELLIPSIS",
    "page_numbers",
    "render_table",
    "render_pagination",
]
