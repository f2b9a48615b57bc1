"""Generic sortable, paginated list view used by every admin list page.

``DataTable`` holds the local UI state of one list (sort column and
direction, current page, search box text, rows with a delete in flight) and
turns the caller's records into a ``TableView``.  It never owns the record
list: search filtering and removal after a successful delete are the
caller's job, done by passing new data through ``set_data()``.

Usage:
    from led_portfolio.table import DataTable, FieldColumn, ComputedColumn

    table = DataTable(
        data=projects,
        columns=[
            FieldColumn(header="Title", field="title", sortable=True),
            ComputedColumn(header="Featured", render=lambda p: "★" if p.featured else ""),
        ],
        key_field="id",
        edit_path="/admin/projects",
        on_delete=lambda p: admin.delete(p.id),
        confirm=lambda message: True,
    )
    table.sort_by("title")
    view = table.render()
"""

import functools
import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import date, datetime
from typing import Any

from rich.console import Console
from rich.prompt import Confirm

from led_portfolio.table.models import (
    Action,
    Column,
    ComputedColumn,
    FieldColumn,
    HeaderCell,
    PaginationView,
    RowAction,
    SortDirection,
    TableRow,
    TableView,
    get_field,
)
from led_portfolio.table.pagination import clamp_page, page_numbers, page_slice, total_pages

logger = logging.getLogger(__name__)

console = Console(stderr=True)

DELETE_CONFIRMATION = "Are you sure you want to delete this item? This action cannot be undone."
DELETE_FAILED = "Failed to delete item. Please try again."
ACTION_FAILED = "Action failed. Please try again."

VIEW_STYLE = "text-blue-600 hover:text-blue-900"
EDIT_STYLE = "text-indigo-600 hover:text-indigo-900"
DELETE_STYLE = "text-red-600 hover:text-red-900"


def _ask_confirm(message: str) -> bool:
    return Confirm.ask(message, console=console)


def _show_alert(message: str) -> None:
    console.print(f"[bold red]{message}[/bold red]")


def compare_values(a: Any, b: Any) -> int:
    """Natural-order comparator: ``-1``, ``0`` or ``1``.

    ``None`` sorts before any value.  Values of types that cannot be
    compared with ``<`` fall back to comparing their string forms.
    """
    if a == b:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    try:
        return -1 if a < b else 1
    except TypeError:
        return -1 if str(a) < str(b) else 1


def format_cell(value: Any) -> str:
    """Display text for a field value.

    ``None`` -> ``"-"``, booleans -> ``"Yes"``/``"No"``, dates -> ISO date.
    """
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


async def _call(handler: Callable[[Any], Any], record: Any) -> Any:
    result = handler(record)
    if inspect.isawaitable(result):
        result = await result
    return result


class DataTable:
    """Sort/paginate/action state for one list of records.

    Args:
        data: Records to show (mappings or attribute-style objects).  Already
            filtered by the caller's search.
        columns: Column descriptors, in display order.
        key_field: Field holding each record's unique key.
        actions: Custom row actions, shown after View/Edit/Delete.
        search_term: The caller's current search term.
        on_search: Called with the new text when the search box changes.
            The search box is shown only when this is set.
        pagination: Split rows into pages.
        items_per_page: Page size.
        empty_message: Text of the single row shown when nothing is visible.
        loading: Show a loading state instead of the table body.
        view_path: Base path for "View" links (``{view_path}/{key}``).
        edit_path: Base path for "Edit" links (``{edit_path}/{key}/edit``).
        on_delete: Delete handler (sync or async).  Enables "Delete".
        confirm: Asks the user to confirm a delete; ``True`` proceeds.
            Defaults to an interactive console prompt.
        alert: Shows a failure message to the user.  Defaults to printing
            to stderr.
    """

    def __init__(
        self,
        data: Sequence[Any],
        columns: Sequence[Column],
        key_field: str,
        actions: Sequence[Action] = (),
        search_term: str = "",
        on_search: Callable[[str], None] | None = None,
        pagination: bool = True,
        items_per_page: int = 10,
        empty_message: str = "No data found",
        loading: bool = False,
        view_path: str | None = None,
        edit_path: str | None = None,
        on_delete: Callable[[Any], Awaitable[None] | None] | None = None,
        confirm: Callable[[str], bool] = _ask_confirm,
        alert: Callable[[str], None] = _show_alert,
    ) -> None:
        if items_per_page < 1:
            raise ValueError("items_per_page must be at least 1")

        self.data: list[Any] = list(data)
        self.columns: list[Column] = list(columns)
        self.key_field = key_field
        self.actions: list[Action] = list(actions)
        self.pagination = pagination
        self.items_per_page = items_per_page
        self.empty_message = empty_message
        self.loading = loading
        self.view_path = view_path
        self.edit_path = edit_path
        self.on_delete = on_delete
        self.on_search = on_search
        self._confirm = confirm
        self._alert = alert

        self.search_term = search_term
        self.search_text = search_term
        self.current_page = 1
        self.sort_field: str | None = None
        self.sort_direction: SortDirection = "asc"
        self._deleting: set[str] = set()

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def set_data(self, data: Sequence[Any], search_term: str | None = None) -> None:
        """Replace the records, optionally together with the search term.

        The current page is kept (clamped to the new page count) unless the
        search term changed, which resets it to 1.
        """
        self.data = list(data)
        if search_term is not None:
            self.set_search_term(search_term)
        self.current_page = clamp_page(self.current_page, self.total_pages)

    def set_search_term(self, term: str) -> None:
        """Record the caller's search term; a change resets to page 1."""
        if term != self.search_term:
            self.search_term = term
            self.current_page = 1

    def type_search(self, text: str) -> None:
        """Handle typing in the search box: keep the text, notify the caller."""
        self.search_text = text
        if self.on_search is not None:
            self.on_search(text)

    def sort_by(self, field: str) -> bool:
        """Handle a click on the header of ``field``.

        Clicking the active sort column flips the direction; clicking another
        sortable column makes it active in ascending order.  Fields without a
        sortable ``FieldColumn`` are ignored.

        Returns:
            ``True`` if the sort state changed.
        """
        if field not in self.sortable_fields:
            return False
        if self.sort_field == field:
            self.sort_direction = "desc" if self.sort_direction == "asc" else "asc"
        else:
            self.sort_field = field
            self.sort_direction = "asc"
        return True

    def go_to_page(self, page: int) -> int:
        """Move to ``page``, clamped to ``[1, total_pages]``."""
        self.current_page = clamp_page(page, self.total_pages)
        return self.current_page

    def next_page(self) -> int:
        return self.go_to_page(self.current_page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self.current_page - 1)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def sortable_fields(self) -> set[str]:
        return {
            c.field for c in self.columns
            if isinstance(c, FieldColumn) and c.sortable
        }

    @property
    def total_pages(self) -> int:
        if not self.pagination:
            return 1
        return total_pages(len(self.data), self.items_per_page)

    @property
    def show_actions(self) -> bool:
        return bool(self.actions or self.view_path or self.edit_path or self.on_delete)

    def row_key(self, record: Any) -> str:
        return str(get_field(record, self.key_field))

    def is_deleting(self, record: Any) -> bool:
        return self.row_key(record) in self._deleting

    def sorted_records(self) -> list[Any]:
        """All records in the current sort order (stable)."""
        records = list(self.data)
        if self.sort_field is None:
            return records

        field = self.sort_field
        sign = 1 if self.sort_direction == "asc" else -1

        def compare(a: Any, b: Any) -> int:
            return sign * compare_values(get_field(a, field), get_field(b, field))

        return sorted(records, key=functools.cmp_to_key(compare))

    def visible_records(self) -> list[Any]:
        """Records on the current page, in sort order."""
        records = self.sorted_records()
        if self.pagination:
            records = page_slice(records, self.current_page, self.items_per_page)
        return records

    def page_numbers(self) -> list[int | str]:
        return page_numbers(self.current_page, self.total_pages)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _headers(self) -> list[HeaderCell]:
        headers: list[HeaderCell] = []
        for column in self.columns:
            if isinstance(column, ComputedColumn):
                headers.append(HeaderCell(header=column.header))
                continue
            active = column.sortable and self.sort_field == column.field
            headers.append(
                HeaderCell(
                    header=column.header,
                    sortable=column.sortable,
                    field=column.field,
                    sort_direction=self.sort_direction if active else None,
                )
            )
        return headers

    def _cell(self, record: Any, column: Column) -> Any:
        if isinstance(column, ComputedColumn):
            return column.render(record)
        return format_cell(get_field(record, column.field))

    def _row_actions(self, record: Any) -> list[RowAction]:
        key = self.row_key(record)
        controls: list[RowAction] = []

        if self.view_path:
            controls.append(
                RowAction(kind="view", label="View", href=f"{self.view_path}/{key}", style=VIEW_STYLE)
            )
        if self.edit_path:
            controls.append(
                RowAction(kind="edit", label="Edit", href=f"{self.edit_path}/{key}/edit", style=EDIT_STYLE)
            )
        if self.on_delete is not None:
            busy = key in self._deleting
            controls.append(
                RowAction(
                    kind="delete",
                    label="Deleting..." if busy else "Delete",
                    style=DELETE_STYLE,
                    disabled=busy,
                    busy=busy,
                )
            )
        for index, action in enumerate(self.actions):
            if action.is_visible(record):
                controls.append(
                    RowAction(
                        kind="custom",
                        label=action.label_for(record),
                        style=action.style_for(record),
                        action_index=index,
                    )
                )
        return controls

    def _pagination_view(self) -> PaginationView | None:
        pages = self.total_pages
        if not self.pagination or pages <= 1:
            return None
        total = len(self.data)
        return PaginationView(
            current_page=self.current_page,
            total_pages=pages,
            page_numbers=self.page_numbers(),
            first_item=(self.current_page - 1) * self.items_per_page + 1,
            last_item=min(self.current_page * self.items_per_page, total),
            total_items=total,
            has_previous=self.current_page > 1,
            has_next=self.current_page < pages,
        )

    def render(self) -> TableView:
        """Build the view for the current data and state."""
        if self.loading:
            return TableView(headers=[], rows=[], loading=True)

        show_actions = self.show_actions
        rows = [
            TableRow(
                key=self.row_key(record),
                cells=[self._cell(record, column) for column in self.columns],
                actions=self._row_actions(record) if show_actions else [],
            )
            for record in self.visible_records()
        ]
        return TableView(
            headers=self._headers(),
            rows=rows,
            show_actions=show_actions,
            empty_message=None if rows else self.empty_message,
            colspan=len(self.columns) + (1 if show_actions else 0),
            search_text=self.search_text if self.on_search is not None else None,
            pagination=self._pagination_view(),
        )

    # ------------------------------------------------------------------
    # Row actions
    # ------------------------------------------------------------------

    async def delete(self, record: Any) -> bool:
        """Run the delete flow for one row.

        Asks for confirmation, marks the row busy while ``on_delete`` runs,
        and alerts once if it fails.  Other rows stay usable, and a row whose
        delete is already in flight ignores further requests.

        Returns:
            ``True`` if the handler completed without raising.
        """
        if self.on_delete is None:
            return False

        key = self.row_key(record)
        if key in self._deleting:
            return False
        if not self._confirm(DELETE_CONFIRMATION):
            return False

        self._deleting.add(key)
        try:
            await _call(self.on_delete, record)
            return True
        except Exception as e:
            logger.error(f"Error deleting item {key}: {e}")
            self._alert(DELETE_FAILED)
            return False
        finally:
            self._deleting.discard(key)

    async def run_action(self, action: Action | int, record: Any) -> bool:
        """Invoke a custom action for ``record``.

        Args:
            action: The ``Action`` or its index in ``self.actions``.
            record: Target record.

        Returns:
            ``True`` if the handler ran without raising; ``False`` if it
            failed (the user is alerted) or the action is hidden for this
            record.
        """
        if isinstance(action, int):
            action = self.actions[action]
        if not action.is_visible(record):
            return False
        try:
            await _call(action.handler, record)
            return True
        except Exception as e:
            logger.error(f"Error running action '{action.label_for(record)}': {e}")
            self._alert(ACTION_FAILED)
            return False
