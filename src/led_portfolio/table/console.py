"""Rich rendering of a ``TableView`` for the command line."""

from typing import Any

from rich.table import Table
from rich.text import Text

from led_portfolio.table.models import PaginationView, TableView

_ACTION_STYLES = {
    "view": "blue",
    "edit": "magenta",
    "delete": "red",
    "custom": "dim",
}


def _cell_text(value: Any) -> Any:
    # Computed columns may return rich renderables; pass them through.
    if isinstance(value, (str, Text)) or hasattr(value, "__rich_console__"):
        return value
    return str(value)


def render_table(view: TableView, title: str | None = None) -> Table:
    """Build a ``rich.table.Table`` for ``view``.

    Example:
        console.print(render_table(table.render(), title="Projects"))
    """
    if view.loading:
        table = Table(title=title, show_header=False)
        table.add_column()
        table.add_row("[dim]Loading...[/dim]")
        return table

    table = Table(title=title, show_header=True, header_style="bold")
    for header in view.headers:
        label = f"{header.header} {header.indicator}".rstrip()
        table.add_column(label, style="cyan" if header.sortable else None)
    if view.show_actions:
        table.add_column("Actions", justify="right")

    if view.empty_message is not None:
        cells = [""] * view.colspan
        cells[0] = f"[dim]{view.empty_message}[/dim]"
        table.add_row(*cells)
        return table

    for row in view.rows:
        cells = [_cell_text(value) for value in row.cells]
        if view.show_actions:
            parts = [
                f"[{_ACTION_STYLES[a.kind]}{' dim' if a.disabled else ''}]{a.label}[/]"
                for a in row.actions
            ]
            cells.append(" ".join(parts))
        table.add_row(*cells)
    return table


def render_pagination(pagination: PaginationView | None) -> str:
    """One-line pagination bar, e.g. ``‹ 1 [2] 3 … 9 ›  Showing 11 to 20 of 90 results``."""
    if pagination is None:
        return ""
    numbers = []
    for number in pagination.page_numbers:
        if number == pagination.current_page:
            numbers.append(f"[bold]\\[{number}][/bold]")
        else:
            numbers.append(str(number))
    prev_mark = "‹" if pagination.has_previous else "[dim]‹[/dim]"
    next_mark = "›" if pagination.has_next else "[dim]›[/dim]"
    return f"{prev_mark} {' '.join(numbers)} {next_mark}  {pagination.summary()}"
