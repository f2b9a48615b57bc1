"""Pydantic models for table descriptors and the rendered table view.

Descriptors (input):
- Columns: ``FieldColumn`` (reads a named field, may be sortable) and
  ``ComputedColumn`` (renders from a function, never sortable)
- ``Action``: a custom per-row button

View (output of ``DataTable.render()``):
- ``HeaderCell``, ``RowAction``, ``TableRow``, ``PaginationView``,
  ``TableView``
"""

from collections.abc import Callable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SortDirection = Literal["asc", "desc"]

DEFAULT_ACTION_STYLE = "text-gray-600 hover:text-gray-900"


def get_field(record: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an attribute-style record."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


# ============================================================================
# Descriptors
# ============================================================================


class FieldColumn(BaseModel):
    """Column showing one named field of the record.

    Example:
        >>> FieldColumn(header="Title", field="title", sortable=True).sortable
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    header: str
    field: str
    sortable: bool = False


class ComputedColumn(BaseModel):
    """Column whose cell is produced by ``render(record)``.

    Has no ``sortable`` flag: rendered output cannot be ordered.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    header: str
    render: Callable[[Any], Any]


Column = FieldColumn | ComputedColumn


class Action(BaseModel):
    """Custom row action.

    ``handler`` may be a plain function or a coroutine function.  ``label``
    and ``style`` may be fixed strings or functions of the record.
    """

    model_config = ConfigDict(frozen=True)

    label: str | Callable[[Any], str]
    handler: Callable[[Any], Any]
    show_condition: Callable[[Any], bool] | None = None
    style: str | Callable[[Any], str] = DEFAULT_ACTION_STYLE

    def is_visible(self, record: Any) -> bool:
        return self.show_condition is None or bool(self.show_condition(record))

    def label_for(self, record: Any) -> str:
        return self.label(record) if callable(self.label) else self.label

    def style_for(self, record: Any) -> str:
        return self.style(record) if callable(self.style) else self.style


# ============================================================================
# Rendered View
# ============================================================================


class HeaderCell(BaseModel):
    """One column header."""

    header: str
    sortable: bool = False
    field: str | None = None
    sort_direction: SortDirection | None = None  # set on the active sort column

    @property
    def indicator(self) -> str:
        if self.sort_direction == "asc":
            return "↑"
        if self.sort_direction == "desc":
            return "↓"
        return ""


class RowAction(BaseModel):
    """One control in a row's actions cell."""

    kind: Literal["view", "edit", "delete", "custom"]
    label: str
    href: str | None = None
    style: str = DEFAULT_ACTION_STYLE
    disabled: bool = False
    busy: bool = False
    action_index: int | None = None  # position in DataTable.actions for custom actions


class TableRow(BaseModel):
    """One rendered record."""

    key: str
    cells: list[Any]
    actions: list[RowAction] = Field(default_factory=list)


class PaginationView(BaseModel):
    """Pagination controls and the "Showing a to b of n" summary."""

    current_page: int
    total_pages: int
    page_numbers: list[int | str]
    first_item: int
    last_item: int
    total_items: int
    has_previous: bool
    has_next: bool

    def summary(self) -> str:
        return (
            f"Showing {self.first_item} to {self.last_item} "
            f"of {self.total_items} results"
        )


class TableView(BaseModel):
    """Everything needed to draw the table for the current state."""

    headers: list[HeaderCell]
    rows: list[TableRow]
    show_actions: bool = False
    empty_message: str | None = None  # set only when there are no rows
    colspan: int = 1
    search_text: str | None = None    # set only when a search callback is wired
    pagination: PaginationView | None = None
    loading: bool = False             # rows, search box and pagination are withheld
