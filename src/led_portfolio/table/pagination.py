"""Page arithmetic for the list views.

Pure functions -- no state, no I/O.
"""

from typing import Any

ELLIPSIS = "..."
MAX_VISIBLE_PAGES = 5


def total_pages(total_items: int, items_per_page: int) -> int:
    """Number of pages needed for ``total_items`` (0 for an empty list)."""
    return -(-total_items // items_per_page)


def clamp_page(page: int, pages: int) -> int:
    """Clamp ``page`` into ``[1, pages]`` (``1`` when there are no pages)."""
    return max(1, min(page, max(pages, 1)))


def page_slice(items: list[Any], page: int, items_per_page: int) -> list[Any]:
    """Return the items shown on ``page`` (1-based)."""
    start = (page - 1) * items_per_page
    return items[start:start + items_per_page]


def page_numbers(
    current_page: int,
    pages: int,
    max_visible: int = MAX_VISIBLE_PAGES,
) -> list[int | str]:
    """Build the page-number list for the pagination bar.

    With at most ``max_visible`` pages every page is listed.  Otherwise the
    first and last pages are always present, a window of up to
    ``max_visible - 2`` pages sits around the current page, and gaps are
    marked with ``ELLIPSIS``.

    Examples:
        >>> page_numbers(1, 2)
        [1, 2]
        >>> page_numbers(5, 10)
        [1, '...', 3, 4, 5, '...', 10]
        >>> page_numbers(10, 10)
        [1, '...', 7, 8, 9, 10]
    """
    if pages <= max_visible:
        return list(range(1, pages + 1))

    numbers: list[int | str] = [1]

    start = max(2, current_page - max_visible // 2)
    end = min(pages - 1, start + max_visible - 3)

    # Window hit the last page: slide it left to stay full width
    if end == pages - 1:
        start = max(2, end - (max_visible - 3))

    if start > 2:
        numbers.append(ELLIPSIS)

    numbers.extend(range(start, end + 1))

    if end < pages - 1:
        numbers.append(ELLIPSIS)

    numbers.append(pages)
    return numbers
