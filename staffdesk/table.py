"""Paged text tables of employees."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .employee import Employee

ROWS_PER_PAGE = 20

_HEADER = (
    "STT | Phong ban           | Ma NV      | Ho ten                    "
    "| Chuc vu        | Ngay sinh  | Luong",
    "----|---------------------|------------|---------------------------"
    "|----------------|------------|---------------",
)


def page_count(total: int) -> int:
    """Number of pages needed for ``total`` rows."""
    return (total + ROWS_PER_PAGE - 1) // ROWS_PER_PAGE


def clamp_page(page: int, total_pages: int) -> int:
    """Bring a page number into 1..total_pages (0 when there are no pages)."""
    if page < 1:
        page = 1
    if page > total_pages:
        page = total_pages
    return page


def next_page(page: int, total_pages: int) -> int:
    """The following page, wrapping from the last to the first."""
    page += 1
    return 1 if page > total_pages else page


def previous_page(page: int, total_pages: int) -> int:
    """The preceding page, wrapping from the first to the last."""
    page -= 1
    return total_pages if page <= 0 else page


def table_header() -> tuple[str, str]:
    """The column titles and the rule beneath them."""
    return _HEADER


def format_row(number: int, employee: Employee) -> str:
    """One table row; long texts are cut to fit their columns."""
    return (
        f"{number:>4} | "
        f"{employee.department_name[:22]:<19} | "
        f"{employee.employee_id:>10} | "
        f"{employee.full_name[:20]:<25} | "
        f"{employee.position[:11]:<14} | "
        f"{employee.birth_date:>10} | "
        f"{employee.salary:>13.0f}"
    )


def page_rows(employees: Sequence[Employee], page: int) -> list[tuple[int, Employee]]:
    """The (row number, employee) pairs shown on a page, after clamping it."""
    page = clamp_page(page, page_count(len(employees)))
    start = max(page - 1, 0) * ROWS_PER_PAGE
    return list(enumerate(employees[start:start + ROWS_PER_PAGE], start=start + 1))


def render_page(
    employees: Sequence[Employee],
    page: int = 1,
    title: str = "DANH SACH NHAN VIEN",
    highlight: Callable[[Employee], bool] | None = None,
) -> list[tuple[str, bool]]:
    """Render a page as (line, highlighted) pairs: title, header, then rows."""
    total = len(employees)
    total_pages = page_count(total)
    shown = clamp_page(page, total_pages)
    lines = [(f"{title} - Tong: {total} - Trang {shown}/{total_pages}", False)]
    lines.extend((line, False) for line in table_header())
    lines.extend(
        (format_row(number, employee), bool(highlight and highlight(employee)))
        for number, employee in page_rows(employees, page)
    )
    return lines