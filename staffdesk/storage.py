"""Reading and writing employee lists as comma-separated text files."""

from __future__ import annotations

import re
from collections.abc import Iterable
from os import PathLike

from .employee import Employee

DEFAULT_FILE = "Dulieu.dat"

_LEADING_FLOAT = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _leading_float(text: str) -> float:
    """Parse the number at the start of text, ignoring what follows it."""
    match = _LEADING_FLOAT.match(text)
    if not match:
        raise ValueError(f"not a number: {text!r}")
    return float(match.group(1))


def format_record(employee: Employee) -> str:
    """Render one employee as a line without its newline."""
    return ",".join(
        (
            employee.department_id,
            employee.department_name,
            employee.employee_id,
            employee.full_name,
            employee.position,
            employee.birth_date,
            f"{employee.salary:g}",
        )
    )


def parse_record(line: str) -> Employee:
    """Parse one line; the salary field is read up to the first non-numeric text."""
    parts = line.rstrip("\r\n").split(",", 6)
    parts += [""] * (7 - len(parts))
    *texts, salary = parts
    return Employee(*texts, salary=_leading_float(salary))


def read_employees(path: str | PathLike) -> list[Employee]:
    """Read every record in a file, in order."""
    with open(path, encoding="utf-8") as handle:
        employees = []
        for number, line in enumerate(handle, start=1):
            try:
                employees.append(parse_record(line))
            except ValueError as exc:
                raise ValueError(f"{path}:{number}: {exc}") from exc
        return employees


def write_employees(path: str | PathLike, employees: Iterable[Employee]) -> None:
    """Write all employees to a file, replacing its contents."""
    with open(path, "w", encoding="utf-8") as handle:
        for employee in employees:
            handle.write(format_record(employee) + "\n")