"""Finding employees by exact value, by several criteria, or by a keyword."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from operator import attrgetter

from .employee import Employee, Key
from .storage import _leading_float
from .validation import normalize_name

_DIGITS = "0123456789"
_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "abcdefghijklmnopqrstuvwxyz"
_TO_LOWER = str.maketrans(_UPPER, _LOWER)
_TO_UPPER = str.maketrans(_LOWER, _UPPER)

_TEXT_FIELDS = {
    Key.DEPARTMENT_ID: attrgetter("department_id"),
    Key.DEPARTMENT_NAME: attrgetter("department_name"),
    Key.EMPLOYEE_ID: attrgetter("employee_id"),
    Key.FULL_NAME: attrgetter("full_name"),
    Key.POSITION: attrgetter("position"),
    Key.BIRTH_DATE: attrgetter("birth_date"),
}


@dataclass
class SearchCriteria:
    """Conditions for a multi-criteria search; empty fields are ignored.

    Text fields match as case-insensitive substrings.  Birth dates are
    compared as dd/mm/yyyy text; salaries are compared as numbers.
    """

    department_id: str = ""
    employee_id: str = ""
    full_name: str = ""
    position: str = ""
    birth_from: str = ""
    birth_to: str = ""
    salary_from: str = ""
    salary_to: str = ""


def _lower(text: str) -> str:
    return text.translate(_TO_LOWER)


def _contains(field: str, part: str) -> bool:
    return _lower(part) in _lower(field)


def is_number(text: str) -> bool:
    """True for a non-empty string of decimal digits."""
    return bool(text) and all(c in _DIGITS for c in text)


def exact_query(key: Key, text: str) -> str:
    """Normalise a value entered for an exact search on ``key``."""
    key = Key(key)
    if key is Key.FULL_NAME:
        return normalize_name(text)
    if key is Key.DEPARTMENT_ID:
        return text.translate(_TO_UPPER)
    if key is Key.POSITION and text:
        return text[0].translate(_TO_UPPER) + text[1:]
    return text


def format_birth_query(day: str, month: str, year: str) -> str:
    """Join separately entered day, month and year into dd/mm/yyyy.

    Raises ValueError when a part is not made of digits.
    """
    if not (is_number(day) and is_number(month) and is_number(year)):
        raise ValueError("ngay, thang va nam phai la so")
    return f"{int(day):02d}/{int(month):02d}/{year.zfill(4)}"


def field_equals(employee: Employee, key: Key, value: str) -> bool:
    """True when the employee's field for ``key`` equals ``value`` exactly.

    For the salary, ``value`` is read as a number; ValueError if it is not one.
    """
    key = Key(key)
    if key is Key.SALARY:
        return _leading_float(value) == employee.salary
    return _TEXT_FIELDS[key](employee) == value


def exact_search(employees: Iterable[Employee], key: Key, value: str) -> list[Employee]:
    """Employees whose field for ``key`` equals ``value``, in list order."""
    return [employee for employee in employees if field_equals(employee, key, value)]


def criteria_matches(employee: Employee, criteria: SearchCriteria) -> bool:
    """True when the employee satisfies every non-empty criterion."""
    substring_checks = (
        (criteria.department_id, employee.department_id),
        (criteria.employee_id, employee.employee_id),
        (criteria.full_name, employee.full_name),
        (criteria.position, employee.position),
    )
    if any(part and not _contains(field, part) for part, field in substring_checks):
        return False
    if criteria.birth_from and employee.birth_date < criteria.birth_from:
        return False
    if criteria.birth_to and employee.birth_date > criteria.birth_to:
        return False
    if criteria.salary_from and employee.salary < _leading_float(criteria.salary_from):
        return False
    if criteria.salary_to and employee.salary > _leading_float(criteria.salary_to):
        return False
    return True


def criteria_search(
    employees: Iterable[Employee], criteria: SearchCriteria
) -> list[Employee]:
    """Employees matching all the given criteria, in list order."""
    return [employee for employee in employees if criteria_matches(employee, criteria)]


def keyword_matches(employee: Employee, keyword: str) -> bool:
    """True when the keyword appears in any field.

    Text fields are searched case-insensitively; the salary is searched as
    its whole-number digits.
    """
    needle = _lower(keyword)
    if any(needle in _lower(field(employee)) for field in _TEXT_FIELDS.values()):
        return True
    return keyword in str(int(employee.salary))


def global_search(employees: Iterable[Employee], keyword: str) -> list[Employee]:
    """Employees in which the keyword appears anywhere, in list order."""
    return [employee for employee in employees if keyword_matches(employee, keyword)]