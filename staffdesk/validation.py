"""Checks and normalisation for employee data entered by a user."""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Sequence

from .employee import Employee

_INT_MAX = 2**31 - 1
_DIGITS = "0123456789"
_LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Form field positions, in the order the entry form presents them.
DEPARTMENT_ID, DEPARTMENT_NAME, EMPLOYEE_ID, FULL_NAME, POSITION, BIRTH_DATE, SALARY = range(7)


class ValidationError(ValueError):
    """Raised when entered data is rejected; ``field`` is the form position at fault."""

    def __init__(self, message: str, field: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


def _all_digits(text: str) -> bool:
    return bool(text) and all(c in _DIGITS for c in text)


def is_valid_employee_id(code: str) -> bool:
    """An employee id is 8 to 10 decimal digits."""
    return 8 <= len(code) <= 10 and _all_digits(code)


def normalize_name(name: str) -> str:
    """Collapse whitespace and capitalise each word."""
    return " ".join(word[0].upper() + word[1:].lower() for word in name.split())


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def is_valid_date(day: int, month: int, year: int) -> bool:
    """True for a real calendar date in or after 1900."""
    if day < 1 or month < 1 or month > 12 or year < 1900:
        return False
    limit = 29 if month == 2 and is_leap_year(year) else _MONTH_DAYS[month - 1]
    return day <= limit


def is_adult(day: int, month: int, year: int, today: datetime.date | None = None) -> bool:
    """True when someone born on the given date is at least 18 on ``today``."""
    today = today or datetime.date.today()
    age = today.year - year
    if age > 18:
        return True
    if age == 18:
        return month < today.month or (month == today.month and day <= today.day)
    return False


def is_valid_birth_date(text: str, today: datetime.date | None = None) -> bool:
    """Check a dd/mm/yyyy date that is real and at least 18 years back."""
    if len(text) != 10 or text[2] != "/" or text[5] != "/":
        return False
    try:
        day, month, year = int(text[0:2]), int(text[3:5]), int(text[6:10])
    except ValueError:
        return False
    return is_valid_date(day, month, year) and is_adult(day, month, year, today)


def is_valid_salary(salary: float) -> bool:
    return salary >= 0


def is_name_clean(name: str) -> bool:
    """A name may hold only ASCII letters and spaces."""
    return all(c in _LETTERS or c == " " for c in name)


def parse_salary(text: str) -> float:
    """Parse a non-negative decimal made of digits and at most one dot."""
    if not text or text.count(".") > 1 or not all(c in _DIGITS or c == "." for c in text):
        raise ValidationError("Luong khong hop le (phai la so duong, co the co thap phan)")
    if text == ".":
        raise ValidationError("Luong khong hop le (phai la so duong, co the co thap phan)")
    return float(text)


def parse_integer(text: str) -> int:
    """Parse a non-negative decimal integer that fits in 32 bits."""
    if not _all_digits(text):
        raise ValidationError("So nguyen khong hop le")
    value = int(text)
    if value > _INT_MAX:
        raise ValidationError("So nguyen khong hop le")
    return value


def check_input(
    fields: Sequence[str],
    employees: Iterable[Employee] = (),
    today: datetime.date | None = None,
) -> None:
    """Validate the seven form fields, raising ValidationError on the first problem."""
    if len(fields) != 7:
        raise ValueError(f"expected 7 fields, got {len(fields)}")

    if not is_name_clean(fields[FULL_NAME]):
        raise ValidationError(
            "Ho va ten chi duoc su dung chu cai va khoang trang", FULL_NAME
        )
    if not is_valid_birth_date(fields[BIRTH_DATE], today):
        raise ValidationError(
            "Ngay sinh khong hop le hoac chua du 18 tuoi.", BIRTH_DATE
        )
    try:
        salary = parse_salary(fields[SALARY])
    except ValidationError:
        salary = -1.0
    if not is_valid_salary(salary):
        raise ValidationError("Luong khong hop le (>= 0)", SALARY)
    if not is_valid_employee_id(fields[EMPLOYEE_ID]):
        raise ValidationError("Ma nhan vien phai gom 8 chu so.", EMPLOYEE_ID)
    if any(emp.employee_id == fields[EMPLOYEE_ID] for emp in employees):
        raise ValidationError("Ma nhan vien da ton tai.", EMPLOYEE_ID)


def build_employee(fields: Sequence[str]) -> Employee:
    """Make an Employee from seven already-checked form fields."""
    if len(fields) != 7:
        raise ValueError(f"expected 7 fields, got {len(fields)}")
    return Employee(
        department_id=fields[DEPARTMENT_ID],
        department_name=fields[DEPARTMENT_NAME],
        employee_id=fields[EMPLOYEE_ID],
        full_name=normalize_name(fields[FULL_NAME]),
        position=fields[POSITION],
        birth_date=fields[BIRTH_DATE],
        salary=float(fields[SALARY]),
    )