"""Employee records and the fields they can be ordered or searched by."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Key(IntEnum):
    """A field of an employee record, used as a sort or search key."""

    DEPARTMENT_ID = 0
    DEPARTMENT_NAME = 1
    EMPLOYEE_ID = 2
    FULL_NAME = 3
    POSITION = 4
    BIRTH_DATE = 5
    SALARY = 6


_LABELS = {
    Key.DEPARTMENT_ID: "maPB",
    Key.DEPARTMENT_NAME: "tenPB",
    Key.EMPLOYEE_ID: "maNV",
    Key.FULL_NAME: "hoTen",
    Key.POSITION: "chucVu",
    Key.BIRTH_DATE: "NS",
    Key.SALARY: "Luong",
}


def key_label(key) -> str:
    """Return the short label shown for a key, or "???" for an unknown one."""
    try:
        return _LABELS[Key(key)]
    except ValueError:
        return "???"


@dataclass
class Employee:
    """One employee record; the birth date is kept as text in dd/mm/yyyy form."""

    department_id: str = ""
    department_name: str = ""
    employee_id: str = ""
    full_name: str = ""
    position: str = ""
    birth_date: str = ""
    salary: float = 0.0

    def birth_parts(self) -> tuple[int, int, int]:
        """Split the birth date into (day, month, year).

        Raises ValueError when a part is not a number.
        """
        text = self.birth_date
        return int(text[0:2]), int(text[3:5]), int(text[6:10])