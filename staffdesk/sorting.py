"""Multi-key ordering of employees and the sorting algorithms offered to users."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from operator import attrgetter

from .employee import Employee, Key

_FIELDS: dict[Key, Callable[[Employee], object]] = {
    Key.DEPARTMENT_ID: attrgetter("department_id"),
    Key.DEPARTMENT_NAME: attrgetter("department_name"),
    Key.EMPLOYEE_ID: attrgetter("employee_id"),
    Key.POSITION: attrgetter("position"),
    Key.SALARY: attrgetter("salary"),
}


class SortAlgorithm(str, Enum):
    """The sorting algorithms a user can pick."""

    SELECTION = "SelectionSort"
    INSERTION = "InsertionSort"
    QUICK = "QuickSort"
    MERGE = "MergeSort"


def _order(a, b) -> int:
    return -1 if a < b else 1


def _given_name(full_name: str) -> str:
    return full_name[full_name.rfind(" ") + 1:]


def compare_employees(a: Employee, b: Employee, keys: Iterable[Key]) -> int:
    """Compare two employees key by key; return -1, 0 or 1.

    Names compare by their last word first, then by the whole name.
    Birth dates compare by year, then month, then day.
    """
    for key in keys:
        key = Key(key)
        if key is Key.FULL_NAME:
            given_a, given_b = _given_name(a.full_name), _given_name(b.full_name)
            if given_a != given_b:
                return _order(given_a, given_b)
            if a.full_name != b.full_name:
                return _order(a.full_name, b.full_name)
        elif key is Key.BIRTH_DATE:
            day_a, month_a, year_a = a.birth_parts()
            day_b, month_b, year_b = b.birth_parts()
            first, second = (year_a, month_a, day_a), (year_b, month_b, day_b)
            if first != second:
                return _order(first, second)
        else:
            value_a, value_b = _FIELDS[key](a), _FIELDS[key](b)
            if value_a != value_b:
                return _order(value_a, value_b)
    return 0


def add_key(keys: list[Key], key: Key) -> bool:
    """Append key unless already present; return whether it was added."""
    if key in keys:
        return False
    keys.append(key)
    return True


def remove_key(keys: list[Key], key: Key) -> bool:
    """Remove key, keeping the order of the others; return whether it was there."""
    if key not in keys:
        return False
    keys.remove(key)
    return True


def toggle_key(keys: list[Key], key: Key) -> bool:
    """Add key if missing, otherwise remove it; return whether it is now selected."""
    if add_key(keys, key):
        return True
    remove_key(keys, key)
    return False


def selection_sort(employees: Iterable[Employee], keys: Sequence[Key]) -> list[Employee]:
    """Selection sort; equal records may change their relative order."""
    items = list(employees)
    for i in range(len(items)):
        smallest = i
        for j in range(i + 1, len(items)):
            if compare_employees(items[j], items[smallest], keys) < 0:
                smallest = j
        items[i], items[smallest] = items[smallest], items[i]
    return items


def insertion_sort(employees: Iterable[Employee], keys: Sequence[Key]) -> list[Employee]:
    """Stable insertion sort."""
    result: list[Employee] = []
    for employee in employees:
        if not result or compare_employees(employee, result[0], keys) < 0:
            result.insert(0, employee)
            continue
        position = next(
            (
                index
                for index in range(1, len(result))
                if compare_employees(employee, result[index], keys) < 0
            ),
            len(result),
        )
        result.insert(position, employee)
    return result


def _merge(left: list[Employee], right: list[Employee], keys: Sequence[Key]) -> list[Employee]:
    merged: list[Employee] = []
    i = j = 0
    while i < len(left) and j < len(right):
        if compare_employees(left[i], right[j], keys) <= 0:
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def merge_sort(employees: Iterable[Employee], keys: Sequence[Key]) -> list[Employee]:
    """Stable merge sort; the front half takes the middle element."""
    items = list(employees)
    if len(items) < 2:
        return items
    middle = (len(items) + 1) // 2
    return _merge(merge_sort(items[:middle], keys), merge_sort(items[middle:], keys), keys)


def quick_sort(employees: Iterable[Employee], keys: Sequence[Key]) -> list[Employee]:
    """Quicksort with the last element as pivot.

    Records smaller than the pivot keep their order before it; the rest follow
    it in their original order.
    """
    result: list[Employee] = []
    work: list[tuple[bool, object]] = [(True, list(employees))]
    while work:
        is_segment, payload = work.pop()
        if not is_segment:
            result.append(payload)
            continue
        segment = payload
        if len(segment) < 2:
            result.extend(segment)
            continue
        pivot = segment[-1]
        smaller, rest = [], []
        for employee in segment[:-1]:
            (smaller if compare_employees(employee, pivot, keys) < 0 else rest).append(employee)
        work.append((True, rest))
        work.append((False, pivot))
        work.append((True, smaller))
    return result


_SORTERS = {
    SortAlgorithm.SELECTION: selection_sort,
    SortAlgorithm.INSERTION: insertion_sort,
    SortAlgorithm.QUICK: quick_sort,
    SortAlgorithm.MERGE: merge_sort,
}


def sort_employees(
    employees: Iterable[Employee],
    keys: Sequence[Key],
    algorithm: SortAlgorithm | str,
) -> list[Employee]:
    """Sort with the named algorithm; an unknown name raises ValueError."""
    return _SORTERS[SortAlgorithm(algorithm)](employees, keys)