"""The interactive staff-records application and its command-line entry point."""

from __future__ import annotations

import argparse
import datetime
import time
from collections.abc import Callable, Iterable, Sequence
from os import PathLike

from .employee import Employee, Key, key_label
from .menu import BACK, Action, Menu, Screen, TextForm
from .search import (
    SearchCriteria,
    criteria_matches,
    criteria_search,
    exact_query,
    exact_search,
    field_equals,
    format_birth_query,
    global_search,
    keyword_matches,
)
from .sorting import SortAlgorithm, sort_employees, toggle_key
from .storage import DEFAULT_FILE, read_employees, write_employees
from .table import (
    clamp_page,
    next_page,
    page_count,
    previous_page,
    render_page,
)
from .validation import ValidationError, build_employee, check_input

MENU_X = 0
MENU_Y = 14
SECOND_MENU_X = 24
HINT_Y = MENU_Y + 13
TITLE_COLOR = 4
HIGHLIGHT_COLOR = 10
NAV_COLOR = 11
EXIT_COLOR = 12
DIALOG_X = MENU_X + 50

_BANNER = (
    "  ================================",
    "        QUAN LY NHAN VIEN",
    "  ================================",
)

_MAIN_OPTIONS = (
    "A. Them Moi Ho So",
    "B. In Danh Sach",
    "C. Sap Xep",
    "D. Tim Kiem",
    "E. Thong Ke",
    "F. EXIT",
)

_PROFILE_OPTIONS = (
    "A. Nhap tu ban phim",
    "B. Nhap tu file",
    "C. Xuat ra file",
    "D. Sua theo ma",
    "E. Xoa theo ma",
    "F. Xoa toan bo",
)

_SORT_OPTIONS = (
    "A. SelectionSort",
    "B. InsertionSort",
    "C. QuickSort",
    "D. MergeSort",
)
_SORT_ALGORITHMS = (
    SortAlgorithm.SELECTION,
    SortAlgorithm.INSERTION,
    SortAlgorithm.QUICK,
    SortAlgorithm.MERGE,
)

_SORT_KEY_OPTIONS = (
    "A. Ma phong ban",
    "B. Ten phong ban",
    "C. Ma nhan vien",
    "D. Ho va ten",
    "E. Chuc vu",
    "F. Ngay sinh",
    "G. Luong",
    "(Xac nhan!)",
)

_SEARCH_OPTIONS = (
    "A. Chinh xac",
    "B. Theo nhieu tieu chi",
    "C. Ngay lap tuc",
)

_EXACT_KEY_OPTIONS = (
    "A. Ma phong ban",
    "B. Ma nhan vien",
    "C. Ho va ten",
    "D. Ngay sinh",
    "E. Luong",
    "F. Chuc vu",
)
_EXACT_KEYS = (
    Key.DEPARTMENT_ID,
    Key.EMPLOYEE_ID,
    Key.FULL_NAME,
    Key.BIRTH_DATE,
    Key.SALARY,
    Key.POSITION,
)

_STAT_OPTIONS = (
    "A. So luong nhan vien theo phong ban",
    "B. Ty le phan loai theo muc luong",
)

_ENTRY_LABELS = (
    "Ma phong ban:",
    "Ten phong ban:",
    "Ma nhan vien (8 chu so):",
    "Ho va ten:",
    "Chuc vu:",
    "Ngay sinh (dd/mm/yy):",
    "Luong:",
)

_CRITERIA_LABELS = (
    "Ma phong ban:",
    "Ma nhan vien:",
    "Ho va ten:",
    "Chuc vu:",
    "Ngay sinh tu (dd/mm/yyyy):",
    "Ngay sinh den (dd/mm/yyyy):",
    "Luong tu:",
    "Luong den:",
)

_IN_PROGRESS = "Chuc nang dang phat trien..."

Level = tuple[Menu, int, int]


class App:
    """Holds the employee list and drives the menus on a screen."""

    def __init__(
        self,
        screen=None,
        employees: Iterable[Employee] | None = None,
        file_name: str | PathLike = DEFAULT_FILE,
        today: datetime.date | None = None,
    ) -> None:
        self._screen = screen
        self.employees: list[Employee] = list(employees or [])
        self.file_name = str(file_name)
        self.today = today

    @property
    def screen(self):
        if self._screen is None:
            self._screen = Screen()
        return self._screen

    # ----- operations on the list -------------------------------------

    def add_from_form(self, fields: Sequence[str]) -> Employee:
        """Validate seven form fields and append the new employee.

        Raises ValidationError when the data is rejected.
        """
        check_input(fields, self.employees, self.today)
        employee = build_employee(fields)
        self.employees.append(employee)
        return employee

    def import_file(self, path: str | PathLike) -> list[Employee]:
        """Append the records of a file to the list and make it the current file."""
        self.file_name = str(path)
        loaded = read_employees(path)
        self.employees.extend(loaded)
        return loaded

    def export_file(self, path: str | PathLike) -> int:
        """Write the list to a file, make it the current file, return the count."""
        self.file_name = str(path)
        write_employees(path, self.employees)
        return len(self.employees)

    def sort(self, keys: Sequence[Key], algorithm: SortAlgorithm | str) -> list[Employee]:
        """Reorder the list by the keys with the chosen algorithm."""
        self.employees = sort_employees(self.employees, list(keys), algorithm)
        return self.employees

    def browse(
        self,
        employees: Iterable[Employee],
        title: str | None = None,
        highlight: Callable[[Employee], bool] | None = None,
    ) -> int:
        """Page through a table until ENTER or ESC; return the page left on."""
        return self._page_through(list(employees), title, highlight)

    # ----- main loop ---------------------------------------------------

    def run(self) -> None:
        """Load the current file if it exists, then show the main menu until EXIT."""
        try:
            self.import_file(self.file_name)
        except (OSError, ValueError):
            pass

        main_menu = Menu(_MAIN_OPTIONS)
        main_level = (main_menu, MENU_X, MENU_Y)
        handlers = (
            self._profile_menu,
            self._print_menu,
            self._sort_menu,
            self._search_menu,
            self._statistic_menu,
        )
        while True:
            choice = self._choose([main_level])
            if choice == BACK:
                continue
            if choice == len(_MAIN_OPTIONS) - 1:
                return
            handlers[choice](main_level)

    # ----- drawing helpers --------------------------------------------

    def _draw_banner(self) -> None:
        for row, line in enumerate(_BANNER, start=1):
            self.screen.write_at(0, row, line, TITLE_COLOR)

    def _draw_suggest(self) -> None:
        self.screen.draw_box(MENU_X, MENU_Y + 12, 40, 4, TITLE_COLOR)
        self.screen.write_at(MENU_X + 2, MENU_Y + 13, "Nhan ENTER hoac RIGHT ARROW de chon!")
        self.screen.write_at(MENU_X + 2, MENU_Y + 14, "Nhan ESC hoac LEFT ARROW quay lai")

    def _draw_keys(self, keys: Sequence[Key]) -> None:
        self.screen.write_at(74, 14, "Key da chon:", TITLE_COLOR)
        self.screen.draw_box(73, 15, 45, 3)
        self.screen.write_at(74, 16, "=>".join(key_label(key) for key in keys))

    def _choose(self, levels: list[Level], keys: Sequence[Key] | None = None) -> int:
        """Show nested menus and let the user pick from the innermost one."""
        menu = levels[-1][0]
        while True:
            self.screen.clear()
            self._draw_banner()
            for level_menu, x, y in levels:
                width = max(24, max(len(option) for option in level_menu.options) + 5)
                self.screen.draw_menu(level_menu, x, y)
                self.screen.draw_box(x, y - 1, width, len(level_menu.options) + 2)
            self._draw_suggest()
            if keys is not None:
                self._draw_keys(keys)
            action, _ = self.screen.read_action()
            result = menu.handle(action)
            if result is not None:
                return result

    def _message(self, text: str) -> None:
        self.screen.write_at(MENU_X, HINT_Y + 3, text)
        self.screen.read_action()

    def _notice(self, first: str, second: str = "Nhan phim bat ky de tiep tuc...") -> None:
        self.screen.draw_box(DIALOG_X, MENU_Y + 3, 45, 4, TITLE_COLOR)
        self.screen.write_at(DIALOG_X + 2, MENU_Y + 4, first)
        self.screen.write_at(DIALOG_X + 2, MENU_Y + 5, second)
        self.screen.read_action()

    def _read_line(self, x: int, y: int, limit: int = 40) -> str | None:
        """Read a line of text typed at (x, y); None if ESC is pressed."""
        text = ""
        while True:
            self.screen.write_at(x, y, text + " ")
            action, char = self.screen.read_action()
            if action is Action.ENTER:
                return text
            if action is Action.ESC:
                return None
            if action is Action.BACKSPACE:
                text = text[:-1]
            elif action is Action.CHAR and len(text) < limit:
                text += char

    def _draw_table(
        self,
        employees: Sequence[Employee],
        page: int,
        title: str | None,
        highlight: Callable[[Employee], bool] | None,
        with_title: bool = True,
    ) -> None:
        title = title or f"DANH SACH NHAN VIEN: {self.file_name}"
        lines = render_page(employees, page, title, highlight)
        if with_title:
            self.screen.write_at(2, 1, lines[0][0], TITLE_COLOR)
        self.screen.write_at(2, 3, lines[1][0])
        self.screen.write_at(2, 4, lines[2][0])
        for row, (line, marked) in enumerate(lines[3:], start=5):
            self.screen.write_at(1, row, line, HIGHLIGHT_COLOR if marked else None)

    def _draw_page_hints(self, tab: bool) -> None:
        self.screen.write_at(17, HINT_Y, "<= Trang truoc", NAV_COLOR)
        self.screen.write_at(37, HINT_Y, "Trang sau =>", NAV_COLOR)
        if tab:
            self.screen.write_at(57, HINT_Y, "Nhan TAB de hien toan bo", NAV_COLOR)
            self.screen.write_at(92, HINT_Y, "Thoat(ESC-ENTER)", EXIT_COLOR)
        else:
            self.screen.write_at(62, HINT_Y, "Thoat(ESC-ENTER)", EXIT_COLOR)

    def _page_through(
        self,
        employees: list[Employee],
        title: str | None,
        highlight: Callable[[Employee], bool] | None,
        show_all_on_tab: bool = False,
    ) -> int:
        total_pages = page_count(len(employees))
        page = 1
        while True:
            self.screen.clear()
            self._draw_table(employees, page, title, highlight)
            self._draw_page_hints(show_all_on_tab)
            action, _ = self.screen.read_action()
            if action is Action.RIGHT:
                page = next_page(page, total_pages)
            elif action is Action.LEFT:
                page = previous_page(page, total_pages)
            elif action is Action.TAB and show_all_on_tab:
                self._page_through(self.employees, title, highlight)
            elif action in (Action.ENTER, Action.ESC):
                return clamp_page(page, total_pages)

    # ----- profile menu -------------------------------------------------

    def _profile_menu(self, main_level: Level) -> None:
        menu = Menu(_PROFILE_OPTIONS)
        level = (menu, main_level[1] + SECOND_MENU_X, main_level[2])
        while True:
            choice = self._choose([main_level, level])
            if choice == BACK:
                return
            if choice == 0:
                self._entry_form()
            elif choice == 1:
                self._import_dialog()
            elif choice == 2:
                self._export_dialog()
            else:
                self._message(_IN_PROGRESS)

    def _ask_file_name(self) -> str | None:
        x, y = DIALOG_X, MENU_Y
        self.screen.draw_box(x, y, 60, 3)
        self.screen.write_at(x + 2, y + 1, "Nhap ten file: ")
        self.screen.draw_box(x, y + 3, 45, 4, TITLE_COLOR)
        self.screen.write_at(x + 2, y + 4, "Nhan nut bat ky de tiep tuc!")
        self.screen.write_at(x + 2, y + 5, "Nhan ESC hoac LEFT ARROW DE THOAT")
        action, _ = self.screen.read_action()
        if action in (Action.LEFT, Action.ESC):
            return None

        self.screen.write_at(x + 2, y + 4, f"File mac dinh: {DEFAULT_FILE}".ljust(40))
        self.screen.write_at(x + 2, y + 5, "Nhan Enter neu khong can nhap file moi!")
        name = self._read_line(x + 18, y + 1)
        if name is None:
            return None
        if not name:
            name = DEFAULT_FILE
            self.screen.write_at(x + 18, y + 1, name)
        self._notice(f"Da chon file: {name}")
        return name

    def _import_dialog(self) -> None:
        name = self._ask_file_name()
        if name is None:
            return
        try:
            self.import_file(name)
        except (OSError, ValueError):
            self._notice("File khong ton tai!")
            return
        self.browse(self.employees)

    def _export_dialog(self) -> None:
        name = self._ask_file_name()
        if name is None:
            return
        try:
            self.export_file(name)
        except OSError:
            self._notice("File khong ton tai!")
            return
        self._notice("Xuat File thanh cong!")

    def _draw_form(self, form: TextForm, top: int) -> None:
        for index, label in enumerate(form.labels):
            selected = index == form.selected
            row = top + index * 3
            self.screen.draw_box(6, row - 1, form.width, 3, TITLE_COLOR if selected else 7)
            self.screen.write_at(8, row, label, TITLE_COLOR if selected else None)
            self.screen.write_at(9 + len(label), row, form.fields[index])

    def _entry_form(self) -> None:
        form = TextForm(_ENTRY_LABELS, width=60, margin=4)
        while True:
            self.screen.clear()
            self.screen.write_at(2, 1, "THEM NHAN VIEN MOI", TITLE_COLOR)
            self.screen.write_at(20, 1, f" - FILE: {self.file_name}")
            self.screen.write_at(30, HINT_Y, "Luu(Enter)", NAV_COLOR)
            self.screen.write_at(15, HINT_Y, "Thoat(ESC)", EXIT_COLOR)
            self._draw_form(form, 5)
            action, char = self.screen.read_action()
            result = form.handle(action, char)
            if result is False:
                return
            if result is True:
                try:
                    self.add_from_form(form.values())
                except ValidationError as error:
                    self.screen.draw_box(55, MENU_Y + 12, 60, 3)
                    self.screen.write_at(57, MENU_Y + 13, error.message)
                    self.screen.read_action()
                    continue
                self.screen.draw_box(MENU_X + 40, MENU_Y + 3, 45, 4, HIGHLIGHT_COLOR)
                self.screen.write_at(
                    MENU_X + 42, MENU_Y + 4, "Them nhan vien thanh cong!", HIGHLIGHT_COLOR
                )
                self.screen.write_at(
                    MENU_X + 42, MENU_Y + 5, "Nhan phim bat ky de tiep tuc...", NAV_COLOR
                )
                self.screen.read_action()
                return

    # ----- print and sort menus ----------------------------------------

    def _print_menu(self, main_level: Level) -> None:
        menu = Menu(("In toan bo danh sach",))
        level = (menu, main_level[1] + SECOND_MENU_X, main_level[2] + 1)
        while self._choose([main_level, level]) != BACK:
            self.browse(self.employees)

    def _sort_menu(self, main_level: Level) -> None:
        menu = Menu(_SORT_OPTIONS)
        level = (menu, main_level[1] + SECOND_MENU_X, main_level[2] + 2)
        while True:
            choice = self._choose([main_level, level])
            if choice == BACK:
                return
            self._sort_key_menu(main_level, level, choice, _SORT_ALGORITHMS[choice])

    def _sort_key_menu(
        self, main_level: Level, second: Level, offset: int, algorithm: SortAlgorithm
    ) -> None:
        menu = Menu(_SORT_KEY_OPTIONS)
        level = (menu, second[1] + SECOND_MENU_X + 3, second[2] + offset)
        keys: list[Key] = []
        while True:
            choice = self._choose([main_level, second, level], keys)
            if choice == BACK:
                return
            if choice < len(Key):
                toggle_key(keys, Key(choice))
            else:
                self.sort(keys, algorithm)
                self.browse(self.employees)

    # ----- search menus -------------------------------------------------

    def _search_menu(self, main_level: Level) -> None:
        menu = Menu(_SEARCH_OPTIONS)
        level = (menu, main_level[1] + SECOND_MENU_X, main_level[2] + 3)
        while True:
            choice = self._choose([main_level, level])
            if choice == BACK:
                return
            if choice == 0:
                self._exact_menu(main_level, level)
            elif choice == 1:
                self._criteria_dialog()
            else:
                self._instant_search()

    def _exact_menu(self, main_level: Level, second: Level) -> None:
        menu = Menu(_EXACT_KEY_OPTIONS)
        level = (menu, second[1] + SECOND_MENU_X + 3, second[2])
        while True:
            choice = self._choose([main_level, second, level], [])
            if choice == BACK:
                return
            self._exact_dialog(_EXACT_KEYS[choice])

    def _not_found(self) -> None:
        self.screen.clear()
        self.screen.write_at(74, 16, "Khong tim thay ket qua nao.")
        self.screen.write_at(74, 17, "Nhan phim bat ky de quay lai.")
        self.screen.read_action()

    def _ask_birth_date(self) -> str | None:
        x, y = 74, 16
        self.screen.draw_box(x - 1, y - 1, 29, 3, 7)
        self.screen.write_at(x, y, "Nhap ngay sinh (dd/mm/yyyy)")
        parts = []
        for column in (x + 30, x + 35, x + 40):
            part = self._read_line(column, y, limit=4)
            if part is None:
                return None
            parts.append(part)
        try:
            return format_birth_query(*parts)
        except ValueError:
            return ""

    def _exact_dialog(self, key: Key) -> None:
        if key is Key.BIRTH_DATE:
            value = self._ask_birth_date()
        else:
            label = "Nhap tu khoa can tim: "
            self.screen.write_at(74, 16, label)
            value = self._read_line(74 + len(label), 16)
        if value is None:
            return
        value = exact_query(key, value)
        try:
            results = exact_search(self.employees, key, value)
        except ValueError:
            results = []
        if not results:
            self._not_found()
            return
        self._page_through(
            results,
            "KET QUA TIM KIEM (highlight)",
            lambda employee: field_equals(employee, key, value),
            show_all_on_tab=True,
        )

    def _criteria_dialog(self) -> None:
        form = TextForm(_CRITERIA_LABELS, width=60, margin=5)
        while True:
            self.screen.clear()
            self.screen.write_at(2, 1, "TIM KIEM THEO TIEU CHI:", TITLE_COLOR)
            self._draw_form(form, 3)
            action, char = self.screen.read_action()
            result = form.handle(action, char)
            if result is False:
                return
            if result is True:
                break
        criteria = SearchCriteria(*form.values())
        try:
            results = criteria_search(self.employees, criteria)
        except ValueError:
            results = []
        if not results:
            self._not_found()
            return

        def marked(employee: Employee) -> bool:
            try:
                return criteria_matches(employee, criteria)
            except ValueError:
                return False

        self._page_through(results, "KET QUA TIM KIEM", marked, show_all_on_tab=True)

    def _instant_search(self) -> None:
        keyword = ""
        page = 1
        prompt = "Nhap thong tin can tim kiem: "
        while True:
            self.screen.clear()
            self.screen.write_at(2, 1, prompt, TITLE_COLOR)
            self.screen.write_at(2 + len(prompt), 1, keyword)
            results = global_search(self.employees, keyword)
            if results:
                self._draw_table(
                    results,
                    page,
                    "KET QUA",
                    lambda employee: keyword_matches(employee, keyword),
                    with_title=False,
                )
                self._draw_page_hints(False)
            else:
                self.screen.write_at(2, 4, "Khong tim thay ket qua.")
            action, char = self.screen.read_action()
            if action is Action.LEFT:
                page -= 1
            elif action is Action.RIGHT:
                page += 1
            elif action in (Action.ESC, Action.ENTER):
                return
            elif action is Action.BACKSPACE:
                keyword = keyword[:-1]
            elif action is Action.CHAR:
                keyword += char

    # ----- statistics ---------------------------------------------------

    def _statistic_menu(self, main_level: Level) -> None:
        menu = Menu(_STAT_OPTIONS)
        level = (menu, main_level[1] + SECOND_MENU_X, main_level[2] + 4)
        while True:
            choice = self._choose([main_level, level])
            if choice == BACK:
                return
            if choice == 0:
                self._exact_menu(main_level, level)
            else:
                self._message(_IN_PROGRESS)

    # ----- start-up -----------------------------------------------------

    def _splash(self, message: str = "Loading", delay: float = 0.05, length: int = 30) -> None:
        screen = self.screen
        screen.clear()
        self._draw_banner()
        screen.write_at(MENU_X + 50, MENU_Y, message + "...")
        screen.write_at(MENU_X + 38, MENU_Y + 2, "[" + "\u2591" * (length + 1))
        for step in range(length + 1):
            screen.write_at(MENU_X + 35, MENU_Y + 2, f"{step * 100 // length}%  ")
            screen.write_at(MENU_X + 39 + step, MENU_Y + 2, "\u2588", HIGHLIGHT_COLOR)
            time.sleep(delay)
        screen.write_at(MENU_X + 40 + length, MENU_Y + 2, " Done!")
        screen.write_at(MENU_X + 41, MENU_Y + 4, "!Press any key to continue...")
        screen.read_action()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the interactive application on the terminal."""
    parser = argparse.ArgumentParser(prog="staffdesk", description="Manage employee records.")
    parser.add_argument("file", nargs="?", default=DEFAULT_FILE, help="data file to load")
    parser.add_argument("--no-splash", action="store_true", help="skip the loading screen")
    args = parser.parse_args(argv)
    with Screen() as screen:
        app = App(screen=screen, file_name=args.file)
        if not args.no_splash:
            app._splash()
        app.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())