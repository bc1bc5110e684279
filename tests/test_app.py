import pytest

from staffdesk.app import App
from staffdesk.employee import Employee, Key
from staffdesk.menu import Action
from staffdesk.sorting import SortAlgorithm
from staffdesk.storage import write_employees
from staffdesk.validation import EMPLOYEE_ID, ValidationError


class FakeScreen:
    """Records what is drawn and replays a fixed list of key presses."""

    def __init__(self, actions):
        self.actions = list(actions)
        self.writes = []

    def clear(self):
        self.writes.append(None)

    def write_at(self, x, y, text, color=None):
        self.writes.append((x, y, text, color))

    def draw_box(self, x, y, width, height, color=15):
        pass

    def draw_menu(self, menu, x, y):
        for index, option in enumerate(menu.options):
            self.write_at(x, y + index, option)

    def read_action(self):
        if not self.actions:
            raise AssertionError("the scripted key presses ran out")
        return self.actions.pop(0)

    def texts(self):
        return [w[2] for w in self.writes if w is not None]


def press(action, times=1):
    return [(action, "")] * times


def typed(text):
    return [(Action.CHAR, c) for c in text]


def make_employee(number, salary):
    return Employee(
        department_id="PB01",
        department_name="Ke toan",
        employee_id=f"{10000000 + number}",
        full_name=f"Nguyen Van {chr(ord('A') + number % 26)}",
        position="Nhan vien",
        birth_date="01/01/1990",
        salary=float(salary),
    )


FIELDS = ["PB01", "Ke toan", "12345678", "nguyen  van an", "Truong phong", "15/06/1990", "5000"]


def test_add_from_form_appends_normalised_employee():
    app = App(screen=FakeScreen([]))
    employee = app.add_from_form(FIELDS)
    assert app.employees == [employee]
    assert employee.full_name == "Nguyen Van An"
    assert employee.salary == 5000.0


def test_add_from_form_rejects_duplicate_id():
    app = App(screen=FakeScreen([]))
    app.add_from_form(FIELDS)
    with pytest.raises(ValidationError) as info:
        app.add_from_form(FIELDS)
    assert info.value.field == EMPLOYEE_ID
    assert len(app.employees) == 1


def test_add_from_form_rejects_bad_birth_date():
    app = App(screen=FakeScreen([]))
    fields = list(FIELDS)
    fields[5] = "31/02/1990"
    with pytest.raises(ValidationError):
        app.add_from_form(fields)
    assert app.employees == []


def test_export_then_import_round_trip(tmp_path):
    path = tmp_path / "data.dat"
    source = App(screen=FakeScreen([]), employees=[make_employee(1, 100), make_employee(2, 250.5)])
    assert source.export_file(path) == 2
    assert source.file_name == str(path)

    target = App(screen=FakeScreen([]))
    loaded = target.import_file(path)
    assert loaded == source.employees
    assert target.employees == source.employees
    assert target.file_name == str(path)


def test_import_appends_to_existing_list(tmp_path):
    path = tmp_path / "data.dat"
    write_employees(path, [make_employee(2, 200)])
    app = App(screen=FakeScreen([]), employees=[make_employee(1, 100)])
    app.import_file(path)
    assert [e.employee_id for e in app.employees] == ["10000001", "10000002"]


def test_import_missing_file_raises(tmp_path):
    app = App(screen=FakeScreen([]))
    with pytest.raises(FileNotFoundError):
        app.import_file(tmp_path / "missing.dat")
    assert app.employees == []


@pytest.mark.parametrize("algorithm", list(SortAlgorithm))
def test_sort_orders_by_salary(algorithm):
    salaries = [300, 100, 500, 200, 400]
    app = App(screen=FakeScreen([]), employees=[make_employee(i, s) for i, s in enumerate(salaries)])
    result = app.sort([Key.SALARY], algorithm)
    assert [e.salary for e in result] == sorted(float(s) for s in salaries)
    assert app.employees is result


def test_sort_unknown_algorithm_raises():
    app = App(screen=FakeScreen([]), employees=[make_employee(1, 1)])
    with pytest.raises(ValueError):
        app.sort([Key.SALARY], "BubbleSort")


def test_browse_pages_forward_and_exits():
    employees = [make_employee(i, i) for i in range(25)]
    screen = FakeScreen(press(Action.RIGHT) + press(Action.ESC))
    app = App(screen=screen, employees=employees)
    assert app.browse(employees) == 2
    assert any("Trang 2/2" in text for text in screen.texts())


def test_browse_left_wraps_to_last_page():
    employees = [make_employee(i, i) for i in range(25)]
    screen = FakeScreen(press(Action.LEFT) + press(Action.ENTER))
    app = App(screen=screen, employees=employees)
    assert app.browse(employees, "LIST") == 2


def test_browse_marks_highlighted_rows():
    employees = [make_employee(i, i * 10) for i in range(4)]
    screen = FakeScreen(press(Action.ESC))
    app = App(screen=screen, employees=employees)
    app.browse(employees, "LIST", lambda e: e.salary >= 20)
    marked = [w for w in screen.writes if w is not None and w[3] == 10]
    assert len(marked) == 2


def test_run_loads_file_and_exits(tmp_path):
    path = tmp_path / "data.dat"
    write_employees(path, [make_employee(1, 100), make_employee(2, 200)])
    screen = FakeScreen(press(Action.DOWN, 5) + press(Action.ENTER))
    app = App(screen=screen, file_name=path)
    app.run()
    assert len(app.employees) == 2
    assert screen.actions == []


def test_run_adds_employee_through_form(tmp_path):
    values = ["PB02", "Nhan su", "87654321", "tran van binh", "Ke toan vien", "15/06/1990", "7000"]
    script = press(Action.ENTER) + press(Action.ENTER)
    for index, value in enumerate(values):
        script += typed(value)
        if index < len(values) - 1:
            script += press(Action.DOWN)
    script += press(Action.ENTER) + press(Action.OTHER)
    script += press(Action.ESC) + press(Action.DOWN, 5) + press(Action.ENTER)
    screen = FakeScreen(script)
    app = App(screen=screen, file_name=tmp_path / "none.dat")
    app.run()
    assert len(app.employees) == 1
    assert app.employees[0].full_name == "Tran Van Binh"
    assert app.employees[0].employee_id == "87654321"
    assert screen.actions == []