import pytest

from staffdesk.employee import Employee, Key
from staffdesk.search import (
    SearchCriteria,
    criteria_matches,
    criteria_search,
    exact_query,
    exact_search,
    field_equals,
    format_birth_query,
    global_search,
    is_number,
    keyword_matches,
)
from staffdesk.validation import normalize_name


@pytest.fixture
def staff():
    return [
        Employee("pb01", "Ke toan", "12345678", "Nguyen Van An", "Truong phong", "01/02/1990", 1500000.0),
        Employee("PB01", "Ke toan", "23456789", "Tran Thi Binh", "Nhan vien", "15/06/1995", 800000.0),
        Employee("PB02", "Nhan su", "34567890", "Le Van Cuong", "Nhan vien", "20/12/1985", 1200000.5),
    ]


@pytest.mark.parametrize(
    "text, expected",
    [("123", True), ("0", True), ("", False), ("12a", False), ("-1", False), ("1.5", False)],
)
def test_is_number(text, expected):
    assert is_number(text) is expected


def test_exact_query_normalises_name():
    raw = "  tran   THI binh "
    assert exact_query(Key.FULL_NAME, raw) == normalize_name(raw)
    assert exact_query(Key.FULL_NAME, raw) == "Tran Thi Binh"


def test_exact_query_uppercases_department_id():
    assert exact_query(Key.DEPARTMENT_ID, "pb01") == "PB01"


def test_exact_query_capitalises_only_first_letter_of_position():
    assert exact_query(Key.POSITION, "nhan vien") == "Nhan vien"
    assert exact_query(Key.POSITION, "") == ""


def test_exact_query_leaves_other_keys_alone():
    assert exact_query(Key.EMPLOYEE_ID, "abc") == "abc"
    assert exact_query(Key.SALARY, "800000") == "800000"


def test_format_birth_query_pads_parts(staff):
    assert format_birth_query("1", "2", "1990") == staff[0].birth_date
    assert format_birth_query("15", "06", "1995") == staff[1].birth_date
    assert format_birth_query("5", "7", "990").endswith("/0990")


@pytest.mark.parametrize("parts", [("a", "1", "1990"), ("1", "", "1990"), ("1", "2", "19x0")])
def test_format_birth_query_rejects_non_numbers(parts):
    with pytest.raises(ValueError):
        format_birth_query(*parts)


def test_field_equals(staff):
    assert field_equals(staff[1], Key.EMPLOYEE_ID, "23456789")
    assert not field_equals(staff[1], Key.EMPLOYEE_ID, "2345678")
    assert field_equals(staff[2], Key.DEPARTMENT_NAME, "Nhan su")
    assert field_equals(staff[2], Key.SALARY, "1200000.5")


def test_field_equals_bad_salary_query(staff):
    with pytest.raises(ValueError):
        field_equals(staff[0], Key.SALARY, "abc")


def test_exact_search_is_case_sensitive(staff):
    query = exact_query(Key.DEPARTMENT_ID, "pb01")
    assert exact_search(staff, Key.DEPARTMENT_ID, query) == [staff[1]]
    assert exact_search(staff, Key.DEPARTMENT_ID, "pb01") == [staff[0]]


def test_exact_search_by_position_keeps_order(staff):
    assert exact_search(staff, Key.POSITION, "Nhan vien") == [staff[1], staff[2]]


def test_exact_search_by_salary_and_birth(staff):
    assert exact_search(staff, Key.SALARY, "800000") == [staff[1]]
    query = format_birth_query("20", "12", "1985")
    assert exact_search(staff, Key.BIRTH_DATE, query) == [staff[2]]


def test_exact_search_no_match(staff):
    assert exact_search(staff, Key.FULL_NAME, "Nobody") == []


def test_empty_criteria_match_everyone(staff):
    assert criteria_search(staff, SearchCriteria()) == staff


def test_criteria_substring_is_case_insensitive(staff):
    assert criteria_search(staff, SearchCriteria(department_id="PB01")) == staff[:2]
    assert criteria_search(staff, SearchCriteria(full_name="VAN")) == [staff[0], staff[2]]


def test_criteria_combine_with_and(staff):
    criteria = SearchCriteria(full_name="van", position="nhan")
    assert criteria_search(staff, criteria) == [staff[2]]


def test_criteria_salary_range(staff):
    assert criteria_search(staff, SearchCriteria(salary_from="1000000")) == [staff[0], staff[2]]
    assert criteria_search(staff, SearchCriteria(salary_to="1200000.5")) == staff[1:]
    both = SearchCriteria(salary_from="1000000", salary_to="1400000")
    assert criteria_search(staff, both) == [staff[2]]


def test_criteria_birth_dates_compare_as_text(staff):
    criteria = SearchCriteria(birth_from=staff[1].birth_date)
    assert criteria_search(staff, criteria) == [staff[1], staff[2]]
    assert criteria_matches(staff[1], SearchCriteria(birth_to=staff[1].birth_date))
    assert not criteria_matches(staff[2], SearchCriteria(birth_to=staff[1].birth_date))


def test_criteria_bad_salary_raises(staff):
    with pytest.raises(ValueError):
        criteria_search(staff, SearchCriteria(salary_from="x"))


def test_global_search_empty_keyword_matches_all(staff):
    assert global_search(staff, "") == staff


def test_global_search_text_fields(staff):
    assert global_search(staff, "NHAN") == [staff[1], staff[2]]
    assert global_search(staff, "ke toan") == staff[:2]
    assert global_search(staff, "/1985") == [staff[2]]


def test_global_search_salary_uses_whole_number(staff):
    assert keyword_matches(staff[2], "1200000")
    assert not keyword_matches(staff[2], "1200000.5")
    assert global_search(staff, "150") == [staff[0]]


def test_global_search_result_is_subset_in_order(staff):
    for keyword in ("a", "van", "0", "zzz"):
        found = global_search(staff, keyword)
        assert found == [e for e in staff if e in found]
        assert all(keyword_matches(e, keyword) for e in found)