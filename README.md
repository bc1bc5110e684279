# staffdesk

staffdesk is a keyboard-driven terminal program for keeping a list of
employees. You can type new profiles into a form, load and save records as
comma-separated text, sort the list by several keys with a choice of
algorithm, search it in three ways, and page through the results in a table.

## Installing

```
pip install .
```

## Running

```
staffdesk [FILE] [--no-splash]
```

`FILE` is the data file to load at start-up. It defaults to `Dulieu.dat` in
the current directory. If the file is missing or cannot be read, the program
starts with an empty list. `--no-splash` skips the loading bar.

The main menu has these entries:

- **A. Them Moi Ho So**: add employees.
  - *Nhap tu ban phim* opens a form with seven fields. Enter saves the profile
    and Esc cancels.
  - *Nhap tu file* asks for a file name and appends that file's records to the
    list.
  - *Xuat ra file* writes the whole list to a file.

  If you leave the file name empty, `Dulieu.dat` is used.
- **B. In Danh Sach**: shows the whole list, 20 rows per page. Left and Right
  turn the pages and wrap around at either end. Enter or Esc goes back.
- **C. Sap Xep**: sorts the list with selection, insertion, quick or merge
  sort. Choosing a key adds it to the key chain, which is shown on screen.
  Choosing the same key again removes it. *(Xac nhan!)* sorts the list and
  shows the result.
- **D. Tim Kiem**: searches the list.
  - *Chinh xac* finds records whose field equals the value you type.
  - *Theo nhieu tieu chi* takes several criteria at once. Text fields match any
    part of the field and ignore case. The birth date and the salary take a
    from/to range.
  - *Ngay lap tuc* is a live keyword that is looked for in every field.

  In the first two kinds of search, Tab shows the full list.
- **E. Thong Ke**: its first entry opens the same exact-search menu.
- **F. EXIT**: leaves the program.

To move around, use the arrow keys. Enter or Right chooses an entry, and Esc
or Left goes back. In forms, Up, Down and Tab move between fields and
Backspace deletes a character.

## Record format

A data file holds one employee per line:

```
department_code,department_name,employee_id,full_name,position,dd/mm/yyyy,salary
```

Before a profile from the form is added, it is checked:

- The name may contain only ASCII letters and spaces. It is stored in title
  case, with extra whitespace removed.
- The birth date must be a real `dd/mm/yyyy` date in 1900 or later, and the
  person must be at least 18 years old.
- The salary must be digits with at most one dot.
- The employee id must be 8 to 10 digits and must not already be in the list.

## What it does not do

The menu entries for editing by id, deleting by id, deleting the whole list,
and the salary-band statistic only show "Chuc nang dang phat trien...". None
of those operations are available. The program also keeps no
department-count statistics.

## Using it as a library

The modules that do not draw on screen can be used on their own:

```python
from staffdesk.employee import Key
from staffdesk.storage import read_employees, write_employees
from staffdesk.sorting import SortAlgorithm, sort_employees
from staffdesk.search import SearchCriteria, criteria_search, global_search
from staffdesk.table import render_page

staff = read_employees("Dulieu.dat")
ordered = sort_employees(staff, [Key.DEPARTMENT_ID, Key.SALARY], SortAlgorithm.MERGE)
hits = global_search(ordered, "ke toan")
rich = criteria_search(ordered, SearchCriteria(salary_from="10000000"))
for line, highlighted in render_page(ordered, page=1):
    print(line)
write_employees("sorted.dat", ordered)
```

What each module provides:

- `staffdesk.validation` checks form input. `check_input` raises
  `ValidationError`, and `build_employee` turns checked fields into an
  `Employee`.
- `staffdesk.sorting` offers `compare_employees` and the four sort functions.
- `staffdesk.app.App` holds a list in memory. It offers `add_from_form`,
  `import_file`, `export_file` and `sort`.