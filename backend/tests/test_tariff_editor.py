import pytest

from app.engine import tariff_editor as ed
from app.errors import NotFoundError, ValidationError


def _table(rows=2, cols=2):
    return {
        "title": "Import",
        "columns": [f"H{c}" for c in range(cols)],
        "rows": [[f"r{r}c{c}" for c in range(cols)] for r in range(rows)],
    }


def _consistent(table):
    return all(len(r) == len(table["columns"]) for r in table["rows"])


def test_add_row_appends_empty_row_sized_to_columns():
    table = _table(rows=1, cols=3)
    result = ed.add_row(table)
    assert result["rows"][-1] == ["", "", ""]
    assert len(result["rows"]) == 2
    assert len(table["rows"]) == 1


def test_delete_row_defaults_to_last_row():
    result = ed.delete_row(_table(rows=3))
    assert [r[0] for r in result["rows"]] == ["r0c0", "r1c0"]


def test_delete_row_by_index():
    result = ed.delete_row(_table(rows=3), 0)
    assert [r[0] for r in result["rows"]] == ["r1c0", "r2c0"]


def test_delete_last_remaining_row_is_noop():
    table = _table(rows=1)
    assert ed.delete_row(table) == table
    assert ed.delete_row(table, 0) == table


def test_delete_row_out_of_range_is_noop():
    table = _table(rows=2)
    assert ed.delete_row(table, 5) == table


def test_add_column_uses_default_header_and_extends_rows():
    result = ed.add_column(_table(rows=2, cols=2))
    assert result["columns"][-1] == "Column 3"
    assert all(r[-1] == "" for r in result["rows"])
    assert _consistent(result)


def test_add_column_with_header():
    assert ed.add_column(_table(), "Rate (USD)")["columns"][-1] == "Rate (USD)"


def test_delete_column_removes_cells_from_every_row():
    result = ed.delete_column(_table(rows=2, cols=3), 1)
    assert result["columns"] == ["H0", "H2"]
    assert result["rows"] == [["r0c0", "r0c2"], ["r1c0", "r1c2"]]


def test_delete_last_remaining_column_is_noop():
    table = _table(rows=2, cols=1)
    assert ed.delete_column(table, 0) == table


def test_resize_pads_and_truncates():
    result = ed.resize(_table(rows=2, cols=2), 3, 1)
    assert result["columns"] == ["H0"]
    assert result["rows"] == [["r0c0"], ["r1c0"], [""]]

    result = ed.resize(_table(rows=1, cols=1), 2, 3)
    assert result["columns"] == ["H0", "Column 2", "Column 3"]
    assert result["rows"] == [["r0c0", "", ""], ["", "", ""]]


@pytest.mark.parametrize("rows,cols", [(101, 5), (5, 21), (0, 3), (3, 0)])
def test_resize_rejects_out_of_bounds_without_mutation(rows, cols):
    table = _table()
    snapshot = ed.get_table([{"name": "x", "tables": [table]}], 0, 0)
    with pytest.raises(ValidationError):
        ed.resize(table, rows, cols)
    assert table == snapshot


def test_resize_at_cap_is_allowed():
    result = ed.resize(_table(), ed.MAX_ROWS, ed.MAX_COLS)
    assert len(result["rows"]) == 100
    assert len(result["columns"]) == 20
    assert _consistent(result)


def test_edit_sequence_keeps_rows_consistent():
    table = ed.new_table("Port charges")
    for step in [ed.add_row, ed.add_column, ed.add_column, ed.add_row,
                 lambda t: ed.delete_column(t, 0), lambda t: ed.resize(t, 4, 5),
                 lambda t: ed.delete_row(t, 1), ed.add_column]:
        table = step(table)
        assert _consistent(table)
        assert table["rows"] and table["columns"]


def test_new_table_is_never_empty():
    table = ed.new_table(None)
    assert table == {"title": "New Table", "columns": ["Column 1"], "rows": [[""]]}


def test_set_cell_header_and_title():
    table = ed.set_cell(_table(), 1, 0, 42)
    table = ed.set_header(table, 0, "Container")
    table = ed.set_title(table, "Export")
    assert table["rows"][1][0] == 42
    assert table["columns"][0] == "Container"
    assert table["title"] == "Export"
    with pytest.raises(NotFoundError):
        ed.set_cell(table, 9, 0, "x")


def test_company_operations():
    companies = ed.add_company([], "  QICT ")
    assert companies == [{"name": "QICT", "tables": []}]
    companies = ed.add_table(companies, 0)
    assert companies[0]["tables"][0]["title"] == "New Table"
    companies = ed.add_company(companies, "KICT")
    companies = ed.rename_company(companies, 1, "SAPT")
    assert [c["name"] for c in companies] == ["QICT", "SAPT"]
    companies = ed.delete_table(companies, 0, 0)
    assert companies[0]["tables"] == []
    companies = ed.delete_company(companies, 0)
    assert [c["name"] for c in companies] == ["SAPT"]


def test_company_name_rules():
    companies = ed.add_company([], "QICT")
    with pytest.raises(ValidationError):
        ed.add_company(companies, "qict")
    with pytest.raises(ValidationError):
        ed.add_company(companies, "   ")
    # Renaming a company to its own name in another case is fine
    assert ed.rename_company(companies, 0, "Qict")[0]["name"] == "Qict"


def test_out_of_range_indexes_raise_not_found():
    companies = ed.add_company([], "QICT")
    with pytest.raises(NotFoundError):
        ed.delete_company(companies, 3)
    with pytest.raises(NotFoundError):
        ed.add_table(companies, 1)
    with pytest.raises(NotFoundError):
        ed.get_table(companies, 0, 0)


def test_validate_companies_reports_ragged_rows():
    companies = [{"name": "QICT", "tables": [{"title": "T", "columns": ["a", "b"], "rows": [["1", "2"], ["3"]]}]}]
    with pytest.raises(ValidationError) as exc:
        ed.validate_companies(companies)
    assert "row 1 has 1 cells, expected 2" in exc.value.details[0]
